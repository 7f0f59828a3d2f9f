"""Pytest configuration and fixtures."""

import base64
import copy
import io
import struct
import zlib
from collections.abc import AsyncGenerator
from types import SimpleNamespace
from typing import Any

import pytest
from bson import ObjectId
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from PIL import Image

from nutrilog_api.api.dependencies import (
    get_database,
    get_meal_service,
    get_recipe_service,
    get_uow,
)
from nutrilog_api.core.config import Settings, get_settings
from nutrilog_api.db.unit_of_work import UnitOfWork
from nutrilog_api.main import app
from nutrilog_api.models.meal import FoodItem
from nutrilog_api.services.food_recognition import FoodExtractionService
from nutrilog_api.services.meals import MealService
from nutrilog_api.services.recipes import RecipeService


# ============================================================================
# In-memory stand-in for the Motor collection API
# ============================================================================


def _matches(doc: dict[str, Any], filter: dict[str, Any]) -> bool:
    for key, condition in filter.items():
        value = doc.get(key)
        if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
            for op, operand in condition.items():
                if value is None:
                    return False
                if op == "$gte" and not value >= operand:
                    return False
                if op == "$lte" and not value <= operand:
                    return False
                if op == "$gt" and not value > operand:
                    return False
                if op == "$lt" and not value < operand:
                    return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    """Supports the ``find().sort().limit().to_list()`` chain."""

    def __init__(self, docs: list[dict[str, Any]]):
        self._docs = docs

    def sort(self, key_or_list, direction: int | None = None) -> "FakeCursor":
        keys = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction or 1)]
        for field, order in reversed(keys):
            self._docs.sort(key=lambda d: d.get(field), reverse=order < 0)
        return self

    def limit(self, n: int) -> "FakeCursor":
        if n:
            self._docs = self._docs[:n]
        return self

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return self._docs[:length] if length else list(self._docs)


class FakeCollection:
    """
    Minimal async collection backed by a list.

    Documents are deep-copied on the way in and out, like a real round trip
    through the driver.
    """

    def __init__(self):
        self.docs: list[dict[str, Any]] = []
        self.indexes: list[Any] = []

    async def insert_one(self, document: dict[str, Any]):
        doc = copy.deepcopy(document)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, filter: dict[str, Any]):
        for doc in self.docs:
            if _matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    def find(self, filter: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, filter or {})])

    async def update_one(self, filter: dict[str, Any], update: dict[str, Any]):
        for doc in self.docs:
            if _matches(doc, filter):
                for field, value in update.get("$set", {}).items():
                    doc[field] = copy.deepcopy(value)
                for field, value in update.get("$push", {}).items():
                    doc.setdefault(field, []).append(copy.deepcopy(value))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def replace_one(self, filter: dict[str, Any], replacement: dict[str, Any], upsert: bool = False):
        for i, doc in enumerate(self.docs):
            if _matches(doc, filter):
                new_doc = copy.deepcopy(replacement)
                new_doc["_id"] = doc["_id"]
                self.docs[i] = new_doc
                return SimpleNamespace(matched_count=1, upserted_id=None)
        if upsert:
            new_doc = copy.deepcopy(replacement)
            new_doc.setdefault("_id", filter.get("_id", ObjectId()))
            self.docs.append(new_doc)
            return SimpleNamespace(matched_count=0, upserted_id=new_doc["_id"])
        return SimpleNamespace(matched_count=0, upserted_id=None)

    async def delete_one(self, filter: dict[str, Any]):
        for i, doc in enumerate(self.docs):
            if _matches(doc, filter):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def create_index(self, keys, **kwargs):
        self.indexes.append(keys)
        return "_".join(f"{field}_{order}" for field, order in keys)


class FakeDatabase:
    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeExtractor(FoodExtractionService):
    """Returns canned foods, or raises what it was given."""

    def __init__(self, foods: list[FoodItem] | None = None, error: Exception | None = None):
        self.foods = foods or []
        self.error = error
        self.calls: list[str] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def extract(self, image_data_url: str) -> list[FoodItem]:
        self.calls.append(image_data_url)
        if self.error is not None:
            raise self.error
        return [food.model_copy() for food in self.foods]


# ============================================================================
# Image helpers
# ============================================================================


def make_image_bytes(
    width: int,
    height: int,
    format: str = "PNG",
    mode: str = "RGB",
    color=(200, 60, 40),
) -> bytes:
    """Encode a solid-color test image."""
    if mode == "RGBA" and len(color) == 3:
        color = (*color, 128)
    img = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


def make_data_url(width: int, height: int, format: str = "JPEG") -> str:
    mime = "image/jpeg" if format == "JPEG" else f"image/{format.lower()}"
    encoded = base64.b64encode(make_image_bytes(width, height, format=format)).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def make_png_header_url(width: int, height: int) -> str:
    """PNG with only IHDR and IEND, claiming the given size."""
    def chunk(kind: bytes, body: bytes) -> bytes:
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body))

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    data = b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IEND", b"")
    return "data:image/png;base64," + base64.b64encode(data).decode("ascii")


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        password_user="household",
        password_admin="admin-pass",
        openai_api_key="",
        google_api_key="",
        timezone="UTC",
    )


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def uow(fake_db: FakeDatabase) -> UnitOfWork:
    return UnitOfWork(fake_db)


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor(foods=[
        FoodItem(name="Grilled chicken", quantity="3 pieces"),
        FoodItem(name="Rice", quantity="1 cup"),
    ])


@pytest.fixture
def recipe_agent():
    """Recipe agent double with canned replies."""
    from unittest.mock import AsyncMock, MagicMock

    agent = MagicMock()
    agent.propose = AsyncMock(return_value=("# Miso Salmon Bowl\n\n## Ingredients\n- salmon", "Miso Salmon Bowl"))
    agent.reply = AsyncMock(return_value="Swap the salmon for tofu.")
    return agent


@pytest.fixture
async def client(
    fake_db: FakeDatabase,
    test_settings: Settings,
    fake_extractor: FakeExtractor,
    recipe_agent,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client backed by the in-memory database.

    Sends the ``accessLevel=full`` cookie; set ``client.cookies`` to
    test other levels.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """

    def meal_service(uow: UnitOfWork = Depends(get_uow)) -> MealService:
        return MealService(uow, extractor=fake_extractor, settings=test_settings)

    def recipe_service(uow: UnitOfWork = Depends(get_uow)) -> RecipeService:
        return RecipeService(uow, agent=recipe_agent, settings=test_settings)

    app.dependency_overrides[get_database] = lambda: fake_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_meal_service] = meal_service
    app.dependency_overrides[get_recipe_service] = recipe_service

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={"accessLevel": "full"},
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
