"""Tests for the meal store and the other repositories."""

import pytest
from bson import ObjectId

from nutrilog_api.core.exceptions import NotFoundError
from nutrilog_api.db.mongo import MEALS, MongoDB
from nutrilog_api.models.meal import FoodItem, MealCreate, MealUpdate
from nutrilog_api.models.settings import UserSettings


def _create(category: str = "Lunch", timestamp: int = 1_000) -> MealCreate:
    return MealCreate(
        name=f"{category} - 12:00 PM",
        foods=[FoodItem(name="Soup", quantity="1 bowl")],
        image="data:image/jpeg;base64,/9j/AAAA",
        timestamp=timestamp,
        category=category,
    )


class TestMealRepository:
    """Tests for MealRepository against the in-memory collection."""

    @pytest.mark.asyncio
    async def test_create_then_list_returns_same_record(self, uow):
        data = _create(timestamp=5_000)

        created = await uow.meals.create(data)
        listed = await uow.meals.list_by_range(4_000, 6_000)

        assert len(listed) == 1
        assert listed[0] == created
        assert listed[0].model_dump(exclude={"id"}) == data.model_dump()
        assert ObjectId.is_valid(created.id)

    @pytest.mark.asyncio
    async def test_range_bounds_inclusive_and_sorted(self, uow):
        for ts in (300, 100, 200, 400):
            await uow.meals.create(_create(timestamp=ts))

        listed = await uow.meals.list_by_range(100, 300)

        assert [m.timestamp for m in listed] == [100, 200, 300]

    @pytest.mark.asyncio
    async def test_delete_then_list_excludes_id(self, uow):
        kept = await uow.meals.create(_create(timestamp=10))
        gone = await uow.meals.create(_create(timestamp=20))

        assert await uow.meals.delete(gone.id) is True
        listed = await uow.meals.list_by_range(0, 100)

        assert [m.id for m in listed] == [kept.id]

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, uow):
        assert await uow.meals.delete(str(ObjectId())) is False
        assert await uow.meals.delete("not-an-object-id") is False

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, uow):
        with pytest.raises(NotFoundError):
            await uow.meals.get(str(ObjectId()))

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, uow):
        created = await uow.meals.create(_create())

        await uow.meals.update(created.id, MealUpdate(foods=[FoodItem(name="Bread", quantity="2")]))
        stored = await uow.meals.get(created.id)

        assert [f.name for f in stored.foods] == ["Bread"]
        assert stored.image == created.image
        assert stored.name == created.name

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, uow):
        with pytest.raises(NotFoundError):
            await uow.meals.update(str(ObjectId()), MealUpdate(foods=[]))

    @pytest.mark.asyncio
    async def test_empty_update_checks_existence(self, uow):
        with pytest.raises(NotFoundError):
            await uow.meals.update(str(ObjectId()), MealUpdate())

    @pytest.mark.asyncio
    async def test_documents_store_expected_fields(self, uow, fake_db):
        await uow.meals.create(_create())

        doc = fake_db[MEALS].docs[0]
        assert set(doc) == {"_id", "name", "foods", "image", "timestamp", "category"}
        assert doc["foods"] == [{"name": "Soup", "quantity": "1 bowl", "notes": ""}]


class TestWeightEntryRepository:
    @pytest.mark.asyncio
    async def test_list_sorted_by_date(self, uow):
        await uow.weight_entries.add(200, 70.0)
        await uow.weight_entries.add(100, 71.0)

        newest = await uow.weight_entries.list_all()
        oldest = await uow.weight_entries.list_all(newest_first=False)

        assert [e.date for e in newest] == [200, 100]
        assert [e.date for e in oldest] == [100, 200]

    @pytest.mark.asyncio
    async def test_delete(self, uow):
        entry = await uow.weight_entries.add(100, 70.0)

        assert await uow.weight_entries.delete(entry.id) is True
        assert await uow.weight_entries.list_all() == []


class TestSettingsRepository:
    @pytest.mark.asyncio
    async def test_missing_returns_none(self, uow):
        assert await uow.settings.get() is None

    @pytest.mark.asyncio
    async def test_replace_overwrites_whole_document(self, uow):
        await uow.settings.replace(UserSettings(protein_per_meal="40", calorie_goal="2200"))
        await uow.settings.replace(UserSettings(protein_per_meal="35"))

        stored = await uow.settings.get()

        assert stored.protein_per_meal == "35"
        assert stored.calorie_goal == ""


class TestRecipeSessionRepository:
    @pytest.mark.asyncio
    async def test_messages_and_recipe_names_appended(self, uow):
        session_id = await uow.recipe_sessions.create("Dinner")

        await uow.recipe_sessions.add_message(session_id, "# Tacos", role="assistant", recipe_name="Tacos")
        await uow.recipe_sessions.add_message(session_id, "Less spicy?", role="user")
        doc = await uow.recipe_sessions.get_session(session_id)

        assert [m["role"] for m in doc["messages"]] == ["assistant", "user"]
        assert doc["previous_recipes"] == ["Tacos"]

    @pytest.mark.asyncio
    async def test_add_message_to_missing_session(self, uow):
        assert await uow.recipe_sessions.add_message(str(ObjectId()), "hi") is False
        assert await uow.recipe_sessions.get_session("bogus") is None


class TestMongoDB:
    def test_get_database_requires_connect(self):
        MongoDB.client = None

        with pytest.raises(RuntimeError):
            MongoDB.get_database()

        assert MongoDB.is_connected() is False
