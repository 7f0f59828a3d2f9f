"""Base repository class with common database operations."""

from typing import Any, Generic, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def to_object_id(id: str) -> ObjectId | None:
    """Parse a string id, returning None when it is not a valid ObjectId."""
    try:
        return ObjectId(id)
    except (InvalidId, TypeError):
        return None


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Subclasses set ``model_class`` so documents come back as Pydantic
    models with ``_id`` exposed as a string ``id``.
    """

    model_class: type[T]

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize repository with a MongoDB collection.

        Args:
            collection: Motor collection instance
        """
        self.collection = collection

    def _to_model(self, doc: dict[str, Any]) -> T:
        """Convert a MongoDB document to the repository's model."""
        doc = dict(doc)
        if "_id" in doc:
            doc["id"] = str(doc.pop("_id"))
        return self.model_class.model_validate(doc)

    def _to_models(self, docs: list[dict[str, Any]]) -> list[T]:
        return [self._to_model(doc) for doc in docs if doc is not None]

    async def find_by_id(self, id: str) -> T | None:
        """
        Find document by ID.

        Args:
            id: Document ObjectId as string

        Returns:
            Document as model, or None if missing or the id is malformed
        """
        oid = to_object_id(id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        return self._to_model(doc) if doc else None

    async def find_many(
        self,
        filter: dict[str, Any] | None = None,
        sort: list[tuple[str, int]] | None = None,
        limit: int = 0,
    ) -> list[T]:
        """
        Find multiple documents matching filter.

        Args:
            filter: MongoDB query filter
            sort: List of (field, direction) tuples
            limit: Maximum documents to return (0 = no limit)

        Returns:
            List of documents as models
        """
        cursor = self.collection.find(filter or {})

        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)

        docs = await cursor.to_list(length=limit or None)
        return self._to_models(docs)

    async def insert_one(self, document: dict[str, Any]) -> str:
        """
        Insert a single document.

        Args:
            document: Document to insert (not mutated)

        Returns:
            Inserted document ID as string
        """
        result = await self.collection.insert_one(dict(document))
        return str(result.inserted_id)

    async def update_one(self, id: str, fields: dict[str, Any]) -> bool:
        """
        Merge ``fields`` into the document with ``id``.

        Args:
            id: Document ObjectId as string
            fields: Top-level fields to ``$set``; others stay untouched

        Returns:
            True if a document matched, whether or not anything changed
        """
        oid = to_object_id(id)
        if oid is None:
            return False
        result = await self.collection.update_one({"_id": oid}, {"$set": fields})
        return result.matched_count > 0

    async def delete_one(self, id: str) -> bool:
        """
        Delete a single document by ID.

        Args:
            id: Document ObjectId as string

        Returns:
            True if document was deleted
        """
        oid = to_object_id(id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
