"""Repository for the singleton user settings document."""

from motor.motor_asyncio import AsyncIOMotorCollection

from nutrilog_api.models.settings import UserSettings

# Fixed document id; there is exactly one settings record per deployment.
SETTINGS_DOC_ID = "user"


class SettingsRepository:
    """
    Read and replace the settings document.

    Writes replace the whole document (last write wins, no field merge).
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def get(self) -> UserSettings | None:
        """Stored settings, or None if the user never saved any."""
        doc = await self.collection.find_one({"_id": SETTINGS_DOC_ID})
        if doc is None:
            return None
        doc.pop("_id", None)
        return UserSettings.model_validate(doc)

    async def replace(self, settings: UserSettings) -> UserSettings:
        await self.collection.replace_one(
            {"_id": SETTINGS_DOC_ID},
            settings.model_dump(),
            upsert=True,
        )
        return settings
