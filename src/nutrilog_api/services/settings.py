"""Settings service for the singleton user settings document."""

import logging

from nutrilog_api.db.unit_of_work import UnitOfWork
from nutrilog_api.models.settings import UserSettings
from nutrilog_api.services.meals import store_errors

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get(self) -> UserSettings:
        """Stored settings, or the defaults if none were ever saved."""
        with store_errors("Failed to load settings"):
            stored = await self.uow.settings.get()
        return stored or UserSettings()

    async def save(self, settings: UserSettings) -> UserSettings:
        """Replace the whole settings document."""
        with store_errors("Failed to save settings"):
            saved = await self.uow.settings.replace(settings)
        logger.info("Settings saved")
        return saved
