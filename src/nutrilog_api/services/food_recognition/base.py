"""
Base classes for the food extraction service.

Defines the interface every provider implements, plus the parser for the
``Name|||Quantity`` reply convention shared by all of them.
"""

from abc import ABC, abstractmethod

from nutrilog_api.core.exceptions import ExtractionError
from nutrilog_api.models.meal import FoodItem

FIELD_DELIMITER = "|||"
DEFAULT_QUANTITY = "1 serving"

__all__ = [
    "DEFAULT_QUANTITY",
    "ExtractionError",
    "FIELD_DELIMITER",
    "FoodExtractionService",
    "parse_food_lines",
]


def parse_food_lines(text: str) -> list[FoodItem]:
    """
    Parse a model reply into food items.

    One food per non-blank line, ``Name|||Quantity``. A line without the
    delimiter is taken as a name with the default quantity; a line with an
    empty name is kept so the user can fix it while editing.

    Args:
        text: Raw completion text

    Returns:
        Food items in reply order, notes empty
    """
    foods = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split(FIELD_DELIMITER)]
        name = parts[0]
        quantity = parts[1] if len(parts) > 1 else ""
        foods.append(FoodItem(
            name=name,
            quantity=quantity or DEFAULT_QUANTITY,
            notes="",
        ))
    return foods


class FoodExtractionService(ABC):
    """
    Abstract base class for food extraction providers.

    A provider turns one normalized meal photo into a draft food list.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        ...

    @abstractmethod
    async def extract(self, image_data_url: str) -> list[FoodItem]:
        """
        Identify the foods in a photo.

        Args:
            image_data_url: Normalized JPEG as a data URL

        Returns:
            Draft food items in the order the model listed them

        Raises:
            ExtractionError: If the call fails or yields no content
        """
        ...
