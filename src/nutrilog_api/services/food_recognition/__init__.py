"""
Food Extraction Service - Facade over vision models that list meal contents.
"""

from .base import (
    DEFAULT_QUANTITY,
    ExtractionError,
    FoodExtractionService,
    parse_food_lines,
)
from .factory import clear_service_cache, get_food_extraction_service
from .llm_provider import FOOD_EXTRACTION_PROMPT, LLMFoodExtractor

__all__ = [
    "DEFAULT_QUANTITY",
    "ExtractionError",
    "FOOD_EXTRACTION_PROMPT",
    "FoodExtractionService",
    "LLMFoodExtractor",
    "clear_service_cache",
    "get_food_extraction_service",
    "parse_food_lines",
]
