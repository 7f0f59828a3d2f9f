"""
Factory for creating the food extraction service.

Reads configuration from application settings and returns the provider.
"""

import logging
from functools import lru_cache

from nutrilog_api.agents.llm import get_llm, get_model_name
from nutrilog_api.core.config import get_settings

from .base import ExtractionError, FoodExtractionService
from .llm_provider import LLMFoodExtractor

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_food_extraction_service() -> FoodExtractionService:
    """
    Get the configured food extraction service.

    Uses the chat model selected by ``LLM_PROVIDER`` with the vision token
    cap from ``VISION_MAX_TOKENS``.

    Raises:
        ExtractionError: If the provider is not configured
    """
    settings = get_settings()
    model_name = get_model_name(settings)

    logger.info(f"Initializing food extraction provider: {settings.llm_provider.value}/{model_name}")

    try:
        llm = get_llm(settings, max_tokens=settings.vision_max_tokens)
    except ValueError as e:
        raise ExtractionError(
            str(e),
            provider=settings.llm_provider.value,
        ) from e

    return LLMFoodExtractor(llm, model_name=model_name)


def clear_service_cache():
    """Clear the cached service instance (useful for testing)."""
    get_food_extraction_service.cache_clear()
