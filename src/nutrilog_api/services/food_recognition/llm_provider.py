"""
Vision-LLM provider for food extraction.

Sends the meal photo to a multimodal chat model through LangChain and
parses its ``Name|||Quantity`` lines.
"""

import logging
import time

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from nutrilog_api.agents.llm import message_text
from nutrilog_api.models.meal import FoodItem

from .base import ExtractionError, FoodExtractionService, parse_food_lines

logger = logging.getLogger(__name__)


FOOD_EXTRACTION_PROMPT = (
    "Analyze the given food image and identify the items along with their "
    "approximate quantities. Format each entry as 'Food Name|||Quantity' without "
    "any leading dashes or special characters. For example: 'Grilled chicken|||3 pieces'."
)


class LLMFoodExtractor(FoodExtractionService):
    """
    Food extraction using a vision-capable chat model.

    The call is made once per request; failures are reported, never retried.
    """

    def __init__(self, llm: BaseChatModel, model_name: str = "unknown"):
        """
        Initialize the provider.

        Args:
            llm: Chat model that accepts image_url content blocks
            model_name: Model identifier for logs and error details
        """
        self.llm = llm
        self.model_name = model_name

    @property
    def provider_name(self) -> str:
        return f"llm/{self.model_name}"

    def build_message(self, image_data_url: str) -> HumanMessage:
        """Single user message carrying the instruction and the photo."""
        return HumanMessage(content=[
            {"type": "text", "text": FOOD_EXTRACTION_PROMPT},
            {
                "type": "image_url",
                "image_url": {"url": image_data_url, "detail": "low"},
            },
        ])

    async def extract(self, image_data_url: str) -> list[FoodItem]:
        """
        Ask the model for the foods in the photo.
        """
        start_time = time.time()
        logger.info(f"Sending food extraction request ({self.provider_name})")

        try:
            response = await self.llm.ainvoke([self.build_message(image_data_url)])
        except Exception as e:
            logger.error(f"Food extraction call failed: {e}")
            raise ExtractionError(
                "Failed to analyze image",
                provider=self.provider_name,
                details={"reason": str(e)},
            ) from e

        raw_response = message_text(response)
        if not raw_response.strip():
            raise ExtractionError(
                "Failed to analyze image",
                provider=self.provider_name,
                details={"reason": "empty response"},
            )

        logger.debug(f"Raw extraction response: {raw_response[:500]}")
        foods = parse_food_lines(raw_response)

        processing_time = int((time.time() - start_time) * 1000)
        logger.info(f"Extracted {len(foods)} foods in {processing_time} ms")
        return foods
