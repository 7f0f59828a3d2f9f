"""Recipe agent - proposes macro-matched recipes and answers follow-ups."""

import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from nutrilog_api.agents.llm import message_text
from nutrilog_api.agents.prompts.recipe import (
    extract_recipe_name,
    first_system_prompt,
    follow_up_system_prompt,
    format_recipe_request,
)
from nutrilog_api.core.exceptions import ExtractionError
from nutrilog_api.models.settings import UserSettings

logger = logging.getLogger(__name__)


class RecipeAgent:
    """
    Recipe assistant backed by a chat model.

    The opening recipe is generated with a high-temperature model for
    variety; follow-up questions replay the whole conversation.
    """

    def __init__(self, llm: BaseChatModel, recipe_llm: BaseChatModel | None = None):
        """
        Initialize recipe agent.

        Args:
            llm: Model for follow-up questions
            recipe_llm: Model for opening recipes (defaults to ``llm``)
        """
        self.llm = llm
        self.recipe_llm = recipe_llm or llm

    async def propose(
        self,
        meal_type: str,
        settings: UserSettings,
        previous_recipes: list[str],
    ) -> tuple[str, str]:
        """
        Generate a recipe matching the per-meal macro targets.

        Args:
            meal_type: Breakfast, Lunch or Dinner
            settings: Stored settings holding the targets
            previous_recipes: Names that must not be suggested again

        Returns:
            Tuple of (markdown recipe, extracted recipe name)

        Raises:
            ExtractionError: If the model call fails or returns nothing
        """
        messages = [
            SystemMessage(content=first_system_prompt(meal_type)),
            HumanMessage(content=format_recipe_request(
                meal_type=meal_type,
                protein=settings.protein_per_meal,
                fat=settings.fat_per_meal,
                carbs=settings.carbs_per_meal,
                dietary_preferences=settings.dietary_preferences,
                previous_recipes=previous_recipes,
            )),
        ]

        logger.info(f"Generating {meal_type.lower()} recipe ({len(previous_recipes)} to avoid)")
        recipe = await self._complete(self.recipe_llm, messages, "Failed to generate recipe")
        return recipe, extract_recipe_name(recipe)

    async def reply(
        self,
        meal_type: str,
        history: list[dict],
        message: str,
    ) -> str:
        """
        Answer a follow-up question with the full conversation as context.

        Args:
            meal_type: Meal the session plans for
            history: Prior messages as ``{"role", "content"}`` dicts
            message: New user message

        Raises:
            ExtractionError: If the model call fails or returns nothing
        """
        messages: list[BaseMessage] = [SystemMessage(content=follow_up_system_prompt(meal_type))]
        for msg in history:
            if msg.get("role") == "user":
                messages.append(HumanMessage(content=msg.get("content", "")))
            else:
                messages.append(AIMessage(content=msg.get("content", "")))
        messages.append(HumanMessage(content=message))

        return await self._complete(self.llm, messages, "Failed to get response")

    async def _complete(
        self,
        llm: BaseChatModel,
        messages: list[BaseMessage],
        failure_notice: str,
    ) -> str:
        try:
            response = await llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"Recipe agent error: {e}")
            raise ExtractionError(failure_notice, provider="recipe", details={"reason": str(e)}) from e

        content = message_text(response)
        if not content.strip():
            raise ExtractionError(failure_notice, provider="recipe", details={"reason": "empty response"})

        logger.info(f"Generated response: {len(content)} chars")
        return content
