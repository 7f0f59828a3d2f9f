"""Recipe assistant service."""

import logging

from nutrilog_api.agents.llm import get_llm
from nutrilog_api.agents.nodes.recipe import RecipeAgent
from nutrilog_api.core.config import Settings, get_settings
from nutrilog_api.core.exceptions import ExtractionError, NotFoundError, ValidationError
from nutrilog_api.db.unit_of_work import UnitOfWork
from nutrilog_api.models.recipe import RecipeMealType, RecipeSession
from nutrilog_api.services.meals import store_errors

logger = logging.getLogger(__name__)


class RecipeService:
    """
    Service for recipe assistant conversations.

    Sessions are persisted, so a conversation survives page reloads and
    the "do not repeat" list keeps growing for as long as the session lives.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        agent: RecipeAgent | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize recipe service.

        Args:
            uow: Unit of Work instance
            agent: Recipe agent (built from settings if not provided)
            settings: Application settings (uses default if not provided)
        """
        self.uow = uow
        self._agent = agent
        self.settings = settings or get_settings()

    @property
    def agent(self) -> RecipeAgent:
        """Get or create the recipe agent."""
        if self._agent is None:
            try:
                self._agent = RecipeAgent(
                    llm=get_llm(self.settings),
                    recipe_llm=get_llm(self.settings, temperature=self.settings.recipe_temperature),
                )
            except ValueError as e:
                raise ExtractionError(
                    "Recipe assistant is not configured",
                    provider=self.settings.llm_provider.value,
                    details={"reason": str(e)},
                ) from e
        return self._agent

    async def start_session(self, meal_type: RecipeMealType) -> RecipeSession:
        """
        Open a conversation with a first recipe for ``meal_type``.

        Raises:
            ValidationError: If no settings (macro targets) were saved
            ExtractionError: If the recipe could not be generated
        """
        with store_errors("Failed to load settings"):
            user_settings = await self.uow.settings.get()
        if user_settings is None:
            raise ValidationError("Please set up your meal plan in settings first")

        recipe, name = await self.agent.propose(meal_type.value, user_settings, [])

        with store_errors("Failed to save recipe session"):
            session_id = await self.uow.recipe_sessions.create(meal_type.value)
            await self.uow.recipe_sessions.add_message(
                session_id, recipe, role="assistant", recipe_name=name or None
            )
        logger.info(f"Started {meal_type.value} recipe session {session_id}: {name!r}")
        return await self.get_session(session_id)

    async def suggest_another(self, session_id: str) -> RecipeSession:
        """
        Append a fresh recipe that avoids every name already suggested.

        Raises:
            NotFoundError: If the session does not exist
            ValidationError: If settings were removed since the session started
            ExtractionError: If the recipe could not be generated
        """
        session = await self.get_session(session_id)

        with store_errors("Failed to load settings"):
            user_settings = await self.uow.settings.get()
        if user_settings is None:
            raise ValidationError("Please set up your meal plan in settings first")

        recipe, name = await self.agent.propose(
            session.meal_type.value, user_settings, session.previous_recipes
        )

        with store_errors("Failed to save recipe session"):
            await self.uow.recipe_sessions.add_message(
                session_id, recipe, role="assistant", recipe_name=name or None
            )
        return await self.get_session(session_id)

    async def send_message(self, session_id: str, message: str) -> RecipeSession:
        """
        Ask a follow-up question with the whole conversation as context.

        The user message is stored before the model is called, so it is kept
        even when the reply fails.

        Raises:
            NotFoundError: If the session does not exist
            ExtractionError: If the reply could not be generated
        """
        session = await self.get_session(session_id)
        history = [{"role": m.role, "content": m.content} for m in session.messages]

        with store_errors("Failed to save recipe session"):
            await self.uow.recipe_sessions.add_message(session_id, message, role="user")

        reply = await self.agent.reply(session.meal_type.value, history, message)

        with store_errors("Failed to save recipe session"):
            await self.uow.recipe_sessions.add_message(session_id, reply, role="assistant")
        return await self.get_session(session_id)

    async def get_session(self, session_id: str) -> RecipeSession:
        with store_errors("Failed to load recipe session"):
            doc = await self.uow.recipe_sessions.get_session(session_id)
        if doc is None:
            raise NotFoundError("RecipeSession", session_id)
        return RecipeSession.from_mongo(doc)

    async def delete_session(self, session_id: str) -> None:
        with store_errors("Failed to delete recipe session"):
            deleted = await self.uow.recipe_sessions.delete_session(session_id)
        if not deleted:
            raise NotFoundError("RecipeSession", session_id)
