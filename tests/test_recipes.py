"""Tests for the recipe assistant."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from nutrilog_api.agents.nodes.recipe import RecipeAgent
from nutrilog_api.agents.prompts.recipe import (
    BREAKFAST_FIRST_SYSTEM_PROMPT,
    extract_recipe_name,
    first_system_prompt,
    follow_up_system_prompt,
    format_recipe_request,
)
from nutrilog_api.core.exceptions import ExtractionError, NotFoundError, ValidationError
from nutrilog_api.models.recipe import RecipeMealType
from nutrilog_api.models.settings import UserSettings
from nutrilog_api.services.recipes import RecipeService

TARGETS = UserSettings(protein_per_meal="40", fat_per_meal="15", carbs_per_meal="50")


class TestPrompts:
    def test_breakfast_has_dedicated_prompt(self):
        assert first_system_prompt("Breakfast") == BREAKFAST_FIRST_SYSTEM_PROMPT
        assert "breakfast" in follow_up_system_prompt("Breakfast")

    def test_other_meals_interpolated_lowercase(self):
        assert "**incredible** dinner recipes" in first_system_prompt("Dinner")
        assert "lunch cuisine" in follow_up_system_prompt("Lunch")

    def test_request_contains_targets(self):
        prompt = format_recipe_request("Lunch", "40", "15", "50")

        assert "**Protein:** 40g" in prompt
        assert "**Fat:** 15g" in prompt
        assert "**Carbs:** 50g" in prompt
        assert "quick, and flavorful** lunch recipes" in prompt
        assert "Dietary Restriction" not in prompt
        assert "None yet" in prompt

    def test_request_dietary_and_previous(self):
        prompt = format_recipe_request(
            "Dinner", "40", "15", "50",
            dietary_preferences="vegan",
            previous_recipes=["Tofu Curry", "Lentil Stew"],
        )

        assert "Ensure the recipe is **vegan**" in prompt
        assert "Tofu Curry, Lentil Stew" in prompt

    @pytest.mark.parametrize(
        "content, expected",
        [
            ("# Miso Salmon Bowl\n\n**Difficulty:** Beginner", "Miso Salmon Bowl"),
            ("Intro line\n## Ingredients\n# Late Title", "Ingredients"),
            ("# Only Title", "Only Title"),
            ("No heading here", ""),
        ],
    )
    def test_extract_recipe_name(self, content, expected):
        assert extract_recipe_name(content) == expected


class TestRecipeAgent:
    @pytest.fixture
    def llm(self):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="# Herb Omelette\n\nEggs."))
        return llm

    @pytest.mark.asyncio
    async def test_propose_uses_recipe_model(self, llm):
        follow_up_llm = MagicMock()
        agent = RecipeAgent(follow_up_llm, recipe_llm=llm)

        recipe, name = await agent.propose("Breakfast", TARGETS, ["Pancakes"])

        assert name == "Herb Omelette"
        assert recipe.startswith("# Herb Omelette")
        messages = llm.ainvoke.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert "Pancakes" in messages[1].content

    @pytest.mark.asyncio
    async def test_reply_replays_history(self, llm):
        llm.ainvoke.return_value = AIMessage(content="Use chives.")
        agent = RecipeAgent(llm)
        history = [
            {"role": "assistant", "content": "# Herb Omelette"},
            {"role": "user", "content": "Which herbs?"},
        ]

        reply = await agent.reply("Breakfast", history, "Any substitute for dill?")

        assert reply == "Use chives."
        messages = llm.ainvoke.await_args.args[0]
        assert [type(m) for m in messages] == [SystemMessage, AIMessage, HumanMessage, HumanMessage]
        assert messages[-1].content == "Any substitute for dill?"

    @pytest.mark.asyncio
    async def test_reply_with_content_blocks(self, llm):
        llm.ainvoke.return_value = AIMessage(content=[{"type": "text", "text": "Use chives."}])
        agent = RecipeAgent(llm)

        reply = await agent.reply("Breakfast", [], "Any substitute for dill?")

        assert reply == "Use chives."

    @pytest.mark.asyncio
    async def test_failure_raises_extraction_error(self, llm):
        llm.ainvoke.side_effect = RuntimeError("timeout")
        agent = RecipeAgent(llm)

        with pytest.raises(ExtractionError) as exc_info:
            await agent.propose("Lunch", TARGETS, [])

        assert exc_info.value.message == "Failed to generate recipe"

    @pytest.mark.asyncio
    async def test_empty_reply_raises(self, llm):
        llm.ainvoke.return_value = AIMessage(content="")
        agent = RecipeAgent(llm)

        with pytest.raises(ExtractionError) as exc_info:
            await agent.reply("Lunch", [], "hello")

        assert exc_info.value.message == "Failed to get response"


class TestRecipeService:
    @pytest.fixture
    def service(self, uow, recipe_agent, test_settings) -> RecipeService:
        return RecipeService(uow, agent=recipe_agent, settings=test_settings)

    @pytest.mark.asyncio
    async def test_start_requires_settings(self, service, recipe_agent):
        with pytest.raises(ValidationError):
            await service.start_session(RecipeMealType.DINNER)

        recipe_agent.propose.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_start_session_stores_first_recipe(self, service, uow, recipe_agent):
        await uow.settings.replace(TARGETS)

        session = await service.start_session(RecipeMealType.DINNER)

        assert session.meal_type == RecipeMealType.DINNER
        assert [m.role for m in session.messages] == ["assistant"]
        assert session.previous_recipes == ["Miso Salmon Bowl"]
        recipe_agent.propose.assert_awaited_once_with("Dinner", TARGETS, [])

    @pytest.mark.asyncio
    async def test_failed_generation_creates_no_session(self, service, uow, recipe_agent, fake_db):
        await uow.settings.replace(TARGETS)
        recipe_agent.propose.side_effect = ExtractionError("Failed to generate recipe", provider="recipe")

        with pytest.raises(ExtractionError):
            await service.start_session(RecipeMealType.LUNCH)

        assert fake_db["recipe_sessions"].docs == []

    @pytest.mark.asyncio
    async def test_suggest_another_avoids_previous(self, service, uow, recipe_agent):
        await uow.settings.replace(TARGETS)
        session = await service.start_session(RecipeMealType.DINNER)
        recipe_agent.propose.return_value = ("# Duck Ragu", "Duck Ragu")

        session = await service.suggest_another(session.session_id)

        assert recipe_agent.propose.await_args.args[2] == ["Miso Salmon Bowl"]
        assert session.previous_recipes == ["Miso Salmon Bowl", "Duck Ragu"]
        assert len(session.messages) == 2

    @pytest.mark.asyncio
    async def test_follow_up_sends_full_history(self, service, uow, recipe_agent):
        await uow.settings.replace(TARGETS)
        session = await service.start_session(RecipeMealType.LUNCH)

        session = await service.send_message(session.session_id, "Make it vegetarian?")

        meal_type, history, message = recipe_agent.reply.await_args.args
        assert meal_type == "Lunch"
        assert [h["role"] for h in history] == ["assistant"]
        assert message == "Make it vegetarian?"
        assert [m.role for m in session.messages] == ["assistant", "user", "assistant"]
        assert session.messages[-1].content == "Swap the salmon for tofu."

    @pytest.mark.asyncio
    async def test_failed_reply_keeps_user_message(self, service, uow, recipe_agent):
        await uow.settings.replace(TARGETS)
        session = await service.start_session(RecipeMealType.LUNCH)
        recipe_agent.reply.side_effect = ExtractionError("Failed to get response", provider="recipe")

        with pytest.raises(ExtractionError):
            await service.send_message(session.session_id, "More protein?")

        stored = await service.get_session(session.session_id)
        assert [m.role for m in stored.messages] == ["assistant", "user"]

    @pytest.mark.asyncio
    async def test_missing_session(self, service):
        with pytest.raises(NotFoundError):
            await service.send_message(str(ObjectId()), "hi")
        with pytest.raises(NotFoundError):
            await service.delete_session("bogus")

    @pytest.mark.asyncio
    async def test_delete_session(self, service, uow):
        await uow.settings.replace(TARGETS)
        session = await service.start_session(RecipeMealType.BREAKFAST)

        await service.delete_session(session.session_id)

        with pytest.raises(NotFoundError):
            await service.get_session(session.session_id)

    def test_unconfigured_model_raises_extraction_error(self, uow, test_settings):
        service = RecipeService(uow, settings=test_settings)

        with pytest.raises(ExtractionError):
            _ = service.agent
