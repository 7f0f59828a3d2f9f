"""Recipe assistant API routes."""

from fastapi import APIRouter, status

from nutrilog_api.api.dependencies import RecipeServiceDep, RequireFull
from nutrilog_api.models.recipe import RecipeMessageRequest, RecipeSession, RecipeSessionCreate

router = APIRouter(dependencies=[RequireFull])


@router.post("/sessions", response_model=RecipeSession, status_code=status.HTTP_201_CREATED)
async def start_recipe_session(request: RecipeSessionCreate, service: RecipeServiceDep):
    """
    Start a conversation with a first recipe.

    - **meal_type**: Breakfast, Lunch or Dinner

    The recipe is built to match the per-meal macro targets from settings,
    so settings must have been saved first.
    """
    return await service.start_session(request.meal_type)


@router.get("/sessions/{session_id}", response_model=RecipeSession)
async def get_recipe_session(session_id: str, service: RecipeServiceDep):
    """
    Get a conversation with its full message history.

    - **session_id**: The session ID
    """
    return await service.get_session(session_id)


@router.post("/sessions/{session_id}/messages", response_model=RecipeSession)
async def send_recipe_message(
    session_id: str,
    request: RecipeMessageRequest,
    service: RecipeServiceDep,
):
    """
    Ask a follow-up question.

    - **message**: The question; the whole conversation is sent as context
    """
    return await service.send_message(session_id, request.message)


@router.post("/sessions/{session_id}/recipes", response_model=RecipeSession)
async def suggest_another_recipe(session_id: str, service: RecipeServiceDep):
    """
    Suggest another recipe that repeats none of the session's earlier ones.
    """
    return await service.suggest_another(session_id)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe_session(session_id: str, service: RecipeServiceDep):
    """Delete a conversation."""
    await service.delete_session(session_id)
