"""Meal logging API routes."""

from fastapi import APIRouter, File, Query, UploadFile, status

from nutrilog_api.api.dependencies import MealServiceDep, RequireBasic, RequireFull
from nutrilog_api.models.meal import (
    FoodEditRequest,
    Meal,
    MealCreateRequest,
    MealDraft,
    MealUpdate,
)

router = APIRouter()


@router.post("/analyze", response_model=MealDraft, dependencies=[RequireFull])
async def analyze_meal_image(
    service: MealServiceDep,
    image: UploadFile = File(..., description="Meal photo in any common image format"),
):
    """
    Normalize a meal photo and draft its food list.

    - **image**: Photo to analyze

    The photo is shrunk to at most 800 px on its longer edge and re-encoded
    as JPEG. If the vision model fails, the draft still comes back with the
    image, an empty food list and an ``error`` notice.
    """
    content = await image.read()
    return await service.analyze_image(content)


@router.post("", response_model=Meal, status_code=status.HTTP_201_CREATED, dependencies=[RequireFull])
async def create_meal(request: MealCreateRequest, service: MealServiceDep):
    """
    Save a new meal.

    - **category**: Breakfast, Lunch, Dinner, Snack 1 or Snack 2
    - **foods**: Reviewed food list
    - **image**: Normalized data URL returned by ``/meals/analyze``
    - **timestamp**: Epoch ms (defaults to now)
    """
    return await service.create_meal(request)


@router.get("", response_model=list[Meal], dependencies=[RequireBasic])
async def list_meals(
    service: MealServiceDep,
    start: int = Query(..., description="Range start, epoch ms (inclusive)"),
    end: int = Query(..., description="Range end, epoch ms (inclusive)"),
):
    """
    Get meals in a time range, oldest first.

    - **start**: Range start in epoch milliseconds
    - **end**: Range end in epoch milliseconds
    """
    return await service.list_meals(start, end)


@router.get("/{meal_id}", response_model=Meal, dependencies=[RequireBasic])
async def get_meal(meal_id: str, service: MealServiceDep):
    """
    Get a single meal.

    - **meal_id**: The meal ID
    """
    return await service.get_meal(meal_id)


@router.patch("/{meal_id}", response_model=Meal, dependencies=[RequireFull])
async def update_meal(meal_id: str, changes: MealUpdate, service: MealServiceDep):
    """
    Replace a meal's food list and/or image.

    Fields left out of the body are not touched.
    """
    return await service.update_meal(meal_id, changes)


@router.patch("/{meal_id}/foods", response_model=Meal, dependencies=[RequireFull])
async def edit_meal_foods(meal_id: str, request: FoodEditRequest, service: MealServiceDep):
    """
    Apply add/update/remove edits to a meal's food list, in order.

    - **op**: ``add`` appends a blank item; ``update`` sets ``field`` of item
      ``index`` to ``value``; ``remove`` deletes item ``index``
    """
    return await service.edit_foods(meal_id, request.operations)


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[RequireFull])
async def delete_meal(meal_id: str, service: MealServiceDep):
    """
    Delete a meal. Deleting a meal that does not exist is a no-op.
    """
    await service.delete_meal(meal_id)
