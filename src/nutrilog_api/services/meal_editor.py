"""Meal editing workflow.

``MealEditor`` is the reviewable food list; ``MealComposer`` walks a meal
through the add/edit dialog states:

    UPLOAD --(image selected, proceed)--> EDIT --(save)--> SAVED
       \\                                   |
        +-------------(cancel)-------------+--> CANCELLED

Editing an existing meal starts directly in EDIT.
"""

from enum import Enum

from nutrilog_api.core.exceptions import ValidationError
from nutrilog_api.models.meal import FoodField, FoodItem, Meal, MealCreate, MealUpdate
from nutrilog_api.utils.dates import format_meal_time


class MealEditor:
    """
    Ordered, mutable list of food items pending save.

    Indices always come from enumerating the current list, so the edit
    operations do no bounds checking of their own.
    """

    def __init__(self, foods: list[FoodItem] | None = None):
        self._foods = [food.model_copy() for food in foods or []]

    @property
    def foods(self) -> list[FoodItem]:
        """Snapshot of the current list."""
        return [food.model_copy() for food in self._foods]

    def __len__(self) -> int:
        return len(self._foods)

    def add_blank(self) -> None:
        self._foods.append(FoodItem(name="", quantity="", notes=""))

    def update(self, index: int, field: FoodField, value: str) -> None:
        self._foods[index] = self._foods[index].model_copy(update={field: value})

    def remove(self, index: int) -> None:
        del self._foods[index]


class ComposerState(str, Enum):
    UPLOAD = "upload"
    EDIT = "edit"
    SAVED = "saved"
    CANCELLED = "cancelled"


class ComposerStateError(ValidationError):
    """Action not allowed in the composer's current state."""

    def __init__(self, action: str, state: ComposerState, hint: str | None = None):
        super().__init__(
            message=hint or f"Cannot {action} while the meal is in the {state.value} step",
            details={"action": action, "state": state.value},
        )


class MealComposer:
    """
    State machine behind the add/edit meal dialog.

    Pending edits live only in the composer until ``build_create`` or
    ``build_update`` hands them to the store.
    """

    def __init__(
        self,
        category: str,
        timestamp: int,
        *,
        meal_id: str | None = None,
        image: str | None = None,
        foods: list[FoodItem] | None = None,
        state: ComposerState = ComposerState.UPLOAD,
    ):
        self.category = category
        self.timestamp = timestamp
        self.meal_id = meal_id
        self.image = image
        self.editor = MealEditor(foods)
        self.state = state

    @classmethod
    def new(cls, category: str, timestamp: int) -> "MealComposer":
        """Composer for a meal that does not exist yet."""
        return cls(category, timestamp)

    @classmethod
    def for_existing(cls, meal: Meal) -> "MealComposer":
        """Composer that edits a stored meal, skipping the upload step."""
        return cls(
            meal.category,
            meal.timestamp,
            meal_id=meal.id,
            image=meal.image,
            foods=meal.foods,
            state=ComposerState.EDIT,
        )

    @property
    def is_editing_existing(self) -> bool:
        return self.meal_id is not None

    def _require(self, action: str, *allowed: ComposerState) -> None:
        if self.state not in allowed:
            raise ComposerStateError(action, self.state)

    def select_image(self, image: str) -> None:
        self._require("select an image", ComposerState.UPLOAD)
        self.image = image

    def clear_image(self) -> None:
        self._require("clear the image", ComposerState.UPLOAD)
        self.image = None

    def apply_extraction(self, foods: list[FoodItem]) -> None:
        """Replace the draft list with foods detected in the photo."""
        self._require("apply analysis results", ComposerState.UPLOAD, ComposerState.EDIT)
        self.editor = MealEditor(foods)

    def proceed(self) -> None:
        """Move from the upload step to reviewing food details."""
        self._require("continue", ComposerState.UPLOAD)
        if not self.image:
            raise ComposerStateError(
                "continue",
                self.state,
                hint="Select a meal image before adding food details",
            )
        self.state = ComposerState.EDIT

    def build_create(self, tz) -> MealCreate:
        """
        Fields for a new meal record.

        Args:
            tz: Timezone the generated meal name is shown in
        """
        self._require("save", ComposerState.EDIT)
        if self.is_editing_existing:
            raise ComposerStateError("create", self.state, hint="Meal already exists; save changes instead")
        return MealCreate(
            name=f"{self.category} - {format_meal_time(self.timestamp, tz)}",
            foods=self.editor.foods,
            image=self.image,
            timestamp=self.timestamp,
            category=self.category,
        )

    def build_update(self) -> MealUpdate:
        """Editable fields of an existing meal."""
        self._require("save", ComposerState.EDIT)
        if not self.is_editing_existing:
            raise ComposerStateError("update", self.state, hint="Meal has not been saved yet")
        return MealUpdate(foods=self.editor.foods, image=self.image)

    def mark_saved(self) -> None:
        self._require("finish saving", ComposerState.EDIT)
        self.state = ComposerState.SAVED

    def cancel(self) -> None:
        """Discard pending edits."""
        self._require("cancel", ComposerState.UPLOAD, ComposerState.EDIT)
        self.editor = MealEditor()
        self.image = None
        self.state = ComposerState.CANCELLED
