"""Group a day's meals into the fixed daily categories."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from nutrilog_api.models.meal import MEAL_CATEGORIES, CategoryGroup, Meal

logger = logging.getLogger(__name__)


@dataclass
class CategoryGrouping:
    """Meals keyed by category label, plus anything that fit nowhere."""

    groups: dict[str, list[Meal]]
    unclassified: list[Meal] = field(default_factory=list)

    @property
    def unclassified_count(self) -> int:
        return len(self.unclassified)

    def as_groups(self) -> list[CategoryGroup]:
        """Category groups in label order."""
        return [CategoryGroup(title=title, meals=meals) for title, meals in self.groups.items()]


def group_meals(
    meals: Iterable[Meal],
    categories: Sequence[str] = MEAL_CATEGORIES,
) -> CategoryGrouping:
    """
    Assign each meal to its category.

    Every label in ``categories`` appears in the result, in order, with its
    meals sorted by ascending timestamp. Meals whose category is not one of
    the labels are left out of every group and returned as ``unclassified``.

    Args:
        meals: Meals to group, in any order
        categories: Ordered category labels

    Returns:
        CategoryGrouping
    """
    groups: dict[str, list[Meal]] = {title: [] for title in categories}
    unclassified: list[Meal] = []

    for meal in sorted(meals, key=lambda m: m.timestamp):
        bucket = groups.get(meal.category)
        if bucket is None:
            unclassified.append(meal)
        else:
            bucket.append(meal)

    if unclassified:
        logger.warning(
            f"{len(unclassified)} meal(s) with unrecognized categories left out of the dashboard: "
            f"{sorted({m.category for m in unclassified})}"
        )

    return CategoryGrouping(groups=groups, unclassified=unclassified)
