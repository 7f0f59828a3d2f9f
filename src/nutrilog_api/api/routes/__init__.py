"""API routes."""

from . import auth, dashboard, meals, recipes, settings, weight

__all__ = ["auth", "dashboard", "meals", "recipes", "settings", "weight"]
