"""Agent implementations."""

from .recipe import RecipeAgent

__all__ = ["RecipeAgent"]
