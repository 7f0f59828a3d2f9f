"""LangChain agents for meal analysis and recipe suggestions."""

from .llm import get_llm, get_llm_info
from .nodes import RecipeAgent

__all__ = ["RecipeAgent", "get_llm", "get_llm_info"]
