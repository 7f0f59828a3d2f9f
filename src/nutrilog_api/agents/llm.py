"""Chat model factory shared by food extraction and the recipe assistant."""

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from nutrilog_api.core.config import LLMProvider, Settings, get_settings


def get_model_name(settings: Settings) -> str:
    """Model identifier for the selected provider."""
    if settings.llm_provider == LLMProvider.GEMINI:
        return settings.gemini_model
    return settings.openai_model


def get_llm(
    settings: Settings | None = None,
    *,
    temperature: float | None = None,
    max_tokens: int | None = None,
) -> BaseChatModel:
    """
    Build the chat model selected by ``LLM_PROVIDER``.

    Both providers accept LangChain ``image_url`` content blocks, so the
    same model serves photo analysis and recipe chat.

    Args:
        settings: Application settings (uses default if not provided)
        temperature: Override of ``settings.llm_temperature``
        max_tokens: Cap on completion length (provider default if None)

    Returns:
        Configured chat model instance

    Raises:
        ValueError: If the provider's API key is missing or the provider is unknown
    """
    settings = settings or get_settings()
    if temperature is None:
        temperature = settings.llm_temperature

    match settings.llm_provider:
        case LLMProvider.OPENAI:
            return _build_openai(settings, temperature, max_tokens)
        case LLMProvider.GEMINI:
            return _build_gemini(settings, temperature, max_tokens)
        case _:
            raise ValueError(f"Unsupported LLM provider: {settings.llm_provider}")


def _build_openai(settings: Settings, temperature: float, max_tokens: int | None) -> BaseChatModel:
    from langchain_openai import ChatOpenAI

    if not settings.openai_api_key:
        raise ValueError("OPENAI_API_KEY is not set; meal analysis and recipes are unavailable")

    return ChatOpenAI(
        model=settings.openai_model,
        api_key=settings.openai_api_key,
        temperature=temperature,
        max_tokens=max_tokens,
    )


def _build_gemini(settings: Settings, temperature: float, max_tokens: int | None) -> BaseChatModel:
    from langchain_google_genai import ChatGoogleGenerativeAI

    if not settings.google_api_key:
        raise ValueError("GOOGLE_API_KEY is not set; meal analysis and recipes are unavailable")

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=temperature,
        max_output_tokens=max_tokens,
    )


def get_llm_info(settings: Settings | None = None) -> dict:
    """Provider, model and configuration state for the health endpoint."""
    settings = settings or get_settings()
    return {
        "provider": settings.llm_provider.value,
        "model": get_model_name(settings),
        "configured": settings.is_llm_configured,
    }


def message_text(message: BaseMessage) -> str:
    """Text of a model reply, joining content blocks when the provider returns a list."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)
