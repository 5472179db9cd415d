"""Chat model and language port factories."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from bearingbot.configs.config import get_llm_config
from bearingbot.configs.system import LLMConfig
from bearingbot.infra.lifespan import get_app

from .port import LanguagePort


def get_llm(
    config: Annotated[LLMConfig, Depends(get_llm_config)],
) -> BaseChatModel:
    """Create the OpenAI-compatible chat model client."""
    return ChatOpenAI(
        base_url=config.endpoint,
        api_key=config.api_key,
        model=config.model_name,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        timeout=config.model_timeout.total_seconds(),
        max_retries=config.max_retries,
    )


async def build_language_port(
    app: Annotated[FastAPI, Depends(get_app)],
    llm: Annotated[BaseChatModel, Depends(get_llm)],
) -> AsyncGenerator[None, None]:
    app.state.language_port = LanguagePort(llm)
    yield


def get_language_port(request: Request) -> LanguagePort:
    return request.app.state.language_port
