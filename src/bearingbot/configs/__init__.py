"""Application configuration models."""

from .config import (  # noqa: F401
    AppConfig,
    get_app_config,
    get_cache_config,
    get_chat_config,
    get_llm_config,
    get_third_party_config,
)
