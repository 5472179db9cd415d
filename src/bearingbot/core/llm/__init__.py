"""Language-model access for the agents."""

from .deps import build_language_port, get_language_port, get_llm  # noqa: F401
from .port import (  # noqa: F401
    Completion,
    LanguagePort,
    LanguagePortError,
    message_text,
)
