"""FastAPI dependency factories for the conversation pipeline.

Long-lived collaborators (port, catalog, cache, sink) are read from
``app.state``; the agents themselves are assembled per request with an
explicit ``Depends`` chain so tests can override any link.
"""

from typing import Annotated

from fastapi import Depends

from bearingbot.configs.config import AppConfig, get_app_config
from bearingbot.core.catalog import CatalogStore, get_catalog
from bearingbot.core.llm import LanguagePort, get_language_port
from bearingbot.infra.cache import SessionCache, get_session_cache
from bearingbot.infra.db import FeedbackSink, get_feedback_sink

from .agents import AnsweringAgent, CatalogToolset, FeedbackAgent, Orchestrator
from .conversation import ConversationManager
from .extraction import FeedbackExtractor, QueryExtractor


def get_orchestrator(
    port: Annotated[LanguagePort, Depends(get_language_port)],
    catalog: Annotated[CatalogStore, Depends(get_catalog)],
    cache: Annotated[SessionCache, Depends(get_session_cache)],
    sink: Annotated[FeedbackSink, Depends(get_feedback_sink)],
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> Orchestrator:
    toolset = CatalogToolset(
        catalog,
        cache,
        ttl=config.cache.tool_result_ttl,
        search_limit=config.chat.search_result_limit,
    )
    answering = AnsweringAgent(
        port,
        QueryExtractor(port),
        toolset,
        cache,
        response_ttl=config.cache.response_ttl,
        history_window=config.chat.generation_window,
    )
    feedback = FeedbackAgent(FeedbackExtractor(port), sink)
    return Orchestrator(
        port,
        answering,
        feedback,
        history_window=config.chat.classification_window,
    )


def get_conversation_manager(
    orchestrator: Annotated[Orchestrator, Depends(get_orchestrator)],
    cache: Annotated[SessionCache, Depends(get_session_cache)],
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> ConversationManager:
    return ConversationManager(
        cache,
        orchestrator,
        session_ttl=config.cache.session_ttl,
        max_history=config.chat.max_history_messages,
    )
