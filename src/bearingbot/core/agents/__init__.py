"""Conversation agents and the orchestrator that routes between them."""

from .answering import AnsweringAgent, classify_query_type, response_cache_key
from .base import Agent
from .feedback import ACKNOWLEDGEMENT, FeedbackAgent
from .orchestrator import Orchestrator, intent_from_output
from .tools import CatalogToolset

__all__ = [
    "ACKNOWLEDGEMENT",
    "Agent",
    "AnsweringAgent",
    "CatalogToolset",
    "FeedbackAgent",
    "Orchestrator",
    "classify_query_type",
    "intent_from_output",
    "response_cache_key",
]
