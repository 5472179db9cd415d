"""Agent interface."""

from abc import ABC, abstractmethod

from bearingbot.core.models import AgentResponse, ConversationContext


class Agent(ABC):
    """Handles one routed turn and returns a normalized response.

    Agents may mutate ``context`` (e.g. ``previous_response_id``); the
    conversation manager persists it after the turn.
    """

    agent_name: str

    @abstractmethod
    async def process(
        self, utterance: str, context: ConversationContext
    ) -> AgentResponse: ...
