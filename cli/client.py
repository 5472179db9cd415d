"""HTTP client for the chat endpoint."""

import logging

import httpx

from .config import CLIConfig

logger = logging.getLogger(__name__)


class ChatAPIClient:
    """Sends one turn at a time and returns the decoded JSON body.

    Transport problems are returned as ``{"error": ...}`` dicts so the
    interactive loop can print them and keep going.
    """

    def __init__(self, config: CLIConfig):
        self.config = config
        self.client = httpx.AsyncClient(timeout=config.timeout)

    async def chat(self, message: str, session_id: str | None = None) -> dict:
        payload: dict[str, str] = {"message": message}
        if session_id:
            payload["sessionId"] = session_id

        logger.debug("POST %s %s", self.config.chat_url, payload)
        try:
            response = await self.client.post(self.config.chat_url, json=payload)
        except httpx.TimeoutException:
            return {"error": "Request timed out."}
        except httpx.HTTPError as e:
            return {"error": f"Connection error: {e}"}

        logger.debug("Response status: %s", response.status_code)
        try:
            body = response.json()
        except ValueError:
            return {"error": f"HTTP {response.status_code}: {response.text}"}
        if response.status_code != 200 and "error" not in body:
            body = {"error": f"HTTP {response.status_code}: {body}"}
        return body

    async def close(self) -> None:
        await self.client.aclose()
