"""Main CLI loop for interactive chat."""

import logging
import sys
from typing import TextIO

from .client import ChatAPIClient
from .config import DEFAULT_API_PATH, CLIConfig
from .formatter import ResponseFormatter

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit", "q")


class BearingCLI:
    """Interactive terminal session against the chat endpoint.

    The session id returned by the first reply is sent with every later
    message so the server keeps one conversation.
    """

    def __init__(
        self,
        config: CLIConfig,
        input_stream: TextIO = sys.stdin,
        output_stream: TextIO = sys.stdout,
        show_meta: bool = False,
    ):
        self.config = config
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.client = ChatAPIClient(config)
        self.formatter = ResponseFormatter(output_stream, show_meta)
        self.session_id: str | None = None

    async def run(self) -> None:
        try:
            self._print_welcome()
            while True:
                try:
                    message = self._get_user_input()
                    if not message.strip():
                        continue
                    if message.strip().lower() in EXIT_COMMANDS:
                        self._print("Goodbye!\n")
                        break
                    await self._process_message(message)
                except KeyboardInterrupt:
                    self._print("\n\nInterrupted. Use 'exit' or 'quit' to exit.\n")
                except EOFError:
                    self._print("\nGoodbye!\n")
                    break
        finally:
            await self.client.close()

    async def _process_message(self, message: str) -> None:
        body = await self.client.chat(message, self.session_id)
        if body.get("sessionId"):
            self.session_id = body["sessionId"]
        self.formatter.render(body)

    def _get_user_input(self) -> str:
        self._print("> ")
        line = self.input_stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n\r")

    def _print_welcome(self) -> None:
        self._print("Bearing Assistant CLI\n")
        self._print(f"Connected to: {self.config.chat_url}\n")
        self._print(
            "Ask about a bearing (e.g. 'What is the bore of 6205?'). "
            "Type 'exit' or 'quit' to exit.\n\n"
        )

    def _print(self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()


async def main(
    host: str = "localhost",
    port: int = 8080,
    api_path: str = DEFAULT_API_PATH,
    timeout: float = 120.0,
    debug: bool = False,
    show_meta: bool = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    config = CLIConfig(host=host, port=port, api_path=api_path, timeout=timeout)
    await BearingCLI(config, show_meta=show_meta).run()
