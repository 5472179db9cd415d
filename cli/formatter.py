"""Terminal rendering of chat responses."""

from typing import TextIO


class ResponseFormatter:
    def __init__(self, output: TextIO, show_meta: bool = False):
        self.output = output
        self.show_meta = show_meta

    def render(self, body: dict) -> None:
        if "error" in body:
            self._print(f"\n❌ Error: {body['error']}\n\n")
            return

        self._print(f"\n{body.get('response', '')}\n")
        if self.show_meta:
            self._print(
                f"[{body.get('queryType', '?')} / {body.get('sourceData', '?')}]\n"
            )
        self._print("\n")

    def _print(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()
