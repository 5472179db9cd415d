"""Rating and free-text extraction from a feedback utterance."""

from __future__ import annotations

import logging

from langchain_core.messages import HumanMessage, SystemMessage

from bearingbot.core.llm import LanguagePort, LanguagePortError
from bearingbot.core.metrics import FEEDBACK_EXTRACTIONS_TOTAL
from bearingbot.core.models.feedback import RATING_DEFAULT, RATING_MAX, RATING_MIN

from .base import Extraction, ExtractionParseError, Fallback, Parsed

logger = logging.getLogger(__name__)

PURPOSE_FEEDBACK_EXTRACTION = "feedback_extraction"

FEEDBACK_SYSTEM_PROMPT = "Extract rating (1-5) and feedback text from user input."

FEEDBACK_PROMPT = """\
Extract the rating and feedback from: {utterance}

Respond with exactly: rating|feedback text"""

SEPARATOR = "|"

Rating = tuple[int, str]


def parse_feedback(raw: str, utterance: str) -> Rating:
    """Split ``"rating|text"`` on the first separator.

    Output without a separator is read as a bare rating, and the
    utterance becomes the feedback text.  Raises ``ExtractionParseError``
    when the rating is not an integer in range.
    """
    left, separator, text = raw.partition(SEPARATOR)
    try:
        rating = int(left.strip())
    except ValueError as exc:
        raise ExtractionParseError(f"rating is not an integer: {left!r}") from exc
    if not RATING_MIN <= rating <= RATING_MAX:
        raise ExtractionParseError(f"rating out of range: {rating}")
    return rating, text.strip() if separator else utterance


def default_feedback(utterance: str) -> Rating:
    return RATING_DEFAULT, utterance


def feedback_from_output(raw: str, utterance: str) -> Extraction[Rating]:
    try:
        return Parsed(parse_feedback(raw, utterance))
    except ExtractionParseError as exc:
        return Fallback(default_feedback(utterance), reason=str(exc))


class FeedbackExtractor:
    def __init__(self, port: LanguagePort) -> None:
        self._port = port

    async def extract(self, utterance: str) -> Extraction[Rating]:
        messages = [
            SystemMessage(content=FEEDBACK_SYSTEM_PROMPT),
            HumanMessage(content=FEEDBACK_PROMPT.format(utterance=utterance)),
        ]
        try:
            completion = await self._port.complete(
                messages, purpose=PURPOSE_FEEDBACK_EXTRACTION
            )
        except LanguagePortError as exc:
            logger.warning("Feedback extraction failed, using default rating: %s", exc)
            result: Extraction[Rating] = Fallback(
                default_feedback(utterance), reason=str(exc)
            )
        else:
            result = feedback_from_output(completion.content, utterance)
            if isinstance(result, Fallback):
                logger.info("Unparseable feedback output, using default rating")

        FEEDBACK_EXTRACTIONS_TOTAL.labels(path=result.path).inc()
        return result
