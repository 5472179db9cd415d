"""Prompt templates for classification and answer generation."""

from bearingbot.core.models import ChatMessage, StructuredQuery

NOT_SPECIFIED = "Not specified"

CLASSIFICATION_SYSTEM_PROMPT = """\
You are an intent classifier for a bearing product assistant.
Classify the user's latest input as either a question about bearing
products or feedback about a previous answer.
Respond with exactly one word: question or feedback."""

CLASSIFICATION_USER_PROMPT = """\
Recent conversation:
{history}

Current input: {utterance}"""

GENERATION_SYSTEM_PROMPT = """\
You are a helpful bearing product assistant. Use the available functions to get accurate bearing data.

Extracted Query Details:
- Bearing: {product_name}
- Category: {product_category}
- Requested Attributes: {requested_attributes}
- Query Type: {query_type}

Provide specific technical details about bearings. Be precise about dimensions and performance ratings."""


def render_history(messages: list[ChatMessage]) -> str:
    if not messages:
        return "(none)"
    return "\n".join(m.render() for m in messages)


def render_classification_prompt(utterance: str, history: list[ChatMessage]) -> str:
    return CLASSIFICATION_USER_PROMPT.format(
        history=render_history(history), utterance=utterance
    )


def render_generation_prompt(query: StructuredQuery) -> str:
    return GENERATION_SYSTEM_PROMPT.format(
        product_name=query.product_name or NOT_SPECIFIED,
        product_category=query.product_category or NOT_SPECIFIED,
        requested_attributes=", ".join(query.requested_attributes),
        query_type=query.query_type,
    )
