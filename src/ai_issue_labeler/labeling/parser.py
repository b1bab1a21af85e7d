"""Parsing of model replies into label suggestions.

Model replies are untrusted text. Parsing happens in two clearly separated steps:

1. Structured: strip Markdown fences and decode the text as a JSON array.
2. Salvage: only when the text is not valid JSON at all, pull `"name": "..."`
   pairs out of the raw text with a regular expression.

Both steps produce a :class:`Parsed` or :class:`Unparsable` result. Individual
entries with a missing or blank name are dropped silently; only a reply that
cannot be read as a list at all is an error.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"\A\s*```[\w+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*\Z")
_OBJECT = re.compile(r"\{[^{}]*\}")
_JSON_STRING = r'"((?:[^"\\]|\\.)*)"'
_NAME_FIELD = re.compile(r'"name"\s*:\s*' + _JSON_STRING)
_DESCRIPTION_FIELD = re.compile(r'"description"\s*:\s*' + _JSON_STRING)


@dataclass(frozen=True, slots=True)
class LabelSuggestion:
    """A validated label proposal from the model."""

    name: str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Parsed:
    suggestions: list[LabelSuggestion]
    salvaged: bool = False


@dataclass(frozen=True, slots=True)
class Unparsable:
    reason: str


ParseResult = Parsed | Unparsable


class MalformedResponseError(ValueError):
    """Raised when a model reply cannot be interpreted as a list of suggestions."""

    def __init__(self, reason: str, raw: str) -> None:
        super().__init__(
            f"Failed to parse AI response as a JSON array: {reason}. Raw response: {raw!r}"
        )
        self.reason = reason
        self.raw = raw


def strip_code_fences(text: str) -> str:
    """Remove a wrapping Markdown code fence (```json ... ```) and surrounding whitespace.

    Backticks inside the reply, such as in a label description, are left alone.
    """

    text = _LEADING_FENCE.sub("", text, count=1)
    return _TRAILING_FENCE.sub("", text, count=1).strip()


def _clean(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _suggestions_from_items(items: Iterable[Any]) -> list[LabelSuggestion]:
    suggestions: list[LabelSuggestion] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = _clean(item.get("name"))
        if name is None:
            continue
        description = _clean(item.get("description"))
        suggestions.append(LabelSuggestion(name=name, description=description))
    return suggestions


def _decode_json_string(value: str) -> str:
    try:
        decoded = json.loads(f'"{value}"')
    except json.JSONDecodeError:
        return value
    return decoded if isinstance(decoded, str) else value


def salvage_suggestions(text: str) -> ParseResult:
    """Best-effort extraction of `name`/`description` fields from non-JSON text.

    Every `"name"` field yields a suggestion, in reply order. Its description is
    read from the enclosing `{...}` object when that object contains no nested
    braces, otherwise from the text up to the next `"name"` field.
    """

    objects = [(m.start(), m.end()) for m in _OBJECT.finditer(text)]
    name_matches = list(_NAME_FIELD.finditer(text))

    items: list[dict[str, str]] = []
    for i, name_match in enumerate(name_matches):
        scope = next(
            ((start, end) for start, end in objects if start <= name_match.start() < end),
            None,
        )
        if scope is None:
            stop = name_matches[i + 1].start() if i + 1 < len(name_matches) else len(text)
            scope = (name_match.end(), stop)

        item = {"name": _decode_json_string(name_match.group(1))}
        description_match = _DESCRIPTION_FIELD.search(text, *scope)
        if description_match is not None:
            item["description"] = _decode_json_string(description_match.group(1))
        items.append(item)

    suggestions = _suggestions_from_items(items)
    if not suggestions:
        return Unparsable(reason="no label names could be extracted")
    return Parsed(suggestions=suggestions, salvaged=True)


def parse_response(text: str) -> ParseResult:
    """Parse a raw model reply into suggestions."""

    normalized = strip_code_fences(text)
    try:
        data = json.loads(normalized)
    except json.JSONDecodeError as e:
        logger.warning(
            "AI response is not valid JSON; salvaging label names",
            extra={"error": str(e)},
        )
        return salvage_suggestions(normalized)

    if not isinstance(data, list):
        kind = type(data).__name__
        return Unparsable(reason=f"AI response was valid JSON but not an array ({kind})")
    return Parsed(suggestions=_suggestions_from_items(data))


def parse_suggestions(text: str) -> list[LabelSuggestion]:
    """Parse a raw model reply, raising :class:`MalformedResponseError` if unusable."""

    result = parse_response(text)
    if isinstance(result, Unparsable):
        raise MalformedResponseError(result.reason, text)
    return result.suggestions
