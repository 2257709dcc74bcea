"""Recovery of a ranked id array from free-form model output.

Models are asked for a bare JSON array but often wrap it in prose or a
Markdown code fence. parse_ranked_ids() tries, in order:
1. The whole reply as JSON
2. The first fenced code block
3. Every bracket-delimited substring, left to right
The first candidate that decodes to a JSON array wins.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterator

from ..exceptions import RankingParseError

_FENCE_RE = re.compile(r"```[a-zA-Z0-9_-]*\s*\n?(.*?)```", re.DOTALL)
_DIGITS_RE = re.compile(r"^\s*\d+\s*$")


def parse_ranked_ids(content: str | None) -> list[int]:
    """Extract an ordered list of integer ids from a model reply.

    Elements that are not usable ids (bools, fractions, words, nested
    values) are dropped; ints, integral floats and digit strings are kept.
    A dict reply such as ``{"rankedIds": [3, 1]}`` is handled by the
    bracket scan.

    Args:
        content: Raw text returned by the model

    Returns:
        Ids in the order given by the model (possibly empty)

    Raises:
        RankingParseError: If no JSON array can be found

    Examples:
        >>> parse_ranked_ids("Here you go: [3, 0, 7]")
        [3, 0, 7]
        >>> parse_ranked_ids("```json\\n[1, 2]\\n```")
        [1, 2]
    """
    if not content or not content.strip():
        raise RankingParseError("Empty ranking response")

    saw_array = False
    for snippet in _candidate_snippets(content):
        try:
            value = json.loads(snippet)
        except json.JSONDecodeError:
            continue
        if not isinstance(value, list):
            continue
        saw_array = True
        ids = _coerce_ids(value)
        # A non-empty array with no usable ids (e.g. [[1, 2]]) keeps the scan going
        if ids or not value:
            return ids

    if saw_array:
        return []
    raise RankingParseError("No JSON array found in ranking response")


def _candidate_snippets(content: str) -> Iterator[str]:
    yield content.strip()
    fence = _FENCE_RE.search(content)
    if fence:
        yield fence.group(1).strip()
    yield from _bracket_spans(content)


def _bracket_spans(content: str) -> Iterator[str]:
    """Yield each balanced ``[...]`` substring, scanning left to right."""
    start = content.find("[")
    while start != -1:
        end = _matching_bracket(content, start)
        if end is not None:
            yield content[start : end + 1]
        start = content.find("[", start + 1)


def _matching_bracket(content: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(content)):
        ch = content[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return idx
    return None


def _coerce_ids(values: list[Any]) -> list[int]:
    ids: list[int] = []
    for value in values:
        # bool is a subclass of int
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            ids.append(value)
        elif isinstance(value, float) and value.is_integer():
            ids.append(int(value))
        elif isinstance(value, str) and _DIGITS_RE.match(value):
            ids.append(int(value))
    return ids
