"""Placeholder grammar for server URL templates.

A token is ``{`` + one of ``imdbId``, ``season``, ``episode`` + ``}``.
No nesting, no escaping, no parameters.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from embedarr.domain.entities.templating import PLACEHOLDER_NAMES

_TOKEN_RE = re.compile(r"\{([^{}]*)\}")


@dataclass(frozen=True)
class PlaceholderScan:
    """Outcome of scanning a template for brace tokens."""

    tokens: tuple[str, ...]  # well-formed tokens in order of appearance
    malformed: str | None = None  # first offending fragment, if any


def scan_placeholders(template: str) -> PlaceholderScan:
    """Walk the template once and collect tokens.

    Stops at the first malformed fragment: an unknown name inside braces,
    a ``{`` without a matching ``}`` before the next ``{``, or a stray ``}``.
    """
    tokens: list[str] = []
    i = 0
    n = len(template)
    while i < n:
        ch = template[i]
        if ch == "}":
            return PlaceholderScan(tuple(tokens), malformed="}")
        if ch != "{":
            i += 1
            continue

        close = template.find("}", i + 1)
        reopen = template.find("{", i + 1)
        if close == -1 or (reopen != -1 and reopen < close):
            end = reopen if reopen != -1 else n
            return PlaceholderScan(tuple(tokens), malformed=template[i:end])

        raw = template[i : close + 1]
        if raw[1:-1] not in PLACEHOLDER_NAMES:
            return PlaceholderScan(tuple(tokens), malformed=raw)
        tokens.append(raw)
        i = close + 1

    return PlaceholderScan(tuple(tokens))


def substitute(template: str, values: Mapping[str, str]) -> str:
    """Replace known tokens in a single pass.

    ``values`` is keyed by placeholder name (``imdbId``, ...). Tokens without
    a value, and brace groups that are not tokens, are left untouched.
    Substituted text is never re-scanned.
    """

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _TOKEN_RE.sub(_replace, template)
