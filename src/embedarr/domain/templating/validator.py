"""Template validation, run once when an admin creates or edits a server.

A template is accepted when it carries every placeholder its kind needs,
turns into an absolute http(s) URL once the placeholders are filled with
dummy values, and uses no brace syntax outside the placeholder grammar.
The stdlib URL parser is the judge of "is this a URL".
"""

from __future__ import annotations

from dataclasses import replace
from urllib.parse import urlsplit

from embedarr.domain.entities.results import Err, Ok, Result
from embedarr.domain.entities.servers import ServerDefinition, TemplateKind
from embedarr.domain.entities.templating import (
    REQUIRED_PLACEHOLDERS,
    BlankField,
    MalformedUrl,
    MissingPlaceholder,
    UnknownPlaceholder,
    ValidationError,
)
from embedarr.domain.templating.grammar import scan_placeholders, substitute

DUMMY_VALUES: dict[str, str] = {
    "imdbId": "tt0000000",
    "season": "1",
    "episode": "1",
}

_ALLOWED_SCHEMES = frozenset({"http", "https"})
_HOST_FORBIDDEN = frozenset(' <>"{}|\\^`')


def _url_problem(url: str) -> str | None:
    """Return why ``url`` is not an absolute http(s) URL, or None if it is."""
    for ch in url:
        if ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F:
            return "contains whitespace or control characters"

    try:
        parts = urlsplit(url)
        # .port raises ValueError on non-numeric or out-of-range ports
        parts.port
    except ValueError as e:
        return str(e)

    if not parts.scheme:
        return "missing scheme"
    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        return f"unsupported scheme {parts.scheme!r}"

    host = parts.hostname
    if not host:
        return "missing host"
    if any(ch in _HOST_FORBIDDEN for ch in host):
        return f"invalid host {host!r}"
    return None


def validate(template: str, kind: TemplateKind) -> Result[str, ValidationError]:
    """Check a single URL template.

    Returns the template with surrounding whitespace removed on success.
    Checks run in a fixed order and the first failure wins:
    placeholder presence, URL syntax, placeholder well-formedness.
    """
    normalized = template.strip()
    if not normalized:
        return Err(MalformedUrl("template is empty"))

    for token in REQUIRED_PLACEHOLDERS[kind]:
        if token not in normalized:
            return Err(MissingPlaceholder(token=token, template_kind=kind))

    problem = _url_problem(substitute(normalized, DUMMY_VALUES))
    if problem is not None:
        return Err(MalformedUrl(problem))

    scan = scan_placeholders(normalized)
    if scan.malformed is not None:
        return Err(UnknownPlaceholder(scan.malformed))

    return Ok(normalized)


def validate_server(
    server: ServerDefinition,
) -> Result[ServerDefinition, dict[str, ValidationError]]:
    """Validate a whole server draft, collecting one error per field.

    Built-in servers are trusted as shipped and returned unchanged.
    """
    if server.is_built_in:
        return Ok(server)

    errors: dict[str, ValidationError] = {}

    name = server.name.strip()
    if not name:
        errors["name"] = BlankField("name")

    movie_template = server.movie_url_template
    movie = validate(server.movie_url_template, "movie")
    if isinstance(movie, Err):
        errors["movie_url_template"] = movie.error
    else:
        movie_template = movie.value

    tv_template = server.tv_url_template
    tv = validate(server.tv_url_template, "tv")
    if isinstance(tv, Err):
        errors["tv_url_template"] = tv.error
    else:
        tv_template = tv.value

    if errors:
        return Err(errors)

    return Ok(
        replace(
            server,
            name=name,
            movie_url_template=movie_template,
            tv_url_template=tv_template,
            description=server.description.strip(),
        )
    )
