"""Icon URL grammar.

A request path below the mount point decomposes as::

    path      := "" | "version" | body "." extension
    body      := segment | segment "/" segment
    segment   := [a-z0-9:-]+

and is matched against a fixed rule table keyed by (segment count,
extension)::

    1 segment,  svg      -> shorthand   prefix:icon  |  prefix-icon...
    1 segment,  js/json  -> collection  prefix, icon query "icons"
    2 segments, any      -> explicit    prefix / icon query

Shorthand separators are tried in ``SHORTHAND_SEPARATORS`` order: a colon
anywhere in the segment commits to the colon form, so ``a:b:c`` never
falls back to the hyphen form. The hyphen form splits on the first hyphen
only, keeping hyphenated icon names intact.

The path is matched as sent on the wire, before percent-decoding, so an
escape such as ``%2F`` is never mistaken for a separator.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from iconcdn.errors import ParseError, ParseErrorKind

BODY_PATTERN = re.compile(r"[a-z0-9:/-]+")

SVG = "svg"
ICON_EXTENSIONS = frozenset({SVG, "js", "json"})

# Icon query used for whole-collection requests (prefix.json / prefix.js)
COLLECTION_QUERY = "icons"

VERSION_PATH = "version"


class Separator(StrEnum):
    COLON = ":"
    HYPHEN = "-"


# Order is precedence
SHORTHAND_SEPARATORS: tuple[Separator, ...] = (Separator.COLON, Separator.HYPHEN)


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    """An icon request decomposed from its URL. Immutable."""

    prefix: str
    icon_query: str
    extension: str


@dataclass(frozen=True, slots=True)
class RedirectHome:
    """The bare mount point: send the visitor to the project home page."""


@dataclass(frozen=True, slots=True)
class VersionRequest:
    """The ``version`` banner route."""


REDIRECT_HOME = RedirectHome()
VERSION_REQUEST = VersionRequest()

ParseOutcome: TypeAlias = ParsedRequest | RedirectHome | VersionRequest


def strip_mount(path: str, mount_path: str = "") -> str:
    """Return *path* relative to the mount point, without a leading slash.

    Routing is independent of where the service is deployed: with
    ``mount_path="/icons"``, ``/icons/mdi/home.svg`` becomes ``mdi/home.svg``.
    """
    mount = mount_path.rstrip("/")
    if mount and (path == mount or path.startswith(mount + "/")):
        path = path[len(mount) :]
    return path.removeprefix("/")


def split_shorthand(segment: str) -> tuple[Separator, str, str] | None:
    """Split a single-segment SVG name into (separator, prefix, icon).

    Returns None when no separator rule accepts the segment.
    """
    for separator in SHORTHAND_SEPARATORS:
        if separator not in segment:
            continue
        prefix, _, icon = segment.partition(separator)
        if separator is Separator.COLON and Separator.COLON in icon:
            # More than one colon: committed to the colon form, which failed
            return None
        return separator, prefix, icon
    return None


# -- Rules --------------------------------------------------------------

_Rule: TypeAlias = Callable[[list[str], str], ParsedRequest | None]


def _shorthand_rule(segments: list[str], extension: str) -> ParsedRequest | None:
    split = split_shorthand(segments[0])
    if split is None:
        return None
    _, prefix, icon = split
    return ParsedRequest(prefix=prefix, icon_query=icon, extension=extension)


def _collection_rule(segments: list[str], extension: str) -> ParsedRequest | None:
    return ParsedRequest(prefix=segments[0], icon_query=COLLECTION_QUERY, extension=extension)


def _explicit_rule(segments: list[str], extension: str) -> ParsedRequest | None:
    prefix, icon_query = segments
    return ParsedRequest(prefix=prefix, icon_query=icon_query, extension=extension)


RULES: dict[tuple[int, str], _Rule] = {
    (1, SVG): _shorthand_rule,
    (1, "js"): _collection_rule,
    (1, "json"): _collection_rule,
    (2, SVG): _explicit_rule,
    (2, "js"): _explicit_rule,
    (2, "json"): _explicit_rule,
}


def parse(path: str, mount_path: str = "") -> ParseOutcome:
    """Decompose a request path into a route.

    Raises:
        ParseError: ``BAD_FORMAT`` when the path is not ``body.extension``
            over the allowed alphabet, ``NOT_FOUND`` when it is well-formed
            but no rule accepts it.
    """
    remainder = strip_mount(path, mount_path)

    if remainder == "":
        return REDIRECT_HOME
    if remainder == VERSION_PATH:
        return VERSION_REQUEST

    pieces = remainder.split(".")
    if len(pieces) != 2:
        raise ParseError(ParseErrorKind.BAD_FORMAT, remainder)
    body, extension = pieces

    if not BODY_PATTERN.fullmatch(body):
        raise ParseError(ParseErrorKind.BAD_FORMAT, remainder)

    segments = body.split("/")
    rule = RULES.get((len(segments), extension))
    parsed = rule(segments, extension) if rule is not None else None
    if parsed is None:
        raise ParseError(ParseErrorKind.NOT_FOUND, remainder)
    return parsed
