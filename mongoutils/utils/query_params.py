"""
Helpers for turning optional ``limit`` and ``sort`` query values into
arguments for ``Cursor.limit`` and ``Cursor.sort``.

Parsing is deliberately permissive: anything that cannot be understood falls
back to a default instead of producing an error, e.g.

    /api/collections/users/documents?limit=10&sort=birthday,-username
"""

import re
from typing import List, NamedTuple, Optional

from fastapi import Depends, Query, Request
from pymongo import ASCENDING, DESCENDING

from mongoutils.config.settings import MongoSettings, get_settings

LIMIT_DEFAULT_VALUE = 5
LIMIT_RETURN_ALL = 0
LIMIT_KEYWORDS = ("none", "all")
SORT_DEFAULT = "_id"
SORT_SEPARATOR = ","
DESCENDING_PREFIX = "-"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


class SortSpec(NamedTuple):
    """One sort directive, usable directly as a ``(key, direction)`` pair in pymongo."""

    field: str
    direction: int

    @property
    def descending(self) -> bool:
        return self.direction == DESCENDING


def _parse_int(raw: str) -> Optional[int]:
    if not _INT_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if value < _INT64_MIN or value > _INT64_MAX:
        return None
    return value


def resolve_limit(raw: Optional[str], default: int = LIMIT_DEFAULT_VALUE) -> int:
    """
    Get the maximum number of results to return from a raw ``limit`` value.

    Args:
        raw: The query value, or None if it was not supplied
        default: Limit used when the value is missing or not understood

    Returns:
        ``default`` for missing, empty or unparseable input,
        ``LIMIT_RETURN_ALL`` (0) for the keywords "none" and "all",
        otherwise the parsed integer as given. A literal "0" is 0 as well,
        which pymongo also treats as "no limit".
    """
    if not raw:
        return default

    if raw in LIMIT_KEYWORDS:
        return LIMIT_RETURN_ALL

    value = _parse_int(raw)
    if value is None:
        return default

    return value


def resolve_sort(raw: Optional[str], default_field: str = SORT_DEFAULT) -> List[SortSpec]:
    """
    Get the fields to sort results by from a raw ``sort`` value.

    Fields are separated by commas without whitespace; a leading minus sign
    sorts that field in descending order. The returned list keeps the input
    order, which is the precedence pymongo applies.

    Args:
        raw: The query value, or None if it was not supplied
        default_field: Field sorted ascending when nothing was supplied

    Returns:
        List of SortSpec directives
    """
    if not raw:
        return [SortSpec(default_field, ASCENDING)]

    specs = []
    for token in raw.split(SORT_SEPARATOR):
        if token.startswith(DESCENDING_PREFIX):
            specs.append(SortSpec(token[len(DESCENDING_PREFIX):], DESCENDING))
        else:
            specs.append(SortSpec(token, ASCENDING))
    return specs


def limit_from_request(request: Request, default: int = LIMIT_DEFAULT_VALUE) -> int:
    """Resolve the ``limit`` query parameter of a request."""
    return resolve_limit(request.query_params.get("limit"), default)


def sort_from_request(request: Request, default_field: str = SORT_DEFAULT) -> List[SortSpec]:
    """Resolve the ``sort`` query parameter of a request."""
    return resolve_sort(request.query_params.get("sort"), default_field)


def get_limit(
    limit: Optional[str] = Query(
        None,
        description='Maximum number of results; "none" or "all" (or 0) returns everything',
    ),
    settings: MongoSettings = Depends(get_settings),
) -> int:
    """FastAPI dependency resolving the ``limit`` query parameter."""
    return resolve_limit(limit, settings.default_limit)


def get_sort(
    sort: Optional[str] = Query(
        None,
        description="Comma separated fields, prefix a field with - for descending order",
    ),
    settings: MongoSettings = Depends(get_settings),
) -> List[SortSpec]:
    """FastAPI dependency resolving the ``sort`` query parameter."""
    return resolve_sort(sort, settings.default_sort_field)
