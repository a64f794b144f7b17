"""
Search expressions for activity listings.

A search is a ``;``-separated list of criteria, all of which must match::

    type==busywork
    type==social;price=le=0.2
    activity==*guitar*

Supported operators are ``==``, ``!=``, ``=gt=``, ``=ge=``, ``=lt=`` and
``=le=``. Ordering operators only apply to numeric fields. A ``*`` in an
``activity`` value matches any run of characters.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from sqlalchemy import ColumnElement

from app.core.exceptions import InvalidSearchError
from app.models.activity import ActivityRecord, ActivityType

_CRITERION = re.compile(
    r"^\s*(?P<field>[a-z_]+)\s*(?P<operator>==|!=|=gt=|=ge=|=lt=|=le=)\s*(?P<value>.+?)\s*$"
)

EQUALITY_OPERATORS = ("==", "!=")
ORDERING_OPERATORS = ("=gt=", "=ge=", "=lt=", "=le=")

# Signed 64-bit range of an SQL INTEGER
MIN_INTEGER = -(2 ** 63)
MAX_INTEGER = 2 ** 63 - 1


def _to_integer(raw_value: str) -> int:
    value = int(raw_value)
    if not MIN_INTEGER <= value <= MAX_INTEGER:
        raise ValueError(f"{raw_value} is out of range")
    return value


# field name -> converter from the raw string value
SEARCHABLE_FIELDS: Dict[str, Callable[[str], Any]] = {
    "activity": str,
    "type": ActivityType,
    "price": float,
    "accessibility": float,
    "max_participants": _to_integer,
}

NUMERIC_FIELDS = ("price", "accessibility", "max_participants")


@dataclass(frozen=True)
class SearchCriterion:
    """One ``field operator value`` term of a search expression."""
    field: str
    operator: str
    value: Any


def _parse_criterion(term: str) -> SearchCriterion:
    match = _CRITERION.match(term)
    if not match:
        raise InvalidSearchError(f"Invalid search criterion '{term.strip()}'")

    field = match.group("field")
    operator = match.group("operator")
    raw_value = match.group("value")

    if field not in SEARCHABLE_FIELDS:
        raise InvalidSearchError(
            f"Unknown search field '{field}', expected one of: {', '.join(SEARCHABLE_FIELDS)}"
        )
    if operator in ORDERING_OPERATORS and field not in NUMERIC_FIELDS:
        raise InvalidSearchError(f"Operator '{operator}' is not supported for field '{field}'")

    try:
        value = SEARCHABLE_FIELDS[field](raw_value)
    except ValueError:
        raise InvalidSearchError(f"Invalid value '{raw_value}' for search field '{field}'") from None

    return SearchCriterion(field=field, operator=operator, value=value)


def parse_search(search: str) -> List[SearchCriterion]:
    """
    Parse a search expression into criteria.

    Args:
        search: A non-empty search expression

    Returns:
        The parsed criteria, in the order they were given

    Raises:
        InvalidSearchError: If any term is malformed
    """
    criteria = []
    for term in search.split(";"):
        if not term.strip():
            raise InvalidSearchError(f"Empty criterion in search '{search}'")
        criteria.append(_parse_criterion(term))
    return criteria


def like_pattern(value: str) -> str:
    """Turn a ``*`` wildcard value into a LIKE pattern escaped with ``\\``."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "%")


def to_condition(criterion: SearchCriterion) -> ColumnElement[bool]:
    """Translate a criterion into a SQLAlchemy filter on ``ActivityRecord``."""
    column = getattr(ActivityRecord, criterion.field)
    value = criterion.value

    if criterion.field == "activity" and "*" in value:
        pattern = like_pattern(value)
        if criterion.operator == "==":
            return column.like(pattern, escape="\\")
        return column.not_like(pattern, escape="\\")

    if criterion.operator == "==":
        return column == value
    if criterion.operator == "!=":
        return column != value
    if criterion.operator == "=gt=":
        return column > value
    if criterion.operator == "=ge=":
        return column >= value
    if criterion.operator == "=lt=":
        return column < value
    return column <= value
