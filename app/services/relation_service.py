"""
Hypermedia link assembly.

Links are computed from route templates every time a representation is
returned; they are never stored. All functions here are pure: they take
the resource identifiers and a ``RouteTable`` and return links.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import quote, urlencode

from pydantic import AnyUrl, TypeAdapter, ValidationError

from app.schemas.links import HalModel, Link
from app.schemas.page import Page, PageMetadata, PagedModel

logger = logging.getLogger(__name__)

RELATION_SELF = "self"
RELATION_ACTIVITIES = "activities"
RELATION_ACTIVITY = "activity"
RELATION_PARTICIPANTS = "participants"

# Route templates, relative to the API prefix
ACTIVITIES_ROUTE = "/activities"
ACTIVITY_ROUTE = "/activities/{alternate_key}"
PARTICIPANTS_ROUTE = "/activities/{alternate_key}/participants"
PARTICIPANT_ROUTE = "/activities/{alternate_key}/participants/{participant_key}"

_uri_adapter = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class RouteTable:
    """Where the API is mounted: absolute base URL plus the version prefix."""
    base_url: str
    prefix: str = "/api/v1"

    def href(self, template: str, **params: str) -> str:
        """Expand a route template into an absolute URL."""
        path = template.format(**{name: quote(str(value), safe="") for name, value in params.items()})
        return f"{self.base_url.rstrip('/')}{self.prefix}{path}"


def root_links(routes: RouteTable) -> Dict[str, Link]:
    return {RELATION_ACTIVITIES: Link(href=routes.href(ACTIVITIES_ROUTE))}


def activity_links(alternate_key: str, routes: RouteTable) -> Dict[str, Link]:
    """Links for an activity: itself, its participants and the collection."""
    return {
        RELATION_SELF: Link(href=routes.href(ACTIVITY_ROUTE, alternate_key=alternate_key)),
        RELATION_PARTICIPANTS: Link(href=routes.href(PARTICIPANTS_ROUTE, alternate_key=alternate_key)),
        RELATION_ACTIVITIES: Link(href=routes.href(ACTIVITIES_ROUTE)),
    }


def participant_links(
    alternate_key: str,
    participant_key: str,
    routes: RouteTable,
) -> Dict[str, Link]:
    """Links for a participant: itself, its activity and the activity collection."""
    return {
        RELATION_SELF: Link(
            href=routes.href(PARTICIPANT_ROUTE, alternate_key=alternate_key, participant_key=participant_key)
        ),
        RELATION_ACTIVITY: Link(href=routes.href(ACTIVITY_ROUTE, alternate_key=alternate_key)),
        RELATION_ACTIVITIES: Link(href=routes.href(ACTIVITIES_ROUTE)),
    }


def _page_href(href: str, number: int, size: int, query: Dict[str, str]) -> str:
    params = dict(query)
    params["page"] = str(number)
    params["size"] = str(size)
    return f"{href}?{urlencode(params)}"


def paged_links(
    href: str,
    page: Page,
    query: Optional[Dict[str, str]] = None,
) -> Dict[str, Link]:
    """
    Navigation links for a page of a collection.

    ``self``, ``first`` and ``last`` are always present, ``prev`` and
    ``next`` only when such a page exists. ``query`` carries extra query
    parameters (e.g. the search) onto every link.
    """
    query = query or {}
    last_number = max(page.total_pages - 1, 0)

    links = {
        "first": Link(href=_page_href(href, 0, page.size, query)),
    }
    if page.has_previous:
        links["prev"] = Link(href=_page_href(href, page.number - 1, page.size, query))
    links[RELATION_SELF] = Link(href=_page_href(href, page.number, page.size, query))
    if page.has_next:
        links["next"] = Link(href=_page_href(href, page.number + 1, page.size, query))
    links["last"] = Link(href=_page_href(href, last_number, page.size, query))
    return links


def to_paged_model(
    page: Page[HalModel],
    relation: str,
    href: str,
    query: Optional[Dict[str, str]] = None,
) -> PagedModel:
    """Wrap a page of representations into a HAL collection document."""
    return PagedModel(
        embedded={relation: page.content},
        links=paged_links(href, page, query),
        page=PageMetadata(
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            number=page.number,
        ),
    )


def convert_to_uri(link: Link) -> Optional[str]:
    """Return the link target as an absolute URI, or None if it is not one."""
    try:
        _uri_adapter.validate_python(link.href)
    except ValidationError:
        logger.warning(f"Link target {link.href!r} is not a valid URI")
        return None
    return link.href
