"""Hypermedia link schemas (HAL style)."""

from typing import Dict

from pydantic import BaseModel, Field


class Link(BaseModel):
    """A single navigation link."""
    href: str


class HalModel(BaseModel):
    """Base for every representation that carries ``_links``."""
    links: Dict[str, Link] = Field(default_factory=dict, alias="_links")

    class Config:
        populate_by_name = True

    def add_links(self, links: Dict[str, Link]) -> None:
        """Attach navigation links, replacing any with the same relation."""
        self.links.update(links)

    def get_required_link(self, relation: str) -> Link:
        """Return the link for a relation or raise ``KeyError``."""
        try:
            return self.links[relation]
        except KeyError:
            raise KeyError(f"No link with relation {relation} found") from None


class RootResponse(HalModel):
    """Discovery document served at the API root."""
