"""Paging primitives shared by the repository, service and HTTP layers."""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, TypeVar

from pydantic import BaseModel, Field

from app.schemas.links import Link

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class Page(Generic[T]):
    """A bounded slice of a larger result set. ``number`` is 0-based."""
    content: List[T]
    number: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_empty(self) -> bool:
        return not self.content

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        """Return a page with ``fn`` applied to every element."""
        return Page(
            content=[fn(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
        )


class PageMetadata(BaseModel):
    """Schema for the ``page`` block of a paged collection."""
    size: int
    total_elements: int
    total_pages: int
    number: int


class PagedModel(BaseModel, Generic[T]):
    """Schema for a paged HAL collection."""
    embedded: Dict[str, List[T]] = Field(alias="_embedded")
    links: Dict[str, Link] = Field(default_factory=dict, alias="_links")
    page: PageMetadata

    class Config:
        populate_by_name = True
