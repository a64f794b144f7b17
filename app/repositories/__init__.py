"""Data access layer."""

from app.repositories.activity_repository import ActivityRepository
from app.repositories.search import SearchCriterion, parse_search

__all__ = ["ActivityRepository", "SearchCriterion", "parse_search"]
