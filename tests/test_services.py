"""
Unit tests for the service layer: activity service, mapper, search parsing
and link assembly.

Run with: pytest tests/test_services.py -v
"""

import uuid
from unittest.mock import MagicMock, patch

import pytest

from app.core.exceptions import ActivityNotFoundError, InvalidParticipantError, InvalidSearchError
from app.models.activity import ActivityRecord, ActivityType
from app.models.participant import ParticipantRecord
from app.repositories.activity_repository import ActivityRepository
from app.schemas.activity import ActivityRequest
from app.schemas.links import Link
from app.schemas.page import Page
from app.schemas.participant import ParticipantRequest


# ============================================
# Test Configuration
# ============================================

@pytest.fixture
def activity_request():
    return ActivityRequest(
        activity="Bake pound cake",
        type=ActivityType.COOKING,
        max_participants=2,
        price=0.1,
        accessibility=0.2,
    )


@pytest.fixture
def participant_request():
    return ParticipantRequest(first_name="Grace", last_name="Hopper", email="grace@example.com")


@pytest.fixture
def stored_activity():
    return ActivityRecord(
        id=7,
        alternate_key="0b5e4c1e-6f0e-4c55-9b3a-3c8f1f0a9d11",
        activity="Bake pound cake",
        type=ActivityType.COOKING,
        max_participants=2,
        price=0.1,
        accessibility=0.2,
    )


@pytest.fixture
def repository():
    """Repository double; every async method becomes an AsyncMock."""
    repository = MagicMock(spec=ActivityRepository)
    repository.save.side_effect = lambda record: record
    repository.save_participant.side_effect = lambda record: record
    return repository


@pytest.fixture
def service(repository):
    from app.services.activity_service import ActivityService

    return ActivityService(repository)


# ============================================
# ActivityService Tests
# ============================================

class TestActivityService:
    """Tests for ActivityService."""

    def test_each_service_gets_its_own_mapper(self, repository):
        from app.services.activity_service import ActivityService

        first = ActivityService(repository)
        second = ActivityService(repository)

        assert first.activity_mapper is not second.activity_mapper

    @pytest.mark.asyncio
    async def test_new_activity_assigns_fresh_alternate_key(self, service, repository, activity_request):
        """Every created activity gets its own UUID key."""
        first = await service.new_activity(activity_request)
        second = await service.new_activity(activity_request)

        assert first.alternate_key != second.alternate_key
        assert str(uuid.UUID(first.alternate_key)) == first.alternate_key
        assert repository.save.await_count == 2

    @pytest.mark.asyncio
    async def test_new_activity_maps_request_fields(self, service, activity_request):
        activity = await service.new_activity(activity_request)

        assert activity.activity == "Bake pound cake"
        assert activity.type == ActivityType.COOKING
        assert activity.max_participants == 2
        assert activity.links == {}

    @pytest.mark.asyncio
    async def test_update_activity_forces_given_key(self, service, repository, activity_request):
        """Update stores the request under the caller's key."""
        activity = await service.update_activity("my-key", activity_request)

        saved_record = repository.save.await_args.args[0]
        assert saved_record.alternate_key == "my-key"
        assert activity.alternate_key == "my-key"

    @pytest.mark.asyncio
    async def test_get_activity_by_returns_none_when_absent(self, service, repository):
        repository.get_by.return_value = None

        assert await service.get_activity_by("missing") is None

    @pytest.mark.asyncio
    async def test_get_activity_by_maps_record(self, service, repository, stored_activity):
        repository.get_by.return_value = stored_activity

        activity = await service.get_activity_by(stored_activity.alternate_key)

        assert activity is not None
        assert activity.alternate_key == stored_activity.alternate_key

    @pytest.mark.asyncio
    async def test_get_activities_passes_search_and_paging(self, service, repository, stored_activity):
        repository.get_all.return_value = Page(content=[stored_activity], number=1, size=3, total_elements=4)
        criteria = [MagicMock()]

        activities = await service.get_activities(criteria, 1, 3)

        repository.get_all.assert_awaited_once_with(1, 3, criteria)
        assert activities.total_elements == 4
        assert activities.content[0].alternate_key == stored_activity.alternate_key

    @pytest.mark.asyncio
    async def test_delete_activity(self, service, repository):
        """Delete reports whether a record was removed."""
        repository.delete.return_value = 1
        assert await service.delete_activity("key") is True

        repository.delete.return_value = 0
        assert await service.delete_activity("key") is False

    @pytest.mark.asyncio
    async def test_new_participant_for_unknown_activity(self, service, repository, participant_request):
        repository.get_by.return_value = None

        with pytest.raises(ActivityNotFoundError) as exc_info:
            await service.new_participant("missing", participant_request)

        assert "missing" in str(exc_info.value)
        repository.save_participant.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_participant_duplicate_email(self, service, repository, stored_activity, participant_request):
        repository.get_by.return_value = stored_activity
        repository.has_participant_email.return_value = True

        with pytest.raises(InvalidParticipantError):
            await service.new_participant(stored_activity.alternate_key, participant_request)

        repository.save_participant.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_participant_activity_full(self, service, repository, stored_activity, participant_request):
        repository.get_by.return_value = stored_activity
        repository.has_participant_email.return_value = False
        repository.count_participants.return_value = 2

        with pytest.raises(InvalidParticipantError) as exc_info:
            await service.new_participant(stored_activity.alternate_key, participant_request)

        assert "maximum of 2" in str(exc_info.value)
        repository.save_participant.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_participant(self, service, repository, stored_activity, participant_request):
        repository.get_by.return_value = stored_activity
        repository.has_participant_email.return_value = False
        repository.count_participants.return_value = 1

        participant = await service.new_participant(stored_activity.alternate_key, participant_request)

        saved_record = repository.save_participant.await_args.args[0]
        assert saved_record.activity_id == stored_activity.id
        assert participant.activity_alternate_key == stored_activity.alternate_key
        assert participant.alternate_key == saved_record.alternate_key
        assert participant.email == "grace@example.com"

    @pytest.mark.asyncio
    async def test_get_participants_scoped_to_activity(self, service, repository):
        record = ParticipantRecord(alternate_key="p-1", activity_id=7, first_name="A", last_name="B", email="a@b.io")
        repository.get_participants.return_value = Page(content=[record], number=0, size=5, total_elements=1)

        participants = await service.get_activity_participants("act-1", 0, 5)

        assert [p.activity_alternate_key for p in participants.content] == ["act-1"]


# ============================================
# ActivityMapper Tests
# ============================================

class TestActivityMapper:
    """Tests for ActivityMapper."""

    def test_request_to_record_leaves_key_unset(self, activity_request):
        from app.services.activity_mapper import ActivityMapper

        record = ActivityMapper.to_activity_record(activity_request)

        assert record.alternate_key is None
        assert record.price == 0.1

    def test_record_to_response(self, stored_activity):
        from app.services.activity_mapper import ActivityMapper

        activity = ActivityMapper.to_activity_response(stored_activity)

        assert activity.alternate_key == stored_activity.alternate_key
        assert activity.accessibility == 0.2


# ============================================
# Search Tests
# ============================================

class TestSearch:
    """Tests for search expression parsing."""

    def test_single_criterion(self):
        from app.repositories.search import parse_search

        criteria = parse_search("type==busywork")

        assert len(criteria) == 1
        assert criteria[0].field == "type"
        assert criteria[0].operator == "=="
        assert criteria[0].value == ActivityType.BUSYWORK

    def test_multiple_criteria_are_converted(self):
        from app.repositories.search import parse_search

        criteria = parse_search("price=le=0.5;max_participants=gt=1")

        assert [(c.field, c.operator, c.value) for c in criteria] == [
            ("price", "=le=", 0.5),
            ("max_participants", "=gt=", 1),
        ]

    @pytest.mark.parametrize(
        "search",
        [
            "type",
            "type==",
            "colour==red",
            "type==unknown",
            "price==cheap",
            "activity=gt=a",
            "type==social;",
            "max_participants==99999999999999999999999",
            "max_participants=lt=-99999999999999999999999",
        ],
    )
    def test_invalid_search(self, search):
        from app.repositories.search import parse_search

        with pytest.raises(InvalidSearchError):
            parse_search(search)

    def test_integer_bounds_are_accepted(self):
        from app.repositories.search import MAX_INTEGER, parse_search

        criteria = parse_search(f"max_participants=le={MAX_INTEGER}")

        assert criteria[0].value == MAX_INTEGER

    @pytest.mark.parametrize(
        "value,pattern",
        [
            ("*guitar*", "%guitar%"),
            ("*50_of*", "%50\\_of%"),
            ("100%*", "100\\%%"),
            ("back\\slash*", "back\\\\slash%"),
        ],
    )
    def test_like_pattern_escapes_sql_wildcards(self, value, pattern):
        from app.repositories.search import like_pattern

        assert like_pattern(value) == pattern


# ============================================
# Relation (link assembly) Tests
# ============================================

class TestRelationService:
    """Tests for link assembly."""

    @pytest.fixture
    def routes(self):
        from app.services.relation_service import RouteTable

        return RouteTable(base_url="http://api.local", prefix="/api/v1")

    def test_activity_links(self, routes):
        from app.services.relation_service import activity_links

        links = activity_links("abc", routes)

        assert set(links) == {"self", "participants", "activities"}
        assert links["self"].href == "http://api.local/api/v1/activities/abc"
        assert links["participants"].href == "http://api.local/api/v1/activities/abc/participants"
        assert links["activities"].href == "http://api.local/api/v1/activities"

    def test_participant_links(self, routes):
        from app.services.relation_service import participant_links

        links = participant_links("abc", "p1", routes)

        assert set(links) == {"self", "activity", "activities"}
        assert links["self"].href == "http://api.local/api/v1/activities/abc/participants/p1"
        assert links["activity"].href == "http://api.local/api/v1/activities/abc"

    def test_root_links(self, routes):
        from app.services.relation_service import root_links

        assert root_links(routes) == {"activities": Link(href="http://api.local/api/v1/activities")}

    def test_keys_are_escaped(self, routes):
        from app.services.relation_service import activity_links

        assert activity_links("a/b c", routes)["self"].href.endswith("/activities/a%2Fb%20c")

    def test_paged_links_middle_page(self):
        from app.services.relation_service import paged_links

        page = Page(content=[1, 2], number=1, size=2, total_elements=6)
        links = paged_links("http://api.local/items", page, {"search": "type==social"})

        assert set(links) == {"first", "prev", "self", "next", "last"}
        assert links["prev"].href == "http://api.local/items?search=type%3D%3Dsocial&page=0&size=2"
        assert links["next"].href.endswith("page=2&size=2")
        assert links["last"].href.endswith("page=2&size=2")

    def test_paged_links_single_page(self):
        from app.services.relation_service import paged_links

        page = Page(content=[1], number=0, size=5, total_elements=1)
        links = paged_links("http://api.local/items", page)

        assert set(links) == {"first", "self", "last"}

    def test_to_paged_model(self):
        from app.services.relation_service import to_paged_model

        page = Page(content=[], number=0, size=5, total_elements=0)
        model = to_paged_model(page, "activities", "http://api.local/items")
        body = model.model_dump(by_alias=True)

        assert body["_embedded"] == {"activities": []}
        assert body["page"] == {"size": 5, "total_elements": 0, "total_pages": 0, "number": 0}

    def test_convert_to_uri(self):
        from app.services.relation_service import convert_to_uri

        assert convert_to_uri(Link(href="http://api.local/api/v1/activities/x")) == "http://api.local/api/v1/activities/x"
        assert convert_to_uri(Link(href="not a uri")) is None

    def test_convert_to_uri_logs_failure(self):
        from app.services import relation_service

        with patch.object(relation_service, "logger") as mock_logger:
            relation_service.convert_to_uri(Link(href="::"))

        mock_logger.warning.assert_called_once()
