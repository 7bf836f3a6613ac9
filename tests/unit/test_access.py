"""Tests for the owner/member authorization model."""

from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.taskboard.models import Project
from src.taskboard.services.access import AccessLevel, ProjectAccess, resolve_access

pytestmark = pytest.mark.unit


def _access(owner_id, member_ids=()):
    project = Project(name="Roadmap", owner_id=owner_id)
    return ProjectAccess(project=project, member_ids=tuple(member_ids))


class TestResolveAccess:
    def test_owner(self):
        owner = uuid4()
        assert resolve_access(owner, [], owner) is AccessLevel.OWNER

    def test_member(self):
        owner, member = uuid4(), uuid4()
        assert resolve_access(owner, [member], member) is AccessLevel.MEMBER

    def test_stranger(self):
        assert resolve_access(uuid4(), [uuid4()], uuid4()) is AccessLevel.NONE

    def test_owner_listed_as_member_is_still_owner(self):
        owner = uuid4()
        assert resolve_access(owner, [owner], owner) is AccessLevel.OWNER


class TestProjectAccess:
    def test_owner_can_access_and_manage(self):
        owner = uuid4()
        access = _access(owner)
        assert access.can_access(owner)
        assert access.can_manage(owner)

    def test_member_can_access_but_not_manage(self):
        owner, member = uuid4(), uuid4()
        access = _access(owner, [member])
        assert access.can_access(member)
        assert not access.can_manage(member)

    def test_stranger_has_no_access(self):
        access = _access(uuid4(), [uuid4()])
        stranger = uuid4()
        assert not access.can_access(stranger)
        assert not access.can_manage(stranger)


@given(members=st.lists(st.uuids(), max_size=5), user=st.uuids())
def test_manage_implies_access(members, user):
    """Whoever may manage a project may also access it."""
    access = _access(uuid4(), members)
    if access.can_manage(user):
        assert access.can_access(user)
    assert access.can_access(user) == (user in members)
