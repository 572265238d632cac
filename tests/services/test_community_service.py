"""Tests for community CRUD helpers."""

from communify.schemas.community import CommunityCreate
from communify.services import community_service
from communify.services.community_service import INVITATION_CODE_ALPHABET


def test_generate_invitation_code_shape() -> None:
    code = community_service.generate_invitation_code(10)

    assert len(code) == 10
    assert set(code) <= set(INVITATION_CODE_ALPHABET)


def test_create_closed_community_gets_code_and_creator(db_session) -> None:
    community = community_service.create_community(
        db_session,
        CommunityCreate(name="Hiking Crew", type="closed"),
        "owner@x.com",
    )

    assert community.invitation_code is not None
    assert len(community.invitation_code) == 8
    assert community.members == ["owner@x.com"]
    assert community.version == 1


def test_create_open_community_has_no_code(db_session) -> None:
    community = community_service.create_community(
        db_session,
        CommunityCreate(name="Street Fair", type="open"),
        "owner@x.com",
    )

    assert community.invitation_code is None
    assert community.members == []


def test_list_open_communities_newest_first_and_limited(db_session, make_community) -> None:
    made = [make_community(type="open", name=f"Open {i}") for i in range(6)]
    make_community(type="closed", name="Hidden")

    listed = community_service.list_open_communities(db_session, limit=4)

    assert [c.id for c in listed] == [c.id for c in reversed(made)][:4]


def test_list_my_communities(db_session, make_community) -> None:
    created = make_community(created_by="alice@x.com", name="Mine")
    joined = make_community(members=["alice@x.com"], name="Joined")
    make_community(members=["bob@x.com"], name="Not mine")
    make_community(type="open", created_by="alice@x.com", name="Open one")

    mine = community_service.list_my_communities(db_session, "alice@x.com")

    assert {c.id for c in mine} == {created.id, joined.id}
