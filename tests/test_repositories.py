from datetime import date, datetime, timezone

import pytest
import pytz
from sqlalchemy import text

from ticketstream.config import Settings

from ticketstream.domain import lifecycle
from ticketstream.domain.enums import DemandeStatus, SortOrder, UserRole
from ticketstream.domain.models.commentaire import Commentaire
from ticketstream.domain.models.demande import Demande
from ticketstream.domain.models.user import User
from ticketstream.domain.schemas.auth import UserFilter
from ticketstream.domain.schemas.demande import DemandeFilter
from ticketstream.application.services.auth_service import claim_for
from ticketstream.infrastructure.repositories.commentaire_repository import SQLAlchemyCommentaireRepository
from ticketstream.infrastructure.repositories import demande_repository
from ticketstream.infrastructure.repositories.demande_repository import SQLAlchemyDemandeRepository, day_bounds
from ticketstream.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


@pytest.fixture
def users(db_session):
    return SQLAlchemyUserRepository(db_session, User)


@pytest.fixture
def demandes(db_session):
    return SQLAlchemyDemandeRepository(db_session, Demande)


@pytest.fixture
def commentaires(db_session):
    return SQLAlchemyCommentaireRepository(db_session, Commentaire)


def at(day, hour=12, minute=0):
    return datetime(2024, 3, day, hour, minute, tzinfo=timezone.utc)


def open_demande(repo, owner, title, created_at):
    return repo.add(lifecycle.new_demande(claim_for(owner), title=title, description="...", now=created_at))


def titles(records):
    return [r.title for r in records]


def test_timezone_defaults_to_utc(monkeypatch):
    monkeypatch.delenv("TIMEZONE", raising=False)

    assert Settings(_env_file=None).TIMEZONE == "UTC"


def test_day_bounds_cover_the_utc_day():
    start, end = day_bounds(date(2024, 1, 15))

    assert start == datetime(2024, 1, 15, 0, 0, tzinfo=timezone.utc)
    assert end == datetime(2024, 1, 16, 0, 0, tzinfo=timezone.utc)


def test_day_bounds_follow_configured_timezone(monkeypatch):
    monkeypatch.setattr(demande_repository, "tz", pytz.timezone("Europe/Paris"))

    # Paris is UTC+1 in winter
    start, end = day_bounds(date(2024, 1, 15))

    assert start == datetime(2024, 1, 14, 23, 0, tzinfo=timezone.utc)
    assert end == datetime(2024, 1, 15, 23, 0, tzinfo=timezone.utc)


def test_regular_user_sees_only_own_demandes(demandes, alice, bob):
    open_demande(demandes, alice, "Alice 1", at(1))
    open_demande(demandes, bob, "Bob 1", at(2))

    listed = demandes.list_visible(claim_for(alice), DemandeFilter())

    assert titles(listed) == ["Alice 1"]


def test_agent_sees_everything_newest_first(demandes, alice, bob, agent):
    open_demande(demandes, alice, "Old", at(1))
    open_demande(demandes, bob, "Middle", at(2))
    open_demande(demandes, alice, "New", at(3))

    assert titles(demandes.list_visible(claim_for(agent), DemandeFilter())) == ["New", "Middle", "Old"]
    assert titles(
        demandes.list_visible(claim_for(agent), DemandeFilter(tri=SortOrder.OLDEST))
    ) == ["Old", "Middle", "New"]


def test_soft_deleted_demandes_are_hidden(demandes, alice, agent):
    kept = open_demande(demandes, alice, "Kept", at(1))
    gone = open_demande(demandes, alice, "Gone", at(2))

    lifecycle.soft_delete(gone, claim_for(agent), label="Demande")
    demandes.save(gone)

    assert titles(demandes.list_visible(claim_for(agent), DemandeFilter())) == ["Kept"]
    assert demandes.get_active(gone.id) is None
    assert demandes.get_active(kept.id) is not None


def test_status_filter_applies_to_everyone(demandes, alice, agent):
    done = open_demande(demandes, alice, "Done", at(1))
    open_demande(demandes, alice, "Pending", at(2))
    done.status = DemandeStatus.DONE
    demandes.save(done)

    only_done = DemandeFilter(status=DemandeStatus.DONE)

    assert titles(demandes.list_visible(claim_for(alice), only_done)) == ["Done"]
    assert titles(demandes.list_visible(claim_for(agent), only_done)) == ["Done"]


def test_status_is_stored_as_label(db_session, demandes, alice):
    created = open_demande(demandes, alice, "Label", at(1))

    stored = db_session.execute(
        text("SELECT status FROM demandes WHERE title = 'Label'")
    ).scalar_one()

    assert stored == "En attente"
    assert created.status == DemandeStatus.PENDING


def test_assignment_filters_for_agents(demandes, alice, agent, other_agent):
    mine = open_demande(demandes, alice, "Mine", at(1))
    theirs = open_demande(demandes, alice, "Theirs", at(2))
    open_demande(demandes, alice, "Nobody", at(3))

    mine.assigned_agent_id = agent.id
    theirs.assigned_agent_id = other_agent.id
    demandes.save(mine)
    demandes.save(theirs)

    actor = claim_for(agent)

    assert titles(demandes.list_visible(actor, DemandeFilter(assigned_agent_id=agent.id))) == ["Mine"]
    assert titles(demandes.list_visible(actor, DemandeFilter(is_assigned=True))) == ["Theirs", "Mine"]
    assert titles(demandes.list_visible(actor, DemandeFilter(is_assigned=False))) == ["Nobody"]
    # an explicit agent wins over the boolean
    assert titles(
        demandes.list_visible(actor, DemandeFilter(assigned_agent_id=agent.id, is_assigned=False))
    ) == ["Mine"]


def test_agent_only_filters_are_ignored_for_regular_users(demandes, alice, agent):
    assigned = open_demande(demandes, alice, "Assigned", at(1))
    open_demande(demandes, alice, "Unassigned", at(2))
    assigned.assigned_agent_id = agent.id
    demandes.save(assigned)

    listed = demandes.list_visible(
        claim_for(alice), DemandeFilter(is_assigned=True, created_on=date(2030, 1, 1))
    )

    assert titles(listed) == ["Unassigned", "Assigned"]


def test_created_on_matches_the_utc_calendar_day(demandes, alice, agent):
    open_demande(demandes, alice, "Late evening", at(10, 23, 30))
    open_demande(demandes, alice, "Morning", at(10, 9))
    open_demande(demandes, alice, "Just after midnight", at(11, 0, 30))

    actor = claim_for(agent)

    assert titles(demandes.list_visible(actor, DemandeFilter(created_on=date(2024, 3, 10)))) == [
        "Late evening",
        "Morning",
    ]
    assert titles(demandes.list_visible(actor, DemandeFilter(created_on=date(2024, 3, 11)))) == [
        "Just after midnight"
    ]


def test_commentaires_scoped_through_parent_and_oldest_first(demandes, commentaires, alice, bob, agent):
    alices = open_demande(demandes, alice, "Alice", at(1))
    bobs = open_demande(demandes, bob, "Bob", at(1))

    commentaires.add(lifecycle.new_commentaire(claim_for(agent), alices, content="second", now=at(3)))
    commentaires.add(lifecycle.new_commentaire(claim_for(alice), alices, content="first", now=at(2)))
    commentaires.add(lifecycle.new_commentaire(claim_for(bob), bobs, content="bob's", now=at(2)))

    assert [c.content for c in commentaires.list_visible(claim_for(alice))] == ["first", "second"]
    assert len(commentaires.list_visible(claim_for(agent))) == 3
    assert [c.content for c in commentaires.list_visible(claim_for(agent), bobs.id)] == ["bob's"]


def test_commentaires_survive_parent_deletion(demandes, commentaires, alice, agent):
    parent = open_demande(demandes, alice, "Parent", at(1))
    commentaires.add(lifecycle.new_commentaire(claim_for(alice), parent, content="still here", now=at(2)))

    lifecycle.soft_delete(parent, claim_for(agent), label="Demande")
    demandes.save(parent)

    assert [c.content for c in commentaires.list_visible(claim_for(agent), parent.id)] == ["still here"]


def test_user_lookup_by_email_is_case_insensitive(users, alice):
    assert users.get_by_email("ALICE@Example.com").id == alice.id
    assert users.get_by_email("nobody@example.com") is None


def test_user_listing_filters_and_order(users, alice, bob, agent):
    bob.is_active = False
    users.save(bob)

    assert [u.name for u in users.list_with_filters(UserFilter())] == ["Agent Smith", "Alice", "Bob"]
    assert [u.name for u in users.list_with_filters(UserFilter(active=False))] == ["Bob"]
    assert [u.name for u in users.list_with_filters(UserFilter(role=UserRole.AGENT))] == ["Agent Smith"]
    assert [u.name for u in users.list_with_filters(UserFilter(email="EXAMPLE.COM"))] == [
        "Agent Smith",
        "Alice",
        "Bob",
    ]
    assert [u.name for u in users.list_with_filters(UserFilter(email="ali"))] == ["Alice"]
