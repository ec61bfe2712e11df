"""
SQLAlchemy Implementation of Demande Repository.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Tuple

import pytz

from ticketstream.config import get_settings
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.enums import SortOrder
from ticketstream.domain.models.demande import Demande
from ticketstream.domain.repositories.demande_repository import DemandeRepository
from ticketstream.domain.schemas.demande import DemandeFilter
from ticketstream.infrastructure.repositories.base_repository import SQLAlchemySoftDeleteRepository

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """UTC [start, end) of a calendar day in the configured timezone."""
    start = tz.localize(datetime.combine(day, time.min))
    end = tz.localize(datetime.combine(day + timedelta(days=1), time.min))
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


class SQLAlchemyDemandeRepository(SQLAlchemySoftDeleteRepository[Demande], DemandeRepository):
    """Demande repository implementation using SQLAlchemy."""

    def list_visible(self, actor: IdentityClaim, filters: DemandeFilter) -> List[Demande]:
        query = self.active_query()

        if not actor.is_agent:
            query = query.filter(Demande.creator_id == actor.user_id)

        if filters.status is not None:
            query = query.filter(Demande.status == filters.status)

        # Agent-only filters
        if actor.is_agent:
            # An explicit agent wins over the assigned/unassigned flag
            if filters.assigned_agent_id is not None:
                query = query.filter(Demande.assigned_agent_id == filters.assigned_agent_id)
            elif filters.is_assigned is not None:
                if filters.is_assigned:
                    query = query.filter(Demande.assigned_agent_id.isnot(None))
                else:
                    query = query.filter(Demande.assigned_agent_id.is_(None))

            if filters.created_on is not None:
                start, end = day_bounds(filters.created_on)
                query = query.filter(Demande.created_at >= start, Demande.created_at < end)

        if filters.tri == SortOrder.OLDEST:
            query = query.order_by(Demande.created_at.asc())
        else:
            query = query.order_by(Demande.created_at.desc())

        return query.all()
