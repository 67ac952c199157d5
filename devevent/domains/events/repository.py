"""Event persistence (repository pattern).

Exposes the five operations the event service relies on: find with filter and
sort, find one by field, create, save in place and delete one. Database
failures surface as infrastructure errors; a unique-constraint race on the
slug surfaces as a conflict.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from devevent.core.database import connect
from devevent.domains.events.models import Event
from devevent.errors import ConflictError, InfrastructureError
from devevent.extensions import db

logger = logging.getLogger(__name__)

NEWEST_FIRST = (Event.created_at.desc(), Event.id.desc())


class EventRepository:
    def _session(self):
        connect()
        return db.session

    def find(self, criterion=None, order_by=NEWEST_FIRST) -> List[Event]:
        session = self._session()
        try:
            query = session.query(Event)
            if criterion is not None:
                query = query.filter(criterion)
            return query.order_by(*order_by).all()
        except SQLAlchemyError as exc:
            logger.exception("Event query failed")
            raise InfrastructureError("Event fetching failed") from exc

    def find_one(self, **fields) -> Optional[Event]:
        session = self._session()
        try:
            return session.query(Event).filter_by(**fields).first()
        except SQLAlchemyError as exc:
            logger.exception("Event lookup failed for %s", fields)
            raise InfrastructureError("Event fetching failed") from exc

    def create(self, event: Event) -> Event:
        session = self._session()
        session.add(event)
        self._commit(event, "Event creation failed")
        return event

    def save(self, event: Event) -> Event:
        self._session()
        self._commit(event, "Event update failed")
        return event

    def delete(self, event: Event) -> None:
        session = self._session()
        session.delete(event)
        self._commit(event, "Event deletion failed")

    def _commit(self, event: Event, failure_message: str) -> None:
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            logger.warning("Integrity error while saving event %s: %s", event.slug, exc.orig)
            raise ConflictError(f"An event with slug '{event.slug}' already exists") from exc
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("%s (slug=%s)", failure_message, event.slug)
            raise InfrastructureError(failure_message) from exc
