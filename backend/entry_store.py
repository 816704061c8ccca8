from datetime import datetime

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from errors import Err, NotFoundError, Ok, StorageError, ValidationError
from models import Entry
from validators import (
    DATE_FORMAT,
    TIME_FORMAT,
    UPDATABLE_FIELDS,
    validate_entry_id,
    validate_entry_type,
    validate_entry_update,
    validate_new_entry,
)


class EntryStore:
    """Data access for the ``entries`` table.

    Every public method returns ``Ok``/``Err``; database failures never
    escape as raw SQLAlchemy exceptions.
    """

    def __init__(self, session, clock=datetime.now):
        self.session = session
        self.clock = clock

    def _storage_failure(self, action, exc, message=None):
        self.session.rollback()
        logger.opt(exception=exc).error("Failed to {}", action)
        return Err(StorageError(message or str(exc) or f"Failed to {action}"))

    def create(self, payload: dict):
        problem = validate_new_entry(payload)
        if problem:
            return Err(ValidationError(problem))

        now = self.clock()
        entry = Entry(
            content=payload["content"],
            date=payload.get("date") or now.strftime(DATE_FORMAT),
            time=payload.get("time") or now.strftime(TIME_FORMAT),
            mood=payload["mood"],
            type=payload["type"],
            created_at=now,
            updated_at=now,
        )
        try:
            self.session.add(entry)
            self.session.commit()
        except SQLAlchemyError as e:
            return self._storage_failure("create entry", e)

        logger.info("Created {} entry {}", entry.type, entry.id)
        return Ok(entry.to_dict())

    def list_by_type(self, entry_type, mood=None, search=None):
        problem = validate_entry_type(entry_type)
        if problem:
            return Err(ValidationError(problem))

        query = Entry.query.filter(Entry.type == entry_type)
        if mood:
            query = query.filter(Entry.mood == mood)
        if search:
            query = query.filter(func.lower(Entry.content).contains(search.lower(), autoescape=True))
        try:
            items = query.order_by(Entry.created_at.desc(), Entry.id.desc()).all()
        except SQLAlchemyError as e:
            return self._storage_failure("fetch entries", e)
        return Ok([it.to_dict() for it in items])

    def list_by_type_since(self, entry_types, since: datetime):
        """Entries of the given types created at or after ``since``, newest first."""
        try:
            items = (
                Entry.query
                .filter(Entry.type.in_(list(entry_types)))
                .filter(Entry.created_at >= since)
                .order_by(Entry.created_at.desc(), Entry.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            return self._storage_failure("fetch entries", e)
        return Ok([it.to_dict() for it in items])

    def update(self, entry_id, fields: dict):
        problem = validate_entry_id(entry_id) or validate_entry_update(fields)
        if problem:
            return Err(ValidationError(problem))

        try:
            entry = self.session.get(Entry, entry_id)
            if entry is None:
                return Err(NotFoundError("Entry not found"))
            for name in UPDATABLE_FIELDS:
                if name in fields:
                    setattr(entry, name, fields[name])
            entry.updated_at = self.clock()
            self.session.commit()
        except SQLAlchemyError as e:
            return self._storage_failure("update entry", e)

        logger.info("Updated entry {}", entry_id)
        return Ok(entry.to_dict())

    def delete_by_id(self, entry_id):
        problem = validate_entry_id(entry_id)
        if problem:
            return Err(ValidationError(problem))

        try:
            entry = self.session.get(Entry, entry_id)
            if entry is None:
                return Err(NotFoundError("Entry not found"))
            # Snapshot before commit expires the instance
            snapshot = entry.to_dict()
            self.session.delete(entry)
            self.session.commit()
        except SQLAlchemyError as e:
            return self._storage_failure("delete entry", e)

        logger.info("Deleted entry {}", entry_id)
        return Ok(snapshot)

    def delete_all_by_type(self, entry_type):
        problem = validate_entry_type(entry_type)
        if problem:
            return Err(ValidationError(problem))

        try:
            removed = Entry.query.filter(Entry.type == entry_type).delete(synchronize_session=False)
            self.session.commit()
        except SQLAlchemyError as e:
            return self._storage_failure(
                f"delete {entry_type} entries", e, message="Failed to delete entries"
            )

        logger.info("Deleted {} {} entries", removed, entry_type)
        return Ok(True)
