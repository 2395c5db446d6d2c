"""
Shared plumbing for the persistence gateway.

Each gateway operation checks out one session, runs one statement (plus a
commit for mutations) and returns a tagged result. Versioned writes are a
single conditional UPDATE; a row count other than one means the row is
missing, deleted, owned by another tenant or was modified since it was read.
"""

import json
from typing import Callable, Optional
from sqlalchemy import update, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from inventory_service.core.logging_config import get_logger
from inventory_service.domain.results import (
    Failure, Ok, Result, execution_failed, invalid, missing, not_found, read_failed,
)

logger = get_logger(__name__)

def live_rows(model, mservice_id: int) -> tuple:
    """Tenant and not-deleted predicates. Every query starts from these."""
    return (model.mservice_id == mservice_id, model.is_deleted.is_(False))

def require_text(field: str, value: str) -> Optional[Failure]:
    if not value or not value.strip():
        return missing(field)
    return None

def require_json(field: str, value: str) -> Optional[Failure]:
    """Blank is allowed; anything else must parse as JSON."""
    if not value or not value.strip():
        return None
    try:
        json.loads(value)
    except ValueError:
        return invalid(field)
    return None

def first_failure(*checks: Optional[Failure]) -> Optional[Failure]:
    for check in checks:
        if check is not None:
            return check
    return None

def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)

class GatewayBase:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _insert(self, operation: str, row, key: Callable = lambda row: None) -> Result:
        """Add ``row`` and commit; the result carries ``key(row)``, read before the session closes."""
        with self.session_factory() as session:
            try:
                session.add(row)
                session.commit()
                return Ok(key(row))
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"{operation} insert failed: {_driver_message(e)}")
                return execution_failed(_driver_message(e))

    def _versioned_update(self, operation: str, model, mservice_id: int, keys: tuple,
                          version: int, **values) -> Result:
        stmt = (
            update(model)
            .where(*live_rows(model, mservice_id), *keys, model.version == version)
            .values(version=model.version + 1, **values)
            .execution_options(synchronize_session=False)
        )
        with self.session_factory() as session:
            try:
                result = session.execute(stmt)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"{operation} update failed: {_driver_message(e)}")
                return execution_failed(_driver_message(e))
        if result.rowcount != 1:
            return not_found()
        return Ok(version + 1)

    def _modify(self, operation: str, model, mservice_id: int, keys: tuple,
                version: int, **values) -> Result:
        return self._versioned_update(operation, model, mservice_id, keys, version,
                                      modified=func.now(), **values)

    def _soft_delete(self, operation: str, model, mservice_id: int, keys: tuple,
                     version: int) -> Result:
        return self._versioned_update(operation, model, mservice_id, keys, version,
                                      is_deleted=True, deleted=func.now())

    def _fetch_one(self, operation: str, stmt, convert: Callable) -> Result:
        with self.session_factory() as session:
            try:
                row = session.execute(stmt).first()
                if row is None:
                    return not_found()
                return Ok(convert(row))
            except SQLAlchemyError as e:
                logger.error(f"{operation} query failed: {_driver_message(e)}")
                return read_failed(_driver_message(e))

    def _fetch_all(self, operation: str, stmt, convert: Callable) -> Result:
        with self.session_factory() as session:
            try:
                return Ok([convert(row) for row in session.execute(stmt)])
            except SQLAlchemyError as e:
                logger.error(f"{operation} query failed: {_driver_message(e)}")
                return read_failed(_driver_message(e))

def entity(model_cls) -> Callable:
    """Converter for single-entity rows: ``select(Model)`` yields one-tuples."""
    return lambda row: model_cls.model_validate(row[0])
