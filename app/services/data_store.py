import logging
from typing import Any, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.constants import TABLE_PRODUCTS, TABLE_SALES
from app.core.dates import utc_now
from app.core.errors import AppException, ErrorType
from app.models.product import Product
from app.models.sale import Sale

logger = logging.getLogger(__name__)

TABLE_MODELS = {
    TABLE_PRODUCTS: Product,
    TABLE_SALES: Sale,
}

_READ_ONLY_COLUMNS = {"id", "created_at", "updated_at"}


def _model_for(table: str):
    model = TABLE_MODELS.get(table)
    if model is None:
        raise ValueError("Unknown table: {}".format(table))
    return model


def _column(model, name: str):
    if name not in model.__table__.columns:
        raise ValueError("Unknown column {}.{}".format(model.__tablename__, name))
    return getattr(model, name)


def _apply_filters(stmt, model, filters: Optional[Mapping[str, Any]]):
    if not filters:
        return stmt
    for name, value in filters.items():
        stmt = stmt.where(_column(model, name) == value)
    return stmt


def _writable_values(model, values: Mapping[str, Any]) -> dict:
    cleaned = {}
    for name, value in values.items():
        if name in _READ_ONLY_COLUMNS:
            continue
        _column(model, name)
        cleaned[name] = value
    return cleaned


class DataStore:
    """Table-level access to products and sales.

    Every write is a single commit. Database errors are rolled back and
    reported as ``STORE_FAILURE``; nothing is retried.
    """

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, table: str) -> AppException:
        self.db.rollback()
        logger.exception(
            "Data store %s failed on %s.",
            action,
            table,
            extra={"table": table, "error_type": ErrorType.STORE_FAILURE.value},
        )
        return AppException(
            ErrorType.STORE_FAILURE,
            "Could not {} {}. Please try again.".format(action, table),
        )

    def list(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list:
        model = _model_for(table)
        stmt = _apply_filters(select(model), model, filters)
        if order_by:
            column = _column(model, order_by)
            # id breaks ties so equal dates/names keep a stable order
            if descending:
                stmt = stmt.order_by(column.desc(), model.id.desc())
            else:
                stmt = stmt.order_by(column.asc(), model.id.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            return list(self.db.execute(stmt).unique().scalars().all())
        except SQLAlchemyError as exc:
            raise self._fail("list", table) from exc

    def get(self, table: str, row_id: int):
        model = _model_for(table)
        try:
            return self.db.get(model, row_id)
        except SQLAlchemyError as exc:
            raise self._fail("load", table) from exc

    def count(self, table: str, filters: Optional[Mapping[str, Any]] = None) -> int:
        model = _model_for(table)
        stmt = _apply_filters(select(func.count()).select_from(model), model, filters)
        try:
            return int(self.db.execute(stmt).scalar_one())
        except SQLAlchemyError as exc:
            raise self._fail("count", table) from exc

    def insert(self, table: str, values: Mapping[str, Any]):
        model = _model_for(table)
        row = model(**_writable_values(model, values))
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            raise self._fail("insert into", table) from exc
        logger.info("Inserted %s id=%s", table, row.id, extra={"table": table, "row_id": row.id})
        return row

    def update(self, table: str, row_id: int, values: Mapping[str, Any]):
        row = self._require(table, row_id)
        for name, value in _writable_values(type(row), values).items():
            setattr(row, name, value)
        row.updated_at = utc_now()
        try:
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            raise self._fail("update", table) from exc
        logger.info("Updated %s id=%s", table, row_id, extra={"table": table, "row_id": row_id})
        return row

    def delete(self, table: str, row_id: int) -> None:
        row = self._require(table, row_id)
        try:
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete from", table) from exc
        logger.info("Deleted %s id=%s", table, row_id, extra={"table": table, "row_id": row_id})

    def _require(self, table: str, row_id: int):
        row = self.get(table, row_id)
        if row is None:
            raise AppException(
                ErrorType.NOT_FOUND,
                "{} {} not found.".format(_model_for(table).__name__, row_id),
            )
        return row


__all__ = ["DataStore", "TABLE_MODELS"]
