from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session

from blogfolio.extensions import db
from blogfolio.models.category import Category
from blogfolio.repositories.base import CategoryRow, StoreError


def _store_message(exc: SQLAlchemyError) -> str:
    # DBAPI errors carry the driver's message on .orig
    return str(getattr(exc, "orig", None) or exc)


class SqlCategoryStore:
    """Category store backed by a SQLAlchemy session."""

    def __init__(self, session: Session | scoped_session):
        self.session = session

    def list_all(self) -> list[CategoryRow]:
        """All categories ordered by name"""
        try:
            rows = self.session.execute(db.select(Category).order_by(Category.name.asc())).scalars()
            return [row.to_dict() for row in rows]
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(_store_message(e)) from e

    def get_by_id(self, category_id: str) -> Optional[CategoryRow]:
        try:
            row = self.session.execute(db.select(Category).filter_by(id=category_id)).scalar_one_or_none()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(_store_message(e)) from e
        return row.to_dict() if row else None

    def insert(self, fields: dict[str, Any]) -> CategoryRow:
        category = Category(
            name=fields["name"],
            slug=fields["slug"],
            description=fields.get("description"),
        )
        self.session.add(category)
        try:
            self.session.commit()
            return category.to_dict()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(_store_message(e)) from e

    def update(self, category_id: str, fields: dict[str, Any]) -> Optional[CategoryRow]:
        try:
            category = self.session.execute(db.select(Category).filter_by(id=category_id)).scalar_one_or_none()
            if category is None:
                return None
            category.name = fields["name"]
            category.slug = fields["slug"]
            category.description = fields.get("description")
            self.session.commit()
            return category.to_dict()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(_store_message(e)) from e

    def delete(self, category_id: str) -> None:
        """Delete by id; an unknown id is a no-op"""
        try:
            self.session.execute(db.delete(Category).filter_by(id=category_id))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(_store_message(e)) from e
