from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Mapped, mapped_column

from blogfolio.extensions import db
from blogfolio.models import generate_hex_id


class Category(db.Model):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(db.String(32), primary_key=True, default=generate_hex_id)
    name: Mapped[str] = mapped_column(db.String(200), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(db.String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(db.Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(db.DateTime(timezone=True), server_default=func.now(), nullable=False)

    def to_dict(self) -> dict[str, Any]:
        """Row shape shared by every category store backend."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
