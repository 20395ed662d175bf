"""Equipment ORM model. One row per vehicle/unit tracked on the dashboard."""

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import DashboardModel

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.equipment_file import EquipmentFile


class Equipment(DashboardModel, Base):
    """Equipment entity. Table: equipment. Owns its files (cascade delete)."""

    __tablename__ = "equipment"

    name: Mapped[str] = mapped_column(String, nullable=False)
    code: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    primary_photo_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey(
            "equipment_file.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_equipment_primary_photo_id",
        ),
        nullable=True,
    )

    files: Mapped[list["EquipmentFile"]] = relationship(
        back_populates="equipment",
        foreign_keys="EquipmentFile.equipment_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    primary_photo: Mapped["EquipmentFile | None"] = relationship(
        foreign_keys=[primary_photo_id],
        viewonly=True,
    )
