"""EquipmentFile ORM model. File metadata plus, for the database driver, the bytes themselves."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    LargeBinary,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, deferred, mapped_column, relationship
from sqlalchemy.sql import func

from app.domain.enums import StorageDriver
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.equipment import Equipment


class EquipmentFile(CuidMixin, Base):
    """Attachment of an equipment. Table: equipment_file.

    storage_type is the driver that stored the bytes and decides how they are
    read and deleted for the life of the row. data is deferred so listings do
    not pull blobs.
    """

    __tablename__ = "equipment_file"

    equipment_id: Mapped[str] = mapped_column(
        String, ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False, index=True
    )
    label: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    uploaded_by: Mapped[str | None] = mapped_column(String, nullable=True)
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str | None] = mapped_column(String, nullable=True)
    stored_path: Mapped[str | None] = mapped_column(String, nullable=True)
    storage_type: Mapped[StorageDriver] = mapped_column(
        Enum(StorageDriver, name="storage_driver"),
        nullable=False,
        default=StorageDriver.FILE_SYSTEM,
    )
    data: Mapped[bytes | None] = deferred(mapped_column(LargeBinary, nullable=True))
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    equipment: Mapped["Equipment"] = relationship(
        back_populates="files", foreign_keys=[equipment_id]
    )

    __table_args__ = (
        Index("ix_equipment_file_equipment_uploaded", "equipment_id", "uploaded_at"),
    )
