"""Initial schema: equipment and equipment_file.

Revision ID: 3f7a9c1e2b4d
Revises:
Create Date: 2026-10-18

equipment.primary_photo_id and equipment_file.equipment_id reference each
other, so the primary photo FK is added after both tables exist.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "3f7a9c1e2b4d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

storage_driver = sa.Enum(
    "DATABASE", "FILE_SYSTEM", "OBJECT_STORAGE", name="storage_driver"
)


def upgrade() -> None:
    op.create_table(
        "equipment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("position", sa.JSON(), nullable=True),
        sa.Column("primary_photo_id", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_equipment_code"), "equipment", ["code"], unique=True)
    op.create_index(op.f("ix_equipment_category"), "equipment", ["category"], unique=False)

    op.create_table(
        "equipment_file",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("equipment_id", sa.String(), nullable=False),
        sa.Column("label", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("uploaded_by", sa.String(), nullable=True),
        sa.Column("file_name", sa.String(), nullable=False),
        sa.Column("size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(), nullable=True),
        sa.Column("stored_path", sa.String(), nullable=True),
        sa.Column("storage_type", storage_driver, nullable=False),
        sa.Column("data", sa.LargeBinary(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "uploaded_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["equipment_id"], ["equipment.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_equipment_file_equipment_id"),
        "equipment_file",
        ["equipment_id"],
        unique=False,
    )
    op.create_index(
        "ix_equipment_file_equipment_uploaded",
        "equipment_file",
        ["equipment_id", "uploaded_at"],
        unique=False,
    )

    op.create_foreign_key(
        "fk_equipment_primary_photo_id",
        "equipment",
        "equipment_file",
        ["primary_photo_id"],
        ["id"],
        ondelete="SET NULL",
    )


def downgrade() -> None:
    op.drop_constraint("fk_equipment_primary_photo_id", "equipment", type_="foreignkey")
    op.drop_index("ix_equipment_file_equipment_uploaded", table_name="equipment_file")
    op.drop_index(op.f("ix_equipment_file_equipment_id"), table_name="equipment_file")
    op.drop_table("equipment_file")
    storage_driver.drop(op.get_bind(), checkfirst=True)
    op.drop_index(op.f("ix_equipment_category"), table_name="equipment")
    op.drop_index(op.f("ix_equipment_code"), table_name="equipment")
    op.drop_table("equipment")
