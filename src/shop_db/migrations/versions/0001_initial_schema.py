"""Initial shop schema.

Creates every table from the ORM metadata: reference data, users and
tokens, catalog, carts, orders with status history, application settings,
the mail outbox, and audit logs.
"""

from __future__ import annotations

from typing import Optional

from alembic import op

from shop_db.base import Base

# Revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision: Optional[str] = None
branch_labels: Optional[str] = None
depends_on: Optional[str] = None


def upgrade() -> None:
    # Import models so Base.metadata is populated.
    import shop_db.models  # noqa: F401

    Base.metadata.create_all(bind=op.get_bind())


def downgrade() -> None:
    import shop_db.models  # noqa: F401

    Base.metadata.drop_all(bind=op.get_bind())
