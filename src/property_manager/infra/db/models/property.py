from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from property_manager.domain.property import (
    MAX_ADDRESS_LENGTH,
    MAX_NAME_LENGTH,
    MAX_OWNER_ID_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_INTEGER_DIGITS,
)
from property_manager.infra.db.models.base import Base


class PropertyRow(Base):
    __tablename__ = "properties"
    __table_args__ = (
        Index("ix_properties_name", "name"),
        Index("ix_properties_price", "price"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    owner_id: Mapped[str] = mapped_column(String(MAX_OWNER_ID_LENGTH), nullable=False)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    address: Mapped[str] = mapped_column(String(MAX_ADDRESS_LENGTH), nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=PRICE_INTEGER_DIGITS + PRICE_DECIMAL_PLACES, scale=PRICE_DECIMAL_PLACES),
        nullable=False,
    )  # 999,999,999,999.99
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
