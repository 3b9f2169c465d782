"""PostgreSQL implementation of PropertyRepository."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from property_manager.domain.errors import StorageError
from property_manager.domain.property import (
    NewProperty,
    Paging,
    Property,
    PropertyFilters,
    utc_now,
)
from property_manager.infra.db.models.property import PropertyRow
from property_manager.ports.property_repository import PropertyRepository

if TYPE_CHECKING:
    from sqlalchemy.sql import Select


class PostgresPropertyRepository(PropertyRepository):
    """
    PostgreSQL implementation of PropertyRepository.

    - Uses SQLAlchemy ORM for database access
    - Applies filters using SQL WHERE clauses (ILIKE for text, inclusive ranges for price)
    - Counts with COUNT(*) over the same WHERE clauses
    - Converts PropertyRow (infrastructure) to Property (domain)
    """

    def __init__(
        self,
        session: Session,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
            clock: Source of creation timestamps
        """
        self._session = session
        self._clock = clock

    def create(self, new_property: NewProperty) -> Property:
        now = self._clock()
        row = PropertyRow(
            id=uuid.uuid4(),
            owner_id=new_property.owner_id,
            name=new_property.name,
            address=new_property.address,
            price=new_property.price,
            image=new_property.image,
            created_at=now,
            updated_at=now,
        )
        with _storage_errors("create"):
            self._session.add(row)
            self._session.flush()

        return self._to_domain(row)

    def get_by_id(self, property_id: str) -> Property | None:
        """
        Get property by ID.

        Args:
            property_id: Property ID (expected to be a valid UUID string)

        Returns:
            Property entity if found, None otherwise
        """
        row_id = _parse_uuid(property_id)
        if row_id is None:
            return None

        with _storage_errors("get_by_id"):
            query = select(PropertyRow).where(PropertyRow.id == row_id)
            row = self._session.execute(query).scalar_one_or_none()

        return self._to_domain(row) if row else None

    def get_filtered(self, filters: PropertyFilters, paging: Paging) -> list[Property]:
        # Trust that UseCase has validated inputs (contract programming)
        query = (
            self._build_query(filters)
            .order_by(PropertyRow.name, PropertyRow.id)
            .offset(paging.offset)
            .limit(paging.page_size)
        )
        with _storage_errors("get_filtered"):
            rows = self._session.execute(query).scalars().all()

        return [self._to_domain(row) for row in rows]

    def count_filtered(self, filters: PropertyFilters) -> int:
        count_query = select(func.count()).select_from(self._build_query(filters).subquery())
        with _storage_errors("count_filtered"):
            return self._session.execute(count_query).scalar() or 0

    def update(self, property_id: str, prop: Property) -> Property | None:
        row_id = _parse_uuid(property_id)
        if row_id is None:
            return None

        statement = (
            update(PropertyRow)
            .where(PropertyRow.id == row_id)
            .values(
                name=prop.name,
                address=prop.address,
                price=prop.price,
                image=prop.image,
                updated_at=prop.updated_at,
            )
        )
        with _storage_errors("update"):
            result = self._session.execute(statement)

        if result.rowcount == 0:
            return None

        # owner_id and created_at are never written on update
        return replace(prop, id=property_id)

    def delete(self, property_id: str) -> bool:
        row_id = _parse_uuid(property_id)
        if row_id is None:
            return False

        with _storage_errors("delete"):
            result = self._session.execute(delete(PropertyRow).where(PropertyRow.id == row_id))

        return result.rowcount > 0

    def _build_query(self, filters: PropertyFilters) -> Select[tuple[PropertyRow]]:
        """
        Build SQLAlchemy query with filters applied.

        Args:
            filters: Filter criteria to apply

        Returns:
            SQLAlchemy select statement with WHERE clauses
        """
        query = select(PropertyRow)

        # Case-insensitive substring match; % and _ in the pattern are literal
        name_pattern = filters.name_pattern
        if name_pattern:
            query = query.where(PropertyRow.name.icontains(name_pattern, autoescape=True))

        address_pattern = filters.address_pattern
        if address_pattern:
            query = query.where(PropertyRow.address.icontains(address_pattern, autoescape=True))

        # Price range filters (inclusive)
        if filters.min_price is not None:
            query = query.where(PropertyRow.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(PropertyRow.price <= filters.max_price)

        return query

    def _to_domain(self, row: PropertyRow) -> Property:
        """Convert database model (PropertyRow) to domain entity (Property)."""
        return Property(
            id=str(row.id),  # Convert UUID to string
            owner_id=row.owner_id,
            name=row.name,
            address=row.address,
            price=row.price,  # Already Decimal from NUMERIC column
            image=row.image,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"PostgreSQL {operation} failed", operation=operation) from exc


def _parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:  # Invalid UUID format
        return None
