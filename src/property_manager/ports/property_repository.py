from __future__ import annotations

from abc import ABC, abstractmethod

from property_manager.domain.property import NewProperty, Paging, Property, PropertyFilters


class PropertyRepository(ABC):
    """
    Port for property data access.

    Each operation is atomic at the single-record level. Implementations do
    not retry; driver failures surface as StorageError.

    Contract (Preconditions):
        - filters, paging and payloads are pre-validated by the caller (UseCase)
        - Implementations trust inputs are valid and do not re-validate

    Contract (Query semantics):
        - get_filtered and count_filtered apply the identical predicate
        - get_filtered orders by name ascending, ties broken by id
        - a page past the end is an empty list
        - an unknown or malformed id behaves as "not found"
    """

    @abstractmethod
    def create(self, new_property: NewProperty) -> Property:
        """Persist a new property, assigning id, created_at and updated_at."""
        ...

    @abstractmethod
    def get_by_id(self, property_id: str) -> Property | None: ...

    @abstractmethod
    def get_filtered(self, filters: PropertyFilters, paging: Paging) -> list[Property]:
        """
        Return one ordered page of properties matching ``filters``.

        Args:
            filters: Filter criteria (AND semantics) - pre-validated
            paging: Page and page size - pre-validated
        """
        ...

    @abstractmethod
    def count_filtered(self, filters: PropertyFilters) -> int:
        """Count properties matching ``filters``, ignoring paging."""
        ...

    @abstractmethod
    def update(self, property_id: str, prop: Property) -> Property | None:
        """
        Write a merged property over the stored one.

        Returns:
            The stored property, or None if nothing matched ``property_id``
        """
        ...

    @abstractmethod
    def delete(self, property_id: str) -> bool:
        """Delete by id. Returns False when nothing was deleted."""
        ...
