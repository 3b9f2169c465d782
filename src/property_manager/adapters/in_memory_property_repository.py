from __future__ import annotations

import threading
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from property_manager.domain.property import (
    NewProperty,
    Paging,
    Property,
    PropertyFilters,
    utc_now,
)
from property_manager.ports.property_repository import PropertyRepository


class InMemoryPropertyRepository(PropertyRepository):
    """
    Canonical contract implementation for tests and the ``memory`` backend.

    - Applies AND-semantics filtering (PropertyFilters.matches)
    - Orders by name, then id
    - Applies paging AFTER filtering and ordering
    - Counts with the same predicate, ignoring paging

    One instance is shared by every request thread; writes hold a lock and
    reads filter a snapshot of the stored values.
    """

    def __init__(
        self,
        properties: Iterable[Property] = (),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._properties: dict[str, Property] = {prop.id: prop for prop in properties}
        self._clock = clock
        self._lock = threading.Lock()

    def create(self, new_property: NewProperty) -> Property:
        now = self._clock()
        prop = Property(
            id=str(uuid.uuid4()),
            owner_id=new_property.owner_id,
            name=new_property.name,
            address=new_property.address,
            price=new_property.price,
            image=new_property.image,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._properties[prop.id] = prop
        return prop

    def get_by_id(self, property_id: str) -> Property | None:
        return self._properties.get(property_id)

    def get_filtered(self, filters: PropertyFilters, paging: Paging) -> list[Property]:
        # Trust that UseCase has validated inputs (contract programming)
        matches = self._matching(filters)
        return matches[paging.offset : paging.offset + paging.page_size]

    def count_filtered(self, filters: PropertyFilters) -> int:
        return len(self._matching(filters))

    def update(self, property_id: str, prop: Property) -> Property | None:
        stored = replace(prop, id=property_id)
        with self._lock:
            if property_id not in self._properties:
                return None
            self._properties[property_id] = stored
        return stored

    def delete(self, property_id: str) -> bool:
        with self._lock:
            return self._properties.pop(property_id, None) is not None

    def _matching(self, filters: PropertyFilters) -> list[Property]:
        with self._lock:
            snapshot = list(self._properties.values())
        matches = [prop for prop in snapshot if filters.matches(prop)]
        return sorted(matches, key=lambda prop: (prop.name, prop.id))
