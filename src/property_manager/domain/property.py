from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from property_manager.domain.errors import ValidationError


DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

TIMESTAMP_RESOLUTION = timedelta(milliseconds=1)

# Storage limits shared by every backend (NUMERIC(14, 2) and the VARCHAR columns)
PRICE_DECIMAL_PLACES = 2
PRICE_INTEGER_DIGITS = 12
MAX_OWNER_ID_LENGTH = 64
MAX_NAME_LENGTH = 200
MAX_ADDRESS_LENGTH = 300


@dataclass(frozen=True)
class Property:
    id: str
    owner_id: str
    name: str
    address: str
    price: Decimal
    image: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class NewProperty:
    """Creation payload. Storage assigns id and timestamps."""

    owner_id: str
    name: str
    address: str
    price: Decimal
    image: str = ""

    def validate(self) -> None:
        """
        Validate the creation payload.

        Raises:
            ValidationError: With one entry per offending field
        """
        errors: list[dict[str, str]] = []

        if not self.owner_id or not self.owner_id.strip():
            errors.append(
                {"field": "idOwner", "message": "Must not be blank", "code": "REQUIRED"}
            )
        if not self.name or not self.name.strip():
            errors.append({"field": "name", "message": "Must not be blank", "code": "REQUIRED"})

        errors += _length_errors("idOwner", self.owner_id, MAX_OWNER_ID_LENGTH)
        errors += _length_errors("name", self.name, MAX_NAME_LENGTH)
        errors += _length_errors("address", self.address, MAX_ADDRESS_LENGTH)

        # Guardrail: prevent float leakage past boundary
        if not isinstance(self.price, Decimal):
            errors.append(
                {"field": "price", "message": "Must be a Decimal", "code": "INVALID_DECIMAL"}
            )
        elif not self.price.is_finite():
            errors.append(
                {"field": "price", "message": "Must be a finite number", "code": "INVALID_DECIMAL"}
            )
        elif self.price < 0:
            errors.append(
                {"field": "price", "message": "Must be greater than or equal to 0", "code": "INVALID_VALUE"}
            )
        else:
            errors += _price_precision_errors("price", self.price)

        if errors:
            raise ValidationError(errors=errors)


@dataclass(frozen=True, slots=True)
class PropertyFilters:
    name: str | None = None
    address: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None

    @property
    def name_pattern(self) -> str | None:
        """Trimmed name pattern, or None when blank."""
        return _pattern(self.name)

    @property
    def address_pattern(self) -> str | None:
        """Trimmed address pattern, or None when blank."""
        return _pattern(self.address)

    def validate(self) -> None:
        """
        Validate filter parameters.

        min_price > max_price is accepted on purpose: it matches nothing.

        Raises:
            ValidationError: If a price bound is not a Decimal or is more
                precise than a stored price can be
        """
        if self.min_price is not None and not isinstance(self.min_price, Decimal):
            raise ValidationError("min_price must be Decimal or None (no floats past the boundary)")
        if self.max_price is not None and not isinstance(self.max_price, Decimal):
            raise ValidationError("max_price must be Decimal or None (no floats past the boundary)")

        errors: list[dict[str, str]] = []
        if self.min_price is not None:
            errors += _price_precision_errors("minPrice", self.min_price)
        if self.max_price is not None:
            errors += _price_precision_errors("maxPrice", self.max_price)
        if errors:
            raise ValidationError(errors=errors)

    def matches(self, prop: Property) -> bool:
        """Reference predicate: AND of every present constraint."""
        name_pattern = self.name_pattern
        if name_pattern and name_pattern.casefold() not in prop.name.casefold():
            return False
        address_pattern = self.address_pattern
        if address_pattern and address_pattern.casefold() not in prop.address.casefold():
            return False
        if self.min_price is not None and prop.price < self.min_price:
            return False
        if self.max_price is not None and prop.price > self.max_price:
            return False
        return True


@dataclass(frozen=True, slots=True)
class Paging:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def total_pages(self, total_count: int) -> int:
        return math.ceil(total_count / self.page_size)

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            ValidationError: If page or page_size are out of range
        """
        errors: list[dict[str, str]] = []
        if self.page < 1:
            errors.append({"field": "page", "message": "Must be >= 1", "code": "INVALID_VALUE"})
        if self.page_size < 1:
            errors.append({"field": "pageSize", "message": "Must be >= 1", "code": "INVALID_VALUE"})
        elif self.page_size > MAX_PAGE_SIZE:
            errors.append(
                {
                    "field": "pageSize",
                    "message": f"Must be <= {MAX_PAGE_SIZE}",
                    "code": "INVALID_VALUE",
                }
            )
        if errors:
            raise ValidationError(errors=errors)


@dataclass(frozen=True, slots=True)
class PropertyUpdate:
    """
    Sparse update payload.

    None means "leave unchanged". For string fields an empty or
    whitespace-only value also means "leave unchanged", so a string field
    cannot be cleared through an update.
    """

    name: str | None = None
    address: str | None = None
    price: Decimal | None = None
    image: str | None = None

    def validate(self) -> None:
        errors: list[dict[str, str]] = []
        errors += _length_errors("name", self.name, MAX_NAME_LENGTH)
        errors += _length_errors("address", self.address, MAX_ADDRESS_LENGTH)

        if self.price is not None:
            if not isinstance(self.price, Decimal):
                raise ValidationError("price must be Decimal or None (no floats past the boundary)")
            if self.price.is_finite() and self.price < 0:
                errors.append(
                    {
                        "field": "price",
                        "message": "Must be greater than or equal to 0",
                        "code": "INVALID_VALUE",
                    }
                )
            else:
                errors += _price_precision_errors("price", self.price)

        if errors:
            raise ValidationError(errors=errors)

    def apply_to(self, existing: Property, now: datetime) -> Property:
        """
        Merge this update onto an existing property.

        id, owner_id and created_at always come from ``existing``;
        updated_at is refreshed and always moves forward.
        """
        return replace(
            existing,
            name=_pick(self.name, existing.name),
            address=_pick(self.address, existing.address),
            price=self.price if self.price is not None else existing.price,
            image=_pick(self.image, existing.image),
            updated_at=next_timestamp(existing.updated_at, now),
        )


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds (BSON date resolution)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def next_timestamp(previous: datetime, now: datetime) -> datetime:
    """Return ``now`` unless the clock has not advanced past ``previous``."""
    if now > previous:
        return now
    return previous + TIMESTAMP_RESOLUTION


def _pick(incoming: str | None, current: str) -> str:
    if incoming is None or not incoming.strip():
        return current
    return incoming


def _length_errors(field: str, value: str | None, max_length: int) -> list[dict[str, str]]:
    if value is None or len(value) <= max_length:
        return []
    return [
        {
            "field": field,
            "message": f"Must be at most {max_length} characters",
            "code": "TOO_LONG",
        }
    ]


def _price_precision_errors(field: str, price: Decimal) -> list[dict[str, str]]:
    """
    Check that ``price`` fits NUMERIC(14, 2) exactly.

    Works on the digit tuple rather than quantize()/normalize(), which round
    under the default 28-digit context.
    """
    if not price.is_finite():
        return [{"field": field, "message": "Must be a finite number", "code": "INVALID_DECIMAL"}]

    _, digits, raw_exponent = price.as_tuple()
    exponent = int(raw_exponent)
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits = digits[:-1]
        exponent += 1
    if exponent < 0 and digits == (0,):
        exponent = 0

    if -exponent > PRICE_DECIMAL_PLACES:
        return [
            {
                "field": field,
                "message": f"Must have at most {PRICE_DECIMAL_PLACES} decimal places",
                "code": "INVALID_PRECISION",
            }
        ]
    if len(digits) + exponent > PRICE_INTEGER_DIGITS and digits != (0,):
        return [
            {
                "field": field,
                "message": f"Must be less than 10^{PRICE_INTEGER_DIGITS}",
                "code": "INVALID_PRECISION",
            }
        ]
    return []


def _pattern(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None
