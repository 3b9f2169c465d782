"""Tests for property domain types: validation, filtering, paging and merging."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from property_manager.domain.errors import ValidationError
from property_manager.domain.property import (
    MAX_NAME_LENGTH,
    MAX_PAGE_SIZE,
    NewProperty,
    Paging,
    Property,
    PropertyFilters,
    PropertyUpdate,
    next_timestamp,
    utc_now,
)


CREATED_AT = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def casa_verde() -> Property:
    return Property(
        id="p-1",
        owner_id="owner-1",
        name="Casa Verde",
        address="Calle Mayor 1",
        price=Decimal("150000"),
        image="a.jpg",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


# ==============================================================================
# NewProperty
# ==============================================================================


def test_new_property_valid_payload_passes() -> None:
    NewProperty(owner_id="o1", name="Casa", address="", price=Decimal("0")).validate()


def test_new_property_reports_every_invalid_field() -> None:
    new_property = NewProperty(owner_id="  ", name="", address="", price=Decimal("-1"))

    with pytest.raises(ValidationError) as exc_info:
        new_property.validate()

    fields = [error["field"] for error in exc_info.value.errors or []]
    assert fields == ["idOwner", "name", "price"]


def test_new_property_rejects_float_price() -> None:
    new_property = NewProperty(owner_id="o1", name="Casa", address="", price=10.5)  # type: ignore[arg-type]

    with pytest.raises(ValidationError) as exc_info:
        new_property.validate()

    assert exc_info.value.errors == [
        {"field": "price", "message": "Must be a Decimal", "code": "INVALID_DECIMAL"}
    ]


# ==============================================================================
# PropertyFilters
# ==============================================================================


def test_filters_blank_patterns_are_absent() -> None:
    filters = PropertyFilters(name="   ", address="")

    assert filters.name_pattern is None
    assert filters.address_pattern is None


def test_filters_patterns_are_trimmed() -> None:
    assert PropertyFilters(name="  casa ").name_pattern == "casa"


def test_filters_name_is_case_insensitive_substring(casa_verde: Property) -> None:
    assert PropertyFilters(name="VERDE").matches(casa_verde)
    assert PropertyFilters(name="sa ve").matches(casa_verde)
    assert not PropertyFilters(name="azul").matches(casa_verde)


def test_filters_address_is_case_insensitive_substring(casa_verde: Property) -> None:
    assert PropertyFilters(address="mayor").matches(casa_verde)
    assert not PropertyFilters(address="menor").matches(casa_verde)


def test_filters_price_bounds_are_inclusive(casa_verde: Property) -> None:
    assert PropertyFilters(min_price=Decimal("150000")).matches(casa_verde)
    assert PropertyFilters(max_price=Decimal("150000")).matches(casa_verde)
    assert not PropertyFilters(min_price=Decimal("150000.01")).matches(casa_verde)
    assert not PropertyFilters(max_price=Decimal("149999.99")).matches(casa_verde)


def test_filters_combine_with_and_semantics(casa_verde: Property) -> None:
    assert PropertyFilters(name="casa", max_price=Decimal("200000")).matches(casa_verde)
    assert not PropertyFilters(name="casa", max_price=Decimal("100000")).matches(casa_verde)


def test_filters_inverted_price_range_is_valid_but_matches_nothing(casa_verde: Property) -> None:
    filters = PropertyFilters(min_price=Decimal("500"), max_price=Decimal("100"))

    filters.validate()

    assert not filters.matches(casa_verde)


def test_filters_reject_float_bounds() -> None:
    with pytest.raises(ValidationError):
        PropertyFilters(min_price=1.5).validate()  # type: ignore[arg-type]


# ==============================================================================
# Paging
# ==============================================================================


def test_paging_defaults() -> None:
    paging = Paging()

    assert paging.page == 1
    assert paging.page_size == 10
    assert paging.offset == 0


@pytest.mark.parametrize(
    ("page", "page_size", "offset"),
    [(1, 10, 0), (2, 10, 10), (3, 5, 10), (4, 1, 3)],
)
def test_paging_offset(page: int, page_size: int, offset: int) -> None:
    assert Paging(page=page, page_size=page_size).offset == offset


@pytest.mark.parametrize(
    ("total", "expected"),
    [(0, 0), (1, 1), (10, 1), (11, 2), (25, 3)],
)
def test_paging_total_pages(total: int, expected: int) -> None:
    assert Paging(page=1, page_size=10).total_pages(total) == expected


@pytest.mark.parametrize(
    ("page", "page_size", "field"),
    [(0, 10, "page"), (-1, 10, "page"), (1, 0, "pageSize"), (1, MAX_PAGE_SIZE + 1, "pageSize")],
)
def test_paging_rejects_out_of_range_values(page: int, page_size: int, field: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        Paging(page=page, page_size=page_size).validate()

    assert [error["field"] for error in exc_info.value.errors or []] == [field]


def test_paging_accepts_max_page_size() -> None:
    Paging(page=1, page_size=MAX_PAGE_SIZE).validate()


# ==============================================================================
# PropertyUpdate
# ==============================================================================


def test_update_only_touches_provided_fields(casa_verde: Property) -> None:
    now = CREATED_AT + timedelta(minutes=5)

    merged = PropertyUpdate(price=Decimal("175000")).apply_to(casa_verde, now=now)

    assert merged.price == Decimal("175000")
    assert merged.name == "Casa Verde"
    assert merged.address == "Calle Mayor 1"
    assert merged.image == "a.jpg"
    assert merged.updated_at == now


def test_update_blank_strings_leave_fields_unchanged(casa_verde: Property) -> None:
    changes = PropertyUpdate(name="", address="   ", image="")

    merged = changes.apply_to(casa_verde, now=CREATED_AT + timedelta(seconds=1))

    assert merged.name == "Casa Verde"
    assert merged.address == "Calle Mayor 1"
    assert merged.image == "a.jpg"


def test_update_never_changes_identity_fields(casa_verde: Property) -> None:
    changes = PropertyUpdate(name="Casa Azul", address="Otra 2", price=Decimal("1"), image="b.jpg")

    merged = changes.apply_to(casa_verde, now=CREATED_AT + timedelta(seconds=1))

    assert merged.id == casa_verde.id
    assert merged.owner_id == casa_verde.owner_id
    assert merged.created_at == casa_verde.created_at
    assert merged.name == "Casa Azul"


def test_update_price_zero_is_applied(casa_verde: Property) -> None:
    merged = PropertyUpdate(price=Decimal("0")).apply_to(casa_verde, now=CREATED_AT)

    assert merged.price == Decimal("0")


def test_update_timestamp_moves_forward_when_clock_stalls(casa_verde: Property) -> None:
    merged = PropertyUpdate(name="Casa Azul").apply_to(casa_verde, now=CREATED_AT)

    assert merged.updated_at > casa_verde.updated_at


def test_update_rejects_negative_price() -> None:
    with pytest.raises(ValidationError) as exc_info:
        PropertyUpdate(price=Decimal("-5")).validate()

    assert exc_info.value.errors is not None
    assert exc_info.value.errors[0]["field"] == "price"


def test_update_without_price_is_valid() -> None:
    PropertyUpdate(name="x").validate()


# ==============================================================================
# Storage limits
# ==============================================================================


@pytest.mark.parametrize(
    "price",
    ["0", "0.00", "150000", "150000.5", "150000.50", "150000.1000", "999999999999.99", "1E+3"],
)
def test_new_property_accepts_prices_that_fit_storage(price: str) -> None:
    NewProperty(owner_id="o1", name="Casa", address="", price=Decimal(price)).validate()


@pytest.mark.parametrize(
    "price",
    [
        "150000.125",
        "150000.000000000000000000000000000000001",
        "10000000000000",
        "1E+12",
        "Infinity",
        "NaN",
    ],
)
def test_new_property_rejects_prices_that_do_not_fit_storage(price: str) -> None:
    new_property = NewProperty(owner_id="o1", name="Casa", address="", price=Decimal(price))

    with pytest.raises(ValidationError) as exc_info:
        new_property.validate()

    assert [error["field"] for error in exc_info.value.errors or []] == ["price"]


def test_new_property_rejects_overlong_name() -> None:
    new_property = NewProperty(
        owner_id="o1", name="x" * (MAX_NAME_LENGTH + 1), address="", price=Decimal("1")
    )

    with pytest.raises(ValidationError) as exc_info:
        new_property.validate()

    assert exc_info.value.errors == [
        {"field": "name", "message": "Must be at most 200 characters", "code": "TOO_LONG"}
    ]


def test_update_rejects_sub_cent_price() -> None:
    with pytest.raises(ValidationError) as exc_info:
        PropertyUpdate(price=Decimal("150000.125")).validate()

    assert exc_info.value.errors is not None
    assert exc_info.value.errors[0]["code"] == "INVALID_PRECISION"


def test_update_rejects_overlong_address() -> None:
    with pytest.raises(ValidationError) as exc_info:
        PropertyUpdate(address="a" * 301).validate()

    assert [error["field"] for error in exc_info.value.errors or []] == ["address"]


def test_filters_reject_bounds_more_precise_than_storage() -> None:
    filters = PropertyFilters(
        min_price=Decimal("1.00000000000000000000000000000000000001"),
        max_price=Decimal("1E+40"),
    )

    with pytest.raises(ValidationError) as exc_info:
        filters.validate()

    assert [error["field"] for error in exc_info.value.errors or []] == ["minPrice", "maxPrice"]


def test_filters_accept_negative_bound_within_precision() -> None:
    PropertyFilters(min_price=Decimal("-10.5")).validate()


# ==============================================================================
# Timestamps
# ==============================================================================


def test_utc_now_is_aware_and_millisecond_precise() -> None:
    now = utc_now()

    assert now.tzinfo is not None
    assert now.microsecond % 1000 == 0


def test_next_timestamp_uses_now_when_it_advanced() -> None:
    later = CREATED_AT + timedelta(seconds=3)

    assert next_timestamp(CREATED_AT, later) == later


def test_next_timestamp_bumps_by_one_millisecond_otherwise() -> None:
    earlier = CREATED_AT - timedelta(seconds=3)

    assert next_timestamp(CREATED_AT, earlier) == CREATED_AT + timedelta(milliseconds=1)
    assert next_timestamp(CREATED_AT, CREATED_AT) == CREATED_AT + timedelta(milliseconds=1)
