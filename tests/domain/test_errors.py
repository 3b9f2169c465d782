"""Tests for domain error classes."""

from property_manager.domain.errors import (
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)


class TestDomainError:
    """Tests for base DomainError class."""

    def test_creates_error_with_message(self) -> None:
        """DomainError stores message and has correct error code."""
        error = DomainError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.error_code == "DOMAIN_ERROR"
        assert error.context == {}

    def test_creates_error_with_context(self) -> None:
        error = DomainError("Error occurred", resource="Property", action="create")

        assert error.context == {"resource": "Property", "action": "create"}

    def test_to_dict_returns_structured_format(self) -> None:
        error = DomainError("Test error", field="test", value=123)

        assert error.to_dict() == {
            "message": "Test error",
            "code": "DOMAIN_ERROR",
            "field": "test",
            "value": 123,
        }

    def test_str_representation(self) -> None:
        assert str(DomainError("Test message")) == "Test message"


class TestValidationError:
    """Tests for ValidationError class."""

    def test_creates_simple_validation_error(self) -> None:
        error = ValidationError("Invalid input")

        assert error.message == "Invalid input"
        assert error.error_code == "VALIDATION_ERROR"
        assert error.errors is None

    def test_creates_validation_error_with_default_message(self) -> None:
        error = ValidationError()

        assert error.message == "Validation error"
        assert error.errors is None

    def test_creates_validation_error_with_field_errors(self) -> None:
        """ValidationError can store multiple field-level errors."""
        errors = [
            {"field": "idOwner", "message": "Must not be blank", "code": "REQUIRED"},
            {"field": "price", "message": "Must be greater than or equal to 0", "code": "INVALID_VALUE"},
        ]

        error = ValidationError(errors=errors)

        assert error.message == "Validation failed"
        assert error.errors == errors

    def test_to_dict_includes_field_errors(self) -> None:
        errors = [{"field": "name", "message": "Must not be blank", "code": "REQUIRED"}]

        result = ValidationError(errors=errors).to_dict()

        assert result == {
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }

    def test_to_dict_without_field_errors(self) -> None:
        assert ValidationError("Bad page").to_dict() == {
            "message": "Bad page",
            "code": "VALIDATION_ERROR",
        }


class TestNotFoundError:
    """Tests for NotFoundError class."""

    def test_message_includes_resource_and_identifier(self) -> None:
        error = NotFoundError("Property", "66f1c2a4e13b5c0d8a9b7e21")

        assert error.message == "Property with identifier '66f1c2a4e13b5c0d8a9b7e21' not found"
        assert error.error_code == "NOT_FOUND"
        assert error.context == {
            "resource": "Property",
            "identifier": "66f1c2a4e13b5c0d8a9b7e21",
        }

    def test_message_without_identifier(self) -> None:
        error = NotFoundError("Property")

        assert error.message == "Property not found"


class TestStorageError:
    def test_has_storage_error_code(self) -> None:
        error = StorageError("MongoDB find failed", operation="get_filtered")

        assert error.error_code == "STORAGE_ERROR"
        assert error.context == {"operation": "get_filtered"}

    def test_is_a_domain_error(self) -> None:
        assert isinstance(StorageError("boom"), DomainError)
