"""Tests for ngapigen.generator.naming."""

from __future__ import annotations

import re

import pytest

from ngapigen.generator.naming import (
    api_filename,
    camelize,
    model_filename,
    sanitize_tag,
    to_api_name,
    to_file_slug,
    to_identifier_camel,
    to_identifier_pascal,
    to_operation_id,
)
from ngapigen.models import HTTPMethod


SAMPLE_NAMES = [
    "Course",
    "CourseCreate",
    "HTTPServer",
    "orderItem",
    "course_id",
    "X-Request-Id",
    "already-kebab",
    "getURLForID",
    "a",
]


# ---------------------------------------------------------------------------
# to_file_slug
# ---------------------------------------------------------------------------


class TestToFileSlug:
    """Kebab-case slugs for file names."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Course", "course"),
            ("CourseCreate", "course-create"),
            ("HTTPServer", "http-server"),
            ("orderItem", "order-item"),
            ("OrderItems", "order-items"),
            ("orders", "orders"),
        ],
    )
    def test_known_values(self, name: str, expected: str) -> None:
        assert to_file_slug(name) == expected

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_idempotent(self, name: str) -> None:
        once = to_file_slug(name)
        assert to_file_slug(once) == once

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_lowercase_ascii_and_separators_only(self, name: str) -> None:
        assert re.fullmatch(r"[a-z0-9_-]+", to_file_slug(name))


# ---------------------------------------------------------------------------
# to_identifier_camel / to_identifier_pascal
# ---------------------------------------------------------------------------


class TestIdentifierCase:
    """camelCase and PascalCase identifiers."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("course_id", "courseId"),
            ("file-name", "fileName"),
            ("X-Request-Id", "xRequestId"),
            ("courseId", "courseId"),
            ("CourseId", "courseId"),
            ("page__size", "pageSize"),
        ],
    )
    def test_camel(self, name: str, expected: str) -> None:
        assert to_identifier_camel(name) == expected

    def test_camel_passes_empty_and_none_through(self) -> None:
        assert to_identifier_camel("") == ""
        assert to_identifier_camel(None) is None

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_camel_starts_lowercase_without_separators(self, name: str) -> None:
        result = to_identifier_camel(name)
        assert result
        assert result[0].islower()
        assert "-" not in result and "_" not in result

    @pytest.mark.parametrize("name", SAMPLE_NAMES)
    def test_pascal_matches_camel_after_first_char(self, name: str) -> None:
        pascal = to_identifier_pascal(name)
        camel = to_identifier_camel(name)
        assert pascal[0].isupper()
        assert pascal[1:] == camel[1:]

    def test_pascal(self) -> None:
        assert to_identifier_pascal("list_courses") == "ListCourses"
        assert to_identifier_pascal(None) is None


# ---------------------------------------------------------------------------
# Tag and API naming
# ---------------------------------------------------------------------------


class TestTagNaming:
    """Tag sanitising and API class/file names."""

    def test_camelize(self) -> None:
        assert camelize("order items") == "OrderItems"
        assert camelize("petStore") == "PetStore"
        assert camelize("user_profile") == "UserProfile"

    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("Orders", "Orders"),
            ("order items", "OrderItems"),
            ("Billing & Invoices", "BillingInvoices"),
            ("2fa", "Class2fa"),
            ("2024", "Class2024"),
            ("", "Default"),
            (None, "Default"),
            ("default", "Default"),
        ],
    )
    def test_sanitize_tag(self, tag: str, expected: str) -> None:
        assert sanitize_tag(tag) == expected

    def test_api_name(self) -> None:
        assert to_api_name("Orders") == "OrdersApi"
        assert to_api_name("OrderItems") == "OrderItemsApi"

    def test_filenames(self) -> None:
        assert api_filename("OrderItems") == "order-items"
        assert model_filename("CourseCreate") == "course-create"


# ---------------------------------------------------------------------------
# to_operation_id
# ---------------------------------------------------------------------------


class TestToOperationId:
    """Operation id normalisation and derivation."""

    def test_keeps_camel_case_id(self) -> None:
        assert to_operation_id("listCourses", HTTPMethod.GET, "/courses") == "listCourses"

    def test_camelizes_separated_id(self) -> None:
        assert to_operation_id("list-courses", HTTPMethod.GET, "/courses") == "listCourses"
        assert to_operation_id("Get Course", HTTPMethod.GET, "/courses") == "getCourse"

    def test_strips_leading_underscores_and_trailing_digits(self) -> None:
        assert to_operation_id("_internal", HTTPMethod.GET, "/x") == "internal"
        assert to_operation_id("getCourse2", HTTPMethod.GET, "/x") == "getCourse"

    def test_derived_from_method_and_path(self) -> None:
        assert to_operation_id(None, HTTPMethod.GET, "/health") == "getHealth"
        assert (
            to_operation_id(None, HTTPMethod.DELETE, "/orders/{orderId}")
            == "deleteOrdersByOrderId"
        )
        assert (
            to_operation_id(None, HTTPMethod.POST, "/order-items/{item_id}/notes")
            == "postOrderItemsByItemIdNotes"
        )

    def test_blank_falls_back_to_operation(self) -> None:
        assert to_operation_id("123", HTTPMethod.GET, "/x") == "operation"
        assert to_operation_id("___", HTTPMethod.GET, "/x") == "operation"
