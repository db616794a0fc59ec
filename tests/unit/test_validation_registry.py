"""Unit tests for the named-schema request validator."""

from datetime import date

import pytest

from src.rc_common.enums import ProductStatus, Role
from src.rc_gateway.validation.registry import SCHEMAS, SchemaName, query_to_dict, validate
from src.rc_product.application.schemas import ProductFilterParams


def _codes_by_field(result) -> dict[str, str]:  # type: ignore[no-untyped-def]
    return {e.field: e.code for e in result.errors}


def test_every_schema_name_registered() -> None:
    assert set(SCHEMAS) == set(SchemaName)


def test_accepts_plain_string_name() -> None:
    assert validate("login", {"email": "a@b.co", "password": "x"}).is_valid  # type: ignore[arg-type]


class TestLogin:
    def test_valid_and_lowercased(self) -> None:
        result = validate(SchemaName.LOGIN, {"email": "Admin@Example.COM", "password": "x"})
        assert result.is_valid
        assert result.data.email == "admin@example.com"

    def test_bad_email_and_empty_password(self) -> None:
        result = validate(SchemaName.LOGIN, {"email": "not-an-email", "password": ""})
        assert not result.is_valid
        assert set(_codes_by_field(result)) == {"email", "password"}

    def test_missing_fields(self) -> None:
        result = validate(SchemaName.LOGIN, {})
        assert _codes_by_field(result) == {"email": "missing", "password": "missing"}

    def test_non_object_input(self) -> None:
        result = validate(SchemaName.LOGIN, ["a", "b"])
        assert not result.is_valid
        assert result.errors[0].field == "__root__"


class TestAdminCreate:
    def test_defaults_role_to_admin(self) -> None:
        result = validate(
            SchemaName.ADMIN_CREATE,
            {"email": "new@example.com", "password": "Password1", "name": "  New Admin "},
        )
        assert result.is_valid
        assert result.data.role is Role.ADMIN
        assert result.data.name == "New Admin"

    def test_collects_all_errors(self) -> None:
        result = validate(
            SchemaName.ADMIN_CREATE,
            {"email": "bad", "password": "short", "name": "A", "role": "owner"},
        )
        assert set(_codes_by_field(result)) == {"email", "password", "name", "role"}

    def test_password_message_lists_failed_rules(self) -> None:
        result = validate(
            SchemaName.ADMIN_CREATE,
            {"email": "n@example.com", "password": "lowercase", "name": "Name"},
        )
        (err,) = result.errors
        assert err.field == "password"
        assert "uppercase" in err.message
        assert "number" in err.message
        assert not err.message.startswith("Value error")


class TestProductFilters:
    def test_defaults(self) -> None:
        result = validate(SchemaName.PRODUCT_FILTERS, {})
        assert result.is_valid
        assert result.data.page == 1
        assert result.data.limit == 20

    def test_coerces_query_strings(self) -> None:
        result = validate(
            SchemaName.PRODUCT_FILTERS,
            {"minPriceCents": "100", "maxPriceCents": "5000", "page": "2", "limit": "50", "status": "active"},
        )
        assert result.is_valid
        criteria = result.data.to_criteria()
        assert criteria.min_price_cents == 100
        assert criteria.max_price_cents == 5000
        assert criteria.page == 2
        assert criteria.status == "active"

    def test_inverted_price_range_accepted(self) -> None:
        result = validate(SchemaName.PRODUCT_FILTERS, {"minPriceCents": "900", "maxPriceCents": "100"})
        assert result.is_valid

    @pytest.mark.parametrize(
        ("raw", "field"),
        [
            ({"page": "0"}, "page"),
            ({"page": "1001"}, "page"),
            ({"limit": "101"}, "limit"),
            ({"minPriceCents": "-1"}, "minPriceCents"),
            ({"status": "archived"}, "status"),
            ({"search": "x" * 101}, "search"),
            ({"page": "abc"}, "page"),
        ],
    )
    def test_out_of_range(self, raw: dict[str, str], field: str) -> None:
        result = validate(SchemaName.PRODUCT_FILTERS, raw)
        assert not result.is_valid
        assert result.errors[0].field == field

    def test_input_not_mutated(self) -> None:
        raw = {"search": "  phone  ", "page": "3"}
        validate(SchemaName.PRODUCT_FILTERS, raw)
        assert raw == {"search": "  phone  ", "page": "3"}

    def test_price_bounds_are_whole_cents(self) -> None:
        result = validate(SchemaName.PRODUCT_FILTERS, {"minPriceCents": "19.99"})
        assert not result.is_valid
        assert result.errors[0].field == "minPriceCents"

        criteria = validate(SchemaName.PRODUCT_FILTERS, {"minPriceCents": "1999"}).data.to_criteria()
        assert criteria.min_price_cents == 1999

    def test_snake_case_names_accepted(self) -> None:
        params = ProductFilterParams(min_price=1, max_price=2)
        assert params.to_criteria().max_price_cents == 2


class TestProductCreateUpdate:
    def _valid(self, **overrides: object) -> dict[str, object]:
        body: dict[str, object] = {
            "name": "Desk Lamp",
            "price_cents": 2999,
            "stock": 12,
            "category": "Home",
        }
        body.update(overrides)
        return body

    def test_minimal_create(self) -> None:
        result = validate(SchemaName.PRODUCT_CREATE, self._valid())
        assert result.is_valid
        assert result.data.status is ProductStatus.DRAFT
        assert result.data.low_stock_threshold == 10

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"name": ""}, "name"),
            ({"price_cents": -1}, "price_cents"),
            ({"price_cents": 100_000_000}, "price_cents"),
            ({"stock": 1_000_000}, "stock"),
            ({"stock": 1.5}, "stock"),
            ({"category": ""}, "category"),
            ({"description": "d" * 2001}, "description"),
            ({"tags": ["t"] * 21}, "tags"),
            ({"tags": ["x" * 51]}, "tags"),
            ({"specifications": {"Color": "c" * 501}}, "specifications"),
        ],
    )
    def test_create_rejects(self, overrides: dict[str, object], field: str) -> None:
        result = validate(SchemaName.PRODUCT_CREATE, self._valid(**overrides))
        assert not result.is_valid
        assert result.errors[0].field == field

    def test_update_all_optional(self) -> None:
        result = validate(SchemaName.PRODUCT_UPDATE, {})
        assert result.is_valid
        assert result.data.model_dump(exclude_unset=True) == {}

    def test_update_keeps_constraints(self) -> None:
        result = validate(SchemaName.PRODUCT_UPDATE, {"stock": -5})
        assert _codes_by_field(result) == {"stock": "greater_than_equal"}


class TestBatchDeleteAndMetrics:
    def test_batch_delete_needs_ids(self) -> None:
        assert not validate(SchemaName.PRODUCT_BATCH_DELETE, {"ids": []}).is_valid
        assert validate(SchemaName.PRODUCT_BATCH_DELETE, {"ids": ["a", "b"]}).is_valid

    def test_metrics_range_parses_dates(self) -> None:
        result = validate(SchemaName.METRICS_RANGE, {"start": "2024-01-01", "end": "2024-01-31"})
        assert result.is_valid
        assert result.data.start == date(2024, 1, 1)

    def test_metrics_range_rejects_reversed(self) -> None:
        result = validate(SchemaName.METRICS_RANGE, {"start": "2024-02-01", "end": "2024-01-01"})
        assert not result.is_valid
        assert result.errors[0].message == "start must be on or before end"

    def test_metrics_range_rejects_bad_date(self) -> None:
        result = validate(SchemaName.METRICS_RANGE, {"start": "yesterday"})
        assert result.errors[0].field == "start"

    @pytest.mark.parametrize("value", ["0001-01-01", "1999-12-31", "2101-01-01", "9999-12-31"])
    def test_metrics_range_rejects_dates_outside_window(self, value: str) -> None:
        for field in ("start", "end"):
            result = validate(SchemaName.METRICS_RANGE, {field: value})
            assert not result.is_valid
            assert result.errors[0].field == field


def test_query_to_dict_drops_blanks() -> None:
    assert query_to_dict({"search": "", "category": "Books", "page": "2"}) == {
        "category": "Books",
        "page": "2",
    }
