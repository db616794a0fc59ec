"""Named-schema registry: one Pydantic model per request shape.

``validate`` never raises for bad input; it returns a ``ValidationResult``
carrying every field error found in a single pass. Routes refer to a schema
by ``SchemaName`` so the guard can validate before the handler runs.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError

from src.rc_gateway.admin.schemas import AdminCreateRequest, LoginRequest
from src.rc_gateway.validation.result import FieldError, ValidationResult
from src.rc_metrics.application.schemas import MetricsRangeParams
from src.rc_product.application.schemas import (
    ProductBatchDeleteRequest,
    ProductCreateRequest,
    ProductFilterParams,
    ProductUpdateRequest,
)


class SchemaName(str, Enum):
    LOGIN = "login"
    ADMIN_CREATE = "admin_create"
    PRODUCT_FILTERS = "product_filters"
    PRODUCT_CREATE = "product_create"
    PRODUCT_UPDATE = "product_update"
    PRODUCT_BATCH_DELETE = "product_batch_delete"
    METRICS_RANGE = "metrics_range"


SCHEMAS: dict[SchemaName, type[BaseModel]] = {
    SchemaName.LOGIN: LoginRequest,
    SchemaName.ADMIN_CREATE: AdminCreateRequest,
    SchemaName.PRODUCT_FILTERS: ProductFilterParams,
    SchemaName.PRODUCT_CREATE: ProductCreateRequest,
    SchemaName.PRODUCT_UPDATE: ProductUpdateRequest,
    SchemaName.PRODUCT_BATCH_DELETE: ProductBatchDeleteRequest,
    SchemaName.METRICS_RANGE: MetricsRangeParams,
}


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "__root__"


def _message(err: Mapping[str, Any]) -> str:
    # "Value error, <msg>" is pydantic's prefix for ValueError raised in validators
    msg = str(err.get("msg", "Invalid value"))
    return msg.removeprefix("Value error, ")


def validate(schema_name: SchemaName, raw: Any) -> ValidationResult:
    model = SCHEMAS[SchemaName(schema_name)]
    try:
        data = model.model_validate(raw)
    except ValidationError as exc:
        return ValidationResult.failed(
            [
                FieldError(field=_field_path(err["loc"]), message=_message(err), code=err["type"])
                for err in exc.errors()
            ]
        )
    return ValidationResult.ok(data)


def query_to_dict(params: Mapping[str, str]) -> dict[str, str]:
    """Query parameters with empty values dropped (``?search=`` means no search)."""
    return {key: value for key, value in params.items() if value != ""}
