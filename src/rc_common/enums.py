"""Global enums. Values must match the DB CHECK constraints."""

from enum import Enum


class Role(str, Enum):
    """Admin role tiers. SUPER_ADMIN strictly dominates ADMIN."""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class ProductStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"
