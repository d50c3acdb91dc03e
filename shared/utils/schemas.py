"""
Pydantic schemas shared by the services and the routers.

Request bodies carry parent references as nested objects ({"province": {"id": 1}}).
Response schemas only point downwards (province -> branches -> stores), so
serialization never loops back to a parent.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# =============================================================================
# Common Types
# =============================================================================


class EntityRef(BaseModel):
    """Reference to an existing entity by id."""

    id: int | None = None


# =============================================================================
# Province Schemas
# =============================================================================


class ProvinceInput(BaseModel):
    name: str | None = None
    is_active: bool = True
    is_deleted: bool = False


# =============================================================================
# Branch Schemas
# =============================================================================


class BranchInput(BaseModel):
    name: str | None = None
    is_active: bool = True
    is_deleted: bool = False
    province: EntityRef | None = None


# =============================================================================
# Store Schemas
# =============================================================================


class StoreInput(BaseModel):
    name: str | None = None
    address: str | None = None
    is_active: bool = True
    is_deleted: bool = False
    branch: EntityRef | None = None


class WhitelistMarker(BaseModel):
    """Marks a store as whitelisted without embedding the entry."""

    id: int

    class Config:
        from_attributes = True


class StoreOutput(BaseModel):
    id: int
    name: str
    address: str
    is_active: bool
    is_deleted: bool
    branch_id: int
    whitelist_store: WhitelistMarker | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class BranchOutput(BaseModel):
    id: int
    name: str
    is_active: bool
    is_deleted: bool
    province_id: int
    stores: list[StoreOutput] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ProvinceOutput(BaseModel):
    id: int
    name: str
    is_active: bool
    is_deleted: bool
    branches: list[BranchOutput] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ProvinceStoresOutput(BaseModel):
    """Stores of one province next to the globally whitelisted stores."""

    province_stores: list[StoreOutput] = Field(default_factory=list, serialization_alias="provinceStores")
    whitelist_stores: list[StoreOutput] = Field(default_factory=list, serialization_alias="whitelistStores")


# =============================================================================
# WhitelistStore Schemas
# =============================================================================


class WhitelistStoreInput(BaseModel):
    store: EntityRef | None = None


class WhitelistStoreOutput(BaseModel):
    id: int
    store_id: int
    store: StoreOutput
    created_at: datetime | None = None

    class Config:
        from_attributes = True


# =============================================================================
# Audit Log Schemas
# =============================================================================


class AuditLogOutput(BaseModel):
    id: int
    table_name: str
    record_id: int
    action: str
    old_value: str | None = None
    new_value: str | None = None
    user_id: int | None = None
    user_email: str | None = None
    timestamp: datetime

    class Config:
        from_attributes = True
