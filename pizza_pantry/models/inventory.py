"""
Inventory data models.

Defines stock items, the validated payloads that create or change them, and
the filter settings used by the inventory table.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def to_naive_local(value: datetime) -> datetime:
    """Convert an aware datetime (e.g. a "...Z" export) to naive local time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class StockStatus(str, Enum):
    """Stock level classification of an item."""
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


class InventoryItem(BaseModel):
    """Represents one stocked product."""

    model_config = ConfigDict(
        allow_inf_nan=False,
        json_schema_extra={
            "example": {
                "name": "Mozzarella",
                "category": "Cheese",
                "quantity": 12.5,
                "unit": "kg",
                "reorder_threshold": 5,
                "cost_price": 7.8,
                "location": "Walk-in cooler",
            }
        }
    )

    # Older blobs wrote "_id"
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias=AliasChoices("id", "_id"),
    )
    name: str = Field(..., min_length=1)
    category: str = ""
    unit: str = ""
    quantity: float = Field(default=0.0, ge=0.0)
    # Called "minimum stock" in an earlier revision of the data model
    reorder_threshold: float = Field(
        default=0.0,
        ge=0.0,
        validation_alias=AliasChoices(
            "reorder_threshold", "reorderThreshold", "min_stock", "minStock"
        ),
    )
    cost_price: Optional[float] = Field(
        None, ge=0.0, validation_alias=AliasChoices("cost_price", "costPrice")
    )
    location: Optional[str] = None
    notes: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime = Field(
        default_factory=datetime.now,
        validation_alias=AliasChoices("created_at", "createdAt"),
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def to_local_time(cls, v: datetime) -> datetime:
        """Store timestamps as naive local time so they always compare."""
        return to_naive_local(v)

    def is_low_stock(self) -> bool:
        """Check if item is below its reorder threshold."""
        return self.quantity < self.reorder_threshold

    def stock_status(self) -> StockStatus:
        """Classify the current stock level."""
        if self.quantity <= 0:
            return StockStatus.OUT_OF_STOCK
        if self.is_low_stock():
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    def stock_ratio(self) -> Optional[float]:
        """Quantity as a fraction of the reorder threshold, None without a threshold."""
        if not self.reorder_threshold:
            return None
        return self.quantity / self.reorder_threshold


def _check_image_url(value: str) -> str:
    if value == "":
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Must be a valid URL")
    return value


class InventoryItemData(BaseModel):
    """
    Validated add/edit payload for an inventory item.

    Everything a user may change; ``id`` and timestamps are owned by the store.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    quantity: float = Field(..., ge=0.0)
    unit: str = Field(..., min_length=1, max_length=20)
    reorder_threshold: float = Field(..., ge=0.0)
    cost_price: Optional[float] = Field(None, ge=0.0)
    location: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = None

    @field_validator('name', 'category', 'unit')
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject values made only of whitespace."""
        if not v.strip():
            raise ValueError('must not be blank')
        return v

    @field_validator('image')
    @classmethod
    def validate_image(cls, v: Optional[str]) -> Optional[str]:
        """Image must be an http(s) URL; an empty string means no image."""
        if v is None:
            return v
        return _check_image_url(v)

    def item_fields(self) -> Dict[str, Any]:
        """Mutable item fields, with an empty image normalised to None."""
        fields = self.model_dump()
        fields["image"] = self.image or None
        return fields

    @classmethod
    def from_item(cls, item: InventoryItem) -> "InventoryItemData":
        """Prefill a payload from an existing item (edit form)."""
        return cls.model_validate(
            item.model_dump(include=set(cls.model_fields))
        )


class QuantityAdjustmentData(BaseModel):
    """Validated quantity adjustment request."""

    model_config = ConfigDict(allow_inf_nan=False)

    item_id: str = Field(..., min_length=1)
    adjustment: float
    reason: str = Field(..., min_length=1, max_length=200)

    @field_validator('adjustment')
    @classmethod
    def validate_adjustment(cls, v: float) -> float:
        """Adjustment must not be zero."""
        if v == 0:
            raise ValueError('Adjustment must not be zero')
        return v

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Reason is required')
        return v


class SortField(str, Enum):
    """Columns the inventory table can sort by."""
    NAME = "name"
    CATEGORY = "category"
    QUANTITY = "quantity"
    UPDATED_AT = "updated_at"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class StatusFilter(str, Enum):
    """Stock status filter; ALL disables filtering."""
    ALL = "all"
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


class InventoryFilters(BaseModel):
    """Search, filter and sort settings for the inventory table."""

    search: str = ""
    category: str = ""
    status: StatusFilter = StatusFilter.ALL
    location: str = ""
    sort_by: SortField = SortField.NAME
    sort_direction: SortDirection = SortDirection.ASC
