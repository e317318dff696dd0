"""Data schemas for input/output operations."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from box_optimizer.metrics import compute_metrics
from box_optimizer.models import (
    BestBoxResult,
    BoxTemplate,
    Item,
    MultiBoxPackingResult,
    Shipment,
)

# Unit ids carry a four digit suffix
MAX_QUANTITY = 9999


class ItemSchema(BaseModel):
    """Schema for an incoming item line (mm and grams), possibly with a quantity."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id", description="Item identifier")
    name: Optional[str] = Field(default=None, description="Display name")
    sku: Optional[str] = Field(default=None, description="Stock keeping unit")
    length: float = Field(gt=0, description="Length of the item in mm")
    width: float = Field(gt=0, description="Width of the item in mm")
    height: float = Field(gt=0, description="Height of the item in mm")
    weight: float = Field(gt=0, description="Weight of the item in grams")
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY, description="Number of identical units")


def expand_items(lines: Iterable[ItemSchema]) -> List[Item]:
    """One Item per unit; ids get a _0000 style suffix when quantity > 1."""
    items: List[Item] = []
    for index, line in enumerate(lines):
        base_id = line.id or line.sku or line.name or f"item_{index}"
        for i in range(line.quantity):
            items.append(
                Item(
                    id=base_id if line.quantity == 1 else f"{base_id}_{i:04d}",
                    name=line.name,
                    sku=line.sku,
                    length=line.length,
                    width=line.width,
                    height=line.height,
                    weight=line.weight,
                )
            )
    return items


def parse_items(payload: list[dict[str, Any]]) -> List[Item]:
    """Validate raw JSON item dicts and expand quantities. Raises pydantic.ValidationError."""
    return expand_items(ItemSchema.model_validate(entry) for entry in payload)


class ShipmentSchema(BaseModel):
    """Schema for one shipped box in a response."""

    box: BoxTemplate
    packed_items: List[Item]
    placements: List[dict[str, Any]]
    metrics: dict[str, float]

    @classmethod
    def from_shipment(cls, shipment: Shipment) -> "ShipmentSchema":
        return cls(
            box=shipment.box,
            packed_items=shipment.packed_items,
            placements=[_placement_dict(p) for p in shipment.placements],
            metrics=compute_metrics(shipment.box, shipment.placements),
        )


class BestBoxResponse(BaseModel):
    """Schema for the single-box result."""

    success: bool
    box: Optional[BoxTemplate] = None
    packed_items: List[Item] = Field(default_factory=list)
    unfit_items: List[Item] = Field(default_factory=list)
    placements: List[dict[str, Any]] = Field(default_factory=list)
    metrics: Optional[dict[str, float]] = None

    @classmethod
    def from_result(cls, result: BestBoxResult) -> "BestBoxResponse":
        return cls(
            success=result.success,
            box=result.box,
            packed_items=result.packed_items,
            unfit_items=result.unfit_items,
            placements=[_placement_dict(p) for p in result.placements],
            metrics=compute_metrics(result.box, result.placements) if result.box is not None else None,
        )


class MultiBoxResponse(BaseModel):
    """Schema for the multi-box result."""

    success: bool
    shipments: List[ShipmentSchema] = Field(default_factory=list)
    unfit_items: List[Item] = Field(default_factory=list)
    box_count: int = Field(ge=0, description="Number of boxes used")

    @classmethod
    def from_result(cls, result: MultiBoxPackingResult) -> "MultiBoxResponse":
        return cls(
            success=result.success,
            shipments=[ShipmentSchema.from_shipment(s) for s in result.shipments],
            unfit_items=result.unfit_items,
            box_count=len(result.shipments),
        )


def _placement_dict(p) -> dict[str, Any]:
    w, h, d = p.dimensions
    return {
        "item_id": p.item.id,
        "x": p.x,
        "y": p.y,
        "z": p.z,
        "rotation": p.rotation,
        "width": w,
        "height": h,
        "depth": d,
    }
