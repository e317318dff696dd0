from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# (x, y, z): x runs along the box width, y along its height, z along its length.
Point = Tuple[float, float, float]

# Oriented item dimensions mapped onto the box axes: (width, height, depth).
Orientation = Tuple[float, float, float]


class Item(BaseModel):
    """A single physical unit to ship (millimetres and grams)."""

    id: str = Field(description="Unique identifier for the item")
    name: Optional[str] = Field(default=None, description="Display name")
    sku: Optional[str] = Field(default=None, description="Stock keeping unit")
    length: float = Field(gt=0, description="Length of the item in mm")
    width: float = Field(gt=0, description="Width of the item in mm")
    height: float = Field(gt=0, description="Height of the item in mm")
    weight: float = Field(gt=0, description="Weight of the item in grams")

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return self.length, self.width, self.height


class BoxTemplate(BaseModel):
    """Shipping box type with internal dimensions (mm) and weight limit (g)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="Unique identifier for the box type")
    name: str = Field(description="Human readable box name")
    length: float = Field(gt=0, description="Internal length in mm")
    width: float = Field(gt=0, description="Internal width in mm")
    height: float = Field(gt=0, description="Internal height in mm")
    max_weight: float = Field(
        gt=0,
        alias="maxWeight",
        description="Maximum content weight in grams",
    )

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


class PlacedItem(BaseModel):
    """An item committed to a position inside a box."""

    item: Item
    x: float = Field(ge=0, description="Offset along the box width")
    y: float = Field(ge=0, description="Offset along the box height")
    z: float = Field(ge=0, description="Offset along the box length")
    rotation: int = Field(ge=0, le=5, description="Index of the orientation used")

    # Oriented dimensions after rotation: (width, height, depth)
    dimensions: Tuple[float, float, float] = Field(
        description="Oriented dimensions (width, height, depth) of the placed item"
    )

    @property
    def position(self) -> Point:
        return (self.x, self.y, self.z)

    @property
    def bounds(self) -> Tuple[float, float, float, float, float, float]:
        w, h, d = self.dimensions
        return (self.x, self.y, self.z, self.x + w, self.y + h, self.z + d)


class BestBoxResult(BaseModel):
    """Outcome of searching for one box that holds a whole batch."""

    success: bool
    box: Optional[BoxTemplate] = None
    packed_items: list[Item] = Field(default_factory=list)
    unfit_items: list[Item] = Field(default_factory=list)
    placements: list[PlacedItem] = Field(default_factory=list)


class Shipment(BaseModel):
    """One box and everything packed into it."""

    box: BoxTemplate
    packed_items: list[Item] = Field(default_factory=list)
    placements: list[PlacedItem] = Field(default_factory=list)


class MultiBoxPackingResult(BaseModel):
    """Outcome of packing a batch across as many boxes as needed."""

    success: bool
    shipments: list[Shipment] = Field(default_factory=list)
    unfit_items: list[Item] = Field(default_factory=list)
