from __future__ import annotations

from dataclasses import dataclass, field

from box_optimizer.geometry import ORIGIN
from box_optimizer.models import BoxTemplate, Item, PlacedItem, Point, Shipment


@dataclass
class PackingBoxState:
    """
    One open box during a packing run: its template, what has been placed,
    where the next item may go and how much weight is left.
    """

    box: BoxTemplate
    remaining_weight: float
    placements: list[PlacedItem] = field(default_factory=list)
    extreme_points: list[Point] = field(default_factory=lambda: [ORIGIN])

    @classmethod
    def for_box(cls, box: BoxTemplate) -> "PackingBoxState":
        return cls(box=box, remaining_weight=float(box.max_weight))

    @property
    def packed_items(self) -> list[Item]:
        return [p.item for p in self.placements]

    @property
    def used_weight(self) -> float:
        return sum(p.item.weight for p in self.placements)

    @property
    def is_empty(self) -> bool:
        return not self.placements

    def to_shipment(self) -> Shipment:
        return Shipment(box=self.box, packed_items=self.packed_items, placements=list(self.placements))
