"""Constraints every packed box must satisfy."""

from typing import List

from box_optimizer.geometry import boxes_overlap
from box_optimizer.models import BoxTemplate, PlacedItem


class Constraint:
    """Base class for packing constraints."""

    def violations(self, box: BoxTemplate, placements: List[PlacedItem]) -> List[str]:
        """
        Check placements inside box.

        Args:
            box: Box the items were packed into
            placements: Items placed in the box

        Returns:
            Human readable violations, empty when the constraint holds
        """
        raise NotImplementedError

    def check(self, box: BoxTemplate, placements: List[PlacedItem]) -> bool:
        return not self.violations(box, placements)


class ContainmentConstraint(Constraint):
    """Every placed item lies within the box's internal dimensions."""

    def violations(self, box: BoxTemplate, placements: List[PlacedItem]) -> List[str]:
        out = []
        for p in placements:
            x1, y1, z1, x2, y2, z2 = p.bounds
            if min(x1, y1, z1) < 0 or x2 > box.width or y2 > box.height or z2 > box.length:
                out.append(f"{p.item.id} sticks out of {box.id}: bounds {p.bounds}")
        return out


class NoOverlapConstraint(Constraint):
    """No two placed items share any volume."""

    def violations(self, box: BoxTemplate, placements: List[PlacedItem]) -> List[str]:
        out = []
        for i in range(len(placements)):
            for j in range(i + 1, len(placements)):
                a, b = placements[i], placements[j]
                if boxes_overlap(a.bounds, b.bounds):
                    out.append(f"{a.item.id} overlaps {b.item.id} in {box.id}")
        return out


class WeightConstraint(Constraint):
    """Total weight doesn't exceed the box's maximum weight."""

    def violations(self, box: BoxTemplate, placements: List[PlacedItem]) -> List[str]:
        total_weight = sum(p.item.weight for p in placements)
        if total_weight > box.max_weight:
            return [f"{box.id} carries {total_weight}g, limit is {box.max_weight}g"]
        return []


DEFAULT_CONSTRAINTS: List[Constraint] = [
    ContainmentConstraint(),
    NoOverlapConstraint(),
    WeightConstraint(),
]


def check_placements(box: BoxTemplate, placements: List[PlacedItem]) -> List[str]:
    """Run every default constraint and collect their violations."""
    out: List[str] = []
    for constraint in DEFAULT_CONSTRAINTS:
        out.extend(constraint.violations(box, placements))
    return out
