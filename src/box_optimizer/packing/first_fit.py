# src/box_optimizer/packing/first_fit.py

from __future__ import annotations

import logging

from box_optimizer.geometry import fits, generate_extreme_points, item_orientations
from box_optimizer.models import Item, PlacedItem
from box_optimizer.packing.box_state import PackingBoxState

logger = logging.getLogger(__name__)


def pack_item_into_box(item: Item, state: PackingBoxState) -> bool:
    """
    First-fit placement of one item into an open box.
    - Rejects at once if the item is heavier than the weight left
    - Walks extreme points in their (y, x, z) order, and the 6 rotations per point
    - Commits the FIRST feasible (point, rotation) pair, never searches for a better one
    - Deterministic (no randomness)

    Returns True when the item was committed to state.
    """
    if item.weight > state.remaining_weight:
        return False

    orientations = item_orientations(item)

    for point in state.extreme_points:
        for rot_code, orientation in enumerate(orientations):
            if not fits(state.box, point, orientation, state.placements):
                continue

            x, y, z = point
            placed = PlacedItem(
                item=item,
                x=x,
                y=y,
                z=z,
                rotation=rot_code,
                dimensions=orientation,
            )
            state.placements.append(placed)
            state.remaining_weight -= item.weight
            state.extreme_points = generate_extreme_points(state.extreme_points, placed)
            logger.debug(f"Placed {item.id} in {state.box.id} at {point} rotation={rot_code}")
            return True

    return False
