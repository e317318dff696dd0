from __future__ import annotations

import logging
from typing import Sequence

from box_optimizer.models import BoxTemplate, Item, MultiBoxPackingResult, Shipment
from box_optimizer.packing.box_state import PackingBoxState
from box_optimizer.packing.first_fit import pack_item_into_box
from box_optimizer.packing.heuristics import (
    is_extreme_length_box,
    longest_item_dimension,
    needs_extreme_length,
    sort_catalog,
)
from box_optimizer.packing.selector import find_best_box

logger = logging.getLogger(__name__)


def pack_items_into_multiple_boxes(items: Sequence[Item], catalog: Sequence[BoxTemplate]) -> MultiBoxPackingResult:
    """
    Pack a batch into as few, as small boxes as the greedy heuristic finds.

    1. Try one box for everything (find_best_box). Accept it unless it is an
       extreme-length box that no item actually needs.
    2. Otherwise first-fit-decreasing: largest volume first, each item goes
       into the first open box that takes it, else into a fresh box of the
       first catalog type (by preference) that can hold it alone.

    Single forward pass, no backtracking, so the result is valid but not
    necessarily optimal. Items no box can hold end up in unfit_items.
    """
    if not items:
        return MultiBoxPackingResult(success=True)

    longest = longest_item_dimension(items)

    single = find_best_box(items, catalog)
    if single.success and single.box is not None:
        # 1500 mm cut-off is policy; keep it for compatible box choices.
        if not is_extreme_length_box(single.box) or needs_extreme_length(longest):
            return MultiBoxPackingResult(
                success=True,
                shipments=[
                    Shipment(box=single.box, packed_items=single.packed_items, placements=single.placements)
                ],
            )
        logger.debug(f"Single box {single.box.id} is longer than needed, trying multi-box packing")

    items_sorted = sorted(items, key=lambda item: item.volume, reverse=True)
    boxes_sorted = sort_catalog(catalog, longest)

    states: list[PackingBoxState] = []
    unfit: list[Item] = []

    for item in items_sorted:
        placed = False

        for idx in range(len(states)):
            if pack_item_into_box(item, states[idx]):
                placed = True
                break

        if not placed:
            for box in boxes_sorted:
                state = PackingBoxState.for_box(box)
                if pack_item_into_box(item, state):
                    states.append(state)
                    placed = True
                    logger.debug(f"Opened box #{len(states)} ({box.id}) for {item.id}")
                    break

        if not placed:
            logger.debug(f"No box can hold {item.id}")
            unfit.append(item)

    shipments = [state.to_shipment() for state in states if not state.is_empty]

    return MultiBoxPackingResult(
        success=not unfit,
        shipments=shipments,
        unfit_items=unfit,
    )
