from __future__ import annotations

import logging
from typing import Sequence

from box_optimizer.models import BestBoxResult, BoxTemplate, Item
from box_optimizer.packing.box_state import PackingBoxState
from box_optimizer.packing.first_fit import pack_item_into_box
from box_optimizer.packing.heuristics import longest_item_dimension, sort_catalog

logger = logging.getLogger(__name__)


def find_best_box(items: Sequence[Item], catalog: Sequence[BoxTemplate]) -> BestBoxResult:
    """
    Find the most preferred single box that holds the whole batch.

    Boxes are tried in preference order (see heuristics.box_preference) and
    each gets a fresh first-fit packing of every item in input order. This
    is a greedy heuristic: a box is rejected as soon as one item does not
    fit, even if another ordering of the items would have worked.

    An empty batch succeeds with no box. If no box holds everything, every
    item is reported unfit; partial packings are never returned.
    """
    if not items:
        return BestBoxResult(success=True, box=None)

    longest = longest_item_dimension(items)

    for box in sort_catalog(catalog, longest):
        state = PackingBoxState.for_box(box)
        if all(pack_item_into_box(item, state) for item in items):
            logger.debug(f"find_best_box: {len(items)} items fit in {box.id}")
            return BestBoxResult(
                success=True,
                box=box,
                packed_items=state.packed_items,
                placements=list(state.placements),
            )

    logger.debug(f"find_best_box: no single box holds {len(items)} items")
    return BestBoxResult(success=False, box=None, unfit_items=list(items))
