"""Box preference heuristics: which catalog box to try first."""

from __future__ import annotations

from typing import Iterable, Sequence

from box_optimizer.models import BoxTemplate, Item

# Policy thresholds (mm) and exponents, not derived values.
MAX_PREFERRED_LENGTH = 1200.0
LENGTH_PENALTY_FACTOR = 1.5
EXTREME_LENGTH_THRESHOLD = 1500.0
EXTREME_LENGTH_PENALTY_FACTOR = 10.0


def longest_item_dimension(items: Iterable[Item]) -> float:
    """Largest raw length, width or height across the batch (0 for an empty batch)."""
    return max((max(item.length, item.width, item.height) for item in items), default=0.0)


def box_preference(box: BoxTemplate, longest_item_length: float = 0.0) -> float:
    """
    Score a box for a batch; lower is better.

    Args:
        box: Box template to score
        longest_item_length: Longest dimension of any item in the batch

    Returns:
        Box volume scaled by a length penalty. Boxes longer than
        EXTREME_LENGTH_THRESHOLD are pushed to the back unless the batch
        really holds an item that long; boxes longer than
        MAX_PREFERRED_LENGTH pay a milder penalty.
    """
    volume = box.length * box.width * box.height

    if box.length > EXTREME_LENGTH_THRESHOLD and longest_item_length < EXTREME_LENGTH_THRESHOLD:
        return volume * (box.length / EXTREME_LENGTH_THRESHOLD) ** EXTREME_LENGTH_PENALTY_FACTOR

    if box.length > MAX_PREFERRED_LENGTH:
        length_penalty = (box.length / MAX_PREFERRED_LENGTH) ** LENGTH_PENALTY_FACTOR
    else:
        length_penalty = 1.0
    return volume * length_penalty


def sort_catalog(catalog: Sequence[BoxTemplate], longest_item_length: float = 0.0) -> list[BoxTemplate]:
    """Catalog ordered best-first. Stable, so equal scores keep catalog order."""
    return sorted(catalog, key=lambda box: box_preference(box, longest_item_length))


def needs_extreme_length(longest_item_length: float) -> bool:
    return longest_item_length >= EXTREME_LENGTH_THRESHOLD


def is_extreme_length_box(box: BoxTemplate) -> bool:
    return box.length >= EXTREME_LENGTH_THRESHOLD
