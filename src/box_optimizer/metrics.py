from __future__ import annotations

from box_optimizer.models import BoxTemplate, PlacedItem


def placement_volume(p: PlacedItem) -> float:
    w, h, d = p.dimensions
    return float(w) * float(h) * float(d)


def compute_metrics(box: BoxTemplate, placements: list[PlacedItem]) -> dict[str, float]:
    """Volume and weight utilisation of one packed box (fill rates are 0..1)."""
    used_volume = sum(placement_volume(p) for p in placements)
    box_volume = float(box.length) * float(box.width) * float(box.height)
    total_weight = sum(float(p.item.weight) for p in placements)
    return {
        "used_volume": used_volume,
        "box_volume": box_volume,
        "volume_fill_rate": 0.0 if box_volume == 0 else used_volume / box_volume,
        "total_weight": total_weight,
        "weight_fill_rate": 0.0 if box.max_weight == 0 else total_weight / float(box.max_weight),
    }
