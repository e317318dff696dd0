# src/box_optimizer/catalog.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from box_optimizer.models import BoxTemplate

logger = logging.getLogger(__name__)

# Internal dims in mm, max content weight in grams. Ordered smallest first for display only;
# packers always re-sort by preference score.
STANDARD_BOXES: tuple[BoxTemplate, ...] = (
    BoxTemplate(id="padded satchel", name="Padded Satchel", length=100, width=80, height=20, max_weight=300),
    BoxTemplate(id="small satchel", name="Small Satchel", length=240, width=150, height=100, max_weight=5000),
    BoxTemplate(id="small", name="Small Box", length=190, width=150, height=100, max_weight=25000),
    BoxTemplate(id="medium", name="Medium Box", length=290, width=290, height=190, max_weight=25000),
    BoxTemplate(id="bigger", name="Bigger Box", length=440, width=340, height=240, max_weight=25000),
    BoxTemplate(id="large", name="Large Box", length=500, width=100, height=100, max_weight=25000),
    BoxTemplate(id="extra large", name="Extra Large Box", length=1150, width=100, height=100, max_weight=25000),
    BoxTemplate(id="xxl", name="XXL Box", length=1570, width=100, height=100, max_weight=25000),
    BoxTemplate(id="3m box", name="3m Box", length=3050, width=150, height=150, max_weight=25000),
)


def get_box(box_id: str, catalog: Sequence[BoxTemplate] = STANDARD_BOXES) -> BoxTemplate:
    key = box_id.strip().lower()
    for box in catalog:
        if box.id.lower() == key:
            return box
    raise ValueError(f"Unknown box '{box_id}'. Valid: {sorted(b.id for b in catalog)}")


def load_catalog(path: str | Path) -> tuple[BoxTemplate, ...]:
    """
    Load a box catalog from a JSON file.

    The file must hold a non-empty array of objects with id, name, length,
    width, height and max_weight (maxWeight is accepted too). Raises
    ValueError for anything else, including invalid dimensions.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Catalog file {path} is not valid JSON: {e}") from e

    if not isinstance(data, list) or not data:
        raise ValueError(f"Catalog file {path} must contain a non-empty JSON array of boxes")

    boxes = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Catalog entry {i} in {path} is not an object")
        try:
            boxes.append(BoxTemplate(**entry))
        except ValidationError as e:
            raise ValueError(f"Catalog entry {i} in {path} is invalid: {e}") from e

    ids = [b.id for b in boxes]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Catalog file {path} has duplicate box ids")

    logger.info(f"Loaded {len(boxes)} box types from {path}")
    return tuple(boxes)
