from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from box_optimizer.catalog import load_catalog
from box_optimizer.config import configure_logging, get_settings
from box_optimizer.io.schemas import BestBoxResponse, MultiBoxResponse, parse_items
from box_optimizer.models import BestBoxResult, MultiBoxPackingResult
from box_optimizer.packing.constraints import check_placements
from box_optimizer.packing.multi_box import pack_items_into_multiple_boxes
from box_optimizer.packing.selector import find_best_box

logger = logging.getLogger(__name__)


def load_input(path: Path) -> list[dict]:
    """
    Read items from a JSON file: either a bare array of items or {"items": [...]}.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        if not isinstance(data.get("items"), list):
            raise ValueError("Input object must have an 'items' array")
        data = data["items"]
    if not isinstance(data, list):
        raise ValueError("Input must be a JSON array of items or an object with an 'items' array")
    return data


def verify(result: BestBoxResult | MultiBoxPackingResult) -> None:
    """Raise ValueError if any packed box breaks containment, overlap or weight limits."""
    if isinstance(result, BestBoxResult):
        packed = [(result.box, result.placements)] if result.box is not None else []
    else:
        packed = [(s.box, s.placements) for s in result.shipments]

    problems: list[str] = []
    for box, placements in packed:
        problems.extend(check_placements(box, placements))
    if problems:
        raise ValueError("Packing violates box constraints:\n" + "\n".join(problems))


def write_plan(plan: dict, path: str = "plan.json") -> None:
    """
    Write a plan dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"write_plan: writing to {output_path}")
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


def summarize(plan: dict, mode: str) -> str:
    if mode == "single":
        box = plan["box"]["name"] if plan.get("box") else "none"
        return f"success={plan['success']} box={box} unfit={len(plan['unfit_items'])}"
    boxes = ", ".join(s["box"]["name"] for s in plan["shipments"]) or "none"
    return f"success={plan['success']} boxes={plan['box_count']} [{boxes}] unfit={len(plan['unfit_items'])}"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Shipping box optimizer CLI")
    parser.add_argument("--input", required=True, help="Input items JSON file")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument(
        "--mode",
        choices=["single", "multi"],
        default="multi",
        help="single = best single box for everything, multi = split across boxes when needed",
    )
    parser.add_argument("--catalog", help="Box catalog JSON file (overrides BOX_OPTIMIZER_CATALOG)")
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check every packed box for overlaps, containment and weight before writing",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        catalog = load_catalog(args.catalog) if args.catalog else settings.catalog()
    except (ValueError, OSError) as e:
        logger.error(f"Cannot load box catalog: {e}")
        return 2

    try:
        items = parse_items(load_input(Path(args.input)))
    except ValidationError as e:
        logger.error(f"Invalid items in {args.input}: {e}")
        return 2
    except (ValueError, OSError) as e:
        logger.error(f"Cannot read items from {args.input}: {e}")
        return 2

    if args.mode == "single":
        result = find_best_box(items, catalog)
        plan = BestBoxResponse.from_result(result).model_dump()
    else:
        result = pack_items_into_multiple_boxes(items, catalog)
        plan = MultiBoxResponse.from_result(result).model_dump()

    if args.verify:
        verify(result)

    write_plan(plan, args.output)
    print(summarize(plan, args.mode))
    return 0 if plan["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
