"""Geometry utilities for extreme-point box packing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from box_optimizer.models import Orientation, Point

if TYPE_CHECKING:
    from .models import BoxTemplate, Item, PlacedItem

ORIGIN: Point = (0.0, 0.0, 0.0)


def boxes_overlap(
    a: tuple[float, float, float, float, float, float],
    b: tuple[float, float, float, float, float, float],
) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Overlap exists only if they overlap on ALL 3 axes with positive volume.
    Touching faces/edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    return (ax1 < bx2 and ax2 > bx1) and (ay1 < by2 and ay2 > by1) and (az1 < bz2 and az2 > bz1)


def placement_bounds(point: Point, orientation: Orientation) -> tuple[float, float, float, float, float, float]:
    x, y, z = point
    w, h, d = orientation
    return (x, y, z, x + w, y + h, z + d)


def item_orientations(item: "Item") -> list[Orientation]:
    """
    Return the 6 axis-aligned orientations as (width, height, depth).

    The index in this list is the rotation code stored on a PlacedItem:
      0:(W,H,L) 1:(L,H,W) 2:(W,L,H) 3:(H,W,L) 4:(L,W,H) 5:(H,L,W)
    Cubes are not deduplicated; repeats only cost a redundant fit check.
    """
    L, W, H = float(item.length), float(item.width), float(item.height)
    return [
        (W, H, L),
        (L, H, W),
        (W, L, H),
        (H, W, L),
        (L, W, H),
        (H, L, W),
    ]


def fits(box: "BoxTemplate", point: Point, orientation: Orientation, placements: Iterable["PlacedItem"]) -> bool:
    """
    Check if an oriented item can sit at point:
    - inside the box (x along width, y along height, z along length)
    - no overlap with items already placed
    """
    new_bounds = placement_bounds(point, orientation)

    _, _, _, x2, y2, z2 = new_bounds
    if x2 > box.width or y2 > box.height or z2 > box.length:
        return False

    for p in placements:
        if boxes_overlap(new_bounds, p.bounds):
            return False

    return True


def _inside_footprint(point: Point, placed: "PlacedItem") -> bool:
    # Half-open on every axis: points on the far faces stay usable.
    px, py, pz = point
    x1, y1, z1, x2, y2, z2 = placed.bounds
    return x1 <= px < x2 and y1 <= py < y2 and z1 <= pz < z2


def sort_points(points: Iterable[Point]) -> list[Point]:
    """Deduplicate by exact coordinates and order bottom-first, then left, then front: (y, x, z)."""
    return sorted(set(points), key=lambda t: (t[1], t[0], t[2]))


def generate_extreme_points(extreme_points: Iterable[Point], placed: "PlacedItem") -> list[Point]:
    """
    Extreme points after committing placed:
      above (x, y+h, z), beside (x+w, y, z) and behind (x, y, z+d) the new item,
    plus every earlier point that the new item does not swallow.
    """
    x, y, z = placed.position
    w, h, d = placed.dimensions

    points: list[Point] = [
        (x, y + h, z),
        (x + w, y, z),
        (x, y, z + d),
    ]
    points.extend(p for p in extreme_points if not _inside_footprint(p, placed))

    return sort_points(points)
