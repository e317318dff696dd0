from __future__ import annotations

import random
from collections import Counter

import pytest

from box_optimizer.catalog import STANDARD_BOXES
from box_optimizer.models import BoxTemplate, Item
from box_optimizer.packing.constraints import check_placements
from box_optimizer.packing.multi_box import pack_items_into_multiple_boxes


def item(item_id, length, width, height, weight) -> Item:
    return Item(id=item_id, length=length, width=width, height=height, weight=weight)


def assert_valid(result, items):
    for shipment in result.shipments:
        assert shipment.packed_items, "empty boxes are never shipped"
        assert check_placements(shipment.box, shipment.placements) == []
        assert [p.item.id for p in shipment.placements] == [i.id for i in shipment.packed_items]

    packed_ids = [i.id for s in result.shipments for i in s.packed_items]
    unfit_ids = [i.id for i in result.unfit_items]
    assert Counter(packed_ids + unfit_ids) == Counter(i.id for i in items)
    assert result.success == (not result.unfit_items)


def test_empty_batch():
    result = pack_items_into_multiple_boxes([], STANDARD_BOXES)

    assert result.success is True
    assert result.shipments == []
    assert result.unfit_items == []


def test_single_small_item_single_shipment():
    items = [item("small", 10, 10, 10, 100)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert len(result.shipments) == 1
    assert result.shipments[0].box.name == "Padded Satchel"
    assert_valid(result, items)


def test_three_small_items_share_padded_satchel():
    items = [item(f"s{i}", 10, 10, 10, 100) for i in range(3)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert len(result.shipments) == 1
    assert result.shipments[0].box.name == "Padded Satchel"
    assert len(result.shipments[0].packed_items) == 3


def test_weight_pushes_batch_into_larger_box():
    items = [item(f"s{i}", 10, 10, 10, 100) for i in range(4)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert len(result.shipments) == 1
    assert result.shipments[0].box.name == "Small Box"
    assert len(result.shipments[0].packed_items) == 4
    assert_valid(result, items)


def test_two_chunky_items_share_one_box():
    items = [item("chunky1", 70, 70, 70, 600), item("chunky2", 70, 70, 70, 600)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert len(result.shipments) == 1
    assert result.shipments[0].box.name == "Small Box"
    assert len(result.shipments[0].packed_items) == 2
    assert_valid(result, items)


def test_oversize_item_is_unfit():
    items = [item("huge", 4000, 200, 200, 5000)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is False
    assert result.shipments == []
    assert [i.id for i in result.unfit_items] == ["huge"]


def test_overweight_item_is_unfit():
    items = [item("heavy", 100, 100, 100, 30000)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is False
    assert [i.id for i in result.unfit_items] == ["heavy"]


def test_long_item_in_extra_large_box():
    items = [item("long", 1000, 50, 50, 2000)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert result.shipments[0].box.name == "Extra Large Box"


def test_genuinely_long_item_keeps_extreme_box():
    # 1550 mm crosses the extreme-length threshold and still fits the XXL box
    items = [item("rail", 1550, 50, 50, 2000)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert len(result.shipments) == 1
    assert result.shipments[0].box.name == "XXL Box"


def test_item_longer_than_xxl_goes_to_3m_box():
    items = [item("pole", 1600, 50, 50, 2000)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert len(result.shipments) == 1
    assert result.shipments[0].box.name == "3m Box"


def test_unneeded_extreme_box_is_split_into_shorter_boxes():
    # Together they only fit the 3m box, but neither item needs that length.
    items = [item("bar1", 1100, 100, 100, 1000), item("bar2", 1100, 100, 100, 1000)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert [s.box.name for s in result.shipments] == ["Extra Large Box", "Extra Large Box"]
    assert [[i.id for i in s.packed_items] for s in result.shipments] == [["bar1"], ["bar2"]]
    assert_valid(result, items)


def test_mixed_batch_packs_some_and_reports_unfit():
    items = [
        item("small", 10, 10, 10, 100),
        item("heavy", 100, 100, 100, 30000),
        item("long", 1000, 50, 50, 2000),
        item("huge", 4000, 200, 200, 5000),
        item("medium", 50, 50, 50, 500),
    ]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is False
    assert [i.id for i in result.unfit_items] == ["huge", "heavy"]
    assert len(result.shipments) == 1
    assert result.shipments[0].box.name == "Extra Large Box"
    # largest volume first
    assert [i.id for i in result.shipments[0].packed_items] == ["long", "medium", "small"]
    assert_valid(result, items)


def test_many_small_items_fit_one_box():
    items = [item(f"s{i:02d}", 10, 10, 10, 100) for i in range(20)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert len(result.shipments) == 1
    assert len(result.shipments[0].packed_items) == 20


def test_total_weight_over_any_box_limit_uses_several_boxes():
    items = [item(f"w{i}", 100, 100, 100, 1000) for i in range(30)]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert result.success is True
    assert len(result.shipments) >= 2
    assert_valid(result, items)


def test_first_fit_reuses_open_boxes_before_opening_new_ones():
    crate = BoxTemplate(id="crate", name="Crate", length=10, width=10, height=10, max_weight=250)
    items = [item(f"c{i}", 5, 5, 5, 100) for i in range(5)]

    result = pack_items_into_multiple_boxes(items, [crate])

    # 2 per crate by weight
    assert [len(s.packed_items) for s in result.shipments] == [2, 2, 1]
    assert_valid(result, items)


def test_same_input_gives_same_result():
    rng = random.Random(7)
    items = [
        item(f"r{i}", rng.randint(5, 300), rng.randint(5, 300), rng.randint(5, 200), rng.randint(10, 4000))
        for i in range(25)
    ]

    first = pack_items_into_multiple_boxes(items, STANDARD_BOXES)
    second = pack_items_into_multiple_boxes(list(items), STANDARD_BOXES)

    assert first == second


@pytest.mark.parametrize("seed", range(12))
def test_random_batches_respect_box_constraints(seed):
    rng = random.Random(seed)
    count = rng.randint(1, 30)
    items = [
        item(
            f"r{seed}_{i}",
            rng.uniform(1, 1800),
            rng.uniform(1, 160),
            rng.uniform(1, 160),
            rng.uniform(1, 26000),
        )
        for i in range(count)
    ]

    result = pack_items_into_multiple_boxes(items, STANDARD_BOXES)

    assert_valid(result, items)
