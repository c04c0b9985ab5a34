import numpy as np

from roomgraph_lib.analysis.labeler import Label, build_label_buffer
from roomgraph_lib.analysis.segmenter import Region, neighbors8, segment
from conftest import layers_from_art

FLOOR = [
    "PP...P..",
    "PPJJJ.J.",
    "..J..PP.",
    "..J.....",
    "PPP..JJP",
    "........",
]


def _labels(rows):
    return build_label_buffer(*layers_from_art(rows))


def _is_connected(cells):
    cell_set = set(cells)
    seen = {cells[0]}
    stack = [cells[0]]
    while stack:
        x, y = stack.pop()
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                n = (x + dx, y + dy)
                if n in cell_set and n not in seen:
                    seen.add(n)
                    stack.append(n)
    return seen == cell_set


def test_regions_partition_every_marked_cell():
    labels = _labels(FLOOR)
    regions = segment(labels)

    all_cells = [c for r in regions for c in r.cells]
    marked = {(x, y) for y, x in np.argwhere(labels != Label.EMPTY).tolist()}
    assert len(all_cells) == len(set(all_cells))
    assert set(all_cells) == marked


def test_regions_are_label_homogeneous_and_connected():
    labels = _labels(FLOOR)
    for region in segment(labels):
        assert {int(labels[y, x]) for x, y in region.cells} == {region.label}
        assert _is_connected(region.cells)


def test_diagonal_cells_join_the_same_region():
    labels = _labels(["P..", ".P.", "..P"])
    regions = segment(labels)

    assert len(regions) == 1
    assert sorted(regions[0].cells) == [(0, 0), (1, 1), (2, 2)]


def test_discovery_order_is_row_major():
    labels = _labels(["..P", "J..", "...", "P.."])
    regions = segment(labels)

    assert [r.cells[0] for r in regions] == [(2, 0), (0, 1), (0, 3)]
    assert [r.label for r in regions] == [Label.POINT, Label.JOINT, Label.POINT]


def test_segmentation_is_deterministic():
    labels = _labels(FLOOR)
    first = segment(labels)
    second = segment(labels)

    assert [r.cells for r in first] == [r.cells for r in second]
    assert [r.hash() for r in first] == [r.hash() for r in second]


def test_single_pixel_region_has_its_own_centroid():
    labels = _labels(["....", "..P.", "...."])
    (region,) = segment(labels)

    assert region.position() == (2, 1)
    assert region.hash() == "21"


def test_centroid_is_truncated_mean():
    region = Region(cells=[(0, 0), (1, 0), (0, 1), (2, 2)], label=Label.POINT)
    # x: 3 / 4, y: 3 / 4
    assert region.position() == (0, 0)

    region.cells.extend([(9, 9)])
    assert region.position() == (2, 2)


def test_identity_collisions_are_preserved():
    a = Region(cells=[(1, 23)], label=Label.POINT)
    b = Region(cells=[(12, 3)], label=Label.POINT)

    assert a.hash() == b.hash() == "123"


def test_neighbors8_stays_in_bounds():
    assert sorted(neighbors8((0, 0), 3, 3)) == [(0, 1), (1, 0), (1, 1)]
    assert len(list(neighbors8((1, 1), 3, 3))) == 8


def test_empty_buffer_has_no_regions():
    assert segment(_labels(["...", "..."])) == []
