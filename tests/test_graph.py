import pytest

from roomgraph_lib.analysis import build_floor
from roomgraph_lib.analysis.graph import RegionIndex, RegionLookupError, build_connections
from roomgraph_lib.analysis.labeler import Label, build_label_buffer
from roomgraph_lib.analysis.segmenter import segment
from conftest import layers_from_art


def _build(rows):
    return build_floor(*layers_from_art(rows))


def test_two_points_linked_through_one_joint():
    context = _build(
        [
            ".....",
            ".PJP.",
            ".....",
            ".....",
            ".....",
        ]
    )

    assert len(context.points) == 2
    assert all(p.label == Label.POINT for p in context.points)
    left, right = context.points
    assert left.hash() == "11"
    assert right.hash() == "31"
    assert left.connections == ["31"]
    assert right.connections == ["11"]


def test_points_sharing_no_joint_are_not_linked():
    context = _build(["PJ...JP", "......."])

    assert [p.connections for p in context.points] == [[], []]


def test_duplicate_edges_through_distinct_joints_are_kept():
    context = _build(
        [
            "P.P",
            "J.J",
            "P.P",
        ]
    )
    # Left column: P(0,0) J(0,1) P(0,2); the right column mirrors it.
    top_left = next(p for p in context.points if p.cells[0] == (0, 0))
    assert top_left.connections == ["02"]

    context = _build(
        [
            "PPPPP",
            "J...J",
            "PPPPP",
        ]
    )
    top, bottom = context.points
    assert top.connections == [bottom.hash(), bottom.hash()]
    assert bottom.connections == [top.hash(), top.hash()]


def test_joint_touching_three_points_links_each_pair():
    context = _build(
        [
            "P.P",
            ".J.",
            "..P",
        ]
    )
    hashes = {p.hash() for p in context.points}
    for point in context.points:
        assert sorted(point.connections) == sorted(hashes - {point.hash()})


def test_no_point_connects_to_itself():
    context = _build(
        [
            "PPJ..",
            "..JPP",
            "JJJ..",
            "P..JP",
        ]
    )
    for point in context.points:
        assert point.hash() not in point.connections


def test_adjacency_is_symmetric():
    labels = build_label_buffer(
        *layers_from_art(
            [
                "PPJ.P",
                "..JJ.",
                "P.J.P",
                "JJ...",
            ]
        )
    )
    regions = segment(labels)
    index = RegionIndex(regions, labels)

    for a in regions:
        for b in regions:
            a_touches_b = any(r is b for r in index.adjacent(a))
            b_touches_a = any(r is a for r in index.adjacent(b))
            assert a_touches_b == b_touches_a


def test_adjacent_regions_are_reported_once():
    labels = build_label_buffer(*layers_from_art(["PPP", "JJJ"]))
    regions = segment(labels)
    index = RegionIndex(regions, labels)
    point, joint = regions

    assert index.adjacent(point) == [joint]
    assert index.adjacent(joint) == [point]


def test_joints_are_not_part_of_points_list():
    context = _build(["PJ", "JP"])

    assert len(context.joints) >= 1
    assert all(j.label == Label.JOINT for j in context.joints)
    assert not any(j in context.points for j in context.joints)


def test_unowned_marked_cell_aborts():
    labels = build_label_buffer(*layers_from_art(["PJ"]))
    regions = segment(labels)
    # Drop the joint region to simulate corrupted segmentation state.
    index = RegionIndex(regions[:1], labels)

    with pytest.raises(RegionLookupError):
        build_connections(regions[:1], index)


def _corridor_floor(rooms):
    """One corridor joint along row 2 with `rooms` 2x2 rooms on top of it."""
    width = rooms * 3 + 1
    top = "".join(".PP" for _ in range(rooms)) + "."
    return [top, top, "J" * width, "." * width]


def test_shared_corridor_adjacency_is_computed_once(mocker):
    labels = build_label_buffer(*layers_from_art(_corridor_floor(6)))
    regions = segment(labels)
    index = RegionIndex(regions, labels)
    spy = mocker.spy(RegionIndex, "_build_adjacency")

    build_connections(regions, index)

    assert spy.call_count == 1
    points = [r for r in regions if r.label == Label.POINT]
    assert len(points) == 6
    for point in points:
        assert len(point.connections) == 5
        assert point.hash() not in point.connections


def test_adjacency_matches_cell_by_cell_scan():
    labels = build_label_buffer(
        *layers_from_art(
            [
                "PPJ.P.J",
                "..JJ.PJ",
                "P.J.P..",
                "JJ...JP",
            ]
        )
    )
    regions = segment(labels)
    index = RegionIndex(regions, labels)
    height, width = labels.shape

    for i, region in enumerate(regions):
        expected = set()
        for x, y in region.cells:
            for nx in range(x - 1, x + 2):
                for ny in range(y - 1, y + 2):
                    if 0 <= nx < width and 0 <= ny < height:
                        if labels[ny, nx] not in (Label.EMPTY, region.label):
                            expected.add(index.index_at((nx, ny)))
        assert index.neighbours(i) == sorted(expected)


def test_unowned_cell_fails_on_adjacency_query():
    labels = build_label_buffer(*layers_from_art(["P..", "..J"]))
    regions = segment(labels)
    index = RegionIndex(regions[:1], labels)

    with pytest.raises(RegionLookupError, match="No region owns"):
        index.adjacent(regions[0])
