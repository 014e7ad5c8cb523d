import pytest

from bspmap.mapgen import MersenneTwister
from bspmap.mapgen.geometry import Point, Size
from bspmap.mapgen.partition import PartitionNode, build, split

from map_test_utils import all_nodes, leaves

MIN = Size(6, 6)
MAX = Size(10, 10)


def test_wide_region_always_cut_vertically():
    for seed in range(20):
        node = PartitionNode(Point(0, 0), Size(40, 20))
        assert split(node, MersenneTwister(seed), MIN, MAX)
        assert node.left.size.height == 20 and node.right.size.height == 20
        assert 6 <= node.left.size.width <= 10
        assert node.right.position == Point(node.left.size.width, 0)


def test_tall_region_always_cut_horizontally():
    for seed in range(20):
        node = PartitionNode(Point(5, 5), Size(20, 40))
        assert split(node, MersenneTwister(seed), MIN, MAX)
        assert node.left.size.width == 20 and node.right.size.width == 20
        assert node.right.position == Point(5, 5 + node.left.size.height)


def test_split_refuses_when_children_exist():
    node = PartitionNode(Point(0, 0), Size(40, 40))
    rng = MersenneTwister(3)
    assert split(node, rng, MIN, MAX)
    left, right = node.left, node.right
    assert split(node, rng, MIN, MAX) is False
    assert node.left is left and node.right is right


def test_split_rejected_when_remainder_too_small():
    # 11 wide: any offset in [6, 10] leaves fewer than 6 columns
    for seed in range(10):
        node = PartitionNode(Point(0, 0), Size(11, 8))
        assert split(node, MersenneTwister(seed), MIN, MAX) is False
        assert node.is_leaf()


def test_offset_uses_bounds_of_the_cut_axis():
    min_room, max_room = Size(6, 12), Size(8, 14)
    node = PartitionNode(Point(0, 0), Size(20, 60))
    assert split(node, MersenneTwister(11), min_room, max_room)
    assert 12 <= node.left.size.height <= 14


@pytest.mark.parametrize("seed", [0, 1, 42, 1337, 99999])
@pytest.mark.parametrize("size", [(20, 20), (40, 40), (80, 30), (25, 64)])
def test_build_invariants(seed, size):
    root = PartitionNode(Point(0, 0), Size(*size))
    build(root, MersenneTwister(seed), MIN, MAX)
    for node in all_nodes(root):
        # binary or none
        assert (node.left is None) == (node.right is None)
        if node.is_leaf():
            assert node.size.width >= MIN.width and node.size.height >= MIN.height
            continue
        l, r = node.left.region, node.right.region
        assert not l.intersects(r)
        assert node.region.contains(l) and node.region.contains(r)
        assert l.width * l.height + r.width * r.height == node.size.width * node.size.height
    area = sum(n.size.width * n.size.height for n in leaves(root))
    assert area == size[0] * size[1]


def test_build_is_deterministic():
    a = build(PartitionNode(Point(0, 0), Size(60, 60)), MersenneTwister(5), MIN, MAX)
    b = build(PartitionNode(Point(0, 0), Size(60, 60)), MersenneTwister(5), MIN, MAX)
    assert [n.region for n in all_nodes(a)] == [n.region for n in all_nodes(b)]


def test_large_region_is_subdivided():
    root = build(PartitionNode(Point(0, 0), Size(60, 60)), MersenneTwister(8), MIN, MAX)
    assert not root.is_leaf()
    assert root.depth() >= 3
