from collections import deque

from bspmap.mapgen.geometry import Point, Size
from bspmap.mapgen.partition import PartitionNode


def all_nodes(root):
    """Recursive collection, independent of NodeIterator."""
    out = [root]
    if root.left is not None:
        out.extend(all_nodes(root.left))
    if root.right is not None:
        out.extend(all_nodes(root.right))
    return out


def leaves(root):
    return [n for n in all_nodes(root) if n.is_leaf()]


def hand_tree():
    """A(B(D, E), C(F, G)) over a 40x40 region, regions tiled by hand."""
    a = PartitionNode(Point(0, 0), Size(40, 40))
    b = PartitionNode(Point(0, 0), Size(20, 40))
    c = PartitionNode(Point(20, 0), Size(20, 40))
    d = PartitionNode(Point(0, 0), Size(20, 20))
    e = PartitionNode(Point(0, 20), Size(20, 20))
    f = PartitionNode(Point(20, 0), Size(20, 20))
    g = PartitionNode(Point(20, 20), Size(20, 20))
    a.left, a.right = b, c
    b.left, b.right = d, e
    c.left, c.right = f, g
    return {"A": a, "B": b, "C": c, "D": d, "E": e, "F": f, "G": g}


def bfs_cells(cells, start):
    """Orthogonally connected subset of ``cells`` reachable from ``start``."""
    cells = set(cells)
    if start not in cells:
        return set()
    q = deque([start])
    vis = {start}
    while q:
        x, y = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            n = (x + dx, y + dy)
            if n in cells and n not in vis:
                vis.add(n)
                q.append(n)
    return vis
