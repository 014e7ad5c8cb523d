from __future__ import annotations

from typing import List, Optional

from .partition import PartitionNode


class NodeIterator:
    """Single-pass walk over every node of a partition tree.

    Order: a node, then its right subtree, then its left subtree. Yielding a
    node parks both children on a pending stack (left below right), and the
    top of the stack is the next node handed out. The stack never holds more
    entries than the tree is deep.
    """

    def __init__(self, root: Optional[PartitionNode]):
        self._pending: List[PartitionNode] = []
        self._current: Optional[PartitionNode] = None
        if root is not None:
            self._enter(root)

    def _enter(self, node: PartitionNode) -> None:
        if node.left is not None:
            self._pending.append(node.left)
        if node.right is not None:
            self._pending.append(node.right)
        self._current = node

    def __iter__(self):
        return self

    def __next__(self) -> PartitionNode:
        node = self._current
        if node is None:
            raise StopIteration
        self._current = None
        if self._pending:
            self._enter(self._pending.pop())
        return node


def iter_nodes(root: Optional[PartitionNode]) -> NodeIterator:
    return NodeIterator(root)


__all__ = ["NodeIterator", "iter_nodes"]
