#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
red_black_tree.py
-----------------

An in‑memory ordered index built on a **Red‑Black** binary search tree.
Values are kept in ascending order (duplicates allowed, never merged) and
the tree height stays within ``2 * log2(n + 1)`` thanks to the insertion
fix‑up walk.

Features
~~~~~~~~
* `tree.insert(value)`            – BST insert followed by the red‑black repair
* `tree.in_order_traversal()`     – lazy ``(value, colour)`` pairs, ascending
* `tree.pre_order_traversal()`    – lazy ``(value, colour)`` pairs, node first
* `tree.post_order_traversal()`   – lazy ``(value, colour)`` pairs, node last
* `tree.count_nodes()`, `len(tree)`
* `tree.find_minimum()`, `tree.find_maximum()` (``None`` on an empty tree)
* `tree.find(key)`, `key in tree` – lookup by ordering key
* `tree.rotate_left()`, `tree.rotate_right()` – single rotation at the root
* `tree.validate()` – sanity‑check the red‑black invariants (debugging aid)

Nodes live in an arena owned by the tree (a plain list).  Children and
parents are integer handles into that list, so the parent back‑reference
carries no ownership and no reference cycles are created.  Slot ``0`` is a
**shared black sentinel** (`NIL`) used for every empty child slot and for
the root's parent.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_tree import RedBlackTree, RED, BLACK
>>> rbt = RedBlackTree([1, 2, 3])
>>> list(rbt.pre_order_traversal())
[(2, <Color.BLACK: 'BLACK'>), (1, <Color.RED: 'RED'>), (3, <Color.RED: 'RED'>)]
>>> rbt.find_minimum(), rbt.find_maximum()
(1, 3)
>>> RedBlackTree().find_minimum() is None
True
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import (
    Any,
    Callable,
    Generator,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Type variable (stored values; their ordering keys must be comparable)
# ----------------------------------------------------------------------
T = TypeVar("T")


class Color(Enum):
    """Colour of a tree node."""

    RED = "RED"
    BLACK = "BLACK"


RED = Color.RED
BLACK = Color.BLACK

# Handle of the shared sentinel slot.
NIL = 0


class _Node(Generic[T]):
    """Internal arena slot – not meant to be used directly by callers."""

    __slots__ = ("value", "key", "color", "left", "right", "parent")

    def __init__(
        self,
        value: Optional[T],
        key: Any,
        color: Color,
        parent: int = NIL,
    ) -> None:
        self.value = value
        self.key = key
        self.color = color
        self.left = NIL
        self.right = NIL
        self.parent = parent

    def __repr__(self) -> str:
        col = "R" if self.color is RED else "B"
        return f"<{col} {self.value!r} ^{self.parent} <{self.left} >{self.right}>"


class RedBlackTree(Generic[T]):
    """
    An ordered multiset of values backed by a red‑black tree.

    Values are ordered by ``key(value)`` (identity by default).  A value whose
    key compares equal to an existing one is routed to the right, so equal
    values keep their insertion order in an in‑order traversal.

    Parameters
    ----------
    items : iterable of T, optional
        Values inserted one by one with ``insert`` (O(n log n) overall).
    key : Callable[[T], Any], optional
        Extracts the ordering key from a value, like ``sorted(..., key=…)``.
    """

    __slots__ = ("_nodes", "_root", "_key")

    # ------------------------------------------------------------------
    #   Construction / basic container protocol
    # ------------------------------------------------------------------
    def __init__(
        self,
        items: Optional[Iterable[T]] = None,
        *,
        key: Optional[Callable[[T], Any]] = None,
    ) -> None:
        # Slot 0 is the sentinel: black, and every link points back at itself.
        self._nodes: List[_Node[T]] = [_Node(None, None, color=BLACK)]
        self._root: int = NIL
        self._key: Callable[[T], Any] = (lambda x: x) if key is None else key

        if items is not None:
            self.extend(items)

    def __len__(self) -> int:
        return len(self._nodes) - 1

    def __bool__(self) -> bool:
        return self._root != NIL

    def __iter__(self) -> Generator[T, None, None]:
        """Yield values in ascending order."""
        for value, _ in self.in_order_traversal():
            yield value

    def __contains__(self, key: object) -> bool:
        return self._lower_bound(key) != NIL

    def __repr__(self) -> str:
        return f"RedBlackTree({list(self)!r})"

    def extend(self, items: Iterable[T]) -> None:
        """Insert every value from *items*, in iteration order."""
        for item in items:
            self.insert(item)

    # ------------------------------------------------------------------
    #   Node factory
    # ------------------------------------------------------------------
    def _new_node(self, value: T, key: Any, color: Color, parent: int) -> int:
        """Append a node to the arena and return its handle."""
        self._nodes.append(_Node(value, key, color=color, parent=parent))
        return len(self._nodes) - 1

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def insert(self, value: T) -> None:
        """
        Insert *value* and restore the red‑black invariants.

        Raises ``ValueError`` for ``None`` and ``TypeError`` when the value's
        key cannot be ordered against itself or the keys already stored.  In
        both cases the tree is left untouched.
        """
        if value is None:
            raise ValueError("cannot insert None into a RedBlackTree")

        key = self._key(value)
        try:
            key < key  # noqa: B015
        except TypeError as exc:
            raise TypeError(f"key {key!r} does not support ordering") from exc

        nodes = self._nodes
        if self._root == NIL:
            self._root = self._new_node(value, key, color=RED, parent=NIL)
            nodes[self._root].color = BLACK
            return

        # Descend to an empty slot; strictly‑less goes left, the rest right.
        parent = NIL
        cur = self._root
        go_left = False
        while cur != NIL:
            parent = cur
            go_left = key < nodes[cur].key
            cur = nodes[cur].left if go_left else nodes[cur].right

        handle = self._new_node(value, key, color=RED, parent=parent)
        if go_left:
            nodes[parent].left = handle
        else:
            nodes[parent].right = handle

        self._fix_insert(handle)

    # ------------------------------------------------------------------
    #   Insert fix‑up (state machine, walks towards the root)
    # ------------------------------------------------------------------
    def _fix_insert(self, n: int) -> None:
        """Restore red‑black properties after attaching the RED node `n`."""
        nodes = self._nodes
        while True:
            if n == self._root:
                nodes[n].color = BLACK
                return

            parent = nodes[n].parent
            grandparent = nodes[parent].parent
            if grandparent == NIL or nodes[parent].color is BLACK:
                return

            parent_is_left = parent == nodes[grandparent].left
            uncle = (
                nodes[grandparent].right if parent_is_left else nodes[grandparent].left
            )

            if nodes[uncle].color is RED:
                # Red uncle – recolour and continue two levels up.
                logger.debug(
                    "red-uncle case at %r, moving up to %r",
                    nodes[n].value,
                    nodes[grandparent].value,
                )
                nodes[parent].color = BLACK
                nodes[uncle].color = BLACK
                nodes[grandparent].color = RED
                n = grandparent
                continue

            # Black (or missing) uncle – one rotation shape, then stop.
            node_is_left = n == nodes[parent].left
            if parent_is_left and node_is_left:
                logger.debug("left-left case at %r", nodes[n].value)
                self._apply_left_left_case(grandparent)
            elif parent_is_left:
                logger.debug("left-right case at %r", nodes[n].value)
                self._apply_left_right_case(parent, grandparent)
            elif not node_is_left:
                logger.debug("right-right case at %r", nodes[n].value)
                self._apply_right_right_case(grandparent)
            else:
                logger.debug("right-left case at %r", nodes[n].value)
                self._apply_right_left_case(parent, grandparent)
            return

    def _apply_left_left_case(self, grandparent: int) -> int:
        nodes = self._nodes
        great_grandparent = nodes[grandparent].parent

        new_root = self._rotate_subtree_right(grandparent)
        nodes[new_root].color = BLACK
        nodes[grandparent].color = RED

        self._reattach_to_parent(grandparent, new_root, great_grandparent)
        return new_root

    def _apply_left_right_case(self, parent: int, grandparent: int) -> int:
        # Turn the zig‑zag into a straight left‑left line first.
        new_child = self._rotate_subtree_left(parent)
        self._reattach_to_parent(parent, new_child, grandparent)
        return self._apply_left_left_case(grandparent)

    def _apply_right_right_case(self, grandparent: int) -> int:
        nodes = self._nodes
        great_grandparent = nodes[grandparent].parent

        new_root = self._rotate_subtree_left(grandparent)
        nodes[new_root].color = BLACK
        nodes[grandparent].color = RED

        self._reattach_to_parent(grandparent, new_root, great_grandparent)
        return new_root

    def _apply_right_left_case(self, parent: int, grandparent: int) -> int:
        new_child = self._rotate_subtree_right(parent)
        self._reattach_to_parent(parent, new_child, grandparent)
        return self._apply_right_right_case(grandparent)

    # ------------------------------------------------------------------
    #   Left / right rotations – helper primitives
    # ------------------------------------------------------------------
    def _rotate_subtree_left(self, h: int) -> int:
        """
        Left‑rotate the subtree rooted at `h` and return the promoted right
        child.  The old parent's child slot is NOT updated; callers follow up
        with ``_reattach_to_parent``.
        """
        nodes = self._nodes
        node = nodes[h]
        promoted = node.right
        if h == NIL or promoted == NIL:
            logger.debug("left rotation skipped: no right child under %r", node.value)
            return h

        # Hand the promoted node's left subtree over to `h`.
        node.right = nodes[promoted].left
        if node.right != NIL:
            nodes[node.right].parent = h

        nodes[promoted].left = h
        nodes[promoted].parent = node.parent
        node.parent = promoted
        return promoted

    def _rotate_subtree_right(self, h: int) -> int:
        """Mirror of ``_rotate_subtree_left``; returns the promoted left child."""
        nodes = self._nodes
        node = nodes[h]
        promoted = node.left
        if h == NIL or promoted == NIL:
            logger.debug("right rotation skipped: no left child under %r", node.value)
            return h

        node.left = nodes[promoted].right
        if node.left != NIL:
            nodes[node.left].parent = h

        nodes[promoted].right = h
        nodes[promoted].parent = node.parent
        node.parent = promoted
        return promoted

    def _reattach_to_parent(self, old_root: int, new_root: int, parent: int) -> None:
        """Point `parent`'s slot that held `old_root` (or the tree root) at `new_root`."""
        nodes = self._nodes
        if parent == NIL:
            self._root = new_root
        elif nodes[parent].left == old_root:
            nodes[parent].left = new_root
        else:
            nodes[parent].right = new_root
        nodes[new_root].parent = parent

    def rotate_left(self) -> None:
        """
        Rotate the whole tree left around its root (no‑op without a right child).

        Ordering and parent links are preserved; colours are not touched, so
        the red‑black invariants may no longer hold afterwards.
        """
        self._root = self._rotate_subtree_left(self._root)

    def rotate_right(self) -> None:
        """Rotate the whole tree right around its root (see ``rotate_left``)."""
        self._root = self._rotate_subtree_right(self._root)

    # ------------------------------------------------------------------
    #   Traversals (iterative, lazy)
    # ------------------------------------------------------------------
    def in_order_traversal(self) -> Generator[Tuple[T, Color], None, None]:
        """Yield ``(value, colour)`` pairs: left subtree, node, right subtree."""
        nodes = self._nodes
        for h in self._in_order_handles():
            yield nodes[h].value, nodes[h].color  # type: ignore[misc]

    def _in_order_handles(self) -> Generator[int, None, None]:
        nodes = self._nodes
        stack: List[int] = []
        cur = self._root
        while stack or cur != NIL:
            while cur != NIL:
                stack.append(cur)
                cur = nodes[cur].left
            cur = stack.pop()
            yield cur
            cur = nodes[cur].right

    def pre_order_traversal(self) -> Generator[Tuple[T, Color], None, None]:
        """Yield ``(value, colour)`` pairs: node, left subtree, right subtree."""
        nodes = self._nodes
        stack: List[int] = [self._root] if self._root != NIL else []
        while stack:
            cur = stack.pop()
            yield nodes[cur].value, nodes[cur].color  # type: ignore[misc]
            # Right goes on first so the left subtree is visited first.
            if nodes[cur].right != NIL:
                stack.append(nodes[cur].right)
            if nodes[cur].left != NIL:
                stack.append(nodes[cur].left)

    def post_order_traversal(self) -> Generator[Tuple[T, Color], None, None]:
        """Yield ``(value, colour)`` pairs: left subtree, right subtree, node."""
        nodes = self._nodes
        stack: List[int] = []
        cur = self._root
        last = NIL
        while stack or cur != NIL:
            if cur != NIL:
                stack.append(cur)
                cur = nodes[cur].left
                continue
            top = stack[-1]
            right = nodes[top].right
            if right != NIL and right != last:
                cur = right
            else:
                last = stack.pop()
                yield nodes[last].value, nodes[last].color  # type: ignore[misc]

    # ------------------------------------------------------------------
    #   Queries
    # ------------------------------------------------------------------
    def count_nodes(self) -> int:
        """Count the nodes reachable from the root (pre‑order walk, O(n))."""
        return sum(1 for _ in self.pre_order_traversal())

    def find_minimum(self) -> Optional[T]:
        """Return the smallest value, or ``None`` if the tree is empty."""
        nodes = self._nodes
        cur = self._root
        if cur == NIL:
            return None
        while nodes[cur].left != NIL:
            cur = nodes[cur].left
        return nodes[cur].value

    def find_maximum(self) -> Optional[T]:
        """Return the largest value, or ``None`` if the tree is empty."""
        nodes = self._nodes
        cur = self._root
        if cur == NIL:
            return None
        while nodes[cur].right != NIL:
            cur = nodes[cur].right
        return nodes[cur].value

    def _lower_bound(self, key: Any) -> int:
        """Return the first in‑order node whose key equals *key*, or `NIL`."""
        nodes = self._nodes
        candidate = NIL
        cur = self._root
        while cur != NIL:
            if nodes[cur].key < key:
                cur = nodes[cur].right
            else:
                candidate = cur
                cur = nodes[cur].left
        if candidate != NIL and key < nodes[candidate].key:
            return NIL
        return candidate

    def find(self, key: Any) -> Optional[T]:
        """
        Return the earliest inserted value whose ordering key equals *key*,
        or ``None`` when no such value is stored.
        """
        return self._nodes[self._lower_bound(key)].value

    def height(self) -> int:
        """Number of nodes on the longest root‑to‑leaf path (0 when empty)."""
        nodes = self._nodes
        best = 0
        stack: List[Tuple[int, int]] = [(self._root, 1)] if self._root != NIL else []
        while stack:
            cur, depth = stack.pop()
            best = max(best, depth)
            for child in (nodes[cur].left, nodes[cur].right):
                if child != NIL:
                    stack.append((child, depth + 1))
        return best

    # ------------------------------------------------------------------
    #   Validation/checking utilities – useful for debugging
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify that the tree satisfies all red‑black invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """
        nodes = self._nodes
        assert nodes[NIL].color is BLACK, "Sentinel is not black"
        if self._root == NIL:
            assert len(nodes) == 1, "Empty tree still owns nodes"
            return

        assert nodes[self._root].color is BLACK, "Root is not black"
        assert nodes[self._root].parent == NIL, "Root has a parent"

        def dfs(h: int) -> int:
            """Return the black height of the subtree rooted at `h`."""
            if h == NIL:
                return 1

            node = nodes[h]
            assert node.color in (RED, BLACK), f"Bad colour on {node!r}"

            for child in (node.left, node.right):
                if child == NIL:
                    continue
                assert nodes[child].parent == h, f"Parent link of {nodes[child]!r} is stale"
                if node.color is RED:
                    assert nodes[child].color is BLACK, f"Red node {node!r} has a red child"

            left_black = dfs(node.left)
            right_black = dfs(node.right)
            assert left_black == right_black, f"Black-height mismatch under {node!r}"
            return left_black + (1 if node.color is BLACK else 0)

        dfs(self._root)

        keys = [nodes[h].key for h in self._in_order_handles()]
        assert len(keys) == len(nodes) - 1, "Some nodes are detached from the root"
        for prev, nxt in zip(keys, keys[1:]):
            assert not nxt < prev, "BST ordering violated"

