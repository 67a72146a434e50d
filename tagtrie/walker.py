"""
Generic tree walker: a cursor over any tree plus traversals built on it.

A structure becomes walkable by implementing three primitives on a
`TreeWalker` subclass:

- `current_node()` → the node under the cursor, or None for an empty tree
- `go_to_node(child)` → move the cursor to one of the current node's children,
  addressed by the child value listed in `Node.descendants`
- `go_to_predecessor()` → move the cursor one step toward the root

Everything else (`go_to_root`, depth-first and row-order walks) is written once
against those primitives, so the traversal logic never learns how the
structure stores its nodes.

Traversals
----------
Both walks start from the node under the cursor and keep an explicit worklist
(no recursion). Depth-first uses it as a stack and pushes children in reverse
so the leftmost child comes out first; row order uses it as a queue. The
visitor is called once per node and a falsy return value stops the walk.

Each child is reached by descending to it and ascending straight back, so the
cursor always sits on the node whose children are being listed. Worklist
entries remember the child path from the start node, which is how the cursor
is repositioned before the next node's children are listed.
"""
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Node(Generic[T]):
  """Immutable snapshot of one node: its value and its children's values."""
  value: T
  descendants: Tuple[T, ...] = ()


class TreeWalker(ABC, Generic[T]):
  """Cursor over a tree. Subclasses supply the three primitives."""

  @abstractmethod
  def current_node(self) -> Optional[Node[T]]:
    """Return the node under the cursor."""

  @abstractmethod
  def go_to_node(self, descendant: T) -> Optional[Node[T]]:
    """Move to the child `descendant` of the current node.

    Returns the child, which becomes current, or None with the cursor left
    unchanged when there is no such child.
    """

  @abstractmethod
  def go_to_predecessor(self) -> Optional[Node[T]]:
    """Move to the parent of the current node.

    Returns the parent, or None at the root (the cursor stays on the root).
    """

  def go_to_root(self):
    node = self.current_node()
    while node is not None:
      node = self.go_to_predecessor()

  def walk_depth_first(self, visit: Callable[[Node[T]], bool], return_to_root=True):
    depth_first(self, visit, return_to_root)

  def walk_row_order(self, visit: Callable[[Node[T]], bool], return_to_root=True):
    row_order(self, visit, return_to_root)


def depth_first(walker, visit, return_to_root=True):
  """Visit every node below the cursor depth-first, leftmost child first.

  Args:
      walker (TreeWalker): Cursor to drive; the walk starts at its current node.
      visit (Callable[[Node], bool]): Called per node; falsy stops the walk.
      return_to_root (bool): Leave the cursor on the root afterwards. When
          False the cursor stays wherever the last move left it.
  """
  if walker.current_node() is None:
    return
  _traverse(walker, visit, use_stack=True)
  if return_to_root:
    walker.go_to_root()


def row_order(walker, visit, return_to_root=True):
  """Visit every node below the cursor breadth-first (level by level).

  Same arguments as `depth_first`.
  """
  if walker.current_node() is None:
    return
  _traverse(walker, visit, use_stack=False)
  if return_to_root:
    walker.go_to_root()


def _traverse(walker, visit, use_stack):
  start = walker.current_node()
  if start is None:
    return
  worklist = deque([(start, ())])
  cursor = ()
  while worklist:
    node, path = worklist.pop() if use_stack else worklist.popleft()
    if not visit(node):
      break
    if not node.descendants:
      continue
    cursor = _reposition(walker, cursor, path)
    children = reversed(node.descendants) if use_stack else node.descendants
    for child in children:
      found = walker.go_to_node(child)
      if found is None:
        continue
      walker.go_to_predecessor()
      worklist.append((found, path + (child,)))


def _reposition(walker, here, there):
  """Move the cursor from child path `here` to child path `there`."""
  common = 0
  for a, b in zip(here, there):
    if a != b:
      break
    common += 1
  for _ in range(len(here) - common):
    walker.go_to_predecessor()
  for step, child in enumerate(there[common:], start=common):
    if walker.go_to_node(child) is None:
      raise LookupError(f"Can't reach node at depth {step + 1} of path {there!r}")
  return there
