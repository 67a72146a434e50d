"""
Tagged compressed trie (radix trie) with descriptor-addressed node views.

Strings are stored on **edges**: every node carries the fragment of text that
leads to it from its parent, and shared prefixes collapse into one node. Each
stored string is marked by one or more integer tags on the node where it
ends, so the trie also answers "which inputs end here?".

Key features
------------
- **Forking insert**
  - Walks the input against node values character by character. A mismatch
    inside a node value (or an input that ends there) splits the node into the
    matched prefix plus one or two remainder children.
  - Both remainder nodes are built detached and wired in afterwards, so a
    failed fork leaves the trie untouched.
- **Descriptor addressing**
  - A node's descriptor is the first character of every value on its path from
    the root (root excluded). Siblings never share a first character, so the
    descriptor resolves with one linear child scan per character.
  - Descriptors are derived on demand and never stored; a descriptor captured
    before a fork may stop resolving, which surfaces as `StaleDescriptorError`.
- **Snapshot views**
  - `TrieNodeInfo` / `Node` objects are immutable copies. Nothing public holds
    a reference into the mutable node graph.
- **Walker**
  - `TrieWalker` implements the generic `TreeWalker` cursor on top of the
    trie's node-info provider methods, so depth-first and row-order walks come
    for free.

Classes
-------
_TrieNode
    Internal node: `value`, `level`, `parent`, `children`, `tags`.
TrieNodeInfo
    Public, frozen `(value, level, tags, descriptor)` record.
TrieWalker
    `TreeWalker[TrieNodeInfo]` bound to a node-info provider.
TaggedTrie
    Public API: construction, insertion, walking, printing and prefix queries.

Conventions & invariants
------------------------
- Siblings have pairwise distinct first characters.
- `level == parent.level + 1` for every non-root node; the root is level 0.
- The root value is empty and the root carries no tags; every other value is
  non-empty.
- Children keep insertion order, which is the order walks report them in.
- Characters compare by exact equality; there is no case folding.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Tuple

from .errors import StaleDescriptorError, TrieInvariantError
from .printers import BreadthTriePrinter
from .walker import Node, TreeWalker, depth_first, row_order

logger = logging.getLogger(__name__)


class _TrieNode:
  __slots__ = ("value", "level", "parent", "children", "tags")

  def __init__(self, value="", level=0, parent=None):
    self.value = value
    self.level = level
    self.parent = parent
    self.children = []
    self.tags = set()

  def _child(self, ch):
    """Return the child whose value starts with ch, or None."""
    for child in self.children:
      if child.value[0] == ch:
        return child
    return None


@dataclass(frozen=True)
class TrieNodeInfo:
  value: str
  level: int
  tags: Tuple[int, ...]
  descriptor: str
  # Full text spelled from the root to this node; None on hand-built infos.
  text: Optional[str] = field(default=None, compare=False, repr=False)

  def __str__(self):
    if not self.tags:
      return self.value
    return f"{self.value} [{', '.join(map(str, self.tags))}]"


class NodeInfoProvider(Protocol):
  def provide_descendant(self, current: TrieNodeInfo, descendant: TrieNodeInfo) -> Node[TrieNodeInfo]:
    ...

  def provide_predecessor(self, info: Optional[TrieNodeInfo] = None) -> Optional[Node[TrieNodeInfo]]:
    ...


class TrieWalker(TreeWalker[TrieNodeInfo]):
  """Cursor over a trie. Starts on the root; owns its own position."""

  def __init__(self, provider: NodeInfoProvider):
    self._provider = provider
    self._current = provider.provide_predecessor(None)

  def current_node(self):
    return self._current

  def go_to_node(self, descendant):
    candidate = None
    if self._current is not None:
      candidate = self._provider.provide_descendant(self._current.value, descendant)
    if candidate is not None:
      self._current = candidate
    return candidate

  def go_to_predecessor(self):
    candidate = None
    if self._current is not None:
      candidate = self._provider.provide_predecessor(self._current.value)
    if candidate is not None:
      self._current = candidate
    return candidate




#### ===================================================  ####
#    Tagged Trie
#### ===================================================  ####

class TaggedTrie:
  __slots__ = ("_root", "printer")

  def __init__(self):
    self._root = _TrieNode()
    self.printer = BreadthTriePrinter()


  @classmethod
  def from_strings(cls, strings: Iterable[str], start=1):
    """Build a trie tagging each string with its position, counting from `start`.

    Empty strings are skipped but still consume a tag.
    """
    trie = cls()
    count = 0
    for tag, s in enumerate(strings, start=start):
      trie.insert(s, tag)
      count += 1
    logger.debug("Loaded %d strings (tags %d..%d)", count, start, start + count - 1)
    return trie


  @classmethod
  def from_pairs(cls, pairs: Iterable[Tuple[str, int]]):
    """Build a trie from `(string, tag)` pairs."""
    trie = cls()
    trie.batch_insert(pairs)
    return trie


  def batch_insert(self, pairs):
    """Insert many `(string, tag)` pairs in order; returns how many were given."""
    count = 0
    for s, tag in pairs:
      self.insert(s, tag)
      count += 1
    logger.debug("Batch inserted %d pairs", count)
    return count


  @staticmethod
  def _lcp(a, b):
    """Helper to Return the length of the Longest Common Prefix between a and b."""
    i = 0
    n = min(len(a), len(b))
    while i < n and a[i] == b[i]:
      i += 1
    return i


  def insert(self, string, tag):
    """Store `string` and mark its end node with `tag`.

    - Empty or None strings are ignored.
    - Walks node values character by character. When a node value is used up,
      descends into the child starting with the next character, or appends the
      rest of the string as a new child when there is none.
    - When the string disagrees with a node value, or ends inside it, forks
      the node (see `_fork`).
    - When the string ends exactly on a node boundary, tags that node.

    Duplicate tags across different strings are not detected. Re-inserting a
    stored `(string, tag)` pair changes nothing.

    Args:
        string (str | None): Text to store.
        tag (int): Tag marking where `string` ends.

    Raises:
        TypeError: `tag` is not an integer.
        TrieInvariantError: The walk fell through without taking a branch.
    """
    if not string:
      return
    if isinstance(tag, bool) or not isinstance(tag, int):
      raise TypeError(f"tag must be an int, got {type(tag).__name__}")

    i = 0
    j = 0
    n = len(string)
    node = self._root
    while node is not None:
      if j >= len(node.value):
        if i >= n:
          node.tags.add(tag)
          return
        candidate = node._child(string[i])
        if candidate is None:
          self._branch(node, string, i, tag)
          return
        node = candidate
        j = 0
      else:
        if i >= n or string[i] != node.value[j]:
          self._fork(node, string, i, j, tag)
          return
        i += 1
        j += 1
    raise TrieInvariantError(f"Insertion of {string!r} left the trie without taking a branch")


  def _branch(self, node, string, i, tag):
    child = _TrieNode(string[i:], node.level + 1, node)
    child.tags.add(tag)
    node.children.append(child)
    if logger.isEnabledFor(logging.DEBUG):
      logger.debug("New branch %r under %r", child.value, self._descriptor_of(node))


  def _fork(self, node, string, i, j, tag):
    """Split `node` at value offset `j` while inserting `string` from offset `i`.

    The matched prefix `value[:j]` stays in `node`. Its old tail becomes the
    first child and takes over the old children and tags. The rest of the
    string, if any, becomes the second child and gets `tag`; if the string was
    used up, `node` itself gets `tag`.
    """
    split = _TrieNode(self._chunk(node.value, j), node.level + 1, node)
    split.children = node.children
    split.tags = node.tags
    rest = None
    if i < len(string):
      rest = _TrieNode(string[i:], node.level + 1, node)
      rest.tags.add(tag)

    for child in split.children:
      child.parent = split
    node.value = node.value[:j]
    if rest is None:
      node.children = [split]
      node.tags = {tag}
    else:
      node.children = [split, rest]
      node.tags = set()
    self._relevel(split)
    if logger.isEnabledFor(logging.DEBUG):
      logger.debug("Forked %r at offset %d (tail %r)", self._descriptor_of(node), j, split.value)


  @staticmethod
  def _chunk(value, start, count=None):
    if count is None:
      count = len(value) - start
    if start < 0 or count < 0 or start + count > len(value):
      raise IndexError(f"Chunk [{start}:{start + count}] out of range for value of length {len(value)}")
    return value[start:start + count]


  @staticmethod
  def _relevel(top):
    """Recompute levels breadth-first over the subtree rooted at `top`."""
    queue = deque([top])
    while queue:
      node = queue.popleft()
      node.level = 0 if node.parent is None else node.parent.level + 1
      queue.extend(node.children)


  ## ----- Descriptor addressing ----- ##

  def _node_by_descriptor(self, descriptor):
    if descriptor is None:
      raise TypeError("descriptor must be a str, got None")
    node = self._root
    for ch in descriptor:
      node = node._child(ch)
      if node is None:
        return None
    return node


  def _descriptor_of(self, node):
    chars = []
    while node is not None and node is not self._root:
      chars.append(node.value[0])
      node = node.parent
    return "".join(reversed(chars))


  def _text_of(self, node):
    parts = []
    while node is not None:
      parts.append(node.value)
      node = node.parent
    return "".join(reversed(parts))


  def _checked(self, info):
    """Resolve the node `info` was taken from, or raise if the address is stale.

    A descriptor captured before a fork can resolve to a different node that
    happens to share the same first characters, so the node must also spell
    the same text as the snapshot.
    """
    node = self._node_by_descriptor(info.descriptor)
    if node is None or (info.text is not None and self._text_of(node) != info.text):
      self._stale(info.descriptor)
    return node


  def _stale(self, descriptor):
    logger.warning("Stale node descriptor %r", descriptor)
    raise StaleDescriptorError(descriptor)


  ## ----- Public views ----- ##

  def _info(self, node):
    return TrieNodeInfo(node.value, node.level, tuple(sorted(node.tags)),
                        self._descriptor_of(node), self._text_of(node))


  def _snapshot(self, node):
    return Node(self._info(node), tuple(self._info(child) for child in node.children))


  @property
  def root(self) -> Node[TrieNodeInfo]:
    return self._snapshot(self._root)


  @property
  def walker(self) -> TrieWalker:
    """A fresh walker positioned on the root."""
    return TrieWalker(self)


  def resolve(self, descriptor) -> Node[TrieNodeInfo]:
    """Return a snapshot of the node addressed by `descriptor`.

    A bare descriptor carries nothing to compare against, so an address
    captured before a fork may resolve to a node that took its place. Walkers
    go through `provide_descendant`, which checks the snapshot.

    Raises:
        StaleDescriptorError: No node has that descriptor (any more).
    """
    node = self._node_by_descriptor(descriptor)
    if node is None:
      self._stale(descriptor)
    return self._snapshot(node)


  def provide_descendant(self, current, descendant):
    return self._snapshot(self._checked(descendant))


  def provide_predecessor(self, info=None):
    """Snapshot of the parent of `info`; the root when `info` is None.

    Returns None for the root's own info, which ends an ascent.
    """
    if info is None:
      return self._snapshot(self._root)
    node = self._checked(info)
    if node is self._root:
      return None
    return self._snapshot(node.parent)


  def walk_depth_first(self, visit, return_to_root=True):
    depth_first(self.walker, visit, return_to_root)


  def walk_row_order(self, visit, return_to_root=True):
    row_order(self.walker, visit, return_to_root)


  def __str__(self):
    if self.printer is None:
      return super().__str__()
    return self.printer.render(self)


  ## ----- Queries ----- ##

  def _locate(self, prefix):
    if not prefix:
      return self._root, ""
    node = self._root
    lcp = self._lcp
    while prefix:
      child = node._child(prefix[0])
      if child is None:
        return None, ""
      i = lcp(prefix, child.value)

      if i == len(child.value):
        prefix = prefix[i:]
        node = child
        continue

      if i == len(prefix):
        return child, child.value[i:]
      return None, ""
    return node, ""


  def prefix_search(self, prefix):
    """Locate the node for `prefix`.

    Returns:
        tuple[Node | None, str]:
            `(node, pending)` where `pending == ""` if the prefix ends exactly on
            a node boundary; otherwise `pending` is the leftover suffix of that
            node's value. `(None, "")` when no stored string starts with `prefix`.
    """
    node, pending = self._locate(prefix)
    if node is None:
      return None, ""
    return self._snapshot(node), pending


  def search(self, string):
    """Return the tags of `string` if it is stored, else an empty tuple."""
    if not string:
      return ()
    node, pending = self._locate(string)
    if node is None or pending:
      return ()
    return tuple(sorted(node.tags))


  def __contains__(self, string):
    return bool(self.search(string))


  def enumerate_prefix(self, prefix, k=None):
    """Stream `(string, tags)` for every stored string starting with `prefix`.

    Iterative DFS over a shared character buffer, in child insertion order.
    Mid-edge prefixes are handled by seeding the buffer with the rest of the
    edge. Yields at most `k` results when `k` is given.
    """
    node, pending = self._locate(prefix)
    if node is None:
      return
    if k is not None and k <= 0:
      return

    buf = list(prefix or "")
    buf.extend(pending)
    yielded = 0
    if node.tags:
      yield "".join(buf), tuple(sorted(node.tags))
      yielded += 1
      if k is not None and yielded >= k:
        return

    stack = [(iter(node.children), len(buf))]
    while stack:
      children, depth = stack[-1]
      child = next(children, None)
      if child is None:
        stack.pop()
        continue
      del buf[depth:]
      buf.extend(child.value)
      if child.tags:
        yield "".join(buf), tuple(sorted(child.tags))
        yielded += 1
        if k is not None and yielded >= k:
          return
      stack.append((iter(child.children), len(buf)))


  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count (root included), or average branching factor.

    With `get_avg_branch_factor` the result is the average out-degree over
    nodes that have children.
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self._root]
    while stack:
      node = stack.pop()
      total_nodes += 1
      deg = len(node.children)
      if deg > 0:
        total_deg += deg
        internal += 1
        stack.extend(node.children)
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes
