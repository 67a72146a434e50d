"""
Text renderings of a tagged trie.

Printers are pure consumers of the walker interface: they ask the trie for a
fresh walker, walk it, and format the `TrieNodeInfo` values they are handed.

- `DepthTriePrinter` → one line per node in depth-first order, indented by the
  node level (`..e [2]`).
- `BreadthTriePrinter` → one line per level in row order (`2: e [2] f [3]`).
"""
from abc import ABC, abstractmethod

from .config import PrinterConfig


class TriePrinter(ABC):
  def __init__(self, config=None):
    self.config = config or PrinterConfig()

  @abstractmethod
  def render(self, trie) -> str:
    """Return the textual rendering of `trie`."""

  def _label(self, info):
    return str(info) if self.config.show_tags else info.value


class DepthTriePrinter(TriePrinter):
  def render(self, trie):
    walker = trie.walker
    if walker.current_node() is None:
      return ""
    lines = []
    indicator = self.config.depth_indicator

    def visit(node):
      lines.append(indicator * node.value.level + self._label(node.value))
      return True

    walker.walk_depth_first(visit)
    return "".join(line + "\n" for line in lines)


class BreadthTriePrinter(TriePrinter):
  def row(self, trie):
    """Node infos of `trie` in row (breadth-first) order."""
    walker = trie.walker
    result = []
    if walker.current_node() is not None:
      walker.walk_row_order(lambda node: result.append(node.value) or True)
    return result

  def levels(self, trie):
    """Node infos of `trie` grouped per level: `levels(trie)[n]` is level n."""
    grouped = []
    for info in self.row(trie):
      if info.level == len(grouped):
        grouped.append([])
      grouped[info.level].append(info)
    return grouped

  def render(self, trie):
    sep = self.config.level_separator
    return "".join(
      f"{level}: {sep.join(self._label(info) for info in infos)}\n"
      for level, infos in enumerate(self.levels(trie)))
