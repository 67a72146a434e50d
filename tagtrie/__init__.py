"""Compressed prefix tree with integer tags and a generic tree walker."""
import logging

from .config import PrinterConfig
from .errors import StaleDescriptorError, TrieError, TrieInvariantError
from .printers import BreadthTriePrinter, DepthTriePrinter, TriePrinter
from .tagged_trie import TaggedTrie, TrieNodeInfo, TrieWalker
from .walker import Node, TreeWalker, depth_first, row_order

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
  "BreadthTriePrinter",
  "DepthTriePrinter",
  "Node",
  "PrinterConfig",
  "StaleDescriptorError",
  "TaggedTrie",
  "TreeWalker",
  "TrieError",
  "TrieInvariantError",
  "TrieNodeInfo",
  "TriePrinter",
  "TrieWalker",
  "depth_first",
  "row_order",
]
