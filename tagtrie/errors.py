"""Exceptions raised by the tagged trie and its walkers."""


class TrieError(Exception):
  """Base class for every error raised by tagtrie."""


class StaleDescriptorError(TrieError, LookupError):
  """A node descriptor no longer addresses any node.

  Raised when a snapshot taken before a structural change (a fork) is used to
  move a walker, or when a descriptor was fabricated outside the trie.
  """

  def __init__(self, descriptor):
    self.descriptor = descriptor
    super().__init__(
      f"Can't find node with descriptor: {descriptor!r}, "
      "maybe you have outdated node data?")


class TrieInvariantError(TrieError, RuntimeError):
  """The insertion walk left the trie without taking any branch."""
