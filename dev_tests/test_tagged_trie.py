import os
import sys
import logging
import unittest
from unittest import mock

# ---------------- Import shim (works from dev_tests/) ----------------
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(os.path.abspath(__file__)), os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from tagtrie import BreadthTriePrinter, TaggedTrie, TrieNodeInfo


def info(value, level, tags, descriptor):
    return TrieNodeInfo(value, level, tuple(tags), descriptor)


# Each step inserts (string, tag) and lists the expected row-order snapshot.
INSERTION_STEPS = [
    ("abcd", 1, [
        info("", 0, [], ""),
        info("abcd", 1, [1], "a"),
    ]),
    ("abcde", 2, [
        info("", 0, [], ""),
        info("abcd", 1, [1], "a"),
        info("e", 2, [2], "ae"),
    ]),
    ("abcdf", 3, [
        info("", 0, [], ""),
        info("abcd", 1, [1], "a"),
        info("e", 2, [2], "ae"),
        info("f", 2, [3], "af"),
    ]),
    ("st", 4, [
        info("", 0, [], ""),
        info("abcd", 1, [1], "a"),
        info("st", 1, [4], "s"),
        info("e", 2, [2], "ae"),
        info("f", 2, [3], "af"),
    ]),
    ("sf", 5, [
        info("", 0, [], ""),
        info("abcd", 1, [1], "a"),
        info("s", 1, [], "s"),
        info("e", 2, [2], "ae"),
        info("f", 2, [3], "af"),
        info("t", 2, [4], "st"),
        info("f", 2, [5], "sf"),
    ]),
    ("s", 6, [
        info("", 0, [], ""),
        info("abcd", 1, [1], "a"),
        info("s", 1, [6], "s"),
        info("e", 2, [2], "ae"),
        info("f", 2, [3], "af"),
        info("t", 2, [4], "st"),
        info("f", 2, [5], "sf"),
    ]),
]


class TestInsert(unittest.TestCase):
    def setUp(self):
        self.printer = BreadthTriePrinter()

    def row(self, trie):
        return self.printer.row(trie)

    def test_common_and_edge_cases(self):
        trie = TaggedTrie()
        for string, tag, expected in INSERTION_STEPS:
            with self.subTest(string=string, tag=tag):
                trie.insert(string, tag)
                self.assertEqual(self.row(trie), expected)

    def test_empty_trie_has_only_root(self):
        trie = TaggedTrie()
        self.assertEqual(self.row(trie), [info("", 0, [], "")])
        self.assertEqual(trie.count_nodes(), 1)

    def test_empty_and_none_strings_are_ignored(self):
        trie = TaggedTrie()
        trie.insert("", 1)
        trie.insert(None, 2)
        self.assertEqual(self.row(trie), [info("", 0, [], "")])

    def test_string_ending_inside_node_tags_the_prefix(self):
        trie = TaggedTrie.from_pairs([("abcd", 1), ("ab", 2)])
        self.assertEqual(self.row(trie), [
            info("", 0, [], ""),
            info("ab", 1, [2], "a"),
            info("cd", 2, [1], "ac"),
        ])

    def test_fork_relevels_whole_subtree(self):
        trie = TaggedTrie.from_pairs([("abc", 1), ("abcd", 2), ("abce", 3), ("a", 4)])
        self.assertEqual(self.row(trie), [
            info("", 0, [], ""),
            info("a", 1, [4], "a"),
            info("bc", 2, [1], "ab"),
            info("d", 3, [2], "abd"),
            info("e", 3, [3], "abe"),
        ])

    def test_fork_moves_children_and_tags_to_value_tail(self):
        trie = TaggedTrie.from_pairs([("abc", 1), ("abcd", 2), ("abx", 3)])
        self.assertEqual(self.row(trie), [
            info("", 0, [], ""),
            info("ab", 1, [], "a"),
            info("c", 2, [1], "ac"),
            info("x", 2, [3], "ax"),
            info("d", 3, [2], "acd"),
        ])

    def test_several_tags_on_one_string(self):
        trie = TaggedTrie()
        trie.insert("abc", 2)
        trie.insert("abc", 1)
        self.assertEqual(trie.search("abc"), (1, 2))

    def test_reinsert_is_idempotent(self):
        pairs = [("abc", 1), ("abd", 2), ("ab", 3), ("b", 4)]
        once = TaggedTrie.from_pairs(pairs)
        twice = TaggedTrie.from_pairs(pairs)
        twice.batch_insert(pairs)
        self.assertEqual(self.row(once), self.row(twice))
        self.assertEqual(once.count_nodes(), twice.count_nodes())

    def test_comparison_is_case_sensitive(self):
        trie = TaggedTrie.from_strings(["Apple", "apple"])
        self.assertEqual([i.value for i in self.row(trie)], ["", "Apple", "apple"])

    def test_non_integer_tag_raises(self):
        trie = TaggedTrie()
        with self.assertRaises(TypeError):
            trie.insert("abc", "1")
        with self.assertRaises(TypeError):
            trie.insert("abc", True)
        self.assertEqual(trie.count_nodes(), 1)

    def test_from_strings_counts_tags_from_start(self):
        trie = TaggedTrie.from_strings(["x", "", "y"], start=10)
        self.assertEqual(trie.search("x"), (10,))
        self.assertEqual(trie.search("y"), (12,))

    def test_chunk_out_of_range_raises(self):
        with self.assertRaises(IndexError):
            TaggedTrie._chunk("abc", 2, 5)
        self.assertEqual(TaggedTrie._chunk("abcd", 1), "bcd")


class TestInsertLogging(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("tagtrie.tagged_trie")
        self.addCleanup(self.logger.setLevel, self.logger.level)

    def test_descriptor_not_built_when_debug_is_off(self):
        self.logger.setLevel(logging.WARNING)
        with mock.patch.object(TaggedTrie, "_descriptor_of") as descriptor_of:
            TaggedTrie.from_pairs([("abc", 1), ("abd", 2), ("x", 3)])
        descriptor_of.assert_not_called()

    def test_branch_and_fork_logged_at_debug(self):
        with self.assertLogs(self.logger, level=logging.DEBUG) as logs:
            TaggedTrie.from_pairs([("abc", 1), ("abd", 2)])
        output = "\n".join(logs.output)
        self.assertIn("New branch", output)
        self.assertIn("Forked 'a' at offset 2", output)


class TestRootAndStr(unittest.TestCase):
    def test_root_snapshot_lists_children(self):
        trie = TaggedTrie.from_strings(["ab", "c"])
        root = trie.root
        self.assertEqual(root.value, info("", 0, [], ""))
        self.assertEqual(root.descendants, (info("ab", 1, [1], "a"), info("c", 1, [2], "c")))

    def test_snapshot_does_not_follow_later_inserts(self):
        trie = TaggedTrie.from_strings(["abc"])
        root = trie.root
        trie.insert("abd", 2)
        self.assertEqual(root.descendants[0].value, "abc")
        self.assertEqual(trie.root.descendants[0].value, "ab")

    def test_str_uses_breadth_printer_by_default(self):
        trie = TaggedTrie.from_strings(["abcd", "abcde", "abcdf"])
        self.assertEqual(str(trie), "0: \n1: abcd [1]\n2: e [2] f [3]\n")

    def test_str_without_printer(self):
        trie = TaggedTrie()
        trie.printer = None
        self.assertIn("TaggedTrie object", str(trie))


if __name__ == "__main__":
    unittest.main(verbosity=2)
