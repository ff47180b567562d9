"""
Unit tests for tag_extractor.py

Tests directive field splitting and allowed-tag collection.
"""

import unittest

from buildtags.models import GoSourceFile
from buildtags.parser import parse_bytes
from buildtags.tag_extractor import find_build_tags, iter_directive_fields, split_tag_fields

ALLOWED = ["xtag1", "xtag2", "xtag3"]


def _source(text: str) -> GoSourceFile:
    source = text.encode("utf-8")
    return GoSourceFile(path="/src/f.go", tree=parse_bytes(source), source=source)


class TestSplitTagFields(unittest.TestCase):
    def test_whitespace(self):
        self.assertEqual(split_tag_fields("  xtag2\txtag3 "), ["xtag2", "xtag3"])

    def test_quoted(self):
        self.assertEqual(split_tag_fields("'a b' \"c\" d"), ["a b", "c", "d"])

    def test_empty(self):
        self.assertEqual(split_tag_fields(""), [])


class TestIterDirectiveFields(unittest.TestCase):
    def test_only_build_lines(self):
        text = "/*\n+build xtag1\nnot a directive\n+build xtag2 xtag3\n*/"
        self.assertEqual(
            list(iter_directive_fields(text)),
            [["xtag1"], ["xtag2", "xtag3"]],
        )


class TestFindBuildTags(unittest.TestCase):
    def test_no_directive(self):
        tags, found = find_build_tags(_source("// Package p.\npackage p\n"), ALLOWED)

        self.assertEqual(tags, [])
        self.assertFalse(found)

    def test_single_tag(self):
        tags, found = find_build_tags(_source("// +build xtag1\n\npackage p\n"), ALLOWED)

        self.assertEqual(tags, ["xtag1"])
        self.assertTrue(found)

    def test_or_group_keeps_order_of_appearance(self):
        tags, _ = find_build_tags(_source("// +build xtag3 xtag2\n\npackage p\n"), ALLOWED)
        self.assertEqual(tags, ["xtag3", "xtag2"])

    def test_multiple_lines_are_accumulated_without_duplicates(self):
        src = "// +build xtag1 xtag2\n// +build xtag2 xtag3\n\npackage p\n"
        tags, _ = find_build_tags(_source(src), ALLOWED)
        self.assertEqual(tags, ["xtag1", "xtag2", "xtag3"])

    def test_unknown_tags_ignored(self):
        tags, found = find_build_tags(_source("// +build linux darwin\n\npackage p\n"), ALLOWED)

        self.assertEqual(tags, [])
        self.assertFalse(found)

    def test_negation_and_and_groups_are_plain_tokens(self):
        src = "// +build !xtag1 xtag1,xtag2\n\npackage p\n"
        tags, found = find_build_tags(_source(src), ALLOWED)
        self.assertFalse(found)

        tags, found = find_build_tags(_source(src), ["!xtag1"])
        self.assertEqual(tags, ["!xtag1"])

    def test_directive_inside_function_body(self):
        src = "package p\n\nfunc F() {\n\t// +build xtag2\n}\n"
        tags, _ = find_build_tags(_source(src), ALLOWED)
        self.assertEqual(tags, ["xtag2"])

    def test_build_keyword_alone_is_not_a_tag(self):
        tags, _ = find_build_tags(_source("// +build\n\npackage p\n"), ["+build", "//"])
        self.assertEqual(tags, [])


if __name__ == "__main__":
    unittest.main()
