"""
Unit tests for traversal.py

Tests declaration keys and receiver type rendering.
"""

import unittest

from buildtags.models import GoSourceFile, make_declaration_key
from buildtags.parser import parse_bytes
from buildtags.traversal import get_receiver_type, iter_declaration_keys, normalize_type_text


def _source(text: str) -> GoSourceFile:
    source = text.encode("utf-8")
    return GoSourceFile(path="/src/f.go", tree=parse_bytes(source), source=source)


def _keys(text: str):
    return list(iter_declaration_keys(_source(text)))


class TestMakeDeclarationKey(unittest.TestCase):
    def test_bare(self):
        self.assertEqual(make_declaration_key("First"), "First")

    def test_receiver(self):
        self.assertEqual(make_declaration_key("String", "A"), "A.String")

    def test_empty_receiver_is_bare(self):
        self.assertEqual(make_declaration_key("String", ""), "String")


class TestNormalizeTypeText(unittest.TestCase):
    def test_pointer(self):
        self.assertEqual(normalize_type_text("* A"), "*A")

    def test_generic(self):
        self.assertEqual(normalize_type_text("Set[K,V]"), "Set[K, V]")

    def test_multiline(self):
        self.assertEqual(normalize_type_text("Set[\n\tK,\n\tV,\n]"), "Set[K, V,]")


class TestIterDeclarationKeys(unittest.TestCase):
    def test_functions_and_methods(self):
        src = (
            "package p\n\n"
            "type A struct{}\n\n"
            "func String() string { return \"\" }\n\n"
            "func (a A) String() string { return \"\" }\n\n"
            "func (a *A) Reset() {}\n"
        )
        self.assertEqual(_keys(src), ["A", "String", "A.String", "*A.Reset"])

    def test_generic_receiver(self):
        src = (
            "package p\n\n"
            "type Set[K comparable, V any] map[K]V\n\n"
            "func (s *Set[K, V]) Len() int { return 0 }\n"
        )
        self.assertEqual(_keys(src), ["Set", "*Set[K, V].Len"])

    def test_grouped_types(self):
        src = "package p\n\ntype (\n\tA int\n\tB = string\n)\n"
        self.assertEqual(_keys(src), ["A", "B"])

    def test_multi_name_values(self):
        src = "package p\n\nvar x, y = 1, 2\n\nconst TestConst = true\n"
        self.assertEqual(_keys(src), ["x", "y", "TestConst"])

    def test_grouped_values(self):
        src = (
            "package p\n\n"
            "const (\n\tA = iota\n\tB\n)\n\n"
            "var (\n\tc int\n\td, e string\n)\n"
        )
        self.assertEqual(_keys(src), ["A", "B", "c", "d", "e"])

    def test_imports_and_locals_ignored(self):
        src = (
            "package p\n\n"
            "import \"fmt\"\n\n"
            "func F() {\n\tvar local = 1\n\tfmt.Println(local)\n}\n"
        )
        self.assertEqual(_keys(src), ["F"])

    def test_empty_file(self):
        self.assertEqual(_keys("package p\n"), [])


class TestGetReceiverType(unittest.TestCase):
    def test_value_receiver(self):
        source = _source("package p\n\nfunc (a A) M() {}\n")
        node = source.tree.root_node.named_children[1]
        self.assertEqual(get_receiver_type(source, node), "A")

    def test_unnamed_receiver(self):
        source = _source("package p\n\nfunc (*A) M() {}\n")
        node = source.tree.root_node.named_children[1]
        self.assertEqual(get_receiver_type(source, node), "*A")

    def test_function_has_no_receiver(self):
        source = _source("package p\n\nfunc M() {}\n")
        node = source.tree.root_node.named_children[1]
        self.assertIsNone(get_receiver_type(source, node))

    def test_undecodable_receiver_degrades_to_bare_name(self):
        """Files built by hand, bypassing the loader, can still fail rendering."""
        source = _source("package p\n\nfunc (a A) M() {}\n")
        node = source.tree.root_node.named_children[1]
        type_node = node.child_by_field_name("receiver").named_children[0].child_by_field_name("type")
        broken = bytearray(source.source)
        broken[type_node.start_byte] = 0xFF
        degraded = GoSourceFile(path=source.path, tree=source.tree, source=bytes(broken))

        self.assertIsNone(get_receiver_type(degraded, node))
        self.assertEqual(list(iter_declaration_keys(degraded)), ["M"])


if __name__ == "__main__":
    unittest.main()
