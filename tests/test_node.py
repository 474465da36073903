"""Tests for the document tree model."""

import unittest

from prettyxml import (
    NO_NAMESPACE,
    XML_NAMESPACE,
    Attribute,
    Comment,
    DocType,
    Document,
    Element,
    EntityRef,
    Namespace,
    ProcessingInstruction,
    Text,
)


class TestNamespace(unittest.TestCase):
    def test_equality_and_hash_use_prefix_and_uri(self):
        assert Namespace("a", "urn:x") == Namespace("a", "urn:x")
        assert Namespace("a", "urn:x") != Namespace("b", "urn:x")
        assert Namespace("a", "urn:x") != Namespace("a", "urn:y")
        assert len({Namespace("a", "urn:x"), Namespace("a", "urn:x")}) == 1

    def test_no_namespace_sentinel(self):
        assert Namespace(None, None) == NO_NAMESPACE
        assert NO_NAMESPACE.prefix == ""
        assert NO_NAMESPACE.uri == ""

    def test_get_with_single_argument_is_default_namespace(self):
        ns = Namespace.get("urn:only")
        assert ns.prefix == ""
        assert ns.uri == "urn:only"
        assert Namespace.get("p", "urn:p") == Namespace("p", "urn:p")

    def test_namespace_is_immutable(self):
        with self.assertRaises(AttributeError):
            NO_NAMESPACE.prefix = "p"
        with self.assertRaises(AttributeError):
            Namespace("a", "urn:x").uri = "urn:y"
        with self.assertRaises(AttributeError):
            del XML_NAMESPACE.uri
        assert NO_NAMESPACE == Namespace("", "")
        assert XML_NAMESPACE.uri == "http://www.w3.org/XML/1998/namespace"

    def test_xml_namespace(self):
        assert XML_NAMESPACE.prefix == "xml"
        assert XML_NAMESPACE.uri == "http://www.w3.org/XML/1998/namespace"


class TestAttribute(unittest.TestCase):
    def test_qualified_name(self):
        assert Attribute("id", "1").qualified_name == "id"
        assert Attribute("lang", "en", XML_NAMESPACE).qualified_name == "xml:lang"

    def test_rejects_empty_name(self):
        with self.assertRaises(ValueError):
            Attribute("", "x")

    def test_rejects_non_string_value(self):
        with self.assertRaises(ValueError):
            Attribute("n", 5)


class TestElement(unittest.TestCase):
    def test_qualified_name(self):
        assert Element("a").qualified_name == "a"
        assert Element("a", Namespace("p", "urn:p")).qualified_name == "p:a"
        assert Element("a", Namespace("", "urn:d")).qualified_name == "a"

    def test_empty_name_raises(self):
        with self.assertRaises(ValueError):
            Element("")
        with self.assertRaises(ValueError):
            Element(None)

    def test_set_attribute_replaces_in_place(self):
        element = Element("a")
        element.set_attribute("x", "1").set_attribute("y", "2").set_attribute("x", "3")
        assert [(a.name, a.value) for a in element.attributes] == [("x", "3"), ("y", "2")]

    def test_set_attribute_accepts_attribute_instance(self):
        element = Element("a").set_attribute(Attribute("lang", "en", XML_NAMESPACE))
        assert element.get_attribute("xml:lang").value == "en"
        assert element.get_attribute("lang") is None

    def test_remove_attribute(self):
        element = Element("a").set_attribute("x", "1")
        assert element.remove_attribute("x") is True
        assert element.remove_attribute("x") is False
        assert element.attributes == []

    def test_add_content_wraps_strings(self):
        element = Element("a").add_content("hello")
        assert isinstance(element.content[0], Text)
        assert element.get_text() == "hello"

    def test_add_content_keeps_order_and_parent(self):
        child = Element("b")
        element = Element("a")
        element.add_content("x").add_content(child).add_content(Comment("c")).add_content(EntityRef("amp"))
        assert [type(item) for item in element.content] == [Text, Element, Comment, EntityRef]
        assert child.parent is element
        assert element.get_children() == [child]

    def test_add_content_moves_element_from_old_parent(self):
        child = Element("c")
        first = Element("a").add_content(child)
        second = Element("b").add_content(child)
        assert first.content == []
        assert second.content == [child]
        assert child.parent is second

    def test_self_and_ancestor_cycles_rejected(self):
        outer = Element("outer")
        inner = Element("inner")
        outer.add_content(inner)
        with self.assertRaises(ValueError):
            outer.add_content(outer)
        with self.assertRaises(ValueError):
            inner.add_content(outer)

    def test_unsupported_content_type_rejected(self):
        with self.assertRaises(TypeError):
            Element("a").add_content(42)
        with self.assertRaises(TypeError):
            Element("a").add_content(DocType("x"))


class TestLeafNodes(unittest.TestCase):
    def test_serialized_forms(self):
        assert Comment(" c ").serialized_form == "<!-- c -->"
        assert ProcessingInstruction("t", "d").serialized_form == "<?t d?>"
        assert EntityRef("nbsp").serialized_form == "&nbsp;"

    def test_blank_names_rejected(self):
        with self.assertRaises(ValueError):
            ProcessingInstruction("", "d")
        with self.assertRaises(ValueError):
            EntityRef("")

    def test_doctype_defaults(self):
        doctype = DocType("html")
        assert doctype.public_id == ""
        assert doctype.system_id == ""


class TestDocument(unittest.TestCase):
    def test_root_lookup(self):
        root = Element("root")
        doc = Document(root)
        assert doc.get_root_element() is root
        assert doc.content == [root]

    def test_missing_root_raises_lookup_error(self):
        doc = Document()
        doc.add_content(Comment("only"))
        assert doc.find_root_element() is None
        with self.assertRaises(LookupError):
            doc.get_root_element()

    def test_second_root_rejected(self):
        doc = Document(Element("a"))
        with self.assertRaises(ValueError):
            doc.add_content(Element("b"))

    def test_set_root_element_replaces_in_place(self):
        doc = Document()
        doc.add_content(Comment("first"))
        doc.add_content(Element("old"))
        doc.add_content(Comment("last"))
        new_root = Element("new")
        doc.set_root_element(new_root)
        assert doc.content[1] is new_root
        assert len(doc.content) == 3

    def test_set_root_element_on_empty_document(self):
        doc = Document()
        doc.set_root_element(Element("r"))
        assert doc.get_root_element().name == "r"

    def test_adopting_an_element_detaches_it(self):
        parent = Element("parent")
        child = Element("child")
        parent.add_content(child)
        doc = Document(child)
        assert child.parent is None
        assert parent.content == []
        assert doc.get_root_element() is child

    def test_processing_instructions_are_ordered(self):
        doc = Document()
        doc.add_processing_instruction(ProcessingInstruction("a", "1"))
        doc.add_processing_instruction(ProcessingInstruction("b", "2"))
        assert [pi.target for pi in doc.processing_instructions] == ["a", "b"]

    def test_processing_instruction_type_checked(self):
        with self.assertRaises(TypeError):
            Document().add_processing_instruction(Comment("no"))

    def test_unsupported_document_content_rejected(self):
        with self.assertRaises(TypeError):
            Document().add_content(EntityRef("amp"))
