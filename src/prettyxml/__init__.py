from .escape import escape_attribute_entities, escape_element_entities
from .node import (
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
from .serialize import NamespaceStack, XMLOutputter, canonical_encoding, to_xml

__all__ = [
    "NO_NAMESPACE",
    "XML_NAMESPACE",
    "Attribute",
    "Comment",
    "DocType",
    "Document",
    "Element",
    "EntityRef",
    "Namespace",
    "NamespaceStack",
    "ProcessingInstruction",
    "Text",
    "XMLOutputter",
    "canonical_encoding",
    "escape_attribute_entities",
    "escape_element_entities",
    "to_xml",
]
