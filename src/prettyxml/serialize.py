"""XML serialization for prettyxml document trees.

The XML declaration and processing instructions always sit on their own
lines. Empty elements are written as ``<empty />`` and text-only elements as
``<tag>content</tag>`` on a single line; everything else is expanded with one
indent unit per nesting level. For compact machine-readable output pass an
empty indent and ``newlines=False``.
"""

from __future__ import annotations

import io
from typing import Any

from .constants import DEFAULT_ENCODING, DEFAULT_INDENT, ENCODING_ALIASES
from .escape import escape_attribute_entities, escape_element_entities
from .node import (
    NO_NAMESPACE,
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


def canonical_encoding(label: str) -> str:
    """Return the spelling of an encoding label used in the XML declaration."""
    return ENCODING_ALIASES.get(label, label)


class NamespaceStack:
    """Namespace bindings declared by the element being written or its ancestors.

    One stack lives for exactly one ``output`` call. Elements push the binding
    they introduce before their attributes are written and pop it after their
    closing tag, so the stack is empty again once the document is done.
    """

    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack: list[Namespace] = []

    def push(self, namespace: Namespace) -> None:
        self._stack.append(namespace)

    def pop(self) -> Namespace:
        return self._stack.pop()

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._stack

    def __len__(self) -> int:
        return len(self._stack)

    def __iter__(self):
        return iter(self._stack)

    def __repr__(self) -> str:
        return f"NamespaceStack({self._stack!r})"


def _is_binary_sink(out: Any) -> bool:
    if isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(out, "mode", None)
    return isinstance(mode, str) and "b" in mode


class XMLOutputter:
    """Writes a Document to a text or byte sink as formatted XML.

    Configuration is fixed at construction time; the encoding label can be
    overridden for a single ``output`` call. No per-document state is kept on
    the instance, so one outputter may serve several threads at once.
    """

    __slots__ = ("_encoding", "_indent", "_newlines", "env_debug")

    # Replaceable so subclasses can observe the per-call stack.
    namespace_stack_factory = NamespaceStack

    def __init__(
        self,
        indent: str = DEFAULT_INDENT,
        newlines: bool = True,
        encoding: str = DEFAULT_ENCODING,
        *,
        debug: bool = False,
    ) -> None:
        self._indent = indent if indent is not None else ""
        self._newlines = bool(newlines)
        self._encoding = encoding or DEFAULT_ENCODING
        self.env_debug = bool(debug)

    @property
    def indent(self) -> str:
        return self._indent

    @property
    def newlines(self) -> bool:
        return self._newlines

    @property
    def encoding(self) -> str:
        return self._encoding

    def __repr__(self) -> str:
        return f"XMLOutputter(indent={self._indent!r}, newlines={self._newlines}, encoding={self._encoding!r})"

    def debug(self, message: str, indent: int = 4) -> None:
        if self.env_debug:
            print(f"{' ' * indent}{message}")

    # Public entry points

    def output(self, document: Document, out: Any, encoding: str | None = None) -> None:
        """Write ``document`` to ``out``.

        ``out`` is either a text stream or a binary stream; binary streams are
        encoded with ``encoding`` (or the configured encoding) and left open.
        ``encoding`` applies to this call only.
        """
        if not encoding:
            encoding = self._encoding
        elif self.env_debug:
            self.debug(f"encoding override for this call: {encoding!r}", indent=0)

        if not _is_binary_sink(out):
            self._write_document(document, out, encoding)
            self._flush(out)
            return

        writer = io.TextIOWrapper(out, encoding=encoding, newline="")
        try:
            self._write_document(document, writer, encoding)
        finally:
            # detach() flushes the wrapper without closing the caller's stream
            writer.detach()
        self._flush(out)

    def output_string(self, document: Document, encoding: str | None = None) -> str:
        """Return the serialized document as a string."""
        buffer = io.StringIO()
        self.output(document, buffer, encoding)
        return buffer.getvalue()

    def output_element(self, element: Element, out: Any) -> None:
        """Write a single element subtree at depth 0, without a declaration."""
        namespaces = self.namespace_stack_factory()
        self.print_element(element, out, 0, namespaces)
        self._flush(out)

    # Document driver

    def _write_document(self, document: Document, out: Any, encoding: str) -> None:
        namespaces = self.namespace_stack_factory()

        self.print_declaration(out, encoding)
        self.print_doctype(document.doctype, out)
        self.print_processing_instructions(document.processing_instructions, out)

        content = document.content
        if not content:
            if self.env_debug:
                self.debug("document has no content, nothing after the prolog", indent=0)
            return

        first = content[0]
        if isinstance(first, Comment):
            # A leading comment is written in place of the root element.
            if self.env_debug:
                self.debug("leading top-level comment replaces the root element", indent=0)
            out.write(first.serialized_form)
            return

        root = document.find_root_element()
        if root is not None:
            self.print_element(root, out, 0, namespaces)

    def _flush(self, out: Any) -> None:
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    # Formatting helpers

    def print_indent(self, out: Any, level: int) -> None:
        if level > 0 and self._indent:
            out.write(self._indent * level)

    def maybe_println(self, out: Any) -> None:
        if self._newlines:
            out.write("\n")

    def print_declaration(self, out: Any, encoding: str) -> None:
        # Version 1.0 is assumed; the tree carries no version information.
        out.write(f'<?xml version="1.0" encoding="{canonical_encoding(encoding)}"?>')
        out.write("\n")

    def print_doctype(self, doctype: DocType | None, out: Any) -> None:
        if doctype is None:
            return

        parts: list[str] = ["<!DOCTYPE ", doctype.element_name]
        has_public = False
        if doctype.public_id:
            parts.extend([' PUBLIC "', doctype.public_id, '"'])
            has_public = True
        if doctype.system_id:
            if not has_public:
                parts.append(" SYSTEM")
            parts.extend([' "', doctype.system_id, '"'])
        parts.append(">")
        out.write("".join(parts))
        out.write("\n\n")

    def print_processing_instructions(self, pis: list[ProcessingInstruction], out: Any) -> None:
        for pi in pis:
            out.write(f"<?{pi.target} {pi.data}?>")
            out.write("\n")
        out.write("\n")

    # Tree walker

    def print_element(self, element: Element, out: Any, level: int, namespaces: NamespaceStack) -> None:
        content = element.content
        empty = not content
        string_only = len(content) == 1 and isinstance(content[0], (Text, str))
        name = element.qualified_name
        if self.env_debug:
            shape = "empty" if empty else "string-only" if string_only else "complex"
            self.debug(f"<{name}> {shape} at depth {level}")

        self.maybe_println(out)
        self.print_indent(out, level)

        out.write("<")
        out.write(name)

        namespace = element.namespace
        pushed = False
        if namespace != NO_NAMESPACE and namespace not in namespaces:
            self.print_namespace(namespace, out)
            namespaces.push(namespace)
            pushed = True
            if self.env_debug:
                self.debug(f"push {namespace!r} on <{name}> (depth {len(namespaces)})")

        self.print_attributes(element.attributes, out, namespaces)

        if empty:
            out.write(" />")
        elif string_only:
            text = content[0]
            data = text.data if isinstance(text, Text) else text
            out.write(">")
            out.write(escape_element_entities(data))
            out.write(f"</{name}>")
        else:
            out.write(">")
            for item in content:
                self._print_content(item, out, level, namespaces)
            self.maybe_println(out)
            self.print_indent(out, level)
            out.write(f"</{name}>")

        if pushed:
            namespaces.pop()
            if self.env_debug:
                self.debug(f"pop {namespace!r} after </{name}>")

    def _print_content(self, item: Any, out: Any, level: int, namespaces: NamespaceStack) -> None:
        if isinstance(item, Element):
            self.print_element(item, out, level + 1, namespaces)
        elif isinstance(item, Text):
            out.write(escape_element_entities(item.data))
        elif isinstance(item, str):
            out.write(escape_element_entities(item))
        elif isinstance(item, Comment):
            self.maybe_println(out)
            self.print_indent(out, level + 1)
            out.write(item.serialized_form)
        elif isinstance(item, ProcessingInstruction):
            self.maybe_println(out)
            self.print_indent(out, level + 1)
            out.write(f"<?{item.target} {item.data}?>")
        elif isinstance(item, EntityRef):
            out.write(item.serialized_form)
        elif self.env_debug:
            self.debug(f"skipping unsupported content {type(item).__name__}")

    # Attributes and namespace declarations

    def print_namespace(self, namespace: Namespace, out: Any) -> None:
        out.write(" xmlns")
        if namespace.prefix:
            out.write(":")
            out.write(namespace.prefix)
        out.write('="')
        out.write(namespace.uri)
        out.write('"')

    def print_attributes(self, attributes: list[Attribute], out: Any, namespaces: NamespaceStack) -> None:
        # Attribute namespaces are declared on the tag that needs them but are
        # not pushed, so a descendant using the same namespace declares it again.
        declared: list[Namespace] = []
        for attribute in attributes:
            namespace = attribute.namespace
            if namespace != NO_NAMESPACE and namespace not in namespaces and namespace not in declared:
                self.print_namespace(namespace, out)
                declared.append(namespace)
            out.write(" ")
            out.write(attribute.qualified_name)
            out.write('="')
            out.write(escape_attribute_entities(attribute.value))
            out.write('"')


def to_xml(
    node: Document | Element,
    indent: str = DEFAULT_INDENT,
    newlines: bool = True,
    encoding: str = DEFAULT_ENCODING,
) -> str:
    """Convert a Document (or a lone Element subtree) to an XML string."""
    outputter = XMLOutputter(indent, newlines, encoding)
    if isinstance(node, Element):
        buffer = io.StringIO()
        outputter.output_element(node, buffer)
        return buffer.getvalue()
    return outputter.output_string(node)
