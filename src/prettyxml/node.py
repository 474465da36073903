"""In-memory XML tree model consumed by the serializer.

The classes here are deliberately small: they hold names, values and ordered
content, and guard only against the mistakes that would make the tree
unrepresentable (blank names, cycles, foreign objects in content lists).
"""

from .constants import XML_NAMESPACE_URI


class Namespace:
    """A prefix/URI binding. Two namespaces are equal when both parts match."""

    __slots__ = ("prefix", "uri")

    def __init__(self, prefix, uri):
        object.__setattr__(self, "prefix", prefix or "")
        object.__setattr__(self, "uri", uri or "")

    def __setattr__(self, name, value):
        # Hash and equality depend on both fields; NO_NAMESPACE is shared.
        msg = f"Namespace is immutable; cannot set {name!r}"
        raise AttributeError(msg)

    def __delattr__(self, name):
        msg = f"Namespace is immutable; cannot delete {name!r}"
        raise AttributeError(msg)

    @classmethod
    def get(cls, prefix, uri=None):
        # Namespace.get("http://x") -> default namespace bound to that URI
        if uri is None:
            return cls("", prefix)
        return cls(prefix, uri)

    def __eq__(self, other):
        if not isinstance(other, Namespace):
            return NotImplemented
        return self.prefix == other.prefix and self.uri == other.uri

    def __hash__(self):
        return hash((self.prefix, self.uri))

    def __repr__(self):
        if self is NO_NAMESPACE:
            return "Namespace(<none>)"
        return f"Namespace({self.prefix!r}, {self.uri!r})"


NO_NAMESPACE = Namespace("", "")
XML_NAMESPACE = Namespace("xml", XML_NAMESPACE_URI)


def _qualify(name, namespace):
    if namespace.prefix:
        return f"{namespace.prefix}:{name}"
    return name


class Attribute:
    __slots__ = ("name", "namespace", "value")

    def __init__(self, name, value, namespace=NO_NAMESPACE):
        if not name:
            msg = "Attribute name must be a non-empty string"
            raise ValueError(msg)
        if not isinstance(value, str):
            msg = f"Attribute {name!r} value must be a string, got {type(value).__name__}"
            raise ValueError(msg)
        self.name = name
        self.value = value
        self.namespace = namespace if namespace is not None else NO_NAMESPACE

    @property
    def qualified_name(self):
        return _qualify(self.name, self.namespace)

    def __repr__(self):
        return f"Attribute({self.qualified_name}={self.value!r})"


class Text:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data if data is not None else ""

    def __repr__(self):
        return f"Text({self.data[:30]!r})"


class Comment:
    __slots__ = ("text",)

    def __init__(self, text):
        self.text = text if text is not None else ""

    @property
    def serialized_form(self):
        return f"<!--{self.text}-->"

    def __repr__(self):
        return f"Comment({self.text[:30]!r})"


class ProcessingInstruction:
    __slots__ = ("data", "target")

    def __init__(self, target, data=""):
        if not target:
            msg = "Processing instruction target must be a non-empty string"
            raise ValueError(msg)
        self.target = target
        self.data = data if data is not None else ""

    @property
    def serialized_form(self):
        return f"<?{self.target} {self.data}?>"

    def __repr__(self):
        return f"ProcessingInstruction({self.target!r}, {self.data[:30]!r})"


class EntityRef:
    """An unexpanded entity reference such as ``&nbsp;``.

    The name is written back verbatim, so it is never escaped.
    """

    __slots__ = ("name",)

    def __init__(self, name):
        if not name:
            msg = "Entity name must be a non-empty string"
            raise ValueError(msg)
        self.name = name

    @property
    def serialized_form(self):
        return f"&{self.name};"

    def __repr__(self):
        return f"EntityRef({self.name!r})"


class DocType:
    __slots__ = ("element_name", "public_id", "system_id")

    def __init__(self, element_name, public_id="", system_id=""):
        self.element_name = element_name
        self.public_id = public_id
        self.system_id = system_id

    def __repr__(self):
        return f"DocType({self.element_name!r}, public_id={self.public_id!r}, system_id={self.system_id!r})"


_ELEMENT_CONTENT_TYPES = (Text, Comment, ProcessingInstruction, EntityRef)


class Element:
    """An XML element.

    - name: local name, e.g. 'item'
    - namespace: Namespace of the element (NO_NAMESPACE when unqualified)
    - attributes: ordered list of Attribute objects, unique by qualified name
    - content: ordered mixed content (Text, Element, Comment,
      ProcessingInstruction, EntityRef)
    - parent: enclosing Element, or None for a detached or root element
    """

    __slots__ = ("attributes", "content", "name", "namespace", "parent")

    def __init__(self, name, namespace=NO_NAMESPACE):
        if name is None or name == "":
            msg = "Empty name passed to Element constructor"
            raise ValueError(msg)
        self.name = name
        self.namespace = namespace if namespace is not None else NO_NAMESPACE
        self.attributes = []
        self.content = []
        self.parent = None

    @property
    def qualified_name(self):
        return _qualify(self.name, self.namespace)

    def set_attribute(self, name, value=None, namespace=NO_NAMESPACE):
        """Add an attribute, replacing one with the same qualified name in place.

        Accepts either an Attribute instance or a name/value pair.
        """
        attribute = name if isinstance(name, Attribute) else Attribute(name, value, namespace)
        qualified = attribute.qualified_name
        for index, existing in enumerate(self.attributes):
            if existing.qualified_name == qualified:
                self.attributes[index] = attribute
                return self
        self.attributes.append(attribute)
        return self

    def get_attribute(self, qualified_name):
        for attribute in self.attributes:
            if attribute.qualified_name == qualified_name:
                return attribute
        return None

    def remove_attribute(self, qualified_name):
        for index, attribute in enumerate(self.attributes):
            if attribute.qualified_name == qualified_name:
                del self.attributes[index]
                return True
        return False

    def add_content(self, item):
        if isinstance(item, str):
            item = Text(item)
        if isinstance(item, Element):
            if self._would_create_circular_reference(item):
                msg = f"Adding <{item.qualified_name}> as child of <{self.qualified_name}> would create circular reference"
                raise ValueError(msg)
            if item.parent is not None:
                item.parent.content.remove(item)
            item.parent = self
        elif not isinstance(item, _ELEMENT_CONTENT_TYPES):
            msg = f"Unsupported element content: {type(item).__name__}"
            raise TypeError(msg)
        self.content.append(item)
        return self

    def _would_create_circular_reference(self, child):
        current = self
        while current is not None:
            if current is child:
                return True
            current = current.parent
        return False

    def get_children(self):
        return [item for item in self.content if isinstance(item, Element)]

    def get_text(self):
        return "".join(item.data for item in self.content if isinstance(item, Text))

    def __repr__(self):
        return f"Element(<{self.qualified_name}>, content={len(self.content)})"


_DOCUMENT_CONTENT_TYPES = (Element, Comment, ProcessingInstruction, Text)


class Document:
    """A whole document: optional doctype, top-level PIs and ordered content.

    Top-level processing instructions are kept in their own list because the
    serializer writes them ahead of the element tree.
    """

    __slots__ = ("content", "doctype", "processing_instructions")

    def __init__(self, root=None, doctype=None):
        self.content = []
        self.doctype = doctype
        self.processing_instructions = []
        if root is not None:
            self.add_content(root)

    def add_content(self, item):
        if not isinstance(item, _DOCUMENT_CONTENT_TYPES):
            msg = f"Unsupported document content: {type(item).__name__}"
            raise TypeError(msg)
        if isinstance(item, Element):
            if self.find_root_element() is not None:
                msg = "Document already has a root element"
                raise ValueError(msg)
            if item.parent is not None:
                item.parent.content.remove(item)
                item.parent = None
        self.content.append(item)
        return self

    def add_processing_instruction(self, pi):
        if not isinstance(pi, ProcessingInstruction):
            msg = f"Expected ProcessingInstruction, got {type(pi).__name__}"
            raise TypeError(msg)
        self.processing_instructions.append(pi)
        return self

    def set_root_element(self, element):
        for index, item in enumerate(self.content):
            if isinstance(item, Element):
                if element.parent is not None:
                    element.parent.content.remove(element)
                    element.parent = None
                self.content[index] = element
                return self
        return self.add_content(element)

    def find_root_element(self):
        for item in self.content:
            if isinstance(item, Element):
                return item
        return None

    def get_root_element(self):
        root = self.find_root_element()
        if root is None:
            msg = "Document has no root element"
            raise LookupError(msg)
        return root

    def __repr__(self):
        return f"Document(content={len(self.content)}, pis={len(self.processing_instructions)})"
