"""Shared constants for the XML serializer."""

DEFAULT_INDENT = "  "

DEFAULT_ENCODING = "UTF-8"

# Labels that are written to the XML declaration under a different spelling.
# Anything not listed here is emitted exactly as given.
ENCODING_ALIASES = {
    "UTF8": "UTF-8",
}

XML_NAMESPACE_URI = "http://www.w3.org/XML/1998/namespace"

# Reserved characters and their entity references.
ATTRIBUTE_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
    '"': "&quot;",
    "&": "&amp;",
}

# Quotes stay literal in character data; only markup delimiters are escaped.
ELEMENT_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
}
