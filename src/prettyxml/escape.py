"""Entity escaping for attribute values and character data."""

from __future__ import annotations

from .constants import ATTRIBUTE_ENTITIES, ELEMENT_ENTITIES


def _escape(text: str, entities: dict[str, str]) -> str:
    # Copy runs of plain characters with one slice each and splice the
    # replacement in at every reserved character.
    parts: list[str] = []
    last = 0
    for index, ch in enumerate(text):
        entity = entities.get(ch)
        if entity is None:
            continue
        if last < index:
            parts.append(text[last:index])
        parts.append(entity)
        last = index + 1
    if last == 0:
        return text
    if last < len(text):
        parts.append(text[last:])
    return "".join(parts)


def escape_attribute_entities(text: str | None) -> str:
    """Escape the five XML 1.0 predefined entities for a quoted attribute value."""
    if not text:
        return ""
    return _escape(str(text), ATTRIBUTE_ENTITIES)


def escape_element_entities(text: str | None) -> str:
    """Escape ``<``, ``>`` and ``&`` for element text. Quotes are left alone."""
    if not text:
        return ""
    return _escape(str(text), ELEMENT_ENTITIES)
