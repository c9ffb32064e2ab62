from __future__ import annotations

from dataclasses import dataclass
from xml.etree import ElementTree as ET

from .exceptions import ResponseParseError


def _split_tag(tag: str) -> tuple[str, str]:
    """Return (namespace_uri, local_name) for an ElementTree tag."""
    if tag.startswith("{"):
        uri, _, local = tag[1:].partition("}")
        return uri, local
    return "", tag


def parse_bool(text: str | None) -> bool | None:
    """
    Parse "true"/"false" (any case, surrounding whitespace ignored).

    Anything else returns None.
    """
    if text is None:
        return None
    value = text.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


@dataclass(frozen=True)
class ResponseDocument:
    """A parsed gateway reply, queried under its root element's namespace."""

    root: ET.Element

    @property
    def namespace_uri(self) -> str:
        return _split_tag(self.root.tag)[0]

    @property
    def child_count(self) -> int:
        return len(self.root)

    def _qualify(self, name: str) -> str:
        uri = self.namespace_uri
        return f"{{{uri}}}{name}" if uri else name

    def select_node(self, path: str) -> ET.Element | None:
        """
        Resolve an absolute path like "Response/Success".

        Every step is bound to the root element's namespace, so the first
        step must name the root element itself.
        """
        first, *rest = path.strip("/").split("/")
        if self.root.tag != self._qualify(first):
            return None
        node: ET.Element | None = self.root
        for step in rest:
            if node is None:
                return None
            node = node.find(self._qualify(step))
        return node

    def select_text(self, path: str) -> str | None:
        """Concatenated text of the node at path, or None when absent."""
        node = self.select_node(path)
        if node is None:
            return None
        return "".join(node.itertext())


def parse_response(text: str) -> ResponseDocument:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ResponseParseError(str(e)) from e
    return ResponseDocument(root=root)
