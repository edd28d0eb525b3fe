"""Sitemap XML parsing into a read-only, namespace-agnostic document tree.

The validation rules only need to look things up by local tag name, so the
wrappers here hide ElementTree's ``{namespace}tag`` notation. Namespace
declarations are captured per element by the tree builder target because
ElementTree does not keep ``xmlns`` attributes.
"""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import DefusedXMLParser, ParseError

logger = logging.getLogger(__name__)

ROOT_TAG = "urlset"
ENTRY_TAG = "url"


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an ElementTree tag."""
    if isinstance(tag, str) and tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


class SitemapElement:
    """Read-only view over a parsed XML element."""

    def __init__(self, element: ET.Element):
        self._element = element

    @property
    def local_name(self) -> str:
        return local_name(self._element.tag)

    @property
    def text(self) -> str:
        """Concatenated text content of the element and its descendants."""
        return "".join(self._element.itertext())

    def get(self, attribute: str) -> str | None:
        return self._element.get(attribute)

    def _descendants(self, name: str) -> Iterator["SitemapElement"]:
        for child in self._element.iter():
            if child is not self._element and local_name(child.tag) == name:
                yield SitemapElement(child)

    def find(self, name: str) -> "SitemapElement | None":
        """First descendant with the given local name."""
        return next(self._descendants(name), None)

    def find_all(self, name: str) -> list["SitemapElement"]:
        """All descendants with the given local name, in document order."""
        return list(self._descendants(name))

    def __repr__(self) -> str:
        return f"SitemapElement({self.local_name!r})"

    @property
    def element(self) -> ET.Element:
        return self._element


class _NamespaceRecordingBuilder:
    """Tree builder target that remembers which element declared which namespaces."""

    def __init__(self):
        self._builder = ET.TreeBuilder()
        self._pending: dict[str, str] = {}
        self.declarations: dict[ET.Element, dict[str, str]] = {}

    def start_ns(self, prefix: str, uri: str) -> None:
        self._pending[prefix or ""] = uri

    def start(self, tag: str, attrib: dict[str, str]) -> ET.Element:
        element = self._builder.start(tag, attrib)
        if self._pending:
            self.declarations[element] = self._pending
            self._pending = {}
        return element

    def end(self, tag: str) -> ET.Element:
        return self._builder.end(tag)

    def data(self, data: str) -> None:
        self._builder.data(data)

    def close(self) -> ET.Element:
        return self._builder.close()


@dataclass
class SitemapDocument:
    """Parsed sitemap document.

    ``declarations`` maps elements to the namespace declarations written on
    them, keyed by prefix ("" for the default namespace).
    """
    element: ET.Element
    declarations: dict[ET.Element, dict[str, str]] = field(default_factory=dict)

    @property
    def root(self) -> SitemapElement:
        return SitemapElement(self.element)

    def find_urlset(self) -> SitemapElement | None:
        """The <urlset> element, whether it is the root or nested below it."""
        root = self.root
        if root.local_name == ROOT_TAG:
            return root
        return root.find(ROOT_TAG)

    def entries(self) -> list[SitemapElement]:
        """All <url> elements in document order."""
        root = self.root
        found = root.find_all(ENTRY_TAG)
        if root.local_name == ENTRY_TAG:
            found.insert(0, root)
        return found

    @property
    def namespace_declarations(self) -> dict[str, str]:
        """Namespaces declared on the <urlset> element itself."""
        urlset = self.find_urlset()
        if urlset is None:
            return {}
        return self.declarations.get(urlset.element, {})

    def namespace(self, prefix: str = "") -> str | None:
        return self.namespace_declarations.get(prefix)


@dataclass
class SitemapParseResult:
    """Outcome of parsing: either a document or a parse-failure message."""
    success: bool
    document: SitemapDocument | None = None
    error: str | None = None


def parse_sitemap(content: str | bytes) -> SitemapParseResult:
    """Parse sitemap XML securely with defusedxml.

    Text is fed to expat as text, so its XML declaration's encoding is not
    applied a second time; bytes are decoded as the declaration says.

    A parse failure is reported through ``success=False`` and never raised,
    so callers can tell it apart from a document that simply has no entries.
    """
    builder = _NamespaceRecordingBuilder()
    parser = DefusedXMLParser(target=builder)

    try:
        parser.feed(content)
        root = parser.close()
    except (ParseError, ET.ParseError) as e:
        logger.debug(f"XML parse error: {e}")
        return SitemapParseResult(success=False, error=f"Invalid XML format: {e}")
    except DefusedXmlException as e:
        logger.warning(f"Rejected unsafe XML construct: {e}")
        return SitemapParseResult(success=False, error=f"Forbidden XML construct: {e}")
    except UnicodeError as e:
        logger.debug(f"Undecodable sitemap content: {e}")
        return SitemapParseResult(success=False, error=f"Invalid text encoding: {e}")

    if root is None:
        return SitemapParseResult(success=False, error="Invalid XML format: no root element")

    return SitemapParseResult(
        success=True,
        document=SitemapDocument(element=root, declarations=builder.declarations),
    )
