# cvrf_writer/renderer.py
"""
CVRF 1.1 XML rendering.

The Renderer walks a Document and builds an lxml tree in a fixed order:
header, document tracking, document notes, product tree, vulnerabilities.
Fields that are optional on the Document but required in a CVRF record are
checked here. In strict mode (the default) the first missing field raises
RenderViolationError. With ignore_exceptions() enabled, missing fields are
collected, the affected element is left out and rendering carries on.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from lxml import etree

from .document import Document, Note, Product, Vulnerability
from .exceptions import CvrfWriterError, InvalidArgumentError, RenderViolationError
from .utils import is_version_greater, normalize_case

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
PRODUCT_ID_PREFIX = "CVRFPID"


class CvrfNamespace(Enum):
    """XML namespaces of the CVRF 1.1 schema family."""
    CVRF = "http://www.icasi.org/CVRF/schema/cvrf/1.1"
    PROD = "http://www.icasi.org/CVRF/schema/prod/1.1"
    VULN = "http://www.icasi.org/CVRF/schema/vuln/1.1"

    def tag(self, name: str) -> str:
        """Qualified (Clark notation) tag name for an element in this namespace."""
        return f"{{{self.value}}}{name}"


NSMAP = {
    None: CvrfNamespace.CVRF.value,
    "prod": CvrfNamespace.PROD.value,
    "vuln": CvrfNamespace.VULN.value,
}


def serialize_tree(tree: etree._ElementTree, encoding: str) -> str:
    """Pretty-prints a tree with an XML declaration for the given encoding."""
    data = etree.tostring(tree, xml_declaration=True, encoding=encoding, pretty_print=True)
    return data.decode(encoding)


@dataclass
class RenderResult:
    """
    Outcome of one render() call.

    In tolerant mode the tree may be incomplete; check `violations` (or
    `is_complete`) before treating the XML as a valid CVRF record.
    """
    tree: etree._ElementTree
    encoding: str
    violations: List[RenderViolationError] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.violations

    def to_xml(self) -> str:
        return serialize_tree(self.tree, self.encoding)


class Renderer:
    """Renders one Document into a CVRF 1.1 XML tree."""

    def __init__(self, container: Document):
        self._container = container
        self._dom: Optional[etree._ElementTree] = None
        self._root_element = None
        self._ignore_exceptions = False
        self._exceptions: List[RenderViolationError] = []
        self._encoding: Optional[str] = None
        self._product_counter = 0

    # --- Configuration ---
    def get_data_container(self) -> Document:
        return self._container

    def set_encoding(self, encoding: str) -> "Renderer":
        """Overrides the declared output encoding; the document's own encoding field is left alone."""
        if not isinstance(encoding, str) or not encoding:
            raise InvalidArgumentError("Invalid parameter: encoding must be a non-empty string")
        self._encoding = encoding
        return self

    def get_encoding(self) -> str:
        if self._encoding is None:
            return self._container.get_encoding()
        return self._encoding

    def ignore_exceptions(self, flag: bool = True) -> "Renderer":
        """
        Switches between strict and tolerant rendering.

        Args:
            flag: True to collect violations instead of raising them

        Raises:
            InvalidArgumentError: If flag is not a bool
        """
        if not isinstance(flag, bool):
            raise InvalidArgumentError("Invalid parameter: flag should be True or False")
        self._ignore_exceptions = flag
        return self

    def get_exceptions(self) -> List[RenderViolationError]:
        """Violations collected by the most recent tolerant render."""
        return list(self._exceptions)

    # --- Output access ---
    def get_dom_document(self) -> Optional[etree._ElementTree]:
        return self._dom

    def get_element(self):
        if self._dom is None:
            return None
        return self._dom.getroot()

    def _set_root_element(self, root) -> None:
        self._root_element = root

    def get_root_element(self):
        return self._root_element

    def save_xml(self) -> str:
        """
        Serializes the last rendered tree.

        Raises:
            CvrfWriterError: If render() has not been called yet
        """
        if self._dom is None:
            raise CvrfWriterError("Nothing to save: render() has not been called", code="not_rendered")
        return serialize_tree(self._dom, self.get_encoding())

    # --- Rendering ---
    def render(self) -> RenderResult:
        """
        Builds the XML tree from the document's current state.

        Each call starts from an empty tree, so calling it repeatedly on an
        unchanged document yields identical output.

        Returns:
            RenderResult with the tree and any violations collected in tolerant mode

        Raises:
            RenderViolationError: In strict mode, for the first missing required field
        """
        self._exceptions = []
        self._product_counter = 0

        root = etree.Element(CvrfNamespace.CVRF.tag("cvrfdoc"), nsmap=NSMAP)
        self._dom = etree.ElementTree(root)
        self._set_root_element(root)
        logger.debug(f"Rendering CVRF document (strict={not self._ignore_exceptions}, encoding={self.get_encoding()})")

        self._set_language(root)
        self._set_document_title(root)
        self._set_document_type(root)
        self._set_document_publisher(root)
        self._set_document_tracking(root)
        self._set_document_notes(root)
        self._set_product_tree(root)
        self._set_vulnerabilities(root)

        if self._exceptions:
            logger.debug(f"Rendering finished with {len(self._exceptions)} violation(s)")
        return RenderResult(tree=self._dom, encoding=self.get_encoding(), violations=list(self._exceptions))

    def _violation(self, field_name: str, message: str) -> None:
        error = RenderViolationError(field_name, message)
        if not self._ignore_exceptions:
            raise error
        logger.debug(f"Skipping '{field_name}': {message}")
        self._exceptions.append(error)

    @staticmethod
    def _text_element(parent, namespace: CvrfNamespace, name: str, text: str):
        element = etree.SubElement(parent, namespace.tag(name))
        element.text = text
        return element

    def _set_language(self, root) -> None:
        language = self._container.get_language()
        if language:
            root.set(f"{{{XML_NAMESPACE}}}lang", language)

    def _set_document_title(self, root) -> None:
        title = self._container.get_document_title()
        if not title:
            self._violation("document_title", "CVRF document data container must contain a title")
            return
        self._text_element(root, CvrfNamespace.CVRF, "DocumentTitle", title)

    def _set_document_type(self, root) -> None:
        doc_type = self._container.get_document_type()
        if not doc_type:
            self._violation("document_type", "CVRF document data container must contain a document type")
            return
        self._text_element(root, CvrfNamespace.CVRF, "DocumentType", doc_type)

    def _set_document_publisher(self, root) -> None:
        publisher = self._container.get_document_publisher()
        if not publisher:
            self._violation("document_publisher", "CVRF document data container must contain a publisher")
            return
        element = etree.SubElement(root, CvrfNamespace.CVRF.tag("DocumentPublisher"))
        element.set("Type", normalize_case(publisher))

    def _set_document_tracking(self, root) -> None:
        tracking = etree.SubElement(root, CvrfNamespace.CVRF.tag("DocumentTracking"))

        identification = self._container.get_identification()
        if identification:
            id_element = etree.SubElement(tracking, CvrfNamespace.CVRF.tag("Identification"))
            self._text_element(id_element, CvrfNamespace.CVRF, "ID", identification)
        else:
            self._violation("identification", "CVRF document data container must contain an identification id")

        status = self._container.get_status()
        if status:
            self._text_element(tracking, CvrfNamespace.CVRF, "Status", normalize_case(status))
        else:
            self._violation("status", "CVRF document data container must contain a status")

        self._set_revision_history(tracking)

        initial = self._container.get_initial_release_date()
        if initial:
            self._text_element(tracking, CvrfNamespace.CVRF, "InitialReleaseDate", initial)
        else:
            self._violation("initial_release_date", "CVRF document data container must contain an initial release date")

        current = self._container.get_current_release_date()
        if current:
            self._text_element(tracking, CvrfNamespace.CVRF, "CurrentReleaseDate", current)
        else:
            self._violation("current_release_date", "CVRF document data container must contain a current release date")

    def _set_revision_history(self, tracking) -> None:
        revisions = self._container.get_revision_history()
        if not revisions:
            self._violation("revision_history", "CVRF document data container must contain a revision history")
            return

        # First revision seeds the maximum; later ones replace it only when strictly greater
        latest = revisions[0].version
        for revision in revisions[1:]:
            if is_version_greater(revision.version, latest):
                latest = revision.version
        self._text_element(tracking, CvrfNamespace.CVRF, "Version", latest)

        history = etree.SubElement(tracking, CvrfNamespace.CVRF.tag("RevisionHistory"))
        for revision in revisions:
            entry = etree.SubElement(history, CvrfNamespace.CVRF.tag("Revision"))
            self._text_element(entry, CvrfNamespace.CVRF, "Number", revision.version)
            self._text_element(entry, CvrfNamespace.CVRF, "Date", revision.date)
            self._text_element(entry, CvrfNamespace.CVRF, "Description", revision.description)

    def _set_document_notes(self, root) -> None:
        notes = self._container.get_document_notes()
        if not notes:
            return
        container = etree.SubElement(root, CvrfNamespace.CVRF.tag("DocumentNotes"))
        for ordinal, note in enumerate(notes, start=1):
            self._note_element(container, CvrfNamespace.CVRF, note, f"{ordinal:03d}")

    @staticmethod
    def _note_element(parent, namespace: CvrfNamespace, note: Note, ordinal: str):
        element = etree.SubElement(parent, namespace.tag("Note"))
        element.set("Title", note.title)
        element.set("Audience", note.audience)
        element.set("Type", note.type)
        element.set("Ordinal", ordinal)
        element.text = note.text
        return element

    def _set_product_tree(self, root) -> None:
        products = self._container.get_products()
        if not products:
            self._violation("products", "CVRF document data container must contain at least one product")
            return
        tree = etree.SubElement(root, CvrfNamespace.PROD.tag("ProductTree"))
        for product in products:
            self._add_product(tree, product)

    def _next_product_id(self) -> str:
        self._product_counter += 1
        return f"{PRODUCT_ID_PREFIX}-{self._product_counter:04d}"

    def _add_product(self, tree, product: Product) -> None:
        # Branches form a linear chain per product, never shared between products
        parent = tree
        for branch in product.branches:
            parent = etree.SubElement(parent, CvrfNamespace.PROD.tag("Branch"))
            parent.set("Type", branch.type)
            parent.set("Name", branch.name)

        product_id = product.product_id or self._next_product_id()
        leaf = self._text_element(parent, CvrfNamespace.PROD, "FullProductName", product.name)
        leaf.set("ProductID", product_id)

    def _set_vulnerabilities(self, root) -> None:
        for ordinal, vulnerability in enumerate(self._container.get_vulnerabilities(), start=1):
            self._add_vulnerability(root, vulnerability, ordinal)

    def _add_vulnerability(self, root, vulnerability: Vulnerability, ordinal: int) -> None:
        element = etree.SubElement(root, CvrfNamespace.VULN.tag("Vulnerability"))
        element.set("Ordinal", str(ordinal))

        if vulnerability.title:
            self._text_element(element, CvrfNamespace.VULN, "Title", vulnerability.title)
        else:
            self._violation("vulnerability_title", f"Vulnerability {ordinal} must contain a title")

        if vulnerability.notes:
            notes = etree.SubElement(element, CvrfNamespace.VULN.tag("Notes"))
            for note_ordinal, note in enumerate(vulnerability.notes, start=1):
                self._note_element(notes, CvrfNamespace.VULN, note, str(note_ordinal))
