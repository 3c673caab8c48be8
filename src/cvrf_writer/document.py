# cvrf_writer/document.py
"""
In-memory CVRF document model.

The Document accepts advisory fields through setters and adders, validates the
shape of each value as it arrives and exposes getters with fixed defaults. It
knows nothing about XML; see renderer.py for serialization.
"""

import re
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .exceptions import InvalidArgumentError
from .utils import is_version_token

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "UTF-8"

# Characters outside the XML 1.0 Char production
_XML_INCOMPATIBLE_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class PublisherType(Enum):
    """Allowed values for the document publisher."""
    VENDOR = "vendor"
    DISCOVERER = "discoverer"
    COORDINATOR = "coordinator"
    USER = "user"
    OTHER = "other"


@dataclass(frozen=True)
class Revision:
    version: str
    date: str
    description: str


@dataclass(frozen=True)
class Note:
    """A titled note; used for both document notes and vulnerability notes."""
    title: str
    audience: str
    type: str
    text: str


@dataclass(frozen=True)
class Branch:
    type: str
    name: str


@dataclass(frozen=True)
class Product:
    """A product and the branch path (root first) that classifies it."""
    name: str
    product_id: Optional[str] = None
    branches: Tuple[Branch, ...] = ()


@dataclass(frozen=True)
class Vulnerability:
    title: Optional[str] = None
    notes: Tuple[Note, ...] = ()


@dataclass
class DocumentFields:
    """Explicit field store; None means 'not supplied'."""
    encoding: Optional[str] = None
    language: Optional[str] = None
    document_title: Optional[str] = None
    document_type: Optional[str] = None
    document_publisher: Optional[str] = None
    identification: Optional[str] = None
    status: Optional[str] = None
    initial_release_date: Optional[str] = None
    current_release_date: Optional[str] = None
    revision_history: List[Revision] = field(default_factory=list)
    document_notes: List[Note] = field(default_factory=list)
    products: List[Product] = field(default_factory=list)
    vulnerabilities: List[Vulnerability] = field(default_factory=list)


# --- Validation helpers ---
def _require_string(value: Any, name: str = "parameter") -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(
            f"Invalid parameter: {name} must be a non-empty string",
            details={"parameter": name},
        )
    if _XML_INCOMPATIBLE_RE.search(value):
        raise InvalidArgumentError(
            f"Invalid parameter: {name} contains characters that cannot appear in XML",
            details={"parameter": name},
        )
    return value


def _require_mapping(entry: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(entry, Mapping) or not entry:
        raise InvalidArgumentError(
            f"Invalid parameter: {kind} must be a non-empty mapping",
            details={"parameter": kind},
        )
    return entry


def _require_keys(entry: Mapping[str, Any], keys: Iterable[str], kind: str) -> None:
    missing = [key for key in keys if key not in entry]
    if missing:
        raise InvalidArgumentError(
            f"Invalid parameter: {kind} is missing required key(s): {', '.join(missing)}",
            details={"parameter": kind, "missing": missing},
        )


def _require_list(entries: Any, kind: str) -> List[Any]:
    if not isinstance(entries, (list, tuple)) or not entries:
        raise InvalidArgumentError(
            f"Invalid parameter: {kind} must be a non-empty list",
            details={"parameter": kind},
        )
    return list(entries)


def _build_note(entry: Any, kind: str = "note") -> Note:
    entry = _require_mapping(entry, kind)
    _require_keys(entry, ("title", "audience", "type", "text"), kind)
    return Note(
        title=_require_string(entry["title"], f"{kind} title"),
        audience=_require_string(entry["audience"], f"{kind} audience"),
        type=_require_string(entry["type"], f"{kind} type"),
        text=_require_string(entry["text"], f"{kind} text"),
    )


class Document:
    """
    Mutable CVRF advisory record.

    Scalar setters raise InvalidArgumentError for empty or non-string values
    (or strings holding characters XML cannot carry) and return the document
    so calls can be chained. Collection fields are append-only: each set_* call
    walks its list and appends every entry through the matching add_* method.
    A bulk call that hits an invalid entry stops there; the entries appended
    before it are kept.

    Getters never raise. Unset fields read as None (or an empty list), except
    the encoding which defaults to 'UTF-8'.
    """

    def __init__(self):
        self._fields = DocumentFields()

    # --- Scalar setters ---
    def set_encoding(self, encoding: str) -> "Document":
        self._fields.encoding = _require_string(encoding, "encoding")
        return self

    def set_language(self, language: str) -> "Document":
        self._fields.language = _require_string(language, "language")
        return self

    def set_document_title(self, value: str) -> "Document":
        self._fields.document_title = _require_string(value, "document title")
        return self

    def set_document_type(self, value: str) -> "Document":
        self._fields.document_type = _require_string(value, "document type")
        return self

    def set_document_publisher(self, value: str) -> "Document":
        """Accepts vendor, discoverer, coordinator, user or other, in any letter case."""
        _require_string(value, "document publisher")
        allowed = [publisher.value for publisher in PublisherType]
        if value.lower() not in allowed:
            raise InvalidArgumentError(
                f"Invalid parameter: document publisher must be one of {', '.join(allowed)}",
                details={"parameter": "document publisher", "value": value},
            )
        self._fields.document_publisher = value
        return self

    def set_identification(self, value: str) -> "Document":
        self._fields.identification = _require_string(value, "identification")
        return self

    def set_status(self, value: str) -> "Document":
        self._fields.status = _require_string(value, "status")
        return self

    def set_initial_release_date(self, value: str) -> "Document":
        self._fields.initial_release_date = _require_string(value, "initial release date")
        return self

    def set_current_release_date(self, value: str) -> "Document":
        self._fields.current_release_date = _require_string(value, "current release date")
        return self

    # --- Collection setters ---
    def set_revision_history(self, entries: List[Mapping[str, Any]]) -> "Document":
        for entry in _require_list(entries, "revision history"):
            self.add_revision_history(entry)
        return self

    def add_revision_history(self, entry: Mapping[str, Any]) -> "Document":
        """Appends one revision; the entry needs version, date and description."""
        entry = _require_mapping(entry, "revision")
        _require_keys(entry, ("version", "date", "description"), "revision")
        version = _require_string(entry["version"], "revision version")
        if not is_version_token(version):
            raise InvalidArgumentError(
                f"Invalid parameter: revision version '{version}' is not a dotted-numeric version",
                details={"parameter": "revision version", "value": version},
            )
        self._fields.revision_history.append(Revision(
            version=version,
            date=_require_string(entry["date"], "revision date"),
            description=_require_string(entry["description"], "revision description"),
        ))
        return self

    def set_document_notes(self, entries: List[Mapping[str, Any]]) -> "Document":
        for entry in _require_list(entries, "document notes"):
            self.add_document_note(entry)
        return self

    def add_document_note(self, entry: Mapping[str, Any]) -> "Document":
        self._fields.document_notes.append(_build_note(entry, "document note"))
        return self

    def set_products(self, entries: List[Mapping[str, Any]]) -> "Document":
        for entry in _require_list(entries, "products"):
            self.add_product(entry)
        return self

    def add_product(self, entry: Mapping[str, Any]) -> "Document":
        """
        Appends one product.

        The entry needs a 'name'; 'id' is optional and 'branches' is an optional
        list of {'type': ..., 'name': ...} mappings ordered from root to leaf.
        """
        entry = _require_mapping(entry, "product")
        _require_keys(entry, ("name",), "product")
        product_id = entry.get("id")
        if product_id is not None:
            _require_string(product_id, "product id")
        branches = []
        for branch in entry.get("branches") or ():
            branch = _require_mapping(branch, "branch")
            _require_keys(branch, ("type", "name"), "branch")
            branches.append(Branch(
                type=_require_string(branch["type"], "branch type"),
                name=_require_string(branch["name"], "branch name"),
            ))
        self._fields.products.append(Product(
            name=_require_string(entry["name"], "product name"),
            product_id=product_id,
            branches=tuple(branches),
        ))
        return self

    def set_vulnerabilities(self, entries: List[Mapping[str, Any]]) -> "Document":
        for entry in _require_list(entries, "vulnerabilities"):
            self.add_vulnerability(entry)
        return self

    def add_vulnerability(self, entry: Mapping[str, Any]) -> "Document":
        # Title is only enforced at render time
        entry = _require_mapping(entry, "vulnerability")
        title = entry.get("title")
        if title is not None:
            _require_string(title, "vulnerability title")
        notes = tuple(_build_note(note, "vulnerability note") for note in entry.get("notes") or ())
        self._fields.vulnerabilities.append(Vulnerability(title=title, notes=notes))
        return self

    # --- Getters ---
    def get_encoding(self) -> str:
        if self._fields.encoding is None:
            return DEFAULT_ENCODING
        return self._fields.encoding

    def get_language(self) -> Optional[str]:
        return self._fields.language

    def get_document_title(self) -> Optional[str]:
        return self._fields.document_title

    def get_document_type(self) -> Optional[str]:
        return self._fields.document_type

    def get_document_publisher(self) -> Optional[str]:
        return self._fields.document_publisher

    def get_identification(self) -> Optional[str]:
        return self._fields.identification

    def get_status(self) -> Optional[str]:
        return self._fields.status

    def get_initial_release_date(self) -> Optional[str]:
        return self._fields.initial_release_date

    def get_current_release_date(self) -> Optional[str]:
        return self._fields.current_release_date

    def get_revision_history(self) -> List[Revision]:
        return list(self._fields.revision_history)

    def get_document_notes(self) -> List[Note]:
        return list(self._fields.document_notes)

    def get_products(self) -> List[Product]:
        return list(self._fields.products)

    def get_vulnerabilities(self) -> List[Vulnerability]:
        return list(self._fields.vulnerabilities)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the supplied fields, for logging and debugging."""
        return {
            "encoding": self.get_encoding(),
            "language": self._fields.language,
            "document_title": self._fields.document_title,
            "document_type": self._fields.document_type,
            "document_publisher": self._fields.document_publisher,
            "identification": self._fields.identification,
            "status": self._fields.status,
            "initial_release_date": self._fields.initial_release_date,
            "current_release_date": self._fields.current_release_date,
            "revisions": len(self._fields.revision_history),
            "document_notes": len(self._fields.document_notes),
            "products": len(self._fields.products),
            "vulnerabilities": len(self._fields.vulnerabilities),
        }
