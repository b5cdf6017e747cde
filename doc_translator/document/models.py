import zipfile
from dataclasses import dataclass, field

from lxml import etree

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
PARAGRAPH_TAG = f"{{{W_NS}}}p"
TEXT_TAG = f"{{{W_NS}}}t"
BODY_PART = "word/document.xml"
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"


@dataclass
class Segment:
    """One translatable paragraph.

    ``run_refs`` are indices into ``Document.leaves``; the document owns the
    elements, a segment only points at them.
    """

    id: int
    source_text: str
    run_refs: tuple[int, ...]
    translated_text: str | None = None


@dataclass(frozen=True)
class ArchiveEntry:
    """A single member of the DOCX archive with its original bytes."""

    info: zipfile.ZipInfo
    data: bytes

    @property
    def name(self) -> str:
        return self.info.filename


@dataclass
class Document:
    """A parsed DOCX: archive entries, body tree, leaf arena and segments."""

    entries: list[ArchiveEntry]
    root: etree._Element
    leaves: list[etree._Element] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)

    def leaf_text(self, ref: int) -> str:
        return self.leaves[ref].text or ""

    def set_leaf_text(self, ref: int, text: str) -> None:
        self.leaves[ref].text = text
