import io
import zipfile
import zlib

from lxml import etree

from doc_translator.document.exceptions import InvalidContainerError, MissingBodyPartError
from doc_translator.document.extractor import SegmentExtractor
from doc_translator.document.models import BODY_PART, ArchiveEntry, Document
from doc_translator.logging.logger import Log


class DocxParser:
    """Opens a DOCX archive and extracts paragraph segments from its body part."""

    def __init__(self, extractor: SegmentExtractor | None = None) -> None:
        self._extractor = extractor or SegmentExtractor()

    def parse(self, data: bytes) -> Document:
        """Parse DOCX bytes into a Document with its ordered segments.

        Raises:
            InvalidContainerError: if the archive cannot be read or the body
                part is not well-formed XML.
            MissingBodyPartError: if word/document.xml is absent.
        """
        entries = self._read_entries(data)
        body = next((entry for entry in entries if entry.name == BODY_PART), None)
        if body is None:
            raise MissingBodyPartError(f"Invalid DOCX: {BODY_PART} not found")

        root = self._parse_xml(body.data)
        leaves, segments = self._extractor.extract(root)
        Log.info(f"Parsed DOCX: found {len(segments)} paragraph segments")
        return Document(entries=entries, root=root, leaves=leaves, segments=segments)

    @staticmethod
    def _read_entries(data: bytes) -> list[ArchiveEntry]:
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                return [
                    ArchiveEntry(info=info, data=archive.read(info))
                    for info in archive.infolist()
                ]
        # RuntimeError: encrypted entry. NotImplementedError: unknown compression.
        except (
            zipfile.BadZipFile,
            zlib.error,
            EOFError,
            RuntimeError,
            NotImplementedError,
        ) as exc:
            raise InvalidContainerError(f"Cannot open DOCX archive: {exc}") from exc

    @staticmethod
    def _parse_xml(payload: bytes) -> etree._Element:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
        try:
            return etree.fromstring(payload, parser=parser)
        except etree.XMLSyntaxError as exc:
            raise InvalidContainerError(f"{BODY_PART} is not well-formed XML: {exc}") from exc
