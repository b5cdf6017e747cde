import io
import zipfile

from lxml import etree

from doc_translator.document.exceptions import SerializationError
from doc_translator.document.models import BODY_PART, XML_SPACE, Document, Segment
from doc_translator.logging.logger import Log


class SegmentWriter:
    """Writes translated segments back into the body tree and repackages the DOCX."""

    def write(self, document: Document, segments: list[Segment] | None = None) -> bytes:
        """Apply translations and return the new archive bytes.

        The first leaf of each translated segment receives the whole text and
        its other leaves are emptied. Segments without a translation, or with
        a blank one, keep their text.

        Raises:
            SerializationError: if the tree cannot be rendered back to XML.
        """
        if segments is None:
            segments = document.segments

        applied = 0
        for segment in segments:
            if not (segment.translated_text or "").strip():
                continue
            self._distribute(document, segment)
            applied += 1

        body = self._serialize(document.root)
        output = self._repackage(document, body)
        Log.info(
            f"Wrote DOCX: {applied}/{len(segments)} segments translated, {len(output)} bytes"
        )
        return output

    @staticmethod
    def _distribute(document: Document, segment: Segment) -> None:
        first, *rest = segment.run_refs
        text = segment.translated_text or ""
        try:
            document.set_leaf_text(first, text)
        except ValueError as exc:
            raise SerializationError(
                f"Segment {segment.id} holds text that is not valid XML: {exc}"
            ) from exc
        # Word trims edge whitespace of a w:t unless xml:space is set.
        if text != text.strip():
            document.leaves[first].set(XML_SPACE, "preserve")
        for ref in rest:
            document.set_leaf_text(ref, "")

    @staticmethod
    def _serialize(root: etree._Element) -> bytes:
        try:
            return etree.tostring(
                root, xml_declaration=True, encoding="UTF-8", standalone=True
            )
        except (etree.SerialisationError, ValueError, TypeError) as exc:
            raise SerializationError(f"Failed to serialize {BODY_PART}: {exc}") from exc

    @staticmethod
    def _repackage(document: Document, body: bytes) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry in document.entries:
                payload = body if entry.name == BODY_PART else entry.data
                archive.writestr(entry.info, payload)
        return buffer.getvalue()
