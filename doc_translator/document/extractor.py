from lxml import etree

from doc_translator.document.models import PARAGRAPH_TAG, TEXT_TAG, Segment


class SegmentExtractor:
    """Groups the body's text leaves into one segment per non-empty paragraph.

    Every ``w:t`` inside a ``w:p`` belongs to that paragraph, whatever
    containers (runs, hyperlinks, insertions, smart tags) sit in between.
    Once a paragraph is collected the walk does not enter it again, so a
    leaf is referenced by at most one segment.
    """

    def extract(
        self, root: etree._Element
    ) -> tuple[list[etree._Element], list[Segment]]:
        leaves: list[etree._Element] = []
        segments: list[Segment] = []
        self._walk(root, leaves, segments)
        return leaves, segments

    def _walk(
        self,
        element: etree._Element,
        leaves: list[etree._Element],
        segments: list[Segment],
    ) -> None:
        if element.tag == PARAGRAPH_TAG:
            self._collect_paragraph(element, leaves, segments)
            return
        for child in element:
            self._walk(child, leaves, segments)

    def _collect_paragraph(
        self,
        paragraph: etree._Element,
        leaves: list[etree._Element],
        segments: list[Segment],
    ) -> None:
        refs: list[int] = []
        for node in paragraph.iter(TEXT_TAG):
            refs.append(len(leaves))
            leaves.append(node)
        if not refs:
            return

        text = "".join(leaves[ref].text or "" for ref in refs)
        if not text.strip():
            return

        segments.append(
            Segment(id=len(segments), source_text=text, run_refs=tuple(refs))
        )
