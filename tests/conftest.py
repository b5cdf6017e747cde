import io
import zipfile
from collections.abc import Callable

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" '
    'ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Override PartName="/word/document.xml" ContentType="application/'
    'vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    '<Override PartName="/word/styles.xml" ContentType="application/'
    'vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"/>'
    "</Types>"
)

PACKAGE_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/'
    '2006/relationships/officeDocument" Target="word/document.xml"/>'
    "</Relationships>"
)

DOCUMENT_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/'
    '2006/relationships/styles" Target="styles.xml"/>'
    "</Relationships>"
)

STYLES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    f'<w:styles xmlns:w="{W_NS}"><w:style w:type="paragraph" w:styleId="Normal">'
    '<w:name w:val="Normal"/></w:style></w:styles>'
)

MakeDocx = Callable[..., bytes]


def document_xml(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}</w:body></w:document>'
    )


def build_docx(body: str, *, include_body: bool = True) -> bytes:
    """Build a minimal DOCX archive whose body holds ``body`` (w:body children)."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", CONTENT_TYPES)
        archive.writestr("_rels/.rels", PACKAGE_RELS)
        if include_body:
            archive.writestr("word/document.xml", document_xml(body))
        archive.writestr("word/_rels/document.xml.rels", DOCUMENT_RELS)
        archive.writestr("word/styles.xml", STYLES)
        archive.writestr("word/media/image1.png", b"\x89PNG\r\n\x1a\nfake-image-bytes")
    return buf.getvalue()


@pytest.fixture()
def make_docx() -> MakeDocx:
    """Factory fixture: make_docx(body_xml, include_body=True) -> DOCX bytes."""
    return build_docx


@pytest.fixture()
def hello_docx_bytes() -> bytes:
    """One real paragraph followed by a whitespace-only paragraph."""
    return build_docx(
        "<w:p><w:r><w:t>Hello world.</w:t></w:r></w:p>"
        '<w:p><w:r><w:t xml:space="preserve">  </w:t></w:r></w:p>'
    )


@pytest.fixture()
def three_run_docx_bytes() -> bytes:
    """One paragraph split across three formatting runs."""
    return build_docx(
        "<w:p>"
        '<w:r><w:t xml:space="preserve">The </w:t></w:r>'
        "<w:r><w:rPr><w:b/></w:rPr><w:t>quick</w:t></w:r>"
        '<w:r><w:rPr><w:i/></w:rPr><w:t xml:space="preserve"> fox</w:t></w:r>'
        "</w:p>"
    )


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()
