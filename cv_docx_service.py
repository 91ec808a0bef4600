import logging
import re
import zipfile
from io import BytesIO

from lxml import etree

from cv_layout import Block, BlockKind, CVLayout, build_layout
from cv_models import CV
from export_errors import ExportError

logger = logging.getLogger(__name__)

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

BULLET_PREFIX = "•  "

# Fixed entry timestamp (the zip epoch) keeps the archive byte-stable.
ZIP_TIMESTAMP = (1980, 1, 1, 0, 0, 0)

CONTENT_TYPES_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="xml" ContentType="application/xml"/>
  <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
  <Override PartName="/word/styles.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"/>
</Types>"""

PACKAGE_RELS_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>
</Relationships>"""

DOCUMENT_RELS_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles" Target="styles.xml"/>
</Relationships>"""

STYLES_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:styles xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
  <w:style w:type="paragraph" w:default="1" w:styleId="Normal">
    <w:name w:val="Normal"/>
    <w:pPr><w:spacing w:after="40"/></w:pPr>
    <w:rPr><w:rFonts w:ascii="Calibri" w:hAnsi="Calibri"/><w:sz w:val="20"/><w:color w:val="282828"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Heading1">
    <w:name w:val="heading 1"/>
    <w:basedOn w:val="Normal"/>
    <w:next w:val="Normal"/>
    <w:pPr><w:keepNext/><w:spacing w:before="240" w:after="60"/></w:pPr>
    <w:rPr><w:b/><w:sz w:val="26"/><w:color w:val="4E6B8A"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Heading2">
    <w:name w:val="heading 2"/>
    <w:basedOn w:val="Normal"/>
    <w:next w:val="Normal"/>
    <w:pPr><w:keepNext/><w:spacing w:before="120" w:after="40"/></w:pPr>
    <w:rPr><w:b/><w:sz w:val="22"/><w:color w:val="1E1E1E"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Title">
    <w:name w:val="Title"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:jc w:val="center"/><w:spacing w:after="60"/></w:pPr>
    <w:rPr><w:sz w:val="36"/><w:color w:val="141414"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="ProTitle">
    <w:name w:val="ProTitle"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:jc w:val="center"/><w:spacing w:after="60"/></w:pPr>
    <w:rPr><w:b/><w:sz w:val="28"/><w:color w:val="141414"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Subtitle">
    <w:name w:val="Subtitle"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:jc w:val="center"/><w:spacing w:after="120"/></w:pPr>
    <w:rPr><w:sz w:val="20"/><w:color w:val="505050"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Meta">
    <w:name w:val="Meta"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:keepNext/><w:spacing w:after="40"/></w:pPr>
    <w:rPr><w:i/><w:sz w:val="20"/><w:color w:val="505050"/></w:rPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="ListBullet">
    <w:name w:val="List Bullet"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:spacing w:after="20"/><w:ind w:left="360" w:hanging="200"/></w:pPr>
  </w:style>
</w:styles>"""

# Paragraph style per layout role.
BLOCK_STYLES = {
    BlockKind.PARAGRAPH: "Normal",
    BlockKind.BULLET: "ListBullet",
    BlockKind.ENTRY: "Heading2",
    BlockKind.CAPTION: "Meta",
}

# XML 1.0 forbids most C0 controls, surrogates and U+FFFE/U+FFFF.
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _xml_text(value: str) -> str:
    return _XML_ILLEGAL.sub("\ufffd", value)


def _w(tag: str) -> str:
    return f"{{{W_NS}}}{tag}"


def _add_run(paragraph: etree._Element, text: str, bold: bool = False) -> None:
    run = etree.SubElement(paragraph, _w("r"))
    if bold:
        rpr = etree.SubElement(run, _w("rPr"))
        etree.SubElement(rpr, _w("b"))
    t = etree.SubElement(run, _w("t"))
    t.set(XML_SPACE, "preserve")
    t.text = _xml_text(text)


def _add_paragraph(body: etree._Element, style: str, text: str, label: str = "") -> None:
    paragraph = etree.SubElement(body, _w("p"))
    ppr = etree.SubElement(paragraph, _w("pPr"))
    pstyle = etree.SubElement(ppr, _w("pStyle"))
    pstyle.set(_w("val"), style)
    if label:
        _add_run(paragraph, label, bold=True)
    _add_run(paragraph, text)


def _add_block(body: etree._Element, block: Block) -> None:
    style = BLOCK_STYLES[block.kind]
    if block.kind is BlockKind.BULLET:
        if block.label:
            _add_paragraph(body, style, block.text, label=BULLET_PREFIX + block.label)
        else:
            _add_paragraph(body, style, BULLET_PREFIX + block.text)
        return
    for line in block.lines:
        _add_paragraph(body, style, line)


def build_document_xml(layout: CVLayout) -> bytes:
    document = etree.Element(_w("document"), nsmap={"w": W_NS})
    body = etree.SubElement(document, _w("body"))

    _add_paragraph(body, "Title", layout.name)
    if layout.pro_title:
        _add_paragraph(body, "ProTitle", layout.pro_title)
    if layout.contact:
        _add_paragraph(body, "Subtitle", layout.contact)

    for section in layout.sections:
        _add_paragraph(body, "Heading1", section.heading)
        for blocks in section.entries:
            for block in blocks:
                _add_block(body, block)

    return etree.tostring(document, xml_declaration=True, encoding="UTF-8", standalone=True)


def _write_part(archive: zipfile.ZipFile, name: str, content: bytes) -> None:
    info = zipfile.ZipInfo(name, date_time=ZIP_TIMESTAMP)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = 0o644 << 16
    archive.writestr(info, content)


def generate_docx(cv: CV) -> bytes:
    layout = build_layout(cv)
    logger.info(
        "Generating DOCX title=%s sections=%s",
        cv.title,
        [section.key for section in layout.sections],
    )

    try:
        document_xml = build_document_xml(layout)
    except (ValueError, etree.LxmlError) as exc:
        raise ExportError("docx document.xml", str(exc)) from exc

    parts = (
        ("[Content_Types].xml", CONTENT_TYPES_XML),
        ("_rels/.rels", PACKAGE_RELS_XML),
        ("word/_rels/document.xml.rels", DOCUMENT_RELS_XML),
        ("word/styles.xml", STYLES_XML),
        ("word/document.xml", document_xml),
    )

    buffer = BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w") as archive:
            for name, content in parts:
                _write_part(archive, name, content)
    except (OSError, ValueError, zipfile.LargeZipFile) as exc:
        raise ExportError("docx archive", str(exc)) from exc

    docx_bytes = buffer.getvalue()
    logger.info("DOCX generated size=%d bytes", len(docx_bytes))
    return docx_bytes
