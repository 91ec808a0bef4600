import zipfile
from io import BytesIO

import pytest
from docx import Document
from lxml import etree

import cv_docx_service
from cv_docx_service import generate_docx
from export_errors import ExportError


NS = {"w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main"}
EXPECTED_PARTS = [
    "[Content_Types].xml",
    "_rels/.rels",
    "word/_rels/document.xml.rels",
    "word/styles.xml",
    "word/document.xml",
]


def _document_root(docx_bytes: bytes):
    with zipfile.ZipFile(BytesIO(docx_bytes)) as archive:
        return etree.fromstring(archive.read("word/document.xml"))


def _paragraphs_with_style(root, style: str) -> list[str]:
    paragraphs = root.xpath(f'//w:p[w:pPr/w:pStyle/@w:val="{style}"]', namespaces=NS)
    return ["".join(p.xpath(".//w:t/text()", namespaces=NS)) for p in paragraphs]


def test_package_has_exactly_five_parts(sample_cv):
    with zipfile.ZipFile(BytesIO(generate_docx(sample_cv))) as archive:
        assert archive.testzip() is None
        assert archive.namelist() == EXPECTED_PARTS


def test_static_parts_are_verbatim(sample_cv):
    with zipfile.ZipFile(BytesIO(generate_docx(sample_cv))) as archive:
        assert archive.read("[Content_Types].xml") == cv_docx_service.CONTENT_TYPES_XML
        assert archive.read("_rels/.rels") == cv_docx_service.PACKAGE_RELS_XML
        assert archive.read("word/_rels/document.xml.rels") == cv_docx_service.DOCUMENT_RELS_XML
        styles = etree.fromstring(archive.read("word/styles.xml"))
    style_ids = styles.xpath("//w:style/@w:styleId", namespaces=NS)
    assert style_ids == ["Normal", "Heading1", "Heading2", "Title", "ProTitle", "Subtitle", "Meta", "ListBullet"]


def test_document_paragraph_roles(sample_cv):
    root = _document_root(generate_docx(sample_cv))
    assert _paragraphs_with_style(root, "Title") == ["Ada Lovelace"]
    assert _paragraphs_with_style(root, "ProTitle") == ["Staff Engineer"]
    assert _paragraphs_with_style(root, "Heading1") == [
        "Summary",
        "Skills",
        "Professional Experience",
        "Education",
        "Languages",
        "Certifications",
    ]
    assert _paragraphs_with_style(root, "Meta") == ["Mar 2022 – Present", "Jan 2019 – Feb 2022", "Sep 2015 – Jun 2018", "2023-05"]
    bullets = _paragraphs_with_style(root, "ListBullet")
    assert "•  Designed the mill" in bullets
    assert "•  Languages: Python, Go" in bullets


def test_skill_category_is_a_bold_run(sample_cv):
    root = _document_root(generate_docx(sample_cv))
    bold_runs = root.xpath("//w:r[w:rPr/w:b]/w:t/text()", namespaces=NS)
    assert bold_runs == ["•  Languages: ", "•  Tools: "]


def test_user_text_is_escaped(sample_cv):
    with zipfile.ZipFile(BytesIO(generate_docx(sample_cv))) as archive:
        raw = archive.read("word/document.xml").decode("utf-8")
    assert "<notes>" not in raw
    assert "&lt;notes&gt; &amp; tables" in raw
    assert "Babbage &amp; Co" in raw


def test_illegal_xml_characters_are_replaced(make_cv):
    root = _document_root(generate_docx(make_cv(summary="bell\x07 and nul\x00")))
    assert _paragraphs_with_style(root, "Normal") == ["bell\ufffd and nul\ufffd"]


def test_no_experience_means_no_heading(make_cv):
    root = _document_root(generate_docx(make_cv(summary="Hello")))
    assert _paragraphs_with_style(root, "Heading1") == ["Summary"]


def test_output_is_deterministic(sample_cv):
    assert generate_docx(sample_cv) == generate_docx(sample_cv)


def test_python_docx_can_open_package(sample_cv):
    document = Document(BytesIO(generate_docx(sample_cv)))
    texts = [p.text for p in document.paragraphs]
    assert texts[0] == "Ada Lovelace"
    assert "Engineer with a taste for analytical engines." in texts
    assert document.paragraphs[0].style.name == "Title"


def test_archive_failure_is_wrapped(monkeypatch, sample_cv):
    def broken_write(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(cv_docx_service, "_write_part", broken_write)
    with pytest.raises(ExportError) as excinfo:
        generate_docx(sample_cv)
    assert excinfo.value.stage == "docx archive"
    assert isinstance(excinfo.value.__cause__, OSError)


def test_document_failure_is_wrapped(monkeypatch, sample_cv):
    def broken_build(_layout):
        raise ValueError("bad xml")

    monkeypatch.setattr(cv_docx_service, "build_document_xml", broken_build)
    with pytest.raises(ExportError) as excinfo:
        generate_docx(sample_cv)
    assert excinfo.value.stage == "docx document.xml"
