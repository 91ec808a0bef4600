"""
Normalized, render-ready view of a CV shared by the PDF and DOCX renderers.

Both renderers walk the same ``CVLayout`` so section order, skip-if-empty decisions, header
lines, date captions and bullet splitting cannot drift apart between formats.
"""

from dataclasses import dataclass
from enum import Enum

from cv_models import CV, CVData
from text_format import (
    contact_line,
    display_name,
    education_header,
    entry_header,
    format_date_range,
    labelled,
    normalize_description,
    paragraph_lines,
    section_label,
)


class BlockKind(str, Enum):
    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    ENTRY = "entry"
    CAPTION = "caption"


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    text: str
    label: str = ""

    @property
    def lines(self) -> list[str]:
        return paragraph_lines(self.text) if self.kind is BlockKind.PARAGRAPH else [self.text]


@dataclass(frozen=True)
class Section:
    key: str
    heading: str
    entries: tuple[tuple[Block, ...], ...]


@dataclass(frozen=True)
class CVLayout:
    name: str
    pro_title: str
    contact: str
    sections: tuple[Section, ...]

    @property
    def headings(self) -> list[str]:
        return [section.heading for section in self.sections]


SECTION_ORDER = ("summary", "skills", "experience", "education", "languages", "certifications")


def _summary_entries(data: CVData) -> list[tuple[Block, ...]]:
    if not data.summary.strip():
        return []
    return [(Block(BlockKind.PARAGRAPH, data.summary.strip()),)]


def _skills_entries(data: CVData) -> list[tuple[Block, ...]]:
    entries = []
    for group in data.skills:
        label, text = labelled(group.category, ", ".join(item for item in group.items if item))
        entries.append((Block(BlockKind.BULLET, text, label=label),))
    return entries


def _experience_entries(data: CVData, present_label: str) -> list[tuple[Block, ...]]:
    entries = []
    for exp in data.experience:
        blocks = [Block(BlockKind.ENTRY, entry_header(exp.title, exp.company, exp.location))]
        dates = format_date_range(exp.start_date, exp.end_date, exp.current, present_label)
        if dates:
            blocks.append(Block(BlockKind.CAPTION, dates))
        blocks.extend(Block(BlockKind.BULLET, line) for line in normalize_description(exp.description))
        entries.append(tuple(blocks))
    return entries


def _education_entries(data: CVData) -> list[tuple[Block, ...]]:
    entries = []
    for edu in data.education:
        blocks = [Block(BlockKind.ENTRY, education_header(edu.degree, edu.field, edu.institution))]
        dates = format_date_range(edu.start_date, edu.end_date, False)
        if dates:
            blocks.append(Block(BlockKind.CAPTION, dates))
        if edu.description.strip():
            blocks.append(Block(BlockKind.PARAGRAPH, edu.description.strip()))
        entries.append(tuple(blocks))
    return entries


def _languages_entries(data: CVData) -> list[tuple[Block, ...]]:
    entries = []
    for lang in data.languages:
        label, text = labelled(lang.language, lang.proficiency)
        entries.append((Block(BlockKind.BULLET, label + text),))
    return entries


def _certifications_entries(data: CVData) -> list[tuple[Block, ...]]:
    entries = []
    for cert in data.certifications:
        blocks = [Block(BlockKind.ENTRY, entry_header(cert.name, cert.issuer))]
        if cert.date:
            blocks.append(Block(BlockKind.CAPTION, cert.date))
        entries.append(tuple(blocks))
    return entries


def build_layout(cv: CV) -> CVLayout:
    data = cv.data
    present_label = section_label(data.labels, "present")

    builders = {
        "summary": lambda: _summary_entries(data),
        "skills": lambda: _skills_entries(data),
        "experience": lambda: _experience_entries(data, present_label),
        "education": lambda: _education_entries(data),
        "languages": lambda: _languages_entries(data),
        "certifications": lambda: _certifications_entries(data),
    }

    sections = []
    for key in SECTION_ORDER:
        entries = builders[key]()
        if not entries:
            continue
        sections.append(Section(key=key, heading=section_label(data.labels, key), entries=tuple(entries)))

    return CVLayout(
        name=display_name(data.personal, cv.title),
        pro_title=data.personal.title.strip(),
        contact=contact_line(data.personal),
        sections=tuple(sections),
    )
