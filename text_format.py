import re
from typing import Iterable

from cv_models import PersonalInfo, SectionLabels


# Glyphs users type in front of list items; stripped from the start of each description line.
BULLET_GLYPHS = frozenset({
    "•",  # bullet
    "·",  # middle dot
    "–",  # en dash
    "—",  # em dash
    "-",
    "*",
    "●",  # black circle
    " ",
})
_BULLET_CHARS = "".join(sorted(BULLET_GLYPHS))

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

RANGE_SEPARATOR = " – "
CONTACT_SEPARATOR = "  |  "
HEADER_SEPARATOR = " | "

DEFAULT_LABELS = {
    "summary": "Summary",
    "experience": "Professional Experience",
    "education": "Education",
    "skills": "Skills",
    "languages": "Languages",
    "certifications": "Certifications",
    "present": "Present",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def normalize_description(raw: str) -> list[str]:
    """
    Split a free-text description into display lines.

    Each line is trimmed and loses any leading run of bullet glyphs; lines left empty are
    dropped. A non-empty description that yields no lines comes back whole, trimmed.
    """
    lines: list[str] = []
    for segment in raw.split("\n"):
        line = segment.strip().lstrip(_BULLET_CHARS).strip()
        if line:
            lines.append(line)
    if not lines and raw.strip():
        lines.append(raw.strip())
    return lines


def paragraph_lines(raw: str) -> list[str]:
    return [line.strip() for line in raw.split("\n") if line.strip()]


def _leading_int(value: str) -> int:
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


def format_month_year(token: str) -> str:
    if not token:
        return ""
    parts = token.split("-")
    if len(parts) != 2:
        return token
    year, month = parts
    index = _leading_int(month)
    if 1 <= index <= 12:
        return f"{MONTH_ABBREVIATIONS[index - 1]} {year}"
    return year


def format_date_range(start: str, end: str, is_current: bool, present_label: str = "Present") -> str:
    if not start and not end and not is_current:
        return ""

    start_text = format_month_year(start)
    if is_current:
        return f"{start_text}{RANGE_SEPARATOR}{present_label}"

    end_text = format_month_year(end)
    if start_text and end_text:
        return f"{start_text}{RANGE_SEPARATOR}{end_text}"
    return start_text or end_text


def join_nonempty(parts: Iterable[str], separator: str) -> str:
    return separator.join(part for part in parts if part)


def contact_line(personal: PersonalInfo) -> str:
    return join_nonempty(
        [personal.email, personal.phone, personal.linkedin, personal.website, personal.location],
        CONTACT_SEPARATOR,
    )


def entry_header(title: str, organisation: str, location: str = "") -> str:
    header = join_nonempty([title, organisation], HEADER_SEPARATOR)
    if location:
        header = f"{header} ({location})" if header else f"({location})"
    return header


def education_header(degree: str, field: str, institution: str) -> str:
    degree_field = join_nonempty([degree, field], " in ")
    return join_nonempty([degree_field, institution], HEADER_SEPARATOR)


def labelled(name: str, value: str) -> tuple[str, str]:
    """Split "name: value" into a (label, text) pair, skipping the colon when a side is empty."""
    if name and value:
        return f"{name}: ", value
    return "", name or value


def section_label(labels: SectionLabels | None, key: str) -> str:
    custom = getattr(labels, key, "") if labels else ""
    return custom or DEFAULT_LABELS[key]


def display_name(personal: PersonalInfo, fallback: str) -> str:
    name = f"{personal.first_name} {personal.last_name}".strip()
    return name or fallback
