import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from fpdf import FPDF, XPos, YPos

from cv_layout import Block, BlockKind, CVLayout, Section, build_layout
from cv_models import CV, FontStyle
from export_errors import ExportError
from pdf_fonts import FALLBACK_FAMILY, FontSet, embedded_fonts
from style_resolver import EffectiveStyles, resolve_styles, rgb_for

logger = logging.getLogger(__name__)

PAGE_MARGIN = 25
# Pinned so repeated exports of the same CV are byte-identical.
CREATION_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)

BULLET = "    •   "

# Line heights (mm)
NAME_HEIGHT = 9
PRO_TITLE_HEIGHT = 8
HEADING_HEIGHT = 7
ENTRY_HEIGHT = 6
BODY_HEIGHT = 5

# Vertical gaps (mm)
HEADER_LINE_GAP = 3
HEADER_BOTTOM_GAP = 6
HEADING_GAP = 2
ITEM_GAP = 1


@dataclass(frozen=True)
class SectionMetrics:
    """Per-section vertical rhythm of the printed CV."""

    section_gap: float
    entry_height: float = ENTRY_HEIGHT
    body_gap: float = 2
    always_body_gap: bool = False
    entry_gap: float = 3
    caption_prefix: str = " "


SECTION_METRICS = {
    "summary": SectionMetrics(section_gap=5),
    "skills": SectionMetrics(section_gap=4),
    "experience": SectionMetrics(section_gap=2, always_body_gap=True),
    "education": SectionMetrics(section_gap=2),
    "languages": SectionMetrics(section_gap=4),
    "certifications": SectionMetrics(section_gap=0, entry_height=BODY_HEIGHT, entry_gap=2, caption_prefix=""),
}


def _safe_text(value: str) -> str:
    # Core fonts only cover latin-1.
    replacements = {
        "•": "-",
        "●": "-",
        "·": "-",
        "–": "-",
        "—": "-",
        "’": "'",
        "‘": "'",
        "“": '"',
        "”": '"',
        "…": "...",
        "\u00a0": " ",
        "\u200b": "",
    }
    text = value
    for old, new in replacements.items():
        text = text.replace(old, new)
    return text.encode("latin-1", errors="replace").decode("latin-1")


class CVPdfRenderer:
    """Draws one CV layout onto a fresh fpdf document. One instance per export call."""

    def __init__(self, styles: EffectiveStyles, fonts: FontSet | None) -> None:
        self.styles = styles
        self.pdf = FPDF(orientation="P", unit="mm", format="A4")
        self.pdf.creation_date = CREATION_DATE
        self.pdf.set_margins(PAGE_MARGIN, PAGE_MARGIN, PAGE_MARGIN)
        self.pdf.set_auto_page_break(auto=True, margin=PAGE_MARGIN)

        if fonts is not None:
            for style, path in fonts.files:
                self.pdf.add_font(fonts.family, style, str(path))
            self.family = fonts.family
            self.unicode = True
        else:
            self.family = FALLBACK_FAMILY
            self.unicode = False

    @property
    def usable_width(self) -> float:
        return self.pdf.w - self.pdf.l_margin - self.pdf.r_margin

    def _text(self, value: str) -> str:
        return value if self.unicode else _safe_text(value)

    def use_style(self, style: FontStyle, slot: str) -> None:
        font_style = ("B" if style.bold else "") + ("I" if style.italic else "")
        self.pdf.set_font(self.family, font_style, style.size)
        self.pdf.set_text_color(*rgb_for(style, slot))

    def line(self, text: str, height: float, align: str = "L") -> None:
        self.pdf.cell(0, height, self._text(text), align=align, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def paragraph(self, text: str) -> None:
        self.use_style(self.styles.text2, "text2")
        self.pdf.multi_cell(0, BODY_HEIGHT, self._text(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def bullet(self, text: str) -> None:
        self.use_style(self.styles.text2, "text2")
        marker = self._text(BULLET)
        marker_width = self.pdf.get_string_width(marker)
        self.pdf.cell(marker_width, BODY_HEIGHT, marker, new_x=XPos.RIGHT, new_y=YPos.TOP)
        self.pdf.multi_cell(
            self.usable_width - marker_width,
            BODY_HEIGHT,
            self._text(text),
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )

    def header(self, layout: CVLayout) -> None:
        self.use_style(self.styles.title1, "title1")
        self.line(layout.name, NAME_HEIGHT, align="C")
        self.pdf.ln(HEADER_LINE_GAP)

        if layout.pro_title:
            self.use_style(self.styles.pro_title, "title1")
            self.line(layout.pro_title, PRO_TITLE_HEIGHT, align="C")
            self.pdf.ln(HEADER_LINE_GAP)

        if layout.contact:
            self.use_style(self.styles.sub, "sub")
            self.line(layout.contact, BODY_HEIGHT, align="C")
        self.pdf.ln(HEADER_BOTTOM_GAP)

    def section_heading(self, title: str) -> None:
        self.use_style(self.styles.title2, "title2")
        self.line(title, HEADING_HEIGHT)
        self.pdf.ln(HEADING_GAP)

    def entry(self, blocks: tuple[Block, ...], metrics: SectionMetrics) -> None:
        has_header = blocks[0].kind is BlockKind.ENTRY
        gap_pending = has_header
        for block in blocks:
            if block.kind is BlockKind.ENTRY:
                self.use_style(self.styles.text1, "text1")
                self.line(block.text, metrics.entry_height)
            elif block.kind is BlockKind.CAPTION:
                self.use_style(self.styles.caption, "sub")
                self.line(metrics.caption_prefix + block.text, BODY_HEIGHT)
            else:
                if gap_pending:
                    self.pdf.ln(metrics.body_gap)
                    gap_pending = False
                if block.kind is BlockKind.BULLET:
                    self.bullet(block.label + block.text)
                    self.pdf.ln(ITEM_GAP)
                else:
                    self.paragraph("\n".join(block.lines))
        if gap_pending and metrics.always_body_gap:
            self.pdf.ln(metrics.body_gap)
        if has_header:
            self.pdf.ln(metrics.entry_gap)

    def section(self, section: Section) -> None:
        metrics = SECTION_METRICS[section.key]
        self.section_heading(section.heading)
        for blocks in section.entries:
            self.entry(blocks, metrics)
        self.pdf.ln(metrics.section_gap)

    def render(self, layout: CVLayout) -> bytes:
        self.pdf.set_title(self._text(layout.name))
        self.pdf.add_page()
        self.header(layout)
        for section in layout.sections:
            self.section(section)

        try:
            return bytes(self.pdf.output())
        except Exception as exc:
            raise ExportError("pdf output", str(exc)) from exc


def generate_pdf(cv: CV) -> bytes:
    layout = build_layout(cv)
    fonts = embedded_fonts()
    logger.info(
        "Generating PDF title=%s sections=%s unicode_fonts=%s",
        cv.title,
        [section.key for section in layout.sections],
        fonts is not None,
    )
    renderer = CVPdfRenderer(resolve_styles(cv.data.style), fonts)
    pdf_bytes = renderer.render(layout)
    logger.info("PDF generated size=%d bytes", len(pdf_bytes))
    return pdf_bytes
