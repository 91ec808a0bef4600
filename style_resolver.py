from dataclasses import dataclass

from cv_models import FontStyle, StyleConfig


SLOT_NAMES = ("title1", "title2", "text1", "text2", "sub")

PRO_TITLE_SIZE = 14

DEFAULT_STYLES: dict[str, FontStyle] = {
    "title1": FontStyle(size=18, color=[20, 20, 20]),
    "title2": FontStyle(size=13, color=[78, 107, 138], bold=True),
    "text1": FontStyle(size=11, color=[30, 30, 30], bold=True),
    "text2": FontStyle(size=10, color=[40, 40, 40]),
    "sub": FontStyle(size=10, color=[80, 80, 80]),
}


@dataclass(frozen=True)
class EffectiveStyles:
    title1: FontStyle
    title2: FontStyle
    text1: FontStyle
    text2: FontStyle
    sub: FontStyle

    @property
    def pro_title(self) -> FontStyle:
        return FontStyle(size=PRO_TITLE_SIZE, color=list(self.title1.color), bold=True)

    @property
    def caption(self) -> FontStyle:
        return self.sub.model_copy(update={"italic": True})


def _resolve_slot(override: FontStyle | None, default: FontStyle) -> FontStyle:
    # A valid override replaces the whole slot, color included.
    if override is not None and override.size > 0:
        return override
    return default


def resolve_styles(config: StyleConfig | None) -> EffectiveStyles:
    resolved = {
        slot: _resolve_slot(getattr(config, slot, None) if config else None, DEFAULT_STYLES[slot])
        for slot in SLOT_NAMES
    }
    return EffectiveStyles(**resolved)


def rgb_for(style: FontStyle, slot: str) -> tuple[int, int, int]:
    """Paintable color of ``style``; the slot default stands in when the color is not a triple."""
    color = style.color
    if len(color) != 3:
        color = DEFAULT_STYLES[slot].color
    r, g, b = (max(0, min(255, int(c))) for c in color)
    return r, g, b
