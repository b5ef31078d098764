"""Catalog of available style transformations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StyleOption:
    """A selectable style and the base prompt that drives it."""

    id: str
    name: str
    prompt_template: str


STYLE_OPTIONS: tuple[StyleOption, ...] = (
    StyleOption(
        id="business-professional",
        name="Business Professional",
        prompt_template=(
            "Transform the person in the image to be wearing professional business attire, "
            "suitable for an office or corporate setting. Keep the original face and "
            "background mostly intact."
        ),
    ),
    StyleOption(
        id="evening-gown",
        name="Evening Gown / Formal Wear",
        prompt_template=(
            "Redress the person in the image in an elegant evening gown or a formal suit. "
            "The setting should look like a gala or a formal event. Preserve the original "
            "facial features."
        ),
    ),
    StyleOption(
        id="cyberpunk",
        name="Cyberpunk",
        prompt_template=(
            "Reimagine the person in the image as a cyberpunk character. Add futuristic "
            "clothing, neon lighting effects, and subtle cybernetic enhancements, but keep "
            "the person recognizable."
        ),
    ),
    StyleOption(
        id="fantasy-adventurer",
        name="Fantasy Adventurer",
        prompt_template=(
            "Change the person's clothing into that of a fantasy adventurer (like a ranger "
            "or a mage). Add a fitting, magical, or natural background while maintaining "
            "the person's face."
        ),
    ),
)

_STYLES_BY_ID = {style.id: style for style in STYLE_OPTIONS}


def get_style(style_id: str) -> StyleOption:
    """Look up a style by id.

    Raises:
        KeyError: If the id is not in the catalog
    """
    try:
        return _STYLES_BY_ID[style_id]
    except KeyError:
        available = ", ".join(_STYLES_BY_ID)
        raise KeyError(f"Style '{style_id}' not found. Available styles: {available}") from None


def style_choices() -> list[tuple[str, str]]:
    """Return ``(name, id)`` pairs for dropdown widgets."""
    return [(style.name, style.id) for style in STYLE_OPTIONS]
