"""Instruction composition for the style transformation request.

The instruction sent to the model is assembled from the selected style's
base prompt and the form inputs, always in the same order::

    [Base style text]
    [Character clause]           (only if the character text is not blank)
    [Scene clause]               (only if the scene text is not blank)
    [Influence clause]           (one of three bands)
    [Face preservation clause]   (always present)
    [Quality clause]             ("high" or standard)

Clauses are joined by plain concatenation; each clause carries its own
leading space.

Influence Bands
---------------
Each band's lower bound is exclusive, so the three bands cover 0-100
without overlap:

========  ==============  =============================================
Band      Influence       Meaning
========  ==============  =============================================
close     71 - 100        Adhere closely to the descriptions
strong    31 - 70         Strong reference, some artistic stylization
loose     0 - 30          Loose inspiration, creative interpretation
========  ==============  =============================================

Free Text
---------
Character and scene descriptions are embedded verbatim between double
quotes. Quote characters inside the user's text are not escaped.

Usage
-----
::

    prompt = compose_prompt(
        base_style_text="Reimagine the person as a cyberpunk character.",
        influence=85,
        character_text="a scarred pilot",
        scene_text="",
        quality="high",
    )
"""

from __future__ import annotations

from typing import Literal

InfluenceBand = Literal["close", "strong", "loose"]

HIGH_QUALITY = "high"
STANDARD_QUALITY = "standard"

INFLUENCE_MIN = 0
INFLUENCE_MAX = 100
CLOSE_THRESHOLD = 70
LOOSE_THRESHOLD = 30

CHARACTER_CLAUSE = ' The character should also be described as: "{text}".'
SCENE_CLAUSE = ' The scene and action should be: "{text}".'

INFLUENCE_CLAUSES: dict[InfluenceBand, str] = {
    "close": (
        " The overall style, clothing, and background should adhere closely to the "
        "descriptions provided."
    ),
    "strong": (
        " Use the descriptions as a strong reference, but allow for some artistic "
        "stylization in the clothing and background."
    ),
    "loose": (
        " Use the descriptions as a loose inspiration for the style, clothing, and "
        "background, allowing for significant creative interpretation."
    ),
}

# Hard constraint, not user-configurable.
FACE_PRESERVATION_CLAUSE = (
    " It is absolutely critical to preserve the person's face from the original image "
    "perfectly. Do not alter the facial features, structure, or identity in any way."
)

HIGH_QUALITY_CLAUSE = (
    " Generate the final image in high definition (HD) with photorealistic details, "
    "aiming for a resolution between 2K and 4K."
)
STANDARD_QUALITY_CLAUSE = (
    " Generate the final image in a standard definition, suitable for web display, "
    "around 720p resolution."
)


def influence_band(influence: int) -> InfluenceBand:
    """Select the influence band for a 0-100 influence value.

    Args:
        influence: Reference influence, 0 to 100 inclusive.

    Returns:
        ``"close"`` above 70, ``"strong"`` above 30, ``"loose"`` otherwise.

    Raises:
        ValueError: If influence is outside 0-100.
    """
    if influence < INFLUENCE_MIN or influence > INFLUENCE_MAX:
        raise ValueError(
            f"Influence must be {INFLUENCE_MIN}-{INFLUENCE_MAX}, got {influence}"
        )
    if influence > CLOSE_THRESHOLD:
        return "close"
    if influence > LOOSE_THRESHOLD:
        return "strong"
    return "loose"


def quality_clause(quality: str) -> str:
    """Return the quality clause; anything but ``"high"`` gets the standard one."""
    if quality == HIGH_QUALITY:
        return HIGH_QUALITY_CLAUSE
    return STANDARD_QUALITY_CLAUSE


def compose_prompt(
    base_style_text: str,
    influence: int,
    character_text: str = "",
    scene_text: str = "",
    quality: str = STANDARD_QUALITY,
) -> str:
    """Compose the full transformation instruction.

    Args:
        base_style_text: Prompt of the selected style.
        influence: Reference influence, 0 to 100 inclusive.
        character_text: Optional character description. Blank text adds no
            clause; otherwise it is embedded verbatim in quotes.
        scene_text: Optional scene/action description, same rules as
            ``character_text``.
        quality: ``"high"`` for the HD clause; any other value selects the
            standard clause.

    Returns:
        The composed instruction string.

    Raises:
        ValueError: If influence is outside 0-100.
    """
    band = influence_band(influence)

    prompt = base_style_text
    if character_text and character_text.strip():
        prompt += CHARACTER_CLAUSE.format(text=character_text)
    if scene_text and scene_text.strip():
        prompt += SCENE_CLAUSE.format(text=scene_text)

    return prompt + INFLUENCE_CLAUSES[band] + FACE_PRESERVATION_CLAUSE + quality_clause(quality)
