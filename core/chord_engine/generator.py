"""
core/chord_engine/generator.py — Initial progression builder.

generate_progression() lays a functional skeleton (I–V–vi–IV by default)
over a key/mode, builds each degree as a diatonic chord, and voice-leads
every chord after the first against its predecessor.
"""

from __future__ import annotations

import logging

from core.chord_engine.theory import (
    CHORD_INTERVALS,
    build_chord_notes,
    diatonic_chord,
    normalize_note,
    root_midi,
)
from core.chord_engine.types import Chord, Progression, Scale
from core.chord_engine.voicing import optimize_voicing
from core.config import DEFAULT_GENERATOR_CONFIG, GeneratorConfig

logger = logging.getLogger(__name__)


def generate_progression(
    key: str = "C",
    mode: str = "major",
    *,
    config: GeneratorConfig = DEFAULT_GENERATOR_CONFIG,
) -> Progression:
    """Generate a voice-led progression in a key.

    Args:
        key:    Tonal centre, e.g. "C", "F#", "Bb"
        mode:   Mode name, e.g. "major", "dorian"
        config: Skeleton, durations, tempo and octave

    Returns:
        Progression whose chords carry their scale degree as ``function``
        ("1", "5", "6", "4" for the default skeleton).

    Raises:
        ValueError: If key or mode is unrecognized

    Examples:
        >>> progression = generate_progression("C", "major")
        >>> progression.chord_names
        ('Cmaj7', 'G7', 'Am7', 'Fmaj7')
    """
    scale = Scale(normalize_note(key), mode)

    chords: list[Chord] = []
    for degree in config.degrees:
        symbol = diatonic_chord(scale, degree, config.use_extensions)
        if chords:
            notes = optimize_voicing(
                chords[-1].notes,
                root_midi(symbol.root, config.octave),
                CHORD_INTERVALS[symbol.quality],
            )
        else:
            notes = build_chord_notes(symbol.root, symbol.quality, config.octave)
        chords.append(
            Chord(
                root=symbol.root,
                quality=symbol.quality,
                octave=config.octave,
                notes=notes,
                duration_beats=config.beats_per_chord,
                function=str(degree),
            )
        )

    progression = Progression(
        chords=tuple(chords),
        tempo_bpm=config.tempo_bpm,
        key=scale.root,
        mode=scale.mode,
    )
    logger.debug("Generated %s: %s", scale.label, " - ".join(progression.chord_names))
    return progression
