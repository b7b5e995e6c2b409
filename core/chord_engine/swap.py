"""
core/chord_engine/swap.py — Smart-swap chord substitution.

smart_swap() replaces one chord of a progression with a musically valid
alternative:
    1. Build a candidate pool ("harmony" or "voicing" mode)
    2. Pick one candidate with ``abs(seed) % len(pool)``
    3. Re-voice it against the preceding chord (root position at index 0)

Harmony pool, in order:
    - tonal substitutes sharing the chord's function (tonic {1,3,6},
      subdominant {2,4}, dominant {5,7})
    - modal interchange: the same degree in every other parallel mode
    - tritone substitution of a dominant chord
    - secondary dominant of the next chord, and its tritone substitute
Duplicates and the current chord are removed; an empty pool falls back to
the current chord.

Voicing pool: a fixed ladder of same-root qualities for the chord's family
(major, minor or dominant), minus the current quality.

A chord whose function label is missing or outside 1–7 contributes nothing
from the tonal and modal-interchange steps.
"""

from __future__ import annotations

import logging
from typing import Literal

from core.chord_engine.rng import seed_index, wall_clock_seed
from core.chord_engine.theory import (
    CHORD_INTERVALS,
    build_chord_notes,
    diatonic_chord,
    parallel_modes,
    root_midi,
    secondary_dominant,
    tritone_substitution,
)
from core.chord_engine.types import Chord, ChordSymbol, Progression
from core.chord_engine.voicing import optimize_voicing

logger = logging.getLogger(__name__)

SwapMode = Literal["harmony", "voicing"]
SWAP_MODES: frozenset[str] = frozenset({"harmony", "voicing"})

# Harmonic function families, keyed by scale degree
_FUNCTION_FAMILIES: tuple[tuple[int, ...], ...] = (
    (1, 3, 6),  # tonic
    (2, 4),  # subdominant
    (5, 7),  # dominant
)

VOICING_LADDERS: dict[str, tuple[str, ...]] = {
    "major": ("maj", "maj7", "maj9", "maj13"),
    "minor": ("min", "min7", "min9", "min11", "min13"),
    "dominant": ("dom7", "dom7b9", "dom7#9", "dom13"),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _function_degree(chord: Chord) -> int | None:
    """Parse the chord's function label into a scale degree, if any."""
    label = (chord.function or "").strip()
    if not label.isdigit() or not (1 <= int(label) <= 7):
        return None
    return int(label)


def quality_family(quality: str) -> str:
    """Classify a quality as "minor", "dominant" or "major"."""
    if "min" in quality or quality == "dim":
        return "minor"
    if "dom" in quality:
        return "dominant"
    return "major"


def _dedupe(pool: list[ChordSymbol], current: ChordSymbol) -> list[ChordSymbol]:
    seen: set[ChordSymbol] = {current}
    out: list[ChordSymbol] = []
    for symbol in pool:
        if symbol not in seen:
            seen.add(symbol)
            out.append(symbol)
    return out


# ---------------------------------------------------------------------------
# Candidate pools
# ---------------------------------------------------------------------------


def harmony_candidates(progression: Progression, chord_index: int) -> list[ChordSymbol]:
    """Build the harmonic substitution pool for one chord.

    Args:
        progression: Progression containing the chord
        chord_index: Index of the chord to substitute

    Returns:
        Ordered, de-duplicated candidates excluding the current chord.
        Never empty: falls back to ``[current]``.
    """
    chord = progression.chords[chord_index]
    current = chord.symbol
    scale = progression.scale
    degree = _function_degree(chord)
    pool: list[ChordSymbol] = []

    if degree is not None:
        for family in _FUNCTION_FAMILIES:
            if degree in family:
                pool.extend(diatonic_chord(scale, d, True) for d in family)
                break

        for borrowed in parallel_modes(progression.key):
            if borrowed.mode != progression.mode:
                pool.append(diatonic_chord(borrowed, degree, True))

    if chord.quality.startswith("dom"):
        pool.append(ChordSymbol(tritone_substitution(chord.root), chord.quality))

    if chord_index + 1 < len(progression.chords):
        dominant = secondary_dominant(progression.chords[chord_index + 1].root)
        pool.append(dominant)
        pool.append(ChordSymbol(tritone_substitution(dominant.root), "dom7"))

    candidates = _dedupe(pool, current)
    return candidates or [current]


def voicing_candidates(chord: Chord) -> list[ChordSymbol]:
    """Build the same-root quality ladder for one chord.

    Returns:
        Ladder for the chord's family without the current quality, or the
        full ladder if removing it would leave nothing.
    """
    ladder = VOICING_LADDERS[quality_family(chord.quality)]
    qualities = [q for q in ladder if q != chord.quality] or list(ladder)
    return [ChordSymbol(chord.root, q) for q in qualities]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def smart_swap(
    progression: Progression,
    chord_index: int,
    mode: SwapMode = "harmony",
    seed: int | None = None,
) -> Chord:
    """Return a substitute for the chord at ``chord_index``.

    The result keeps the original duration, octave and function label and is
    voice-led against the preceding chord. The progression itself is not
    modified; use ``progression.with_chord(chord_index, result)``.

    Args:
        progression: Source progression
        chord_index: Index of the chord to replace
        mode:        "harmony" (substitutions) or "voicing" (same-root colours)
        seed:        Selection seed. Identical seeds give identical results;
                     None uses the wall clock.

    Returns:
        New Chord

    Raises:
        ValueError: If chord_index is out of range or mode is unknown

    Examples:
        >>> progression = generate_progression("C", "major")
        >>> smart_swap(progression, 1, "voicing", seed=0).name
        'G7b9'
    """
    if not (0 <= chord_index < len(progression.chords)):
        raise ValueError(
            f"chord_index {chord_index} out of range [0, {len(progression.chords)})"
        )
    if mode not in SWAP_MODES:
        raise ValueError(f"Unknown swap mode {mode!r}. Valid: {sorted(SWAP_MODES)}")
    if seed is None:
        seed = wall_clock_seed()

    chord = progression.chords[chord_index]
    if mode == "harmony":
        pool = harmony_candidates(progression, chord_index)
    else:
        pool = voicing_candidates(chord)

    choice = pool[seed_index(seed, len(pool))]
    logger.debug(
        "smart_swap %s[%d] %s → %s (pool=%d, seed=%d)",
        mode,
        chord_index,
        chord.name,
        choice.name,
        len(pool),
        seed,
    )

    if chord_index > 0:
        notes = optimize_voicing(
            progression.chords[chord_index - 1].notes,
            root_midi(choice.root, chord.octave),
            CHORD_INTERVALS[choice.quality],
        )
    else:
        notes = build_chord_notes(choice.root, choice.quality, chord.octave)

    return Chord(
        root=choice.root,
        quality=choice.quality,
        octave=chord.octave,
        notes=notes,
        duration_beats=chord.duration_beats,
        function=chord.function,
    )
