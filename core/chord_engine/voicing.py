"""
core/chord_engine/voicing.py — Voice leading distance and voicing search.

voice_leading_distance() is a brute-force assignment: it tries every
permutation of the second chord against the first in fixed order and keeps
the smallest total semitone movement. Cost is O(n!) in chord size. Chord
qualities top out at 6 notes, so the worst case is 720 permutations per
comparison.

optimize_voicing() searches inversions × whole-chord octave shifts
(n × 3 candidates) and keeps the first minimum found.

Also provides the voicing variation helpers used for re-voicing a chord:
octave offsets clamped to a comfortable range and a seeded jitter.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace
from itertools import permutations

from core.chord_engine.rng import make_rng
from core.chord_engine.types import Chord

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Returned when two chords have different note counts. Callers treat it as
#: "reject this candidate", never as a literal distance.
INCOMPARABLE_DISTANCE: int = 1000

OCTAVE_SHIFTS: tuple[int, ...] = (-1, 0, 1)

MIDI_LOW: int = 0
MIDI_HIGH: int = 127

MIN_MIDI: int = 36  # C2
MAX_MIDI: int = 96  # C7
MAX_SPAN: int = 24  # semitones


# ---------------------------------------------------------------------------
# Voice leading
# ---------------------------------------------------------------------------


def voice_leading_distance(notes_a: Sequence[int], notes_b: Sequence[int]) -> int:
    """Minimum total semitone movement between two voicings.

    Args:
        notes_a: Voicing compared in fixed order
        notes_b: Voicing whose permutations are tried against ``notes_a``

    Returns:
        Smallest sum of ``|b[i] - a[i]|`` over all orderings of ``notes_b``,
        or INCOMPARABLE_DISTANCE when the note counts differ.

    Examples:
        >>> voice_leading_distance((60, 64, 67), (60, 65, 69))
        3
    """
    if len(notes_a) != len(notes_b):
        return INCOMPARABLE_DISTANCE
    if not notes_a:
        return 0
    return min(
        sum(abs(b - a) for a, b in zip(notes_a, perm, strict=True))
        for perm in permutations(notes_b)
    )


def _inversion(base: Sequence[int], inversion: int) -> list[int]:
    """Raise the lowest ``inversion`` notes by an octave and re-sort."""
    inverted = [n + 12 if i < inversion else n for i, n in enumerate(base)]
    inverted.sort()
    return inverted


def optimize_voicing(
    previous_notes: Sequence[int],
    target_root_midi: int,
    target_intervals: Sequence[int],
) -> tuple[int, ...]:
    """Find the inversion + octave placement closest to ``previous_notes``.

    Candidates are tried in a stable order (inversion 0 first, octave shift
    -1, 0, +1) and only a strictly smaller distance replaces the current
    best, so ties keep the first candidate found. The root-position voicing
    is returned when nothing beats it. Candidates leaving the MIDI range
    0..127 are skipped.

    Args:
        previous_notes:   MIDI notes of the preceding chord
        target_root_midi: MIDI number of the target chord's root
        target_intervals: Semitone offsets of the target chord quality

    Returns:
        Tuple of MIDI notes for the chosen voicing.
    """
    base = [target_root_midi + interval for interval in target_intervals]
    best = tuple(base)
    best_distance = voice_leading_distance(previous_notes, best)

    for inversion in range(len(base)):
        inverted = _inversion(base, inversion)
        for shift in OCTAVE_SHIFTS:
            candidate = tuple(n + shift * 12 for n in inverted)
            if candidate[0] < MIDI_LOW or candidate[-1] > MIDI_HIGH:
                continue
            distance = voice_leading_distance(previous_notes, candidate)
            if distance < best_distance:
                best_distance = distance
                best = candidate

    return best


# ---------------------------------------------------------------------------
# Voicing variation
# ---------------------------------------------------------------------------


def _clamp(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))


def voicing_span(notes: Sequence[int]) -> int:
    """Semitone distance between the lowest and highest note (0 if empty)."""
    if not notes:
        return 0
    return max(notes) - min(notes)


def apply_octave_offset(notes: Sequence[int], offset: int) -> tuple[int, ...]:
    """Shift a voicing by whole octaves, clamped to [MIN_MIDI, MAX_MIDI]."""
    shift = int(offset) * 12
    return tuple(_clamp(n + shift, MIN_MIDI, MAX_MIDI) for n in notes)


def randomize_voicing(notes: Sequence[int], rng: Callable[[], float]) -> tuple[int, ...]:
    """Seeded close-position variation of a voicing.

    Rotates the sorted voicing by a random amount, jitters each note by up to
    ±2 semitones inside [MIN_MIDI, MAX_MIDI], then pulls the outer voices
    inward until the span is at most MAX_SPAN.

    Args:
        notes: Source voicing
        rng:   Callable returning floats in [0, 1), e.g. from make_rng()

    Returns:
        New voicing with the same number of notes.
    """
    if not notes:
        return ()
    out = sorted(notes)
    rot = int(rng() * len(out))
    out = out[rot:] + out[:rot]
    out = [_clamp(n + int(rng() * 5) - 2, MIN_MIDI, MAX_MIDI) for n in out]
    while voicing_span(out) > MAX_SPAN:
        lo, hi = min(out), max(out)
        out = [n + 1 if n == lo else n - 1 if n == hi else n for n in out]
    return tuple(out)


def revoice_chord(chord: Chord, octave_offset: int = 0, seed: int | str | None = None) -> Chord:
    """Return ``chord`` with its voicing shifted and, if seeded, varied.

    Root, quality, duration and function are unchanged.

    Args:
        chord:         Source chord
        octave_offset: Whole octaves to shift the voicing by
        seed:          Seed for randomize_voicing(); None skips the variation
    """
    notes = apply_octave_offset(chord.notes, octave_offset)
    if seed is not None:
        notes = randomize_voicing(notes, make_rng(seed))
    return replace(chord, notes=notes)
