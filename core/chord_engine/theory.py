"""
core/chord_engine/theory.py — Scale and chord primitives.

Pitch classes are spelled with flats (Db, Eb, Gb, Ab, Bb). Sharp input is
accepted by normalize_note() and converted.

Exports:
    NOTES                   12 note names in chromatic order (flat spelling)
    NOTE_VALUES             note name → semitone 0–11
    MODE_INTERVALS          7 semitone offsets per mode
    PARALLEL_MODES          modes offered for modal interchange
    CHORD_INTERVALS         semitone offsets per chord quality
    CHORD_SUFFIXES          display suffix per chord quality

    normalize_note(note) → str
    note_value(note) → int
    scale_degree(scale, degree) → str
    diatonic_chord(scale, degree, use_extensions) → ChordSymbol
    parallel_modes(root) → tuple[Scale, ...]
    transpose_note(note, semitones) → str
    tritone_substitution(root) → str
    secondary_dominant(target_root) → ChordSymbol
    root_midi(root, octave) → int
    build_chord_notes(root, quality, octave) → tuple[int, ...]
    chord_display_name(root, quality) → str
"""

from __future__ import annotations

from core.chord_engine.types import ChordSymbol, Scale

# ---------------------------------------------------------------------------
# Pitch classes
# ---------------------------------------------------------------------------

NOTES: tuple[str, ...] = (
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
)

NOTE_VALUES: dict[str, int] = {note: value for value, note in enumerate(NOTES)}

# Input normalisation: sharp → flat
SHARP_TO_FLAT: dict[str, str] = {
    "C#": "Db",
    "D#": "Eb",
    "F#": "Gb",
    "G#": "Ab",
    "A#": "Bb",
}

# ---------------------------------------------------------------------------
# Modes (semitone intervals from root)
# ---------------------------------------------------------------------------

MODE_INTERVALS: dict[str, tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11),  # ionian
    "minor": (0, 2, 3, 5, 7, 8, 10),  # natural minor
    "dorian": (0, 2, 3, 5, 7, 9, 10),
    "phrygian": (0, 1, 3, 5, 7, 8, 10),
    "lydian": (0, 2, 4, 6, 7, 9, 11),
    "mixolydian": (0, 2, 4, 5, 7, 9, 10),
    "aeolian": (0, 2, 3, 5, 7, 8, 10),
    "locrian": (0, 1, 3, 5, 6, 8, 10),
}

# "aeolian" is left out: it duplicates "minor".
PARALLEL_MODES: tuple[str, ...] = (
    "major",
    "minor",
    "dorian",
    "phrygian",
    "lydian",
    "mixolydian",
    "locrian",
)

# ---------------------------------------------------------------------------
# Chord qualities (semitones from root)
# ---------------------------------------------------------------------------

CHORD_INTERVALS: dict[str, tuple[int, ...]] = {
    # Triads
    "maj": (0, 4, 7),
    "min": (0, 3, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
    # Sevenths
    "maj7": (0, 4, 7, 11),
    "min7": (0, 3, 7, 10),
    "dom7": (0, 4, 7, 10),
    "min7b5": (0, 3, 6, 10),
    "dim7": (0, 3, 6, 9),
    # Ninths and altered dominants
    "maj9": (0, 4, 7, 11, 14),
    "min9": (0, 3, 7, 10, 14),
    "dom7b9": (0, 4, 7, 10, 13),
    "dom7#9": (0, 4, 7, 10, 15),
    # Elevenths
    "maj11": (0, 4, 7, 11, 14, 17),
    "min11": (0, 3, 7, 10, 14, 17),
    "dom11": (0, 4, 7, 10, 14, 17),
    # Thirteenths
    "maj13": (0, 4, 7, 11, 14, 21),
    "min13": (0, 3, 7, 10, 14, 21),
    "dom13": (0, 4, 7, 10, 14, 21),
}

CHORD_SUFFIXES: dict[str, str] = {
    "maj": "",
    "min": "m",
    "dim": "dim",
    "aug": "aug",
    "maj7": "maj7",
    "min7": "m7",
    "dom7": "7",
    "min7b5": "m7b5",
    "dim7": "dim7",
    "maj9": "maj9",
    "min9": "m9",
    "dom7b9": "7b9",
    "dom7#9": "7#9",
    "maj11": "maj11",
    "min11": "m11",
    "dom11": "11",
    "maj13": "maj13",
    "min13": "m13",
    "dom13": "13",
}

# (third, fifth) semitone shape → (triad quality, seventh-chord quality)
_TRIAD_SHAPES: dict[tuple[int, int], tuple[str, str]] = {
    (4, 7): ("maj", "maj7"),
    (3, 7): ("min", "min7"),
    (3, 6): ("dim", "min7b5"),
    (4, 8): ("aug", "aug"),
}

# Modes where degree 5 carries dominant function
_DOMINANT_V_MODES: frozenset[str] = frozenset({"major", "minor"})


# ---------------------------------------------------------------------------
# Note helpers
# ---------------------------------------------------------------------------


def normalize_note(note: str) -> str:
    """Normalize a note name to flat notation.

    Args:
        note: Note name, e.g. "C#", "eb", "G"

    Returns:
        Canonical flat-notation name, e.g. "Db", "Eb", "G"

    Raises:
        ValueError: If note is not a recognized pitch class
    """
    note = note.strip().capitalize()
    note = SHARP_TO_FLAT.get(note, note)
    if note not in NOTE_VALUES:
        raise ValueError(f"Unknown note {note!r}. Valid: {list(NOTES)}")
    return note


def note_value(note: str) -> int:
    """Return the semitone value (0–11) of a note name."""
    return NOTE_VALUES[normalize_note(note)]


def transpose_note(note: str, semitones: int) -> str:
    """Transpose a note by a number of semitones, wrapping at 12.

    Examples:
        >>> transpose_note("A", 3)
        'C'
        >>> transpose_note("C", -1)
        'B'
    """
    return NOTES[(note_value(note) + semitones) % 12]


def tritone_substitution(root: str) -> str:
    """Return the root a tritone away. Applying it twice is the identity."""
    return transpose_note(root, 6)


def secondary_dominant(target_root: str) -> ChordSymbol:
    """Return the V7 of ``target_root`` (dominant a perfect fifth above)."""
    return ChordSymbol(transpose_note(target_root, 7), "dom7")


def root_midi(root: str, octave: int = 4) -> int:
    """MIDI number of a root note at an octave (C4 = 60)."""
    return (octave + 1) * 12 + note_value(root)


def build_chord_notes(root: str, quality: str, octave: int = 4) -> tuple[int, ...]:
    """Build the root-position MIDI voicing of a chord.

    Raises:
        ValueError: If root or quality is unrecognized
    """
    if quality not in CHORD_INTERVALS:
        raise ValueError(f"Unknown chord quality {quality!r}. Valid: {sorted(CHORD_INTERVALS)}")
    base = root_midi(root, octave)
    return tuple(base + interval for interval in CHORD_INTERVALS[quality])


def chord_display_name(root: str, quality: str) -> str:
    """Human-readable chord name, e.g. ('G', 'dom7') → 'G7'."""
    return f"{root}{CHORD_SUFFIXES.get(quality, quality)}"


# ---------------------------------------------------------------------------
# Scale functions
# ---------------------------------------------------------------------------


def scale_degree(scale: Scale, degree: int) -> str:
    """Return the note at a 1-based scale degree. Degrees wrap modulo 7.

    Examples:
        >>> scale_degree(Scale("C", "major"), 5)
        'G'
        >>> scale_degree(Scale("C", "major"), 8)
        'C'
    """
    if degree < 1:
        raise ValueError(f"degree must be >= 1, got {degree}")
    interval = scale.intervals[(degree - 1) % 7]
    return NOTES[(NOTE_VALUES[scale.root] + interval) % 12]


def diatonic_chord(scale: Scale, degree: int, use_extensions: bool = False) -> ChordSymbol:
    """Build the diatonic chord stacked in thirds on a scale degree.

    The triad is classified from its third and fifth. With ``use_extensions``
    major/minor/diminished triads become maj7/min7/min7b5. Degree 5 in major
    or minor is always dominant (maj, or dom7 with extensions).

    Examples:
        >>> diatonic_chord(Scale("C", "major"), 2, use_extensions=True)
        ChordSymbol(root='D', quality='min7')
        >>> diatonic_chord(Scale("A", "minor"), 5)
        ChordSymbol(root='E', quality='maj')
    """
    intervals = scale.intervals
    root = scale_degree(scale, degree)
    base = intervals[(degree - 1) % 7]
    third = (intervals[(degree + 1) % 7] - base) % 12
    fifth = (intervals[(degree + 3) % 7] - base) % 12

    shape = _TRIAD_SHAPES.get((third, fifth))
    if shape is None:
        quality = "dom7" if use_extensions else "maj"
    else:
        quality = shape[1] if use_extensions else shape[0]

    # Only the literal fifth degree; wrapped degrees (12, 19, ...) keep the diatonic triad.
    if degree == 5 and scale.mode in _DOMINANT_V_MODES:
        quality = "dom7" if use_extensions else "maj"

    return ChordSymbol(root, quality)


def parallel_modes(root: str) -> tuple[Scale, ...]:
    """Return the scales of every parallel mode on ``root``."""
    root = normalize_note(root)
    return tuple(Scale(root, mode) for mode in PARALLEL_MODES)
