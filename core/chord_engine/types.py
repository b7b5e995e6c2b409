"""
core/chord_engine/types.py — Frozen value objects for the chord engine.

All types are immutable frozen dataclasses. Functions in this package take
values and return new values; nothing is mutated in place, so an input
Progression never aliases an output one.

Types:
    Scale         — root + mode; intervals derived from the mode table
    ChordSymbol   — (root, quality) pair, the unit of substitution pools
    Chord         — a voiced chord: symbol + MIDI notes + duration
    Progression   — ordered chords + tempo + key/mode
    NoteEvent     — a flat, beat-timed scheduling primitive
    TiePlan       — pitch classes sustained globally / across boundaries
"""

from __future__ import annotations

from dataclasses import dataclass, replace

# ---------------------------------------------------------------------------
# Scale
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Scale:
    """A diatonic scale: root + mode.

    Attributes:
        root: Root note name in flat spelling, e.g. "C", "Eb"
        mode: Mode name, e.g. "major", "dorian"
    """

    root: str
    mode: str

    @property
    def intervals(self) -> tuple[int, ...]:
        """Semitone offsets from the root (7 elements, starting at 0)."""
        from core.chord_engine.theory import MODE_INTERVALS  # local import to avoid circularity

        return MODE_INTERVALS[self.mode]

    @property
    def label(self) -> str:
        """Human-readable label, e.g. 'C major'."""
        return f"{self.root} {self.mode}"

    def __post_init__(self) -> None:
        from core.chord_engine.theory import MODE_INTERVALS, NOTES

        if self.root not in NOTES:
            raise ValueError(f"Scale.root must be one of {list(NOTES)}, got {self.root!r}")
        if self.mode not in MODE_INTERVALS:
            raise ValueError(f"Unknown mode {self.mode!r}. Valid: {sorted(MODE_INTERVALS)}")


# ---------------------------------------------------------------------------
# ChordSymbol
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChordSymbol:
    """An unvoiced chord: root note + quality key, e.g. ("G", "dom7")."""

    root: str
    quality: str

    @property
    def name(self) -> str:
        from core.chord_engine.theory import chord_display_name

        return chord_display_name(self.root, self.quality)


# ---------------------------------------------------------------------------
# Chord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Chord:
    """A voiced chord inside a progression.

    ``notes`` holds MIDI numbers, not intervals: voice leading may invert or
    octave-shift the chord away from its ascending root-position form.

    Attributes:
        root:           Root note name (flat spelling)
        quality:        Chord quality key, e.g. "maj7", "dom7#9"
        octave:         Anchor octave of the root position (4 = middle C)
        notes:          MIDI pitch numbers of the voicing
        duration_beats: Length of the chord in beats
        function:       Scale degree as a decimal string ("1".."7"), or None
    """

    root: str
    quality: str
    octave: int
    notes: tuple[int, ...]
    duration_beats: float
    function: str | None = None

    @property
    def symbol(self) -> ChordSymbol:
        return ChordSymbol(self.root, self.quality)

    @property
    def name(self) -> str:
        """Display name, e.g. 'Cmaj7', 'G7', 'Am7'."""
        return self.symbol.name

    @property
    def pitch_classes(self) -> tuple[int, ...]:
        """Distinct pitch classes in voicing order."""
        return tuple(dict.fromkeys(n % 12 for n in self.notes))

    def __post_init__(self) -> None:
        from core.chord_engine.theory import CHORD_INTERVALS, NOTES

        if self.root not in NOTES:
            raise ValueError(f"Chord.root must be one of {list(NOTES)}, got {self.root!r}")
        if self.quality not in CHORD_INTERVALS:
            raise ValueError(
                f"Unknown chord quality {self.quality!r}. Valid: {sorted(CHORD_INTERVALS)}"
            )
        if self.duration_beats <= 0:
            raise ValueError(f"Chord.duration_beats must be > 0, got {self.duration_beats}")
        for pitch in self.notes:
            if not (0 <= pitch <= 127):
                raise ValueError(f"MIDI pitch {pitch} out of range [0, 127]")


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Progression:
    """An ordered chord sequence. Index order is playback order.

    Attributes:
        chords:    Tuple of Chord objects
        tempo_bpm: Tempo in beats per minute (> 0)
        key:       Tonal centre, flat spelling
        mode:      Mode name
    """

    chords: tuple[Chord, ...]
    tempo_bpm: float
    key: str
    mode: str

    @property
    def scale(self) -> Scale:
        return Scale(self.key, self.mode)

    @property
    def total_beats(self) -> float:
        return sum(c.duration_beats for c in self.chords)

    @property
    def chord_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.chords)

    def beats_to_seconds(self, beats: float) -> float:
        return beats * 60.0 / self.tempo_bpm

    def with_chord(self, index: int, chord: Chord) -> Progression:
        """Return a new Progression with the chord at ``index`` replaced."""
        if not (0 <= index < len(self.chords)):
            raise ValueError(f"chord index {index} out of range [0, {len(self.chords)})")
        chords = list(self.chords)
        chords[index] = chord
        return replace(self, chords=tuple(chords))

    def __post_init__(self) -> None:
        if self.tempo_bpm <= 0:
            raise ValueError(f"Progression.tempo_bpm must be > 0, got {self.tempo_bpm}")
        # Validates key and mode.
        Scale(self.key, self.mode)


# ---------------------------------------------------------------------------
# NoteEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoteEvent:
    """A single note-on/off pair timed in beats, with no chord back-reference."""

    midi: int
    start_beats: float
    duration_beats: float

    def to_seconds(self, tempo_bpm: float) -> tuple[float, float]:
        """Return ``(start_sec, duration_sec)`` at the given tempo."""
        if tempo_bpm <= 0:
            raise ValueError(f"tempo_bpm must be > 0, got {tempo_bpm}")
        seconds_per_beat = 60.0 / tempo_bpm
        return self.start_beats * seconds_per_beat, self.duration_beats * seconds_per_beat

    def __post_init__(self) -> None:
        if not (0 <= self.midi <= 127):
            raise ValueError(f"NoteEvent.midi must be in [0, 127], got {self.midi}")
        if self.start_beats < 0:
            raise ValueError(f"NoteEvent.start_beats must be >= 0, got {self.start_beats}")
        if self.duration_beats <= 0:
            raise ValueError(f"NoteEvent.duration_beats must be > 0, got {self.duration_beats}")


# ---------------------------------------------------------------------------
# TiePlan
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TiePlan:
    """Which pitch classes sustain instead of being re-struck.

    Attributes:
        sustain_pcs_global: Pitch classes held for the whole progression
        sustain_next_pcs:   (boundary i, pitch classes) pairs in boundary
                            order; each ties chord i into chord i + 1.
                            Boundaries with nothing held are absent.
    """

    sustain_pcs_global: tuple[int, ...] = ()
    sustain_next_pcs: tuple[tuple[int, tuple[int, ...]], ...] = ()

    def boundary_pcs(self, boundary: int) -> tuple[int, ...]:
        """Pitch classes tied across ``boundary`` (empty if none)."""
        for index, pcs in self.sustain_next_pcs:
            if index == boundary:
                return pcs
        return ()

    def ties_forward(self, boundary: int, pc: int) -> bool:
        return pc in self.boundary_pcs(boundary)
