"""
api/schemas/progression.py — Pydantic request/response schemas for progression endpoints.

Covers:
    /progressions/generate  — GenerateRequest / GenerateResponse
    /progressions/swap      — SwapRequest / SwapResponse
    /progressions/schedule  — ScheduleRequest / ScheduleResponse
    /progressions/revoice   — RevoiceRequest / RevoiceResponse

Input models convert to core value objects with ``to_domain()``; output
models are built from them with ``from_domain()``. Domain validation errors
(ValueError) surface as 422 responses in the routes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from core.chord_engine.theory import MODE_INTERVALS, normalize_note
from core.chord_engine.types import Chord, NoteEvent, Progression, TiePlan
from core.config import MAX_OCTAVE

VALID_MODES: frozenset[str] = frozenset(MODE_INTERVALS)

# Request limits, shared with the environment-driven generator config.
MAX_DURATION_BEATS: float = 64.0
MAX_TEMPO_BPM: float = 400.0


def _check_mode(v: str) -> str:
    v = v.strip().lower()
    if v not in VALID_MODES:
        raise ValueError(f"mode must be one of: {', '.join(sorted(VALID_MODES))}")
    return v


# ---------------------------------------------------------------------------
# Shared sub-schemas
# ---------------------------------------------------------------------------


class ChordIn(BaseModel):
    """A voiced chord as sent by the client."""

    root: str = Field(..., max_length=3)
    quality: str = Field(..., max_length=10)
    octave: int = Field(default=4, ge=0, le=MAX_OCTAVE)
    notes: list[int] = Field(..., max_length=6)
    duration_beats: float = Field(default=4.0, gt=0.0, le=MAX_DURATION_BEATS)
    function: str | None = Field(default=None, max_length=2)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: list[int]) -> list[int]:
        for pitch in v:
            if not (0 <= pitch <= 127):
                raise ValueError(f"MIDI pitch {pitch} out of range [0, 127]")
        return v

    def to_domain(self) -> Chord:
        return Chord(
            root=normalize_note(self.root),
            quality=self.quality,
            octave=self.octave,
            notes=tuple(self.notes),
            duration_beats=self.duration_beats,
            function=self.function,
        )


class ChordOut(BaseModel):
    """A voiced chord returned by the API, with its display name.

    Carries no request limits: the server may be configured past them.
    """

    root: str
    quality: str
    octave: int
    notes: list[int]
    duration_beats: float
    function: str | None = None
    name: str

    @classmethod
    def from_domain(cls, chord: Chord) -> ChordOut:
        return cls(
            root=chord.root,
            quality=chord.quality,
            octave=chord.octave,
            notes=list(chord.notes),
            duration_beats=chord.duration_beats,
            function=chord.function,
            name=chord.name,
        )


class ProgressionIn(BaseModel):
    """A chord progression as sent by the client."""

    chords: list[ChordIn] = Field(..., min_length=1, max_length=64)
    tempo_bpm: float = Field(default=120.0, gt=0.0, le=MAX_TEMPO_BPM)
    key: str = Field(default="C", max_length=3)
    mode: str = Field(default="major")

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v: str) -> str:
        return _check_mode(v)

    def to_domain(self) -> Progression:
        return Progression(
            chords=tuple(c.to_domain() for c in self.chords),
            tempo_bpm=self.tempo_bpm,
            key=normalize_note(self.key),
            mode=self.mode,
        )


class ProgressionOut(BaseModel):
    """A chord progression returned by the API."""

    chords: list[ChordOut]
    tempo_bpm: float
    key: str
    mode: str
    total_beats: float
    chord_names: list[str]

    @classmethod
    def from_domain(cls, progression: Progression) -> ProgressionOut:
        return cls(
            chords=[ChordOut.from_domain(c) for c in progression.chords],
            tempo_bpm=progression.tempo_bpm,
            key=progression.key,
            mode=progression.mode,
            total_beats=progression.total_beats,
            chord_names=list(progression.chord_names),
        )


class NoteEventOut(BaseModel):
    """A scheduled note, timed in beats and in seconds."""

    midi: int = Field(..., ge=0, le=127)
    start_beats: float = Field(..., ge=0.0)
    duration_beats: float = Field(..., gt=0.0)
    start_sec: float = Field(..., ge=0.0)
    duration_sec: float = Field(..., gt=0.0)

    @classmethod
    def from_domain(cls, event: NoteEvent, tempo_bpm: float) -> NoteEventOut:
        start_sec, duration_sec = event.to_seconds(tempo_bpm)
        return cls(
            midi=event.midi,
            start_beats=event.start_beats,
            duration_beats=event.duration_beats,
            start_sec=start_sec,
            duration_sec=duration_sec,
        )


class TiePlanOut(BaseModel):
    """Pitch classes held globally and per chord boundary."""

    sustain_pcs_global: list[int]
    sustain_next_pcs: dict[int, list[int]]

    @classmethod
    def from_domain(cls, plan: TiePlan) -> TiePlanOut:
        return cls(
            sustain_pcs_global=list(plan.sustain_pcs_global),
            sustain_next_pcs={i: list(pcs) for i, pcs in plan.sustain_next_pcs},
        )


# ---------------------------------------------------------------------------
# /progressions/generate
# ---------------------------------------------------------------------------


class GenerateRequest(BaseModel):
    """Request body for POST /progressions/generate."""

    key: str = Field(default="C", max_length=3, description="Tonal centre, e.g. 'C', 'F#', 'Bb'.")
    mode: str = Field(
        default="major",
        description=f"Mode. Supported: {', '.join(sorted(VALID_MODES))}.",
    )

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v: str) -> str:
        return _check_mode(v)


class GenerateResponse(BaseModel):
    """Response body for POST /progressions/generate."""

    progression: ProgressionOut


# ---------------------------------------------------------------------------
# /progressions/swap
# ---------------------------------------------------------------------------


class SwapRequest(BaseModel):
    """Request body for POST /progressions/swap."""

    progression: ProgressionIn
    chord_index: int = Field(..., ge=0)
    mode: Literal["harmony", "voicing"] = Field(default="harmony")
    seed: int | None = Field(
        default=None,
        description="Selection seed. Omit for a time-based seed.",
    )


class SwapResponse(BaseModel):
    """Response body for POST /progressions/swap."""

    chord: ChordOut
    progression: ProgressionOut
    seed: int


# ---------------------------------------------------------------------------
# /progressions/schedule
# ---------------------------------------------------------------------------


class ScheduleRequest(BaseModel):
    """Request body for POST /progressions/schedule."""

    progression: ProgressionIn
    group_next: list[bool] = Field(
        default_factory=list,
        description="group_next[i] ties chord i into chord i + 1.",
    )
    group_all: bool = Field(default=False)


class ScheduleResponse(BaseModel):
    """Response body for POST /progressions/schedule."""

    tie_plan: TiePlanOut
    events: list[NoteEventOut]
    event_count: int
    total_beats: float
    tempo_bpm: float


# ---------------------------------------------------------------------------
# /progressions/revoice
# ---------------------------------------------------------------------------


class RevoiceRequest(BaseModel):
    """Request body for POST /progressions/revoice."""

    chord: ChordIn
    octave_offset: int = Field(default=0, ge=-3, le=3)
    seed: int | None = Field(default=None)


class RevoiceResponse(BaseModel):
    """Response body for POST /progressions/revoice."""

    chord: ChordOut
