"""
core/chord_engine/ — Pure chord progression engine.

Exports:
    Types:     Scale, ChordSymbol, Chord, Progression, NoteEvent, TiePlan
    Theory:    note_value, scale_degree, diatonic_chord, parallel_modes,
               transpose_note, tritone_substitution, secondary_dominant
    Voicing:   voice_leading_distance, optimize_voicing, revoice_chord
    Generator: generate_progression
    Swap:      smart_swap
    Grouping:  compute_tie_plan, compute_note_events
"""

from core.chord_engine.generator import generate_progression
from core.chord_engine.grouping import compute_note_events, compute_tie_plan
from core.chord_engine.swap import smart_swap
from core.chord_engine.theory import (
    diatonic_chord,
    note_value,
    parallel_modes,
    scale_degree,
    secondary_dominant,
    transpose_note,
    tritone_substitution,
)
from core.chord_engine.types import (
    Chord,
    ChordSymbol,
    NoteEvent,
    Progression,
    Scale,
    TiePlan,
)
from core.chord_engine.voicing import optimize_voicing, revoice_chord, voice_leading_distance

__all__ = [
    # Types
    "Scale",
    "ChordSymbol",
    "Chord",
    "Progression",
    "NoteEvent",
    "TiePlan",
    # Theory
    "note_value",
    "scale_degree",
    "diatonic_chord",
    "parallel_modes",
    "transpose_note",
    "tritone_substitution",
    "secondary_dominant",
    # Voicing
    "voice_leading_distance",
    "optimize_voicing",
    "revoice_chord",
    # Generator
    "generate_progression",
    # Swap
    "smart_swap",
    # Grouping
    "compute_tie_plan",
    "compute_note_events",
]
