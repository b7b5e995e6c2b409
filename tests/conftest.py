"""
Shared fixtures for the test suite.

Centralizes reusable progressions and the API client so individual test
files don't need to repeat construction boilerplate.
"""

import pytest
from fastapi.testclient import TestClient

from api.deps import reset_configs
from api.main import app
from core.chord_engine.generator import generate_progression
from core.chord_engine.types import Chord, Progression

# ---------------------------------------------------------------------------
# Progression factories
# ---------------------------------------------------------------------------


def make_chord(notes: tuple[int, ...], **overrides: object) -> Chord:
    """Build a ``Chord`` with sensible defaults around the given notes."""
    defaults: dict[str, object] = {
        "root": "C",
        "quality": "maj",
        "octave": 4,
        "notes": notes,
        "duration_beats": 4.0,
        "function": None,
    }
    defaults.update(overrides)
    return Chord(**defaults)  # type: ignore[arg-type]


def make_progression(*note_sets: tuple[int, ...], tempo_bpm: float = 120.0) -> Progression:
    """Build a C-major ``Progression`` of 4-beat chords from raw note tuples."""
    return Progression(
        chords=tuple(make_chord(notes) for notes in note_sets),
        tempo_bpm=tempo_bpm,
        key="C",
        mode="major",
    )


@pytest.fixture()
def two_chord_progression() -> Progression:
    """C–E–G then C–F–A, 4 beats each: one common tone (C)."""
    return Progression(
        chords=(
            make_chord((60, 64, 67), root="C", quality="min7"),
            make_chord((60, 65, 69), root="F", quality="maj7"),
        ),
        tempo_bpm=120.0,
        key="C",
        mode="minor",
    )


@pytest.fixture()
def c_major() -> Progression:
    """Default generated progression in C major."""
    return generate_progression("C", "major")


# ---------------------------------------------------------------------------
# FastAPI test client fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def api_client():
    """FastAPI ``TestClient`` with configs re-read from a clean environment."""
    reset_configs()
    with TestClient(app) as c:
        yield c
    reset_configs()
