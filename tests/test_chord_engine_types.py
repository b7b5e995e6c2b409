"""
Tests for core/chord_engine/types.py — frozen value objects.
"""

import dataclasses

import pytest
from conftest import make_chord

from core.chord_engine.types import ChordSymbol, NoteEvent, Progression, Scale, TiePlan


class TestScale:
    def test_intervals_from_mode(self):
        assert Scale("C", "dorian").intervals == (0, 2, 3, 5, 7, 9, 10)

    def test_label(self):
        assert Scale("Eb", "lydian").label == "Eb lydian"

    def test_sharp_root_rejected(self):
        with pytest.raises(ValueError, match="Scale.root"):
            Scale("C#", "major")

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError, match="Unknown mode"):
            Scale("C", "ionian-ish")


class TestChord:
    def test_symbol_and_name(self):
        chord = make_chord((67, 71, 74, 77), root="G", quality="dom7")
        assert chord.symbol == ChordSymbol("G", "dom7")
        assert chord.name == "G7"

    def test_pitch_classes_distinct_in_voicing_order(self):
        chord = make_chord((64, 60, 67, 72))
        assert chord.pitch_classes == (4, 0, 7)

    def test_frozen(self):
        chord = make_chord((60, 64, 67))
        with pytest.raises(dataclasses.FrozenInstanceError):
            chord.notes = (61,)  # type: ignore[misc]

    def test_unknown_quality_rejected(self):
        with pytest.raises(ValueError, match="Unknown chord quality"):
            make_chord((60, 64, 67), quality="power")

    def test_non_positive_duration_rejected(self):
        with pytest.raises(ValueError, match="duration_beats"):
            make_chord((60, 64, 67), duration_beats=0.0)

    def test_midi_range_checked(self):
        with pytest.raises(ValueError, match="out of range"):
            make_chord((60, 128))


class TestProgression:
    def test_totals_and_names(self, two_chord_progression):
        assert two_chord_progression.total_beats == 8.0
        assert two_chord_progression.chord_names == ("Cm7", "Fmaj7")
        assert two_chord_progression.scale == Scale("C", "minor")

    def test_beats_to_seconds(self, two_chord_progression):
        assert two_chord_progression.beats_to_seconds(8.0) == 4.0

    def test_with_chord_returns_new_value(self, two_chord_progression):
        replacement = make_chord((62, 65, 69), root="D", quality="min")
        updated = two_chord_progression.with_chord(1, replacement)
        assert updated.chords[1] == replacement
        assert two_chord_progression.chords[1].root == "F"
        assert updated.tempo_bpm == two_chord_progression.tempo_bpm

    def test_with_chord_out_of_range(self, two_chord_progression):
        with pytest.raises(ValueError, match="out of range"):
            two_chord_progression.with_chord(2, make_chord((60,)))

    def test_tempo_must_be_positive(self):
        with pytest.raises(ValueError, match="tempo_bpm"):
            Progression(chords=(), tempo_bpm=0.0, key="C", mode="major")

    def test_key_validated(self):
        with pytest.raises(ValueError, match="Scale.root"):
            Progression(chords=(), tempo_bpm=120.0, key="X", mode="major")


class TestNoteEvent:
    def test_to_seconds(self):
        event = NoteEvent(midi=60, start_beats=2.0, duration_beats=1.0)
        assert event.to_seconds(60.0) == (2.0, 1.0)
        assert event.to_seconds(120.0) == (1.0, 0.5)

    def test_invalid_tempo(self):
        with pytest.raises(ValueError, match="tempo_bpm"):
            NoteEvent(midi=60, start_beats=0.0, duration_beats=1.0).to_seconds(0)

    @pytest.mark.parametrize(
        ("kwargs", "field_name"),
        [
            ({"midi": 200, "start_beats": 0.0, "duration_beats": 1.0}, "midi"),
            ({"midi": 60, "start_beats": -1.0, "duration_beats": 1.0}, "start_beats"),
            ({"midi": 60, "start_beats": 0.0, "duration_beats": 0.0}, "duration_beats"),
        ],
    )
    def test_validation(self, kwargs, field_name):
        with pytest.raises(ValueError, match=field_name):
            NoteEvent(**kwargs)


class TestTiePlan:
    def test_defaults_are_empty(self):
        plan = TiePlan()
        assert plan.sustain_pcs_global == ()
        assert plan.sustain_next_pcs == ()

    def test_ties_forward(self):
        plan = TiePlan(sustain_next_pcs=((1, (0, 7)),))
        assert plan.ties_forward(1, 7)
        assert not plan.ties_forward(0, 7)
        assert not plan.ties_forward(1, 4)

    def test_boundary_pcs(self):
        plan = TiePlan(sustain_next_pcs=((0, (4,)), (2, (0, 7))))
        assert plan.boundary_pcs(2) == (0, 7)
        assert plan.boundary_pcs(1) == ()

    def test_hashable_and_frozen(self):
        plan = TiePlan(sustain_pcs_global=(0,), sustain_next_pcs=((0, (0,)),))
        assert hash(plan) == hash(TiePlan((0,), ((0, (0,)),)))
        assert len({TiePlan(), TiePlan()}) == 1
        with pytest.raises(dataclasses.FrozenInstanceError):
            plan.sustain_next_pcs = ()  # type: ignore[misc]
