"""
Tests for core/chord_engine/generator.py — initial progression builder.
"""

import pytest

from core.chord_engine.generator import generate_progression
from core.chord_engine.theory import CHORD_INTERVALS, MODE_INTERVALS, NOTES, build_chord_notes
from core.chord_engine.voicing import voice_leading_distance
from core.config import MAX_OCTAVE, GeneratorConfig


class TestGenerateProgression:
    def test_c_major_skeleton(self, c_major):
        assert len(c_major.chords) == 4
        assert [c.function for c in c_major.chords] == ["1", "5", "6", "4"]
        assert c_major.tempo_bpm == 120
        assert (c_major.key, c_major.mode) == ("C", "major")

    def test_c_major_chord_names(self, c_major):
        assert c_major.chord_names == ("Cmaj7", "G7", "Am7", "Fmaj7")

    def test_four_beats_each(self, c_major):
        assert all(c.duration_beats == 4 for c in c_major.chords)
        assert c_major.total_beats == 16

    def test_first_chord_root_position_octave_four(self, c_major):
        first = c_major.chords[0]
        assert first.octave == 4
        assert first.notes == (60, 64, 67, 71)

    def test_voice_led_notes(self, c_major):
        assert [c.notes for c in c_major.chords] == [
            (60, 64, 67, 71),
            (62, 65, 67, 71),
            (60, 64, 67, 69),
            (60, 64, 65, 69),
        ]

    def test_voice_leading_beats_root_position(self, c_major):
        chords = c_major.chords
        for prev, chord in zip(chords, chords[1:]):
            root_position = build_chord_notes(chord.root, chord.quality, chord.octave)
            assert voice_leading_distance(prev.notes, chord.notes) <= voice_leading_distance(
                prev.notes, root_position
            )

    def test_notes_match_quality(self, c_major):
        for chord in c_major.chords:
            assert len(chord.notes) == len(CHORD_INTERVALS[chord.quality])

    def test_minor_dominant(self):
        progression = generate_progression("A", "minor")
        assert progression.chord_names == ("Am7", "E7", "Fmaj7", "Dm7")

    def test_aeolian_has_minor_five(self):
        progression = generate_progression("A", "aeolian")
        assert progression.chords[1].quality == "min7"

    @pytest.mark.parametrize("mode", sorted(MODE_INTERVALS))
    def test_every_mode_generates(self, mode):
        progression = generate_progression("Eb", mode)
        assert len(progression.chords) == 4
        assert progression.mode == mode

    def test_sharp_key_normalized(self):
        assert generate_progression("F#", "major").key == "Gb"

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError, match="Unknown mode"):
            generate_progression("C", "blues")

    def test_unknown_key_raises(self):
        with pytest.raises(ValueError, match="Unknown note"):
            generate_progression("H", "major")

    def test_custom_config(self):
        config = GeneratorConfig(degrees=(2, 5, 1), beats_per_chord=2.0, tempo_bpm=90.0)
        progression = generate_progression("C", "major", config=config)
        assert [c.function for c in progression.chords] == ["2", "5", "1"]
        assert progression.chord_names == ("Dm7", "G7", "Cmaj7")
        assert progression.total_beats == 6.0
        assert progression.tempo_bpm == 90.0

    def test_triads_without_extensions(self):
        config = GeneratorConfig(use_extensions=False)
        progression = generate_progression("C", "major", config=config)
        assert progression.chord_names == ("C", "G", "Am", "F")

    def test_deterministic(self):
        assert generate_progression("D", "dorian") == generate_progression("D", "dorian")

    @pytest.mark.parametrize("mode", sorted(MODE_INTERVALS))
    @pytest.mark.parametrize("key", NOTES)
    def test_top_octave_stays_in_midi_range(self, key, mode):
        config = GeneratorConfig(octave=MAX_OCTAVE, degrees=(1, 2, 3, 4, 5, 6, 7))
        progression = generate_progression(key, mode, config=config)
        for chord in progression.chords:
            assert all(0 <= n <= 127 for n in chord.notes)
