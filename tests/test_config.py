"""
Tests for core.config module.

These tests verify GeneratorConfig / SchedulerConfig validation and the
predefined default configurations.
"""

import pytest

from core.config import (
    DEFAULT_GENERATOR_CONFIG,
    DEFAULT_SCHEDULER_CONFIG,
    MAX_OCTAVE,
    GeneratorConfig,
    SchedulerConfig,
)


class TestGeneratorConfigValidation:
    """Test GeneratorConfig parameter validation."""

    def test_default_values(self) -> None:
        config = GeneratorConfig()
        assert config.degrees == (1, 5, 6, 4)
        assert config.beats_per_chord == 4.0
        assert config.tempo_bpm == 120.0
        assert config.octave == 4
        assert config.use_extensions is True

    def test_custom_values(self) -> None:
        config = GeneratorConfig(degrees=(2, 5, 1), beats_per_chord=2.0, tempo_bpm=90.0)
        assert config.degrees == (2, 5, 1)
        assert config.beats_per_chord == 2.0
        assert config.tempo_bpm == 90.0

    def test_empty_degrees_raises(self) -> None:
        with pytest.raises(ValueError, match="degrees must not be empty"):
            GeneratorConfig(degrees=())

    @pytest.mark.parametrize("degree", [0, 8, -1])
    def test_degree_out_of_range_raises(self, degree: int) -> None:
        with pytest.raises(ValueError, match="degrees must be in 1..7"):
            GeneratorConfig(degrees=(1, degree))

    def test_zero_beats_raises(self) -> None:
        with pytest.raises(ValueError, match="beats_per_chord must be positive"):
            GeneratorConfig(beats_per_chord=0.0)

    def test_negative_tempo_raises(self) -> None:
        with pytest.raises(ValueError, match="tempo_bpm must be positive"):
            GeneratorConfig(tempo_bpm=-10.0)

    @pytest.mark.parametrize("octave", [-1, 7, 8])
    def test_octave_out_of_range_raises(self, octave: int) -> None:
        with pytest.raises(ValueError, match="octave must be in"):
            GeneratorConfig(octave=octave)

    def test_top_octave_is_valid(self) -> None:
        assert GeneratorConfig(octave=MAX_OCTAVE).octave == 6


class TestSchedulerConfigValidation:
    """Test SchedulerConfig parameter validation."""

    def test_default_values(self) -> None:
        config = SchedulerConfig()
        assert config.max_ties == 2
        assert config.nearest_semitone_window == 1

    def test_zero_max_ties_raises(self) -> None:
        with pytest.raises(ValueError, match="max_ties must be positive"):
            SchedulerConfig(max_ties=0)

    def test_negative_window_raises(self) -> None:
        with pytest.raises(ValueError, match="nearest_semitone_window must be non-negative"):
            SchedulerConfig(nearest_semitone_window=-1)

    def test_zero_window_is_valid(self) -> None:
        assert SchedulerConfig(nearest_semitone_window=0).nearest_semitone_window == 0


class TestConfigImmutability:
    """Test that configs are frozen."""

    def test_generator_config_is_frozen(self) -> None:
        config = GeneratorConfig()
        with pytest.raises(AttributeError):
            config.tempo_bpm = 100.0  # type: ignore[misc]

    def test_scheduler_config_is_frozen(self) -> None:
        config = SchedulerConfig()
        with pytest.raises(AttributeError):
            config.max_ties = 3  # type: ignore[misc]


class TestPredefinedConfigs:
    """Test the module-level default configurations."""

    def test_default_generator_config(self) -> None:
        assert DEFAULT_GENERATOR_CONFIG == GeneratorConfig()

    def test_default_scheduler_config(self) -> None:
        assert DEFAULT_SCHEDULER_CONFIG == SchedulerConfig()

    def test_configs_are_hashable(self) -> None:
        assert len({DEFAULT_GENERATOR_CONFIG, GeneratorConfig()}) == 1
