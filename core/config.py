"""
Configuration dataclasses for the chord engine.

These immutable config objects decouple tuning parameters from function
signatures, so callers can define standard configurations and reuse them
across generation and scheduling calls.
"""

from dataclasses import dataclass

# Scale degrees a progression skeleton may use.
VALID_DEGREES: frozenset[int] = frozenset(range(1, 8))

# Highest anchor octave whose widest chord (a 13th at B) still fits in MIDI
# after an inversion.
MAX_OCTAVE: int = 6


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Configuration for progression generation.

    Attributes:
        degrees: Functional skeleton as 1-based scale degrees. Defaults to
            (1, 5, 6, 4), the I–V–vi–IV progression.
        beats_per_chord: Duration of every generated chord in beats.
        tempo_bpm: Tempo stored on the generated progression.
        octave: Octave of the first chord's root-position voicing
            (4 = middle C).
        use_extensions: Build seventh chords instead of triads.

    Example:
        >>> config = GeneratorConfig(tempo_bpm=90.0)
        >>> progression = generate_progression("D", "dorian", config=config)
    """

    degrees: tuple[int, ...] = (1, 5, 6, 4)
    beats_per_chord: float = 4.0
    tempo_bpm: float = 120.0
    octave: int = 4
    use_extensions: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.degrees:
            raise ValueError("degrees must not be empty")
        invalid = [d for d in self.degrees if d not in VALID_DEGREES]
        if invalid:
            raise ValueError(f"degrees must be in 1..7, got {invalid}")
        if self.beats_per_chord <= 0:
            raise ValueError(f"beats_per_chord must be positive, got {self.beats_per_chord}")
        if self.tempo_bpm <= 0:
            raise ValueError(f"tempo_bpm must be positive, got {self.tempo_bpm}")
        if not (0 <= self.octave <= MAX_OCTAVE):
            raise ValueError(f"octave must be in [0, {MAX_OCTAVE}], got {self.octave}")


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Configuration for tie planning in the grouping scheduler.

    Attributes:
        max_ties: Maximum pitch classes sustained globally or per boundary.
        nearest_semitone_window: Largest semitone gap accepted when pairing
            notes across a boundary that shares no pitch class.
    """

    max_ties: int = 2
    nearest_semitone_window: int = 1

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_ties <= 0:
            raise ValueError(f"max_ties must be positive, got {self.max_ties}")
        if self.nearest_semitone_window < 0:
            raise ValueError(
                f"nearest_semitone_window must be non-negative, got {self.nearest_semitone_window}"
            )


DEFAULT_GENERATOR_CONFIG = GeneratorConfig()
"""Default configuration: I–V–vi–IV seventh chords, 4 beats each at 120 BPM."""

DEFAULT_SCHEDULER_CONFIG = SchedulerConfig()
"""Default configuration: at most 2 ties, ±1 semitone fallback pairing."""
