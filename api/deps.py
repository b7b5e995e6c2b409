"""
FastAPI dependency providers.

Provides singletons for the generator and scheduler configurations so the
environment is read once and the same frozen configs are reused across
requests.
"""

import logging
import os

from dotenv import load_dotenv

from api.schemas.progression import MAX_DURATION_BEATS, MAX_TEMPO_BPM
from core.config import (
    DEFAULT_GENERATOR_CONFIG,
    DEFAULT_SCHEDULER_CONFIG,
    GeneratorConfig,
    SchedulerConfig,
)

logger = logging.getLogger(__name__)

_generator_config: GeneratorConfig | None = None


def _env_float(name: str, default: float, upper: float) -> float:
    """Read a positive float from the environment, bounded by ``upper``.

    Malformed or out-of-range values are logged and replaced by ``default``
    so a bad deployment setting never fails a request.
    """
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default
    if not (0.0 < value <= upper):
        logger.warning("Ignoring %s=%r: must be in (0, %s], using %s", name, raw, upper, default)
        return default
    return value


def get_generator_config() -> GeneratorConfig:
    """
    Return a cached ``GeneratorConfig`` singleton.

    Reads ``PROGRESSION_TEMPO_BPM`` and ``PROGRESSION_BEATS_PER_CHORD`` from
    the environment on first call. Unset, malformed or out-of-range values
    keep the defaults; the bounds match the request schema so generated
    progressions can be sent back unchanged.
    """
    global _generator_config  # noqa: PLW0603
    if _generator_config is None:
        load_dotenv()
        _generator_config = GeneratorConfig(
            degrees=DEFAULT_GENERATOR_CONFIG.degrees,
            beats_per_chord=_env_float(
                "PROGRESSION_BEATS_PER_CHORD",
                DEFAULT_GENERATOR_CONFIG.beats_per_chord,
                MAX_DURATION_BEATS,
            ),
            tempo_bpm=_env_float(
                "PROGRESSION_TEMPO_BPM", DEFAULT_GENERATOR_CONFIG.tempo_bpm, MAX_TEMPO_BPM
            ),
        )
        logger.info(
            "Generator config: %.1f BPM, %.1f beats per chord",
            _generator_config.tempo_bpm,
            _generator_config.beats_per_chord,
        )
    return _generator_config


def get_scheduler_config() -> SchedulerConfig:
    """Return the scheduler configuration."""
    return DEFAULT_SCHEDULER_CONFIG


def reset_configs() -> None:
    """Drop cached configs so the next call re-reads the environment."""
    global _generator_config  # noqa: PLW0603
    _generator_config = None
