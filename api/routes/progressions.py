"""
api/routes/progressions.py — Chord progression endpoints.

Endpoints:
    POST /progressions/generate — Voice-led I–V–vi–IV progression in a key/mode
    POST /progressions/swap     — Smart-swap one chord (harmony or voicing mode)
    POST /progressions/schedule — Tie plan + flat note events for playback
    POST /progressions/revoice  — Octave shift / seeded variation of a chord

All endpoints are stateless: the client sends the progression it holds and
receives new values back. Pure music theory computation, no storage.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_generator_config, get_scheduler_config
from api.schemas.progression import (
    ChordOut,
    GenerateRequest,
    GenerateResponse,
    NoteEventOut,
    ProgressionOut,
    RevoiceRequest,
    RevoiceResponse,
    ScheduleRequest,
    ScheduleResponse,
    SwapRequest,
    SwapResponse,
    TiePlanOut,
)
from core.chord_engine.generator import generate_progression
from core.chord_engine.grouping import compute_note_events, compute_tie_plan
from core.chord_engine.rng import wall_clock_seed
from core.chord_engine.swap import smart_swap
from core.chord_engine.voicing import revoice_chord
from core.config import GeneratorConfig, SchedulerConfig
from infrastructure.metrics import (
    LatencyTimer,
    record_generation,
    record_request,
    record_scheduled_events,
    record_swap,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progressions", tags=["progressions"])


# ---------------------------------------------------------------------------
# POST /progressions/generate
# ---------------------------------------------------------------------------


@router.post("/generate", response_model=GenerateResponse)
def generate(
    request: GenerateRequest,
    config: GeneratorConfig = Depends(get_generator_config),
) -> GenerateResponse:
    """Generate a voice-led progression in the requested key and mode.

    Raises:
        422: Unknown key or mode.
    """
    with LatencyTimer() as timer:
        try:
            progression = generate_progression(request.key, request.mode, config=config)
        except ValueError as exc:
            logger.warning("generate rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    record_generation(progression.mode)
    record_request(endpoint="/progressions/generate", latency_seconds=timer.elapsed)
    logger.info("Generated %s %s: %s", progression.key, progression.mode, progression.chord_names)
    return GenerateResponse(progression=ProgressionOut.from_domain(progression))


# ---------------------------------------------------------------------------
# POST /progressions/swap
# ---------------------------------------------------------------------------


@router.post("/swap", response_model=SwapResponse)
def swap(request: SwapRequest) -> SwapResponse:
    """Replace one chord with a smart-swap substitute.

    The seed used is echoed back so the client can reproduce the result.

    Raises:
        422: Invalid progression or chord_index out of range.
    """
    seed = request.seed if request.seed is not None else wall_clock_seed()

    with LatencyTimer() as timer:
        try:
            progression = request.progression.to_domain()
            chord = smart_swap(progression, request.chord_index, request.mode, seed)
        except ValueError as exc:
            logger.warning("swap rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        updated = progression.with_chord(request.chord_index, chord)

    record_swap(request.mode)
    record_request(endpoint="/progressions/swap", latency_seconds=timer.elapsed)
    logger.info(
        "Swapped chord %d (%s): %s → %s",
        request.chord_index,
        request.mode,
        progression.chords[request.chord_index].name,
        chord.name,
    )
    return SwapResponse(
        chord=ChordOut.from_domain(chord),
        progression=ProgressionOut.from_domain(updated),
        seed=seed,
    )


# ---------------------------------------------------------------------------
# POST /progressions/schedule
# ---------------------------------------------------------------------------


@router.post("/schedule", response_model=ScheduleResponse)
def schedule(
    request: ScheduleRequest,
    config: SchedulerConfig = Depends(get_scheduler_config),
) -> ScheduleResponse:
    """Compute the tie plan and flat note events for a progression.

    Raises:
        422: Invalid progression.
    """
    with LatencyTimer() as timer:
        try:
            progression = request.progression.to_domain()
        except ValueError as exc:
            logger.warning("schedule rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        plan = compute_tie_plan(progression, request.group_next, request.group_all, config=config)
        events = compute_note_events(
            progression, request.group_next, request.group_all, config=config
        )

    record_scheduled_events(len(events))
    record_request(endpoint="/progressions/schedule", latency_seconds=timer.elapsed)
    logger.info("Scheduled %d events over %.1f beats", len(events), progression.total_beats)
    return ScheduleResponse(
        tie_plan=TiePlanOut.from_domain(plan),
        events=[NoteEventOut.from_domain(e, progression.tempo_bpm) for e in events],
        event_count=len(events),
        total_beats=progression.total_beats,
        tempo_bpm=progression.tempo_bpm,
    )


# ---------------------------------------------------------------------------
# POST /progressions/revoice
# ---------------------------------------------------------------------------


@router.post("/revoice", response_model=RevoiceResponse)
def revoice(request: RevoiceRequest) -> RevoiceResponse:
    """Shift a chord's voicing by octaves and optionally vary it with a seed.

    Raises:
        422: Invalid chord.
    """
    with LatencyTimer() as timer:
        try:
            chord = revoice_chord(request.chord.to_domain(), request.octave_offset, request.seed)
        except ValueError as exc:
            logger.warning("revoice rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    record_request(endpoint="/progressions/revoice", latency_seconds=timer.elapsed)
    return RevoiceResponse(chord=ChordOut.from_domain(chord))
