"""
core/chord_engine/grouping.py — Tie planning and note-event scheduling.

compute_note_events() flattens a Progression into beat-timed NoteEvents,
holding tied pitch classes instead of re-striking them.

Tie plan:
    - group_all: pitch classes common to every chord (running intersection
      in chord order). With none in common, the most frequent pitch classes
      across the progression are used, earliest first on equal counts.
    - group_next[i]: pitch classes shared by chord i and chord i + 1. With
      none shared, notes of chord i within one semitone of a note of chord
      i + 1 are held instead.
    Both are capped at SchedulerConfig.max_ties pitch classes.

Expansion:
    1. Global ties: one event per matching note of the first chord, spanning
       the whole progression.
    2. Every other note starts at its chord's beat offset. It is skipped when
       it is already sounding (a global tie, or a tie from the previous
       boundary) and is lengthened through every consecutive boundary that
       ties its pitch class forward.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from core.chord_engine.types import Chord, NoteEvent, Progression, TiePlan
from core.config import DEFAULT_SCHEDULER_CONFIG, SchedulerConfig

logger = logging.getLogger(__name__)

MAX_TIES: int = DEFAULT_SCHEDULER_CONFIG.max_ties


# ---------------------------------------------------------------------------
# Tie planning
# ---------------------------------------------------------------------------


def _global_pitch_classes(chords: Sequence[Chord], max_ties: int) -> tuple[int, ...]:
    shared = list(chords[0].pitch_classes)
    for chord in chords[1:]:
        present = set(chord.pitch_classes)
        shared = [pc for pc in shared if pc in present]

    if not shared:
        # Counter keeps insertion order, so most_common() breaks ties by
        # first appearance.
        counts = Counter(n % 12 for chord in chords for n in chord.notes)
        shared = [pc for pc, _count in counts.most_common()]

    return tuple(shared[:max_ties])


def _nearest_pitch_classes(current: Chord, following: Chord, window: int) -> list[int]:
    """Pitch classes of notes in ``current`` with a neighbour in ``following``."""
    if not following.notes:
        return []
    matched: list[int] = []
    for note in current.notes:
        closest = min(following.notes, key=lambda other: abs(other - note))
        if abs(closest - note) <= window and note % 12 not in matched:
            matched.append(note % 12)
    return matched


def _boundary_pitch_classes(
    current: Chord,
    following: Chord,
    config: SchedulerConfig,
) -> tuple[int, ...]:
    present = set(following.pitch_classes)
    shared = [pc for pc in current.pitch_classes if pc in present]
    if not shared:
        shared = _nearest_pitch_classes(current, following, config.nearest_semitone_window)
    return tuple(shared[: config.max_ties])


def compute_tie_plan(
    progression: Progression,
    group_next: Sequence[bool] = (),
    group_all: bool = False,
    *,
    config: SchedulerConfig = DEFAULT_SCHEDULER_CONFIG,
) -> TiePlan:
    """Decide which pitch classes are held rather than re-struck.

    Args:
        progression: Source progression (read only)
        group_next:  ``group_next[i]`` ties chord i into chord i + 1. Flags
                     past the last boundary are ignored.
        group_all:   Hold shared pitch classes through the whole progression
        config:      Tie cap and nearest-semitone window

    Returns:
        TiePlan; boundaries with nothing to hold are omitted.
    """
    chords = progression.chords
    if not chords:
        return TiePlan()

    sustain_global: tuple[int, ...] = ()
    if group_all:
        sustain_global = _global_pitch_classes(chords, config.max_ties)

    sustain_next: list[tuple[int, tuple[int, ...]]] = []
    for i, flag in enumerate(group_next):
        if not flag or i + 1 >= len(chords):
            continue
        pcs = _boundary_pitch_classes(chords[i], chords[i + 1], config)
        if pcs:
            sustain_next.append((i, pcs))

    plan = TiePlan(sustain_pcs_global=sustain_global, sustain_next_pcs=tuple(sustain_next))
    logger.debug("Tie plan: global=%s next=%s", plan.sustain_pcs_global, plan.sustain_next_pcs)
    return plan


# ---------------------------------------------------------------------------
# Event expansion
# ---------------------------------------------------------------------------


def compute_note_events(
    progression: Progression,
    group_next: Sequence[bool] = (),
    group_all: bool = False,
    *,
    config: SchedulerConfig = DEFAULT_SCHEDULER_CONFIG,
) -> list[NoteEvent]:
    """Expand a progression into a flat list of beat-timed note events.

    No pitch class is struck again while a tie is holding it.

    Args:
        progression: Source progression (read only)
        group_next:  Per-boundary tie flags, see compute_tie_plan()
        group_all:   Hold shared pitch classes through the whole progression
        config:      Tie cap and nearest-semitone window

    Returns:
        NoteEvents in construction order: global ties first, then chord by
        chord. Start times are prefix sums of ``duration_beats``.

    Examples:
        >>> events = compute_note_events(progression, [True])
        >>> [(e.midi, e.start_beats, e.duration_beats) for e in events if e.midi == 60]
        [(60, 0.0, 8.0)]
    """
    chords = progression.chords
    plan = compute_tie_plan(progression, group_next, group_all, config=config)
    events: list[NoteEvent] = []

    held_notes: set[int] = set()
    held_pcs: set[int] = set()
    if plan.sustain_pcs_global:
        total = progression.total_beats
        for note in chords[0].notes:
            if note % 12 in plan.sustain_pcs_global and note not in held_notes:
                events.append(NoteEvent(midi=note, start_beats=0.0, duration_beats=total))
                held_notes.add(note)
                held_pcs.add(note % 12)

    cursor = 0.0
    for i, chord in enumerate(chords):
        for note in chord.notes:
            pc = note % 12
            if i == 0 and note in held_notes:
                continue
            if i > 0 and (pc in held_pcs or plan.ties_forward(i - 1, pc)):
                continue

            duration = chord.duration_beats
            j = i
            while j + 1 < len(chords) and plan.ties_forward(j, pc):
                duration += chords[j + 1].duration_beats
                j += 1
            events.append(NoteEvent(midi=note, start_beats=cursor, duration_beats=duration))
        cursor += chord.duration_beats

    logger.debug("Scheduled %d note events over %.2f beats", len(events), cursor)
    return events
