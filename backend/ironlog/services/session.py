"""
Live workout session state machine.

One ``WorkoutSession`` object drives one training run:

    idle -> configuring -> exercise_preview -> set_running -> resting
         -> (set_running | exercise_preview | workout_complete)

Every public operation either applies completely or raises
``WorkoutRejected`` before touching any state. Time is never read directly:
elapsed values come from the injected clock, and ``tick()`` lets the host
advance time-driven transitions (the rest countdown reaching zero).
Events are delivered after the operation that produced them has finished.
"""
from __future__ import annotations
import functools
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from ironlog.ids import new_id
from ironlog.schemas.enums import (
    BARBELL_WEIGHTS,
    BarbellVariant,
    EquipmentType,
    PauseDomain,
    PlanRestPolicy,
    SessionMode,
    SessionState,
    SetType,
)
from ironlog.schemas.session import OpenExercise, SessionClocks, SessionSnapshot
from ironlog.schemas.template import ExerciseBlueprint, TemplateRecord
from ironlog.schemas.workout import CompletedExercise, Equipment, SetRecord
from ironlog.services import errors
from ironlog.services.clock import Clock, SystemClock
from ironlog.services.errors import WorkoutRejected
from ironlog.services.events import EventBus
from ironlog.services.formatters import format_clock, format_set_clock
from ironlog.services.metrics import (
    compute_volume,
    is_personal_record,
    normalize_exercise_name,
    to_number,
)
from ironlog.services.timers import Countdown, Stopwatch

log = logging.getLogger(__name__)

DEFAULT_WORKOUT_NAME = "Workout"


def transition(method):
    # events emitted while the method runs reach listeners once it returns or raises
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.events.deferred():
            return method(self, *args, **kwargs)
    return wrapper


@dataclass(slots=True, frozen=True)
class RestInterval:
    rested: int
    skipped: int = 0


@dataclass(slots=True)
class ExerciseInProgress:
    id: str
    name: str
    muscle: str
    equipment: Equipment
    sets: list[SetRecord] = field(default_factory=list)

    def freeze(self) -> CompletedExercise:
        return CompletedExercise(
            id=self.id,
            name=self.name,
            muscle=self.muscle,
            equipment=self.equipment,
            sets=tuple(self.sets),
        )


class WorkoutSession:
    def __init__(
        self,
        clock: Clock | None = None,
        *,
        default_rest_seconds: int = 90,
        standard_barbell_kg: float = 20.0,
        plan_rest_policy: PlanRestPolicy = PlanRestPolicy.bypass,
    ):
        self.clock = clock or SystemClock()
        self.default_rest_seconds = default_rest_seconds
        self.standard_barbell_kg = standard_barbell_kg
        self.plan_rest_policy = PlanRestPolicy(plan_rest_policy)
        self.events = EventBus()

        self.workout_timer = Stopwatch(self.clock)
        self.set_timer = Stopwatch(self.clock)
        self.rest_timer = Countdown(self.clock)
        self.companion_timer = Stopwatch(self.clock)
        self._clear()

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _clear(self) -> None:
        self.state = SessionState.idle
        self.mode = SessionMode.live
        self.workout_name = ""
        self.workout_type = ""
        self.rest_seconds = self.default_rest_seconds
        self.source_template_id: str | None = None
        self.planned: list[ExerciseBlueprint] = []
        self.known_prs: dict[str, float] = {}

        self.completed_exercises: list[CompletedExercise] = []
        self.current_exercise: ExerciseInProgress | None = None
        self.rest_intervals: list[RestInterval] = []

        self.companion_active = False
        self._companion_wait_total = 0
        self._companion_paused_workout = False
        self.next_weight = 0.0

    @property
    def live(self) -> bool:
        return self.mode is SessionMode.live

    def _reject(self, code: str, message: str):
        self.events.emit("rejected", code=code, message=message)
        log.info("session rejected %s: %s", code, message)
        raise WorkoutRejected(code, message)

    def _require_state(self, *allowed: SessionState) -> None:
        if self.state not in allowed:
            self._reject(
                errors.INVALID_STATE,
                f"Not possible while {self.state.value.replace('_', ' ')}",
            )

    def _require_session(self) -> None:
        if self.state in (SessionState.idle, SessionState.workout_complete):
            self._reject(errors.INVALID_STATE, "Start a workout first")

    def _stop_all_timers(self) -> None:
        self.set_timer.stop()
        self.rest_timer.stop()
        if self.companion_active:
            self._end_companion_turn()
        self.workout_timer.stop()

    def _resolve_equipment(self, equipment: Equipment | None) -> Equipment:
        if equipment is None:
            return Equipment()
        if equipment.type is not EquipmentType.barbell:
            return Equipment(type=equipment.type)
        variant = equipment.barbell_variant or BarbellVariant.olympic
        if variant is BarbellVariant.custom:
            bar = equipment.barbell_weight
        elif variant is BarbellVariant.olympic:
            bar = self.standard_barbell_kg
        else:
            bar = BARBELL_WEIGHTS[variant]
        return Equipment(type=EquipmentType.barbell, barbell_variant=variant, barbell_weight=bar)

    def _take_planned(self, name: str) -> ExerciseBlueprint | None:
        key = normalize_exercise_name(name)
        for i, bp in enumerate(self.planned):
            if normalize_exercise_name(bp.name) == key:
                return self.planned.pop(i)
        return None

    def _begin_set(self, at: float | None = None) -> None:
        if self.companion_active:
            self._end_companion_turn()
        if self.live:
            self.set_timer.restart(at)
            # the workout clock starts with the first recorded set; a held clock picks up again here
            self.workout_timer.resume()
        else:
            self.set_timer.reset()
        self.state = SessionState.set_running
        self.events.emit(
            "set_started",
            exercise=self.current_exercise.name,
            set_number=len(self.current_exercise.sets) + 1,
            suggested_weight=self.next_weight,
        )

    def _record_rest(self, rested: int, skipped: int) -> RestInterval:
        interval = RestInterval(rested=rested, skipped=skipped)
        self.rest_intervals.append(interval)
        return interval

    def _interrupt_rest(self) -> None:
        # leaving rest early for any reason is accounted like a skip
        if self.state is SessionState.resting and self.rest_timer.active:
            rested = self.rest_timer.stop()
            self._record_rest(rested, self.rest_timer.duration - rested)

    def _end_companion_turn(self) -> int:
        wait = self.companion_timer.stop()
        self.companion_timer.reset()
        self._companion_wait_total += wait
        self.companion_active = False
        if self._companion_paused_workout:
            self.workout_timer.resume()
        self._companion_paused_workout = False
        return wait

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def subscribe(self, listener):
        return self.events.subscribe(listener)

    @transition
    def start(
        self,
        mode: SessionMode | str = SessionMode.live,
        *,
        name: str | None = None,
        workout_type: str | None = None,
        rest_seconds: int | None = None,
        template: TemplateRecord | None = None,
        known_prs: Mapping[str, float] | None = None,
    ) -> None:
        """Begin a fresh session, discarding whatever was in flight."""
        mode = SessionMode(mode)
        self._stop_all_timers()
        for timer in (self.workout_timer, self.set_timer, self.rest_timer, self.companion_timer):
            timer.reset()
        self._clear()

        self.mode = mode
        if template is not None:
            self.source_template_id = template.id
            self.workout_name = template.name
            self.workout_type = template.type
            self.rest_seconds = template.rest_seconds
            self.planned = [bp.model_copy() for bp in template.exercises]
        if name:
            self.workout_name = name
        if workout_type:
            self.workout_type = workout_type
        if rest_seconds is not None:
            self.rest_seconds = max(0, int(rest_seconds))
        self.known_prs = dict(known_prs or {})

        self.state = SessionState.configuring
        log.info("session started mode=%s name=%r", mode.value, self.workout_name)
        self.events.emit("started", mode=mode.value, name=self.workout_name)

    @transition
    def configure(
        self,
        *,
        name: str | None = None,
        workout_type: str | None = None,
        rest_seconds: int | None = None,
    ) -> None:
        self._require_session()
        if name is not None:
            self.workout_name = name.strip()
        if workout_type is not None:
            self.workout_type = workout_type.strip()
        if rest_seconds is not None:
            # applies from the next rest on
            self.rest_seconds = max(0, int(rest_seconds))

    @transition
    def proceed(self) -> None:
        """Leave configuration and wait for the first exercise."""
        self._require_state(SessionState.configuring)
        if not self.workout_name:
            self.workout_name = DEFAULT_WORKOUT_NAME
        self.state = SessionState.exercise_preview

    @transition
    def reset(self) -> None:
        """Stop every timer and forget the session."""
        self._stop_all_timers()
        for timer in (self.workout_timer, self.set_timer, self.rest_timer, self.companion_timer):
            timer.reset()
        self._clear()
        self.events.emit("reset")

    cancel = reset

    # ------------------------------------------------------------------
    # exercises and sets
    # ------------------------------------------------------------------
    @transition
    def begin_exercise(
        self,
        name: str,
        muscle: str | None = None,
        equipment: Equipment | None = None,
    ) -> ExerciseInProgress:
        self._require_session()
        name = (name or "").strip()
        if not name:
            self._reject(errors.NO_EXERCISE, "Pick an exercise or type one")

        self.tick()
        if self.current_exercise is not None:
            if self.current_exercise.sets:
                self.close_exercise()
            else:
                self.set_timer.stop()
                self.set_timer.reset()

        if self.state is SessionState.configuring and not self.workout_name:
            self.workout_name = DEFAULT_WORKOUT_NAME

        blueprint = self._take_planned(name)
        if equipment is None and blueprint is not None:
            equipment = blueprint.equipment
        self.current_exercise = ExerciseInProgress(
            id=new_id(),
            name=name,
            muscle=(muscle or (blueprint.muscle if blueprint else "") or "General").strip(),
            equipment=self._resolve_equipment(equipment),
        )
        self.next_weight = blueprint.estimated_weight if blueprint else 0.0
        self.state = SessionState.exercise_preview
        self.events.emit(
            "exercise_started",
            name=name,
            muscle=self.current_exercise.muscle,
            equipment=self.current_exercise.equipment.type.value,
        )
        return self.current_exercise

    @transition
    def start_set(self) -> None:
        """Start the next set from the preview, or cut the current rest short."""
        self.tick()
        if self.current_exercise is None:
            self._reject(errors.NO_EXERCISE, "Choose an exercise first")
        self._require_state(SessionState.exercise_preview, SessionState.resting)
        if self.state is SessionState.resting:
            self.skip_rest()
            return
        self._begin_set()

    @transition
    def finish_set(
        self,
        weight: float = 0,
        reps: int = 0,
        set_type: SetType | str = SetType.effective,
    ) -> SetRecord:
        self.tick()
        self._require_state(SessionState.set_running)
        weight = to_number(weight)
        reps = int(to_number(reps))
        set_type = SetType(set_type)
        if weight < 0 or reps < 0:
            self._reject(errors.EMPTY_SET, "Weight and reps cannot be negative")
        if weight == 0 and reps == 0:
            self._reject(errors.EMPTY_SET, "Log at least a weight or a rep count")

        ex = self.current_exercise
        duration = self.set_timer.stop()
        self.set_timer.reset()
        if self.live:
            self.workout_timer.start()

        record = SetRecord(
            id=new_id(),
            weight=weight,
            real_weight=weight + ex.equipment.fixed_load,
            reps=reps,
            duration=duration,
            set_type=set_type,
            equipment_type=ex.equipment.type,
        )
        ex.sets.append(record)
        self.next_weight = weight
        self.events.emit(
            "set_finished",
            exercise=ex.name,
            set=record.model_dump(mode="json"),
            volume=compute_volume(ex.sets),
            is_pr=is_personal_record(ex.name, record.real_weight, self.known_prs, set_type),
        )

        if self.live:
            self.state = SessionState.resting
            self.rest_timer.start(self.rest_seconds)
            self.events.emit("rest_started", seconds=self.rest_seconds)
            self.tick()
        elif self.plan_rest_policy is PlanRestPolicy.record:
            self.state = SessionState.resting
            self._record_rest(0, 0)
            self.events.emit("rest_started", seconds=0)
            self.events.emit("rest_finished", rested=0)
            self._begin_set()
        else:
            self._begin_set()
        return record

    @transition
    def tick(self) -> SessionState:
        """Apply time-driven transitions; safe to call as often as you like."""
        if self.state is SessionState.resting and self.rest_timer.expired:
            overshoot = self.rest_timer.overshoot()
            rested = self.rest_timer.duration
            self.rest_timer.stop()
            self._record_rest(rested, 0)
            self.events.emit("rest_finished", rested=rested)
            # the next set started the moment the countdown hit zero, unless the
            # companion still had the equipment; then it starts now
            at = None if self.companion_active else self.clock.now() - overshoot
            self._begin_set(at=at)
        return self.state

    @transition
    def skip_rest(self) -> RestInterval:
        self.tick()
        self._require_state(SessionState.resting)
        rested = self.rest_timer.stop()
        interval = self._record_rest(rested, self.rest_timer.duration - rested)
        self.events.emit("rest_skipped", rested=interval.rested, skipped=interval.skipped)
        self._begin_set()
        return interval

    @transition
    def adjust_next_weight(self, delta: float) -> float:
        self._require_session()
        self.next_weight = max(0.0, self.next_weight + to_number(delta))
        return self.next_weight

    @transition
    def close_exercise(self) -> CompletedExercise:
        self.tick()
        ex = self.current_exercise
        if ex is None:
            self._reject(errors.NO_EXERCISE, "No exercise in progress")
        if not ex.sets:
            self._reject(errors.NO_SETS, "Finish at least one set before closing the exercise")

        self._interrupt_rest()
        # an unfinished set is dropped
        self.set_timer.stop()
        self.set_timer.reset()
        self.rest_timer.reset()

        closed = ex.freeze()
        self.completed_exercises.append(closed)
        self.current_exercise = None
        self.state = SessionState.exercise_preview
        self.events.emit(
            "exercise_closed",
            name=closed.name,
            sets=len(closed.sets),
            volume=compute_volume(closed.sets),
        )
        return closed

    @transition
    def complete(self) -> None:
        """Freeze every timer ahead of finalization."""
        self._stop_all_timers()
        self.state = SessionState.workout_complete
        self.events.emit("completed", duration=self.elapsed_workout_seconds())

    # ------------------------------------------------------------------
    # pause domains
    # ------------------------------------------------------------------
    def pause(self, domain: PauseDomain | str) -> bool:
        domain = PauseDomain(domain)
        if domain is PauseDomain.workout:
            return self.pause_workout()
        if domain is PauseDomain.set:
            return self.pause_set()
        return self.pause_rest()

    def resume(self, domain: PauseDomain | str) -> bool:
        domain = PauseDomain(domain)
        if domain is PauseDomain.workout:
            return self.resume_workout()
        if domain is PauseDomain.set:
            return self.resume_set()
        return self.resume_rest()

    @transition
    def pause_workout(self) -> bool:
        self.tick()
        self._require_session()
        if self.state is SessionState.set_running:
            self._reject(errors.INVALID_STATE, "Finish or pause the set first")
        paused = self.workout_timer.pause()
        if paused:
            self.events.emit("paused", domain=PauseDomain.workout.value)
        return paused

    @transition
    def resume_workout(self) -> bool:
        self._require_session()
        if self.companion_active:
            self._reject(errors.INVALID_STATE, "Your companion is still training")
        resumed = self.workout_timer.resume()
        if resumed:
            self.events.emit("resumed", domain=PauseDomain.workout.value)
        return resumed

    @transition
    def pause_set(self) -> bool:
        self._require_state(SessionState.set_running)
        paused = self.set_timer.pause()
        if paused:
            self.events.emit("paused", domain=PauseDomain.set.value)
        return paused

    @transition
    def resume_set(self) -> bool:
        self._require_state(SessionState.set_running)
        resumed = self.set_timer.resume()
        if resumed:
            self.events.emit("resumed", domain=PauseDomain.set.value)
        return resumed

    @transition
    def pause_rest(self) -> bool:
        self.tick()
        self._require_state(SessionState.resting)
        paused = self.rest_timer.pause()
        if paused:
            self.events.emit("paused", domain=PauseDomain.rest.value)
        return paused

    @transition
    def resume_rest(self) -> bool:
        self._require_state(SessionState.resting)
        resumed = self.rest_timer.resume()
        if resumed:
            self.events.emit("resumed", domain=PauseDomain.rest.value)
        return resumed

    @transition
    def toggle_companion(self) -> bool:
        """
        Hand the equipment to (or take it back from) a training companion.

        While it is the companion's turn the workout clock is held and the
        wait accrues separately. Returns True when the companion's turn starts.
        """
        self.tick()
        self._require_session()
        if self.state is SessionState.set_running:
            self._reject(errors.INVALID_STATE, "Finish the set before switching turns")

        if self.companion_active:
            wait = self._end_companion_turn()
            self.events.emit("companion_toggled", active=False, waited=wait)
            return False

        self.companion_active = True
        self._companion_paused_workout = self.workout_timer.pause()
        if self.live:
            self.companion_timer.restart()
        self.events.emit("companion_toggled", active=True)
        return True

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def elapsed_workout_seconds(self) -> int:
        return self.workout_timer.elapsed_seconds()

    def elapsed_set_seconds(self) -> int:
        return self.set_timer.elapsed_seconds()

    def rest_remaining_seconds(self) -> int:
        if self.state is not SessionState.resting:
            return 0
        return self.rest_timer.remaining_seconds()

    def companion_wait_seconds(self) -> int:
        total = self._companion_wait_total
        if self.companion_active:
            total += self.companion_timer.elapsed_seconds()
        return total

    def all_sets(self) -> list[SetRecord]:
        sets = [s for ex in self.completed_exercises for s in ex.sets]
        if self.current_exercise is not None:
            sets.extend(self.current_exercise.sets)
        return sets

    @property
    def total_series_seconds(self) -> int:
        return sum(s.duration for s in self.all_sets())

    @property
    def total_rest_seconds(self) -> int:
        return sum(r.rested for r in self.rest_intervals)

    @property
    def total_skipped_rest_seconds(self) -> int:
        return sum(r.skipped for r in self.rest_intervals)

    def current_volume(self) -> float:
        return compute_volume(self.all_sets())

    def snapshot(self) -> SessionSnapshot:
        ex = self.current_exercise
        workout_secs = self.elapsed_workout_seconds()
        set_secs = self.elapsed_set_seconds()
        rest_secs = self.rest_remaining_seconds()
        return SessionSnapshot(
            state=self.state,
            mode=self.mode,
            workout_name=self.workout_name,
            workout_type=self.workout_type,
            rest_seconds=self.rest_seconds,
            elapsed_workout_seconds=workout_secs,
            elapsed_set_seconds=set_secs,
            rest_remaining_seconds=rest_secs,
            total_series_seconds=self.total_series_seconds,
            total_rest_seconds=self.total_rest_seconds,
            total_skipped_rest_seconds=self.total_skipped_rest_seconds,
            companion_active=self.companion_active,
            companion_wait_seconds=self.companion_wait_seconds(),
            workout_paused=self.workout_timer.paused,
            next_weight=self.next_weight,
            current_volume=self.current_volume(),
            clocks=SessionClocks(
                workout=format_clock(workout_secs),
                set=format_set_clock(set_secs),
                rest=format_set_clock(rest_secs),
            ),
            current_exercise=None if ex is None else OpenExercise(
                id=ex.id, name=ex.name, muscle=ex.muscle,
                equipment=ex.equipment, sets=list(ex.sets),
            ),
            completed_exercises=list(self.completed_exercises),
            planned_exercises=[bp.name for bp in self.planned],
        )
