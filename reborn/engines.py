"""
Base classes for the scheduling engines.

The constraint-solving scheduler, the failure predictor, the adaptive
(spaced-repetition) controller and the stability simulator all live outside
this package. Each one implements the matching interface below; the
concrete template method on the base class hands it the right inputs and
checks that what comes back honors the schema before anything is persisted.

Implementation Requirements:
- Hooks must be pure: same inputs, same outputs, no shared state
- Hooks return entities; they never persist them
- A non-conforming result raises ContractViolationError, it is never repaired
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from typing import Optional
import logging

from reborn.exceptions import (
    ContractViolationError,
    InvariantViolation,
    error_for_violation,
)
from reborn.models.checkin import CheckIn
from reborn.models.commitment import FixedCommitment
from reborn.models.enums import QualityRating, is_quality_rating
from reborn.models.habit import MAX_INTERVAL_DAYS, Habit, SpacedRepetitionState
from reborn.models.prediction import Prediction
from reborn.models.preferences import (
    AdaptiveFrequencyPreferences,
    PredictionPreferences,
    SimulationPreferences,
)
from reborn.models.requests import GenerateScheduleResponse
from reborn.models.schedule import Schedule
from reborn.models.simulation import SimulationSnapshot
from reborn.models.user import User
from reborn.validators import check_repetition_state, schedule_violations

logger = logging.getLogger(__name__)


# ============================================================================
# CONTRACT CHECKS
# ============================================================================

def check_transition(
    before: SpacedRepetitionState,
    after: SpacedRepetitionState,
    quality: QualityRating,
    adaptive: Optional[AdaptiveFrequencyPreferences] = None
) -> Optional[InvariantViolation]:
    """
    The spaced-repetition state machine as a checkable rule

    - quality >= GOOD: repetitions goes up by one and the interval does not
      shrink (unless it was above the configured maximum)
    - quality < GOOD: repetitions resets to 0 and the interval resets to the
      configured minimum
    - either way the new state stays inside its bounds
    """
    adaptive = adaptive or AdaptiveFrequencyPreferences()

    violation = check_repetition_state(after)
    if violation is not None:
        return violation
    if not is_quality_rating(quality):
        return InvariantViolation.TRANSITION_CONTRACT

    if int(quality) >= QualityRating.GOOD:
        floor = min(before.interval, adaptive.max_interval)
        if after.repetitions != before.repetitions + 1:
            return InvariantViolation.TRANSITION_CONTRACT
        if not floor <= after.interval <= MAX_INTERVAL_DAYS:
            return InvariantViolation.TRANSITION_CONTRACT
    else:
        if after.repetitions != 0 or after.interval != adaptive.min_interval:
            return InvariantViolation.TRANSITION_CONTRACT
    return None


def satisfies_transition_contract(
    before: SpacedRepetitionState,
    after: SpacedRepetitionState,
    quality: QualityRating,
    adaptive: Optional[AdaptiveFrequencyPreferences] = None
) -> bool:
    return check_transition(before, after, quality, adaptive) is None


def satisfies_prediction_contract(prediction: Prediction, habit: Habit, day: Optional[date] = None) -> bool:
    """Prediction is for this habit (and day); bounds are enforced by the model"""
    if prediction.habit_id != habit.habit_id:
        return False
    return day is None or prediction.date == day


def satisfies_simulation_contract(snapshot: SimulationSnapshot, habit: Habit) -> bool:
    return snapshot.habit_id == habit.habit_id


def _history_for(habit: Habit, history: Iterable[CheckIn], before: Optional[date] = None) -> list[CheckIn]:
    """This habit's check-ins, oldest first, optionally strictly before a date"""
    own = [c for c in history if c.habit_id == habit.habit_id and (before is None or c.date < before)]
    return sorted(own, key=lambda c: (c.date, c.timestamp))


# ============================================================================
# ENGINE INTERFACES
# ============================================================================

class ScheduleSolver(ABC):
    """
    Base class for the constraint-solving scheduler.

    Places the user's habits into one day, routing around fixed commitments.
    """

    engine_name = "scheduler"

    @abstractmethod
    def solve(
        self,
        user: User,
        habits: Sequence[Habit],
        commitments: Sequence[FixedCommitment],
        day: date
    ) -> Schedule:
        """Produce the day's schedule. Must not persist it."""
        pass

    def generate(
        self,
        user: User,
        habits: Iterable[Habit],
        commitments: Iterable[FixedCommitment],
        day: date,
        predictions: Iterable[Prediction] = ()
    ) -> GenerateScheduleResponse:
        """
        Run the solver for one day and verify its output

        Only the user's own habits and commitments reach the solver.

        Raises:
            ContractViolationError: If the schedule breaks any slot or
                schedule invariant
        """
        own_habits = [h for h in habits if h.user_id == user.user_id]
        own_commitments = [c for c in commitments if c.user_id == user.user_id]

        logger.info(
            f"Generating schedule for user {user.user_id} on {day} "
            f"({len(own_habits)} habits, {len(own_commitments)} commitments)"
        )
        schedule = self.solve(user, own_habits, own_commitments, day)

        violations = schedule_violations(
            schedule, own_habits, own_commitments, user.preferences.scheduling
        )
        if schedule.user_id != user.user_id or schedule.date != day:
            violations.insert(0, InvariantViolation.SCHEDULE_MISMATCH)
        if violations:
            raise ContractViolationError(
                f"{type(self).__name__} produced an invalid schedule for {day}: "
                f"{', '.join(v.value for v in violations)}",
                engine=self.engine_name,
                violations=violations,
                user_id=str(user.user_id),
                operation="generate_schedule",
            )

        habit_ids = {h.habit_id for h in own_habits}
        day_predictions = tuple(
            p for p in predictions if p.date == day and p.habit_id in habit_ids
        )
        logger.info(f"Schedule {schedule.schedule_id} accepted with {len(schedule.slots)} slots")
        return GenerateScheduleResponse(schedule=schedule, predictions=day_predictions)


class FailurePredictor(ABC):
    """
    Base class for the failure predictor.

    Scores the risk that a habit is missed on a given day from its recent
    check-in history.
    """

    engine_name = "predictor"

    @abstractmethod
    def score(
        self,
        habit: Habit,
        recent: Sequence[CheckIn],
        day: date,
        preferences: PredictionPreferences
    ) -> Prediction:
        """Predict from the recent window (oldest first). Must not persist."""
        pass

    def predict(
        self,
        habit: Habit,
        history: Iterable[CheckIn],
        day: date,
        preferences: Optional[PredictionPreferences] = None
    ) -> Optional[Prediction]:
        """
        Predict failure risk for ``habit`` on ``day``

        Returns None while the habit has fewer distinct check-in days than
        the cold-start threshold. Only check-ins from the last
        ``recent_window_size`` days are handed to the model.
        """
        preferences = preferences or PredictionPreferences()
        past = _history_for(habit, history, before=day)

        days_tracked = len({c.date for c in past})
        if days_tracked < preferences.cold_start_threshold:
            logger.debug(
                f"Cold start for habit {habit.habit_id}: {days_tracked}/"
                f"{preferences.cold_start_threshold} days tracked"
            )
            return None

        window_start = day - timedelta(days=preferences.recent_window_size)
        recent = [c for c in past if c.date >= window_start]
        prediction = self.score(habit, recent, day, preferences)

        if not satisfies_prediction_contract(prediction, habit, day):
            raise ContractViolationError(
                f"{type(self).__name__} returned a prediction for the wrong habit or day",
                engine=self.engine_name,
                violations=[InvariantViolation.HABIT_MISMATCH],
                operation="predict",
            )

        if prediction.is_at_risk(preferences.risk_threshold):
            logger.info(
                f"Habit {habit.habit_id} at risk on {day}: "
                f"p={prediction.failure_probability:.2f}"
            )
        return prediction


class AdaptiveController(ABC):
    """
    Base class for the spaced-repetition controller.

    Moves a habit's (easiness factor, interval, repetitions) triple after
    each recorded check-in.
    """

    engine_name = "adaptive_controller"

    @abstractmethod
    def next_state(
        self,
        state: SpacedRepetitionState,
        quality: QualityRating,
        preferences: AdaptiveFrequencyPreferences
    ) -> SpacedRepetitionState:
        """Return the new triple. Must not persist."""
        pass

    def update(
        self,
        habit: Habit,
        check_in: CheckIn,
        preferences: Optional[AdaptiveFrequencyPreferences] = None
    ) -> Habit:
        """
        Apply one check-in to a habit, returning the updated copy

        The streak always follows the check-in (completed: +1, missed:
        reset). The spaced-repetition triple only moves when SM-2 is
        enabled; a missed check-in without a rating is graded FAIL.

        Raises:
            InconsistentCombinationError: If the check-in belongs to
                another habit
            ContractViolationError: If the controller breaks the state
                machine rule
        """
        preferences = preferences or AdaptiveFrequencyPreferences()
        if check_in.habit_id != habit.habit_id:
            raise error_for_violation(
                InvariantViolation.HABIT_MISMATCH,
                "Check-in does not belong to this habit",
                field="habit_id",
                value=str(check_in.habit_id),
                operation="adaptive_update",
            )

        streak = habit.streak + 1 if check_in.success else 0
        if not preferences.enable_sm2:
            return habit.with_repetition_state(habit.repetition_state, streak=streak)

        quality = check_in.quality_rating
        if quality is None:
            quality = QualityRating.FAIL

        before = habit.repetition_state
        after = self.next_state(before, quality, preferences)
        violation = check_transition(before, after, quality, preferences)
        if violation is not None:
            raise ContractViolationError(
                f"{type(self).__name__} broke the spaced-repetition rule for "
                f"quality {quality.name}",
                engine=self.engine_name,
                violations=[violation],
                operation="adaptive_update",
                context={"before": before.model_dump(), "after": after.model_dump()},
            )

        logger.debug(
            f"Habit {habit.habit_id}: interval {before.interval} -> {after.interval}, "
            f"repetitions {before.repetitions} -> {after.repetitions}"
        )
        return habit.with_repetition_state(after, streak=streak)


class StabilitySimulator(ABC):
    """
    Base class for the physical-analogy stability simulator.

    Integrates a habit's recent history into a radius/velocity/drag reading
    with a signed distance to the failure event horizon.
    """

    engine_name = "simulator"

    @abstractmethod
    def step(
        self,
        habit: Habit,
        history: Sequence[CheckIn],
        preferences: SimulationPreferences
    ) -> SimulationSnapshot:
        """Advance the simulation using preferences.integration_method. Must not persist."""
        pass

    def simulate(
        self,
        habit: Habit,
        history: Iterable[CheckIn],
        preferences: Optional[SimulationPreferences] = None
    ) -> Optional[SimulationSnapshot]:
        """Take one snapshot, or None when simulation is disabled"""
        preferences = preferences or SimulationPreferences()
        if not preferences.enabled:
            return None

        snapshot = self.step(habit, _history_for(habit, history), preferences)
        if not satisfies_simulation_contract(snapshot, habit):
            raise ContractViolationError(
                f"{type(self).__name__} returned a snapshot for another habit",
                engine=self.engine_name,
                violations=[InvariantViolation.HABIT_MISMATCH],
                operation="simulate",
            )

        if snapshot.threshold_crossed:
            logger.info(
                f"Habit {habit.habit_id} crossed its event horizon "
                f"(distance {snapshot.event_horizon_distance:.3f})"
            )
        return snapshot
