"""
Multi-frame confirmation state machine.

``DetectionState`` is an immutable value; ``transition`` is the only way
to move from one state to the next. ``ConfirmationStateMachine`` holds the
current state for a session.
"""

from dataclasses import dataclass, replace
from enum import Enum

from ean_scanner.config import Settings


class Phase(str, Enum):
    """Coarse phase of a detection state at a given time."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    COOLDOWN = "cooldown"


class Outcome(str, Enum):
    """What a single transition did."""

    COOLDOWN = "cooldown"  # ignored, cooldown active
    RESET = "reset"  # no candidate this tick, counters cleared
    COUNTING = "counting"  # candidate tracked, threshold not reached
    SUPPRESSED = "suppressed"  # duplicate of the last accepted code
    ACCEPTED = "accepted"


@dataclass(frozen=True)
class DetectionState:
    """
    Per-session confirmation state.

    Only one candidate is tracked at a time; ``hits`` is its count of
    consecutive identical decodes. Timestamps are monotonic milliseconds.
    """

    candidate: str | None = None
    hits: int = 0
    last_accepted_code: str | None = None
    last_accepted_at: float | None = None
    cooldown_until: float | None = None

    def in_cooldown(self, now_ms: float) -> bool:
        return self.cooldown_until is not None and now_ms < self.cooldown_until

    def phase(self, now_ms: float) -> Phase:
        if self.in_cooldown(now_ms):
            return Phase.COOLDOWN
        if self.candidate is not None:
            return Phase.ACCUMULATING
        return Phase.IDLE


@dataclass(frozen=True)
class Transition:
    """Result of feeding one tick into the state machine."""

    state: DetectionState
    outcome: Outcome
    accepted: str | None = None


def transition(
    state: DetectionState,
    candidate: str | None,
    now_ms: float,
    threshold: int = 3,
    duplicate_window_ms: float = 3000,
    cooldown_ms: float = 1000,
) -> Transition:
    """
    Advance the confirmation state by one tick.

    Args:
        state: Current state
        candidate: Validated code decoded this tick, or None for a miss
        now_ms: Monotonic time of the tick in milliseconds
        threshold: Consecutive identical decodes required to accept
        duplicate_window_ms: Re-confirming the last accepted code within
            this window is suppressed
        cooldown_ms: Length of the post-acceptance cooldown

    Returns:
        The next state and what happened
    """
    if state.cooldown_until is not None:
        if now_ms < state.cooldown_until:
            return Transition(state, Outcome.COOLDOWN)
        # Cooldown expired: back to idle with empty counters
        state = replace(state, candidate=None, hits=0, cooldown_until=None)

    if candidate is None:
        return Transition(replace(state, candidate=None, hits=0), Outcome.RESET)

    hits = state.hits + 1 if candidate == state.candidate else 1
    if hits < threshold:
        return Transition(replace(state, candidate=candidate, hits=hits), Outcome.COUNTING)

    if (
        candidate == state.last_accepted_code
        and state.last_accepted_at is not None
        and now_ms - state.last_accepted_at < duplicate_window_ms
    ):
        return Transition(replace(state, candidate=None, hits=0), Outcome.SUPPRESSED)

    accepted = DetectionState(
        last_accepted_code=candidate,
        last_accepted_at=now_ms,
        cooldown_until=now_ms + cooldown_ms,
    )
    return Transition(accepted, Outcome.ACCEPTED, accepted=candidate)


class ConfirmationStateMachine:
    """Holds a session's ``DetectionState`` and applies transitions to it."""

    def __init__(self, settings: Settings):
        self.threshold = settings.confirmation_threshold
        self.duplicate_window_ms = settings.duplicate_window_ms
        self.cooldown_ms = settings.cooldown_ms
        self.state = DetectionState()

    def observe(self, candidate: str | None, now_ms: float) -> Transition:
        """Feed one tick's candidate (or None) and keep the new state."""
        result = transition(
            self.state,
            candidate,
            now_ms,
            threshold=self.threshold,
            duplicate_window_ms=self.duplicate_window_ms,
            cooldown_ms=self.cooldown_ms,
        )
        self.state = result.state
        return result

    def in_cooldown(self, now_ms: float) -> bool:
        return self.state.in_cooldown(now_ms)

    def reset(self) -> None:
        """Discard all state, including the last accepted code."""
        self.state = DetectionState()
