"""Capture pipeline state machine definitions."""

from enum import Enum


class CaptureState(str, Enum):
    """States a single capture run moves through."""

    IDLE = "IDLE"
    LAUNCHING = "LAUNCHING"
    NAVIGATING = "NAVIGATING"
    AWAITING_READINESS = "AWAITING_READINESS"
    RENDERING = "RENDERING"
    CLOSING = "CLOSING"
    DONE = "DONE"
    FAILED = "FAILED"


TERMINAL_STATES = {CaptureState.DONE, CaptureState.FAILED}

# States holding a live browser session; leaving any of them goes through CLOSING
SESSION_STATES = {
    CaptureState.NAVIGATING,
    CaptureState.AWAITING_READINESS,
    CaptureState.RENDERING,
}

STATE_TRANSITIONS: dict[CaptureState, list[CaptureState]] = {
    CaptureState.IDLE: [CaptureState.LAUNCHING],
    # Launch failure opens nothing, so there is nothing to close
    CaptureState.LAUNCHING: [CaptureState.NAVIGATING, CaptureState.FAILED],
    CaptureState.NAVIGATING: [CaptureState.AWAITING_READINESS, CaptureState.CLOSING],
    CaptureState.AWAITING_READINESS: [CaptureState.RENDERING, CaptureState.CLOSING],
    CaptureState.RENDERING: [CaptureState.CLOSING],
    CaptureState.CLOSING: [CaptureState.DONE, CaptureState.FAILED],
    CaptureState.DONE: [],
    CaptureState.FAILED: [],
}


def can_transition(current: CaptureState, target: CaptureState) -> bool:
    """Return True when *target* is a legal next state from *current*."""
    return target in STATE_TRANSITIONS.get(current, [])
