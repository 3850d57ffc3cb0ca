# tests/unit/test_state_machine.py

import pytest

from src.domain.state_machine import BookingStateMachine, BookingStatus
from src.domain.exceptions import InvalidStateTransitionError


# ---------------------
# VALID TRANSITIONS
# ---------------------

def test_pending_can_be_reviewed_or_cancelled():
    assert BookingStateMachine.can_transition(
        BookingStatus.PENDING,
        BookingStatus.APPROVED,
    )

    assert BookingStateMachine.can_transition(
        BookingStatus.PENDING,
        BookingStatus.REJECTED,
    )

    assert BookingStateMachine.can_transition(
        BookingStatus.PENDING,
        BookingStatus.CANCELLED,
    )


def test_allowed_transitions_from_pending():
    assert BookingStateMachine.get_allowed_transitions(BookingStatus.PENDING) == {
        BookingStatus.APPROVED,
        BookingStatus.REJECTED,
        BookingStatus.CANCELLED,
    }


# ---------------------
# INVALID TRANSITIONS
# ---------------------

def test_cannot_reject_after_approval():
    with pytest.raises(InvalidStateTransitionError) as excinfo:
        BookingStateMachine.validate_transition(
            BookingStatus.APPROVED,
            BookingStatus.REJECTED,
        )

    assert excinfo.value.from_state == "approved"
    assert excinfo.value.to_state == "rejected"


@pytest.mark.parametrize(
    "status",
    [BookingStatus.APPROVED, BookingStatus.REJECTED, BookingStatus.CANCELLED],
)
def test_reviewed_states_are_terminal(status):
    assert BookingStateMachine.is_terminal(status)

    with pytest.raises(InvalidStateTransitionError):
        BookingStateMachine.validate_transition(status, BookingStatus.APPROVED)


def test_pending_is_not_terminal():
    assert not BookingStateMachine.is_terminal(BookingStatus.PENDING)


def test_invalid_type_guard():
    with pytest.raises(TypeError):
        BookingStateMachine.validate_transition(
            "pending",  # invalid type
            BookingStatus.APPROVED,
        )
