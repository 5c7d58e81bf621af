"""Buyer Deposit State Machine Guard.

Uses python-statemachine to enforce legal deposit transitions at the domain
level. No matter which surface (REST, MCP, simulation) drives the ledger, a
release or cancel against an empty deposit raises TransitionNotAllowed.

The state machine is instantiated per operation from the buyer's recorded
deposit and validates the transition before the ledger writes anything.

Transition table:
    EMPTY -> HELD     (deposit)
    HELD  -> HELD     (deposit, accumulates)
    HELD  -> EMPTY    (release)
    HELD  -> EMPTY    (cancel)
"""

from __future__ import annotations

from statemachine import State, StateMachine

from escrow_ledger.domain.enums import DepositStatus


class DepositStateMachine(StateMachine):
    """State machine that guards one buyer's deposit lifecycle.

    Usage:
        sm = DepositStateMachine(current_status="HELD")
        sm.release()   # transitions to EMPTY
        sm.status      # "EMPTY"
    """

    # --- States ---
    EMPTY = State("EMPTY", initial=True)
    HELD = State("HELD")

    # --- Events / Transitions ---
    deposit = EMPTY.to(HELD) | HELD.to.itself()
    release = HELD.to(EMPTY)
    cancel = HELD.to(EMPTY)

    def __init__(self, current_status: str = DepositStatus.EMPTY) -> None:
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown deposit status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=str(current_status))

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches DepositStatus)."""
        return str(self.current_state.value)


def status_for(amount: int) -> DepositStatus:
    """Derive the deposit status from a recorded amount."""
    return DepositStatus.HELD if amount > 0 else DepositStatus.EMPTY


def validate_transition(current_status: str, event_name: str) -> str:
    """Validate a deposit transition and return the new status.

    Raises:
        TransitionNotAllowed: If the transition is illegal.
        ValueError: If the status or event name is invalid.
    """
    sm = DepositStateMachine(current_status=current_status)

    event_method = getattr(sm, event_name, None)
    if event_method is None or not callable(event_method):
        raise ValueError(f"Unknown event '{event_name}'")

    event_method()
    return sm.status
