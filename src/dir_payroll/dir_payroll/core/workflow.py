from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Mapping, TypeVar

from .enums import DocumentStatus, EmployeePeriodStatus, TicketStatus
from .exceptions import ValidationError

S = TypeVar("S", bound=Enum)


@dataclass(frozen=True)
class Workflow(Generic[S]):
    """Explicit state machine: ``transitions`` maps a state to the states it may move to.

    Requesting the current state again is always accepted as a no-op.
    """

    name: str
    initial: S
    transitions: Mapping[S, frozenset]

    def can_transition(self, current: S, target: S) -> bool:
        if current == target:
            return True
        return target in self.transitions.get(current, frozenset())

    def ensure_transition(self, current: S, target: S) -> S:
        if not self.can_transition(current, target):
            raise ValidationError(f"Invalid {self.name} transition: {current.value} -> {target.value}")
        return target


def _linear(states: list, *, name: str) -> Workflow:
    """Forward by one step, plus a reset to the first state from anywhere else."""
    initial = states[0]
    table: dict = {}
    for i, state in enumerate(states):
        allowed = set()
        if i + 1 < len(states):
            allowed.add(states[i + 1])
        if state != initial:
            allowed.add(initial)
        table[state] = frozenset(allowed)
    return Workflow(name=name, initial=initial, transitions=table)


EMPLOYEE_PERIOD_WORKFLOW: Workflow[EmployeePeriodStatus] = _linear(
    [EmployeePeriodStatus.PENDING, EmployeePeriodStatus.AWAITING_PAY, EmployeePeriodStatus.READY_FOR_DIR],
    name="employee period",
)

DOCUMENT_WORKFLOW: Workflow[DocumentStatus] = _linear(
    [
        DocumentStatus.PENDING,
        DocumentStatus.PREVAILING_WAGE_ENTERED,
        DocumentStatus.AWAITING_PAY,
        DocumentStatus.UPLOAD_TO_DIR,
        DocumentStatus.COMPLETED,
    ],
    name="document",
)

# Review branches into approved/rejected, so it is spelled out by hand.
TICKET_WORKFLOW: Workflow[TicketStatus] = Workflow(
    name="ticket",
    initial=TicketStatus.PENDING,
    transitions={
        TicketStatus.PENDING: frozenset({TicketStatus.IN_REVIEW}),
        TicketStatus.IN_REVIEW: frozenset({TicketStatus.APPROVED, TicketStatus.REJECTED, TicketStatus.PENDING}),
        TicketStatus.APPROVED: frozenset({TicketStatus.PENDING}),
        TicketStatus.REJECTED: frozenset({TicketStatus.PENDING}),
    },
)
