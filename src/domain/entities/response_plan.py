"""Response plan domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

from core.exceptions import InvalidPlanTransitionError


class PlanState(StrEnum):
    """Lifecycle state of a response plan."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"


# Allowed lifecycle moves: draft -> submitted -> approved
PLAN_TRANSITIONS: dict[PlanState, frozenset[PlanState]] = {
    PlanState.DRAFT: frozenset({PlanState.SUBMITTED}),
    PlanState.SUBMITTED: frozenset({PlanState.APPROVED}),
    PlanState.APPROVED: frozenset(),
}


@dataclass
class ResponseStrategy:
    """A single step responders should take."""

    title: str
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    priority: int = 0


@dataclass
class ResponsePlan:
    """Domain entity for a crisis response plan."""

    profile_id: UUID
    id: UUID = field(default_factory=uuid4)
    state: PlanState = PlanState.DRAFT
    author_id: UUID | None = None
    approver_id: UUID | None = None
    approved_at: datetime | None = None
    submitted_at: datetime | None = None
    response_strategies: list[ResponseStrategy] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_approved(self) -> bool:
        """Check if the plan has been approved."""
        return self.state == PlanState.APPROVED and self.approved_at is not None

    def _transition(self, target: PlanState) -> None:
        if target not in PLAN_TRANSITIONS[self.state]:
            raise InvalidPlanTransitionError(str(self.id), self.state, target)
        self.state = target

    def submit(self, at: datetime | None = None) -> None:
        """Move a draft plan to submitted."""
        self._transition(PlanState.SUBMITTED)
        self.submitted_at = at or datetime.utcnow()

    def approve(self, approver_id: UUID | None = None, at: datetime | None = None) -> None:
        """Move a submitted plan to approved."""
        self._transition(PlanState.APPROVED)
        self.approver_id = approver_id
        self.approved_at = at or datetime.utcnow()
