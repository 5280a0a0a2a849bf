"""Time-windowed aggregation over a profile's related records."""

from datetime import date, datetime, time
from functools import cached_property

from dateutil.relativedelta import relativedelta

from core.config import Settings
from core.exceptions import ConfigurationError, InvariantViolationError
from domain.entities.profile import ProfileSnapshot, Visibility
from domain.entities.response_plan import PlanState, ResponsePlan
from domain.entities.rms import CrisisIncident

RECENT_TIMEFRAME = relativedelta(years=1)

REVIEW_TIMEFRAME_SETTING = "profile_review_timeframe_in_months"


class ProfileTimeline:
    """Derived facts about a profile computed from one snapshot.

    ``active_plan`` and ``recent_incidents`` are memoized for the lifetime of
    the instance and are not refreshed as time passes. Build a new timeline
    (or call ``active_plan_at`` directly) for fresh results.
    """

    def __init__(
        self,
        snapshot: ProfileSnapshot,
        settings: Settings,
        now: datetime | None = None,
    ) -> None:
        self._snapshot = snapshot
        self._settings = settings
        self._now = now

    def now(self) -> datetime:
        return self._now or datetime.utcnow()

    # --- Response plans ---

    def _plans_in_state(self, state: PlanState) -> list[ResponsePlan]:
        return [plan for plan in self._snapshot.response_plans if plan.state == state]

    def _approved_plans(self) -> list[ResponsePlan]:
        return [plan for plan in self._snapshot.response_plans if plan.is_approved]

    def active_plan_at(self, moment: datetime) -> ResponsePlan | None:
        """The latest plan approved strictly before ``moment``.

        Plans approved at the same instant are ordered by ID.
        """
        candidates = [
            plan
            for plan in self._approved_plans()
            if plan.approved_at is not None and plan.approved_at < moment
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda plan: (plan.approved_at, str(plan.id)))

    @cached_property
    def active_plan(self) -> ResponsePlan | None:
        return self.active_plan_at(self.now())

    @property
    def draft(self) -> ResponsePlan | None:
        """Most recently created plan still being drafted."""
        drafts = self._plans_in_state(PlanState.DRAFT)
        return max(drafts, key=lambda plan: plan.created_at) if drafts else None

    @property
    def submission(self) -> ResponsePlan | None:
        """Most recently created plan awaiting approval."""
        submitted = self._plans_in_state(PlanState.SUBMITTED)
        return max(submitted, key=lambda plan: plan.created_at) if submitted else None

    def has_nominal_response_plan(self) -> bool:
        plan = self.active_plan
        return plan is not None and bool(plan.response_strategies)

    # --- Reviews ---

    def last_reviewed_on(self) -> date:
        """Date of the most recent review-like event.

        Approvals, active visibility windows and explicit reviews all count,
        with the profile's creation as the floor.
        """
        created_at = self._snapshot.profile.created_at
        if created_at is None:
            raise InvariantViolationError(
                "Profile has no creation time",
                details={"profile_id": str(self._snapshot.profile.id)},
            )

        now = self.now()
        timestamps: list[datetime] = [created_at]
        timestamps.extend(
            plan.approved_at for plan in self._approved_plans() if plan.approved_at
        )
        timestamps.extend(
            visibility.created_at for visibility in self._active_visibilities(now)
        )
        timestamps.extend(review.created_at for review in self._snapshot.reviews)
        return max(timestamps).date()

    def review_timeframe(self) -> relativedelta:
        months = getattr(self._settings, REVIEW_TIMEFRAME_SETTING, None)
        if months is None:
            raise ConfigurationError(REVIEW_TIMEFRAME_SETTING)
        if isinstance(months, str) and months.strip().isdigit():
            months = int(months)
        if isinstance(months, bool) or not isinstance(months, int) or months <= 0:
            raise ConfigurationError(
                REVIEW_TIMEFRAME_SETTING,
                f"{REVIEW_TIMEFRAME_SETTING.upper()} must be a positive integer, got {months!r}",
            )
        return relativedelta(months=months)

    def due_for_review(self) -> bool:
        cutoff = self.now() - self.review_timeframe()
        return datetime.combine(self.last_reviewed_on(), time.min) < cutoff

    # --- Crisis incidents ---

    def incidents_since(self, moment: datetime) -> list[CrisisIncident]:
        """Incidents reported between ``moment`` and now, inclusive."""
        now = self.now()
        return [
            incident
            for incident in self._snapshot.crisis_incidents
            if moment <= incident.reported_at <= now
        ]

    @cached_property
    def recent_incidents(self) -> list[CrisisIncident]:
        incidents = self.incidents_since(self.now() - RECENT_TIMEFRAME)
        return sorted(incidents, key=lambda incident: incident.reported_at, reverse=True)

    def veteran(self) -> bool:
        return any(incident.veteran for incident in self._snapshot.crisis_incidents)

    # --- Visibility ---

    def _active_visibilities(self, moment: datetime) -> list[Visibility]:
        return [v for v in self._snapshot.visibilities if v.is_active_at(moment)]

    def visible(self) -> bool:
        return bool(self._active_visibilities(self.now()))

    def latest_visibility(self) -> Visibility | None:
        """Most recently created visibility event (stored order breaks ties)."""
        latest: Visibility | None = None
        for visibility in self._snapshot.visibilities:
            if latest is None or visibility.created_at >= latest.created_at:
                latest = visibility
        return latest

    def visibility_status(self) -> str:
        """E.g. ``"VISIBLE (manual)"`` or ``"HIDDEN (auto)"``."""
        status = "VISIBLE" if self.visible() else "HIDDEN"
        latest = self.latest_visibility()
        reason = "(manual)" if latest is not None and latest.is_manual else "(auto)"
        return f"{status} {reason}"
