"""
UI State Reducers.

Explicit state objects for the check-in form, toast notifications and
mood history, with transitions written as pure reducers
(state, action) -> state. The presentation layer owns the current state
and passes it in; nothing here subscribes, schedules or mutates.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Tuple, Union

from .errors import InvalidInput
from .models import MoodCheckin, validate_mood_rating, validate_notes
from .mood_aggregator import MoodSummary, summarize

logger = logging.getLogger(__name__)

DEFAULT_TOAST_DURATION_MS = 5000
TOAST_KINDS = ("success", "error", "info", "warning")


# ============================================================================
# Mood check-in form
# ============================================================================


@dataclass(frozen=True)
class MoodFormState:
    current_rating: int = 4
    selected_activity_ids: Tuple[int, ...] = ()
    notes: str = ""
    is_submitting: bool = False


@dataclass(frozen=True)
class SetRating:
    rating: int


@dataclass(frozen=True)
class ToggleActivity:
    activity_id: int


@dataclass(frozen=True)
class SetActivities:
    activity_ids: Tuple[int, ...]


@dataclass(frozen=True)
class SetNotes:
    notes: str


@dataclass(frozen=True)
class SetSubmitting:
    is_submitting: bool


@dataclass(frozen=True)
class ResetForm:
    pass


MoodFormAction = Union[SetRating, ToggleActivity, SetActivities, SetNotes, SetSubmitting, ResetForm]


def reduce_mood_form(state: MoodFormState, action: MoodFormAction) -> MoodFormState:
    """Apply one form action and return the new state."""
    if isinstance(action, SetRating):
        return replace(state, current_rating=validate_mood_rating(action.rating))
    if isinstance(action, ToggleActivity):
        ids = state.selected_activity_ids
        if action.activity_id in ids:
            ids = tuple(i for i in ids if i != action.activity_id)
        else:
            ids = ids + (action.activity_id,)
        return replace(state, selected_activity_ids=ids)
    if isinstance(action, SetActivities):
        # Keep first occurrence order, drop duplicates
        return replace(state, selected_activity_ids=tuple(dict.fromkeys(action.activity_ids)))
    if isinstance(action, SetNotes):
        return replace(state, notes=validate_notes(action.notes))
    if isinstance(action, SetSubmitting):
        return replace(state, is_submitting=action.is_submitting)
    if isinstance(action, ResetForm):
        return MoodFormState()
    raise InvalidInput(f"Unknown mood form action: {type(action).__name__}", field="action")


# ============================================================================
# Toast notifications
# ============================================================================


@dataclass(frozen=True)
class Toast:
    id: str
    message: str
    kind: str = "info"
    duration_ms: int = DEFAULT_TOAST_DURATION_MS  # 0 = manual dismiss only


@dataclass(frozen=True)
class ToastState:
    toasts: Tuple[Toast, ...] = ()

    def find(self, message: str, kind: str):
        return next((t for t in self.toasts if t.message == message and t.kind == kind), None)


@dataclass(frozen=True)
class ShowToast:
    toast: Toast
    deduplicate: bool = True


@dataclass(frozen=True)
class DismissToast:
    id: str


def reduce_toasts(state: ToastState, action: Union[ShowToast, DismissToast]) -> ToastState:
    """
    Apply a toast action.

    ShowToast with deduplicate=True leaves the state unchanged when a
    toast with the same message and kind is already showing. Scheduling
    the auto-dismiss after duration_ms is up to the UI.
    """
    if isinstance(action, ShowToast):
        toast = action.toast
        if toast.kind not in TOAST_KINDS:
            raise InvalidInput(
                f"Invalid toast kind: '{toast.kind}'. Must be one of: {', '.join(TOAST_KINDS)}",
                field="kind",
            )
        if action.deduplicate and state.find(toast.message, toast.kind) is not None:
            logger.debug(f"[UI] Suppressed duplicate toast: {toast.message}")
            return state
        return replace(state, toasts=state.toasts + (toast,))
    if isinstance(action, DismissToast):
        return replace(state, toasts=tuple(t for t in state.toasts if t.id != action.id))
    raise InvalidInput(f"Unknown toast action: {type(action).__name__}", field="action")


# ============================================================================
# Mood history
# ============================================================================


@dataclass(frozen=True)
class MoodHistoryState:
    """Check-ins newest first, with summary stats derived on demand."""

    history: Tuple[MoodCheckin, ...] = field(default_factory=tuple)

    @property
    def stats(self) -> MoodSummary:
        return summarize(self.history)

    def with_checkin(self, checkin: MoodCheckin) -> "MoodHistoryState":
        """New state with checkin prepended as the most recent entry."""
        return replace(self, history=(checkin,) + self.history)
