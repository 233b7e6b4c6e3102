"""
Session View Router
===================
Decides which screen a caller sees from their auth session and role flag.

Screens:
- auth: login / signup form (no session)
- student: dashboard / editor
- instructor: dashboard / evaluation (optionally bound to a submission)

The router is a pure state machine: it never talks to Supabase. Routes feed
it the decoded session and return the resulting ViewState to the frontend.
"""
from dataclasses import dataclass
from typing import Optional

ROLE_STUDENT = "student"
ROLE_INSTRUCTOR = "instructor"
ROLES = (ROLE_STUDENT, ROLE_INSTRUCTOR)

SCREEN_AUTH = "auth"

SCREEN_PAGES = {
    SCREEN_AUTH: ("login", "signup"),
    ROLE_STUDENT: ("dashboard", "editor"),
    ROLE_INSTRUCTOR: ("dashboard", "evaluation"),
}

# Auth events that (re)establish a session
SESSION_EVENTS = {"SIGNED_IN", "TOKEN_REFRESHED", "INITIAL_SESSION", "USER_UPDATED"}


@dataclass(frozen=True)
class ViewState:
    screen: str
    page: str
    submission_id: Optional[str] = None

    @property
    def sandbox(self):
        """Evaluation page with no submission attached."""
        return self.page == "evaluation" and self.submission_id is None

    def to_dict(self):
        data = {"screen": self.screen, "page": self.page}
        if self.screen == ROLE_INSTRUCTOR and self.page == "evaluation":
            data["submission_id"] = self.submission_id
            data["sandbox"] = self.sandbox
        return data


AUTH_VIEW = ViewState(SCREEN_AUTH, "login")


def normalize_role(role):
    """Anything other than an explicit instructor flag is a student."""
    return ROLE_INSTRUCTOR if role == ROLE_INSTRUCTOR else ROLE_STUDENT


def resolve_view(session):
    """
    Pick the landing view for a session.

    `session` is a dict with at least a `role` key, or None when signed out.
    """
    if not session:
        return AUTH_VIEW
    return ViewState(normalize_role(session.get("role")), "dashboard")


def on_auth_event(state, event, session=None):
    """Apply a Supabase auth state change to the current view."""
    if event == "SIGNED_OUT":
        return AUTH_VIEW
    if event in SESSION_EVENTS and session:
        # Token refreshes keep the user where they are
        if state.screen == normalize_role(session.get("role")) and event != "SIGNED_IN":
            return state
        return resolve_view(session)
    return state


def navigate(state, target, submission_id=None):
    """
    Move to another page of the current screen.

    Raises ValueError when the target page does not belong to the screen.
    """
    pages = SCREEN_PAGES.get(state.screen, ())
    if target not in pages:
        raise ValueError(f"Cannot navigate to '{target}' from the {state.screen} screen")

    if state.screen == ROLE_INSTRUCTOR and target == "evaluation":
        return ViewState(state.screen, target, submission_id or None)
    return ViewState(state.screen, target)


def view_from_dict(data):
    """
    Rebuild a ViewState sent back by the frontend.

    Raises ValueError for an unknown screen or a page outside it.
    """
    if not isinstance(data, dict):
        raise ValueError("view must be an object")
    screen = data.get("screen")
    page = data.get("page")
    if not isinstance(screen, str) or screen not in SCREEN_PAGES or page not in SCREEN_PAGES[screen]:
        raise ValueError(f"Unknown view: {screen}/{page}")

    submission_id = data.get("submission_id")
    if submission_id is not None and not isinstance(submission_id, str):
        raise ValueError("submission_id must be a string")
    if screen == ROLE_INSTRUCTOR and page == "evaluation":
        return ViewState(screen, page, submission_id or None)
    return ViewState(screen, page)
