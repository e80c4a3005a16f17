"""View models for the result panel.

render_result() maps a session state to exactly one view. Templates and
tests consume these objects; they never inspect session state directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models.analysis import ErrorDetail
from ..models.session import Failed, Idle, Loading, ResultTab, SessionState, Succeeded


@dataclass(frozen=True)
class TabView:
    """One selectable tab header."""

    tab: ResultTab
    label: str
    active: bool
    count: int | None = None


@dataclass(frozen=True)
class PlaceholderView:
    """Call to action shown before the first analysis."""

    title: str = "Ready When You Are!"
    message: str = "Paste or upload your code snippet and I'll get right to it."


@dataclass(frozen=True)
class LoadingView:
    """Progress indicator while a call is in flight."""

    title: str = "Let me check that for you..."
    message: str = (
        "Running a full syntax and best practice analysis. This might take a moment."
    )


@dataclass(frozen=True)
class ErrorView:
    """A failed call."""

    message: str


@dataclass(frozen=True)
class ValidView:
    """Affirmation for a snippet the model found valid."""

    title: str = "Looks Great!"
    message: str = "I've checked your code, and it's valid. Well done!"


@dataclass(frozen=True)
class FindingsView:
    """Tabbed panel for an invalid snippet."""

    tabs: tuple[TabView, ...]
    active_tab: ResultTab
    errors: tuple[ErrorDetail, ...]
    corrected_code: str
    best_practices: tuple[str, ...]
    copied: bool
    advisory: str | None = None


ResultView = PlaceholderView | LoadingView | ErrorView | ValidView | FindingsView

TAB_LABELS: dict[ResultTab, str] = {
    ResultTab.ERRORS: "Errors Found",
    ResultTab.CORRECTED: "Corrected Code",
    ResultTab.PRACTICES: "Best Practices",
}


def render_result(state: SessionState, active_tab: ResultTab, copied: bool) -> ResultView:
    """Build the view for a session state.

    Args:
        state: Current lifecycle state
        active_tab: Selected tab, used only for invalid results
        copied: Whether the copy acknowledgement is showing

    Returns:
        The single view to display
    """
    if isinstance(state, Idle):
        return PlaceholderView()
    if isinstance(state, Loading):
        return LoadingView()
    if isinstance(state, Failed):
        return ErrorView(message=state.message)
    if isinstance(state, Succeeded):
        result = state.result
        if result.is_valid:
            return ValidView()
        tabs = tuple(
            TabView(
                tab=tab,
                label=label,
                active=tab == active_tab,
                count=result.error_count if tab == ResultTab.ERRORS else None,
            )
            for tab, label in TAB_LABELS.items()
        )
        return FindingsView(
            tabs=tabs,
            active_tab=active_tab,
            errors=result.errors,
            corrected_code=result.corrected_code,
            best_practices=result.best_practices,
            copied=copied,
            advisory=state.advisory,
        )
    raise TypeError(f"Unknown session state: {state!r}")
