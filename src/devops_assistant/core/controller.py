"""Interactive analysis session.

The InteractionController owns everything one user sees and edits: the
snippet text, the selected file category, the request lifecycle and the
result panel's local state (active tab, copy acknowledgement). It forwards
analysis requests to a CodeAnalyzer and is the only writer of its state.

Lifecycle:
    Idle --trigger--> Loading --settle--> Succeeded | Failed
    Succeeded | Failed --trigger--> Loading

Triggering on blank input, or while a call is in flight, is a no-op.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

import structlog

from ..models.analysis import AnalysisRequest, FileCategory
from ..models.session import Failed, Idle, Loading, ResultTab, SessionState, Succeeded
from ..utils.errors import AnalysisError
from ..utils.logging import LogEventNames
from .views import ResultView, render_result

if TYPE_CHECKING:
    from ..interfaces.analyzer import CodeAnalyzer
    from ..interfaces.clipboard import Clipboard

log = structlog.get_logger()

INCONSISTENT_RESULT_ADVISORY = (
    "The model indicated an issue but didn't provide specific errors. "
    "Try rephrasing your code or checking for subtle problems."
)

DEFAULT_COPY_FEEDBACK_SECONDS = 2.0


class TimerHandle(Protocol):
    """Cancellable handle returned by a scheduler."""

    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


def failure_message(exc: BaseException) -> str:
    """User-facing text for a failed analysis call."""
    if isinstance(exc, AnalysisError):
        return f"An error occurred: {exc}. Please try again."
    description = str(exc) or type(exc).__name__
    return f"An unexpected error occurred: {description}. Please try again."


class InteractionController:
    """Holds one user's snippet, category and analysis lifecycle.

    Example:
        controller = InteractionController(analyzer)
        controller.set_source_text("FROM python:3.12\\nRUN pip install")
        controller.set_category(FileCategory.DOCKERFILE)

        task = controller.request_analysis()  # state is Loading now
        await task
        view = controller.render()
    """

    def __init__(
        self,
        analyzer: CodeAnalyzer,
        clipboard: Clipboard | None = None,
        *,
        category: FileCategory = FileCategory.default(),
        copy_feedback_seconds: float = DEFAULT_COPY_FEEDBACK_SECONDS,
        max_source_chars: int | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            analyzer: Backend used for analysis calls
            clipboard: Destination for copied corrected code
            category: Initially selected file category
            copy_feedback_seconds: How long the copy acknowledgement stays visible
            max_source_chars: Reject longer snippets without calling the backend
            scheduler: ``(delay, callback) -> handle``; defaults to the running
                event loop's ``call_later``
        """
        self._analyzer = analyzer
        self._clipboard = clipboard
        self._copy_feedback_seconds = copy_feedback_seconds
        self._max_source_chars = max_source_chars
        self._schedule = scheduler or _loop_scheduler

        self._source_text = ""
        self._category = category
        self._state: SessionState = Idle()
        self._active_tab = ResultTab.ERRORS
        self._copied = False
        self._copy_reset: TimerHandle | None = None
        self._pending: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    @property
    def source_text(self) -> str:
        """The editable snippet."""
        return self._source_text

    def set_source_text(self, text: str) -> None:
        """Replace the snippet text."""
        self._source_text = text

    def load_file(self, content: bytes | str, filename: str | None = None) -> None:
        """Place a picked file's content verbatim into the snippet area.

        Bytes are decoded as UTF-8; undecodable sequences are replaced rather
        than rejected. No format validation is done.
        """
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")
        self._source_text = content
        log.info(LogEventNames.FILE_LOADED, filename=filename, chars=len(content))

    @property
    def category(self) -> FileCategory:
        """The selected file category."""
        return self._category

    def set_category(self, category: FileCategory | str) -> None:
        """Select a file category.

        Raises:
            ValueError: If the category is not supported.
        """
        self._category = FileCategory(category)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_loading(self) -> bool:
        """True while an analysis call is in flight."""
        return isinstance(self._state, Loading)

    @property
    def can_analyze(self) -> bool:
        """Whether triggering analysis would start a call."""
        return not self.is_loading and bool(self._source_text.strip())

    def request_analysis(self) -> asyncio.Task[None] | None:
        """Trigger analysis of the current snippet.

        Must be called from a running event loop. The state is ``Loading``
        by the time this returns; the returned task settles it.

        Returns:
            The task running the call, or None if the trigger was ignored
            (blank input or a call already in flight).
        """
        if self.is_loading:
            log.debug(LogEventNames.ANALYSIS_IGNORED, reason="already_loading")
            return None
        if not self._source_text.strip():
            log.debug(LogEventNames.ANALYSIS_IGNORED, reason="blank_input")
            return None

        request = AnalysisRequest(source_text=self._source_text, category=self._category)
        self._state = Loading(request=request)
        self._reset_copy_feedback()

        log.info(
            LogEventNames.ANALYSIS_REQUESTED,
            category=str(request.category),
            lines=request.line_count,
        )

        self._pending = asyncio.get_running_loop().create_task(self._run(request))
        return self._pending

    async def analyze(self) -> SessionState:
        """Trigger analysis and wait for it to settle.

        Returns:
            The resulting state (unchanged if the trigger was ignored).
        """
        task = self.request_analysis()
        if task is not None:
            await task
        return self._state

    async def _run(self, request: AnalysisRequest) -> None:
        if self._max_source_chars is not None and len(request.source_text) > self._max_source_chars:
            self._state = Failed(
                message=(
                    f"The snippet is too long to analyze ({len(request.source_text)} characters, "
                    f"limit {self._max_source_chars}). Please shorten it and try again."
                )
            )
            log.warning(LogEventNames.ANALYSIS_FAILED, reason="too_long")
            return

        try:
            result = await self._analyzer.analyze(request.source_text, request.category)
        except AnalysisError as e:
            log.warning(LogEventNames.ANALYSIS_FAILED, error=str(e))
            self._state = Failed(message=failure_message(e))
            return
        except Exception as e:
            log.exception(LogEventNames.ANALYSIS_FAILED, error=str(e))
            self._state = Failed(message=failure_message(e))
            return

        advisory = None
        if result.is_inconsistent:
            log.warning(LogEventNames.ANALYSIS_INCONSISTENT)
            advisory = INCONSISTENT_RESULT_ADVISORY

        self._active_tab = ResultTab.ERRORS
        self._state = Succeeded(result=result, advisory=advisory)
        log.info(
            LogEventNames.ANALYSIS_COMPLETED,
            is_valid=result.is_valid,
            error_count=result.error_count,
        )

    # ------------------------------------------------------------------
    # Result panel
    # ------------------------------------------------------------------

    @property
    def active_tab(self) -> ResultTab:
        """The selected view of an invalid result."""
        return self._active_tab

    def select_tab(self, tab: ResultTab | str) -> None:
        """Switch the result view.

        Raises:
            ValueError: If the tab is unknown.
        """
        self._active_tab = ResultTab(tab)

    @property
    def copied(self) -> bool:
        """Whether the copy acknowledgement is currently shown."""
        return self._copied

    def copy_corrected_code(self) -> bool:
        """Copy the corrected code and show the acknowledgement.

        The acknowledgement reverts after ``copy_feedback_seconds``. Copying
        again restarts that delay.

        Returns:
            False if there is no result to copy from.
        """
        if not isinstance(self._state, Succeeded):
            return False

        text = self._state.result.corrected_code
        if self._clipboard is not None:
            self._clipboard.copy(text)

        self._reset_copy_feedback()
        self._copied = True
        self._copy_reset = self._schedule(self._copy_feedback_seconds, self._clear_copied)
        log.info(LogEventNames.CODE_COPIED, chars=len(text))
        return True

    def _clear_copied(self) -> None:
        self._copied = False
        self._copy_reset = None

    def _reset_copy_feedback(self) -> None:
        if self._copy_reset is not None:
            self._copy_reset.cancel()
        self._clear_copied()

    def render(self) -> ResultView:
        """Build the result panel view for the current state."""
        return render_result(self._state, self._active_tab, self._copied)
