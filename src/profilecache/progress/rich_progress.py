"""Rich-based progress reporter for terminal output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
)


if TYPE_CHECKING:
    from types import TracebackType

    from rich.progress import Task

    from profilecache.core.ports import ProgressCallback


_PHASE_VERBS = {"save": "Saving", "restore": "Restoring"}


def describe_phase(name: str) -> str:
    """Turn a phase name such as "save:desktop" into a bar label.

    Unknown phase kinds are shown as given.

    Example:
        >>> describe_phase("restore:android")
        'Restoring android'
    """
    kind, _, profile = name.partition(":")
    verb = _PHASE_VERBS.get(kind)
    if verb is None or not profile:
        return name
    return f"{verb} {profile}"


class RichProgressReporter:
    """Progress reporter using Rich for terminal display.

    Shows one bar per sync phase, labelled with the profile, the number of
    artifacts handled so far, and the phase state. A phase finished through
    finish_task() is marked "done". Phases still open when the context exits
    with an exception are marked "aborted" and keep their last count.

    Example:
        with RichProgressReporter() as reporter:
            engine.restore_profile("desktop", working_root, progress=reporter)
    """

    def __init__(self) -> None:
        """Initialize the progress display."""
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("{task.fields[state]}"),
            TimeRemainingColumn(),
        )
        self._tasks: dict[str, TaskID] = {}
        self._open: set[str] = set()
        self._started = False

    def __enter__(self) -> RichProgressReporter:
        """Start the progress display."""
        self._progress.start()
        self._started = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Mark interrupted phases and stop the progress display."""
        if exc_type is not None:
            for name in self._open:
                self._progress.update(self._tasks[name], state="aborted")
            self._open.clear()
        self._progress.stop()
        self._started = False

    def state(self, name: str) -> str | None:
        """Get the displayed state of a phase, or None if it never started."""
        if name not in self._tasks:
            return None
        return self._task(name).fields["state"]

    def _task(self, name: str) -> Task:
        task_id = self._tasks[name]
        return next(t for t in self._progress.tasks if t.id == task_id)

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a sync phase.

        Args:
            name: Phase name, "save:<profile>" or "restore:<profile>".
            total: Number of artifacts in the phase.

        Returns:
            A callback to update progress.
        """
        # Auto-start if not in context manager
        if not self._started:
            self._progress.start()
            self._started = True

        task_id = self._progress.add_task(
            describe_phase(name), total=total, state="running"
        )
        self._tasks[name] = task_id
        self._open.add(name)

        def callback(completed: int, _total: int) -> None:
            self._progress.update(task_id, completed=completed)

        return callback

    def finish_task(self, name: str) -> None:
        """Mark a phase as completed successfully.

        Args:
            name: The phase name passed to start_task().
        """
        if name not in self._tasks:
            return
        task = self._task(name)
        self._progress.update(task.id, completed=task.total, state="done")
        self._open.discard(name)
