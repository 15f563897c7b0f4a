# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress rendering helpers for hashing commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import TracebackType

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from ..progress import ProgressEvent


@dataclass(slots=True)
class HashProgressController:
    """Render a transient progress bar fed by hashing progress events."""

    console: Console
    enabled: bool = True
    description: str = "Hashing"
    progress: Progress | None = field(init=False, default=None)
    task_id: TaskID | None = field(init=False, default=None)

    def __enter__(self) -> HashProgressController:
        """Start the progress display when enabled and attached to a terminal.

        Returns:
            HashProgressController: ``self``, for use as the progress callback.
        """

        if self.enabled and self.console.is_terminal:
            self.progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total}"),
                TimeElapsedColumn(),
                console=self.console,
                transient=True,
            )
            self.progress.start()
            self.task_id = self.progress.add_task(self.description, total=None)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Stop the progress display if one was started."""

        if self.progress is not None:
            self.progress.stop()

    def __call__(self, event: ProgressEvent) -> None:
        """Advance the bar for ``event``; usable as a progress callback."""

        if self.progress is None or self.task_id is None:
            return
        self.progress.update(
            self.task_id,
            total=event.total,
            completed=event.done,
            description=f"{self.description} {escape(event.relative_path)}",
        )


__all__ = ["HashProgressController"]
