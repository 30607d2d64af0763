"""
ModulePush File Watcher.

Cross-platform file system monitoring using watchdog.
Requires Python 3.11+.
"""

import os
from pathlib import Path
from typing import Any

from watchdog.observers import Observer
from watchdog.events import (
    DirModifiedEvent,
    FileModifiedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)

from watcher.dirty_flag import DirtyFlag
from utils.config import get_settings
from utils.errors import NotificationSubsystemError, StartupError
from utils.logger import LoggerMixin


class ScriptFileHandler(FileSystemEventHandler, LoggerMixin):
    """
    Marks the dirty flag when a script file is written.

    Only content writes count. Creations, deletions and moves are
    ignored, as are files with any other extension.
    """

    def __init__(self, flag: DirtyFlag, extension: str = ".js") -> None:
        """
        Initialize the file handler.

        Args:
            flag: Flag to set on every qualifying write
            extension: Script file extension
        """
        super().__init__()
        self._flag = flag
        self._extension = extension

    def _is_script_file(self, path: str) -> bool:
        """Check if path has the script extension."""
        return os.path.basename(path).endswith(self._extension)

    def dispatch(self, event: FileSystemEvent) -> None:
        """Dispatch an event, logging failures instead of killing the observer."""
        # Covers handler failures only; errors inside the watchdog emitter thread
        # (watched directory removed, inotify overflow) never reach this point.
        try:
            super().dispatch(event)
        except Exception as e:
            error = NotificationSubsystemError(f"could not handle {event.event_type} event: {e}")
            self.log.error(
                "notification_error",
                path=os.fsdecode(event.src_path),
                error=str(error),
            )

    def on_modified(self, event: FileModifiedEvent | DirModifiedEvent) -> None:
        """Handle file modification."""
        if isinstance(event, DirModifiedEvent):
            return

        path = os.fsdecode(event.src_path)
        if not self._is_script_file(path):
            return

        self.log.debug("file_modified", path=path)
        self._flag.set()


class ChangeMonitor(LoggerMixin):
    """
    Watches a directory for script file writes.

    Runs for the life of the process and communicates only through
    the dirty flag; it never triggers an upload itself.
    """

    def __init__(
        self,
        root_path: Path,
        flag: DirtyFlag,
        extension: str | None = None,
        recursive: bool | None = None,
    ) -> None:
        """
        Initialize the change monitor.

        Args:
            root_path: Directory to watch
            flag: Dirty flag set on every qualifying write
            extension: Script file extension (defaults to settings)
            recursive: Whether to watch subdirectories (defaults to settings)
        """
        settings = get_settings().watcher

        self._root_path = Path(root_path)
        self._recursive = settings.recursive if recursive is None else recursive
        self._extension = extension or settings.extension

        self._handler = ScriptFileHandler(flag=flag, extension=self._extension)
        self._observer: Observer | None = None
        self._running = False

    @property
    def handler(self) -> ScriptFileHandler:
        """The event handler registered with the observer."""
        return self._handler

    def start(self) -> None:
        """
        Start watching for file changes.

        Raises:
            StartupError: If the watch could not be established
        """
        if self._running:
            return

        if not self._root_path.is_dir():
            raise StartupError(f"cannot watch {self._root_path}: not a directory")

        observer = Observer()
        try:
            observer.schedule(
                self._handler,
                str(self._root_path),
                recursive=self._recursive,
            )
            observer.start()
        except OSError as e:
            raise StartupError(f"cannot watch {self._root_path}: {e}") from e

        self._observer = observer
        self._running = True

        self.log.info(
            "change_monitor_started",
            path=str(self._root_path),
            recursive=self._recursive,
            extension=self._extension,
        )

    def stop(self) -> None:
        """Stop watching for file changes."""
        if not self._running:
            return

        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None

        self._running = False
        self.log.info("change_monitor_stopped")

    @property
    def is_running(self) -> bool:
        """Check if the monitor is running."""
        return self._running

    def __enter__(self) -> "ChangeMonitor":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.stop()
