"""
ModulePush Flush Scheduler.

Turns the dirty flag into at most one upload per interval.
Requires Python 3.11+.
"""

import threading
from enum import Enum
from pathlib import Path

from collector.module_collector import ModuleCollector
from uploader.client import UploadClient
from watcher.dirty_flag import DirtyFlag
from utils.config import get_settings
from utils.errors import CollectionError, TransportError, UploadRejectedError
from utils.logger import LoggerMixin


class CycleState(str, Enum):
    """States an upload cycle passes through."""

    IDLE = "idle"
    CHECKING_FLAG = "checking_flag"
    COLLECTING = "collecting"
    UPLOADING = "uploading"


class CycleOutcome(str, Enum):
    """Terminal result of a tick."""

    NO_OP = "no_op"
    SKIPPED = "skipped"  # flag was set but there was nothing to upload
    SUCCESS = "success"
    FAILED = "failed"


class FlushScheduler(LoggerMixin):
    """
    Periodically consumes the dirty flag and uploads when it was set.

    Ticks run sequentially on one thread, so a cycle always finishes
    before the next tick can start another. Collection and upload block
    this thread only; the change monitor keeps setting the flag while an
    upload is in flight.
    """

    def __init__(
        self,
        root_path: Path,
        flag: DirtyFlag,
        collector: ModuleCollector,
        client: UploadClient,
        interval_ms: int | None = None,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            root_path: Directory whose modules are uploaded
            flag: Dirty flag shared with the change monitor
            collector: Builds the module set for each cycle
            client: Sends the module set
            interval_ms: Tick interval in milliseconds (defaults to settings)
        """
        self._root_path = Path(root_path)
        self._flag = flag
        self._collector = collector
        self._client = client
        self._interval = interval_ms / 1000.0 if interval_ms else get_settings().flush_interval

        self._state = CycleState.IDLE
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> CycleState:
        """Current cycle state."""
        return self._state

    @property
    def interval(self) -> float:
        """Tick interval in seconds."""
        return self._interval

    def tick(self) -> CycleOutcome:
        """
        Run one scheduler tick.

        Returns:
            NO_OP if the flag was clear, otherwise the outcome of the cycle
        """
        self._state = CycleState.CHECKING_FLAG
        try:
            if not self._flag.test_and_clear():
                return CycleOutcome.NO_OP
            return self.run_cycle()
        finally:
            self._state = CycleState.IDLE

    def run_cycle(self) -> CycleOutcome:
        """
        Collect the modules and upload them.

        Errors are logged and swallowed; nothing here stops the loop.
        """
        try:
            self._state = CycleState.COLLECTING
            modules = self._collector.collect(self._root_path)
            if not modules:
                return CycleOutcome.SKIPPED

            self._state = CycleState.UPLOADING
            self.log.info("uploading_modules", count=len(modules))
            self._client.upload(modules)
        except CollectionError as e:
            self.log.error("collection_failed", path=e.path, error=str(e))
        except TransportError as e:
            self.log.error("upload_transport_failed", url=self._client.url, error=str(e))
        except UploadRejectedError as e:
            self.log.error("upload_rejected", status_code=e.status_code, error=str(e))
        except Exception as e:
            self.log.exception("upload_cycle_crashed", error=str(e))
        else:
            self.log.info("modules_uploaded", count=len(modules))
            return CycleOutcome.SUCCESS

        return CycleOutcome.FAILED

    def _run(self) -> None:
        """Tick until stopped."""
        while not self._stop_event.wait(self._interval):
            self.tick()

    def start(self) -> None:
        """Start ticking on a background thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="flush-scheduler",
            daemon=True,
        )
        self._thread.start()
        self.log.info("flush_scheduler_started", interval_ms=int(self._interval * 1000))

    def stop(self, timeout: float | None = None) -> None:
        """
        Stop ticking.

        An upload already in flight is allowed to finish; only later
        ticks are prevented.
        """
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout=timeout)
        self._thread = None
        self.log.info("flush_scheduler_stopped")

    @property
    def is_running(self) -> bool:
        """Check if the scheduler thread is alive."""
        return self._thread is not None and self._thread.is_alive()
