"""
ModulePush Watcher Package.

Change detection and debounced uploads.
Requires Python 3.11+.
"""

from watcher.dirty_flag import DirtyFlag
from watcher.file_watcher import ChangeMonitor, ScriptFileHandler
from watcher.scheduler import CycleOutcome, CycleState, FlushScheduler

__all__ = [
    "DirtyFlag",
    "ChangeMonitor",
    "ScriptFileHandler",
    "FlushScheduler",
    "CycleState",
    "CycleOutcome",
]
