"""
ModulePush Module Collector.

Walks the watched directory and builds the module set that is uploaded.
Requires Python 3.11+.
"""

import os
from pathlib import Path

from utils.config import get_settings
from utils.errors import CollectionError
from utils.logger import LoggerMixin


def module_name_for(path: Path, root: Path, extension: str) -> str:
    """
    Derive the module name for a script file.

    The name is the path relative to the watched root, with forward
    slashes and the trailing extension removed.

    Examples:
        - root/main.js -> main
        - root/role/harvester.js -> role/harvester
    """
    relative = path.relative_to(root).as_posix()
    if extension and relative.endswith(extension):
        return relative[: -len(extension)]
    return relative


class ModuleCollector(LoggerMixin):
    """
    Collects script files below a directory into a module set.

    The result maps module name to source text. Any listing or read
    failure aborts the whole walk with CollectionError; partial results
    are never returned.
    """

    def __init__(self, extension: str | None = None) -> None:
        """
        Initialize the collector.

        Args:
            extension: Script extension to collect (defaults to settings)
        """
        self._extension = extension or get_settings().watcher.extension

    @property
    def extension(self) -> str:
        """Extension of the files being collected."""
        return self._extension

    def collect(self, root: Path | str) -> dict[str, str]:
        """
        Read every script file below root.

        Args:
            root: Directory to walk

        Returns:
            Mapping of module name to source text (empty if no script files)

        Raises:
            CollectionError: If a directory listing or file read fails
        """
        root = Path(root)
        modules: dict[str, str] = {}

        def on_walk_error(error: OSError) -> None:
            raise CollectionError(str(error.filename or root), error.strerror or str(error)) from error

        for dirpath, _dirnames, filenames in os.walk(root, onerror=on_walk_error):
            for filename in filenames:
                if not filename.endswith(self._extension):
                    continue

                path = Path(dirpath) / filename
                modules[module_name_for(path, root, self._extension)] = self._read(path)

        self.log.debug("modules_collected", root=str(root), count=len(modules))
        return modules

    def _read(self, path: Path) -> str:
        """Read a script file as text."""
        try:
            data = path.read_bytes()
        except OSError as e:
            raise CollectionError(str(path), e.strerror or str(e)) from e
        # Invalid UTF-8 could not be represented in the JSON payload anyway
        return data.decode("utf-8", errors="replace")
