"""
ModulePush Error Types.

Only StartupError is fatal; every other error is scoped to a single
notification or upload cycle and is logged by the caller.
Requires Python 3.11+.
"""


class ModulePushError(Exception):
    """Base class for all ModulePush errors."""


class StartupError(ModulePushError):
    """Missing credentials or the file-system watch could not be established."""


class NotificationSubsystemError(ModulePushError):
    """A file-system notification could not be handled."""


class CollectionError(ModulePushError):
    """Listing the watched directory or reading a module file failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not collect modules from {path}: {reason}")
        self.path = path
        self.reason = reason


class TransportError(ModulePushError):
    """The HTTP exchange with the upload endpoint could not complete."""


class UploadRejectedError(ModulePushError):
    """The upload endpoint answered with a status other than 200."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"could not upload the code: {status_code}")
        self.status_code = status_code
