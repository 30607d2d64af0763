"""
ModulePush Command Line Entry Point.

Watches a directory and uploads its script modules whenever one is written.
Requires Python 3.11+.

Usage:
    modulepush -d ./src -e me@example.com -p secret
"""

import argparse
import signal
import sys
import threading
from pathlib import Path

from collector.module_collector import ModuleCollector
from uploader.client import UploadClient
from uploader.models import Credentials
from watcher.dirty_flag import DirtyFlag
from watcher.file_watcher import ChangeMonitor
from watcher.scheduler import FlushScheduler
from utils.config import get_settings
from utils.errors import StartupError
from utils.logger import configure_logging, logger


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="modulepush",
        description="Upload script modules to the remote code endpoint on every save",
    )
    parser.add_argument("-d", "--dir", default="./", help="directory to watch")
    parser.add_argument("-e", "--email", default="", help="user email")
    parser.add_argument("-p", "--password", default="", help="user password")
    return parser


def resolve_credentials(email: str, password: str) -> Credentials:
    """
    Combine command line credentials with the environment fallbacks.

    Raises:
        StartupError: If email or password is empty after the fallback
    """
    settings = get_settings().credentials
    email = email or settings.email
    password = password or settings.password

    if not email or not password:
        raise StartupError("email and password required")

    return Credentials(email=email, password=password)


def run(root_path: Path, credentials: Credentials, stop_event: threading.Event) -> None:
    """
    Run the monitor and scheduler until stop_event is set.

    Args:
        root_path: Directory to watch and upload
        credentials: Upload credentials
        stop_event: Set to shut down

    Raises:
        StartupError: If the directory cannot be watched
    """
    settings = get_settings()
    flag = DirtyFlag()

    with UploadClient(credentials) as client:
        scheduler = FlushScheduler(
            root_path=root_path,
            flag=flag,
            collector=ModuleCollector(),
            client=client,
        )
        monitor = ChangeMonitor(root_path=root_path, flag=flag)

        try:
            monitor.start()
            scheduler.start()
            logger.info(
                "watching",
                path=str(root_path),
                url=client.url,
                branch=client.branch,
                interval_ms=settings.watcher.flush_interval_ms,
            )
            stop_event.wait()
        finally:
            monitor.stop()
            scheduler.stop()


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run until terminated."""
    args = build_parser().parse_args(argv)
    configure_logging()

    stop_event = threading.Event()

    def handle_signal(signum: int, _frame: object) -> None:
        logger.info("shutdown_requested", signal=signal.Signals(signum).name)
        stop_event.set()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        credentials = resolve_credentials(args.email, args.password)
        run(Path(args.dir), credentials, stop_event)
    except StartupError as e:
        logger.critical("startup_failed", error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
