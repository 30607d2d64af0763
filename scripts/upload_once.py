#!/usr/bin/env python3
"""
ModulePush One-Shot Upload Script.

Collects the modules of a directory and uploads them once, without watching.
Requires Python 3.11+.

Usage:
    python scripts/upload_once.py -d ./src -e me@example.com -p secret
"""

import sys
import time
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from cli.app import build_parser, resolve_credentials
from collector.module_collector import ModuleCollector
from uploader.client import UploadClient
from utils.errors import ModulePushError
from utils.logger import configure_logging, get_logger


configure_logging()
logger = get_logger("upload_once")


def main() -> int:
    """Upload the directory once and report the result."""
    parser = build_parser()
    parser.description = "Upload script modules once"
    args = parser.parse_args()

    start_time = time.perf_counter()
    try:
        credentials = resolve_credentials(args.email, args.password)
        modules = ModuleCollector().collect(Path(args.dir))
        if not modules:
            logger.info("no_modules_found", path=args.dir)
            return 0

        with UploadClient(credentials) as client:
            client.upload(modules)
    except ModulePushError as e:
        logger.error("upload_failed", error=str(e))
        return 1

    logger.info(
        "modules_uploaded",
        count=len(modules),
        time_seconds=round(time.perf_counter() - start_time, 2),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
