"""
Common logging configuration for all backend services.

This module configures loguru once per process so every service module can simply
``from loguru import logger``. It installs a colorized console sink and two rotating
file sinks per service.

Log Files:
    - {service_name}.log: All logs at configured level (default: INFO)
    - {service_name}-error.log: Only ERROR level logs

Log Rotation:
    - Error logs: Rotate at 10 MB, retain 30 days, compress with zip
    - General logs: Rotate at 50 MB, retain 7 days, compress with zip

The directory holding the files defaults to ``logs`` in the working directory and
can be moved with the LOGS_DIR environment variable.

Example:
    ```python
    from common.logging import setup_logging

    setup_logging("database-service")

    from loguru import logger
    logger.info("Service started successfully")
    ```
"""

import os
from pathlib import Path
import sys

from loguru import logger

from common.config import get_settings

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(service_name: str | None = None) -> None:
    """
    Configure loguru sinks for a service.

    Args:
        service_name: Optional name of the service (e.g., "database-service"). Used
            both to resolve the service settings (for LOG_LEVEL) and to name the
            log files. If None, generic file names are used.

    Side Effects:
        - Removes every previously registered loguru handler
        - Adds a console handler and two file handlers
        - Creates the logs directory if it doesn't exist

    Note:
        Call this early in application startup, before the first request is served.
    """

    settings = get_settings(service_name)

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>",
        level=settings.LOG_LEVEL,
        colorize=True,
    )

    logs_dir = Path(os.getenv("LOGS_DIR", "logs"))
    logs_dir.mkdir(parents=True, exist_ok=True)

    prefix = service_name or "app"
    service_log_file = logs_dir / f"{prefix}.log"
    service_error_file = logs_dir / f"{prefix}-error.log"

    logger.add(
        str(service_error_file),
        format=FILE_FORMAT,
        level="ERROR",
        rotation="10 MB",
        retention="30 days",
        compression="zip",
    )

    logger.add(
        str(service_log_file),
        format=FILE_FORMAT,
        level=settings.LOG_LEVEL,
        rotation="50 MB",
        retention="7 days",
        compression="zip",
    )
