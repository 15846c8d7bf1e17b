"""
Build Failure Records

Writes one timestamped JSON record per failed build so the failure can be
inspected after the process has exited.
"""

import json
import logging
import os
import traceback
from datetime import datetime
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def write_error_record(
    errors_dir: str,
    exc: BaseException,
    context: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Persist a failure record for post-mortem.

    Args:
        errors_dir: Directory for error records (created if missing)
        exc: The exception that aborted the build
        context: Extra JSON-serializable details (config, source ids)
        now: Record timestamp (defaults to the current time)

    Returns:
        Path of the written record
    """
    now = now or datetime.now()
    os.makedirs(errors_dir, exist_ok=True)

    record = {
        "timestamp": now.isoformat(),
        "type": type(exc).__name__,
        "message": str(exc),
        "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        "context": context or {},
    }

    path = os.path.join(errors_dir, f"error_{now.strftime('%Y%m%d_%H%M%S_%f')}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record, f, indent=2, ensure_ascii=False, default=str)

    logger.info("Error record written: %s", path)
    return path
