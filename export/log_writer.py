"""Protokolldatei eines Allokationslaufs (Zeitstempel im Dateinamen)."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from solver.allocator import AllocationResult

logger = logging.getLogger(__name__)


def log_filename(now: Optional[datetime] = None) -> str:
    """schedule_log_<ISO-Zeitstempel>.txt, ':' durch '-' ersetzt."""
    now = now or datetime.now(timezone.utc)
    return f"schedule_log_{now.isoformat().replace(':', '-')}.txt"


def render_log(result: AllocationResult, now: Optional[datetime] = None) -> str:
    """Kopf, generierter Plan (eine Zeile pro Placement) und alle Meldungen."""
    now = now or datetime.now(timezone.utc)
    schedule_lines = "\n".join(p.describe() for p in result.placements)
    message_lines = "\n".join(result.messages)
    return (
        "\n=== Schedule Generation Log ===\n"
        f"{now.isoformat()}\n"
        "\n"
        "Generated Schedule:\n"
        f"{schedule_lines}\n"
        "\n"
        "Log Messages:\n"
        f"{message_lines}\n"
    )


def write_log(result: AllocationResult, log_dir: Path, now: Optional[datetime] = None) -> Path:
    """Schreibt das Protokoll nach log_dir (wird bei Bedarf angelegt)."""
    log_dir = Path(log_dir)
    if not log_dir.exists():
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Protokollverzeichnis angelegt: {log_dir}")

    now = now or datetime.now(timezone.utc)
    path = log_dir / log_filename(now)
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_log(result, now))
    logger.info(f"Protokoll geschrieben: {path}")
    return path
