"""
Retention for the daily request log files.

Daily files are named ``YYYY-MM-DD.json``; the date in the name decides
their age. Files whose name is not a date fall back to modification time.
"""
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def cleanup_daily_logs(
    daily_dir: str,
    days_to_keep: int = 30,
    today: Optional[date] = None,
    pattern: str = "*.json",
) -> int:
    """
    Delete daily log files older than ``days_to_keep`` days.

    :param daily_dir: Directory holding the daily files
    :param days_to_keep: Files dated before today minus this many days are deleted
    :param today: Reference date (defaults to the current UTC date)
    :param pattern: Glob pattern for log files
    :return: Number of files deleted
    """
    daily_path = Path(daily_dir)
    if not daily_path.exists():
        return 0

    today = today or datetime.now(timezone.utc).date()
    cutoff = today - timedelta(days=days_to_keep)
    deleted_count = 0

    for log_file in daily_path.glob(pattern):
        file_date = _file_date(log_file)
        if file_date >= cutoff:
            continue
        try:
            log_file.unlink()
            deleted_count += 1
            logger.debug(f"Deleted old log file: {log_file.name}")
        except OSError as e:
            logger.warning(f"Failed to delete log file {log_file.name}: {e}")

    if deleted_count > 0:
        logger.info(f"Log cleanup: deleted {deleted_count} old log file(s) from {daily_dir}")

    return deleted_count


def _file_date(log_file: Path) -> date:
    try:
        return date.fromisoformat(log_file.stem)
    except ValueError:
        return datetime.fromtimestamp(log_file.stat().st_mtime, tz=timezone.utc).date()
