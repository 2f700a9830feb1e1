"""
JSON request log and usage statistics.

Every handled request is appended to ``requests.json`` (bounded to the most
recent entries) and to a per-day file under ``daily/``. Statistics and the
history view are computed from the main file.
"""
import json
import logging
import threading
import uuid
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .log_cleanup import cleanup_daily_logs

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_ms(value) -> int:
    """'123ms' -> 123; anything unparsable counts as 0."""
    try:
        return int(str(value).removesuffix("ms"))
    except ValueError:
        return 0


class RequestLog:
    """
    File-backed request log.

    Write failures are logged and swallowed: losing a log line must never
    fail the request being logged. A log file that is not valid
    ``{"requests": [...]}`` JSON is treated as empty and rewritten.

    With ``retention_days`` set, expired daily files are pruned on the first
    record of each new day.
    """

    MAIN_FILE = "requests.json"
    DAILY_DIR = "daily"

    def __init__(
        self,
        log_dir: str,
        max_entries: int = 1000,
        clock: Callable[[], datetime] = _utc_now,
        retention_days: Optional[int] = None,
    ):
        """
        :param log_dir: Directory for requests.json and daily/
        :param max_entries: Entries kept in requests.json
        :param clock: Returns the current aware datetime (injectable for tests)
        :param retention_days: Daily files kept by the day-change cleanup (None: no cleanup)
        """
        self._log_dir = Path(log_dir)
        self._main_file = self._log_dir / self.MAIN_FILE
        self._daily_dir = self._log_dir / self.DAILY_DIR
        self._max_entries = max_entries
        self._clock = clock
        self._retention_days = retention_days
        self._last_cleanup: Optional[date] = None
        self._lock = threading.Lock()

        self._daily_dir.mkdir(parents=True, exist_ok=True)
        if not self._main_file.exists():
            self._write_json(self._main_file, {"requests": []})

    def record(
        self,
        query: str,
        model: str,
        response_type: str,
        tokens: Optional[int] = None,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
        processing_ms: int = 0,
        error: Optional[str] = None,
    ) -> dict:
        """
        Append one request to the main and daily logs.

        :return: The stored entry
        """
        timestamp = self._clock()
        entry = {
            "id": f"{int(timestamp.timestamp() * 1000)}-{uuid.uuid4().hex[:9]}",
            "timestamp": timestamp.isoformat(),
            "date": timestamp.date().isoformat(),
            "time": timestamp.strftime("%H:%M:%S"),
            "query": query,
            "model": model,
            "responseType": response_type,
            "tokens": tokens,
            "ip": ip,
            "userAgent": user_agent,
            "processingTime": f"{processing_ms}ms",
            "error": error,
        }

        with self._lock:
            self._append_main(entry)
            self._append_daily(entry)
            self._cleanup_on_new_day(timestamp.date())

        logger.info(
            f'[{entry["time"]}] {model} | {response_type} | "{query[:50]}" | {processing_ms}ms'
        )
        return entry

    def entries(self) -> List[dict]:
        try:
            requests = self._read_log(self._main_file)["requests"]
        except (OSError, ValueError) as e:
            logger.error(f"Error reading request log: {e}")
            return []
        return [e for e in requests if isinstance(e, dict)]

    def stats(self, days: int = 7) -> dict:
        """
        Aggregate the requests of the last ``days`` days.

        :return: totalRequests, byType, byModel, avgProcessingTime, errors, totalTokens
        """
        cutoff = self._clock() - timedelta(days=days)
        recent = [e for e in self.entries() if self._entry_time(e) > cutoff]

        by_type: Dict[str, int] = defaultdict(int)
        by_model: Dict[str, int] = defaultdict(int)
        total_time = 0
        errors = 0
        total_tokens = 0

        for entry in recent:
            by_type[entry.get("responseType")] += 1
            by_model[entry.get("model")] += 1
            total_time += _parse_ms(entry.get("processingTime"))
            if entry.get("error"):
                errors += 1
            total_tokens += entry.get("tokens") or 0

        return {
            "totalRequests": len(recent),
            "byType": dict(by_type),
            "byModel": dict(by_model),
            "avgProcessingTime": round(total_time / len(recent)) if recent else 0,
            "errors": errors,
            "totalTokens": total_tokens,
        }

    def history(
        self,
        limit: int = 50,
        date: Optional[str] = None,
        model: Optional[str] = None,
        response_type: Optional[str] = None,
    ) -> dict:
        """
        Filtered entries, newest first.

        :return: ``{"total": <matching count>, "requests": [<at most limit entries>]}``
        """
        filtered = self.entries()
        if date:
            filtered = [e for e in filtered if e.get("date") == date]
        if model:
            filtered = [e for e in filtered if e.get("model") == model]
        if response_type:
            filtered = [e for e in filtered if e.get("responseType") == response_type]

        filtered.sort(key=self._entry_time, reverse=True)
        return {"total": len(filtered), "requests": filtered[:max(limit, 0)]}

    def daily(self, date: str) -> Optional[dict]:
        """Contents of one day's file, or None if there is none or it is unreadable."""
        path = self._daily_path(date)
        if path is None or not path.exists():
            return None
        try:
            return self._read_log(path)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading daily log {path.name}: {e}")
            return None

    def cleanup(self, days_to_keep: int = 30) -> int:
        today = self._clock().date()
        self._last_cleanup = today
        return cleanup_daily_logs(str(self._daily_dir), days_to_keep=days_to_keep, today=today)

    def _cleanup_on_new_day(self, today: date) -> None:
        if self._retention_days is None or today == self._last_cleanup:
            return
        self._last_cleanup = today
        try:
            cleanup_daily_logs(str(self._daily_dir), days_to_keep=self._retention_days, today=today)
        except OSError as e:
            logger.error(f"Daily log cleanup failed: {e}")

    def _append_main(self, entry: dict) -> None:
        try:
            data = self._load_or_reset(self._main_file, {"requests": []})
            data["requests"] = (data["requests"] + [entry])[-self._max_entries:]
            self._write_json(self._main_file, data)
        except OSError as e:
            logger.error(f"Error writing to main log: {e}")

    def _append_daily(self, entry: dict) -> None:
        try:
            path = self._daily_dir / f"{entry['date']}.json"
            data = self._load_or_reset(path, {"date": entry["date"], "requests": []})
            data["requests"].append(entry)
            self._write_json(path, data)
        except OSError as e:
            logger.error(f"Error writing to daily log: {e}")

    def _load_or_reset(self, path: Path, fresh: dict) -> dict:
        if not path.exists():
            return fresh
        try:
            return self._read_log(path)
        except ValueError as e:
            logger.warning(f"Starting {path.name} afresh, existing content unreadable: {e}")
            return fresh

    def _daily_path(self, date: str) -> Optional[Path]:
        # Only plain ISO dates; anything else could escape the directory
        try:
            datetime.strptime(date, "%Y-%m-%d")
        except ValueError:
            return None
        return self._daily_dir / f"{date}.json"

    @staticmethod
    def _entry_time(entry: dict) -> datetime:
        try:
            parsed = datetime.fromisoformat(entry.get("timestamp", ""))
        except (TypeError, ValueError):
            return datetime.min.replace(tzinfo=timezone.utc)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @staticmethod
    def _read_log(path: Path) -> dict:
        """Parse a log file, raising ValueError unless it holds ``{"requests": [...]}``."""
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict) or not isinstance(data.get("requests"), list):
            raise ValueError(f"expected an object with a 'requests' array in {path.name}")
        return data

    @staticmethod
    def _write_json(path: Path, data: dict) -> None:
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
