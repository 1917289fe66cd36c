"""Audit logger — append-only JSON Lines with size-based rotation."""

from __future__ import annotations

import asyncio
import fcntl
from pathlib import Path

from vsmbot.models import AuditEvent


class AuditLogger:
    """Append-only structured record of relay events.

    When the file reaches ``max_bytes`` it becomes ``<name>.1``, older
    backups shift up, and anything past ``backup_count`` is dropped.
    """

    def __init__(
        self,
        log_path: str,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
    ) -> None:
        self.log_path = Path(log_path)
        self._max_bytes = max_bytes
        self._backup_count = backup_count

    def _backup(self, index: int) -> Path:
        return self.log_path.with_name(f"{self.log_path.name}.{index}")

    def _rotate(self) -> None:
        self._backup(self._backup_count).unlink(missing_ok=True)
        for i in range(self._backup_count - 1, 0, -1):
            if self._backup(i).exists():
                self._backup(i).rename(self._backup(i + 1))
        self.log_path.rename(self._backup(1))

    def log(self, event: AuditEvent) -> None:
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        line = event.model_dump_json() + "\n"

        # Several uvicorn workers may share one file
        lock_path = self.log_path.with_name(f".{self.log_path.name}.lock")
        with open(lock_path, "w") as lock:
            fcntl.flock(lock, fcntl.LOCK_EX)
            if self.log_path.exists() and self.log_path.stat().st_size >= self._max_bytes:
                self._rotate()
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(line)

    async def alog(self, event: AuditEvent) -> None:
        """Write ``event`` from a worker thread so request handlers never block on disk."""
        await asyncio.to_thread(self.log, event)
