"""CSV logger for research batch timings."""

import csv
import threading
from datetime import UTC, datetime
from pathlib import Path

HEADER = ["timestamp", "operation", "index", "success", "duration_ms", "error"]


class CSVLogger:
    """Thread-safe CSV logger for appending per-call timings."""

    def __init__(self, filepath: str | Path) -> None:
        """Initialize CSV logger.

        Args:
            filepath: Path to CSV file (will be created if doesn't exist)
        """
        self.filepath = Path(filepath)
        self._lock = threading.Lock()
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def _write_header_if_needed(self) -> None:
        """Write CSV header if file doesn't exist or is empty."""
        if not self.filepath.exists() or self.filepath.stat().st_size == 0:
            with open(self.filepath, "w", newline="") as f:
                csv.writer(f).writerow(HEADER)

    def log(
        self,
        operation: str,
        index: int,
        success: bool,
        duration_ms: float,
        error: str | None = None,
    ) -> None:
        """Append one call's timing.

        Args:
            operation: Name of the operation (e.g., "research_batch")
            index: Position of the call within its batch
            success: Whether the call succeeded
            duration_ms: Duration in milliseconds
            error: Error message for failed calls
        """
        with self._lock:
            self._write_header_if_needed()
            with open(self.filepath, "a", newline="") as f:
                csv.writer(f).writerow([
                    datetime.now(UTC).isoformat(),
                    operation,
                    index,
                    success,
                    f"{duration_ms:.2f}",
                    error or "",
                ])
