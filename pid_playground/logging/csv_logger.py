"""
Buffered CSV trace logging for simulation steps.

Features:
- Buffered writes so per-step logging stays cheap inside a tick
- Automatic flushing on buffer size or time interval
- Graceful handling of file errors
"""

from typing import List, Dict, Any, Sequence
from pathlib import Path
from collections import deque
import csv
import time


class CSVLogger:
    """
    CSV logger with buffering for high-frequency step traces.

    The simulation core is single-threaded, so the logger holds no lock;
    rows are written from whichever tick produced them.

    Example:
        >>> logger = CSVLogger("trace.csv", columns=["time", "value", "error"])
        >>> logger.log({"time": 0.016, "value": 0.00256, "error": 100.0})
        >>> logger.close()
    """

    def __init__(
        self,
        file_path: str,
        columns: List[str],
        buffer_size: int = 100,
        flush_interval: float = 1.0,
        append: bool = False
    ):
        """
        Initialize CSV logger.

        Args:
            file_path: Path to CSV file
            columns: List of column names
            buffer_size: Number of rows to buffer before writing
            flush_interval: Maximum seconds between flushes
            append: If True, append to existing file
        """
        if not columns:
            raise ValueError("columns cannot be empty")
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        if flush_interval <= 0:
            raise ValueError("flush_interval must be positive")

        self._file_path = Path(file_path)
        self._columns = list(columns)
        self._buffer_size = buffer_size
        self._flush_interval = flush_interval

        self._buffer: deque = deque()
        self._last_flush_time = time.monotonic()
        self._total_rows = 0

        self._file_path.parent.mkdir(parents=True, exist_ok=True)

        mode = 'a' if append else 'w'
        self._file = open(self._file_path, mode, newline='')
        self._writer = csv.DictWriter(self._file, fieldnames=self._columns)

        if not append or self._file_path.stat().st_size == 0:
            self._writer.writeheader()

        self._closed = False

    def log(self, data: Dict[str, Any]) -> None:
        """
        Log a row of data.

        Args:
            data: Dictionary mapping column names to values.
                  Missing columns are written as empty strings.
        """
        if self._closed:
            raise RuntimeError("Logger is closed")

        self._buffer.append({col: data.get(col, '') for col in self._columns})
        self._total_rows += 1

        if (len(self._buffer) >= self._buffer_size or
                time.monotonic() - self._last_flush_time >= self._flush_interval):
            self.flush()

    def log_batch(self, data_list: Sequence[Dict[str, Any]]) -> None:
        """Log multiple rows at once."""
        if self._closed:
            raise RuntimeError("Logger is closed")

        self._buffer.extend(
            {col: data.get(col, '') for col in self._columns}
            for data in data_list
        )
        self._total_rows += len(data_list)

        if len(self._buffer) >= self._buffer_size:
            self.flush()

    def flush(self) -> None:
        """Flush buffer to disk."""
        if not self._buffer or self._closed:
            return

        rows_to_write = list(self._buffer)
        self._buffer.clear()
        self._last_flush_time = time.monotonic()

        try:
            self._writer.writerows(rows_to_write)
            self._file.flush()
        except OSError as e:
            # Keep the rows so a later flush can retry
            self._buffer.extendleft(reversed(rows_to_write))
            raise RuntimeError(f"Failed to write to CSV: {e}") from e

    def close(self) -> None:
        """Close logger and flush remaining data."""
        if self._closed:
            return

        self.flush()
        self._closed = True
        self._file.close()

    @property
    def file_path(self) -> Path:
        """Get file path."""
        return self._file_path

    @property
    def total_rows(self) -> int:
        """Get total number of logged rows."""
        return self._total_rows

    @property
    def buffer_count(self) -> int:
        """Get current buffer size."""
        return len(self._buffer)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
