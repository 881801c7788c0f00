"""
CSV telemetry logging for the lander simulation.

Buffers data in memory and writes in batches to minimize I/O overhead.
Implements context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, TextIO

# Snapshot fields that hold 3-vectors
VECTOR_FIELDS = {"position", "velocity", "orientation"}
# Everything Simulation.snapshot() reports besides time
SNAPSHOT_FIELDS = [
    "altitude",
    "position",
    "velocity",
    "orientation",
    "radial_velocity",
    "ground_speed",
    "throttle",
    "fuel",
    "mass",
    "parachute_status",
    "system_engaged",
]


class CSVLogger:
    """
    Buffered CSV logger for lander telemetry.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing. Higher = fewer writes but more memory.
    fields : List[str] | None
        Snapshot fields to log. Default: all of SNAPSHOT_FIELDS.
        Vector fields are split into ``_x``, ``_y``, ``_z`` columns.

    Notes
    -----
    **Usage Patterns:**

    1. Context manager (recommended):
    >>> with CSVLogger("telemetry.csv") as logger:
    ...     for _ in range(num_steps):
    ...         sim.step()
    ...         logger.log(sim)

    2. Auto-managed (via Simulation):
    >>> sim = Simulation.with_logging("descent")
    >>> sim.run(duration=600.0)

    Examples
    --------
    >>> # Log only altitude and throttle
    >>> logger = CSVLogger("minimal.csv", fields=["altitude", "throttle"])
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 1000,
        fields: list[str] | None = None
    ) -> None:
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = fields if fields is not None else list(SNAPSHOT_FIELDS)

        # Validate fields
        invalid = set(self.fields) - set(SNAPSHOT_FIELDS)
        if invalid:
            raise ValueError(
                f"Invalid fields: {invalid}. Valid options: {SNAPSHOT_FIELDS}"
            )

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None  # csv.writer is a function, not a type
        self._header_written = False

        # Ensure parent directory exists
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> CSVLogger:
        """Open file for writing."""
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close file, flushing any remaining data."""
        self.close()

    def _write_header(self) -> None:
        """Generate and write CSV header row."""
        hdr = ["t"]
        for field in self.fields:
            if field in VECTOR_FIELDS:
                hdr.extend(f"{field}_{axis}" for axis in "xyz")
            else:
                hdr.append(field)

        if self._writer:
            self._writer.writerow(hdr)
            if self._file:
                self._file.flush()  # Ensure header written immediately

        self._header_written = True

    def log(self, sim: Any) -> None:
        """
        Log current simulation state to buffer.

        Parameters
        ----------
        sim : Simulation
            Any object with a ``snapshot()`` method returning a dict with
            ``t`` and the logged fields

        Notes
        -----
        Automatically opens file on first call if not using context manager.
        Writes to disk when buffer is full.
        """
        # Auto-open if not in context manager
        if self._file is None:
            self.__enter__()

        if not self._header_written:
            self._write_header()

        snap = sim.snapshot()
        row = [f"{snap['t']:.10f}"]  # High precision time
        for field in self.fields:
            val = snap[field]
            if field in VECTOR_FIELDS:
                row.extend(f"{v:.10e}" for v in val)
            elif isinstance(val, bool):
                row.append(str(int(val)))
            elif isinstance(val, str):
                row.append(val)
            else:
                row.append(f"{val:.10e}")

        self._buffer.append(row)

        # Flush if buffer full
        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered data to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
