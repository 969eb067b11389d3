"""Reading trajectory files, restart times and cleaning up output files."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path

from casimirsim.system import Quaternion, SimulationError
from casimirsim.vectors import Vector, pbc

logger = logging.getLogger(__name__)

_RESTART_TAIL = 151
"""Bytes at the end of a trajectory that are searched for its last line."""

_FIELDS_PER_LINE = 9


def normalize_quaternion(q: Quaternion) -> Quaternion:
    """Unit quaternion in the direction of ``q``."""
    length = math.sqrt(q.dot(q))
    if length == 0.0:
        raise SimulationError("cannot normalise a zero quaternion")
    return q.scaled(1.0 / length)


def _parse_line(line: str) -> tuple[int, Vector, Quaternion]:
    tokens = line.split()
    if len(tokens) < _FIELDS_PER_LINE:
        raise ValueError(f"malformed trajectory line: {line!r}")
    ipart = int(tokens[1])
    x, y, z, q0, q1, q2, q3 = (float(t) for t in tokens[2:_FIELDS_PER_LINE])
    return ipart, Vector(x, y, z), Quaternion(q0, q1, q2, q3)


class TrajectoryReader:
    """Sequential reader of frames of ``nparts`` lines each.

    Every line holds ``time particle x y z q0 q1 q2 q3``. Frames must be
    requested in increasing order; the file is read only once.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        nparts: int,
        box: Vector,
        time_interval: float = 1.0,
    ) -> None:
        if nparts <= 0:
            raise ValueError(f"nparts must be positive, got {nparts}")
        self.path = Path(path)
        self.nparts = nparts
        self.box = box
        self.time_interval = time_interval
        self.frames_read = 0
        self._linecount = 0
        self._handle = open(self.path, encoding="utf-8")
        logger.info("reading trajectory %s", self.path)

    def __enter__(self) -> TrajectoryReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def read_frame(self, block_number: int) -> tuple[float, list[tuple[Vector, Quaternion]]]:
        """Return ``(time, [(position, orientation), ...])`` of frame ``block_number``.

        Positions are wrapped into the box and orientations normalised; the
        time is ``block_number * time_interval``.
        """
        if self._handle is None:
            raise SimulationError("the trajectory reader is closed")
        records: list[tuple[Vector, Quaternion]] = []
        time = block_number * self.time_interval
        for line in self._handle:
            if self._linecount // self.nparts == block_number:
                ipart, r, q = _parse_line(line)
                if ipart != len(records):
                    raise SimulationError(
                        f"particle {len(records)} expected but {ipart} read at time {time:.1f}"
                    )
                records.append((pbc(r, self.box), normalize_quaternion(q)))
            self._linecount += 1
            if len(records) == self.nparts:
                self.frames_read += 1
                return time, records
        self.close()
        raise SimulationError("end of file of trajectory")

    def close(self) -> None:
        """Close the underlying file."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None


def remove_matching_files(directory: str | os.PathLike[str], pattern: str) -> list[Path]:
    """Delete the files in ``directory`` whose name contains ``pattern``; return them."""
    if not str(directory):
        raise ValueError("specify the directory; the current directory is '.'")
    root = Path(directory)
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        logger.warning("could not open %s, no files are deleted: %s", root, exc)
        return []
    removed: list[Path] = []
    for entry in entries:
        if pattern not in entry.name:
            continue
        try:
            entry.unlink()
        except OSError as exc:
            logger.warning("unable to delete %s: %s", entry, exc)
        else:
            logger.info("deleted %s", entry)
            removed.append(entry)
    return removed


def read_restart_time(path: str | os.PathLike[str]) -> float:
    """Time in the first column of the last line of a trajectory file."""
    try:
        with open(path, "rb") as handle:
            handle.seek(0, os.SEEK_END)
            size = handle.tell()
            handle.seek(max(0, size - _RESTART_TAIL))
            tail = handle.read()
    except OSError as exc:
        raise SimulationError(f"trajectory {path} cannot be read: {exc}") from exc
    text = tail.decode("utf-8", errors="replace").rstrip("\r\n")
    tokens = text.rsplit("\n", 1)[-1].split()
    if not tokens:
        raise SimulationError(f"no restart time found in {path}")
    return float(tokens[0])