"""Verlet neighbour list over the 27 periodic images of the box."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from casimirsim.system import NPART, SimulationError
from casimirsim.vectors import Vector, pbc

logger = logging.getLogger(__name__)

MAX_IMAGES = NPART * 8
MAX_NEIGHBORS = NPART * 300
MAX_IM_NEIGHBORS = 300
STACKDEPTH = 30
NSHIFTS = 27
NCELLX = 40
DEFAULT_CUTOFF = 2.0


def _image_id(sx: int, sy: int, sz: int) -> int:
    return sz + 3 * sy + 9 * sx + 13


def _shift(component: float, half: float) -> int:
    if component < -half:
        return 1
    if component > half:
        return -1
    return 0


def wrap_positions(positions: Iterable[Vector], box: Vector) -> list[Vector]:
    """Positions wrapped into the periodic box centred on the origin."""
    return [pbc(r, box) for r in positions]


def brute_force_count(positions: Sequence[Vector], box: Vector, cutoff2: float) -> int:
    """Number of unique pairs closer than ``sqrt(cutoff2)`` under minimum image."""
    count = 0
    for i, ri in enumerate(positions):
        for rj in positions[i + 1:]:
            dr = pbc(ri - rj, box)
            if dr.dot(dr) < cutoff2:
                count += 1
    return count


@dataclass(frozen=True, slots=True)
class ImageEntry:
    """Neighbours ``j > ipart`` of one particle that lie in one periodic image."""

    ipart: int
    image_id: int
    neighbors: tuple[int, ...]


@dataclass
class NeighborList:
    """Neighbour list with cutoff ``cutoff`` for a potential reaching ``rcutoff``."""

    box: Vector
    rcutoff: float
    cutoff: float = DEFAULT_CUTOFF
    entries: list[ImageEntry] = field(default_factory=list, init=False)
    cell_contents: dict[tuple[int, int, int], list[int]] = field(
        default_factory=dict, init=False
    )

    def __post_init__(self) -> None:
        if min(self.box) <= 0.0:
            raise SimulationError(f"box lengths must be positive, got {self.box}")
        self.cutoff2 = self.cutoff * self.cutoff
        half_cut = 0.5 * self.cutoff
        self.cells = (
            int(self.box.x / half_cut),
            int(self.box.y / half_cut),
            int(self.box.z / half_cut),
        )
        if min(self.cells) <= 0:
            raise SimulationError("box is smaller than half the neighbour cutoff")
        if max(self.cells) > NCELLX:
            raise SimulationError(f"more than {NCELLX} cells along one axis")
        self.cellsize = Vector(
            self.box.x / self.cells[0],
            self.box.y / self.cells[1],
            self.box.z / self.cells[2],
        )
        self.inv_cellsize = Vector(
            1.0 / self.cellsize.x, 1.0 / self.cellsize.y, 1.0 / self.cellsize.z
        )
        buffer = 0.5 * (self.cutoff - self.rcutoff)
        if buffer <= 0.0:
            raise SimulationError("buffer size too small")
        self.cutoff_buffer2 = buffer * buffer
        self.translations = [
            Vector(ix * self.box.x, iy * self.box.y, iz * self.box.z)
            for ix in (-1, 0, 1)
            for iy in (-1, 0, 1)
            for iz in (-1, 0, 1)
        ]

    def cell_of(self, position: Vector) -> tuple[int, int, int]:
        """Indices of the cell holding ``position``."""
        index = (
            int((position.x + 0.5 * self.box.x) * self.inv_cellsize.x),
            int((position.y + 0.5 * self.box.y) * self.inv_cellsize.y),
            int((position.z + 0.5 * self.box.z) * self.inv_cellsize.z),
        )
        for axis, value, limit in zip("xyz", index, self.cells):
            if not 0 <= value < limit:
                raise SimulationError(f"i{axis} not correct: {value}")
        return index

    def build_cells(
        self, positions: Sequence[Vector]
    ) -> dict[tuple[int, int, int], list[int]]:
        """Sort particle indices into cells and return the non-empty cells."""
        contents: dict[tuple[int, int, int], list[int]] = {}
        for i, r in enumerate(positions):
            stack = contents.setdefault(self.cell_of(r), [])
            if len(stack) + 1 > STACKDEPTH:
                raise SimulationError("too many particles in cell")
            stack.append(i)
        self.cell_contents = contents
        return contents

    def _images_of(self, positions: Sequence[Vector], ipart: int) -> dict[int, list[int]]:
        half = (0.5 * self.box.x, 0.5 * self.box.y, 0.5 * self.box.z)
        ri = positions[ipart]
        images: dict[int, list[int]] = {}
        for jpart in range(ipart + 1, len(positions)):
            dr = ri - positions[jpart]
            shift = Vector(
                _shift(dr.x, half[0]), _shift(dr.y, half[1]), _shift(dr.z, half[2])
            )
            k = _image_id(int(shift.x), int(shift.y), int(shift.z))
            dr = dr + shift.times(self.box)
            if dr.dot(dr) < self.cutoff2:
                stack = images.setdefault(k, [])
                if len(stack) >= MAX_IM_NEIGHBORS:
                    raise SimulationError("too many neighbors per image")
                stack.append(jpart)
        return images

    def update(self, positions: Iterable[Vector]) -> list[Vector]:
        """Rebuild the list; return the positions wrapped into the box."""
        wrapped = wrap_positions(positions, self.box)
        entries: list[ImageEntry] = []
        nneighbors = 0
        for ipart in range(len(wrapped)):
            images = self._images_of(wrapped, ipart)
            for k in sorted(images):
                if len(entries) + 1 > MAX_IMAGES:
                    raise SimulationError("too many images in list")
                stack = images[k]
                if nneighbors + len(stack) > MAX_NEIGHBORS:
                    raise SimulationError("too many neighbors in list")
                entries.append(ImageEntry(ipart, k, tuple(stack)))
                nneighbors += len(stack)
        self.entries = entries
        if brute_force_count(wrapped, self.box, self.cutoff2) != nneighbors:
            logger.warning("neighborlist corrupted")
        return wrapped

    def pairs(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(i, j, image_id)`` for every listed neighbour pair."""
        for entry in self.entries:
            for j in entry.neighbors:
                yield entry.ipart, j, entry.image_id

    def neighbor_count(self) -> int:
        """Total number of neighbour pairs in the list."""
        return sum(len(entry.neighbors) for entry in self.entries)