"""Core simulation data: particles, particle types and slices."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from casimirsim.vectors import Vector

NPART = 1000
NSITES = 6
PTYPES = 6
MAXBONDS = NSITES


class SimulationError(Exception):
    """Raised when the simulation reaches an inconsistent state."""


class SimType(IntEnum):
    """How particles are propagated."""

    BMD = 1
    MC = 2
    READ_TRAJECTORY = 3


@dataclass(frozen=True, slots=True)
class Quaternion:
    """Rotation quaternion ``q0 + q1 i + q2 j + q3 k``."""

    q0: float = 1.0
    q1: float = 0.0
    q2: float = 0.0
    q3: float = 0.0

    def __add__(self, other: Quaternion) -> Quaternion:
        return Quaternion(
            self.q0 + other.q0, self.q1 + other.q1, self.q2 + other.q2, self.q3 + other.q3
        )

    def __sub__(self, other: Quaternion) -> Quaternion:
        return Quaternion(
            self.q0 - other.q0, self.q1 - other.q1, self.q2 - other.q2, self.q3 - other.q3
        )

    def __mul__(self, other: Quaternion) -> Quaternion:
        a, b = self, other
        return Quaternion(
            a.q0 * b.q0 - a.q1 * b.q1 - a.q2 * b.q2 - a.q3 * b.q3,
            a.q0 * b.q1 + a.q1 * b.q0 + a.q2 * b.q3 - a.q3 * b.q2,
            a.q0 * b.q2 - a.q1 * b.q3 + a.q2 * b.q0 + a.q3 * b.q1,
            a.q0 * b.q3 + a.q1 * b.q2 - a.q2 * b.q1 + a.q3 * b.q0,
        )

    def dot(self, other: Quaternion) -> float:
        """Four-dimensional inner product."""
        return self.q0 * other.q0 + self.q1 * other.q1 + self.q2 * other.q2 + self.q3 * other.q3

    def scaled(self, factor: float) -> Quaternion:
        """Quaternion multiplied by a scalar."""
        return Quaternion(self.q0 * factor, self.q1 * factor, self.q2 * factor, self.q3 * factor)

    def inverse(self) -> Quaternion:
        """Conjugate, the inverse of a unit quaternion."""
        return Quaternion(self.q0, -self.q1, -self.q2, -self.q3)


@dataclass
class ParticleType:
    """Shape, patches and gravity properties shared by a group of particles."""

    nparticles: int = 0
    diameter: float = 1.0
    sites: list[Vector] = field(default_factory=list)
    activity: bool = False
    e_A: Vector = field(default_factory=Vector)
    F_A: float = 0.0
    Rp_sigma: float = 0.0
    delta_rho_kg_m3: float = 0.0
    fg: float = 0.0
    zcut: float = 0.0
    b_zc: float = 0.0

    @property
    def radius(self) -> float:
        return self.diameter / 2.0

    @property
    def nsites(self) -> int:
        return len(self.sites)


@dataclass(frozen=True, slots=True)
class Bond:
    """A bond from one particle to a partner."""

    partner: int
    energy: float
    distance: float
    switch: float


@dataclass
class Particle:
    """State of a single particle."""

    r: Vector = field(default_factory=Vector)
    q: Quaternion = field(default_factory=Quaternion)
    ptype: int = 0
    f: Vector = field(default_factory=Vector)
    t: Vector = field(default_factory=Vector)
    dr: Vector = field(default_factory=Vector)
    patchvectors: list[Vector] = field(default_factory=list)
    cluster_id: int = 0
    bonds: list[Bond] = field(default_factory=list)

    @property
    def nbonds(self) -> int:
        return len(self.bonds)

    def add_bond(self, other: int, energy: float, distance: float, switch: float) -> Bond:
        """Record a bond to particle ``other``."""
        if len(self.bonds) >= MAXBONDS:
            raise SimulationError(
                f"particle already has the maximum of {MAXBONDS} bonds"
            )
        bond = Bond(other, energy, distance, switch)
        self.bonds.append(bond)
        return bond

    def clear_bonds(self) -> None:
        """Forget all bonds of this particle."""
        self.bonds.clear()


@dataclass
class Slice:
    """A configuration of particles with its measured quantities."""

    pts: list[Particle] = field(default_factory=list)
    energy: float = 0.0
    beta: float = 1.0
    temp: float = 1.0
    bond_probability: float = 0.0
    c_time: float = 0.0
    nclusters: int = 0
    nbonds: int = 0

    @property
    def nparts(self) -> int:
        return len(self.pts)

    def positions(self) -> list[Vector]:
        """Positions of all particles in order."""
        return [p.r for p in self.pts]