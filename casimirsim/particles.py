"""Particle types, initial configurations and placement of particles in the box."""

from __future__ import annotations

import logging
import math
import os
import random
from collections.abc import Iterable, Iterator, Sequence

from casimirsim.system import NSITES, PTYPES, ParticleType, Particle, Quaternion, SimulationError, Slice
from casimirsim.vectors import Vector, pbc

logger = logging.getLogger(__name__)

_ZERO_TOLERANCE = 1e-5
_CHAIN_START = -0.48
_CHAIN_HEIGHT = 1.15
_CHAINS_HEIGHT = 1.13
_RANDOM_HEIGHT = 1.12
_OVERLAP_FRACTION = 0.9
_MAX_PLACEMENT_ATTEMPTS = 1_000_000


def _rotate(q: Quaternion, v: Vector) -> Vector:
    """Rotate ``v`` by the unit quaternion ``q``."""
    q0, q1, q2, q3 = q.q0, q.q1, q.q2, q.q3
    return Vector(
        (1 - 2 * (q2 * q2 + q3 * q3)) * v.x + 2 * (q1 * q2 - q0 * q3) * v.y + 2 * (q1 * q3 + q0 * q2) * v.z,
        2 * (q1 * q2 + q0 * q3) * v.x + (1 - 2 * (q1 * q1 + q3 * q3)) * v.y + 2 * (q2 * q3 - q0 * q1) * v.z,
        2 * (q1 * q3 - q0 * q2) * v.x + 2 * (q2 * q3 + q0 * q1) * v.y + (1 - 2 * (q1 * q1 + q2 * q2)) * v.z,
    )


def _normalize_quaternion(q: Quaternion) -> Quaternion:
    length = math.sqrt(q.dot(q))
    if length == 0.0:
        raise SimulationError("cannot normalise a zero quaternion")
    return q.scaled(1.0 / length)


def _random_quaternion(rng: random.Random) -> Quaternion:
    u1, u2, u3 = rng.random(), rng.random(), rng.random()
    a, b = math.sqrt(1.0 - u1), math.sqrt(u1)
    return Quaternion(
        a * math.sin(2 * math.pi * u2),
        a * math.cos(2 * math.pi * u2),
        b * math.sin(2 * math.pi * u3),
        b * math.cos(2 * math.pi * u3),
    )


def _orient(particle: Particle, types: Sequence[ParticleType]) -> None:
    particle.patchvectors = [_rotate(particle.q, site) for site in types[particle.ptype].sites]


def check_unit_vector(vector: Vector) -> Vector:
    """Normalise a vector read from input; reject vectors that are nearly zero."""
    if all(abs(c) < _ZERO_TOLERANCE for c in vector):
        raise SimulationError(f"patch site not well defined: {vector}")
    return vector.normalized()


def _token_stream(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def _take(tokens: Iterator[str], what: str) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise ValueError(f"input ended early while reading {what}") from None


def _take_vector(tokens: Iterator[str], what: str) -> Vector:
    return Vector(*(float(_take(tokens, what)) for _ in range(3)))


def parse_particle_types(
    lines: Iterable[str], npart: int
) -> tuple[list[ParticleType], list[float], list[int]]:
    """Parse a particle-type description.

    Returns ``(types, delta_degrees, assignment)`` where ``assignment`` gives
    the type index of every particle in order.
    """
    tokens = _token_stream(lines)
    ntypes = int(_take(tokens, "the number of particle types"))
    if ntypes > PTYPES:
        raise SimulationError(f"{ntypes} particle types, at most {PTYPES} allowed")

    types: list[ParticleType] = []
    deltas: list[float] = []
    assignment: list[int] = []
    total = 0
    for index in range(ntypes):
        what = f"particle type {index}"
        nsites = int(_take(tokens, what))
        nparticles = int(_take(tokens, what))
        diameter = float(_take(tokens, what))
        delta = float(_take(tokens, what))
        activity = float(_take(tokens, what))
        if nsites > NSITES:
            raise SimulationError(f"{nsites} sites on type {index}, at most {NSITES} allowed")
        sites = [check_unit_vector(_take_vector(tokens, what)) for _ in range(nsites)]
        ptype = ParticleType(nparticles=nparticles, diameter=diameter, sites=sites)
        if activity > 0:
            ptype.activity = True
            ptype.F_A = activity
            ptype.e_A = check_unit_vector(_take_vector(tokens, what))
        types.append(ptype)
        deltas.append(delta)
        total += nparticles

        amount = nparticles
        while True:
            assignment.append(index)
            amount -= 1
            if not (amount > 0 and len(assignment) < npart):
                break

    if total != npart:
        raise SimulationError(f"particle types describe {total} particles, expected {npart}")
    return types, deltas, assignment[:npart]


def read_configuration(
    path: str | os.PathLike[str], nparts: int, box: Vector
) -> list[tuple[Vector, Quaternion]]:
    """Read positions and orientations; positions are wrapped, quaternions normalised."""
    with open(path, encoding="utf-8") as handle:
        tokens = _token_stream(handle)
        count = int(_take(tokens, "the particle count"))
        file_box = _take_vector(tokens, "the box")
        records = []
        for index in range(count):
            what = f"particle {index}"
            r = _take_vector(tokens, what)
            q = Quaternion(*(float(_take(tokens, what)) for _ in range(4)))
            records.append((pbc(r, box), _normalize_quaternion(q)))
    if count != nparts:
        raise SimulationError(f"configuration holds {count} particles, system has {nparts}")
    if file_box != box:
        raise SimulationError(f"configuration box {file_box} differs from system box {box}")
    return records


def place_chain(slice_: Slice, types: Sequence[ParticleType], box: Vector, s_min: float) -> None:
    """Place all particles in one straight chain along y."""
    n = slice_.nparts
    if n == 0 or box.x / n <= s_min:
        raise SimulationError("too many particles to put in a 1D chain; adjust box or npart")
    y_previous = _CHAIN_START * box.y
    for particle in slice_.pts:
        radius = types[particle.ptype].radius
        y = y_previous + radius + s_min
        particle.r = Vector(0.0, y, _CHAIN_HEIGHT + radius)
        particle.q = Quaternion()
        _orient(particle, types)
        y_previous = y + radius


def place_chains(
    slice_: Slice,
    types: Sequence[ParticleType],
    box: Vector,
    s_min: float,
    nchains: int,
    chaingap: float,
) -> None:
    """Place the particles in ``nchains`` parallel chains, ``chaingap`` apart in x."""
    if nchains <= 0:
        raise ValueError(f"nchains must be positive, got {nchains}")
    max_length = slice_.nparts // nchains + 1
    if box.y <= max_length * (s_min + 1) or box.x <= chaingap * nchains:
        raise SimulationError(
            f"too many particles for {nchains} chains in box {box}; adjust box or npart"
        )
    column = 0
    for index, particle in enumerate(slice_.pts):
        radius = types[particle.ptype].radius
        position_in_chain = index % (max_length + 1)
        particle.r = Vector(
            _CHAIN_START * box.x + chaingap * column,
            _CHAIN_START * box.y + (s_min + 2.0 * radius) * position_in_chain,
            _CHAINS_HEIGHT + radius,
        )
        particle.q = Quaternion()
        _orient(particle, types)
        if index % max_length == 0 and index > 0:
            column += 1


def place_random(
    slice_: Slice,
    types: Sequence[ParticleType],
    box: Vector,
    s_min: float,
    gravity: float,
    rng: random.Random,
) -> None:
    """Place particles at random without overlap and with random orientations."""
    for index, particle in enumerate(slice_.pts):
        radius = types[particle.ptype].radius
        particle.q = _random_quaternion(rng)
        for _ in range(_MAX_PLACEMENT_ATTEMPTS):
            if gravity > 0:
                z = rng.uniform(_RANDOM_HEIGHT + radius, _RANDOM_HEIGHT + 2.0 * radius)
            else:
                z = rng.uniform(-0.5 * box.z, 0.5 * box.z)
            r = Vector(
                rng.uniform(-0.5 * box.x, 0.5 * box.x),
                rng.uniform(-0.5 * box.y, 0.5 * box.y),
                z,
            )
            if all(
                pbc(other.r - r, box).norm() - radius - types[other.ptype].radius
                >= s_min * _OVERLAP_FRACTION
                for other in slice_.pts[:index]
            ):
                particle.r = r
                break
        else:
            raise SimulationError(f"no free place found for particle {index}")
        _orient(particle, types)
    logger.info("randomly placed %d particles", slice_.nparts)