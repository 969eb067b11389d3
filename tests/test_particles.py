import random

import pytest

from casimirsim.particles import (
    check_unit_vector,
    parse_particle_types,
    place_chain,
    place_chains,
    place_random,
    read_configuration,
)
from casimirsim.system import Particle, ParticleType, SimulationError, Slice
from casimirsim.vectors import Vector, pbc

PARTICLE_LINES = [
    "2\n",
    "2 2 1.0 10.0 0\n",
    "0 0 2\n",
    "0 0 -1\n",
    "1 1 1.2 15.0 3.5\n",
    "3 0 0\n",
    "0 4 0\n",
]


def make_slice(n, ptype=0):
    return Slice(pts=[Particle(ptype=ptype) for _ in range(n)])


def test_check_unit_vector_normalises():
    assert check_unit_vector(Vector(0.0, 0.0, 2.0)) == Vector(0.0, 0.0, 1.0)


def test_check_unit_vector_rejects_zero():
    with pytest.raises(SimulationError):
        check_unit_vector(Vector(0.0, 1e-6, 0.0))


def test_parse_particle_types():
    types, deltas, assignment = parse_particle_types(PARTICLE_LINES, 3)
    assert [t.nsites for t in types] == [2, 1]
    assert types[0].radius == pytest.approx(0.5)
    assert types[0].sites[0] == Vector(0.0, 0.0, 1.0)
    assert deltas == [10.0, 15.0]
    assert assignment == [0, 0, 1]
    assert not types[0].activity
    assert types[1].activity
    assert types[1].F_A == 3.5
    assert types[1].e_A == Vector(0.0, 1.0, 0.0)


def test_parse_particle_types_count_mismatch():
    with pytest.raises(SimulationError):
        parse_particle_types(PARTICLE_LINES, 4)


def test_parse_particle_types_too_many_types():
    with pytest.raises(SimulationError):
        parse_particle_types(["7\n"], 1)


def test_parse_particle_types_truncated():
    with pytest.raises(ValueError):
        parse_particle_types(PARTICLE_LINES[:3], 3)


def test_read_configuration_round_trip(tmp_path):
    box = Vector(10.0, 10.0, 10.0)
    path = tmp_path / "conf.inp"
    path.write_text("2 10.0 10.0 10.0\n1.0 2.0 3.0 2.0 0.0 0.0 0.0\n6.0 0.0 0.0 0.0 1.0 1.0 0.0\n")
    records = read_configuration(path, 2, box)
    assert records[0][0] == Vector(1.0, 2.0, 3.0)
    assert records[0][1].q0 == pytest.approx(1.0)
    assert records[1][0].x == pytest.approx(-4.0)
    for _, q in records:
        assert q.dot(q) == pytest.approx(1.0)


def test_read_configuration_wrong_count(tmp_path):
    path = tmp_path / "conf.inp"
    path.write_text("1 10.0 10.0 10.0\n0 0 0 1 0 0 0\n")
    with pytest.raises(SimulationError):
        read_configuration(path, 2, Vector(10.0, 10.0, 10.0))


def test_read_configuration_wrong_box(tmp_path):
    path = tmp_path / "conf.inp"
    path.write_text("1 10.0 10.0 9.0\n0 0 0 1 0 0 0\n")
    with pytest.raises(SimulationError):
        read_configuration(path, 1, Vector(10.0, 10.0, 10.0))


def test_place_chain_spacing():
    types = [ParticleType(diameter=1.0, sites=[Vector(0, 1, 0)])]
    slice_ = make_slice(5)
    place_chain(slice_, types, Vector(20.0, 20.0, 20.0), 0.01)
    ys = [p.r.y for p in slice_.pts]
    for a, b in zip(ys, ys[1:]):
        assert b - a == pytest.approx(1.01)
    assert all(p.r.z == pytest.approx(1.65) for p in slice_.pts)
    assert slice_.pts[0].patchvectors == [Vector(0, 1, 0)]


def test_place_chain_box_too_small():
    types = [ParticleType(diameter=1.0)]
    with pytest.raises(SimulationError):
        place_chain(make_slice(10), types, Vector(0.05, 20.0, 20.0), 0.01)


def test_place_chains_columns():
    types = [ParticleType(diameter=1.0)]
    slice_ = make_slice(6)
    place_chains(slice_, types, Vector(20.0, 20.0, 20.0), 0.01, 2, 3.0)
    xs = sorted({round(p.r.x, 9) for p in slice_.pts})
    assert len(xs) >= 2
    assert xs[1] - xs[0] == pytest.approx(3.0)
    assert all(p.r.z == pytest.approx(1.63) for p in slice_.pts)


def test_place_chains_does_not_fit():
    types = [ParticleType(diameter=1.0)]
    with pytest.raises(SimulationError):
        place_chains(make_slice(6), types, Vector(5.0, 20.0, 20.0), 0.01, 2, 3.0)


def test_place_chains_rejects_zero_chains():
    with pytest.raises(ValueError):
        place_chains(make_slice(2), [ParticleType()], Vector(20.0, 20.0, 20.0), 0.01, 0, 1.0)


def test_place_random_no_overlap():
    types = [ParticleType(diameter=1.0, sites=[Vector(0, 0, 1), Vector(0, 0, -1)])]
    box = Vector(8.0, 8.0, 8.0)
    slice_ = make_slice(10)
    place_random(slice_, types, box, 0.02, 0.0, random.Random(3))
    for i, a in enumerate(slice_.pts):
        assert all(abs(c) <= 4.0 for c in a.r)
        assert a.q.dot(a.q) == pytest.approx(1.0)
        for v in a.patchvectors:
            assert v.norm() == pytest.approx(1.0)
        for b in slice_.pts[i + 1:]:
            assert pbc(a.r - b.r, box).norm() - 1.0 >= 0.018


def test_place_random_with_gravity_and_seed():
    types = [ParticleType(diameter=1.0)]
    box = Vector(8.0, 8.0, 8.0)
    first, second = make_slice(4), make_slice(4)
    place_random(first, types, box, 0.02, 1.0, random.Random(7))
    place_random(second, types, box, 0.02, 1.0, random.Random(7))
    assert first.positions() == second.positions()
    assert all(1.62 <= p.r.z <= 2.12 for p in first.pts)