"""Reading of the keyword-value simulation input files."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_SECTION_TITLES = {
    "SIMULATION": "simulation",
    "MC": "MC",
    "BMD": "BMD",
    "HARMONIC_OSCILLATOR": "HARMONIC",
    "FFS": "FFS",
    "ANALYSIS": "Analysis",
    "GRAVITY": "gravity",
    "SWITCH_FUNCTION": "switch function",
    "CRITICAL_CASIMIR": "critical Casimir potential",
    "SYSTEM": "system",
    "K": "K",
}

SWITCH_COEFFICIENT_KEYS = (
    "switch_expc",
    "switch_expd",
    "switch_expe",
    "switch_expf",
    "switch_expg",
    "switch_exph",
    "switch_expi",
)


@dataclass
class InputConfig:
    """All settings read from the main input file; unset values are zero."""

    sim_type: int = 0
    ncycle1: int = 0
    ncycle2: int = 0
    cluster_MC: int = 0
    nearest_neighbor: int = 0
    switch_method: int = 0
    beta: float = 0.0
    boxl: float = 0.0
    boxly: float = 0.0
    gravity: float = 0.0
    start_type: int = 0
    read_path: int = 0
    directorypath: str = "."
    mc_warmup: int = 0
    particle_setup: int = 0
    restart: int = 0
    empty_files: int = 0
    nchains: int = 0
    chaingap: float = 0.0
    measure_bond_configurations: int = 0
    bond_breakage_analysis: int = 0
    bond_breakage: int = 0
    bond_op: int = 0
    print_trajectory: int = 0
    bond_tracking: int = 0
    rdfanalysis: int = 0
    cluster_analysis: int = 0
    adjacency: int = 0
    s_histogram: int = 0
    xy_print: int = 0
    mobilityT: float = 0.0
    mobilityR: float = 0.0
    ninter: int = 0
    timestep: float = 0.0
    print_time: float = 0.0
    total_time: float = 0.0
    epsilongravLJ: float = 0.0
    dT: float = 0.0
    r_wetting: float = 0.0
    surface_charge: float = 0.0
    wall_int: float = 0.0
    npart: int = 0
    s_cutoff: float = 0.0


_FIELD_TYPES = {f.name: f.type for f in fields(InputConfig)}


def _scan_int(token: str) -> int:
    match = _INT_RE.match(token)
    if match is None:
        raise ValueError(f"expected an integer, got {token!r}")
    return int(match.group())


def _scan_float(token: str) -> float:
    match = _FLOAT_RE.match(token)
    if match is None:
        raise ValueError(f"expected a number, got {token!r}")
    return float(match.group())


def _tokens(line: str) -> list[str]:
    return line.split()


def parse_input(lines: Iterable[str]) -> InputConfig:
    """Build an :class:`InputConfig` from ``keyword value`` lines.

    Section titles are logged, unknown keywords are ignored.
    """
    config = InputConfig()
    for line in lines:
        tokens = _tokens(line)
        if not tokens:
            continue
        key = tokens[0]
        if len(tokens) == 1 and key in _SECTION_TITLES:
            logger.info("Reading %s parameters", _SECTION_TITLES[key])
            continue
        kind = _FIELD_TYPES.get(key)
        if kind is None:
            continue
        if len(tokens) < 2:
            raise ValueError(f"missing value for {key}")
        value = tokens[1]
        if kind == "int":
            setattr(config, key, _scan_int(value))
        elif kind == "float":
            setattr(config, key, _scan_float(value))
        else:
            setattr(config, key, value)
    return config


def read_input(path: str | os.PathLike[str]) -> InputConfig:
    """Read and parse the input file at ``path``."""
    with open(path, encoding="utf-8") as handle:
        return parse_input(handle)


def parse_site_settings(lines: Iterable[str], ntypes: int) -> tuple[list[int], list[float]]:
    """Return the per-type ``s_accent`` and ``S_fixed`` values.

    Each listed keyword must give exactly one value per particle type.
    """
    s_accent = [0] * ntypes
    s_fixed = [0.0] * ntypes
    for line in lines:
        tokens = _tokens(line)
        if not tokens:
            continue
        key, values = tokens[0], tokens[1:]
        if key == "s_accent":
            parsed_int = [_scan_int(v) for v in values]
            for value in parsed_int:
                if not 0 <= value <= 3:
                    raise ValueError(
                        f"s_accent can only be 0, 1, 2 or 3, got {value}"
                    )
            if len(parsed_int) != ntypes:
                raise ValueError(
                    f"{len(parsed_int)} s_accent values for {ntypes} particle types"
                )
            s_accent = parsed_int
        elif key == "S_fixed":
            parsed_float = [_scan_float(v) for v in values]
            for value in parsed_float:
                if not 0.0 <= value <= 1.0:
                    raise ValueError(f"S_fixed must lie in [0, 1], got {value}")
            if len(parsed_float) != ntypes:
                raise ValueError(
                    f"{len(parsed_float)} S_fixed values for {ntypes} particle types"
                )
            s_fixed = parsed_float
    return s_accent, s_fixed


def parse_switch_coefficients(lines: Iterable[str]) -> dict[str, float]:
    """Return the switch-function coefficients and ``switch_unit``; unset ones are zero."""
    coefficients: dict[str, float] = {key: 0.0 for key in SWITCH_COEFFICIENT_KEYS}
    coefficients["switch_unit"] = 0
    for line in lines:
        tokens = _tokens(line)
        if len(tokens) < 2:
            continue
        key = tokens[0]
        if key in SWITCH_COEFFICIENT_KEYS:
            coefficients[key] = _scan_float(tokens[1])
        elif key == "switch_unit":
            coefficients[key] = _scan_int(tokens[1])
    return coefficients