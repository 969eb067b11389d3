import pytest

from casimirsim.config import (
    InputConfig,
    parse_input,
    parse_site_settings,
    parse_switch_coefficients,
    read_input,
)

SAMPLE = [
    "SIMULATION\n",
    "sim_type 1\n",
    "ncycle1 10\n",
    "ncycle2 100\n",
    "beta 1.0\n",
    "boxl 20.0\n",
    "directorypath data/run\n",
    "\n",
    "CRITICAL_CASIMIR\n",
    "dT 0.15\n",
    "r_wetting 0.45\n",
    "surface_charge -0.2\n",
    "s_cutoff 0.2\n",
    "npart 12\n",
    "unknown_key 5\n",
]


def test_parse_input_reads_values():
    config = parse_input(SAMPLE)
    assert config.sim_type == 1
    assert config.ncycle1 == 10
    assert config.ncycle2 == 100
    assert config.beta == 1.0
    assert config.boxl == 20.0
    assert config.directorypath == "data/run"
    assert config.dT == 0.15
    assert config.surface_charge == -0.2
    assert config.npart == 12


def test_unset_values_keep_defaults():
    config = parse_input(SAMPLE)
    assert config.boxly == 0.0
    assert config.gravity == 0.0
    assert config == parse_input(SAMPLE + ["SYSTEM\n"])


def test_empty_input_gives_default_config():
    assert parse_input([]) == InputConfig()


def test_integer_keyword_takes_leading_integer():
    assert parse_input(["npart 7.9\n"]).npart == 7


def test_missing_value_raises():
    with pytest.raises(ValueError):
        parse_input(["npart\n"])


def test_bad_number_raises():
    with pytest.raises(ValueError):
        parse_input(["beta abc\n"])


def test_read_input_from_file(tmp_path):
    path = tmp_path / "path.inp"
    path.write_text("".join(SAMPLE))
    assert read_input(path) == parse_input(SAMPLE)


def test_read_input_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_input(tmp_path / "nothing.inp")


def test_site_settings():
    lines = ["npart 10\n", "s_accent 0 2\n", "S_fixed 0.5 1\n"]
    accent, fixed = parse_site_settings(lines, 2)
    assert accent == [0, 2]
    assert fixed == [0.5, 1.0]


def test_site_settings_defaults_to_zero():
    assert parse_site_settings(["beta 1\n"], 3) == ([0, 0, 0], [0.0, 0.0, 0.0])


def test_site_settings_accent_out_of_range():
    with pytest.raises(ValueError):
        parse_site_settings(["s_accent 4\n"], 1)


def test_site_settings_fixed_out_of_range():
    with pytest.raises(ValueError):
        parse_site_settings(["S_fixed 1.5\n"], 1)


def test_site_settings_wrong_count():
    with pytest.raises(ValueError):
        parse_site_settings(["s_accent 1 1 1\n"], 2)


def test_switch_coefficients():
    lines = ["switch_expc 1.5\n", "switch_expi -2e-3\n", "switch_unit 1\n", "other 3\n"]
    coefficients = parse_switch_coefficients(lines)
    assert coefficients["switch_expc"] == 1.5
    assert coefficients["switch_expi"] == -2e-3
    assert coefficients["switch_unit"] == 1
    assert coefficients["switch_expd"] == 0.0
    assert "other" not in coefficients