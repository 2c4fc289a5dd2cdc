"""Tests for configuration files and settings lines."""

import pytest

from enigma.config import (
    MachineConfig,
    Settings,
    apply_settings,
    default_config,
    load_config,
    load_config_file,
    parse_settings,
)
from enigma.core.alphabet import Alphabet
from enigma.core.errors import ConfigFileError, ConfigurationMismatch
from enigma.core.rotor import RotorKind
from reference import HIAWATHA_CIPHER, HIAWATHA_PLAIN, HIAWATHA_ROTORS

SMALL_CONFIG = """\
ABCD
3 2
R R  (AB) (CD)
F MA (ABC)
S MC (AD)
     (BC)
"""

HIAWATHA_SETTINGS_LINE = "* B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)"


def small_config_with(*rotor_lines: str) -> str:
    """Return a 4-symbol, 3-slot configuration with the given rotor lines."""
    return "ABCD\n3 2\n" + "\n".join(rotor_lines) + "\n"


class TestLoadConfig:
    """Test parsing of well-formed configuration files."""

    def test_small(self):
        """Test alphabet, counts and rotor kinds are read."""
        config = load_config(SMALL_CONFIG)
        assert config.alphabet == Alphabet("ABCD")
        assert config.num_rotors == 3
        assert config.num_pawls == 2
        assert list(config.catalog) == ["R", "F", "S"]
        assert config.catalog["R"].kind is RotorKind.REFLECTOR
        assert config.catalog["F"].kind is RotorKind.MOVING
        assert config.catalog["F"].notches == "A"

    def test_cycles_continue_on_next_line(self):
        """Test wiring cycles may span several lines."""
        config = load_config(SMALL_CONFIG)
        perm = config.catalog["S"].permutation
        assert perm.permute_symbol("A") == "D"
        assert perm.permute_symbol("B") == "C"

    def test_several_rotors_on_one_line(self):
        """Test rotor descriptors are split by tokens, not lines."""
        config = load_config("ABCD 3 2 R R (AB) (CD) F MA (ABC) S MC (AD) (BC)")
        assert sorted(config.catalog) == ["F", "R", "S"]

    def test_fixed_rotor(self):
        """Test the N type reads a fixed rotor."""
        config = load_config(small_config_with("R R (AB) (CD)", "X N (AC)"))
        assert config.catalog["X"].kind is RotorKind.FIXED
        assert not config.catalog["X"].rotates

    def test_catalog_read_only(self):
        """Test the parsed catalog cannot be modified."""
        config = load_config(SMALL_CONFIG)
        with pytest.raises(TypeError):
            config.catalog["X"] = config.catalog["F"]

    def test_build_machine(self):
        """Test a machine built from the configuration is usable."""
        machine = load_config(SMALL_CONFIG).build_machine()
        machine.insert_rotors(["R", "F", "S"])
        machine.set_rotors("AA")
        out = machine.convert("AAAAAAAA")
        assert set(out) <= set("BCD")
        assert machine.settings() != "AA"

    def test_load_file(self, tmp_path):
        """Test reading a configuration from disk."""
        path = tmp_path / "small.conf"
        path.write_text(SMALL_CONFIG)
        config = load_config_file(path)
        assert config.num_rotors == 3
        assert load_config_file(str(path)).alphabet == config.alphabet

    def test_missing_file(self, tmp_path):
        """Test a missing file surfaces as an OSError."""
        with pytest.raises(OSError):
            load_config_file(tmp_path / "absent.conf")


class TestDefaultConfig:
    """Test the built-in naval rotor set."""

    def test_dimensions(self, naval):
        """Test the historical four-rotor layout."""
        assert isinstance(naval, MachineConfig)
        assert naval.alphabet == Alphabet()
        assert naval.num_rotors == 5
        assert naval.num_pawls == 3

    def test_rotor_set(self, naval):
        """Test every historical rotor is present with the right kind."""
        moving = ["I", "II", "III", "IV", "V", "VI", "VII", "VIII"]
        assert sorted(naval.catalog) == sorted(moving + ["Beta", "Gamma", "B", "C"])
        for name in moving:
            assert naval.catalog[name].kind is RotorKind.MOVING
        assert naval.catalog["Beta"].kind is RotorKind.FIXED
        assert naval.catalog["Gamma"].kind is RotorKind.FIXED
        assert naval.catalog["B"].kind is RotorKind.REFLECTOR
        assert naval.catalog["C"].kind is RotorKind.REFLECTOR

    def test_notches(self, naval):
        """Test single and double notches."""
        assert naval.catalog["I"].notches == "Q"
        assert naval.catalog["V"].notches == "Z"
        assert naval.catalog["VI"].notches == "ZM"

    def test_wiring(self, naval):
        """Test rotor I and reflector B against their letter tables."""
        upper = naval.alphabet
        rotor_i = naval.catalog["I"].permutation
        assert "".join(rotor_i.permute_symbol(c) for c in upper) == "EKMFLGDQVZNTOWYHXUSPAIBRCJ"
        reflector = naval.catalog["B"].permutation
        assert "".join(reflector.permute_symbol(c) for c in upper) == "ENKQAUYWJICOPBLMDXZVFTHRGS"

    def test_fresh_each_call(self):
        """Test every call parses a new, equal configuration."""
        first, second = default_config(), default_config()
        assert first is not second
        assert first.catalog["I"] is not second.catalog["I"]


class TestConfigErrors:
    """Test malformed configuration files report the offending line."""

    def test_truncated(self):
        """Test a file without rotor and pawl counts."""
        with pytest.raises(ConfigFileError):
            load_config("ABCD\n3")

    def test_bad_alphabet(self):
        """Test a repeated alphabet symbol."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config("ABCA\n3 2\nR R (AB) (CD)\n")
        assert exc_info.value.line == 1

    def test_bad_counts(self):
        """Test non-numeric counts."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config("ABCD\nthree 2\nR R (AB) (CD)\n")
        assert exc_info.value.line == 2

    def test_pawls_not_below_rotors(self):
        """Test the pawl count must be below the slot count."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config("ABCD\n3 3\nR R (AB) (CD)\n")
        assert exc_info.value.line == 2

    def test_no_rotors(self):
        """Test a configuration with an empty catalog."""
        with pytest.raises(ConfigFileError):
            load_config("ABCD\n3 2\n")

    def test_unknown_type(self):
        """Test a type code other than M, N or R."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(small_config_with("R R (AB) (CD)", "II Q (AB)"))
        assert exc_info.value.line == 4

    def test_missing_type(self):
        """Test a rotor name at the end of the file."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(small_config_with("R R (AB) (CD)", "F"))
        assert exc_info.value.line == 4

    def test_missing_cycles(self):
        """Test a descriptor followed directly by the next rotor."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(small_config_with("R R", "F MA (ABC)"))
        assert exc_info.value.line == 3

    def test_bracket_in_name(self):
        """Test rotor names may not contain brackets."""
        with pytest.raises(ConfigFileError):
            load_config(small_config_with("X) R (AB) (CD)"))

    def test_unknown_symbol_in_wiring(self):
        """Test a cycle symbol outside the alphabet."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(small_config_with("R R (AB) (CD)", "F MA (ABX)"))
        assert exc_info.value.line == 4

    def test_malformed_wiring(self):
        """Test an unbalanced cycle."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(small_config_with("R R (AB) (CD)", "F MA (ABC"))
        assert exc_info.value.line == 4

    def test_moving_without_notch(self):
        """Test an M type with no notch symbols."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(small_config_with("R R (AB) (CD)", "F M (ABC)"))
        assert exc_info.value.line == 4

    def test_fixed_with_notch(self):
        """Test an N type with notch symbols."""
        with pytest.raises(ConfigFileError):
            load_config(small_config_with("R R (AB) (CD)", "X NA (AC)"))

    def test_reflector_not_pairing(self):
        """Test reflector cycles longer than two symbols."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(small_config_with("R R (ABCD)"))
        assert exc_info.value.line == 3

    def test_reflector_partial_pairing(self):
        """Test a reflector need not pair every symbol."""
        config = load_config(small_config_with("R R (AB)"))
        assert config.catalog["R"].reflecting

    def test_duplicate_rotor(self):
        """Test the same rotor name defined twice."""
        with pytest.raises(ConfigFileError) as exc_info:
            load_config(small_config_with("R R (AB) (CD)", "F MA (ABC)", "F MB (AC)"))
        assert exc_info.value.line == 5

    def test_error_hierarchy(self):
        """Test file errors are configuration mismatches with a line prefix."""
        with pytest.raises(ConfigurationMismatch, match="^line 4: "):
            load_config(small_config_with("R R (AB) (CD)", "II Q (AB)"))


class TestSettings:
    """Test parsing and applying settings lines."""

    def test_parse(self):
        """Test rotors, positions and plugboard are split out."""
        settings = parse_settings(HIAWATHA_SETTINGS_LINE, 5, lineno=7)
        assert settings == Settings(HIAWATHA_ROTORS, "AXLE", "(HQ) (EX) (IP) (TR) (BY)", 7)

    def test_parse_without_plugboard(self):
        """Test the plugboard is optional."""
        settings = parse_settings("* B Beta III IV I AXLE", 5)
        assert settings.plugboard == ""
        assert settings.line is None

    def test_marker_without_space(self):
        """Test the marker may touch the first rotor name."""
        assert parse_settings("*B Beta III IV I AXLE", 5).rotors == HIAWATHA_ROTORS

    def test_missing_marker(self):
        """Test a settings line must start with '*'."""
        with pytest.raises(ConfigFileError):
            parse_settings("B Beta III IV I AXLE", 5)

    def test_too_few_fields(self):
        """Test a line without the position string."""
        with pytest.raises(ConfigFileError) as exc_info:
            parse_settings("* B Beta III IV I", 5, lineno=3)
        assert exc_info.value.line == 3

    def test_plugboard_pairs_only(self):
        """Test plugboard cycles must swap exactly two symbols."""
        with pytest.raises(ConfigFileError):
            parse_settings("* B Beta III IV I AXLE (HQE)", 5)

    def test_plugboard_malformed(self):
        """Test unbalanced plugboard brackets."""
        with pytest.raises(ConfigFileError):
            parse_settings("* B Beta III IV I AXLE (HQ", 5)

    def test_apply(self, naval):
        """Test applying a settings line reproduces the reference message."""
        machine = naval.build_machine()
        apply_settings(machine, parse_settings(HIAWATHA_SETTINGS_LINE, 5))
        assert machine.settings() == "AXLE"
        assert machine.convert(HIAWATHA_PLAIN) == HIAWATHA_CIPHER

    @pytest.mark.parametrize(
        "line",
        [
            "* B Beta III IV IX AXLE",
            "* B Beta III IV I AX1E",
            "* B Beta III IV I AXL",
            "* B Beta III IV I AXLE (H1)",
            "* Beta B III IV I AXLE",
        ],
    )
    def test_apply_errors(self, naval, line):
        """Test settings that do not fit the machine carry the line number."""
        machine = naval.build_machine()
        with pytest.raises(ConfigFileError) as exc_info:
            apply_settings(machine, parse_settings(line, 5, lineno=9))
        assert exc_info.value.line == 9
