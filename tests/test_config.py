#
# Sizeval - Config Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
import toml

# Local ----------------------------------------------------------------------------------------------------------------
from sizeval.config import load_sized_config, load_unit_table, parse_fields, read_toml
from sizeval.errors import ConfigFieldError, InvalidMultiplierError, NoBaseUnitError, UnknownUnitError
from sizeval.units import Sign, UnitTable

UNITS_TOML = """
[units]
B = 1
KB = 1000
Ki = 1024

[limits]
memory = "512Ki"
upload = "+10KB"
threads = 8
"""


# Tests ----------------------------------------------------------------------------------------------------------------

class TestReadToml:

    def test_path(self, toml_file):
        path = toml_file(UNITS_TOML)
        assert read_toml(path)["units"]["KB"] == 1000

    def test_str_path(self, toml_file):
        path = toml_file(UNITS_TOML)
        assert read_toml(str(path))["limits"]["threads"] == 8

    def test_text(self):
        assert read_toml(UNITS_TOML)["limits"]["memory"] == "512Ki"

    def test_invalid(self):
        with pytest.raises(toml.TomlDecodeError):
            read_toml("[units]\nB = 1\nB = 2\n")

    def test_missing_str_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_toml("no/such/limits.toml")
        with pytest.raises(FileNotFoundError):
            read_toml(str(tmp_path / "missing.toml"))

    def test_single_line_text(self):
        assert read_toml('memory = "1Ki"') == {"memory": "1Ki"}

    def test_type_error(self):
        with pytest.raises(TypeError):
            read_toml(42)


class TestLoadUnitTable:

    def test_from_file(self, toml_file):
        units = load_unit_table(toml_file(UNITS_TOML))
        assert units == UnitTable({"B": 1, "KB": 1000, "Ki": 1024})

    def test_classmethod(self, toml_file):
        units = UnitTable.from_toml(toml_file(UNITS_TOML))
        assert units.parse("3Ki").magnitude == 3072

    def test_empty_suffix_base_unit(self, toml_file):
        units = load_unit_table(toml_file('[units]\n"" = 1\nKB = 1000\n'))
        assert units == UnitTable({"": 1, "KB": 1000})
        assert units.parse("12").magnitude == 12
        assert str(units.parse("3000")) == "3KB"

    def test_custom_section(self):
        units = load_unit_table("[sizes]\nB = 1\nMB = 1000000\n", section="sizes")
        assert str(units.parse("2000000B")) == "2MB"

    def test_missing_section(self):
        with pytest.raises(KeyError):
            load_unit_table("[other]\nB = 1\n")

    def test_section_not_a_table(self):
        with pytest.raises(TypeError):
            load_unit_table("units = 5\n")

    def test_no_base_unit(self):
        with pytest.raises(NoBaseUnitError):
            load_unit_table("[units]\nKB = 1000\n")

    def test_invalid_multiplier(self):
        with pytest.raises(InvalidMultiplierError):
            load_unit_table("[units]\nB = 1\nKB = 0\n")

    def test_non_int_multiplier(self):
        with pytest.raises(TypeError):
            load_unit_table('[units]\nB = 1\nKB = "1000"\n')


class TestParseFields:

    UNITS = UnitTable({"": 1, "KB": 1000, "Ki": 1024})

    def test_str_and_int_fields(self):
        values = parse_fields({"memory": "512Ki", "upload": "+10KB", "threads": 8}, self.UNITS)
        assert list(values) == ["memory", "upload", "threads"]
        assert values["memory"].magnitude == 512 * 1024
        assert values["upload"].explicit_sign is Sign.POSITIVE
        assert values["threads"].magnitude == 8
        assert values["threads"].explicit_sign is Sign.NONE

    def test_selected_fields(self):
        values = parse_fields({"memory": "1Ki", "name": "worker"}, self.UNITS, fields=["memory"])
        assert list(values) == ["memory"]

    def test_missing_field(self):
        with pytest.raises(KeyError):
            parse_fields({"memory": "1Ki"}, self.UNITS, fields=["upload"])

    def test_parse_error_is_chained(self):
        with pytest.raises(ConfigFieldError) as excinfo:
            parse_fields({"memory": "1XB"}, self.UNITS)
        assert excinfo.value.field == "memory"
        assert "config field 'memory'" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, UnknownUnitError)

    @pytest.mark.parametrize(
        "raw",
        [
            pytest.param(1.5, id="float"),
            pytest.param(True, id="bool"),
            pytest.param(["1KB"], id="list"),
        ],
    )
    def test_unsupported_field_type(self, raw):
        with pytest.raises(ConfigFieldError, match="expected a str or int size"):
            parse_fields({"memory": raw}, self.UNITS)

    def test_int_out_of_range(self):
        with pytest.raises(ConfigFieldError):
            parse_fields({"memory": 2 ** 63}, self.UNITS)


class TestLoadSizedConfig:

    def test_load(self, toml_file):
        path = toml_file(UNITS_TOML)
        units = load_unit_table(path)
        values = load_sized_config(path, units, "limits", fields=["memory", "upload"])
        assert values["memory"].magnitude == 512 * 1024
        assert str(values["upload"]) == "+10KB"

    def test_missing_section(self, toml_file):
        units = UnitTable({"": 1})
        with pytest.raises(KeyError):
            load_sized_config(toml_file(UNITS_TOML), units, "quotas")
