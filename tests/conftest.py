#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def toml_file(tmp_path: pathlib.Path):
    """Fixture writing TOML text to a temporary file and returning its path."""

    def _create_file(text: str, name: str = "config.toml") -> pathlib.Path:
        file_path = tmp_path / name
        file_path.write_text(text, encoding="utf-8")
        return file_path

    return _create_file
