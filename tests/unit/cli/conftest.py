"""Pytest fixtures for CLI tests."""

import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def sample_csv(tmp_path):
    """Create a sample CSV file."""
    csv_file = tmp_path / "people.csv"
    csv_file.write_text("name,age\nAda,36\nGrace,45\n")
    return csv_file
