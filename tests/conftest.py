"""Shared test fixtures."""

from pathlib import Path

import pytest
from dirview.config import BrowseConfig, Config, ServerConfig


@pytest.fixture
def test_config() -> Config:
    """Create a test configuration serving the whole filesystem."""
    return Config(
        server=ServerConfig(),
        browse=BrowseConfig(path_style="posix"),
    )


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Create a user directory with one subdirectory and one file.

    Layout: tmp_path/home/user/{docs/, readme.txt}
    """
    user = tmp_path / "home" / "user"
    (user / "docs").mkdir(parents=True)
    (user / "readme.txt").write_text("hello")
    return user
