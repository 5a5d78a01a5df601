"""Tests for server module."""

from pathlib import Path
from typing import Any

import pytest
from dirview.app_keys import lister_key, renderer_key, translator_key
from dirview.config import BrowseConfig, Config, ServerConfig
from dirview.core.listing import LocalDirectoryLister
from dirview.core.paths import DriveLetterConvention, PosixConvention
from dirview.server import create_app


class TestCreateApp:
    """Tests for create_app()."""

    def test__valid_config__returns_configured_app(self, test_config: Config) -> None:
        """Create app with collaborators stored under app keys."""
        app = create_app(test_config)

        assert translator_key in app
        assert renderer_key in app
        assert isinstance(app[lister_key], LocalDirectoryLister)
        assert isinstance(app[translator_key].convention, PosixConvention)
        assert app[translator_key].prefix == "/browse"
        assert app[translator_key].root is None

    def test__browse_config__is_applied(self) -> None:
        """Pass prefix, root and path style to the translator."""
        config = Config(
            server=ServerConfig(),
            browse=BrowseConfig(
                prefix="/files",
                root=Path("C:/share"),
                path_style="drive-letter",
                drives=["x"],
            ),
        )

        translator = create_app(config)[translator_key]

        assert translator.prefix == "/files"
        assert translator.root == "C:\\share"
        assert isinstance(translator.convention, DriveLetterConvention)
        assert translator.convention.drives == frozenset({"x"})


class TestRootRedirect:
    """Tests for GET /."""

    @pytest.mark.asyncio
    async def test__no_root__redirects_to_filesystem_root(
        self,
        aiohttp_client: Any,
        test_config: Config,
    ) -> None:
        """Redirect to the bare browse prefix."""
        client = await aiohttp_client(create_app(test_config))

        response = await client.get("/", allow_redirects=False)

        assert response.status == 302
        assert response.headers["Location"] == "/browse/"

    @pytest.mark.asyncio
    async def test__served_root__redirects_to_root_listing(
        self,
        aiohttp_client: Any,
        home_dir: Path,
    ) -> None:
        """Redirect to the listing of the served root."""
        config = Config(
            server=ServerConfig(),
            browse=BrowseConfig(root=home_dir, path_style="posix"),
        )
        client = await aiohttp_client(create_app(config))

        response = await client.get("/")

        assert response.status == 200
        html = await response.text()
        assert ">docs</a>" in html
        assert "Go Up" not in html

    @pytest.mark.asyncio
    async def test__relative_config_root__serves_listing(
        self,
        aiohttp_client: Any,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A root given relative to a relatively named config file is served."""
        (tmp_path / "shared" / "docs").mkdir(parents=True)
        (tmp_path / "dirview.toml").write_text(
            '[browse]\nroot = "shared"\npath_style = "posix"\n',
        )
        monkeypatch.chdir(tmp_path)
        client = await aiohttp_client(create_app(Config.load(Path("dirview.toml"))))

        response = await client.get("/")

        assert response.status == 200
        assert ">docs</a>" in await response.text()
