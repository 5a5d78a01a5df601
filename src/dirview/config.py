"""Configuration management for Dirview.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from dirview.core.paths import DEFAULT_DRIVES, DEFAULT_PREFIX, PATH_STYLES

CONFIG_FILENAME = "dirview.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 3000


@dataclass
class BrowseConfig:
    """Directory browsing configuration."""

    prefix: str = DEFAULT_PREFIX
    root: Path | None = None
    path_style: str = "auto"
    drives: list[str] = field(default_factory=lambda: list(DEFAULT_DRIVES))


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    browse: BrowseConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for dirview.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(server=ServerConfig(), browse=BrowseConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        server = cls._parse_server(data.get("server"))
        browse = cls._parse_browse(data.get("browse"), path.parent.absolute())

        return cls(server=server, browse=browse, config_path=path)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 3000)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_browse(cls, data: object, config_dir: Path) -> BrowseConfig:
        """Parse browse configuration section.

        Args:
            data: Raw browse section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            BrowseConfig instance
        """
        if data is None:
            return BrowseConfig()

        if not isinstance(data, dict):
            raise ValueError("browse section must be a dictionary")

        prefix = data.get("prefix", DEFAULT_PREFIX)
        if not isinstance(prefix, str):
            raise ValueError("browse.prefix must be a string")
        if not prefix.startswith("/") or prefix.endswith("/"):
            raise ValueError('browse.prefix must start with "/" and not end with "/"')

        root_raw = data.get("root")
        root: Path | None = None
        if root_raw is not None:
            if not isinstance(root_raw, str):
                raise ValueError("browse.root must be a string")
            root = config_dir / root_raw

        path_style = data.get("path_style", "auto")
        if path_style not in PATH_STYLES:
            raise ValueError(f"browse.path_style must be one of: {', '.join(PATH_STYLES)}")

        drives_raw = data.get("drives", list(DEFAULT_DRIVES))
        if not isinstance(drives_raw, list):
            raise ValueError("browse.drives must be a list")
        drives: list[str] = []
        for item in drives_raw:
            if not isinstance(item, str) or len(item) != 1 or not item.isalpha():
                raise ValueError("browse.drives items must be single letters")
            drives.append(item.lower())

        return BrowseConfig(
            prefix=prefix,
            root=root,
            path_style=path_style,
            drives=drives,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        root: Path | None = None,
        path_style: str | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            root: Override browse.root
            path_style: Override browse.path_style

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        browse = self.browse
        if root is not None or path_style is not None:
            browse = replace(
                self.browse,
                root=root if root is not None else self.browse.root,
                path_style=path_style if path_style is not None else self.browse.path_style,
            )

        return replace(self, server=server, browse=browse)
