from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from schemaview.config._env import resolve
from schemaview.config._error import ConfigError
from schemaview.core import DEFAULT_BASE_PATH, DEFAULT_RECENTLY_VIEWED_LIMIT, DEFAULT_REQUEST_TIMEOUT
from schemaview.generation import Stage

if sys.version_info < (3, 11):
    import tomli
else:
    import tomllib as tomli

__all__ = ["ConfigError", "RecentlyViewedConfig", "ViewerConfig", "CONFIG_FILE_NAME"]

CONFIG_FILE_NAME = "schemaview.toml"
DEFAULT_RECENTLY_VIEWED_PATH = "~/.schemaview/recent.json"


@dataclass
class RecentlyViewedConfig:
    path: str
    limit: int

    __slots__ = ("path", "limit")

    def __init__(self, *, path: str = DEFAULT_RECENTLY_VIEWED_PATH, limit: int = DEFAULT_RECENTLY_VIEWED_LIMIT) -> None:
        self.path = path
        self.limit = limit

    @classmethod
    def from_dict(cls, data: dict) -> RecentlyViewedConfig:
        return cls(
            path=resolve(data.get("path", DEFAULT_RECENTLY_VIEWED_PATH)),
            limit=data.get("limit", DEFAULT_RECENTLY_VIEWED_LIMIT),
        )


@dataclass
class ViewerConfig:
    base_path: tuple[str, ...]
    stage: Stage
    request_timeout: float
    recently_viewed: RecentlyViewedConfig
    _config_path: str | None

    __slots__ = ("base_path", "stage", "request_timeout", "recently_viewed", "_config_path")

    def __init__(
        self,
        *,
        base_path: tuple[str, ...] = DEFAULT_BASE_PATH,
        stage: Stage = Stage.BOTH,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        recently_viewed: RecentlyViewedConfig | None = None,
    ) -> None:
        self.base_path = tuple(base_path)
        self.stage = stage
        self.request_timeout = request_timeout
        self.recently_viewed = recently_viewed or RecentlyViewedConfig()
        self._config_path = None

    @property
    def config_path(self) -> str | None:
        """Filesystem path to the loaded configuration file, if any."""
        return self._config_path

    @classmethod
    def discover(cls) -> ViewerConfig:
        """Discover the configuration file.

        Search for 'schemaview.toml' in the current directory and then in each parent directory,
        stopping when a directory containing a '.git' folder is encountered or the filesystem root is reached.
        If a config file is found, load it; otherwise, return a default configuration.
        """
        current_dir = os.getcwd()
        config_file = None

        while True:
            candidate = os.path.join(current_dir, CONFIG_FILE_NAME)
            if os.path.isfile(candidate):
                config_file = candidate
                break

            # Stop searching if we've reached a git repository root
            if os.path.isdir(os.path.join(current_dir, ".git")):
                break

            # Stop if we've reached the filesystem root
            parent = os.path.dirname(current_dir)
            if parent == current_dir:
                break
            current_dir = parent

        if config_file:
            return cls.from_path(config_file)
        return cls()

    @classmethod
    def from_path(cls, path: PathLike | str) -> ViewerConfig:
        """Load configuration from a file path."""
        with open(path, encoding="utf-8") as fd:
            config = cls.from_str(fd.read())
            config._config_path = str(Path(path).resolve())
            return config

    @classmethod
    def from_str(cls, data: str) -> ViewerConfig:
        """Parse configuration from a string."""
        try:
            parsed = tomli.loads(data)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML: {exc}") from None
        return cls.from_dict(parsed)

    @classmethod
    def from_dict(cls, data: dict) -> ViewerConfig:
        """Create a config instance from a dictionary."""
        from jsonschema.exceptions import ValidationError

        from schemaview.config._validator import CONFIG_VALIDATOR

        try:
            CONFIG_VALIDATOR.validate(data)
        except ValidationError as exc:
            raise ConfigError.from_validation_error(exc) from None
        return cls(
            base_path=tuple(resolve(segment) for segment in data.get("base-path", DEFAULT_BASE_PATH)),
            stage=Stage(data.get("stage", Stage.BOTH.value)),
            request_timeout=data.get("request-timeout", DEFAULT_REQUEST_TIMEOUT),
            recently_viewed=RecentlyViewedConfig.from_dict(data.get("recently-viewed", {})),
        )
