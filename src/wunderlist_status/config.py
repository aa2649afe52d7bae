"""Runtime configuration for the status reporter."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_API_HOST = "a.wunderlist.com"
DEFAULT_CACHE_FILENAME = "wunderlist_status_output.json"


def default_cache_path() -> Path:
    return Path(tempfile.gettempdir()) / DEFAULT_CACHE_FILENAME


@dataclass(slots=True)
class ApiSettings:
    """Remote service settings."""

    host: str = DEFAULT_API_HOST
    access_token: str = ""
    client_id: str = ""


@dataclass(slots=True)
class CacheSettings:
    """Last-good-render cache settings."""

    path: Path = field(default_factory=default_cache_path)


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    api: ApiSettings = field(default_factory=ApiSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    color: bool | None = None

    @classmethod
    def from_env(
        cls,
        *,
        access_token: str | None = None,
        client_id: str | None = None,
        cache_path: Path | None = None,
        color: bool | None = None,
    ) -> Settings:
        """Load settings from environment; explicit arguments win over the environment."""

        env_cache_path = os.getenv("WUNDERLIST_STATUS_CACHE_PATH", "").strip()
        return cls(
            api=ApiSettings(
                host=os.getenv("WUNDERLIST_API_HOST", DEFAULT_API_HOST).strip(),
                access_token=access_token or os.getenv("WUNDERLIST_ACCESS_TOKEN", ""),
                client_id=client_id or os.getenv("WUNDERLIST_CLIENT_ID", ""),
            ),
            cache=CacheSettings(
                path=cache_path
                or (Path(env_cache_path) if env_cache_path else default_cache_path()),
            ),
            color=color if color is not None else _env_optional_bool("WUNDERLIST_STATUS_COLOR"),
        )

    def validate(self) -> None:
        """Raise configuration error if the host or cache location is unusable."""

        host = self.api.host
        if not host:
            raise ValueError("WUNDERLIST_API_HOST must not be empty.")
        if "://" in host or "/" in host or any(char.isspace() for char in host):
            raise ValueError(
                f"Invalid WUNDERLIST_API_HOST: {host!r}. Expected a bare host name.",
            )
        if self.cache.path.is_dir():
            raise ValueError(
                f"WUNDERLIST_STATUS_CACHE_PATH points to a directory: {str(self.cache.path)!r}",
            )


def _env_optional_bool(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
