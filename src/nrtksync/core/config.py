"""nrtk-sync configuration.

Application settings loaded from environment variables with NRTK_ prefix
and from a ``.env`` file in the working directory.

Example:
    >>> from nrtksync.core.config import get_settings
    >>> settings = get_settings(app_dir=".site/")
    >>> settings.content_dir
    PosixPath('.site/www')
    >>> settings.content_file_extension
    '.html'
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nrtksync.core.exceptions import ConfigurationError

DEFAULT_USER_AGENT = "nrtk-sync/0.1"


@dataclass(frozen=True)
class SiteLayout:
    """Resolved output locations.

    Every artifact's output path is a function of its own fields and this
    layout, nothing else.

    Example:
        >>> from pathlib import Path
        >>> from nrtksync.core.config import SiteLayout
        >>> layout = SiteLayout(
        ...     content_dir=Path("www"),
        ...     snapshot_dir=Path("snapshot"),
        ...     meta_path=Path("meta.json"),
        ... )
        >>> layout.content_path("about")
        PosixPath('www/about.html')
    """

    content_dir: Path
    snapshot_dir: Path
    meta_path: Path
    extension: str = ".html"

    def content_path(self, stem: str, extension: str | None = None) -> Path:
        """Path of a file in the content directory."""
        ext = self.extension if extension is None else extension
        return self.content_dir / f"{stem}{ext}"

    def snapshot_path(self, checksum: str) -> Path:
        """Path of the historical snapshot for a checksum."""
        return self.snapshot_dir / f"meta.{checksum}.json"


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with NRTK_ prefix. The content,
    snapshot and metadata locations default to paths under ``app_dir``.
    The unprefixed ``IS_REMOTE``, ``IS_FORCE_UPDATE`` and ``INFINITY`` keys
    of existing ``.env`` files are read too. NRTK_ names win over them.

    Example:
        >>> from nrtksync.core.config import Settings
        >>> s = Settings(app_dir="/srv/site")
        >>> s.meta_path
        PosixPath('/srv/site/meta.json')
        >>> s.repeat_interval_ms
        0
    """

    model_config = SettingsConfigDict(
        env_prefix="NRTK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Layout
    app_dir: Path = Field(default=Path(".nrtk/"), description="Root application directory")
    content_dir: Path | None = Field(default=None, description="Output directory for pages")
    snapshot_dir: Path | None = Field(default=None, description="Historical metadata directory")
    meta_path: Path | None = Field(default=None, description="Current metadata record")
    content_file_extension: str = Field(default=".html", description="Page file extension")

    # Source
    is_remote: bool = Field(
        default=False,
        validation_alias=AliasChoices("NRTK_IS_REMOTE", "IS_REMOTE", "is_remote"),
        description="Fetch from the API instead of a local file",
    )
    api_url: str | None = Field(default=None, description="Remote feed URL")
    api_token: SecretStr | None = Field(default=None, description="API auth token")
    local_path: Path = Field(default=Path("local.json"), description="Staged payload file")
    request_timeout: float = Field(default=2.0, gt=0.0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)

    # Run
    is_force_update: bool = Field(
        default=False,
        validation_alias=AliasChoices("NRTK_IS_FORCE_UPDATE", "IS_FORCE_UPDATE", "is_force_update"),
        description="Publish even if unchanged",
    )
    repeat_interval_ms: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices(
            "NRTK_REPEAT_INTERVAL_MS", "NRTK_INFINITY", "INFINITY", "repeat_interval_ms"
        ),
        description="Sleep between syncs; 0 runs once",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @model_validator(mode="after")
    def _derive_layout(self) -> Settings:
        if self.content_dir is None:
            self.content_dir = self.app_dir / "www"
        if self.snapshot_dir is None:
            self.snapshot_dir = self.app_dir / "snapshot"
        if self.meta_path is None:
            self.meta_path = self.app_dir / "meta.json"
        return self

    def layout(self) -> SiteLayout:
        """Build the output layout from these settings."""
        return SiteLayout(
            content_dir=cast(Path, self.content_dir),
            snapshot_dir=cast(Path, self.snapshot_dir),
            meta_path=cast(Path, self.meta_path),
            extension=self.content_file_extension,
        )

    def require_remote(self) -> str:
        """Return the API URL, failing if remote mode is misconfigured."""
        if not self.api_url:
            raise ConfigurationError("NRTK_API_URL is required when NRTK_IS_REMOTE is set")
        return self.api_url

    @property
    def token(self) -> str | None:
        """Plain API token, if configured."""
        return self.api_token.get_secret_value() if self.api_token else None


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    ``None`` overrides are ignored so CLI flags that were not given fall back
    to the environment.

    Example:
        >>> from nrtksync.core.config import get_settings
        >>> s = get_settings(is_force_update=True, api_url=None)
        >>> s.is_force_update
        True
    """
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
