"""Configuration for kube-count.

Settings are loaded from environment variables with the KUBE_COUNT_ prefix
or from a .env file, and may be overridden by command line flags.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

IN_CLUSTER_TOKEN_PATH = Path("/var/run/secrets/kubernetes.io/serviceaccount/token")


class AuthMode(str, Enum):
    """How cluster credentials are loaded."""

    AUTO = "auto"
    KUBECONFIG = "kubeconfig"
    IN_CLUSTER = "in-cluster"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class CountConfig(BaseSettings):
    """Configuration for a resource counting run."""

    model_config = SettingsConfigDict(
        env_prefix="KUBE_COUNT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    auth_mode: AuthMode = Field(
        default=AuthMode.AUTO,
        description="Credential source: kubeconfig, in-cluster service account, or auto",
    )
    kubeconfig_path: Path | None = Field(
        default=None,
        description="Path to kubeconfig file (default: $KUBECONFIG or ~/.kube/config)",
    )
    kubeconfig_context: str | None = Field(
        default=None,
        description="Kubeconfig context to use",
    )

    # Scope
    namespace: str | None = Field(
        default=None,
        description="Restrict watches to this namespace (default: all namespaces)",
    )

    # Synchronization
    sync_timeout_seconds: float | None = Field(
        default=120.0,
        ge=0.0,
        description="Maximum time to wait for every watch to finish its initial list; "
        "0 or None waits forever",
    )
    sync_poll_interval_seconds: float = Field(
        default=0.1,
        gt=0.0,
        description="How often the sync barrier re-checks the watches",
    )
    shutdown_timeout_seconds: float = Field(
        default=5.0,
        ge=0.0,
        description="Maximum total time to wait for the watch workers to exit after cancellation",
    )

    # Watch tuning
    list_page_size: int = Field(
        default=500,
        ge=1,
        description="Page size for the initial list of each resource type",
    )
    watch_timeout_seconds: int = Field(
        default=300,
        ge=1,
        description="Server-side timeout of a single watch request",
    )
    watch_read_timeout_seconds: float = Field(
        default=2.0,
        gt=0.0,
        description="Client-side socket read timeout of a watch; bounds how long a closed "
        "watch can stay blocked on a quiet connection",
    )
    connection_pool_maxsize: int = Field(
        default=100,
        ge=1,
        description="HTTP connection pool size shared by all watches",
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Logging level",
    )

    @field_validator("sync_timeout_seconds")
    @classmethod
    def _zero_timeout_waits_forever(cls, value: float | None) -> float | None:
        if not value:
            return None
        return value

    @property
    def effective_kubeconfig_path(self) -> Path | None:
        """Kubeconfig path to pass to the client loader, if any was configured."""
        if self.kubeconfig_path is None:
            return None
        return self.kubeconfig_path.expanduser()

    def validate_auth_config(self) -> list[str]:
        """Validate credential settings.

        Returns:
            List of warnings about settings that will be ignored.

        Raises:
            ValueError: If the settings cannot work together.
        """
        warnings: list[str] = []

        path = self.effective_kubeconfig_path
        if self.auth_mode == AuthMode.KUBECONFIG and path is not None and not path.exists():
            raise ValueError(f"Kubeconfig file not found: {path}")

        if self.auth_mode == AuthMode.IN_CLUSTER:
            if not IN_CLUSTER_TOKEN_PATH.exists():
                raise ValueError(
                    "In-cluster auth requested but no service account token found at "
                    f"{IN_CLUSTER_TOKEN_PATH}"
                )
            if self.kubeconfig_path is not None or self.kubeconfig_context is not None:
                warnings.append("Kubeconfig settings are ignored with in-cluster auth")

        return warnings
