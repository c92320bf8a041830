# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for database, overwrite, hierarchy, app
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for the back office.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class DatabaseDefaults:
    """
    Defaults for the PostgreSQL connection pool.

    DATABASE_URL wins over the individual POSTGRES_* components.
    """
    url: Optional[str] = None
    host: str = "localhost"
    port: int = 5432
    name: str = "postgres"
    user: str = "postgres"
    password: str = ""
    sslmode: str = "require"

    pool_min_size: int = 2
    pool_max_size: int = 10

    @property
    def connection_string(self) -> str:
        if self.url:
            return self.url
        return (
            f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}"
            f"/{self.name}?sslmode={self.sslmode}"
        )

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        return cls(
            url=os.getenv("DATABASE_URL") or None,
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=int(os.getenv("POSTGRES_PORT", 5432)),
            name=os.getenv("POSTGRES_DB", "postgres"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            sslmode=os.getenv("POSTGRES_SSLMODE", "require"),
            pool_min_size=int(os.getenv("DB_POOL_MIN_SIZE", 2)),
            pool_max_size=int(os.getenv("DB_POOL_MAX_SIZE", 10)),
        )


@dataclass(frozen=True)
class OverwriteDefaults:
    """
    Defaults for association overwrites.

    atomic=True runs fetch/delete/create in one transaction holding a
    per-parent lock. atomic=False is the legacy sequence of independent
    calls, which can leave a partial association set behind on failure.
    """
    atomic: bool = True

    # None waits for the per-parent lock indefinitely
    lock_timeout_ms: Optional[int] = 5000

    @classmethod
    def from_env(cls) -> "OverwriteDefaults":
        """Create from environment variables."""
        raw_timeout = os.getenv("OVERWRITE_LOCK_TIMEOUT_MS", "5000")
        timeout = int(raw_timeout) if raw_timeout else None
        return cls(
            atomic=_env_bool("OVERWRITE_ATOMIC", True),
            lock_timeout_ms=timeout if timeout and timeout > 0 else None,
        )


@dataclass(frozen=True)
class HierarchyDefaults:
    """
    Defaults for the category parent/child hierarchy.

    Cycle rejection is off by default: parents are weak references and
    the store accepts whatever parent id it is given.
    """
    reject_cycles: bool = False
    max_depth: int = 64

    @classmethod
    def from_env(cls) -> "HierarchyDefaults":
        """Create from environment variables."""
        return cls(
            reject_cycles=_env_bool("CATEGORY_REJECT_CYCLES", False),
            max_depth=int(os.getenv("CATEGORY_MAX_DEPTH", 64)),
        )


@dataclass(frozen=True)
class AppDefaults:
    """Process-level settings."""
    name: str = "podcaster-backoffice"
    env: str = "dev"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_format: str = "human"
    auto_bootstrap_schema: bool = False

    @property
    def json_logs(self) -> bool:
        return self.log_format.lower() == "json"

    @classmethod
    def from_env(cls) -> "AppDefaults":
        """Create from environment variables."""
        return cls(
            name=os.getenv("APP_NAME", "podcaster-backoffice"),
            env=os.getenv("APP_ENV", "dev"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", 8000)),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "human"),
            auto_bootstrap_schema=_env_bool("AUTO_BOOTSTRAP_SCHEMA", False),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    app: AppDefaults = field(default_factory=AppDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)
    overwrite: OverwriteDefaults = field(default_factory=OverwriteDefaults)
    hierarchy: HierarchyDefaults = field(default_factory=HierarchyDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            app=AppDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
            overwrite=OverwriteDefaults.from_env(),
            hierarchy=HierarchyDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "AppDefaults",
    "DatabaseDefaults",
    "OverwriteDefaults",
    "HierarchyDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
