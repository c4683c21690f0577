"""
Configuration management.

Settings come from ``config/app_config.yaml`` (or the file named by
``DAYBOOK_CONFIG_PATH``); ``Config.from_env`` covers deployments without a file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DATASTORE_BACKENDS = ("memory", "sqlite", "hosted")
AUTH_PROVIDERS = ("mock", "hosted")

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "app_config.yaml"


@dataclass
class ServerConfig:
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = 5000
    base_path: str = "/api"
    cors_origins: List[str] = None  # type: ignore

    def __post_init__(self):
        if self.cors_origins is None:
            self.cors_origins = ["http://localhost:5173"]


@dataclass
class DatastoreConfig:
    """Record store selection"""

    backend: str = "memory"
    sqlite_path: str = "data/daybook.db"


@dataclass
class HostedConfig:
    """Hosted platform (identity + tabular datastore) settings"""

    api_url: str = "https://api.catalyst.zoho.com/baas/v1"
    project_id: str = ""
    access_token: str = ""
    todos_table: str = "todos"
    expenses_table: str = "expenses"
    page_size: int = 100
    timeout_seconds: float = 10.0
    redirect_url: str = "http://localhost:5173/dashboard"


@dataclass
class AuthConfig:
    """Identity provider selection"""

    provider: str = "mock"


@dataclass
class Config:
    """Application settings"""

    server: ServerConfig = None  # type: ignore
    datastore: DatastoreConfig = None  # type: ignore
    hosted: HostedConfig = None  # type: ignore
    auth: AuthConfig = None  # type: ignore

    log_level: str = "INFO"
    log_file: str = "logs/daybook.log"

    def __post_init__(self):
        if self.server is None:
            self.server = ServerConfig()
        if self.datastore is None:
            self.datastore = DatastoreConfig()
        if self.hosted is None:
            self.hosted = HostedConfig()
        if self.auth is None:
            self.auth = AuthConfig()

        if self.datastore.backend not in DATASTORE_BACKENDS:
            raise ValueError(
                f"Unknown datastore backend '{self.datastore.backend}', "
                f"expected one of {', '.join(DATASTORE_BACKENDS)}"
            )
        if self.auth.provider not in AUTH_PROVIDERS:
            raise ValueError(
                f"Unknown auth provider '{self.auth.provider}', "
                f"expected one of {', '.join(AUTH_PROVIDERS)}"
            )

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """Load settings from a YAML file.

        Args:
            config_path: settings file (defaults to config/app_config.yaml)

        Returns:
            Config: loaded settings
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        server_data = yaml_data.get("server", {})
        datastore_data = yaml_data.get("datastore", {})
        hosted_data = yaml_data.get("hosted", {})
        auth_data = yaml_data.get("auth", {})
        log_data = yaml_data.get("log", {})

        return cls(
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=int(server_data.get("port", 5000)),
                base_path=server_data.get("base_path", "/api"),
                cors_origins=server_data.get("cors_origins"),
            ),
            datastore=DatastoreConfig(
                backend=datastore_data.get("backend", "memory"),
                sqlite_path=datastore_data.get("sqlite_path", "data/daybook.db"),
            ),
            hosted=HostedConfig(
                api_url=hosted_data.get("api_url", "https://api.catalyst.zoho.com/baas/v1"),
                project_id=str(hosted_data.get("project_id", "")),
                access_token=hosted_data.get("access_token")
                or os.getenv("DAYBOOK_HOSTED_ACCESS_TOKEN", ""),
                todos_table=hosted_data.get("todos_table", "todos"),
                expenses_table=hosted_data.get("expenses_table", "expenses"),
                page_size=int(hosted_data.get("page_size", 100)),
                timeout_seconds=float(hosted_data.get("timeout_seconds", 10.0)),
                redirect_url=hosted_data.get("redirect_url", "http://localhost:5173/dashboard"),
            ),
            auth=AuthConfig(provider=auth_data.get("provider", "mock")),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/daybook.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load settings from DAYBOOK_* environment variables."""
        origins = os.getenv("DAYBOOK_CORS_ORIGINS")
        return cls(
            server=ServerConfig(
                host=os.getenv("DAYBOOK_HOST", "0.0.0.0"),
                port=int(os.getenv("DAYBOOK_PORT", "5000")),
                base_path=os.getenv("DAYBOOK_BASE_PATH", "/api"),
                cors_origins=[o.strip() for o in origins.split(",")] if origins else None,
            ),
            datastore=DatastoreConfig(
                backend=os.getenv("DAYBOOK_DATASTORE", "memory"),
                sqlite_path=os.getenv("DAYBOOK_SQLITE_PATH", "data/daybook.db"),
            ),
            hosted=HostedConfig(
                api_url=os.getenv("DAYBOOK_HOSTED_API_URL", "https://api.catalyst.zoho.com/baas/v1"),
                project_id=os.getenv("DAYBOOK_HOSTED_PROJECT_ID", ""),
                access_token=os.getenv("DAYBOOK_HOSTED_ACCESS_TOKEN", ""),
                todos_table=os.getenv("DAYBOOK_HOSTED_TODOS_TABLE", "todos"),
                expenses_table=os.getenv("DAYBOOK_HOSTED_EXPENSES_TABLE", "expenses"),
                page_size=int(os.getenv("DAYBOOK_HOSTED_PAGE_SIZE", "100")),
                timeout_seconds=float(os.getenv("DAYBOOK_HOSTED_TIMEOUT", "10")),
                redirect_url=os.getenv(
                    "DAYBOOK_HOSTED_REDIRECT_URL", "http://localhost:5173/dashboard"
                ),
            ),
            auth=AuthConfig(provider=os.getenv("DAYBOOK_AUTH_PROVIDER", "mock")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/daybook.log"),
        )


def load_config() -> Config:
    """Pick the settings source: DAYBOOK_CONFIG_PATH, the default file, then env."""
    env_path = os.getenv("DAYBOOK_CONFIG_PATH")
    if env_path:
        return Config.from_yaml(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return Config.from_yaml(DEFAULT_CONFIG_PATH)
    return Config.from_env()
