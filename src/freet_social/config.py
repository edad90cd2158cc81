"""
# Configuration Management Module

This module provides the configuration system for the Freet Social service.
Built on **Pydantic Settings**, it loads typed settings from the environment and
an optional config file, validates them at import time and exposes a single
module-level `settings` instance.

## Configuration Loading Hierarchy

```
┌─────────────────────────────────────────────────────────────┐
│  1. Environment Variables (HIGHEST PRIORITY)                │
├─────────────────────────────────────────────────────────────┤
│  2. FREET_SOCIAL_CONFIG_PATH                                │
│     - Custom config file path from env var                  │
├─────────────────────────────────────────────────────────────┤
│  3. .freet File (Project Root)                              │
├─────────────────────────────────────────────────────────────┤
│  4. .env File (Project Root)                                │
├─────────────────────────────────────────────────────────────┤
│  5. Default Values (LOWEST PRIORITY)                        │
└─────────────────────────────────────────────────────────────┘
```

## Configuration Groups

### Server
```python
HOST: str = "127.0.0.1"
PORT: int = 8000
DEBUG: bool = True
```

### MongoDB
```python
MONGODB_URL: str = "mongodb://localhost:27017"
MONGODB_DATABASE: str = "freet"
MONGODB_CONNECTION_TIMEOUT: int = 10000  # ms
MONGODB_SERVER_SELECTION_TIMEOUT: int = 5000  # ms
MONGODB_USERNAME: Optional[str] = None
MONGODB_PASSWORD: Optional[SecretStr] = None
```

### Collections
The relationship collections keep the names used by the existing Freet data set
(`followers`, `grouptaggings`, `contactinformationdisplays`), alongside the
read-only `users` and `freets` collections owned by other services.

### Sessions
`SESSION_SECRET_KEY` signs the session cookie and `SESSION_USERNAME_KEY` names
the session entry holding the logged-in username.

### Client
`API_BASE_URL` is the server the client store talks to; `ALERT_TTL_SECONDS`
controls how long a transient alert stays visible.

## Usage

```python
from freet_social.config import settings

mongodb_url = settings.MONGODB_URL
session_secret = settings.SESSION_SECRET_KEY.get_secret_value()
```
"""

import os
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Constants ---
FREET_FILENAME: str = ".freet"
DEFAULT_ENV_FILENAME: str = ".env"
CONFIG_ENV_VAR: str = "FREET_SOCIAL_CONFIG_PATH"
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent


# --- Config file discovery (no logging) ---
def get_config_path() -> Optional[str]:
    """
    Determines the configuration file path based on a predefined precedence order.

    1.  **Environment Variable**: `FREET_SOCIAL_CONFIG_PATH` (if set and file exists).
    2.  **Freet Config**: `.freet` file in the project root directory.
    3.  **Dotenv Config**: `.env` file in the project root directory.
    4.  **Fallback**: `None`, which leaves the process in environment-only mode.

    Returns:
        Optional[str]: The absolute path to the configuration file, or `None` if not found.
    """
    env_path: Optional[str] = os.environ.get(CONFIG_ENV_VAR)
    if env_path and os.path.exists(env_path):
        return env_path
    freet_path: Path = PROJECT_ROOT / FREET_FILENAME
    if freet_path.exists():
        return str(freet_path)
    env_path_file: Path = PROJECT_ROOT / DEFAULT_ENV_FILENAME
    if env_path_file.exists():
        return str(env_path_file)
    return None


CONFIG_PATH: Optional[str] = get_config_path()
if CONFIG_PATH:
    load_dotenv(dotenv_path=CONFIG_PATH, override=False)


class Settings(BaseSettings):
    """
    Application configuration settings model.

    **Configuration Groups:**
    *   **Server**: Host, port, debug mode.
    *   **Database**: MongoDB connection details and collection names.
    *   **Sessions**: Cookie signing secret and session key for the logged-in user.
    *   **CORS**: Allowed browser origins.
    *   **Logging**: Default log level.
    *   **Client**: API base URL and alert timing for the client state store.
    """

    model_config = SettingsConfigDict(
        env_file=CONFIG_PATH if CONFIG_PATH else None,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Server configuration
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    DEBUG: bool = True

    # MongoDB configuration
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "freet"
    MONGODB_CONNECTION_TIMEOUT: int = 10000
    MONGODB_SERVER_SELECTION_TIMEOUT: int = 5000
    MONGODB_MAX_POOL_SIZE: int = 50
    MONGODB_MIN_POOL_SIZE: int = 5

    # Authentication (optional)
    MONGODB_USERNAME: Optional[str] = None
    MONGODB_PASSWORD: Optional[SecretStr] = None

    # Collections
    FOLLOWERS_COLLECTION: str = "followers"
    GROUP_TAGGING_COLLECTION: str = "grouptaggings"
    CONTACT_INFORMATION_COLLECTION: str = "contactinformationdisplays"
    USERS_COLLECTION: str = "users"
    FREETS_COLLECTION: str = "freets"

    # Session configuration
    SESSION_SECRET_KEY: SecretStr = SecretStr("freet-development-session-key")
    SESSION_USERNAME_KEY: str = "username"
    SESSION_COOKIE_NAME: str = "freet_session"

    # CORS configuration
    CORS_ENABLED: bool = True
    CORS_ORIGINS: str = "http://localhost:8080,http://localhost:3000"

    # Logging configuration
    DEFAULT_LOG_LEVEL: str = "INFO"

    # Client store configuration
    API_BASE_URL: str = "http://localhost:8000"
    API_TIMEOUT_SECONDS: float = 10.0
    ALERT_TTL_SECONDS: float = 3.0
    ALERT_SWEEP_INTERVAL_SECONDS: float = 0.5

    @field_validator("MONGODB_URL", mode="before")
    @classmethod
    def no_empty_urls(cls, v: Any, info: Any) -> Any:
        """
        Validates that the MongoDB URL is not empty.

        Raises:
            ValueError: If the URL is empty or whitespace.
        """
        if not v or not str(v).strip():
            raise ValueError(f"{info.field_name} must be set via environment or .freet and not empty!")
        return v

    @field_validator("ALERT_TTL_SECONDS", "ALERT_SWEEP_INTERVAL_SECONDS", "API_TIMEOUT_SECONDS", mode="before")
    @classmethod
    def validate_positive_durations(cls, v: Any, info: Any) -> float:
        """Durations must be strictly positive."""
        value = float(v)
        if value <= 0:
            raise ValueError(f"{info.field_name} must be a positive number of seconds")
        return value

    @property
    def is_production(self) -> bool:
        """`True` when running with `DEBUG=False`."""
        return not self.DEBUG

    @property
    def cors_origins_list(self) -> List[str]:
        """Comma-separated `CORS_ORIGINS` as a list, blanks dropped."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings: Settings = Settings()
