import os
import logging
from dataclasses import dataclass
from pathlib import Path
from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_ID = "kafka-topics"
DEFAULT_REQUEST_TIMEOUT_MS = 30000
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    client_id: str = DEFAULT_CLIENT_ID
    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL

    def client_defaults(self):
        """Admin client options applied underneath anything given on the command line."""
        return {
            "client_id": self.client_id,
            "request_timeout_ms": self.request_timeout_ms,
        }


def load_environment(project_root=None):
    """
    Load .env files from the project root into the process environment.

    Variables already set in the environment are never overridden by .env;
    .env.<ENV> and .env.local override values that came from .env itself.

    Returns:
        list: Paths of the files that were loaded
    """
    root = Path(project_root) if project_root else Path.cwd()
    loaded = []

    # -----------------------------------
    # Base .env
    # -----------------------------------
    protected = set(os.environ)
    dotenv_path = root / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path)
        loaded.append(dotenv_path)
        logger.debug(f"Loaded environment from: {dotenv_path}")

    # -----------------------------------
    # Environment-specific, then local overrides
    # -----------------------------------
    env_name = os.getenv("ENV", "development")
    for override_path in (root / f".env.{env_name}", root / ".env.local"):
        if not override_path.exists():
            continue
        _load_overrides(override_path, protected)
        loaded.append(override_path)
        logger.debug(f"Loaded overrides from: {override_path}")

    return loaded


def _load_overrides(path, protected):
    for key, value in dotenv_values(path).items():
        if key in protected or value is None:
            continue
        os.environ[key] = value


def get_settings():
    timeout = os.getenv("KAFKA_REQUEST_TIMEOUT_MS", str(DEFAULT_REQUEST_TIMEOUT_MS))
    try:
        request_timeout_ms = int(timeout)
    except ValueError:
        logger.warning(f"Ignoring non-integer KAFKA_REQUEST_TIMEOUT_MS: {timeout!r}")
        request_timeout_ms = DEFAULT_REQUEST_TIMEOUT_MS

    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning(f"Ignoring unknown LOG_LEVEL: {log_level!r}")
        log_level = DEFAULT_LOG_LEVEL

    return Settings(
        client_id=os.getenv("KAFKA_ADMIN_CLIENT_ID", DEFAULT_CLIENT_ID),
        request_timeout_ms=request_timeout_ms,
        log_level=log_level,
    )
