"""
Runtime configuration read from the environment (and an optional .env file).
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_OLLAMA_HOST = "http://127.0.0.1:11434"
DEFAULT_MODEL = "tinyllama"


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Settings(BaseModel):
    """Settings consumed by the gateway, orchestrator and API server."""
    ollama_host: str = DEFAULT_OLLAMA_HOST
    model: str = DEFAULT_MODEL
    request_timeout: float = 120.0
    probe_timeout: float = 5.0
    port: int = 5001

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env_file: Optional .env path (defaults to python-dotenv's lookup).

        Returns:
            Settings instance.
        """
        load_dotenv(env_file)

        return cls(
            ollama_host=os.getenv("OLLAMA_HOST", DEFAULT_OLLAMA_HOST).rstrip("/"),
            model=os.getenv("PROMPTPAGE_MODEL", DEFAULT_MODEL),
            request_timeout=_env_float("PROMPTPAGE_REQUEST_TIMEOUT", 120.0),
            probe_timeout=_env_float("PROMPTPAGE_PROBE_TIMEOUT", 5.0),
            port=_env_int("PROMPTPAGE_PORT", 5001),
        )
