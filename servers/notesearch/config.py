"""Configuration for the note search service."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class SearchConfig:
    """Search defaults read from environment variables."""

    def __init__(self) -> None:
        """Initialize search configuration from environment variables."""
        self.notes_directory = Path(os.getenv("NOTES_DIRECTORY", ".")).expanduser()
        self.search_backend = os.getenv("SEARCH_BACKEND", "ripgrep").lower()
        self.ripgrep_path = os.getenv("RIPGREP_PATH", "rg")
        self.file_glob = os.getenv("SEARCH_FILE_GLOB", "")

        # Defaults offered to callers that don't pass their own values
        self.default_context_lines = self._get_int_env("SEARCH_CONTEXT_LINES", 3)
        self.max_results_per_term = self._get_int_env("SEARCH_MAX_RESULTS_PER_TERM", 10)
        self.max_terms = self._get_int_env("SEARCH_MAX_TERMS", 5)

        timeout = self._get_int_env("SEARCH_TIMEOUT_SECONDS", 30)
        self.timeout: Optional[int] = timeout or None

    @staticmethod
    def _get_int_env(key: str, default: int) -> int:
        """Get a non-negative integer environment variable or raise descriptive error."""
        raw = os.getenv(key)
        if raw is None or raw.strip() == "":
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"Environment variable {key} must be an integer, got {raw!r}")
        if value < 0:
            raise ValueError(f"Environment variable {key} must not be negative, got {value}")
        return value

    def get_client_kwargs(self) -> dict:
        """Get keyword arguments for the search client factory."""
        return {
            "executable": self.ripgrep_path,
            "file_glob": self.file_glob,
            "timeout": self.timeout,
        }
