"""
Runtime Settings

Secrets and endpoints come from the environment (optionally a .env file).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_RIBBON_BASE_URL = "http://localhost:9088"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    """Environment-derived settings for one importer process."""
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    ribbon_base_url: str = DEFAULT_RIBBON_BASE_URL
    shopify_store_url: str = ""
    shopify_access_token: str = ""

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env_file: Optional .env path; defaults to the working directory's .env

        Returns:
            Settings instance
        """
        load_dotenv(env_file)
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            ribbon_base_url=(os.getenv("RIBBON_BASE_URL") or DEFAULT_RIBBON_BASE_URL).rstrip("/"),
            shopify_store_url=os.getenv("SHOPIFY_STORE_URL", ""),
            shopify_access_token=os.getenv("SHOPIFY_ACCESS_TOKEN", ""),
        )
