"""
Settings for the SDKWA client library.

Simple, reliable environment variable configuration. Credentials are only
validated when a client is actually built from these settings.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


class Settings:
    """Library settings with environment-based configuration."""

    def __init__(self):
        # ================================================================
        # Version
        # ================================================================
        self.version: str = _get_version_from_pyproject()

        # ================================================================
        # API Configuration
        # ================================================================
        self.api_host: str = os.getenv("SDKWA_API_HOST", "https://api.sdkwa.pro")
        self.id_instance: str | None = os.getenv("SDKWA_ID_INSTANCE")
        self.api_token_instance: str | None = os.getenv("SDKWA_API_TOKEN_INSTANCE")
        self.messenger_type: str = os.getenv("SDKWA_MESSENGER_TYPE", "whatsapp")
        self.timeout: float = float(os.getenv("SDKWA_TIMEOUT", "30"))

        # User-level credentials (instance management only)
        self.user_id: str | None = os.getenv("SDKWA_USER_ID")
        self.user_token: str | None = os.getenv("SDKWA_USER_TOKEN")

        # ================================================================
        # Notification Delivery
        # ================================================================
        self.poll_interval: float = float(os.getenv("SDKWA_POLL_INTERVAL", "5"))
        self.ws_handshake_timeout: float = float(
            os.getenv("SDKWA_WS_HANDSHAKE_TIMEOUT", "10")
        )

        # ================================================================
        # Logging & Environment
        # ================================================================
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "DEV"  # Default fallback
        self.environment = self.environment.upper()

        if self.poll_interval <= 0:
            raise ValueError("SDKWA_POLL_INTERVAL must be positive")

    def validate_credentials(self):
        """Validate the instance credentials required to build a client."""
        if not self.id_instance:
            raise ValueError("SDKWA_ID_INSTANCE is required")
        if not self.api_token_instance:
            raise ValueError("SDKWA_API_TOKEN_INSTANCE is required")

    @property
    def has_user_credentials(self) -> bool:
        """Check if instance-management credentials are configured."""
        return bool(self.user_id and self.user_token)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "PROD"


# Global settings instance
settings = Settings()
