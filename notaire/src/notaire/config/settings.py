"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, test.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Secrets (Twilio token, JWT key) should come from environment
    variables, not from YAML files. Every optional backend is disabled
    when its URL or credentials are left empty.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Notaire"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8080, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./notaire.db",
        description="Database connection URL",
    )
    DATABASE_ECHO: bool = Field(default=False)
    DATABASE_CREATE_SCHEMA: bool = Field(
        default=True,
        description="Create missing tables on startup",
    )

    # Media storage
    STORAGE_PATH: str = Field(
        default="./nft_storage",
        description="Directory holding raw asset media",
    )

    # Content storage (IPFS)
    IPFS_ENABLED: bool = Field(default=False)
    IPFS_API_URL: str = Field(default="http://127.0.0.1:5001")
    IPFS_GATEWAY_URL: str = Field(default="https://ipfs.io")
    IPFS_TIMEOUT: float = Field(
        default=15.0,
        gt=0,
        description="IPFS upload timeout in seconds",
    )

    # Chain (EVM JSON-RPC)
    CHAIN_RPC_URL: Optional[str] = Field(default=None)
    NFT_CONTRACT_ADDRESS: Optional[str] = Field(default=None)
    CHAIN_OPERATOR_ADDRESS: Optional[str] = Field(
        default=None,
        description="Unlocked node account sending mint/transfer transactions",
    )
    CHAIN_IDENTITY_FALLBACK_TO_OPERATOR: bool = Field(
        default=False,
        description="Resolve unregistered users to the operator address",
    )
    CHAIN_GAS_LIMIT: int = Field(default=500_000, gt=0)
    CHAIN_RPC_TIMEOUT: float = Field(
        default=15.0,
        gt=0,
        description="Single JSON-RPC request timeout in seconds",
    )
    CHAIN_RECEIPT_TIMEOUT: float = Field(
        default=60.0,
        gt=0,
        description="Maximum wait for a transaction receipt in seconds",
    )
    CHAIN_RECEIPT_POLL_INTERVAL: float = Field(default=1.0, gt=0)

    # SMS (Twilio)
    TWILIO_ACCOUNT_SID: Optional[str] = Field(default=None)
    TWILIO_AUTH_TOKEN: Optional[str] = Field(default=None)
    TWILIO_FROM_NUMBER: Optional[str] = Field(default=None)
    TWILIO_API_URL: str = Field(default="https://api.twilio.com")
    TWILIO_TIMEOUT: float = Field(
        default=15.0,
        gt=0,
        description="SMS gateway timeout in seconds",
    )
    DEFAULT_COUNTRY_CODE: str = Field(default="+91")

    # OTP
    OTP_LENGTH: int = Field(default=6, ge=4, le=10)
    OTP_TTL_SECONDS: Optional[int] = Field(
        default=None,
        gt=0,
        description="Code validity window; None keeps codes until used",
    )
    OTP_LOG_CODE_ON_FAILURE: bool = Field(
        default=True,
        description="Log the code when SMS delivery fails",
    )

    # JWT Authentication
    JWT_SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="JWT secret key",
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRATION_HOURS: int = Field(default=24, ge=1)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=False)

    # Resilience - Circuit Breaker
    CB_FAILURE_THRESHOLD: int = Field(
        default=5,
        description="Circuit breaker failure threshold",
    )
    CB_SUCCESS_THRESHOLD: int = Field(
        default=2,
        description="Circuit breaker success threshold for half-open",
    )
    CB_TIMEOUT_SECONDS: float = Field(
        default=60.0,
        description="Circuit breaker open state timeout",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("DEFAULT_COUNTRY_CODE")
    @classmethod
    def validate_country_code(cls, v: str) -> str:
        """Validate default country calling code."""
        if not v.startswith("+") or not v[1:].isdigit():
            raise ValueError("DEFAULT_COUNTRY_CODE must look like +91")
        return v

    @property
    def chain_enabled(self) -> bool:
        """Check if every chain setting needed to transact is present."""
        return bool(
            self.CHAIN_RPC_URL
            and self.NFT_CONTRACT_ADDRESS
            and self.CHAIN_OPERATOR_ADDRESS
        )

    @property
    def twilio_enabled(self) -> bool:
        """Check if Twilio credentials are present."""
        return bool(
            self.TWILIO_ACCOUNT_SID
            and self.TWILIO_AUTH_TOKEN
            and self.TWILIO_FROM_NUMBER
        )


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If a value fails validation
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "development")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    if env_file is None:
        default_env_file, default_config_file = env_map.get(
            environment, (".env.development", "development.yaml")
        )
        env_file = default_env_file
        if config_file is None:
            config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # Init kwargs beat env vars in pydantic-settings, so drop YAML keys
    # the environment already sets.
    merged_config = {
        key: value for key, value in merged_config.items() if key not in os.environ
    }

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
