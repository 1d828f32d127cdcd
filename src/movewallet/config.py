"""
Configuration management for the Movement wallet client.

Supports configuration via environment variables and .env files.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_FAUCET_AMOUNT = 1_000_000_000  # 10 MOVE in octas


class WalletConfig(BaseSettings):
    """
    Configuration settings for the wallet client.
    
    All settings can be configured via environment variables with the MOVEWALLET_ prefix.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="MOVEWALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
    
    # Backend settings
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Root URL of the transaction backend"
    )
    chain_type: str = Field(
        default="aptos",
        description="Chain identifier passed to the signing capability"
    )
    
    # Per-stage timeouts
    hash_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for the generate-hash call"
    )
    signing_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Timeout for the signer (None waits for the user indefinitely)"
    )
    submit_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for the submit-transaction call"
    )
    read_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for balance, account-info and faucet calls"
    )
    
    # Faucet settings
    default_faucet_amount: int = Field(
        default=DEFAULT_FAUCET_AMOUNT,
        ge=1,
        description="Amount requested from the faucet when none is given"
    )
    
    # Hash binding check
    verify_hash_binding: bool = Field(
        default=False,
        description="Check that the backend hash is the signing message of rawTxnHex"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )
    
    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value.rstrip("/")
