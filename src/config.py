"""
Centralized configuration with environment variable overrides.

Room rates, the discount window, chat limits and API endpoints are all
configurable here. Nothing is hardcoded in pricing, chat or form logic.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import date

from dotenv import load_dotenv

from src.logging_context import LOG_FORMAT, install_session_filter

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_date(env_var: str, default: str) -> date:
    """Parse a YYYY-MM-DD date from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return date.fromisoformat(raw.strip())
    except (ValueError, TypeError, AttributeError):
        raise ValueError(
            f"Invalid date for {env_var}: {raw!r} (expected YYYY-MM-DD)"
        ) from None


def _csv(env_var: str, default: str) -> tuple[str, ...]:
    """Split a comma-separated env var into a tuple of non-empty items."""
    raw = os.getenv(env_var, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class BrandConfig:
    """Landing-specific branding and contact settings."""

    name: str = os.getenv("BRAND_NAME", "Санаторий Васильевский")
    lead_email: str = os.getenv("LEAD_EMAIL", "mail@turist-rf.ru")
    whatsapp_phone: str = os.getenv("WHATSAPP_PHONE", "78432532030")


@dataclass(frozen=True)
class PricingConfig:
    """Per-person-per-night rates, discount window and prepayment share."""

    rate_standard: int = _safe_int("ROOM_RATE_STANDARD", "4200")
    rate_comfort: int = _safe_int("ROOM_RATE_COMFORT", "5600")
    rate_lux: int = _safe_int("ROOM_RATE_LUX", "7900")
    discount_percent: int = _safe_int("DISCOUNT_PERCENT", "10")
    discount_valid_until: date = _safe_date("DISCOUNT_VALID_UNTIL", "2026-05-31")
    prepay_percent: int = _safe_int("PREPAY_PERCENT", "30")

    def room_rates(self) -> dict[str, int]:
        return {
            "standard": self.rate_standard,
            "comfort": self.rate_comfort,
            "lux": self.rate_lux,
        }


@dataclass(frozen=True)
class ChatConfig:
    """Chat widget limits and the lead-trigger vocabulary."""

    history_limit: int = _safe_int("CHAT_HISTORY_LIMIT", "24")
    lead_trigger_words: tuple[str, ...] = _csv(
        "LEAD_TRIGGER_WORDS", "телефон,контакт,перезвон"
    )


@dataclass(frozen=True)
class ApiConfig:
    """Backend endpoint roots, selected by the page host name."""

    local_base: str = os.getenv("API_BASE_LOCAL", "http://localhost:8080")
    production_base: str = os.getenv("API_BASE_PRODUCTION", "https://api.turist-rf.ru")
    local_hosts: tuple[str, ...] = _csv("API_LOCAL_HOSTS", "localhost,127.0.0.1")
    lead_path: str = "/api/lead"
    chat_path: str = "/api/chat"


@dataclass(frozen=True)
class StorageConfig:
    """Where the browser-profile-like local state is persisted."""

    state_path: str = os.getenv("LANDING_STATE_PATH", ".landing_state.json")
    session_key: str = "ai_chat_session"
    consent_key: str = "vasilevo_cookie_consent"


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    brand: BrandConfig = field(default_factory=BrandConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    for rate_name, rate_value in config.pricing.room_rates().items():
        if rate_value < 0:
            raise ValueError(
                f"ROOM_RATE_{rate_name.upper()} must be >= 0, got {rate_value}"
            )
    if not 0 <= config.pricing.discount_percent <= 100:
        raise ValueError(
            f"DISCOUNT_PERCENT must be between 0 and 100, got {config.pricing.discount_percent}"
        )
    if not 0 <= config.pricing.prepay_percent <= 100:
        raise ValueError(
            f"PREPAY_PERCENT must be between 0 and 100, got {config.pricing.prepay_percent}"
        )
    if config.chat.history_limit < 2 or config.chat.history_limit % 2:
        raise ValueError(
            "CHAT_HISTORY_LIMIT must be an even number >= 2, "
            f"got {config.chat.history_limit}"
        )
    if not config.chat.lead_trigger_words:
        raise ValueError("LEAD_TRIGGER_WORDS must contain at least one word")
    for base_name, base_value in [
        ("API_BASE_LOCAL", config.api.local_base),
        ("API_BASE_PRODUCTION", config.api.production_base),
    ]:
        if not base_value.startswith(("http://", "https://")):
            raise ValueError(f"{base_name} must be an http(s) URL, got {base_value!r}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    install_session_filter()
    logger.info("Configuration loaded for '%s'", config.brand.name)
    return config


# Singleton instance
settings = load_config()
