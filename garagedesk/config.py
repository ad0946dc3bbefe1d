"""
Centralized configuration with environment variable overrides.

Slot catalog defaults, booking limits and verification rules are
configurable here. Nothing is hardcoded in engine or store logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("keep", "dedupe")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_int_tuple(env_var: str, default: str) -> tuple[int, ...]:
    """Parse a comma-separated list of integers, e.g. ``"0,6"``."""
    raw = os.getenv(env_var, default)
    try:
        return tuple(int(part) for part in raw.split(",") if part.strip())
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer list for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class SlotConfig:
    """Weekly slot catalog settings."""

    duplicate_policy: str = os.getenv("SLOT_DUPLICATE_POLICY", "keep").lower()
    opening_hour: int = _safe_int("OPENING_HOUR", "9")
    closing_hour: int = _safe_int("CLOSING_HOUR", "18")
    slot_minutes: int = _safe_int("SLOT_MINUTES", "60")
    # Sunday=0
    closed_days: tuple[int, ...] = _safe_int_tuple("CLOSED_DAYS", "0")


@dataclass(frozen=True)
class BookingConfig:
    """Booking creation limits."""

    currency: str = os.getenv("BOOKING_CURRENCY", "INR")
    max_services_per_booking: int = _safe_int("MAX_SERVICES_PER_BOOKING", "10")
    min_name_length: int = _safe_int("MIN_CUSTOMER_NAME_LENGTH", "2")


@dataclass(frozen=True)
class VerificationConfig:
    """Document and bank verification rules."""

    ifsc_pattern: str = os.getenv("IFSC_PATTERN", r"^[A-Z]{4}0[A-Z0-9]{6}$")
    min_account_digits: int = _safe_int("MIN_ACCOUNT_DIGITS", "6")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    slots: SlotConfig = field(default_factory=SlotConfig)
    booking: BookingConfig = field(default_factory=BookingConfig)
    verification: VerificationConfig = field(default_factory=VerificationConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "garagedesk")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.slots.duplicate_policy not in DUPLICATE_POLICIES:
        raise ValueError(
            f"SLOT_DUPLICATE_POLICY must be one of {DUPLICATE_POLICIES}, "
            f"got {config.slots.duplicate_policy!r}"
        )
    if not 0 <= config.slots.opening_hour < config.slots.closing_hour <= 24:
        raise ValueError(
            "OPENING_HOUR and CLOSING_HOUR must satisfy 0 <= open < close <= 24, "
            f"got {config.slots.opening_hour} and {config.slots.closing_hour}"
        )
    if not 0 < config.slots.slot_minutes <= 24 * 60:
        raise ValueError(
            f"SLOT_MINUTES must be between 1 and 1440, got {config.slots.slot_minutes}"
        )
    for day in config.slots.closed_days:
        if not 0 <= day <= 6:
            raise ValueError(f"CLOSED_DAYS entries must be 0-6, got {day}")

    if config.booking.max_services_per_booking < 1:
        raise ValueError(
            "MAX_SERVICES_PER_BOOKING must be >= 1, "
            f"got {config.booking.max_services_per_booking}"
        )
    if config.booking.min_name_length < 1:
        raise ValueError(
            f"MIN_CUSTOMER_NAME_LENGTH must be >= 1, got {config.booking.min_name_length}"
        )
    if config.verification.min_account_digits < 1:
        raise ValueError(
            f"MIN_ACCOUNT_DIGITS must be >= 1, got {config.verification.min_account_digits}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
