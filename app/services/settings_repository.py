"""
Repository layer for system settings and the stockholding policy.
Settings are stored one row per key with string values.
"""

import logging
import math
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.models.system_setting import SystemSetting
from app.schemas.settings import StockholdingConfig

logger = logging.getLogger(__name__)

DEFAULT_WEEKS_KEY = "default_stockholding_weeks"
MIN_WEEKS_KEY = "min_stockholding_weeks"
MAX_WEEKS_KEY = "max_stockholding_weeks"

# key -> (fallback value, description)
STOCKHOLDING_SETTINGS = {
    DEFAULT_WEEKS_KEY: ("8", "Default stockholding weeks applied to imported products"),
    MIN_WEEKS_KEY: ("1", "Minimum allowed stockholding weeks"),
    MAX_WEEKS_KEY: ("52", "Maximum allowed stockholding weeks"),
}


def format_weeks(value: float) -> str:
    """Render weeks without a trailing .0 (8.0 -> '8', 2.5 -> '2.5')."""
    return f"{value:g}"


class SettingsRepository:
    """Repository for key/value settings"""

    @staticmethod
    def get_all(db: Session) -> List[SystemSetting]:
        """Get all settings ordered by key"""
        return db.query(SystemSetting).order_by(SystemSetting.setting_key.asc()).all()

    @staticmethod
    def get_by_key(db: Session, key: str) -> Optional[SystemSetting]:
        """Get a setting by key"""
        return db.query(SystemSetting).filter(SystemSetting.setting_key == key).first()

    @staticmethod
    def get_value(db: Session, key: str, default_value: str) -> str:
        """Get a setting value, falling back when the key is absent or blank"""
        setting = SettingsRepository.get_by_key(db, key)
        if setting is None or not setting.setting_value:
            return default_value
        return setting.setting_value

    @staticmethod
    def upsert(db: Session, key: str, value: str, description: str, commit: bool = True) -> SystemSetting:
        """Insert or update a setting keyed by setting_key"""
        db_setting = SettingsRepository.get_by_key(db, key)
        if db_setting is None:
            db_setting = SystemSetting(setting_key=key, setting_value=value, description=description)
            db.add(db_setting)
        else:
            db_setting.setting_value = value
            db_setting.description = description
        db_setting.updated_at = datetime.now(timezone.utc)

        if commit:
            db.commit()
            db.refresh(db_setting)
        return db_setting


class StockholdingPolicyRepository:
    """Loads and saves the stockholding weeks policy"""

    @staticmethod
    def get_config(db: Session) -> StockholdingConfig:
        """Read the three policy values, using 8 / 1 / 52 for missing keys"""
        values = {}
        for key, (fallback, _) in STOCKHOLDING_SETTINGS.items():
            raw = SettingsRepository.get_value(db, key, fallback)
            try:
                value = float(raw)
            except ValueError:
                value = math.nan
            if not math.isfinite(value):
                logger.warning(f"Setting {key} has non-numeric value '{raw}', using {fallback}")
                value = float(fallback)
            values[key] = value

        return StockholdingConfig(
            default_weeks=values[DEFAULT_WEEKS_KEY],
            min_weeks=values[MIN_WEEKS_KEY],
            max_weeks=values[MAX_WEEKS_KEY],
        )

    @staticmethod
    def update_config(db: Session, config: StockholdingConfig) -> StockholdingConfig:
        """
        Validate and persist the policy.

        All three keys are written in one commit, and only after the bounds
        check passes; a rejected policy leaves the stored values untouched.

        Raises:
            HTTPException: 400 naming the violated bound.
        """
        message = validate_stockholding_config(config)
        if message:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)

        new_values = {
            DEFAULT_WEEKS_KEY: config.default_weeks,
            MIN_WEEKS_KEY: config.min_weeks,
            MAX_WEEKS_KEY: config.max_weeks,
        }
        try:
            for key, value in new_values.items():
                SettingsRepository.upsert(db, key, format_weeks(value), STOCKHOLDING_SETTINGS[key][1], commit=False)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"Stockholding policy updated: default={format_weeks(config.default_weeks)}, "
            f"min={format_weeks(config.min_weeks)}, max={format_weeks(config.max_weeks)}"
        )
        return StockholdingPolicyRepository.get_config(db)


# ============================================================================
# Policy rules
# ============================================================================

def validate_stockholding_config(config: StockholdingConfig) -> Optional[str]:
    """Return a message for the first violated bound, or None when valid"""
    if not all(math.isfinite(v) for v in (config.default_weeks, config.min_weeks, config.max_weeks)):
        return "Stockholding weeks must be finite numbers"
    if config.min_weeks <= 0:
        return "Minimum stockholding weeks must be greater than 0"
    if config.min_weeks >= config.default_weeks:
        return "Minimum stockholding weeks must be less than default stockholding weeks"
    if config.default_weeks >= config.max_weeks:
        return "Default stockholding weeks must be less than maximum stockholding weeks"
    return None


def check_stockholding_weeks(weeks: float, config: StockholdingConfig) -> Optional[str]:
    """Return a message when a product's weeks fall outside [min, max]"""
    if not math.isfinite(weeks):
        return "Stockholding weeks must be a finite number"
    if weeks < config.min_weeks:
        return f"Stockholding weeks must be at least {format_weeks(config.min_weeks)}"
    if weeks > config.max_weeks:
        return f"Stockholding weeks cannot exceed {format_weeks(config.max_weeks)}"
    return None


def stockholding_note(weeks: float, config: StockholdingConfig) -> Optional[str]:
    """Classify a product's weeks against the policy: default, low, high or None"""
    if weeks == config.default_weeks:
        return "default"
    if weeks < config.min_weeks * 1.5:
        return "low"
    if weeks > config.max_weeks * 0.75:
        return "high"
    return None
