"""
Tests for app/services/settings_repository.py

Covers: fallback values, parsing stored values, all-or-nothing policy
saves, per-product bounds checks and the stockholding advisory.
"""

import math

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.models.system_setting import SystemSetting
from app.schemas.settings import StockholdingConfig
from app.services.settings_repository import (
    SettingsRepository,
    StockholdingPolicyRepository,
    check_stockholding_weeks,
    stockholding_note,
    validate_stockholding_config,
)


def _stored_values(db_session) -> dict:
    return {s.setting_key: s.setting_value for s in db_session.query(SystemSetting).all()}


def _seed(db_session, default="8", minimum="1", maximum="52"):
    SettingsRepository.upsert(db_session, "default_stockholding_weeks", default, "")
    SettingsRepository.upsert(db_session, "min_stockholding_weeks", minimum, "")
    SettingsRepository.upsert(db_session, "max_stockholding_weeks", maximum, "")


# ═══════════════════════════════════════════════════════════════════════════
# Reading the policy
# ═══════════════════════════════════════════════════════════════════════════

class TestGetConfig:
    def test_defaults_when_store_is_empty(self, db_session):
        config = StockholdingPolicyRepository.get_config(db_session)
        assert (config.default_weeks, config.min_weeks, config.max_weeks) == (8, 1, 52)

    def test_reads_stored_values(self, db_session):
        _seed(db_session, default="6.5", minimum="2", maximum="26")
        config = StockholdingPolicyRepository.get_config(db_session)
        assert (config.default_weeks, config.min_weeks, config.max_weeks) == (6.5, 2, 26)

    def test_missing_key_falls_back_individually(self, db_session):
        SettingsRepository.upsert(db_session, "max_stockholding_weeks", "40", "")
        config = StockholdingPolicyRepository.get_config(db_session)
        assert (config.default_weeks, config.min_weeks, config.max_weeks) == (8, 1, 40)

    def test_blank_value_falls_back(self, db_session):
        SettingsRepository.upsert(db_session, "default_stockholding_weeks", "", "")
        assert StockholdingPolicyRepository.get_config(db_session).default_weeks == 8

    def test_non_numeric_value_falls_back(self, db_session):
        SettingsRepository.upsert(db_session, "min_stockholding_weeks", "one", "")
        assert StockholdingPolicyRepository.get_config(db_session).min_weeks == 1

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_non_finite_value_falls_back(self, db_session, raw):
        SettingsRepository.upsert(db_session, "max_stockholding_weeks", raw, "")
        assert StockholdingPolicyRepository.get_config(db_session).max_weeks == 52


# ═══════════════════════════════════════════════════════════════════════════
# Saving the policy
# ═══════════════════════════════════════════════════════════════════════════

class TestUpdateConfig:
    def test_valid_policy_writes_all_three_keys(self, db_session):
        config = StockholdingConfig(default_weeks=10, min_weeks=2, max_weeks=30)
        saved = StockholdingPolicyRepository.update_config(db_session, config)

        assert (saved.default_weeks, saved.min_weeks, saved.max_weeks) == (10, 2, 30)
        assert _stored_values(db_session) == {
            "default_stockholding_weeks": "10",
            "min_stockholding_weeks": "2",
            "max_stockholding_weeks": "30",
        }

    def test_overwrites_existing_rows(self, db_session):
        _seed(db_session)
        StockholdingPolicyRepository.update_config(
            db_session, StockholdingConfig(default_weeks=4.5, min_weeks=0.5, max_weeks=12)
        )
        assert db_session.query(SystemSetting).count() == 3
        assert _stored_values(db_session)["default_stockholding_weeks"] == "4.5"

    def test_min_not_below_default_is_rejected_without_writes(self, db_session):
        _seed(db_session, default="8", minimum="1", maximum="52")
        before = _stored_values(db_session)

        with pytest.raises(HTTPException) as exc_info:
            StockholdingPolicyRepository.update_config(
                db_session, StockholdingConfig(default_weeks=8, min_weeks=10, max_weeks=52)
            )

        assert exc_info.value.status_code == 400
        assert "Minimum" in exc_info.value.detail
        assert _stored_values(db_session) == before

    def test_rejected_on_empty_store_writes_nothing(self, db_session):
        with pytest.raises(HTTPException):
            StockholdingPolicyRepository.update_config(
                db_session, StockholdingConfig(default_weeks=60, min_weeks=1, max_weeks=52)
            )
        assert db_session.query(SystemSetting).count() == 0

    @pytest.mark.parametrize("field", ["default_weeks", "min_weeks", "max_weeks"])
    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_policy_is_rejected_without_writes(self, db_session, field, value):
        values = {"default_weeks": 8, "min_weeks": 1, "max_weeks": 52, field: value}
        config = StockholdingConfig.model_construct(**values)

        with pytest.raises(HTTPException) as exc_info:
            StockholdingPolicyRepository.update_config(db_session, config)

        assert exc_info.value.status_code == 400
        assert db_session.query(SystemSetting).count() == 0


class TestStockholdingConfigModel:
    @pytest.mark.parametrize("field", ["defaultWeeks", "minWeeks", "maxWeeks"])
    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_values_fail_validation(self, field, value):
        data = {"defaultWeeks": 8, "minWeeks": 1, "maxWeeks": 52, field: value}
        with pytest.raises(ValidationError):
            StockholdingConfig(**data)


class TestValidateConfig:
    @pytest.mark.parametrize("default, minimum, maximum, fragment", [
        (8, 0, 52, "greater than 0"),
        (8, -1, 52, "greater than 0"),
        (8, 8, 52, "Minimum stockholding weeks must be less than default"),
        (8, 10, 52, "Minimum stockholding weeks must be less than default"),
        (52, 1, 52, "Default stockholding weeks must be less than maximum"),
        (60, 1, 52, "Default stockholding weeks must be less than maximum"),
    ])
    def test_violations_name_the_bound(self, default, minimum, maximum, fragment):
        config = StockholdingConfig(default_weeks=default, min_weeks=minimum, max_weeks=maximum)
        assert fragment in validate_stockholding_config(config)

    def test_valid(self):
        assert validate_stockholding_config(StockholdingConfig()) is None

    @pytest.mark.parametrize("default, minimum, maximum", [
        (math.nan, 1, 52),
        (8, math.nan, 52),
        (8, 1, math.nan),
        (8, 1, math.inf),
        (8, -math.inf, 52),
    ])
    def test_non_finite_bounds(self, default, minimum, maximum):
        config = StockholdingConfig.model_construct(
            default_weeks=default, min_weeks=minimum, max_weeks=maximum
        )
        assert validate_stockholding_config(config) == "Stockholding weeks must be finite numbers"


# ═══════════════════════════════════════════════════════════════════════════
# Per-product rules
# ═══════════════════════════════════════════════════════════════════════════

class TestProductWeeks:
    CONFIG = StockholdingConfig(default_weeks=8, min_weeks=2, max_weeks=40)

    def test_within_bounds(self):
        assert check_stockholding_weeks(2, self.CONFIG) is None
        assert check_stockholding_weeks(40, self.CONFIG) is None

    def test_below_minimum(self):
        assert check_stockholding_weeks(1.5, self.CONFIG) == "Stockholding weeks must be at least 2"

    def test_above_maximum(self):
        assert check_stockholding_weeks(41, self.CONFIG) == "Stockholding weeks cannot exceed 40"

    @pytest.mark.parametrize("weeks", [math.nan, math.inf, -math.inf])
    def test_non_finite(self, weeks):
        assert check_stockholding_weeks(weeks, self.CONFIG) == "Stockholding weeks must be a finite number"

    @pytest.mark.parametrize("weeks, expected", [
        (8, "default"),
        (2.5, "low"),
        (31, "high"),
        (12, None),
    ])
    def test_note(self, weeks, expected):
        assert stockholding_note(weeks, self.CONFIG) == expected
