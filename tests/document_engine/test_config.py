"""Tests for environment-driven engine settings."""

from __future__ import annotations

from document_engine.config import EngineSettings, LawyerProfile
from document_engine.gender import Sex
from tools.llm_client import DEFAULT_MODEL


class TestEngineSettings:
    def test_defaults_without_environment(self) -> None:
        settings = EngineSettings.from_env({})

        assert settings == EngineSettings()
        assert settings.lawyer == LawyerProfile()
        assert settings.income_disparity_threshold == 2.0
        assert settings.default_sex is Sex.FEMALE

    def test_reads_overrides(self) -> None:
        settings = EngineSettings.from_env(
            {
                "CLAIMS_COURT_CITY": "בחיפה",
                "CLAIMS_LAWYER_NAME": "עו\"ד בדיקה",
                "CLAIMS_LAWYER_LICENSE": "12345",
                "CLAIMS_INCOME_DISPARITY_THRESHOLD": "3",
                "CLAIMS_DEFAULT_SEX": "male",
                "CLAIMS_LLM_TIMEOUT_SECONDS": "5.5",
            }
        )

        assert settings.court_city == "בחיפה"
        assert settings.lawyer.name == "עו\"ד בדיקה"
        assert settings.lawyer.license_number == "12345"
        assert settings.lawyer.phone == LawyerProfile().phone
        assert settings.income_disparity_threshold == 3.0
        assert settings.default_sex is Sex.MALE
        assert settings.llm_timeout_seconds == 5.5

    def test_malformed_numbers_keep_defaults(self) -> None:
        settings = EngineSettings.from_env(
            {"CLAIMS_INCOME_DISPARITY_THRESHOLD": "twice", "CLAIMS_LLM_TIMEOUT_SECONDS": " "}
        )

        assert settings.income_disparity_threshold == 2.0
        assert settings.llm_timeout_seconds == 30.0

    def test_unknown_default_sex_is_ignored(self) -> None:
        assert EngineSettings.from_env({"CLAIMS_DEFAULT_SEX": "x"}).default_sex is Sex.FEMALE

    def test_model_default_matches_llm_client(self) -> None:
        assert EngineSettings().llm_model == DEFAULT_MODEL
        assert EngineSettings.from_env({"CLAIMS_LLM_MODEL": "claude-test"}).llm_model == "claude-test"
