# tests/test_settings.py

import pytest
from pydantic import ValidationError

from datatips.settings import Settings
from datatips.text_preprocessing import CaseMode


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DATATIPS_BENCHMARK_REPETITIONS", "7")
    monkeypatch.setenv("DATATIPS_CASE_MODE", "lower")

    s = Settings()
    assert s.benchmark_repetitions == 7
    assert s.case_mode is CaseMode.LOWER
    assert s.delimiter == " "


def test_default_case_mode_is_unchanged(monkeypatch):
    monkeypatch.delenv("DATATIPS_CASE_MODE", raising=False)
    assert Settings().case_mode is CaseMode.UNCHANGED


def test_invalid_case_mode_rejected_at_load(monkeypatch):
    monkeypatch.setenv("DATATIPS_CASE_MODE", "sideways")
    with pytest.raises(ValidationError):
        Settings()
