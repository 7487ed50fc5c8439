"""Pytest configuration for lingguibafa."""

from __future__ import annotations

import pytest

from lingguibafa.runtime_config import runtime_settings


@pytest.fixture(autouse=True)
def _pin_default_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of a developer's LINGGUI_TIMEZONE."""

    monkeypatch.setattr(runtime_settings, "timezone", "Asia/Shanghai")
