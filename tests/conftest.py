"""Shared fixtures for the JusticeAlly test suite."""

from __future__ import annotations

from datetime import date

import pytest
from sample_values import COMPLETE_VALUES, TODAY


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def police_values() -> dict[str, str]:
    return dict(COMPLETE_VALUES["police-complaint"])
