from __future__ import annotations

from datetime import date, datetime

import pytest

# 2025-03-09 is a Sunday and 2025-03-07 a Friday; both fall in stored week 10 of 2025.
SUNDAY_2025_W10 = date(2025, 3, 9)
FRIDAY_2025_W10 = date(2025, 3, 7)


@pytest.fixture
def sunday() -> date:
    return SUNDAY_2025_W10


@pytest.fixture
def friday() -> date:
    return FRIDAY_2025_W10


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 9, 18, 30, 0)
