from __future__ import annotations

from io import BytesIO

import pytest

from .helpers import FailingSink


@pytest.fixture(name="sink")
def _sink() -> BytesIO:
    return BytesIO()


@pytest.fixture(name="failing_sink")
def _failing_sink() -> FailingSink:
    return FailingSink()
