"""Shared fixtures: a fixed clock and a project context."""

from __future__ import annotations

from datetime import date

import pytest

from homestead_voice.parsing.models import ProjectContext

# 2024-01-01 is a Monday.
MONDAY = date(2024, 1, 1)


@pytest.fixture
def monday_clock():
    return lambda: MONDAY


@pytest.fixture
def orchard() -> ProjectContext:
    return ProjectContext(id="p1", title="Orchard")
