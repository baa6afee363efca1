from __future__ import annotations

import pytest

from helpers import build_policy


@pytest.fixture(scope="session")
def policy():
    return build_policy()
