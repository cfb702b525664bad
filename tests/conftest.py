"""Shared fixtures."""

from __future__ import annotations

import pytest

from fakes import WATCH_PAGE, FakeResponse, player_response


@pytest.fixture
def catalog_responses() -> list[FakeResponse | Exception]:
    """Watch page and player response for a video with four caption tracks."""

    return [FakeResponse(text=WATCH_PAGE), FakeResponse(payload=player_response())]
