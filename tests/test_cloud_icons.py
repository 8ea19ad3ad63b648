"""Tests for cloud code icon lookup."""

from __future__ import annotations

import pytest

from weather_widget.weather.icons import CLOUD_ICONS, cloud_icon_url


@pytest.mark.parametrize("code", sorted(CLOUD_ICONS))
def test_known_codes_map_to_their_icon(code: str) -> None:
    assert cloud_icon_url(code) == CLOUD_ICONS[code]


@pytest.mark.parametrize("code", ["", "XYZ", "cavok", " CAVOK", None])
def test_unknown_codes_fall_back_to_na_icon(code: str | None) -> None:
    assert cloud_icon_url(code) == CLOUD_ICONS["n/a"]


def test_table_covers_expected_codes() -> None:
    assert set(CLOUD_ICONS) == {
        "n/a", "SKC", "CLR", "FEW", "SCT", "BKN", "OVC", "CAVOK", "NCD", "NSC", "VV",
    }
