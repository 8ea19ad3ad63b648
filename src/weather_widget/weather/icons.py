"""Cloud-cover code to icon URL lookup."""

from __future__ import annotations

FALLBACK_CLOUD_CODE = "n/a"

# Placeholder artwork except CAVOK; swap in hosted icons per deployment.
CLOUD_ICONS: dict[str, str] = {
    FALLBACK_CLOUD_CODE: "https://example.com/icons/na.png",
    "SKC": "https://example.com/icons/clear_sky.png",
    "CLR": "https://example.com/icons/clear_sky.png",
    "FEW": "https://example.com/icons/few_clouds.png",
    "SCT": "https://example.com/icons/scattered_clouds.png",
    "BKN": "https://example.com/icons/broken_clouds.png",
    "OVC": "https://example.com/icons/overcast.png",
    "CAVOK": "https://cdn-icons-png.freepik.com/512/1163/1163661.png",
    "NCD": "https://example.com/icons/no_clouds_detected.png",
    "NSC": "https://example.com/icons/nil_significant_cloud.png",
    "VV": "https://example.com/icons/vertical_visibility.png",
}


def cloud_icon_url(code: str | None) -> str:
    """Return the icon for a cloud code, or the `n/a` icon for unknown codes."""
    if code is None:
        return CLOUD_ICONS[FALLBACK_CLOUD_CODE]
    return CLOUD_ICONS.get(code, CLOUD_ICONS[FALLBACK_CLOUD_CODE])
