"""
Brand Service - Theme colours and attribution for generated reports.

Reads an optional brand.json (path from settings.brand_config_path) and
merges it over the built-in teal theme. Cached after first access.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from incubator.config import settings

logger = logging.getLogger(__name__)

# Default brand values (fallback if no brand.json is configured)
_DEFAULTS = {
    "name": "2BAConcours",
    "logoAlt": "2BAConcours Logo",
    "attribution": "Généré par 2BAConcours le",
    "disclaimer": (
        "Ceci est un rapport automatisé. Pour toute question, "
        "veuillez contacter votre administrateur."
    ),
    "colors": {
        "primary": "#047C6E",
        "primaryLight": "#E8F9F7",
        "primaryDark": "#035854",
        "textPrimary": "#0F172A",
        "textSecondary": "#475569",
        "textTertiary": "#64748B",
        "textInverse": "#FFFFFF",
        "background": "#F8FAFC",
        "surface": "#FFFFFF",
        "border": "#E2E8F0",
        "borderStrong": "#CBD5E1",
        "success": "#22C55E",
        "successLight": "#DCFCE7",
        "warning": "#EAB308",
        "warningLight": "#FEF3C7",
        "error": "#EF4444",
        "errorLight": "#FEE2E2",
    },
}

# Cached brand config (loaded once at first access)
_brand_config: Optional[dict] = None


def _load_brand_json(path: Path) -> Optional[dict]:
    """Try to load and parse a brand.json file."""
    try:
        if path.is_file():
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to read %s: %s", path, e)
    return None


def get_brand() -> dict:
    """Get the active brand configuration (cached after first call)."""
    global _brand_config
    if _brand_config is not None:
        return _brand_config

    config = None
    if settings.brand_config_path:
        config = _load_brand_json(Path(settings.brand_config_path))
    if config is None:
        config = {}

    # Merge with defaults so missing keys don't break anything
    merged = dict(_DEFAULTS)
    for key, value in config.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value

    _brand_config = merged
    logger.info(
        "Brand loaded: %s (%s)",
        merged.get("name", "unknown"),
        "custom" if config else "default",
    )
    return _brand_config


def reload_brand() -> dict:
    """Force reload brand config (e.g., after editing brand.json)."""
    global _brand_config
    _brand_config = None
    return get_brand()
