"""Surf spot registry backed by spots.yaml."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from surf_conditions.config import SPOTS_YAML
from surf_conditions.models import SpotConfiguration

logger = logging.getLogger(__name__)


def has_coordinates(spot: SpotConfiguration) -> bool:
    return spot.lat is not None and spot.lon is not None


def _check_spot(spot: SpotConfiguration, seen_keys: set[str]) -> Optional[str]:
    """Reason a parsed spot cannot join the registry, or None."""
    if (spot.lat is None) != (spot.lon is None):
        return "lat and lon must be given together"
    if spot.key and spot.key in seen_keys:
        return "duplicate key"
    return None


def load_spots(yaml_path: Optional[Path] = None) -> list[SpotConfiguration]:
    """
    Parse the spot registry.

    Entries that fail validation, carry half a coordinate pair or reuse an
    earlier key are logged and skipped. File order is kept, since the
    resolver returns the first matching spot.

    Raises:
        FileNotFoundError: If the registry file does not exist
    """
    path = yaml_path or SPOTS_YAML
    if not path.exists():
        raise FileNotFoundError(f"Spot registry not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        entries = (yaml.safe_load(f) or {}).get("spots") or []

    spots: list[SpotConfiguration] = []
    seen_keys: set[str] = set()
    for index, entry in enumerate(entries):
        label = f"#{index}"
        if isinstance(entry, dict):
            label = entry.get("key") or entry.get("name") or label
        try:
            spot = SpotConfiguration.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Skipping spot {label}: {e.error_count()} invalid field(s)")
            continue

        problem = _check_spot(spot, seen_keys)
        if problem:
            logger.warning(f"Skipping spot {label}: {problem}")
            continue

        if spot.key:
            seen_keys.add(spot.key)
        spots.append(spot)

    located = sum(1 for spot in spots if has_coordinates(spot))
    logger.info(f"Loaded {len(spots)} surf spots ({located} with coordinates) from {path.name}")
    return spots


@lru_cache(maxsize=1)
def default_spots() -> tuple[SpotConfiguration, ...]:
    """Bundled registry, loaded once per process and shared read-only."""
    return tuple(load_spots())
