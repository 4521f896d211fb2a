"""Map a free-text location to a surf spot configuration."""

import logging
from typing import Iterable, Optional

from surf_conditions.models import BreakType, Difficulty, SpotConfiguration
from surf_conditions.registry import default_spots

logger = logging.getLogger(__name__)

# Regional defaults: (country codes, location hints, spot settings)
REGIONAL_DEFAULTS = [
    (
        {"AU"},
        ("australia", "bondi"),
        dict(
            type=BreakType.BEACH_BREAK,
            aspect=90,  # east-facing
            optimal_wave_height=(1.0, 2.5),
            optimal_swell_direction=(45, 135),
            difficulty=Difficulty.INTERMEDIATE,
        ),
    ),
    (
        {"US"},
        ("california", "malibu"),
        dict(
            type=BreakType.POINT_BREAK,
            aspect=225,  # SW-facing
            optimal_wave_height=(1.5, 3.0),
            optimal_swell_direction=(200, 280),
            difficulty=Difficulty.INTERMEDIATE,
        ),
    ),
    (
        {"FR", "ES", "PT"},
        ("europe",),
        dict(
            type=BreakType.BEACH_BREAK,
            aspect=270,  # west-facing
            optimal_wave_height=(1.2, 2.8),
            optimal_swell_direction=(225, 315),
            difficulty=Difficulty.INTERMEDIATE,
        ),
    ),
    (
        {"BR"},
        ("brazil", "rio"),
        dict(
            type=BreakType.BEACH_BREAK,
            aspect=120,  # ESE-facing
            optimal_wave_height=(1.0, 2.2),
            optimal_swell_direction=(90, 180),
            difficulty=Difficulty.BEGINNER,
        ),
    ),
]

GENERIC_DEFAULT = dict(
    type=BreakType.BEACH_BREAK,
    aspect=180,  # south-facing
    optimal_wave_height=(1.0, 2.5),
    optimal_swell_direction=(135, 225),
    difficulty=Difficulty.INTERMEDIATE,
)


def _names(spot: SpotConfiguration) -> list[str]:
    names = [spot.name, *spot.aliases]
    if spot.key:
        names.insert(0, spot.key)
    return [n.lower() for n in names]


def matches(location: str, spot: SpotConfiguration) -> bool:
    """Either string contains the other, for the key, name or any alias."""
    query = location.strip().lower()
    if not query:
        return False
    return any(name in query or query in name for name in _names(spot))


def find_spot(
    location: str, spots: Iterable[SpotConfiguration]
) -> Optional[SpotConfiguration]:
    """First registry spot matching the location, in registry order."""
    for spot in spots:
        if matches(location, spot):
            return spot
    return None


def regional_default(location: str, country_code: Optional[str] = None) -> SpotConfiguration:
    """Synthesize a configuration from country code or location hints."""
    query = location.lower()
    country = country_code.upper() if country_code else None

    for countries, hints, settings in REGIONAL_DEFAULTS:
        if country in countries or any(hint in query for hint in hints):
            return SpotConfiguration(name=location, **settings)

    return SpotConfiguration(name=location, **GENERIC_DEFAULT)


def resolve_spot(
    location: str,
    country_code: Optional[str] = None,
    spots: Optional[Iterable[SpotConfiguration]] = None,
) -> SpotConfiguration:
    """
    Resolve a spot configuration. Never fails.

    Args:
        location: Free-text location from the user
        country_code: ISO country code hint from geocoding
        spots: Registry to search, defaults to the bundled registry

    Returns:
        Registry spot, regional default, or generic default
    """
    registry = default_spots() if spots is None else spots

    spot = find_spot(location, registry)
    if spot:
        logger.info(f"Resolved '{location}' to registry spot {spot.name}")
        return spot

    spot = regional_default(location, country_code)
    logger.info(
        f"No registry spot for '{location}', using default "
        f"{spot.type.value} facing {spot.aspect:g}°"
    )
    return spot
