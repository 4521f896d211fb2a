"""JSON output for forecast responses."""

import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional, TextIO

from surf_conditions.models import ForecastResponse, SpotConfiguration

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path, data: dict | list) -> None:
    """
    Write JSON atomically using temp file + rename.

    Args:
        path: Target path
        data: JSON-serializable data
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file in same directory (for atomic rename)
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.stem}_",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")

        # Atomic rename
        os.replace(temp_path, path)
        logger.debug(f"Wrote {path}")

    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def write_forecast(response: ForecastResponse, path: Optional[Path] = None) -> None:
    """
    Emit a forecast as camelCase JSON.

    Args:
        response: Forecast to write
        path: Target file; stdout when omitted
    """
    data = response.to_json_dict()
    if path is None:
        print_json(data)
        return

    write_json_atomic(path, data)
    logger.info(f"Wrote forecast for {response.location} to {path}")


def print_json(data: dict | list, stream: TextIO = sys.stdout) -> None:
    json.dump(data, stream, indent=2, ensure_ascii=False)
    stream.write("\n")


def spot_table(spots: list[SpotConfiguration] | tuple[SpotConfiguration, ...]) -> list[dict]:
    """Registry rows for listing."""
    return [
        {
            "key": spot.key,
            "name": spot.name,
            "type": spot.type.value,
            "difficulty": spot.difficulty.value,
            "country": spot.country_code,
            "optimalConditions": spot.describe_optimal(),
        }
        for spot in spots
    ]
