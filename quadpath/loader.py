import math
from pathlib import Path
from typing import List

from .models import Field, Rect


class FieldParseError(Exception):
    """Raised when a field file cannot be parsed."""
    pass


def _parse_values(text: str, source: str) -> List[float]:
    """Parse whitespace-separated content into a list of floats."""
    if not text.strip():
        raise FieldParseError(f"File is empty: {source}")

    values: List[float] = []
    for i, token in enumerate(text.split()):
        try:
            values.append(float(token))
        except ValueError:
            raise FieldParseError(
                f"Invalid number at position {i}: '{token}' in {source}"
            )
    return values


def _obstacle_count(values: List[float], source: str) -> int:
    """Validate the header and return the declared obstacle count."""
    if len(values) < 2:
        raise FieldParseError(
            f"Not enough values in {source}: expected at least 2, got {len(values)}"
        )

    r = values[1]
    if not math.isfinite(r) or r < 0 or r != int(r):
        raise FieldParseError(f"Obstacle count must be a non-negative integer, got {r} in {source}")
    r = int(r)

    expected = 2 + 4 * r
    if len(values) != expected:
        raise FieldParseError(
            f"Invalid obstacle data in {source}: {r} obstacles need {expected} values, got {len(values)}"
        )
    return r


def parse_field(text: str, source: str = "<string>") -> Field:
    """Parse a field description.

    Format (whitespace-separated values):
        n
        r
        x y width height    (r lines)

    Raises:
        FieldParseError: If the text cannot be parsed.
        FieldValidationError: If the field or an obstacle is invalid.
    """
    values = _parse_values(text, source)
    r = _obstacle_count(values, source)

    obstacles = []
    i = 2
    for _ in range(r):
        obstacles.append(Rect(values[i], values[i + 1], values[i + 2], values[i + 3]))
        i += 4

    return Field(size=values[0], obstacles=tuple(obstacles))


def load_field(filepath: str | Path) -> Field:
    """Load a field from file.

    Raises:
        FieldParseError: If the file cannot be read or parsed.
        FieldValidationError: If the field or an obstacle is invalid.
    """
    filepath = Path(filepath)
    try:
        content = filepath.read_text()
    except FileNotFoundError:
        raise FieldParseError(f"File not found: {filepath}")
    except PermissionError:
        raise FieldParseError(f"Permission denied: {filepath}")

    return parse_field(content, str(filepath))
