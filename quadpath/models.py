import math
from dataclasses import dataclass
from typing import Iterable, Tuple


class FieldValidationError(ValueError):
    """Raised when a field, obstacle or planner setting is invalid."""
    pass


@dataclass(frozen=True)
class Point:
    """Represents a 2D point."""

    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, used for obstacles and quadtree regions.

    Attributes:
        x: X coordinate of the bottom-left corner.
        y: Y coordinate of the bottom-left corner.
        width: Extent in X direction.
        height: Extent in Y direction.
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if not all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height)):
            raise FieldValidationError(
                f"Rectangle values must be finite, got "
                f"({self.x}, {self.y}, {self.width}, {self.height})"
            )
        if not self.width > 0 or not self.height > 0:
            raise FieldValidationError(
                f"Rectangle must have positive dimensions, got "
                f"width={self.width}, height={self.height}"
            )

    @property
    def x_min(self) -> float:
        return self.x

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_min(self) -> float:
        return self.y

    @property
    def y_max(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class Field:
    """Square domain [0, size] x [0, size] with rectangular obstacles.

    Obstacles may overlap each other. The field is validated on construction
    and is read-only afterwards.
    """

    size: float
    obstacles: Tuple[Rect, ...] = ()

    def __post_init__(self) -> None:
        if not math.isfinite(self.size) or not self.size > 0:
            raise FieldValidationError(f"Field size must be a positive finite number, got {self.size}")
        # Accept any iterable but store an immutable tuple
        object.__setattr__(self, "obstacles", tuple(self.obstacles))
        for i, obs in enumerate(self.obstacles):
            if not isinstance(obs, Rect):
                raise FieldValidationError(f"Obstacle {i}: expected Rect, got {type(obs).__name__}")
            if obs.x_min < 0 or obs.y_min < 0:
                raise FieldValidationError(
                    f"Obstacle {i}: origin ({obs.x}, {obs.y}) has negative coordinates"
                )
            if obs.x_max > self.size or obs.y_max > self.size:
                raise FieldValidationError(
                    f"Obstacle {i}: extends beyond field bounds. "
                    f"Obstacle ends at ({obs.x_max}, {obs.y_max}), field is {self.size} x {self.size}"
                )

    @property
    def bounds(self) -> Rect:
        return Rect(0.0, 0.0, self.size, self.size)

    @property
    def start(self) -> Point:
        """Default start: middle of the bottom edge."""
        return Point(self.size / 2.0, 0.0)

    @property
    def destination(self) -> Point:
        """Default destination: middle of the top edge."""
        return Point(self.size / 2.0, self.size)

    def point_blocked(self, p: Point) -> bool:
        """True if ``p`` lies in the open interior of some obstacle."""
        return any(
            obs.x_min < p.x < obs.x_max and obs.y_min < p.y < obs.y_max
            for obs in self.obstacles
        )


def make_field(size: float, obstacles: Iterable[Tuple[float, float, float, float]] = ()) -> Field:
    """Build a Field from raw ``(x, y, width, height)`` tuples."""
    return Field(size=float(size), obstacles=tuple(Rect(*map(float, o)) for o in obstacles))
