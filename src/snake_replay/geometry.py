"""Position and velocity arithmetic on the playing field."""

from __future__ import annotations

from dataclasses import dataclass

# Allowed values for a single velocity component.
VELOCITY_COMPONENTS: frozenset[int] = frozenset({-1, 0, 1})


@dataclass(frozen=True)
class Position:
    """A cell on the field. Coordinates use (x, y) ordering."""

    x: int
    y: int

    def to_dict(self) -> dict:
        """Serialize the position to a dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> Position:
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True)
class Velocity:
    """Per-tick displacement along each axis."""

    vel_x: int
    vel_y: int

    def to_dict(self) -> dict:
        """Serialize the velocity using its wire names."""
        return {"velX": self.vel_x, "velY": self.vel_y}

    @classmethod
    def from_dict(cls, data: dict) -> Velocity:
        return cls(vel_x=data["velX"], vel_y=data["velY"])

    @property
    def has_valid_components(self) -> bool:
        """Check whether both components lie in {-1, 0, 1}."""
        return (
            self.vel_x in VELOCITY_COMPONENTS
            and self.vel_y in VELOCITY_COMPONENTS
        )


def next_position(position: Position, velocity: Velocity) -> Position:
    """Return the cell reached by applying *velocity* to *position*."""
    return Position(position.x + velocity.vel_x, position.y + velocity.vel_y)


def is_out_of_bounds(position: Position, width: int, height: int) -> bool:
    """Check whether a position lies outside ``[0, width) x [0, height)``."""
    return (
        position.x < 0
        or position.x >= width
        or position.y < 0
        or position.y >= height
    )
