"""First-person fly camera driven by keyboard movement and mouse look."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

from .transforms import Matrix, Vector, cross, look_at, normalize

WORLD_UP: Vector = np.array([0.0, 1.0, 0.0])
SPEED = 5.0
SENSITIVITY = 0.1
PITCH_LIMIT = 89.0


class Movement(enum.Enum):
    """Directions the camera can be moved in."""

    FORWARD = "forward"
    BACKWARD = "backward"
    RIGHT = "right"
    LEFT = "left"
    UP = "up"
    DOWN = "down"


@dataclass
class Camera:
    """Camera position, viewing direction and mouse-look angles."""

    position: Vector = field(default_factory=lambda: np.array([0.0, 0.0, 3.0]))
    front: Vector = field(default_factory=lambda: np.array([0.0, 0.0, -1.0]))
    yaw: float = -90.0
    pitch: float = 0.0
    last_x: float = 0.0
    last_y: float = 0.0

    def reset_last_xy(self, x: float, y: float) -> None:
        """Remember the cursor position so the next mouse move has no jump."""
        self.last_x, self.last_y = float(x), float(y)

    def process_keyboard(self, pressed: Iterable[Movement], delta: float) -> None:
        """Move the camera for each pressed direction over ``delta`` seconds."""
        held = set(pressed)
        right = cross(self.front, WORLD_UP)
        moves = {
            Movement.FORWARD: self.front,
            Movement.BACKWARD: -self.front,
            Movement.RIGHT: right,
            Movement.LEFT: -right,
            Movement.UP: WORLD_UP,
            Movement.DOWN: -WORLD_UP,
        }
        for movement, direction in moves.items():
            if movement in held:
                self.position = self.position + direction * SPEED * delta

    def process_mouse(self, xpos: float, ypos: float) -> None:
        """Turn the camera by the cursor's movement since the last call."""
        xoffset = (xpos - self.last_x) * SENSITIVITY
        yoffset = (self.last_y - ypos) * SENSITIVITY
        self.reset_last_xy(xpos, ypos)

        self.yaw += xoffset
        self.pitch = min(max(self.pitch + yoffset, -PITCH_LIMIT), PITCH_LIMIT)

        yaw, pitch = math.radians(self.yaw), math.radians(self.pitch)
        self.front = normalize([
            math.cos(yaw) * math.cos(pitch),
            math.sin(pitch),
            math.sin(yaw) * math.cos(pitch),
        ])

    def view(self) -> Matrix:
        """View matrix for the current position and direction."""
        return look_at(self.position, self.position + self.front, WORLD_UP)