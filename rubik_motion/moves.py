"""Move notation, face geometry and rotation matrices for the 3x3 cube."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable

import numpy as np

# Face index order shared with the facelet table: L U F D R B.
FACE_ORDER = ("L", "U", "F", "D", "R", "B")
FACE_INDEX = {face: i for i, face in enumerate(FACE_ORDER)}

FACE_AXIS_LAYER = {
    "L": ("x", -1),
    "R": ("x", +1),
    "U": ("y", +1),
    "D": ("y", -1),
    "F": ("z", +1),
    "B": ("z", -1),
}

# Clockwise turn from face viewpoint expressed as world-axis rotation angle.
CLOCKWISE_ANGLE_DEG = {
    "L": +90,
    "R": -90,
    "U": -90,
    "D": +90,
    "F": -90,
    "B": +90,
}

SUFFIX_TURNS = {"": 1, "'": -1, "2": 2}


class InvalidMove(ValueError):
    """Raised when a move token is not in standard face-turn notation."""

    def __init__(self, token: str):
        super().__init__(f"Invalid move: {token!r}")
        self.token = token


def quarter_turn_matrix(axis: str, angle_deg: int) -> np.ndarray:
    """Return integer rotation matrix for +-90 around x/y/z axes."""
    if axis == "x" and angle_deg == +90:
        return np.array([[1, 0, 0], [0, 0, -1], [0, 1, 0]], dtype=np.int64)
    if axis == "x" and angle_deg == -90:
        return np.array([[1, 0, 0], [0, 0, 1], [0, -1, 0]], dtype=np.int64)
    if axis == "y" and angle_deg == +90:
        return np.array([[0, 0, 1], [0, 1, 0], [-1, 0, 0]], dtype=np.int64)
    if axis == "y" and angle_deg == -90:
        return np.array([[0, 0, -1], [0, 1, 0], [1, 0, 0]], dtype=np.int64)
    if axis == "z" and angle_deg == +90:
        return np.array([[0, -1, 0], [1, 0, 0], [0, 0, 1]], dtype=np.int64)
    if axis == "z" and angle_deg == -90:
        return np.array([[0, 1, 0], [-1, 0, 0], [0, 0, 1]], dtype=np.int64)
    raise ValueError(f"Unsupported rotation: axis={axis}, angle={angle_deg}")


def rotation_matrix(axis: str, angle_rad: float) -> np.ndarray:
    """Homogeneous 4x4 rotation about a world axis."""
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    out = np.eye(4, dtype=np.float64)
    if axis == "x":
        out[:3, :3] = [[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]]
    elif axis == "y":
        out[:3, :3] = [[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]]
    elif axis == "z":
        out[:3, :3] = [[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]
    else:
        raise ValueError(f"Unsupported axis: {axis}")
    return out


def translation_matrix(offset: Iterable[float]) -> np.ndarray:
    out = np.eye(4, dtype=np.float64)
    out[:3, 3] = np.asarray(tuple(offset), dtype=np.float64)
    return out


def scale_matrix(factor: float) -> np.ndarray:
    out = np.eye(4, dtype=np.float64)
    out[0, 0] = out[1, 1] = out[2, 2] = factor
    return out


class Move(Enum):
    L = "L"
    LP = "L'"
    L2 = "L2"
    R = "R"
    RP = "R'"
    R2 = "R2"
    U = "U"
    UP = "U'"
    U2 = "U2"
    D = "D"
    DP = "D'"
    D2 = "D2"
    F = "F"
    FP = "F'"
    F2 = "F2"
    B = "B"
    BP = "B'"
    B2 = "B2"

    def __str__(self) -> str:
        return self.value

    @property
    def base(self) -> str:
        return self.value[0]

    @property
    def face(self) -> int:
        """Index of the turned face in FACE_ORDER."""
        return FACE_INDEX[self.base]

    @property
    def turns(self) -> int:
        """Signed quarter turns: 1 clockwise, -1 counter-clockwise, 2 half turn."""
        return SUFFIX_TURNS[self.value[1:]]

    @property
    def axis(self) -> str:
        return FACE_AXIS_LAYER[self.base][0]

    @property
    def angle(self) -> float:
        """Total rotation of the turn in radians about the world axis."""
        return math.radians(CLOCKWISE_ANGLE_DEG[self.base] * self.turns)

    @property
    def quarter_turns(self) -> int:
        return abs(self.turns)

    @property
    def matrix(self) -> np.ndarray:
        """Integer quarter-turn matrix in the direction of this move.

        Half turns are committed by applying it twice.
        """
        sign = -1 if self.turns < 0 else 1
        return quarter_turn_matrix(self.axis, CLOCKWISE_ANGLE_DEG[self.base] * sign)

    def transform(self, t: float) -> np.ndarray:
        """Rotation reached at progress t of the turn (0 = start, 1 = done)."""
        return rotation_matrix(self.axis, self.angle * t)

    def full_turn(self) -> np.ndarray:
        """transform(1.0) with float noise removed; entries are exactly 0 or +-1."""
        return np.rint(self.transform(1.0))

    def inverse(self) -> Move:
        if self.turns == 2:
            return self
        suffix = "" if self.turns < 0 else "'"
        return Move(self.base + suffix)


_MOVE_BY_TOKEN = {m.value: m for m in Move}


def parse_move(token: str) -> Move:
    tok = token.strip().replace("’", "'").replace("‘", "'")
    try:
        return _MOVE_BY_TOKEN[tok]
    except KeyError:
        raise InvalidMove(token) from None


def parse_sequence(text: str) -> list[Move]:
    """Parse whitespace separated tokens like "R U R' U2".

    The whole sequence is rejected on the first invalid token.
    """
    return [parse_move(tok) for tok in text.split()]


def format_sequence(moves: Iterable[Move]) -> str:
    return " ".join(str(m) for m in moves)
