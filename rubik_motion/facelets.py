"""Facelet string codec and the facelet -> piece table."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Protocol

from .moves import FACE_ORDER

N_FACES = 6
FACELETS_PER_FACE = 9
STATE_SIZE = N_FACES * FACELETS_PER_FACE
N_PIECES = 27

Position = tuple[int, int, int]


class Color(Enum):
    """Standard puzzle colors. NONE is the hidden color between pieces."""

    BLUE = "B"
    YELLOW = "Y"
    RED = "R"
    WHITE = "W"
    GREEN = "G"
    ORANGE = "O"
    NONE = "-"

    @property
    def rgb(self) -> tuple[int, int, int]:
        return COLOR_RGB[self]


COLOR_RGB = {
    Color.BLUE: (31, 68, 166),
    Color.YELLOW: (248, 214, 73),
    Color.RED: (167, 41, 55),
    Color.WHITE: (255, 255, 255),
    Color.GREEN: (70, 152, 81),
    Color.ORANGE: (235, 99, 45),
    Color.NONE: (0, 0, 0),
}

COLOR_BY_CHAR = {c.value: c for c in Color if c is not Color.NONE}

# Piece index of each facelet; faces in FACE_ORDER (L U F D R B), row-major.
FACELETS = (
    0, 1, 2, 3, 4, 5, 6, 7, 8,
    0, 9, 18, 1, 10, 19, 2, 11, 20,
    2, 11, 20, 5, 14, 23, 8, 17, 26,
    8, 17, 26, 7, 16, 25, 6, 15, 24,
    20, 19, 18, 23, 22, 21, 26, 25, 24,
    18, 9, 0, 21, 12, 3, 24, 15, 6,
)

# Color slot (x, y, z) read by each face.
FACE_SLOT = {"L": 0, "U": 1, "F": 2, "D": 1, "R": 0, "B": 2}

# Outward normals of the six surface faces of a piece, in render order.
SURFACE_NORMALS = (
    (-1, 0, 0),
    (0, 1, 0),
    (0, 0, 1),
    (0, -1, 0),
    (1, 0, 0),
    (0, 0, -1),
)

SOLVED_FACELETS = "".join(ch * FACELETS_PER_FACE for ch in "BYRWGO")


class FaceletValidationError(ValueError):
    """Raised when a facelet string cannot be decoded."""


class InvalidLength(FaceletValidationError):
    def __init__(self, length: int):
        super().__init__(f"Facelet string must have {STATE_SIZE} characters, got {length}")
        self.length = length


class InvalidColorChar(FaceletValidationError):
    def __init__(self, char: str, index: int):
        super().__init__(f"Invalid color char {char!r} at facelet {index}")
        self.char = char
        self.index = index


class _Colored(Protocol):
    position: Position
    colors: tuple[Color, Color, Color]


def piece_index(position: Position) -> int:
    x, y, z = position
    return (x + 1) * 9 + (1 - y) * 3 + (z + 1)


def index_position(index: int) -> Position:
    return (index // 9 - 1, 1 - (index // 3) % 3, index % 3 - 1)


def face_pieces(face: int) -> tuple[int, ...]:
    """Piece indices covered by one face's nine facelets."""
    start = face * FACELETS_PER_FACE
    return FACELETS[start : start + FACELETS_PER_FACE]


def decode_facelets(text: str) -> list[tuple[Position, tuple[Color, Color, Color]]]:
    """Resolve a 54-char facelet string into (position, colors) per piece index.

    Characters past the 54th are ignored.
    """
    slots = [[Color.NONE, Color.NONE, Color.NONE] for _ in range(N_PIECES)]
    for facelet in range(STATE_SIZE):
        if facelet >= len(text):
            raise InvalidLength(len(text))
        ch = text[facelet]
        color = COLOR_BY_CHAR.get(ch)
        if color is None:
            raise InvalidColorChar(ch, facelet)
        face = FACE_ORDER[facelet // FACELETS_PER_FACE]
        slots[FACELETS[facelet]][FACE_SLOT[face]] = color

    return [(index_position(i), (c[0], c[1], c[2])) for i, c in enumerate(slots)]


def encode_facelets(pieces: Iterable[_Colored]) -> str:
    """Read the facelet string back from pieces at their current positions."""
    by_index = {piece_index(p.position): p.colors for p in pieces}
    if len(by_index) != N_PIECES:
        raise FaceletValidationError(f"Expected {N_PIECES} distinct positions, got {len(by_index)}")

    out: list[str] = []
    for facelet in range(STATE_SIZE):
        face = FACE_ORDER[facelet // FACELETS_PER_FACE]
        out.append(by_index[FACELETS[facelet]][FACE_SLOT[face]].value)
    return "".join(out)


def face_colors(position: Position, colors: tuple[Color, Color, Color]) -> tuple[Color, ...]:
    """Per-surface colors in SURFACE_NORMALS order; interior surfaces get NONE."""
    out: list[Color] = []
    for normal in SURFACE_NORMALS:
        axis = next(i for i, v in enumerate(normal) if v != 0)
        out.append(colors[axis] if position[axis] == normal[axis] else Color.NONE)
    return tuple(out)


def is_solved(facelets: str) -> bool:
    """True when every face shows a single color."""
    for face in range(N_FACES):
        start = face * FACELETS_PER_FACE
        if len(set(facelets[start : start + FACELETS_PER_FACE])) != 1:
            return False
    return True
