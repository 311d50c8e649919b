"""A single cube piece: lattice position, color slots and transforms."""

from __future__ import annotations

import numpy as np

from .facelets import Color, Position, face_colors, piece_index
from .moves import scale_matrix, translation_matrix

PIECE_SCALE = 0.5


class RotationInconsistency(RuntimeError):
    """A rotation left a piece in a state the lattice model cannot express."""

    def __init__(self, position: Position, new_position: Position, delta: tuple[int, int, int]):
        super().__init__(f"before: {position}, after: {new_position}, rot: {delta}")
        self.position = position
        self.new_position = new_position
        self.delta = delta


class Piece:
    """One of the 27 sub-cubes.

    `colors` holds one color per axis slot (x, y, z); a slot is only meaningful
    while the piece sits on the exterior along that axis and stays NONE
    otherwise. `home` is the position the piece was created at; the
    accumulated `transform` carries it to where it currently is.
    """

    def __init__(
        self,
        position: Position,
        colors: tuple[Color, Color, Color],
        spacing: float = 1.0,
    ):
        self.position: Position = tuple(int(v) for v in position)
        self.home: Position = self.position
        self.colors: tuple[Color, Color, Color] = tuple(colors)
        self.spacing = float(spacing)

        self.transform = np.eye(4, dtype=np.float64)
        self.local_transform = np.eye(4, dtype=np.float64)
        self.global_transform = np.eye(4, dtype=np.float64)

        self._surface_colors = face_colors(self.home, self.colors)

    def __repr__(self) -> str:
        names = ",".join(c.value for c in self.colors)
        return f"Piece(position={self.position}, colors=({names}))"

    @property
    def index(self) -> int:
        return piece_index(self.position)

    def vec(self) -> np.ndarray:
        return np.array(self.position, dtype=np.int64)

    def rotate(self, matrix: np.ndarray) -> tuple[Position, Position]:
        """Apply a quarter-turn lattice rotation to position and color slots.

        Returns (previous, new) positions. Pieces on the rotation axis are
        left untouched. Half turns must be applied as two quarter turns.
        """
        mat = np.rint(np.asarray(matrix, dtype=np.float64)).astype(np.int64)
        prev = self.vec()
        new = mat @ prev
        rot = new - prev

        unchanged = int(np.count_nonzero(rot == 0))
        if unchanged == 3:
            return self.position, self.position
        if unchanged == 2:
            # Corners move along a single axis; folding the delta through the
            # matrix once more exposes the two axes that traded places.
            rot = rot + mat @ rot

        if int(np.count_nonzero(rot == 0)) != 1:
            raise RotationInconsistency(
                self.position,
                tuple(int(v) for v in new),
                tuple(int(v) for v in rot),
            )

        a, b = (int(i) for i in np.flatnonzero(rot))
        colors = list(self.colors)
        colors[a], colors[b] = colors[b], colors[a]
        self.colors = (colors[0], colors[1], colors[2])

        previous = self.position
        self.position = (int(new[0]), int(new[1]), int(new[2]))
        return previous, self.position

    def blend(self, matrix: np.ndarray) -> None:
        """Set the in-turn rotation offset."""
        self.local_transform = np.asarray(matrix, dtype=np.float64)

    def commit(self, matrix: np.ndarray) -> None:
        """Fold a completed turn into the accumulated transform."""
        self.transform = np.asarray(matrix, dtype=np.float64) @ self.transform
        self.local_transform = np.eye(4, dtype=np.float64)

    def world_matrix(self) -> np.ndarray:
        """Model matrix handed to the renderer for this piece's unit cube mesh."""
        offset = np.asarray(self.home, dtype=np.float64) * self.spacing
        return (
            self.global_transform
            @ self.local_transform
            @ self.transform
            @ translation_matrix(offset)
            @ scale_matrix(PIECE_SCALE)
        )

    def surface_colors(self) -> tuple[Color, ...]:
        """Colors painted on the mesh at creation, in SURFACE_NORMALS order."""
        return self._surface_colors

    def face_colors(self) -> tuple[Color, ...]:
        """Colors seen along each world axis direction at the current position."""
        return face_colors(self.position, self.colors)
