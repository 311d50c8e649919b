"""Cube state, move queue and turn animation."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .easing import ease
from .facelets import (
    N_PIECES,
    SOLVED_FACELETS,
    Position,
    decode_facelets,
    encode_facelets,
    face_pieces,
    is_solved,
    piece_index,
)
from .frame import FrameInput
from .moves import Move, format_sequence, parse_sequence
from .piece import Piece


@dataclass
class CubeAnimationOptions:
    # Duration of one turn, in the same unit as the times passed to animate().
    move_time: float = 1200.0
    # Easing slope; larger values hold longer at both ends of a turn.
    move_smoothing: float = 2.0
    spacing: float = 1.0


class Cube:
    """27 pieces plus a FIFO of pending turns, animated one turn at a time.

    The cube is either idle or animating exactly one move. Discrete piece
    state only changes when an animation completes.
    """

    def __init__(
        self,
        pieces: list[Piece],
        options: CubeAnimationOptions | None = None,
        trace: bool = False,
    ):
        if len(pieces) != N_PIECES:
            raise ValueError(f"A cube needs {N_PIECES} pieces, got {len(pieces)}")
        options = options or CubeAnimationOptions()

        self.pieces = pieces
        self.move_time = float(options.move_time)
        self.move_slope = float(options.move_smoothing)
        self.trace = trace

        self._move_queue: deque[Move] = deque()
        self._current_move: Move | None = None
        self._current_face: tuple[int, ...] | None = None
        self._move_start = 0.0
        self.moves_applied = 0

    @classmethod
    def from_facelet_str(
        cls,
        text: str,
        options: CubeAnimationOptions | None = None,
        trace: bool = False,
    ) -> Cube:
        options = options or CubeAnimationOptions()
        pieces = [Piece(position, colors, spacing=options.spacing) for position, colors in decode_facelets(text)]
        return cls(pieces, options=options, trace=trace)

    @classmethod
    def solved(cls, options: CubeAnimationOptions | None = None, trace: bool = False) -> Cube:
        return cls.from_facelet_str(SOLVED_FACELETS, options=options, trace=trace)

    def _log(self, text: str) -> None:
        if self.trace:
            print(text, flush=True)

    @property
    def current_move(self) -> Move | None:
        return self._current_move

    @property
    def current_face(self) -> tuple[int, ...] | None:
        """Indices into `pieces` turned by the in-flight move."""
        return self._current_face

    @property
    def move_start(self) -> float:
        return self._move_start

    @property
    def pending(self) -> tuple[Move, ...]:
        return tuple(self._move_queue)

    @property
    def is_animating(self) -> bool:
        return self._current_move is not None

    @property
    def is_idle(self) -> bool:
        return self._current_move is None and not self._move_queue

    def queue(self, moves: Move | Iterable[Move]) -> None:
        """Append moves to the pending FIFO; an in-flight turn is never disturbed."""
        batch = [moves] if isinstance(moves, Move) else list(moves)
        for mv in batch:
            if not isinstance(mv, Move):
                raise TypeError(f"Expected Move, got {type(mv).__name__}")
        self._move_queue.extend(batch)

    def queue_sequence(self, text: str) -> list[Move]:
        moves = parse_sequence(text)
        self.queue(moves)
        return moves

    def face(self, face: int) -> tuple[int, ...]:
        """Indices of the pieces currently occupying a face."""
        wanted = set(face_pieces(face))
        return tuple(i for i, p in enumerate(self.pieces) if p.index in wanted)

    def animate(self, time: float) -> None:
        """Advance the turn state machine to `time`."""
        if self._current_move is not None and self._current_face is not None:
            mv = self._current_move
            elapsed = time - self._move_start
            if elapsed >= self.move_time:
                self._complete_move(mv, self._current_face)
            else:
                x = ease(max(elapsed, 0.0) / self.move_time, self.move_slope)
                blend = mv.transform(x)
                for ci in self._current_face:
                    self.pieces[ci].blend(blend)
        elif self._move_queue:
            mv = self._move_queue.popleft()
            self._current_face = self.face(mv.face)
            self._current_move = mv
            self._move_start = time
            self._log(f"move_start move={mv} time={time:.1f} pieces={list(self._current_face)}")

    def step(self, frame: FrameInput) -> None:
        self.animate(frame.time)

    def _complete_move(self, mv: Move, face: tuple[int, ...]) -> None:
        full = mv.full_turn()
        for ci in face:
            self.pieces[ci].commit(full)
        for _ in range(mv.quarter_turns):
            for ci in face:
                self.pieces[ci].rotate(mv.matrix)

        self._current_move = None
        self._current_face = None
        self.moves_applied += 1
        self._log(f"move_applied move={mv} applied={self.moves_applied} pending={len(self._move_queue)}")

    def run_until_idle(self, frame_time: float, start_time: float = 0.0) -> float:
        """Drive animate() with a fixed frame step until no work is left.

        Returns the time of the last frame.
        """
        if frame_time <= 0:
            raise ValueError("frame_time must be positive")
        t = start_time
        self.animate(t)
        while not self.is_idle:
            t += frame_time
            self.animate(t)
        return t

    def piece_at(self, position: Position) -> Piece:
        target = piece_index(position)
        for p in self.pieces:
            if p.index == target:
                return p
        raise KeyError(position)

    def positions(self) -> list[Position]:
        return [p.position for p in self.pieces]

    def transforms(self) -> list[np.ndarray]:
        return [p.world_matrix() for p in self.pieces]

    def to_facelet_str(self) -> str:
        return encode_facelets(self.pieces)

    def is_solved(self) -> bool:
        return is_solved(self.to_facelet_str())

    def state_payload(self) -> dict:
        return {
            "facelets": self.to_facelet_str(),
            "current_move": None if self._current_move is None else str(self._current_move),
            "pending": format_sequence(self._move_queue),
            "moves_applied": self.moves_applied,
            "solved": self.is_solved(),
        }
