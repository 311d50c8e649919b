"""Animated Rubik 3x3 cube core."""

from .cube import Cube, CubeAnimationOptions
from .dynamics import SecondOrderParameters, SecondOrderSystem
from .easing import ease
from .facelets import Color, InvalidColorChar, InvalidLength, SOLVED_FACELETS
from .moves import InvalidMove, Move, parse_sequence
from .piece import Piece, RotationInconsistency

__all__ = [
    "Color",
    "Cube",
    "CubeAnimationOptions",
    "InvalidColorChar",
    "InvalidLength",
    "InvalidMove",
    "Move",
    "Piece",
    "RotationInconsistency",
    "SOLVED_FACELETS",
    "SecondOrderParameters",
    "SecondOrderSystem",
    "ease",
    "parse_sequence",
]
