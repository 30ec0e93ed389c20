# chainlog - terminal colors
"""ANSI colorizers used by the text renderer"""

from typing import Callable

Colorizer = Callable[[str], str]


def _ansi(code: int) -> Colorizer:
    def colorize(text: str) -> str:
        return f"\x1b[{code}m{text}\x1b[0m"

    colorize.__name__ = f"ansi_{code}"
    return colorize


class clc:
    """Color palette"""

    bold = _ansi(1)
    red = _ansi(31)
    green = _ansi(32)
    yellow = _ansi(33)
    blue = _ansi(34)
    magenta = _ansi(35)
    cyan = _ansi(36)
    white = _ansi(37)
    gray = _ansi(90)
    red_bright = _ansi(91)
    green_bright = _ansi(92)
    yellow_bright = _ansi(93)
    blue_bright = _ansi(94)
    magenta_bright = _ansi(95)
    cyan_bright = _ansi(96)
    white_bright = _ansi(97)