"""
Value coercion: infer a typed Value from untyped INI text.

The checks run in a fixed precedence order and the first match wins. The
order matters: percentages are tested before the list split, and lists only
form when no earlier pattern claimed the text. Coercion never fails; text
that matches nothing comes back as a plain string.
"""

import re

from .values import Color, Coord, Value, parse_bool, parse_float, parse_int

_COLOR_CHANNEL_RE = re.compile(r"([RGBA]):\s*(\d+)", re.IGNORECASE)
_COORD_AXIS_RE = re.compile(
    r"([XYZ]):\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.IGNORECASE
)


def _has_markers(text: str, *markers: str) -> bool:
    upper = text.upper()
    return all(marker in upper for marker in markers)


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == text[-1] == '"' and '"' not in text[1:-1]


def _clamp_channel(digits: str) -> int:
    if len(digits.lstrip("0")) > 3:
        return 255
    return min(255, int(digits))


def parse_color(text: str) -> Color:
    """Read ``R:`` ``G:`` ``B:`` ``A:`` channels in any order; missing ones are 255."""
    channels = {"R": 255, "G": 255, "B": 255, "A": 255}
    for name, digits in _COLOR_CHANNEL_RE.findall(text):
        channels[name.upper()] = _clamp_channel(digits)
    return Color(channels["R"], channels["G"], channels["B"], channels["A"])


def parse_coord(text: str) -> Coord:
    """Read ``X:`` ``Y:`` ``Z:`` axes in any order; missing ones are 0.0."""
    axes = {"X": 0.0, "Y": 0.0, "Z": 0.0}
    for name, number in _COORD_AXIS_RE.findall(text):
        axes[name.upper()] = float(number)
    return Coord(axes["X"], axes["Y"], axes["Z"])


def coerce_value(text: str) -> Value:
    """Classify and convert a trimmed value string.

    Precedence: quoted string, color, percentage, coordinate, boolean,
    integer, float, space-separated list, plain string.
    """
    text = text.strip()
    if not text:
        return Value.string("")

    if _is_quoted(text):
        return Value.string(text[1:-1])

    if _has_markers(text, "R:", "G:", "B:"):
        return Value.color(parse_color(text))

    if text.endswith("%"):
        percent = parse_float(text[:-1])
        if percent is not None:
            return Value.floating(percent / 100.0)

    if _has_markers(text, "X:", "Y:"):
        return Value.coord(parse_coord(text))

    flag = parse_bool(text)
    if flag is not None:
        return Value.boolean(flag)

    integer = parse_int(text)
    if integer is not None:
        return Value.integer(integer)

    number = parse_float(text)
    if number is not None:
        return Value.floating(number)

    if " " in text or "\t" in text:
        return Value.list_of(text.split())

    return Value.string(text)
