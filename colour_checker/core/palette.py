"""Colour notation: hex helpers, CSS named colours, and a text parser.

Accepted by parse_colour:
  #rrggbb, #rgb, rrggbb     hex (case-insensitive, '#' optional)
  red, navy, ...            CSS level 1 keywords (see NAMED)
  rgb(150, 50, 60)          channels 0-255
  hsl(354, 50%, 39%)        hue in degrees, '%' optional

Only the parser validates ranges. Rgb and Hsl themselves accept any ints.
"""

import re

from colour_checker.core.types import Colour, Hsl, Rgb

# CSS level 1 colour keywords
NAMED: dict[str, str] = {
    'black': '#000000',
    'silver': '#c0c0c0',
    'gray': '#808080',
    'white': '#ffffff',
    'maroon': '#800000',
    'red': '#ff0000',
    'purple': '#800080',
    'fuchsia': '#ff00ff',
    'green': '#008000',
    'lime': '#00ff00',
    'olive': '#808000',
    'yellow': '#ffff00',
    'navy': '#000080',
    'blue': '#0000ff',
    'teal': '#008080',
    'aqua': '#00ffff',
}

_HEX_RE = re.compile(r'#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})')
_RGB_RE = re.compile(r'rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)', re.IGNORECASE)
_HSL_RE = re.compile(r'hsl\(\s*(\d+)\s*,\s*(\d+)\s*%?\s*,\s*(\d+)\s*%?\s*\)', re.IGNORECASE)

MAX_CHANNEL = 255
MAX_HUE = 65535  # 16-bit hue, no 360 cap
MAX_PERCENT = 100


def hex_to_rgb(hex_str: str) -> tuple[int, int, int] | None:
    """'#2563eb' -> (37, 99, 235). Returns None if the text is not hex."""
    m = _HEX_RE.fullmatch(hex_str.strip())
    if not m:
        return None
    digits = m.group(1)
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f'#{r:02x}{g:02x}{b:02x}'


def _check_range(text: str, label: str, value: int, upper: int) -> int:
    if value > upper:
        raise ValueError(f'{label} {value} out of range 0..{upper} in {text!r}')
    return value


def parse_colour(text: str) -> Colour:
    """Parse colour notation into an Rgb or Hsl value.

    Raises ValueError for unrecognised text or out-of-range components.
    """
    stripped = text.strip()

    named = NAMED.get(stripped.lower())
    if named:
        return Rgb(*hex_to_rgb(named))

    rgb = hex_to_rgb(stripped)
    if rgb:
        return Rgb(*rgb)

    m = _RGB_RE.fullmatch(stripped)
    if m:
        r, g, b = (
            _check_range(text, name, int(v), MAX_CHANNEL) for name, v in zip('rgb', m.groups(), strict=True)
        )
        return Rgb(r, g, b)

    m = _HSL_RE.fullmatch(stripped)
    if m:
        return Hsl(
            _check_range(text, 'hue', int(m.group(1)), MAX_HUE),
            _check_range(text, 'saturation', int(m.group(2)), MAX_PERCENT),
            _check_range(text, 'lightness', int(m.group(3)), MAX_PERCENT),
        )

    raise ValueError(f'Unrecognised colour: {text!r}')


def format_colour(colour: Colour) -> str:
    """Rgb(150, 50, 60) -> 'rgb(150, 50, 60)'; Hsl(354, 50, 39) -> 'hsl(354, 50%, 39%)'."""
    if isinstance(colour, Hsl):
        return f'hsl({colour.h}, {colour.s}%, {colour.l}%)'
    return f'rgb({colour.r}, {colour.g}, {colour.b})'
