"""Convert colours to their HSL form.

Each argument is parsed (hex, CSS name, rgb(...) or hsl(...)) and reported
with its HSL normalisation. RGB inputs also report their hex code; HSL
inputs pass through unchanged, since there is no HSL to RGB conversion.

Saturation and lightness are truncated, not rounded:
    rgb(150, 50, 60) -> hsl(354, 50%, 39%)

Example:
    uv run colour-tool convert '#96323c' 'rgb(128, 128, 128)' teal
"""

from colour_checker.core.convert import to_hsl
from colour_checker.core.palette import format_colour, parse_colour, rgb_to_hex
from colour_checker.core.types import Command, Report, Rgb

command = Command(
    name='convert',
    help='Convert colours (hex, names, rgb(), hsl()) to HSL.',
)


def add_arguments(parser) -> None:
    parser.add_argument('colours', nargs='+', metavar='COLOUR', help='Colour to convert')


@command.run
def run(report: Report, args) -> None:
    for text in args.colours:
        colour = parse_colour(text)
        hsl = to_hsl(colour)
        data = {
            'input': format_colour(colour),
            'hsl': format_colour(hsl),
            'h': hsl.h,
            's': hsl.s,
            'l': hsl.l,
        }
        if isinstance(colour, Rgb):
            data['hex'] = rgb_to_hex(*colour)
        report.add(text, data)
