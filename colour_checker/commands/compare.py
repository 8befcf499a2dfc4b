"""Compare two colours for equality across RGB and HSL.

Both colours are normalised to HSL (an RGB side goes through rgb_to_hsl)
and compared component by component. There is no tolerance: colours that
look identical but land on different HSL integers are not equal.

With --strict, exits 1 when the colours differ (CI gating).

Example:
    uv run colour-tool compare 'rgb(150, 50, 60)' 'hsl(354, 50%, 39%)'
    uv run colour-tool compare '#808080' gray --strict --json
"""

from colour_checker.core.convert import to_hsl
from colour_checker.core.palette import format_colour, parse_colour
from colour_checker.core.types import Command, Report

command = Command(
    name='compare',
    help='Compare two colours for equality via their HSL form.',
)


def add_arguments(parser) -> None:
    parser.add_argument('a', metavar='A', help='First colour')
    parser.add_argument('b', metavar='B', help='Second colour')
    parser.add_argument('-s', '--strict', action='store_true', help='Exit 1 if the colours differ')


@command.run
def run(report: Report, args) -> None:
    a = parse_colour(args.a)
    b = parse_colour(args.b)
    entry = f'{args.a} == {args.b}'

    report.add(
        entry,
        {
            'a': format_colour(a),
            'b': format_colour(b),
            'a_hsl': format_colour(to_hsl(a)),
            'b_hsl': format_colour(to_hsl(b)),
        },
    )
    if a == b:
        report.record_pass(entry)
    else:
        report.record_fail(entry)
