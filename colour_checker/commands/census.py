"""Count the HSL colours of an image. Output the most common with percentages.

Samples up to 10,000 pixels (COLOUR_TOOL_SAMPLES or --samples), converts
them to HSL in one vectorised pass, and reports the top N (default 10)
HSL values. Pixels that differ in RGB but share an HSL triple are counted
together, the same way colour equality treats them.

If --expect is given, the dominant HSL value is compared with the expected
colour (any notation) and reported as pass/fail.

Example:
    uv run colour-tool census screenshot.png
    uv run colour-tool census screenshot.png --expect '#f8fafc' --top 5 --json
"""

import argparse

import numpy as np
from PIL import Image

from colour_checker.core.convert import rgb_array_to_hsl
from colour_checker.core.env import DEFAULT_SAMPLES
from colour_checker.core.palette import format_colour, parse_colour
from colour_checker.core.types import Command, Hsl, Report

command = Command(
    name='census',
    help='Count HSL colours across sampled image pixels. Optionally check the dominant one.',
)


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f'must be at least 1, got {value}')
    return value


def add_arguments(parser) -> None:
    parser.add_argument('image', help='Path to image (PNG/JPG)')
    parser.add_argument('-e', '--expect', metavar='COLOUR', help='Expected dominant colour')
    parser.add_argument('-t', '--top', type=_positive_int, default=10, metavar='N', help='Number of colours to list')
    parser.add_argument('-n', '--samples', type=_positive_int, default=None, metavar='N', help='Pixel sample cap')


def hsl_census(image: Image.Image, n_samples: int = DEFAULT_SAMPLES) -> tuple[list[tuple[Hsl, int]], int]:
    """Return (HSL value, count) pairs, most common first, and the sample total."""
    pixels = np.array(image.convert('RGB')).reshape(-1, 3)

    if len(pixels) > n_samples:
        indices = np.random.default_rng(42).choice(len(pixels), n_samples, replace=False)
        pixels = pixels[indices]

    hsl = rgb_array_to_hsl(pixels)
    unique, counts = np.unique(hsl, axis=0, return_counts=True)
    # Stable sort keeps ties in HSL order
    order = np.argsort(-counts, kind='stable')
    ranked = [(Hsl(*(int(v) for v in unique[i])), int(counts[i])) for i in order]
    return ranked, int(counts.sum())


@command.run
def run(report: Report, args) -> None:
    with Image.open(args.image) as image:
        ranked, total = hsl_census(image, DEFAULT_SAMPLES if args.samples is None else args.samples)
    if not ranked:
        raise ValueError(f'image has no pixels: {args.image}')

    top = [{'hsl': format_colour(hsl), 'pct': round(count / total * 100, 1)} for hsl, count in ranked[: args.top]]
    report.add(args.image, {'top': top, 'samples': total})

    if args.expect:
        expected = parse_colour(args.expect)
        dominant = ranked[0][0]
        report.add(args.image, {'expected': format_colour(expected), 'actual': format_colour(dominant)})
        if expected == dominant:
            report.record_pass(args.image)
        else:
            report.record_fail(args.image)
