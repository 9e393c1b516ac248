"""Pick black or white text for a background colour.

Black when the background's relative luminance is above 0.5, white
otherwise. Reports the resulting contrast ratio.

Example:
    uv run store-palette text '#ffee00'
"""

from store_palette.core.adjust import accessible_text_color, is_light
from store_palette.core.contrast import contrast_ratio
from store_palette.core.hexcolor import format_hex, parse_hex
from store_palette.core.types import Command, Report

command = Command(
    name='text',
    help='Accessible text colour (black or white) for a background.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('background', metavar='HEX')


@command.run
def run(args, report: Report) -> None:
    bg = parse_hex(args.background)
    text = accessible_text_color(bg)
    report.add(
        'text',
        {
            'background': format_hex(bg),
            'light': is_light(bg),
            'text': format_hex(text),
            'ratio': round(contrast_ratio(text, bg), 2),
        },
    )
