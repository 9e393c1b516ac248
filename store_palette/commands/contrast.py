"""WCAG contrast ratio between two colours.

Reports both relative luminances and the ratio, and checks it against
WCAG AA for normal text (4.5) and for large text and UI components (3.0).
The ratio is symmetric, so argument order does not matter.

Example:
    uv run store-palette contrast '#ffffff' '#767676'
    uv run store-palette contrast 000000 ffffff --json
"""

from store_palette.core.contrast import contrast_ratio, relative_luminance
from store_palette.core.hexcolor import format_hex, parse_hex
from store_palette.core.types import AuditCheck, Command, Report

command = Command(
    name='contrast',
    help='WCAG contrast ratio between two colours, with AA pass/fail.',
)

AA_NORMAL = 4.5
AA_LARGE = 3.0


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('first', metavar='HEX')
    parser.add_argument('second', metavar='HEX')


@command.run
def run(args, report: Report) -> None:
    first = parse_hex(args.first)
    second = parse_hex(args.second)
    ratio = contrast_ratio(first, second)
    report.add(
        'contrast',
        {
            'first': format_hex(first),
            'second': format_hex(second),
            'luminance': {
                'first': round(relative_luminance(first), 4),
                'second': round(relative_luminance(second), 4),
            },
            'ratio': round(ratio, 2),
        },
    )
    for name, threshold in (('aa-normal-text', AA_NORMAL), ('aa-large-text', AA_LARGE)):
        report.record(AuditCheck(name=name, value=round(ratio, 2), threshold=threshold, passed=ratio >= threshold))
