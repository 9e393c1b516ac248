"""Full contrast audit of a derived palette.

Derives the palette (same inputs as `palette`), then prints the pairwise
WCAG contrast matrix of the six palette colours plus black and white, and
the accessibility checks:

  primary-on-white     >= 4.5
  secondary-on-white   >= 3.0
  accent-brightness    luminance <= 0.8
  text-on-<role>       chosen text colour vs surface >= 4.5

The palette policy adjusts each input only once, so a mid-tone input can
still fail its check after adjustment. Use --strict to turn any failure
into exit status 1 (CI gating).

Example:
    uv run store-palette audit '#3366cc' '#114488' '#ffee00'
    uv run store-palette audit --store 1718000000000 --json --strict
"""

from store_palette.commands.palette import add_palette, arguments as palette_arguments, load_document
from store_palette.core.audit import contrast_matrix
from store_palette.core.hexcolor import BLACK, WHITE, parse_hex
from store_palette.core.types import Command, Report

command = Command(
    name='audit',
    help='Pairwise contrast matrix and accessibility checks for a derived palette.',
)

command.arguments(palette_arguments)


@command.run
def run(args, report: Report) -> None:
    add_palette(load_document(args), report, fallback=getattr(args, 'fallback', None))

    colors = report.sections['palette']['colors']
    labels = [*colors, 'black', 'white']
    matrix = contrast_matrix([*(parse_hex(h) for h in colors.values()), BLACK, WHITE])
    report.add('matrix', {'labels': labels, 'ratios': matrix.round(2).tolist()})
