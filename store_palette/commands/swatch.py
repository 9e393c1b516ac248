"""Render a derived palette as a PNG swatch.

One vertical band per palette colour, in the order primary, secondary,
accent, light, dark, muted. Each band is labelled with its role and hex
value, drawn in that band's accessible text colour, so the swatch doubles
as a visual check of the text colour choice.

Takes the same colour inputs as `palette`.

Example:
    uv run store-palette swatch ./palette.png '#3366cc' '#114488' '#ffee00'
    uv run store-palette swatch ./palette.png --store 1718000000000
"""

import argparse
import os

from PIL import Image, ImageDraw, ImageFont

from store_palette.commands.palette import load_document
from store_palette.core.policy import Palette, derive_palette
from store_palette.core.report import palette_data
from store_palette.core.store import theme_from_document
from store_palette.core.types import Command, Report

command = Command(
    name='swatch',
    help='Render the derived palette as a labelled PNG swatch.',
)

BAND_WIDTH = 120
LABEL_MARGIN = 8


def render_swatch(palette: Palette, path: str, band: int = BAND_WIDTH) -> Image.Image:
    """Draw the palette bands and save them to path. Returns the image."""
    if band < 1:
        raise ValueError(f'band must be at least 1 pixel, got {band}')
    colors = palette.colors()
    text_colors = palette.text_colors()
    image = Image.new('RGB', (band * len(colors), band), (255, 255, 255))
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    for i, (role, color) in enumerate(colors.items()):
        x = i * band
        draw.rectangle((x, 0, x + band - 1, band - 1), fill=tuple(color))
        label = f'{role}\n{palette.to_dict()[role]}'
        draw.multiline_text((x + LABEL_MARGIN, LABEL_MARGIN), label, fill=tuple(text_colors[role]), font=font)

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    image.save(path, format='PNG')
    return image


def band_size(value: str) -> int:
    band = int(value)
    if band < 1:
        raise argparse.ArgumentTypeError(f'band must be at least 1 pixel, got {band}')
    return band


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('output', help='PNG file to write')
    parser.add_argument('colors', nargs='*', metavar='HEX', help='primary secondary accent')
    parser.add_argument('-f', '--file', help='Storefront JSON document to read the theme from')
    parser.add_argument('--store', metavar='ID', help='Stored storefront id to read the theme from')
    parser.add_argument('--fallback', metavar='HEX', help='Colour to substitute for malformed theme colours')
    parser.add_argument(
        '--band', type=band_size, default=BAND_WIDTH, help=f'Band size in pixels (default {BAND_WIDTH})'
    )


@command.run
def run(args, report: Report) -> None:
    doc = load_document(args)
    fallback = getattr(args, 'fallback', None)
    inputs = theme_from_document(doc, fallback=fallback, prog=report.command)
    palette = derive_palette(*inputs)
    image = render_swatch(palette, args.output, band=args.band)
    report.add('palette', palette_data(palette, inputs))
    report.add('swatch', {'file': args.output, 'width': image.width, 'height': image.height})
