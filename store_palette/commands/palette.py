"""Derive the accessible palette from three brand colours.

Takes primary, secondary and accent either as three hex arguments, from a
storefront JSON document (--file), or from a stored storefront (--store ID).
Reports the six palette colours, the text colour to use on each, which
inputs were adjusted, and the accessibility checks.

Each input is adjusted at most once:
  primary    contrast vs white < 4.5  -> darken 40% (light) / lighten 30% (dark)
  secondary  contrast vs white < 3.0  -> darken 30% (light) / darken 20% (dark)
  accent     luminance > 0.8          -> darken 20%
light, dark and muted are lighten 85%, darken 60% and lighten 70% of the
adjusted primary.

A malformed colour aborts with an error unless --fallback is given, in
which case the fallback colour replaces it (with a warning on stderr).

Example:
    uv run store-palette palette '#3366cc' '#114488' '#ffee00'
    uv run store-palette palette --file store.json --fallback '#808080' --json
    uv run store-palette palette --store 1718000000000 --strict
"""

import json
import os
import sys
from typing import Any

from store_palette.core.audit import audit_palette
from store_palette.core.env import db_path
from store_palette.core.policy import derive_palette
from store_palette.core.report import palette_data
from store_palette.core.store import StoreRecords, theme_from_document
from store_palette.core.types import Command, Report

command = Command(
    name='palette',
    help='Derive the accessible palette from primary, secondary and accent colours.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('colors', nargs='*', metavar='HEX', help='primary secondary accent')
    parser.add_argument('-f', '--file', help='Storefront JSON document to read the theme from')
    parser.add_argument('--store', metavar='ID', help='Stored storefront id to read the theme from')
    parser.add_argument('--fallback', metavar='HEX', help='Colour to substitute for malformed theme colours')


def load_document(args) -> dict[str, Any]:
    """Resolve the storefront document named by the command line."""
    prog = getattr(args, 'command', None) or 'palette'
    if getattr(args, 'store', None):
        doc = StoreRecords(db_path()).get(args.store)
        if doc is None:
            print(f'{prog}: no stored storefront with id {args.store}', file=sys.stderr)
            sys.exit(1)
        return doc
    if getattr(args, 'file', None):
        if not os.path.isfile(args.file):
            print(f'{prog}: file not found: {args.file}', file=sys.stderr)
            sys.exit(1)
        with open(args.file, encoding='utf-8') as f:
            try:
                doc = json.load(f)
            except json.JSONDecodeError as e:
                print(f'{prog}: {args.file} is not valid JSON: {e}', file=sys.stderr)
                sys.exit(1)
        if not isinstance(doc, dict):
            print(f'{prog}: {args.file} does not hold a JSON object', file=sys.stderr)
            sys.exit(1)
        return doc
    colors = getattr(args, 'colors', None) or []
    if len(colors) != 3:
        print(f'{prog}: expected PRIMARY SECONDARY ACCENT, --file or --store', file=sys.stderr)
        sys.exit(2)
    return {'theme': dict(zip(('primary', 'secondary', 'accent'), colors))}


def add_palette(doc: dict[str, Any], report: Report, fallback: str | None = None) -> None:
    """Derive the palette of a storefront document and record it on the report."""
    inputs = theme_from_document(doc, fallback=fallback, prog=report.command)
    palette = derive_palette(*inputs)
    if doc.get('name') or doc.get('id'):
        report.add('store', {'id': doc.get('id'), 'name': doc.get('name')})
    report.add('palette', palette_data(palette, inputs))
    for check in audit_palette(palette):
        report.record(check)


@command.run
def run(args, report: Report) -> None:
    add_palette(load_document(args), report, fallback=getattr(args, 'fallback', None))
