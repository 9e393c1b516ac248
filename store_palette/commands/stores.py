"""List, show, delete or clear stored storefronts.

The record store is one JSON file (STORE_PALETTE_DB, default
.store-palette/stores.json), newest storefront first.

  list          id, creation time and name of every stored storefront
  show ID       one storefront's summary and its derived palette
  delete ID     remove one storefront
  clear         remove every storefront

Example:
    uv run store-palette stores list
    uv run store-palette stores show 1718000000000 --json
    uv run store-palette stores delete 1718000000000
"""

import sys

from store_palette.commands.palette import add_palette
from store_palette.core.env import db_path
from store_palette.core.store import StoreRecords
from store_palette.core.types import Command, Report

command = Command(
    name='stores',
    help='List, show, delete or clear stored storefronts.',
)

ACTIONS = ('list', 'show', 'delete', 'clear')


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('action', choices=ACTIONS)
    parser.add_argument('id', nargs='?', help='Storefront id (show, delete)')
    parser.add_argument('--fallback', metavar='HEX', help='Colour to substitute for malformed theme colours')


@command.run
def run(args, report: Report) -> None:
    path = db_path()
    records = StoreRecords(path)

    if args.action in ('show', 'delete') and not args.id:
        print(f'stores: {args.action} needs a storefront id', file=sys.stderr)
        sys.exit(2)

    if args.action == 'list':
        summary = [
            {'id': r.get('id'), 'createdAt': r.get('createdAt'), 'name': r.get('name')} for r in records.list()
        ]
        report.add('stores', {'path': path, 'records': summary})
    elif args.action == 'show':
        doc = records.get(args.id)
        if doc is None:
            print(f'stores: no stored storefront with id {args.id}', file=sys.stderr)
            sys.exit(1)
        add_palette(doc, report, fallback=args.fallback)
        report.add(
            'store',
            {
                'tagline': doc.get('tagline'),
                'createdAt': doc.get('createdAt'),
                'prompt': doc.get('originalPrompt'),
                'products': len(doc.get('products') or []),
            },
        )
    elif args.action == 'delete':
        report.add('stores', {'path': path, 'deleted': args.id, 'removed': records.delete(args.id)})
    else:
        records.clear()
        report.add('stores', {'path': path, 'cleared': True})
