"""Storefront documents: theme extraction and a JSON-file record store.

A storefront document is whatever JSON the generator returned, plus
`id`, `createdAt` and `originalPrompt`. Only `theme.primary`,
`theme.secondary` and `theme.accent` matter to the palette engine.

StoreRecords keeps every document in one JSON array, newest first.
"""

import json
import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from store_palette.core.hexcolor import ColorParseError, parse_hex
from store_palette.core.types import Color

THEME_ROLES = ('primary', 'secondary', 'accent')


class StoreFileError(RuntimeError):
    """Raised when the record file exists but cannot be read as a JSON list."""


def theme_from_document(
    doc: dict[str, Any], fallback: str | None = None, prog: str = 'store-palette'
) -> tuple[Color, Color, Color]:
    """Parse the three theme colours of a storefront document.

    Without a fallback any missing or malformed colour raises
    ColorParseError. With one, the fallback is used in its place and a
    warning prefixed with prog goes to stderr.
    """
    fallback_color = parse_hex(fallback) if fallback is not None else None
    theme = doc.get('theme') if isinstance(doc, dict) else None
    if not isinstance(theme, dict):
        theme = {}

    colors = []
    for role in THEME_ROLES:
        raw = theme.get(role)
        try:
            colors.append(parse_hex(raw))
        except ColorParseError:
            if fallback_color is None:
                raise
            print(f'{prog}: substituting {fallback} for theme.{role} ({raw!r})', file=sys.stderr)
            colors.append(fallback_color)
    return colors[0], colors[1], colors[2]


def new_id() -> str:
    return str(int(time.time() * 1000))


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class StoreRecords:
    """Keyed storefront records persisted in a single JSON file."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def _read(self) -> list[dict[str, Any]]:
        if not self.path.is_file():
            return []
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreFileError(f'cannot read {self.path}: {e}') from e
        if not isinstance(data, list):
            raise StoreFileError(f'{self.path} does not hold a JSON list')
        if not all(isinstance(r, dict) for r in data):
            raise StoreFileError(f'{self.path} holds a record that is not a JSON object')
        return data

    def _write(self, records: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + '.tmp')
        tmp.write_text(json.dumps(records, indent=2), encoding='utf-8')
        os.replace(tmp, self.path)

    def create(self, doc: dict[str, Any]) -> dict[str, Any]:
        """Store a document, newest first. Replaces a record with the same id."""
        record = dict(doc)
        record.setdefault('id', new_id())
        record.setdefault('createdAt', now_iso())
        record['id'] = str(record['id'])
        others = [r for r in self._read() if r.get('id') != record['id']]
        self._write([record, *others])
        return record

    def list(self) -> list[dict[str, Any]]:
        return self._read()

    def get(self, store_id: str) -> dict[str, Any] | None:
        return next((r for r in self._read() if r.get('id') == store_id), None)

    def delete(self, store_id: str) -> bool:
        records = self._read()
        kept = [r for r in records if r.get('id') != store_id]
        if len(kept) == len(records):
            return False
        self._write(kept)
        return True

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
