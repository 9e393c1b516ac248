"""Report builder: text and JSON output for store-palette results."""

import json
from typing import Any

from store_palette.core.hexcolor import format_hex
from store_palette.core.policy import Palette
from store_palette.core.types import AuditCheck, Color, Report


def palette_data(palette: Palette, inputs: tuple[Color, Color, Color]) -> dict[str, Any]:
    """Section payload for a derived palette and the inputs it came from."""
    return {
        'input': {role: format_hex(c) for role, c in zip(('primary', 'secondary', 'accent'), inputs)},
        'colors': palette.to_dict(),
        'text': {role: format_hex(c) for role, c in palette.text_colors().items()},
        'adjusted': list(palette.adjusted),
    }


def _format_colors(data: dict[str, Any]) -> list[str]:
    colors = data['colors']
    text = data.get('text', {})
    inputs = data.get('input', {})
    adjusted = set(data.get('adjusted', []))
    lines = []
    for role, hex_value in colors.items():
        line = f'  {role:<10} {hex_value}'
        if role in text:
            line += f'  text {text[role]}'
        if role in adjusted:
            line += f'  (adjusted from {inputs.get(role, "?")})'
        lines.append(line)
    return lines


def _format_matrix(data: dict[str, Any]) -> list[str]:
    labels = data['labels']
    width = max(len(label) for label in labels) + 2
    lines = ['  ' + ' ' * width + ''.join(f'{label[:7]:>8}' for label in labels)]
    for label, row in zip(labels, data['ratios']):
        lines.append(f'  {label:<{width}}' + ''.join(f'{ratio:>8.2f}' for ratio in row))
    return lines


def _format_records(records: list[dict[str, Any]]) -> list[str]:
    if not records:
        return ['  (no stores)']
    return [f'  {r.get("id") or "?":<14} {r.get("createdAt") or "":<25} {r.get("name") or ""}' for r in records]


def _format_check(check: AuditCheck) -> str:
    mark = '✓' if check.passed else '✗'
    op = '>=' if check.kind == 'min' else '<='
    return f'  {check.name:<20} {check.value:>6}  (need {op} {check.threshold})  {mark}'


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    for name, data in report.sections.items():
        lines.append(f'── {name}')
        for key, value in data.items():
            if key == 'colors':
                lines.extend(_format_colors(data))
            elif key in ('text', 'input', 'adjusted') and 'colors' in data:
                pass  # folded into the colour rows
            elif key == 'ratios':
                lines.extend(_format_matrix(data))
            elif key == 'labels':
                pass  # matrix header
            elif key == 'records':
                lines.extend(_format_records(value))
            elif isinstance(value, dict):
                for k, v in value.items():
                    lines.append(f'  {key}.{k}: {v}')
            else:
                lines.append(f'  {key}: {value}')
        lines.append('')

    if report.checks:
        lines.append('── checks')
        lines.extend(_format_check(c) for c in report.checks)
        lines.append('')
        total = report.pass_count + report.fail_count
        lines.append(f'PASS {report.pass_count}/{total} checks  FAIL {report.fail_count}/{total} checks')
    return '\n'.join(lines).rstrip('\n')


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'command': report.command}
    obj.update(report.sections)
    if report.checks:
        obj['checks'] = [
            {
                'name': c.name,
                'value': c.value,
                'threshold': c.threshold,
                'kind': c.kind,
                'pass': c.passed,
            }
            for c in report.checks
        ]
        obj['summary'] = {
            'total': report.pass_count + report.fail_count,
            'pass': report.pass_count,
            'fail': report.fail_count,
        }
    return json.dumps(obj, indent=2)
