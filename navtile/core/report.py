"""Report builder: text and JSON output for navtile-tool runs."""

import json
from typing import Any

from navtile.core.types import EncodeReport


def format_text(report: EncodeReport) -> str:
    """Format report as human-readable text."""
    lines = [f'navtile-tool: strategy {report.strategy}', '']

    for tile in report.tiles:
        if 'error' in tile:
            lines.append(f'\u2500\u2500 {tile["image"]}')
            lines.append(f'  error: {tile["error"]}')
            lines.append('')
            continue

        dim = f'{tile["width"]}\u00d7{tile["height"]}'
        lines.append(f'\u2500\u2500 {tile["image"]} ({dim})')
        lines.append(f'  wrote: {tile["output"]} ({tile["bytes"]} bytes)')
        if tile.get('preview'):
            lines.append(f'  preview: {tile["preview"]}')
        total = sum(tile['census'].values())
        if total:
            ranked = sorted(tile['census'].items(), key=lambda x: -x[1])
            parts = [f'{name}:{n / total * 100:.1f}%' for name, n in ranked]
            lines.append(f'  census: {", ".join(parts)}')
        lines.append('')

    if report.calibration is not None:
        cal = report.calibration
        lines.append(f'unmatched colours: {len(cal["unmatched"])} ({cal["unmatched_total"]} pixels)')
        for entry in cal.get('entries', []):
            lines.append(f'    {entry}')
        lines.append('')

    total = report.ok_count + report.error_count
    if total > 0:
        lines.append(f'OK {report.ok_count}/{total} tiles  ERROR {report.error_count}/{total} tiles')
    return '\n'.join(lines)


def format_json(report: EncodeReport) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'strategy': report.strategy,
        'tiles': report.tiles,
    }
    if report.calibration is not None:
        obj['calibration'] = report.calibration

    obj['summary'] = {
        'total': report.ok_count + report.error_count,
        'ok': report.ok_count,
        'error': report.error_count,
    }
    return json.dumps(obj, indent=2)
