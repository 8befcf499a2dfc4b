"""Report builder: text and JSON output for colour-tool results."""

import json
from typing import Any

from colour_checker.core.types import Report


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = [f'colour-tool: {report.command} ({len(report.entries)} entries)', '']

    for entry, data in report.entries.items():
        lines.append(f'── {entry}')
        if 'hsl' in data:
            line = f'  hsl: {data["hsl"]}'
            if 'hex' in data:
                line += f'  hex: {data["hex"]}'
            lines.append(line)
        if 'top' in data:
            parts = [f'{c["hsl"]}:{c["pct"]:.1f}%' for c in data['top'][:5]]
            lines.append(f'  census: {", ".join(parts)}  ({data.get("samples", "?")} samples)')
        if 'expected' in data:
            got = data.get('actual', '?')
            lines.append(f'  expected {data["expected"]}  got {got}')
        if 'pass' in data:
            mark = '✓ equal' if data['pass'] else '✗ not equal'
            lines.append(f'  {mark}')
        for k, v in data.items():
            if k in ('hsl', 'hex', 'top', 'samples', 'expected', 'actual', 'pass'):
                continue
            # Generic fallback
            lines.append(f'  {k}: {v}')
        lines.append('')

    total = report.pass_count + report.fail_count
    if total > 0:
        lines.append(f'PASS {report.pass_count}/{total}  FAIL {report.fail_count}/{total}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'command': report.command}
    obj['entries'] = [{'name': entry, **data} for entry, data in report.entries.items()]
    obj['summary'] = {
        'total': report.pass_count + report.fail_count,
        'pass': report.pass_count,
        'fail': report.fail_count,
    }
    return json.dumps(obj, indent=2)
