# framecheck/checks/report.py
# plain-text design report

from datetime import datetime, timezone
from typing import Optional, Sequence

from .base import ElementDesignResult

_MOMENT_WORDS = ('Moment', 'Bending', 'Flexural', 'Lateral-Torsional')


def _unit(check) -> str:
    if check.controlling_case == 'Combined':
        return ''
    if any(word in check.check_type for word in _MOMENT_WORDS):
        return ' kNm'
    return ' kN'


def design_report(
    results: Sequence[ElementDesignResult],
    generated: Optional[datetime] = None,
) -> str:
    """
    Render design results as a text report.

    The report has a SUMMARY table (one row per element with status, overall
    ratio and controlling check) followed by DETAILED RESULTS listing every
    check with ratio, capacity, demand, equation and notes, then the
    element's recommendations.

    Args:
        results: Element design results, reported in the given order
        generated: Timestamp printed in the header (now, UTC, if None)
    """
    generated = generated or datetime.now(timezone.utc)
    code = results[0].design_code if results else 'N/A'

    lines = [
        'STRUCTURAL DESIGN REPORT',
        f'Generated: {generated.isoformat()}',
        f'Design Code: {code}',
        '',
        'SUMMARY',
        f"{'Element':<10} {'Status':<8} {'Max Ratio':<10} {'Controlling Check':<25}",
        '-' * 65,
    ]
    for result in results:
        controlling = result.controlling_check
        name = controlling.check_type if controlling else '-'
        lines.append(
            f'{result.element_id:<10} {result.overall_status.value:<8} '
            f'{result.overall_ratio:<10.3f} {name:<25}'.rstrip()
        )

    lines += ['', 'DETAILED RESULTS', '']
    for result in results:
        lines.append(f'Element: {result.element_id}')
        lines.append(f'Overall Status: {result.overall_status.value} ({result.overall_ratio:.3f})')
        lines.append('')
        for check in result.checks:
            unit = _unit(check)
            lines.append(f'  {check.check_type}:')
            lines.append(f'    Ratio: {check.ratio:.3f} ({check.status.value})')
            lines.append(f'    Capacity: {check.capacity:.1f}{unit}')
            lines.append(f'    Demand: {check.demand:.1f}{unit}')
            lines.append(f'    Equation: {check.equation}')
            if check.notes:
                lines.append(f"    Notes: {', '.join(check.notes)}")
            lines.append('')
        if result.recommendations:
            lines.append('  Recommendations:')
            lines += [f'    - {advice}' for advice in result.recommendations]
        lines.append('')

    return '\n'.join(lines) + '\n'
