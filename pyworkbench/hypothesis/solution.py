"""
Segment test solution types.

SegmentTestSolution wraps Result[SegmentTestParams] and provides an R
print.htest-style summary() plus the tagged mapping of to_dict().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pyworkbench.core.result import Result
from pyworkbench.hypothesis._common import (
    STATISTIC_LABELS,
    TEST_NAMES,
    TWO_PROPORTION_Z,
    WELCH_T,
    GroupSummary,
    SegmentTestParams,
)

if TYPE_CHECKING:
    from pyworkbench.hypothesis.design import SegmentTestDesign


@dataclass
class SegmentTestSolution:
    """
    User-facing segment test results.

    `ok` tells whether a test was computed. Failed tests only carry
    `reason` and `warnings`; all statistic properties are None.
    """
    _result: Result[SegmentTestParams]
    _design: 'SegmentTestDesign | None'

    @property
    def ok(self) -> bool:
        return self._result.params.ok

    @property
    def reason(self) -> str | None:
        """Why no test was computed (ok=False only)."""
        return self._result.params.reason

    @property
    def test_type(self) -> str | None:
        """'welch-t', 'two-proportion-z' or 'chi-square'."""
        return self._result.params.test_type

    @property
    def test_name(self) -> str | None:
        return TEST_NAMES.get(self.test_type)

    @property
    def statistic_label(self) -> str | None:
        return STATISTIC_LABELS.get(self.test_type)

    @property
    def statistic(self) -> float | None:
        return self._result.params.statistic

    @property
    def degrees_of_freedom(self) -> float | None:
        """None for the z-test."""
        return self._result.params.degrees_of_freedom

    @property
    def p_value(self) -> float | None:
        return self._result.params.p_value

    @property
    def interpretation(self) -> str | None:
        return self._result.params.interpretation

    @property
    def groups(self) -> tuple[GroupSummary, ...]:
        return self._result.params.groups

    @property
    def effect_size(self) -> float | None:
        """Welch only: mean of the first group minus mean of the second."""
        return self._result.params.effect_size

    @property
    def effect_label(self) -> str | None:
        return self._result.params.effect_label

    @property
    def target_category(self) -> str | None:
        return self._result.params.target_category

    @property
    def target_category_label(self) -> str | None:
        return self._result.params.target_category_label

    @property
    def categories(self) -> tuple[tuple[str, str], ...]:
        return self._result.params.categories

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    def to_dict(self) -> dict[str, Any]:
        """Tagged mapping with camelCase keys, ready for JSON."""
        p = self._result.params
        if not p.ok:
            return {
                'ok': False,
                'reason': p.reason,
                'warnings': list(self.warnings),
            }

        out: dict[str, Any] = {
            'ok': True,
            'testType': p.test_type,
            'testName': self.test_name,
            'statisticLabel': self.statistic_label,
            'statistic': p.statistic,
        }
        if p.degrees_of_freedom is not None:
            out['degreesOfFreedom'] = p.degrees_of_freedom
        out['pValue'] = p.p_value
        out['interpretation'] = p.interpretation
        if p.effect_size is not None:
            out['effectSize'] = p.effect_size
            out['effectLabel'] = p.effect_label
        if p.target_category is not None:
            out['targetCategory'] = p.target_category
            out['targetCategoryLabel'] = p.target_category_label
        if p.categories:
            out['categories'] = [
                {'value': value, 'label': label} for value, label in p.categories
            ]
        out['groups'] = [group.to_dict() for group in p.groups]
        out['warnings'] = list(self.warnings)
        return out

    def summary(self) -> str:
        """
        Format like R's print.htest.

        Produces output like:
            Welch Two Sample t-test

        data:  price by region (North, South)
        t = 2.2345, df = 17.43, p-value = 0.03891
        Significant difference (alpha = 0.05)
        sample estimates:
                 North          South
              5.123456       2.789012
        """
        p = self._result.params
        lines = []

        if not p.ok:
            lines.append("\tSegment test not computed")
            lines.append("")
            lines.append(f"reason: {p.reason}")
        else:
            lines.append(f"\t{self.test_name}")
            lines.append("")
            if self._design is not None:
                selected = ", ".join(g.label for g in p.groups)
                lines.append(
                    f"data:  {self._design.target_column} by "
                    f"{self._design.segment_column} ({selected})"
                )

            parts = [f"{self.statistic_label} = {p.statistic:.5g}"]
            if p.degrees_of_freedom is not None:
                parts.append(f"df = {p.degrees_of_freedom:.5g}")
            parts.append(f"p-value = {_format_pvalue(p.p_value)}")
            lines.append(", ".join(parts))
            lines.append(p.interpretation)

            if p.test_type == WELCH_T:
                lines.append("sample estimates:")
                lines.append(" ".join(f"{g.label:>14.14s}" for g in p.groups))
                lines.append(" ".join(f"{g.mean:14.7g}" for g in p.groups))
            elif p.test_type == TWO_PROPORTION_Z:
                lines.append(f'sample estimates (share of "{p.target_category_label}"):')
                lines.append(" ".join(f"{g.label:>14.14s}" for g in p.groups))
                lines.append(" ".join(f"{g.success_ratio:14.7g}" for g in p.groups))

        for warning in self.warnings:
            lines.append(f"Warning: {warning}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        if not p.ok:
            return f"SegmentTestSolution(ok=False, reason={p.reason!r})"
        return (
            f"SegmentTestSolution(test_type={p.test_type!r}, "
            f"{self.statistic_label}={p.statistic:.4g}, p_value={p.p_value:.4g})"
        )


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"
