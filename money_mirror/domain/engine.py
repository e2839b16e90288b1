"""Contradiction rule engine - runs detector rules and merges their findings"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple
from money_mirror.domain.exceptions import RuleEvaluationError
from money_mirror.domain.models import Contradiction, RuleFailure, Severity, SeverityBreakdown
from money_mirror.domain.rules import Rule, RuleContext, default_rules

SEVERITY_RANK = {Severity.HIGH: 3, Severity.MEDIUM: 2, Severity.LOW: 1}


@dataclass
class EngineOutput:
    findings: List[Contradiction]
    failures: List[RuleFailure] = field(default_factory=list)


def sort_by_severity(findings: Iterable[Contradiction]) -> List[Contradiction]:
    """High first, then medium, then low; ties keep emission order (sorted() is stable)"""
    return sorted(findings, key=lambda f: SEVERITY_RANK[f.severity], reverse=True)


def severity_breakdown(findings: Iterable[Contradiction]) -> SeverityBreakdown:
    breakdown = SeverityBreakdown()
    for finding in findings:
        if finding.severity == Severity.HIGH:
            breakdown.high += 1
        elif finding.severity == Severity.MEDIUM:
            breakdown.medium += 1
        else:
            breakdown.low += 1
    return breakdown


class ContradictionEngine:
    """
    Evaluates an independent set of rules against one RuleContext.

    A rule that raises is isolated: the error is logged and reported as a
    RuleFailure, and the remaining rules still run. With max_workers > 1 rules
    run on a thread pool; results are merged in rule order either way.
    """

    def __init__(self, rules: Optional[Sequence[Rule]] = None, max_workers: int = 0):
        self.rules: List[Rule] = list(rules) if rules is not None else default_rules()
        self.max_workers = max_workers

    def run(self, ctx: RuleContext) -> EngineOutput:
        if self.max_workers > 1 and len(self.rules) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                outcomes = list(pool.map(lambda rule: self._evaluate(rule, ctx), self.rules))
        else:
            outcomes = [self._evaluate(rule, ctx) for rule in self.rules]

        findings: List[Contradiction] = []
        failures: List[RuleFailure] = []
        for rule_findings, failure in outcomes:
            findings.extend(rule_findings)
            if failure is not None:
                failures.append(failure)

        return EngineOutput(findings=sort_by_severity(findings), failures=failures)

    @staticmethod
    def _evaluate(rule: Rule, ctx: RuleContext) -> Tuple[List[Contradiction], Optional[RuleFailure]]:
        try:
            return list(rule.evaluate(ctx)), None
        except Exception as e:
            error = RuleEvaluationError(rule.name, e)
            logging.warning(
                str(error),
                exc_info=True,
                extra={"step": "rule_evaluation", "rule": rule.name, "user_id": ctx.profile.user_id},
            )
            return [], RuleFailure(rule=rule.name, error=f"{type(e).__name__}: {e}")
