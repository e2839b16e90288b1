"""Prometheus metrics for analysis outcomes, rule health and data-source failures"""

from prometheus_client import Counter, Histogram
from money_mirror.domain.models import AnalysisResult

# Analysis metrics
analysis_counter = Counter(
    "money_mirror_analysis_total",
    "Total contradiction analyses run",
    ["outcome"],  # findings | empty
)

finding_counter = Counter(
    "money_mirror_findings_total",
    "Findings emitted by rule and severity",
    ["rule", "severity"],
)

rule_failure_counter = Counter(
    "money_mirror_rule_failures_total",
    "Detector rules that raised during evaluation",
    ["rule"],
)

assessment_counter = Counter(
    "money_mirror_assessment_total",
    "Assessments scored by resulting style code",
    ["style_code"],
)

# Snapshot source metrics
resolution_counter = Counter(
    "money_mirror_resolutions_total",
    "Findings resolved by outcome",
    ["outcome"],
)

snapshot_fetch_failures_counter = Counter(
    "snapshot_fetch_failures_total",
    "Failed snapshot source calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(result: AnalysisResult) -> None:
    """Record finding distribution and rule failures for one analysis"""
    analysis_counter.labels(outcome="empty" if result.is_empty else "findings").inc()

    for finding in result.findings:
        finding_counter.labels(rule=finding.rule or "unknown", severity=finding.severity.value).inc()

    for failure in result.failures:
        rule_failure_counter.labels(rule=failure.rule).inc()


def record_assessment(style_code: str) -> None:
    assessment_counter.labels(style_code=style_code).inc()


def record_resolution(outcome: str) -> None:
    resolution_counter.labels(outcome=outcome).inc()
