"""Tone adapter - frames suggestions for logic-oriented vs values-oriented styles"""

from dataclasses import replace
from money_mirror.domain.models import Contradiction, FindingType

VALUES_FRAMING = "Remember, small changes align with your values and long-term happiness."


def prefers_values_framing(style_code: str | None) -> bool:
    """True for Feeling (F) styles: third letter of a well-formed code"""
    code = (style_code or "").upper()
    return len(code) == 4 and code[2] == "F"


def adapt_text(suggestion: str, style_code: str | None) -> str:
    if not suggestion or not prefers_values_framing(style_code):
        return suggestion
    if suggestion.rstrip().endswith(VALUES_FRAMING):
        return suggestion
    return f"{suggestion.rstrip()} {VALUES_FRAMING}"


def adapt_suggestion(finding: Contradiction, style_code: str | None) -> Contradiction:
    """
    Return the finding with its suggestion framed for the style code.

    Thinking (T) styles keep the original logic-framed wording. Idempotent:
    adapting an already adapted finding returns it unchanged.
    """
    adapted = adapt_text(finding.suggestion, style_code)
    if adapted == finding.suggestion:
        return finding
    return replace(finding, suggestion=adapted)


def compose_nudge(finding: Contradiction, style_code: str | None) -> str:
    """Short check-in message for a finding, direct for T styles, empathetic otherwise"""
    code = (style_code or "").upper()
    analytical = len(code) == 4 and code[2] == "T"
    stated = finding.stated.description
    actual = finding.actual.description

    if finding.type == FindingType.STATED_VS_ACTUAL:
        if analytical:
            return f"I noticed a pattern: {actual}. This doesn't match your stated {stated}. Worth analyzing?"
        return f"I wanted to check in: {actual}. I remember you mentioned {stated}. How are you feeling about this?"

    if finding.type == FindingType.GOAL_VS_BEHAVIOR:
        if analytical:
            return f"Data point: {actual}. This may impact your goal: {stated}. Let's strategize."
        return (
            f"I see you're working toward {stated}, but {actual}. "
            "No judgment - let's talk about what's driving this."
        )

    if finding.type == FindingType.POSITIVE_PATTERN:
        return f"Worth celebrating: {actual}."

    return f"I noticed something worth discussing: {actual}"
