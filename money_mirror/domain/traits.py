"""Trait scorer - reduces assessment answers to trait scores and a style code"""

from typing import Dict, List, Sequence
from money_mirror.domain.assessment import QUESTION_BANK
from money_mirror.domain.exceptions import InvalidInputError
from money_mirror.domain.models import (
    AssessmentAnswer,
    AssessmentQuestion,
    AssessmentResult,
    Dimension,
    TraitScore,
)

MIN_SCORE = -2
MAX_SCORE = 2

# Letter for each dimension by sign: (negative pole, positive-or-zero pole)
POLARITY: Dict[Dimension, tuple[str, str]] = {
    Dimension.EI: ("I", "E"),
    Dimension.SN: ("S", "N"),
    Dimension.TF: ("T", "F"),
    Dimension.JP: ("J", "P"),
}

DIMENSION_ORDER: List[Dimension] = [Dimension.EI, Dimension.SN, Dimension.TF, Dimension.JP]


def letter_for(dimension: Dimension, value: int) -> str:
    """Zero resolves to the positive pole on every dimension."""
    negative, positive = POLARITY[dimension]
    return positive if value >= 0 else negative


def derive_style_code(scores: Sequence[TraitScore]) -> str:
    by_dimension = {s.dimension: s.value for s in scores}
    return "".join(letter_for(d, by_dimension[d]) for d in DIMENSION_ORDER)


def score_assessment(
    answers: Sequence[AssessmentAnswer],
    questions: Sequence[AssessmentQuestion] = QUESTION_BANK,
) -> AssessmentResult:
    """
    Sum answer scores per dimension and derive the 4-letter style code.

    Every question in the bank must be answered exactly once. Contextual
    (demographic) answers are returned separately and never contribute to a
    trait score.

    Raises:
        InvalidInputError: wrong answer count, unknown or repeated question,
            dimension mismatch, out-of-range score, or a dimension without any
            scoring answer
    """
    if len(answers) != len(questions):
        raise InvalidInputError(f"Expected {len(questions)} answers, got {len(answers)}")

    bank = {q.id: q for q in questions}
    totals: Dict[Dimension, int] = {d: 0 for d in DIMENSION_ORDER}
    scoring_counts: Dict[Dimension, int] = {d: 0 for d in DIMENSION_ORDER}
    contextual: Dict[int, int] = {}
    seen = set()

    for answer in answers:
        question = bank.get(answer.question_id)
        if question is None:
            raise InvalidInputError(f"Unknown question id {answer.question_id}")
        if answer.question_id in seen:
            raise InvalidInputError(f"Question {answer.question_id} answered more than once")
        seen.add(answer.question_id)

        if answer.dimension != question.dimension:
            raise InvalidInputError(
                f"Question {answer.question_id} belongs to {question.dimension.value}, "
                f"answer tagged {answer.dimension.value}"
            )
        if not MIN_SCORE <= answer.score <= MAX_SCORE:
            raise InvalidInputError(f"Score {answer.score} out of range for question {answer.question_id}")

        if question.contextual:
            if answer.score != 0:
                raise InvalidInputError(f"Contextual question {answer.question_id} must score 0")
            contextual[answer.question_id] = answer.score
            continue

        totals[question.dimension] += answer.score
        scoring_counts[question.dimension] += 1

    missing = [d.value for d in DIMENSION_ORDER if scoring_counts[d] == 0]
    if missing:
        raise InvalidInputError(f"No scoring answers for dimension(s): {', '.join(missing)}")

    scores = [TraitScore(dimension=d, value=totals[d]) for d in DIMENSION_ORDER]
    return AssessmentResult(
        style_code=derive_style_code(scores),
        scores=scores,
        contextual_answers=contextual,
    )
