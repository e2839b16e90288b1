"""Money Style assessment item bank

20 forced-choice questions, 5 per trait dimension. One item per dimension is a
contextual (demographic) question whose options all score 0; its answer is kept
for context but never moves the trait score.
"""

from typing import Dict, List, Sequence
from money_mirror.domain.models import AssessmentOption, AssessmentQuestion, Dimension

# Pole labels used for option descriptions: (negative pole, positive pole)
_POLE_NAMES: Dict[Dimension, tuple[str, str]] = {
    Dimension.EI: ("Introversion", "Extraversion"),
    Dimension.SN: ("Sensing", "Intuition"),
    Dimension.TF: ("Thinking", "Feeling"),
    Dimension.JP: ("Judging", "Perceiving"),
}


def _scaled(
    question_id: int,
    dimension: Dimension,
    text: str,
    choices: Sequence[str],
    descending: bool = False,
) -> AssessmentQuestion:
    """
    Build a scoring question from five choices ordered on the -2..+2 scale.

    With descending=True the first choice scores +2 (used where the source
    wording leads with the positive pole).
    """
    scores = [2, 1, 0, -1, -2] if descending else [-2, -1, 0, 1, 2]
    negative, positive = _POLE_NAMES[dimension]

    options = []
    for choice, score in zip(choices, scores):
        if score == 0:
            label = "Balanced approach"
        else:
            strength = "Strong" if abs(score) == 2 else "Moderate"
            label = f"{strength} {positive if score > 0 else negative}"
        options.append(AssessmentOption(text=choice, score=score, description=label))

    return AssessmentQuestion(
        id=question_id,
        dimension=dimension,
        question_text=text,
        options=options,
    )


def _contextual(
    question_id: int,
    dimension: Dimension,
    text: str,
    choices: Sequence[str],
    label: str,
) -> AssessmentQuestion:
    return AssessmentQuestion(
        id=question_id,
        dimension=dimension,
        question_text=text,
        options=[AssessmentOption(text=c, score=0, description=label) for c in choices],
        contextual=True,
    )


QUESTION_BANK: List[AssessmentQuestion] = [
    # E vs I: social vs private financial decisions
    _scaled(
        1,
        Dimension.EI,
        "When making a big financial decision, I prefer to:",
        [
            "Always talk it through with friends or family first",
            "Usually discuss it with others before deciding",
            "Mix of both - depends on the situation",
            "Usually think it over privately first",
            "Always reflect alone before discussing with anyone",
        ],
        descending=True,
    ),
    _scaled(
        2,
        Dimension.EI,
        "My ideal approach to learning about money is:",
        [
            "Group workshops and lively discussions",
            "Learning with others, but also some solo time",
            "Mix of group sessions and independent study",
            "Mostly independent research with occasional input",
            "Entirely self-directed reading and research",
        ],
        descending=True,
    ),
    _scaled(
        3,
        Dimension.EI,
        "When I receive a bonus or windfall:",
        [
            "I immediately want to share the exciting news",
            "I usually tell close friends or family",
            "I might share with a few people, but keep it low-key",
            "I prefer to keep it mostly private",
            "I always keep it completely private and reflect alone",
        ],
        descending=True,
    ),
    _scaled(
        4,
        Dimension.EI,
        "My financial stress is best relieved by:",
        [
            "Definitely talking it through with others",
            "Usually discussing it with someone I trust",
            "A combination of talking and solo reflection",
            "Mostly processing it alone",
            "Always taking time completely alone to decompress",
        ],
        descending=True,
    ),
    _contextual(
        5,
        Dimension.EI,
        "What is your current annual household income?",
        ["Under $50,000", "$50,000 - $100,000", "$100,000 - $200,000", "Over $200,000", "Prefer not to say"],
        "Income level",
    ),
    # S vs N: present vs future focus
    _scaled(
        6,
        Dimension.SN,
        "I feel most confident when my financial plan:",
        [
            "Has very specific, actionable steps I can start immediately",
            "Focuses on practical steps and near-term actions",
            "Balances concrete steps with long-term vision",
            "Emphasizes future possibilities with some specific goals",
            "Paints an inspiring vision of future possibilities",
        ],
    ),
    _scaled(
        7,
        Dimension.SN,
        "When tracking my budget, I care most about:",
        [
            "Every precise number and exact spending amount",
            "Accurate numbers and specific spending patterns",
            "Both the details and the overall picture",
            "General trends and what they suggest",
            "Big-picture trends and future implications",
        ],
    ),
    _contextual(
        8,
        Dimension.SN,
        "What is your current total debt (excluding mortgage)?",
        ["No debt", "Under $10,000", "$10,000 - $50,000", "Over $50,000", "Prefer not to say"],
        "Debt level",
    ),
    _scaled(
        9,
        Dimension.SN,
        "When reading about investment opportunities, I:",
        [
            "Only trust detailed facts and proven track records",
            "Prefer historical data and concrete results",
            "Want both proven data and future potential",
            "Look for innovative concepts with some evidence",
            "Focus on visionary potential and innovation",
        ],
    ),
    _scaled(
        10,
        Dimension.SN,
        "I trust financial advice that is:",
        [
            "Entirely grounded in proven, real-world examples",
            "Based on past experience and concrete evidence",
            "Blends proven methods with innovative thinking",
            "Forward-thinking with some practical grounding",
            "Highly innovative and future-focused",
        ],
    ),
    # T vs F: logic vs values
    _scaled(
        11,
        Dimension.TF,
        "When deciding where to spend money, I prioritize:",
        [
            "Purely logical analysis and budget optimization",
            "What makes logical sense based on my budget",
            "Both practical budget and personal happiness",
            "What aligns with my values, within reason",
            "What truly aligns with my values and brings joy",
        ],
    ),
    _scaled(
        12,
        Dimension.TF,
        "If a friend asked for financial advice, I would:",
        [
            "Immediately analyze their data and provide solutions",
            "Objectively analyze and suggest practical solutions",
            "Listen to their feelings while also analyzing facts",
            "Understand their feelings, then discuss options",
            "Deeply empathize first, supporting them emotionally",
        ],
    ),
    _contextual(
        13,
        Dimension.TF,
        "How much do you currently have in emergency savings?",
        ["Less than $1,000", "$1,000 - $5,000", "$5,000 - $20,000", "Over $20,000", "Prefer not to say"],
        "Emergency savings level",
    ),
    _scaled(
        14,
        Dimension.TF,
        "When I have to cut spending, I feel worst about giving up:",
        [
            "Items with poor ROI - I cut logically without emotion",
            "Things that are inefficient or wasteful",
            "It depends on both efficiency and emotional value",
            "Things that bring me or others joy",
            "Anything that deeply matters to people I care about",
        ],
    ),
    _scaled(
        15,
        Dimension.TF,
        "Financial success means:",
        [
            "Maximizing net worth and hitting quantifiable targets",
            "Achieving measurable goals and growing wealth",
            "Both achieving goals and living according to values",
            "Living aligned with my values while building security",
            "Creating a life of meaning, purpose, and helping others",
        ],
    ),
    # J vs P: structure vs flexibility
    _scaled(
        16,
        Dimension.JP,
        "My approach to financial planning is:",
        [
            "Create a highly detailed plan and strictly follow it",
            "Make a solid plan and generally stick to it",
            "Create a flexible framework that allows adjustments",
            "Keep options open with a loose plan",
            "Stay completely flexible and adapt as life unfolds",
        ],
    ),
    _scaled(
        17,
        Dimension.JP,
        "When managing my money, I feel best when:",
        [
            "Every penny is tracked and perfectly organized",
            "Everything is organized and accounted for",
            "I have general organization with some flexibility",
            "I have freedom to make spontaneous choices",
            "I have complete freedom without rigid constraints",
        ],
    ),
    _scaled(
        18,
        Dimension.JP,
        "How do you typically handle bill payments?",
        [
            "Everything on auto-pay, scheduled far in advance",
            "Auto-pay or scheduled ahead of time",
            "Mix of auto-pay and manual payments",
            "Usually pay manually as bills come",
            "Always pay manually when I get around to it",
        ],
    ),
    _contextual(
        19,
        Dimension.JP,
        "What percentage of your income are you currently saving?",
        ["Less than 5%", "5% - 15%", "15% - 25%", "Over 25%", "Prefer not to say"],
        "Savings rate",
    ),
    _scaled(
        20,
        Dimension.JP,
        "Deadlines for financial goals make me feel:",
        [
            "Highly motivated - I thrive on clear deadlines",
            "Motivated and focused",
            "They can be helpful but not essential",
            "Somewhat constrained - I prefer flexibility",
            "Very stressed - I need open-ended freedom",
        ],
    ),
]
