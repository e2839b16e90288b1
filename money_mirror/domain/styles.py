"""Style catalog - descriptive text and coaching tone per style code"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class StyleProfile:
    code: str
    name: str
    description: str
    coaching_approach: str


FALLBACK_NAME = "The Individualist"
FALLBACK_DESCRIPTION = "Your unique money style"
FALLBACK_COACHING = "Personalized coaching approach"

# code -> (name, description, coaching approach)
_CATALOG: Dict[str, tuple[str, str, str]] = {
    "ESTJ": (
        "The Organizer",
        "You thrive on structure and clear financial systems. You value efficiency and practical results.",
        "Direct, structured guidance with clear action steps and measurable outcomes.",
    ),
    "ESTP": (
        "The Opportunist",
        "You spot chances to leverage money in the moment. You prefer action over lengthy planning.",
        "Dynamic, opportunity-focused coaching with immediate tactical wins.",
    ),
    "ESFJ": (
        "The Provider",
        "You prioritize financial security for your loved ones. Giving and supporting others motivates you.",
        "Supportive, relationship-centered guidance that honors your caregiving role.",
    ),
    "ESFP": (
        "The Enthusiast",
        "You enjoy spending on experiences and people. You believe money should enhance life now.",
        "Energizing, present-focused coaching that balances enjoyment with goals.",
    ),
    "ENTJ": (
        "The Strategist",
        "You see money as a tool for achieving ambitious goals. Long-term vision drives your decisions.",
        "Strategic, ambitious guidance aligned with your vision of success.",
    ),
    "ENTP": (
        "The Innovator",
        "You explore creative financial opportunities. You love testing new approaches to wealth building.",
        "Exploratory, innovative coaching that encourages testing new ideas.",
    ),
    "ENFJ": (
        "The Idealist",
        "You align spending with your values and community impact. Purpose matters more than profit.",
        "Inspirational, values-driven guidance that connects money to purpose.",
    ),
    "ENFP": (
        "The Dreamer",
        "You invest in possibilities and personal growth. Financial freedom means pursuing your passions.",
        "Creative, possibility-focused coaching that supports your diverse interests.",
    ),
    "ISTJ": (
        "The Guardian",
        "You build wealth through careful planning and discipline. Tradition and stability guide you.",
        "Methodical, reliable guidance with proven systems and detailed plans.",
    ),
    "ISTP": (
        "The Pragmatist",
        "You focus on what works efficiently. You prefer hands-on financial management.",
        "Practical, efficient coaching focused on what works for you.",
    ),
    "ISFJ": (
        "The Protector",
        "You save diligently to ensure security. You value loyalty and helping others quietly.",
        "Gentle, protective guidance that respects your cautious nature.",
    ),
    "ISFP": (
        "The Artist",
        "You spend on what brings beauty and meaning. Financial choices reflect your personal values.",
        "Personalized, values-aligned coaching that honors your unique path.",
    ),
    "INTJ": (
        "The Architect",
        "You design comprehensive financial systems. You trust data and long-term projections.",
        "Analytical, systems-focused guidance with comprehensive frameworks.",
    ),
    "INTP": (
        "The Analyst",
        "You study financial concepts deeply. You optimize based on logical principles.",
        "Conceptual, logic-based coaching that explores underlying principles.",
    ),
    "INFJ": (
        "The Counselor",
        "You seek financial harmony with your life purpose. You plan carefully for meaningful futures.",
        "Holistic, meaning-focused guidance that integrates money with life vision.",
    ),
    "INFP": (
        "The Seeker",
        "You want your money to reflect your ideals. Authenticity matters more than convention.",
        "Reflective, authentic coaching that aligns finances with your ideals.",
    ),
}


def describe_style(code: str | None) -> StyleProfile:
    """
    Look up a style code. Never raises: unknown or malformed codes get the
    generic fallback profile.
    """
    normalized = (code or "").strip().upper()
    entry = _CATALOG.get(normalized)
    if entry is None:
        return StyleProfile(
            code=normalized,
            name=FALLBACK_NAME,
            description=FALLBACK_DESCRIPTION,
            coaching_approach=FALLBACK_COACHING,
        )

    name, description, coaching = entry
    return StyleProfile(code=normalized, name=name, description=description, coaching_approach=coaching)


def known_style_codes() -> list[str]:
    return sorted(_CATALOG)
