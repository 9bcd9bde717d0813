"""Score a wellness assessment response: normalized total, per-category sums and recommendations."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

# Scale answers are 1..5 and score 0..4; this is also the per-question maximum.
MAX_POINTS_PER_QUESTION = 4
TOTAL_SCALE = 10

FOCUS_BELOW = 2
ATTENTION_BELOW = 3


@dataclass
class AssessmentScore:
    total_score: float
    category_scores: dict[str, float] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def score_answer(question: dict[str, Any], answer: Any) -> float:
    """Points for one answer: scale -> answer - 1, multiple-choice -> option index, text -> 0."""
    if not _is_number(answer):
        return 0.0
    qtype = question.get("type")
    if qtype == "scale":
        return float(answer) - 1
    if qtype == "multiple-choice":
        return float(answer)
    return 0.0


def score_assessment(
    questions: list[dict[str, Any]], responses: dict[str, Any]
) -> AssessmentScore:
    """
    Sum points per category over answered questions, recommend for weak
    categories (average over the category's questions < 3), and normalize the
    total to 0..10 against 4 points per question.
    """
    total = 0.0
    category_scores: dict[str, float] = {}
    questions_per_category: dict[str, int] = defaultdict(int)

    for question in questions:
        category = str(question.get("category") or "General")
        questions_per_category[category] += 1
        qid = question.get("id")
        if qid not in responses:
            continue
        points = score_answer(question, responses[qid])
        total += points
        category_scores[category] = category_scores.get(category, 0.0) + points

    recommendations: list[str] = []
    for category, points in category_scores.items():
        average = points / questions_per_category[category]
        if average < FOCUS_BELOW:
            recommendations.append(
                f"Consider focusing on {category.lower()} with additional resources and support."
            )
        elif average < ATTENTION_BELOW:
            recommendations.append(
                f"Your {category.lower()} could benefit from some attention and self-care practices."
            )

    max_possible = len(questions) * MAX_POINTS_PER_QUESTION
    normalized = (total / max_possible) * TOTAL_SCALE if max_possible > 0 else 0.0
    return AssessmentScore(
        total_score=round(normalized, 1),
        category_scores=category_scores,
        recommendations=recommendations,
    )
