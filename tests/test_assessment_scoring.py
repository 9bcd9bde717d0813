"""Unit tests for mindfulme.services.assessment_scoring."""

import unittest

from mindfulme.services.assessment_scoring import score_answer, score_assessment


def _q(qid: str, category: str, qtype: str = "scale") -> dict:
    return {"id": qid, "question": f"Question {qid}?", "type": qtype, "category": category}


class TestScoreAnswer(unittest.TestCase):
    def test_scale_is_answer_minus_one(self) -> None:
        self.assertEqual(score_answer(_q("a", "X"), 1), 0.0)
        self.assertEqual(score_answer(_q("a", "X"), 5), 4.0)

    def test_multiple_choice_is_option_index(self) -> None:
        self.assertEqual(score_answer(_q("a", "X", "multiple-choice"), 2), 2.0)

    def test_text_and_non_numeric_score_zero(self) -> None:
        self.assertEqual(score_answer(_q("a", "X", "text"), "I feel fine"), 0.0)
        self.assertEqual(score_answer(_q("a", "X"), "5"), 0.0)
        self.assertEqual(score_answer(_q("a", "X"), True), 0.0)
        self.assertEqual(score_answer(_q("a", "X"), None), 0.0)


class TestScoreAssessment(unittest.TestCase):
    def test_total_normalized_to_ten(self) -> None:
        questions = [_q("q1", "Stress"), _q("q2", "Sleep")]
        result = score_assessment(questions, {"q1": 5, "q2": 5})
        self.assertEqual(result.total_score, 10.0)
        self.assertEqual(result.recommendations, [])

    def test_category_sums_and_recommendations(self) -> None:
        questions = [_q("q1", "Stress"), _q("q2", "Sleep"), _q("q3", "Mindfulness")]
        result = score_assessment(questions, {"q1": 5, "q2": 1, "q3": 3})
        self.assertEqual(result.category_scores, {"Stress": 4.0, "Sleep": 0.0, "Mindfulness": 2.0})
        # (4 + 0 + 2) / 12 * 10
        self.assertEqual(result.total_score, 5.0)
        self.assertIn(
            "Consider focusing on sleep with additional resources and support.",
            result.recommendations,
        )
        self.assertIn(
            "Your mindfulness could benefit from some attention and self-care practices.",
            result.recommendations,
        )
        self.assertEqual(len(result.recommendations), 2)

    def test_unanswered_questions_count_against_total(self) -> None:
        questions = [_q("q1", "Stress"), _q("q2", "Sleep")]
        result = score_assessment(questions, {"q1": 5})
        self.assertEqual(result.total_score, 5.0)
        self.assertNotIn("Sleep", result.category_scores)

    def test_no_questions(self) -> None:
        result = score_assessment([], {})
        self.assertEqual(result.total_score, 0.0)
        self.assertEqual(result.category_scores, {})


if __name__ == "__main__":
    unittest.main()
