"""Heuristic pull request feedback."""

from prsight.feedback.engine import FeedbackService, generate_feedback, round_half_up
from prsight.feedback.rules import QUALITY_RULES, QualityRule, evaluate_rules, score_to_grade

__all__ = [
    "FeedbackService",
    "generate_feedback",
    "round_half_up",
    "QualityRule",
    "QUALITY_RULES",
    "evaluate_rules",
    "score_to_grade",
]
