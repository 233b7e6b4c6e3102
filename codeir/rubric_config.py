"""
Shared Rubric Configuration
============================
Single source of truth for the evaluation rubric.
Used by the instructor routes and the dashboard score column.

Every criterion is scored as a whole number from 0 to its maximum.
"""

# Maximum points per rubric category
RUBRIC_MAX_SCORES = {
    "correctness": 10,
    "efficiency": 10,
    "style": 10,
}

RUBRIC_LABELS = {
    "correctness": "Correctness",
    "efficiency": "IR Efficiency",
    "style": "Code Style",
}

# Total possible points
RUBRIC_TOTAL = sum(RUBRIC_MAX_SCORES.values())  # 30

# Canned "Auto-Grade" suggestion
AUTO_GRADE_SCORES = {"correctness": 9, "efficiency": 8, "style": 7}
AUTO_GRADE_FEEDBACK = (
    "The code logic is sound and handles edge cases well. However, the IR "
    "generation step could be optimized by reducing redundant nodes."
)


def parse_scores(raw):
    """
    Validate rubric scores from a request body.

    Missing criteria count as 0. Raises ValueError for non-integers or
    values outside 0..max.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("rubric_scores must be an object")

    scores = {}
    for key, max_score in RUBRIC_MAX_SCORES.items():
        value = raw.get(key, 0)
        if isinstance(value, bool):
            raise ValueError(f"{RUBRIC_LABELS[key]} score must be a whole number")
        try:
            score = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"{RUBRIC_LABELS[key]} score must be a whole number")
        if isinstance(value, float) and value != score:
            raise ValueError(f"{RUBRIC_LABELS[key]} score must be a whole number")
        if score < 0 or score > max_score:
            raise ValueError(f"{RUBRIC_LABELS[key]} score must be between 0 and {max_score}")
        scores[key] = score
    return scores


def total_score(scores):
    """Sum of the rubric criteria; missing or null criteria count as 0."""
    scores = scores or {}
    return sum((scores.get(key) or 0) for key in RUBRIC_MAX_SCORES)
