"""
Dashboard Aggregation
=====================
Turns raw `submissions` rows (with embedded `evaluations`) into the numbers
and table rows shown on the student and instructor dashboards.

Days are UTC calendar days, the same bucketing Supabase's `created_at`
timestamps use.
"""
from datetime import date, datetime, timedelta, timezone

from codeir.rubric_config import total_score

HEATMAP_DAYS = 365

# (minimum submissions in a day, heatmap level), highest first
HEATMAP_LEVELS = [(8, 4), (5, 3), (3, 2), (1, 1)]

TITLE_CHARS = 30
CODE_PREVIEW_CHARS = 20


def _parse_timestamp(value):
    if isinstance(value, datetime):
        ts = value
    else:
        ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def submission_date(created_at):
    """UTC calendar date (YYYY-MM-DD) of a created_at timestamp."""
    return _parse_timestamp(created_at).date().isoformat()


def today_utc():
    return datetime.now(timezone.utc).date()


def _as_date(day):
    if day is None:
        return today_utc()
    if isinstance(day, datetime):
        return _parse_timestamp(day).date()
    if isinstance(day, date):
        return day
    return date.fromisoformat(day)


def calculate_streak(submissions, today=None):
    """
    Number of consecutive days with at least one submission.

    The streak only counts if the latest active day is today or yesterday;
    otherwise it has lapsed and is 0.
    """
    if not submissions:
        return 0

    today = _as_date(today)
    days = sorted({date.fromisoformat(submission_date(s["created_at"])) for s in submissions}, reverse=True)

    if days[0] not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    current = days[0]
    for prev in days[1:]:
        if (current - prev).days != 1:
            break
        streak += 1
        current = prev
    return streak


def heatmap_level(count):
    for threshold, level in HEATMAP_LEVELS:
        if count >= threshold:
            return level
    return 0


def build_heatmap(submissions, today=None, days=HEATMAP_DAYS):
    """
    One cell per day for the last `days` days, oldest first, ending today.

    Each cell: {"date": "YYYY-MM-DD", "count": n, "level": 0-4}
    """
    today = _as_date(today)
    counts = {}
    for s in submissions:
        key = submission_date(s["created_at"])
        counts[key] = counts.get(key, 0) + 1

    cells = []
    for offset in range(days - 1, -1, -1):
        key = (today - timedelta(days=offset)).isoformat()
        count = counts.get(key, 0)
        cells.append({"date": key, "count": count, "level": heatmap_level(count)})
    return cells


def student_stats(submissions, today=None):
    return {
        "total_solved": len(submissions),
        "current_streak": calculate_streak(submissions, today),
    }


def status_badge(status):
    """Label for a submission status."""
    if status in ("submitted", "valid"):
        return "Solved"
    if status == "invalid":
        return "Failed"
    return "Pending"


def evaluations_of(submission):
    """
    Embedded evaluations as a list.

    PostgREST embeds a one-to-one relation as a single object (or null)
    and a one-to-many relation as an array; both show up here.
    """
    evaluations = submission.get("evaluations")
    if not evaluations:
        return []
    if isinstance(evaluations, dict):
        return [evaluations]
    return list(evaluations)


def is_evaluated(submission):
    return len(evaluations_of(submission)) > 0


def submission_title(submission):
    description = submission.get("description")
    if description:
        return description[:TITLE_CHARS] + "..."
    return "Untitled Problem"


def code_preview(submission):
    source = submission.get("source_code")
    if source:
        return source[:CODE_PREVIEW_CHARS] + "..."
    return "-"


def display_name(email):
    """Local part of an email address."""
    if not email:
        return ""
    return email.split("@")[0]


def student_row(submission):
    """Row for the student's Recent Activity table."""
    evaluations = evaluations_of(submission)
    feedback = None
    if evaluations:
        feedback = evaluations[0].get("feedback") or "No comments"

    return {
        "id": submission.get("id"),
        "title": submission_title(submission),
        "created_at": submission.get("created_at"),
        "date": submission_date(submission["created_at"]) if submission.get("created_at") else None,
        "code_preview": code_preview(submission),
        "ir_status": "Generated" if submission.get("ir_output") else "Pending",
        "evaluated": bool(evaluations),
        "feedback": feedback,
        "status": submission.get("status"),
        "badge": status_badge(submission.get("status")),
    }


def instructor_stats(submissions):
    total = len(submissions)
    evaluated = sum(1 for s in submissions if is_evaluated(s))
    return {
        "pending": total - evaluated,
        "evaluated": evaluated,
        "total": total,
    }


def instructor_row(submission):
    """Row for the instructor's Active Submissions table."""
    evaluations = evaluations_of(submission)
    evaluated = bool(evaluations)
    user_id = submission.get("user_id") or ""

    return {
        "id": submission.get("id"),
        "student": user_id[:8] + "...",
        "title": submission_title(submission),
        "created_at": submission.get("created_at"),
        "evaluated": evaluated,
        "review_status": "Evaluated" if evaluated else "Pending Review",
        "score": total_score(evaluations[0].get("rubric_scores")) if evaluated else "-",
        "action": "Edit Grade" if evaluated else "Grade Now",
    }
