"""
Response Aggregator
===================

Turns questionnaire answers for one subcategory into an implementation
level and a `SubcategoryRecord`.

Point mapping (fixed policy, not configurable per template):
    "yes" or "5" -> 100
    "4"          -> 75
    "3"          -> 50
    "2"          -> 25
    anything else (including "no", "1", free text) -> 0

Classification of the mean (inclusive lower bounds):
    >= 90 fully-implemented
    >= 70 substantially-implemented
    >= 30 partially-implemented
    else  not-started

The mean is taken over every template question; a question left
unanswered scores 0. Question weights declared on templates are not
applied.

Version: 0.1.0
"""

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from types import MappingProxyType

from services.rmf_assessment.errors import ValidationError
from services.rmf_assessment.models.assessment import (
    Implementation,
    QuestionAnswer,
    SubcategoryRecord,
)
from services.rmf_assessment.models.template import RiskTemplate


RESPONSE_POINTS: Mapping[str, int] = MappingProxyType(
    {
        "yes": 100,
        "5": 100,
        "4": 75,
        "3": 50,
        "2": 25,
    }
)

# Lower bounds, checked from the highest down.
IMPLEMENTATION_THRESHOLDS: tuple[tuple[float, Implementation], ...] = (
    (90, Implementation.FULLY_IMPLEMENTED),
    (70, Implementation.SUBSTANTIALLY_IMPLEMENTED),
    (30, Implementation.PARTIALLY_IMPLEMENTED),
)


def response_points(response: str) -> int:
    """Point value of a single raw response."""
    return RESPONSE_POINTS.get(response, 0)


def average_score(answers: Sequence[QuestionAnswer]) -> float:
    """
    Mean point value of the answers.

    Raises:
        ValidationError: If there are no answers to average.
    """
    if not answers:
        raise ValidationError("At least one answer is required", field="responses")
    return sum(response_points(a.response) for a in answers) / len(answers)


def classify(avg_score: float) -> Implementation:
    """Map a mean score onto an implementation level."""
    for lower_bound, level in IMPLEMENTATION_THRESHOLDS:
        if avg_score >= lower_bound:
            return level
    return Implementation.NOT_STARTED


def derive_implementation(answers: Sequence[QuestionAnswer]) -> Implementation:
    """Implementation level implied by a set of answers."""
    return classify(average_score(answers))


def validate_required_answers(
    template: RiskTemplate,
    answers: Sequence[QuestionAnswer],
) -> None:
    """
    Ensure every required question has a non-blank answer.

    Raises:
        ValidationError: Naming the first unanswered required question.
    """
    answered = {a.question_id for a in answers if a.response.strip() or a.files}
    for question in template.questions:
        if question.required and question.id not in answered:
            raise ValidationError(
                f"Missing answer for required question {question.id} "
                f"in {template.subcategory_id}",
                field=question.id,
            )


def check_question_ids(
    template: RiskTemplate,
    answers: Sequence[QuestionAnswer],
) -> None:
    """
    Ensure every answer belongs to the template and appears only once.

    Raises:
        ValidationError: Naming the first unknown or repeated question id.
    """
    known = {q.id for q in template.questions}
    seen: set[str] = set()
    for answer in answers:
        if answer.question_id not in known:
            raise ValidationError(
                f"Unknown question {answer.question_id} for {template.subcategory_id}",
                field=answer.question_id,
            )
        if answer.question_id in seen:
            raise ValidationError(
                f"Duplicate answer for question {answer.question_id}",
                field=answer.question_id,
            )
        seen.add(answer.question_id)


def align_answers(
    template: RiskTemplate,
    answers: Sequence[QuestionAnswer],
) -> list[QuestionAnswer]:
    """
    One answer per template question, in template order.

    Questions left out are filled with a blank response, which scores 0.
    """
    by_id = {a.question_id: a for a in answers}
    return [by_id.get(q.id) or QuestionAnswer(question_id=q.id) for q in template.questions]


def build_subcategory_record(
    template: RiskTemplate,
    answers: Sequence[QuestionAnswer],
    notes: str = "",
    now: datetime | None = None,
) -> SubcategoryRecord:
    """
    Build the persisted record for one subcategory.

    The implementation level is the mean over every template question, so
    unanswered optional questions pull the level down.

    Args:
        template: Catalog entry the answers belong to
        answers: Wizard answers, at most one per question
        notes: Free-text notes submitted alongside the answers
        now: Review timestamp (defaults to the current UTC time)

    Raises:
        ValidationError: On unknown or repeated question ids, or a missing
            required answer.
    """
    check_question_ids(template, answers)
    validate_required_answers(template, answers)
    scored = align_answers(template, answers)
    return SubcategoryRecord(
        subcategory_id=template.subcategory_id,
        outcome=template.outcome,
        implementation=derive_implementation(scored),
        responses=scored,
        notes=notes,
        last_reviewed=now or datetime.now(UTC),
    )
