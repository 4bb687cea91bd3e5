import logging
import math
from collections import Counter
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from formsapi.config import config
from formsapi.models.analytics import AnalyticsSnapshot
from formsapi.models.form import Submission
from formsapi.utils import as_utc
from formsapi.validation import to_number

logger = logging.getLogger(__name__)


def lookup(data: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Value under the first of ``keys`` present in ``data``, or None."""
    for key in keys:
        if key in data:
            return data[key]
    return None


def submissions_by_category(submissions: Sequence[Submission], keys: Sequence[str]) -> dict:
    counts = Counter()
    for submission in submissions:
        value = lookup(submission.data, keys)
        if isinstance(value, str) and value:
            counts[value] += 1
    return dict(sorted(counts.items()))


def average_of(submissions: Sequence[Submission], keys: Sequence[str]) -> Optional[float]:
    values = []
    for submission in submissions:
        number = to_number(lookup(submission.data, keys))
        if number is not None:
            values.append(number)
    if not values:
        return None
    return math.fsum(values) / len(values)


def submissions_by_date(submissions: Sequence[Submission]) -> dict:
    counts = Counter(as_utc(s.created_at).date().isoformat() for s in submissions)
    return dict(sorted(counts.items()))


def field_frequency(submissions: Sequence[Submission]) -> dict:
    counts = Counter()
    for submission in submissions:
        counts.update(submission.data.keys())
    return dict(sorted(counts.items()))


def compute_analytics(
    submissions: List[Submission],
    gender_keys: Optional[Sequence[str]] = None,
    age_keys: Optional[Sequence[str]] = None,
) -> AnalyticsSnapshot:
    gender_keys = gender_keys if gender_keys is not None else config.ANALYTICS_GENDER_KEYS
    age_keys = age_keys if age_keys is not None else config.ANALYTICS_AGE_KEYS
    logger.debug("Computing analytics", extra={"total": len(submissions)})
    return AnalyticsSnapshot(
        total_submissions=len(submissions),
        submissions_by_gender=submissions_by_category(submissions, gender_keys),
        average_age=average_of(submissions, age_keys),
        submissions_by_date=submissions_by_date(submissions),
        top_form_fields=field_frequency(submissions),
    )
