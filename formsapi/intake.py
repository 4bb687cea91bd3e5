"""
Submission intake: sanitize a data record, reject exact duplicates and persist it.

Duplicates are keyed on a content hash of the sanitized record. The
``form_submission.content_hash`` column is UNIQUE, so of two concurrent
submissions of the same record only one insert can succeed.
"""
import hashlib
import json
import logging
from typing import Any, Dict, Mapping

from formsapi import store
from formsapi.errors import DuplicateSubmission, PersistenceFailure
from formsapi.models.form import Submission

logger = logging.getLogger(__name__)


def sanitize_form_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    sanitized = {}
    for key, value in data.items():
        if value is None:
            continue
        sanitized[key] = value.strip() if isinstance(value, str) else value
    return sanitized


def deep_equal(a: Any, b: Any) -> bool:
    # bool is an int subclass but never equal to a number here
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, (dict, list, tuple)) or isinstance(b, (dict, list, tuple)):
        return False
    return a == b


def _canonical(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def content_hash(data: Mapping[str, Any]) -> str:
    """sha256 of the canonical JSON form; structurally equal records hash equal."""
    canonical = json.dumps(
        _canonical(dict(data)),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


async def _find_duplicate(data: Dict[str, Any], digest: str):
    # the hash is the duplicate key, the same key the unique column enforces
    existing = await store.find_submission_by_hash(digest)
    if existing is not None and not deep_equal(existing.data, data):
        logger.warning(
            "Content hash matches a stored submission with differing data",
            extra={"existing_id": existing.id, "content_hash": digest},
        )
    return existing


async def submit(raw_data: Mapping[str, Any]) -> Submission:
    data = sanitize_form_data(raw_data)
    digest = content_hash(data)

    duplicate = await _find_duplicate(data, digest)
    if duplicate is not None:
        logger.info("Duplicate submission rejected", extra={"existing_id": duplicate.id})
        raise DuplicateSubmission(duplicate.id)

    try:
        submission = await store.create_submission(data, digest)
    except Exception as e:
        # a concurrent insert of the same record trips the unique hash column
        duplicate = await _find_duplicate(data, digest)
        if duplicate is not None:
            logger.info("Concurrent duplicate submission rejected", extra={"existing_id": duplicate.id})
            raise DuplicateSubmission(duplicate.id) from e
        logger.error(f"Failed to store submission: {e}")
        raise PersistenceFailure(str(e)) from e

    logger.info("Submission stored", extra={"submission_id": submission.id})
    return submission
