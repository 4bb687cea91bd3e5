import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from formsapi import intake, store
from formsapi.config import config
from formsapi.errors import SchemaNotFound, SubmissionNotFound
from formsapi.models.api import ApiResponse, Page, Pagination, failure, success
from formsapi.models.form import FormSchema, SubmissionIn, ValidateIn
from formsapi.validation import check_patterns, validate_schema

logger = logging.getLogger(__name__)
router = APIRouter()


def validation_failed(errors) -> JSONResponse:
    body = failure("Validation failed", errors=errors)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


async def get_schema_or_404(name: str) -> FormSchema:
    schema = await store.fetch_schema(name)
    if schema is None:
        raise SchemaNotFound(name)
    return schema


# e.g. /api/forms/submit?schema_name=user-registration
@router.post("/submit", response_model=ApiResponse, response_model_exclude_none=True, status_code=201)
async def submit_form(payload: SubmissionIn, schema_name: Optional[str] = None):
    if schema_name:
        schema = await get_schema_or_404(schema_name)
        errors = validate_schema(schema, payload.data)
        if errors:
            logger.debug(f"Submission failed validation against '{schema_name}': {len(errors)} errors")
            return validation_failed(errors)

    submission = await intake.submit(payload.data)
    return success(submission, "Form submitted successfully")


@router.get("/submissions", response_model=ApiResponse, response_model_exclude_none=True, status_code=200)
async def list_submissions(
    page: Optional[int] = Query(default=None, ge=1),
    per_page: int = Query(default=10, ge=1, le=100),
):
    if page is None:
        submissions = await store.fetch_all_submissions()
        return success(submissions, "Submissions retrieved successfully")

    offset = (page - 1) * per_page
    total = await store.count_submissions()
    submissions = await store.fetch_all_submissions(limit=per_page, offset=offset)
    result = Page(
        items=submissions,
        pagination=Pagination(
            page=page,
            limit=per_page,
            total=total,
            pages=(total + per_page - 1) // per_page,
        ),
    )
    return success(result, "Submissions retrieved successfully")


@router.get("/submissions/{submission_id}", response_model=ApiResponse, response_model_exclude_none=True, status_code=200)
async def get_submission(submission_id: str):
    submission = await store.fetch_submission(submission_id)
    if submission is None:
        raise SubmissionNotFound(submission_id)
    return success(submission, "Submission retrieved successfully")


@router.post("/schema", response_model=ApiResponse, response_model_exclude_none=True, status_code=201)
async def save_schema(schema: FormSchema):
    if config.STRICT_FIELD_PATTERNS:
        check_patterns(schema)
    saved = await store.upsert_schema(schema)
    logger.info(f"Form schema '{saved.name}' saved with {len(saved.fields)} fields")
    return success(saved, "Form schema saved successfully")


@router.get("/schema/{name}", response_model=ApiResponse, response_model_exclude_none=True, status_code=200)
async def get_schema(name: str):
    schema = await get_schema_or_404(name)
    return success(schema, "Schema retrieved successfully")


@router.get("/schemas", response_model=ApiResponse, response_model_exclude_none=True, status_code=200)
async def list_schemas():
    schemas = await store.fetch_all_schemas()
    return success(schemas, "Schemas retrieved successfully")


@router.post("/validate", response_model=ApiResponse, response_model_exclude_none=True, status_code=200)
async def validate_form(payload: ValidateIn):
    if not payload.schema_name or payload.data is None:
        body = failure("Invalid request", "Both schemaName and data are required")
        return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))

    schema = await get_schema_or_404(payload.schema_name)
    errors = validate_schema(schema, payload.data)
    if errors:
        return validation_failed(errors)
    return success(None, "Validation passed")
