import logging
import uuid
from typing import Any, Dict, List, Optional

import sqlalchemy

from formsapi.database import database, formschema_table, formsubmission_table
from formsapi.models.form import FormSchema, Submission
from formsapi.utils import as_utc, utcnow

logger = logging.getLogger(__name__)


def _to_submission(row) -> Submission:
    return Submission(
        id=row.id,
        data=row.data,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _to_schema(row) -> FormSchema:
    return FormSchema(
        id=row.id,
        name=row.name,
        description=row.description,
        fields=row.fields,
    )


async def create_submission(data: Dict[str, Any], content_hash: str) -> Submission:
    now = utcnow()
    submission_id = str(uuid.uuid4())
    query = formsubmission_table.insert().values(
        id=submission_id,
        data=data,
        content_hash=content_hash,
        created_at=now,
        updated_at=now,
    )
    async with database.transaction():
        await database.execute(query)
    logger.debug("Inserted submission", extra={"submission_id": submission_id})
    return Submission(id=submission_id, data=data, created_at=as_utc(now), updated_at=as_utc(now))


async def fetch_all_submissions(limit: Optional[int] = None, offset: int = 0) -> List[Submission]:
    query = formsubmission_table.select().order_by(formsubmission_table.c.created_at.desc())
    if limit is not None:
        query = query.limit(limit).offset(offset)
    rows = await database.fetch_all(query)
    return [_to_submission(row) for row in rows]


async def count_submissions() -> int:
    query = sqlalchemy.select(sqlalchemy.func.count()).select_from(formsubmission_table)
    return await database.fetch_val(query)


async def fetch_submission(submission_id: str) -> Optional[Submission]:
    query = formsubmission_table.select().where(formsubmission_table.c.id == submission_id)
    row = await database.fetch_one(query)
    return _to_submission(row) if row else None


async def find_submission_by_hash(content_hash: str) -> Optional[Submission]:
    query = formsubmission_table.select().where(formsubmission_table.c.content_hash == content_hash)
    row = await database.fetch_one(query)
    return _to_submission(row) if row else None


async def upsert_schema(schema: FormSchema) -> FormSchema:
    """Create or replace a schema keyed by name; the field list is replaced as a whole."""
    fields = [f.model_dump(by_alias=True, exclude_none=True) for f in schema.fields]
    now = utcnow()
    async with database.transaction():
        existing = await database.fetch_one(
            formschema_table.select().where(formschema_table.c.name == schema.name)
        )
        if existing:
            query = formschema_table.update().where(formschema_table.c.id == existing.id).values(
                description=schema.description,
                fields=fields,
                updated_at=now,
            )
            await database.execute(query)
            schema_id = existing.id
        else:
            query = formschema_table.insert().values(
                name=schema.name,
                description=schema.description,
                fields=fields,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            schema_id = await database.execute(query)
    logger.debug("Saved schema", extra={"schema_name": schema.name, "schema_id": schema_id})
    return schema.model_copy(update={"id": schema_id})


async def fetch_schema(name: str) -> Optional[FormSchema]:
    query = formschema_table.select().where(formschema_table.c.name == name)
    row = await database.fetch_one(query)
    return _to_schema(row) if row else None


async def fetch_all_schemas() -> List[FormSchema]:
    query = (
        formschema_table.select()
        .where(formschema_table.c.is_active == sqlalchemy.true())
        .order_by(formschema_table.c.created_at.desc(), formschema_table.c.id.desc())
    )
    rows = await database.fetch_all(query)
    return [_to_schema(row) for row in rows]
