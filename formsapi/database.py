import databases
import sqlalchemy
from formsapi.config import config

metadata = sqlalchemy.MetaData()


formschema_table = sqlalchemy.Table(
    "form_schema",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.Integer, primary_key=True),
    sqlalchemy.Column("name", sqlalchemy.String(100), nullable=False, unique=True),
    sqlalchemy.Column("description", sqlalchemy.Text),
    sqlalchemy.Column("fields", sqlalchemy.JSON, nullable=False),  # full field list, replaced on upsert
    sqlalchemy.Column("is_active", sqlalchemy.Boolean, default=True, nullable=False),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, nullable=False),
    sqlalchemy.Column("updated_at", sqlalchemy.DateTime, nullable=False),
)

formsubmission_table = sqlalchemy.Table(
    "form_submission",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.String(36), primary_key=True),
    sqlalchemy.Column("data", sqlalchemy.JSON, nullable=False),
    # sha256 of the canonical sanitized data
    sqlalchemy.Column("content_hash", sqlalchemy.String(64), nullable=False, unique=True),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, nullable=False, index=True),
    sqlalchemy.Column("updated_at", sqlalchemy.DateTime, nullable=False),
)


connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
engine = sqlalchemy.create_engine(config.DATABASE_URL, connect_args=connect_args)

metadata.create_all(engine)
database = databases.Database(
    config.DATABASE_URL, force_rollback=config.DB_FORCE_ROLL_BACK
)
