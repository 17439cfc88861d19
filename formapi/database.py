import databases
import sqlalchemy
from formapi.config import config

metadata = sqlalchemy.MetaData()


# one row per distinct declarative schema, keyed by the fingerprint of its canonical JSON
formschema_table = sqlalchemy.Table(
    "form_schema",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.Integer, primary_key=True),
    sqlalchemy.Column("fingerprint", sqlalchemy.String(64), nullable=False, unique=True),
    sqlalchemy.Column("schema", sqlalchemy.JSON, nullable=False),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, default=sqlalchemy.func.now()),
)

formrecord_table = sqlalchemy.Table(
    "form_record",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.Integer, primary_key=True),
    sqlalchemy.Column("schema_id", sqlalchemy.ForeignKey("form_schema.id"), nullable=False),
    sqlalchemy.Column("data", sqlalchemy.JSON, nullable=False), # {key: {"kind": ..., "value": ...}}
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, default=sqlalchemy.func.now()),
    sqlalchemy.Column("updated_at", sqlalchemy.DateTime, default=sqlalchemy.func.now(), onupdate=sqlalchemy.func.now()),
)


connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
engine = sqlalchemy.create_engine(config.DATABASE_URL, connect_args=connect_args)

metadata.create_all(engine)
database = databases.Database(
    config.DATABASE_URL, force_rollback=config.DB_FORCE_ROLL_BACK
)
