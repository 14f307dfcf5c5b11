# feedgraph/crud/_upsert.py
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def insert_for(db: Session, model):
    """Dialect insert() with on_conflict_do_nothing / on_conflict_do_update."""
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect](model)
    except KeyError:
        raise ValueError(f"no upsert support for dialect {dialect!r}, use sqlite or postgresql") from None
