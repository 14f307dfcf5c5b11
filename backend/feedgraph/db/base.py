from sqlalchemy.engine import Engine
from feedgraph.models.base import Base


def _import_models() -> None:
    """Import all models so their metadata is registered on Base."""
    import feedgraph.models.feed               # noqa: F401
    import feedgraph.models.link               # noqa: F401
    import feedgraph.models.mention            # noqa: F401
    import feedgraph.models.mention_snapshot   # noqa: F401


def create_all(engine: Engine) -> None:
    """Create all tables for the registered models (SYNC)."""
    _import_models()
    Base.metadata.create_all(bind=engine)
