from partsdesk.db.session import get_engine
from partsdesk.db.base import Base


def init_db():
    # models must be imported so their tables are registered on Base.metadata
    import partsdesk.models.spare_part  # noqa: F401
    import partsdesk.models.bill  # noqa: F401
    import partsdesk.models.bill_item  # noqa: F401

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
