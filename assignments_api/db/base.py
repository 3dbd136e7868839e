from assignments_api.db.base_class import Base  # noqa: F401

# import models so SQLAlchemy registers them on Base.metadata
from assignments_api.models import assignment, submission, user  # noqa: F401
