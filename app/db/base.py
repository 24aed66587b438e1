"""SQLAlchemy Base class for all models."""
from app.models.base.base_model import Base


def import_models():
    """Import all models to register them with SQLAlchemy."""
    from app.models.user import User  # noqa: F401
    from app.models.complaint import Complaint, ComplaintReply  # noqa: F401


# Import models on module load
import_models()
