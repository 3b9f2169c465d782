from property_manager.infra.db.models.base import Base
from property_manager.infra.db.models.property import PropertyRow

__all__ = ["Base", "PropertyRow"]
