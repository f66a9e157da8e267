from parts_finder.infra.db.models.base import Base
from parts_finder.infra.db.models.vehicle import VehicleRow

__all__ = ["Base", "VehicleRow"]
