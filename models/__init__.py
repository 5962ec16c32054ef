from models.slot import SlotId, Coordinates
from models.layout import FacilityLayout
from models.occupancy import OccupancyRecord
from models.allocation import AllocationResult, ReleaseResult
