"""Error taxonomy for the slot allocation core.

Every error is a value the caller can handle. ``status_code`` is the HTTP
status the API layer maps the error to.
"""


class ParkingError(Exception):
    status_code = 500


class InvalidSlotId(ParkingError):
    """Malformed or out-of-range slot identifier or level. Never retried."""
    status_code = 400


class AlreadyOccupied(ParkingError):
    """Slot is already taken. Recovered inside allocation by resuming the scan."""
    status_code = 409

    def __init__(self, slot_id):
        super().__init__(f"Slot {slot_id} is already occupied.")
        self.slot_id = slot_id


class DuplicatePlate(ParkingError):
    status_code = 409

    def __init__(self, plate_number: str, slot_id):
        super().__init__(f"Vehicle {plate_number} already holds slot {slot_id}.")
        self.plate_number = plate_number
        self.slot_id = slot_id


class NotOccupied(ParkingError):
    status_code = 404

    def __init__(self, slot_id):
        super().__init__(f"Slot {slot_id} is not occupied.")
        self.slot_id = slot_id


class NotFound(ParkingError):
    status_code = 404

    def __init__(self, plate_number: str):
        super().__init__(f"No parked vehicle with plate {plate_number}.")
        self.plate_number = plate_number


class NoSlotsAvailable(ParkingError):
    """Facility (or the requested levels) is full. Callers may retry later."""
    status_code = 409

    def __init__(self, message: str = "All parking slots are occupied."):
        super().__init__(message)


class LayoutError(ValueError):
    """Invalid facility configuration. Fatal at startup."""
