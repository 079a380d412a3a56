class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class MeetingValidationError(AppError):
    """Raised when a meeting request fails validation before it is stored."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class RoomConflictError(AppError):
    """Raised when a requested room is already booked at the requested time."""
    def __init__(self, message: str, conflicts: list[str] = None):
        super().__init__(message, status_code=400, details={"conflicts": conflicts or []})

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)
