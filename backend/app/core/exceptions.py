class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class SchedulerError(AppError):
    """Raised when the suggestion engine cannot produce a plan from its inputs."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class InsufficientInputData(SchedulerError):
    """No student interests or no willing professor availabilities for the course/semester."""
    def __init__(self, course_id: str, semester: str, *, interests: int, availabilities: int):
        super().__init__(
            "Not enough student or professor data to generate a schedule suggestion.",
            details={
                "course_id": course_id,
                "semester": semester,
                "student_interests": interests,
                "professor_availabilities": availabilities,
            },
        )

class InsufficientDemand(SchedulerError):
    """Input exists but no subject reaches the minimum demand threshold."""
    def __init__(self, course_id: str, semester: str, *, min_demand: int):
        super().__init__(
            f"No subjects with enough student interest were found (minimum {min_demand}).",
            details={"course_id": course_id, "semester": semester, "min_demand_threshold": min_demand},
        )

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
