class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class SchedulerError(AppError):
    """Raised when schedule generation cannot start from the supplied inputs."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class NoCoursesFound(SchedulerError):
    def __init__(self, batch_id: str, semester_id: str, department: str | None = None):
        scope = f"Batch {batch_id}, Semester {semester_id}"
        if department:
            scope += f", Department {department}"
        super().__init__(
            f"No courses found for {scope}",
            details={"batch_id": batch_id, "semester_id": semester_id, "department": department},
        )

class NoInstructors(SchedulerError):
    def __init__(self):
        super().__init__("No instructors found. Please add instructors first.")

class NoAvailableRooms(SchedulerError):
    def __init__(self, selected_room_ids: list[str] | None = None):
        super().__init__(
            "No available rooms found. Please initialize rooms first or select rooms.",
            details={"selected_room_ids": list(selected_room_ids or [])},
        )

class NoClassrooms(SchedulerError):
    def __init__(self):
        super().__init__("No classroom rooms available. Please add classroom rooms.")

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)

