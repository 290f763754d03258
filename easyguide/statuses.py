# easyguide/statuses.py


class OrderStatuses:
    """Order lifecycle shared by the data service and the REST gateway."""

    INITIATED = "initiated"
    PROCESSING = "processing"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    ALL = (INITIATED, PROCESSING, PENDING, CONFIRMED, FAILED)
