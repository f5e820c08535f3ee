from enum import IntEnum

class BufferStatus(IntEnum):
    """Outcome codes reported by RingBuffer operations"""
    OK = 0                          # Operation finished properly
    INVALID_SIZE = 1                # Zero capacity requested
    ALLOCATION_ERROR = 2            # Storage could not be allocated
    INDEX_TOO_HIGH = 3              # Index above the allowed maximum
    INDEX_TOO_LOW = 4               # Index below the allowed minimum
    BORDER_COLLISION_TOO_LOW = 5    # New upper border below the lower border
    BORDER_COLLISION_TOO_HIGH = 6   # New lower border above the upper border
    INCORRECT_SIZE = 7              # Negative or non-integer size
    INDEX_OUT_OF_RANGE = 8          # Random access outside storage or window
    UNDEFINED_ERROR = 999           # Nothing has run yet

    def is_ok(self) -> bool:
        return self is BufferStatus.OK

class RingBufferError(Exception):
    """Raised when a RingBuffer cannot be constructed"""
    def __init__(self, status: BufferStatus, message: str = ""):
        self.status = status
        super().__init__(message or f"Ring buffer error: {status.name}")
