from dataclasses import dataclass

DEFAULT_CAPACITY = 16
SENTINEL = 0

@dataclass
class BufferConfig:
    capacity: int = DEFAULT_CAPACITY
    debug: bool = False
