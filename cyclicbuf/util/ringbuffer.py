import logging
from typing import Optional, Tuple

from cyclicbuf.util.buffer_config import BufferConfig, SENTINEL
from cyclicbuf.util.status import BufferStatus, RingBufferError

logger = logging.getLogger(__name__)

# RingBuffer is a cyclic byte buffer working inside a movable window [lower_border, upper_border]
# of a larger allocation. Writes and reads wrap around inside the window only.
class RingBuffer:
    def __init__(self, capacity: int):
        status = self._check_size(capacity)
        if status is not BufferStatus.OK:
            raise RingBufferError(status, f"Cannot create ring buffer of capacity {capacity!r}")
        # Create buffer, zeroed on allocation
        try:
            self._storage = bytearray(capacity)
        except (MemoryError, OverflowError):
            raise RingBufferError(BufferStatus.ALLOCATION_ERROR,
                                  f"Cannot allocate {capacity} bytes") from None
        self._capacity = capacity
        # Window borders, both inclusive
        self._lower_border = 0
        self._upper_border = capacity - 1
        # Write and read cursors
        self._write_cursor = 0
        self._read_cursor = 0
        self._last_status = BufferStatus.UNDEFINED_ERROR

    @classmethod
    def construct(cls, capacity: int) -> Tuple[Optional["RingBuffer"], BufferStatus]:
        """Create a buffer and report the outcome as a status instead of raising"""
        try:
            return cls(capacity), BufferStatus.OK
        except RingBufferError as e:
            logger.debug("construct(%r) rejected: %s", capacity, e.status.name)
            return None, e.status

    @classmethod
    def from_config(cls, config: BufferConfig) -> "RingBuffer":
        return cls(config.capacity)

    @staticmethod
    def _check_size(size) -> BufferStatus:
        if isinstance(size, bool) or not isinstance(size, int):
            return BufferStatus.INCORRECT_SIZE
        if size == 0:
            return BufferStatus.INVALID_SIZE
        if size < 0:
            return BufferStatus.INCORRECT_SIZE
        return BufferStatus.OK

    def _record(self, status: BufferStatus, operation: str, argument) -> BufferStatus:
        """Remember the latest status and hand it back to the caller"""
        self._last_status = status
        if status is not BufferStatus.OK:
            logger.debug("%s(%r) rejected: %s", operation, argument, status.name)
        return status

    def _advance(self, index: int) -> int:
        index += 1
        if index > self._upper_border:
            return self._lower_border
        return index

    def _zero(self, start: int, stop: int) -> None:
        if stop > start:
            self._storage[start:stop] = bytes(stop - start)

    def _pending(self) -> int:
        """Number of bytes between read and write cursor, walking forward through the window"""
        if self._write_cursor >= self._read_cursor:
            return self._write_cursor - self._read_cursor
        return self.window_size - (self._read_cursor - self._write_cursor)

    # Accessors
    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def window_size(self) -> int:
        return self._upper_border - self._lower_border + 1

    @property
    def read_cursor(self) -> int:
        return self._read_cursor

    @property
    def write_cursor(self) -> int:
        return self._write_cursor

    @property
    def lower_border(self) -> int:
        return self._lower_border

    @property
    def upper_border(self) -> int:
        return self._upper_border

    @property
    def last_status(self) -> BufferStatus:
        return self._last_status

    # Sequential access
    def write(self, byte: int) -> None:
        """Store one byte at the write cursor, overwriting whatever was there"""
        self._storage[self._write_cursor] = byte
        self._write_cursor = self._advance(self._write_cursor)

    def try_read(self) -> Optional[int]:
        """Return the next unread byte, or None if the read cursor has caught up with the write cursor"""
        if self._read_cursor == self._write_cursor:
            return None
        value = self._storage[self._read_cursor]
        self._read_cursor = self._advance(self._read_cursor)
        return value

    def read(self) -> int:
        """Like try_read, but returns the zero sentinel when there is nothing new to read"""
        value = self.try_read()
        return SENTINEL if value is None else value

    def write_bytes(self, data: bytes) -> int:
        data = bytes(data)
        written = 0
        while written < len(data):
            # Copy up to the upper border, then continue from the lower border
            to_end = min(len(data) - written, self._upper_border + 1 - self._write_cursor)
            self._storage[self._write_cursor:self._write_cursor + to_end] = data[written:written + to_end]
            written += to_end
            self._write_cursor += to_end
            if self._write_cursor > self._upper_border:
                self._write_cursor = self._lower_border
        return written

    def read_bytes(self, limit: Optional[int] = None) -> bytes:
        length = self._pending()
        if limit is not None:
            length = max(0, min(length, limit))
        if length == 0:
            return b''

        result = bytearray(length)
        to_end = min(length, self._upper_border + 1 - self._read_cursor)
        result[:to_end] = self._storage[self._read_cursor:self._read_cursor + to_end]
        # Wrapped part starts at the lower border
        if to_end < length:
            rest = length - to_end
            result[to_end:] = self._storage[self._lower_border:self._lower_border + rest]
            self._read_cursor = self._lower_border + rest
        else:
            self._read_cursor += to_end
        if self._read_cursor > self._upper_border:
            self._read_cursor = self._lower_border
        return bytes(result)

    def __lshift__(self, value):
        if isinstance(value, int):
            self.write(value)
        else:
            self.write_bytes(value)
        return self

    # Cursor positioning
    def _check_cursor(self, index: int) -> BufferStatus:
        if index > self._upper_border:
            return BufferStatus.INDEX_TOO_HIGH
        if index < self._lower_border:
            return BufferStatus.INDEX_TOO_LOW
        return BufferStatus.OK

    def set_read_cursor(self, index: int) -> BufferStatus:
        status = self._check_cursor(index)
        if status is BufferStatus.OK:
            self._read_cursor = index
        return self._record(status, "set_read_cursor", index)

    def set_write_cursor(self, index: int) -> BufferStatus:
        status = self._check_cursor(index)
        if status is BufferStatus.OK:
            self._write_cursor = index
        return self._record(status, "set_write_cursor", index)

    # Window borders
    def set_upper_border(self, index: int) -> BufferStatus:
        """
        Move the upper border of the window.

        Bytes added to the window are zeroed, bytes cut off stay in storage untouched.
        Cursors left above the new border go back to the lower border.
        """
        if index < 0 or index > self._capacity - 1:
            return self._record(BufferStatus.INDEX_TOO_HIGH, "set_upper_border", index)
        if index < self._lower_border:
            return self._record(BufferStatus.BORDER_COLLISION_TOO_LOW, "set_upper_border", index)

        if index > self._upper_border:
            self._zero(self._upper_border + 1, index + 1)
        self._upper_border = index

        if self._write_cursor > self._upper_border:
            self._write_cursor = self._lower_border
        if self._read_cursor > self._upper_border:
            self._read_cursor = self._lower_border
        return self._record(BufferStatus.OK, "set_upper_border", index)

    def set_lower_border(self, index: int) -> BufferStatus:
        """
        Move the lower border of the window.

        Bytes added to the window are zeroed, bytes cut off stay in storage untouched.
        Cursors left below the new border are moved up to it.
        """
        if index < 0 or index > self._capacity - 1:
            return self._record(BufferStatus.INDEX_TOO_HIGH, "set_lower_border", index)
        if index > self._upper_border:
            return self._record(BufferStatus.BORDER_COLLISION_TOO_HIGH, "set_lower_border", index)

        if index < self._lower_border:
            self._zero(index, self._lower_border)
        self._lower_border = index

        if self._write_cursor < self._lower_border:
            self._write_cursor = self._lower_border
        if self._read_cursor < self._lower_border:
            self._read_cursor = self._lower_border
        return self._record(BufferStatus.OK, "set_lower_border", index)

    def resize(self, new_capacity: int) -> BufferStatus:
        """
        Reallocate the storage to new_capacity bytes.

        Data is kept up to the smaller of both sizes and added bytes are zero. Borders beyond
        the new last index are clamped to it, cursors beyond it return to the lower border.
        A failed allocation leaves the buffer as it was.
        """
        status = self._check_size(new_capacity)
        if status is not BufferStatus.OK:
            return self._record(status, "resize", new_capacity)
        if new_capacity == self._capacity:
            return self._record(BufferStatus.OK, "resize", new_capacity)

        try:
            storage = bytearray(new_capacity)
        except (MemoryError, OverflowError):
            return self._record(BufferStatus.ALLOCATION_ERROR, "resize", new_capacity)
        kept = min(self._capacity, new_capacity)
        storage[:kept] = self._storage[:kept]
        logger.debug("Reallocated storage from %d to %d bytes", self._capacity, new_capacity)

        self._storage = storage
        self._capacity = new_capacity

        highest_index = new_capacity - 1
        if self._upper_border > highest_index:
            self._upper_border = highest_index
        if self._lower_border > highest_index:
            self._lower_border = highest_index
        if self._read_cursor > highest_index:
            self._read_cursor = self._lower_border
        if self._write_cursor > highest_index:
            self._write_cursor = self._lower_border
        return self._record(BufferStatus.OK, "resize", new_capacity)

    def reset(self) -> None:
        """Restore the construction-time layout and zero the whole allocation"""
        self._upper_border = self._capacity - 1
        self._lower_border = 0
        self._read_cursor = 0
        self._write_cursor = 0
        self._zero(0, self._capacity)

    def clear(self) -> None:
        # The byte at the upper border is left as it is
        self._zero(self._lower_border, self._upper_border)

    # Random access
    def _translate(self, index: int, use_offset: bool, allow_outside_borders: bool) -> Optional[int]:
        # indexes are unsigned, a negative one never reaches storage
        if index < 0:
            return None
        if use_offset:
            index += self._lower_border
        if index >= self._capacity:
            return None
        if not allow_outside_borders and (index < self._lower_border or index > self._upper_border):
            return None
        return index

    def try_get_at(self, index: int, use_offset: bool = True,
                   allow_outside_borders: bool = False) -> Optional[int]:
        position = self._translate(index, use_offset, allow_outside_borders)
        if position is None:
            return None
        return self._storage[position]

    def get_at(self, index: int, use_offset: bool = True, allow_outside_borders: bool = False) -> int:
        """
        Random read access.

        With use_offset, index 0 is the lower border. Unless allow_outside_borders is set,
        only the window is reachable. Returns the zero sentinel for unreachable indexes.
        """
        value = self.try_get_at(index, use_offset, allow_outside_borders)
        return SENTINEL if value is None else value

    def set_at(self, index: int, value: int, use_offset: bool = True,
               allow_outside_borders: bool = False) -> BufferStatus:
        """
        Random write access with the same index rules as get_at.

        value must be a byte (0..255); anything else raises ValueError from the storage
        and leaves the buffer unchanged. Range problems are reported as INDEX_OUT_OF_RANGE.
        """
        position = self._translate(index, use_offset, allow_outside_borders)
        if position is None:
            return self._record(BufferStatus.INDEX_OUT_OF_RANGE, "set_at", index)
        self._storage[position] = value
        return self._record(BufferStatus.OK, "set_at", index)

    def view(self) -> bytes:
        """Copy of the bytes currently inside the window"""
        return bytes(self._storage[self._lower_border:self._upper_border + 1])

    def __repr__(self):
        return (f"RingBuffer(capacity={self._capacity}, borders=[{self._lower_border}, {self._upper_border}], "
                f"read={self._read_cursor}, write={self._write_cursor})")
