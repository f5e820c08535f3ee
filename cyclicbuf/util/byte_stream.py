from cyclicbuf.util.ringbuffer import RingBuffer

# ByteStream is a buffer between a producer and a consumer of bytes.
# Unlike the bare RingBuffer it counts what is buffered, so it refuses to overwrite unread data.
class ByteStream:
    def __init__(self, capacity: int):
        # one spare slot keeps "full" apart from "empty" (read cursor == write cursor)
        self.buffer = RingBuffer(capacity + 1)
        self.capacity = capacity
        self.closed = False
        self._bytes_pushed = 0
        self._bytes_popped = 0

    # Interfaces for writer
    # push data to stream, refusing anything beyond the available capacity
    def push(self, data: bytes) -> int:
        if self.is_closed():
            raise ValueError("Stream is closed")
        if len(data) > self.available_capacity():
            raise ValueError("Not enough capacity")
        self.buffer.write_bytes(data)
        self._bytes_pushed += len(data)
        return len(data)

    # signal that the stream is closed and nothing more will be written to it
    def close(self) -> None:
        self.closed = True

    def is_closed(self) -> bool:
        return self.closed

    def available_capacity(self) -> int:
        return self.capacity - self.bytes_buffered()

    def bytes_pushed(self) -> int:
        return self._bytes_pushed

    # Interfaces for reader
    def peek(self, n: int) -> bytes:
        if self.is_finished():
            raise ValueError("Stream is finished")
        read_cursor = self.buffer.read_cursor
        result = self.buffer.read_bytes(min(n, self.bytes_buffered()))
        self.buffer.set_read_cursor(read_cursor)
        return result

    def pop(self, n: int) -> bytes:
        if self.is_finished():
            raise ValueError("Stream is finished")
        result = self.buffer.read_bytes(min(n, self.bytes_buffered()))
        self._bytes_popped += len(result)
        return result

    # check if the stream is closed and fully popped
    def is_finished(self) -> bool:
        return self.is_closed() and self._bytes_popped == self._bytes_pushed

    def bytes_buffered(self) -> int:
        return self._bytes_pushed - self._bytes_popped

    def bytes_popped(self) -> int:
        return self._bytes_popped
