import logging
from typing import Optional

from cyclicbuf.util.buffer_config import BufferConfig
from cyclicbuf.util.ringbuffer import RingBuffer

logger = logging.getLogger(__name__)

def configure_logging(debug: bool = False) -> None:
    """Attach a console handler to the package logger"""
    package_logger = logging.getLogger('cyclicbuf')
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if not package_logger.handlers:
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

def drain(buffer: RingBuffer) -> str:
    # read until the read cursor catches up with the write cursor
    chars = []
    value = buffer.try_read()
    while value is not None:
        chars.append(chr(value))
        value = buffer.try_read()
    return ''.join(chars)

def run_demo(config: Optional[BufferConfig] = None) -> Optional[RingBuffer]:
    """Walk a buffer through pushes, reads, random access, border moves and reallocation"""
    config = config or BufferConfig()
    buffer, status = RingBuffer.construct(config.capacity)
    if not status.is_ok():
        logger.error("Buffer allocation failed with size %d: %s", config.capacity, status.name)
        return None
    logger.info("Buffer allocation succeeded with size %d.", buffer.capacity)
    logger.info("Borders of buffer are set to: %d and %d", buffer.lower_border, buffer.upper_border)

    logger.info("Pushing characters A, B, C, D into buffer.")
    buffer << ord('A') << ord('B') << ord('C') << ord('D')
    logger.info("Index of writing cursor is: %d and index of read cursor is: %d",
                buffer.write_cursor, buffer.read_cursor)

    logger.info("Reading the first pushed character: %s", chr(buffer.read()))
    logger.info("Reading index is now: %d", buffer.read_cursor)

    logger.info("Starting 5 cycles of read() calls:")
    for i in range(5):
        value = buffer.try_read()
        if value is not None:
            logger.info("Cycle %d: %s", i, chr(value))
        else:
            logger.info("Cycle %d: Nothing to read.", i)

    logger.info("Setting element at index 1 to value X.")
    if buffer.set_at(1, ord('X')).is_ok():
        logger.info("Value at index 1 was set to: %s", chr(buffer.get_at(1)))
    else:
        logger.info("Value could not be set: %s", buffer.last_status.name)

    logger.info("Forcing read cursor back to index 1.")
    if buffer.set_read_cursor(1).is_ok():
        logger.info("Read cursor was set back to %d", buffer.read_cursor)

    for text in ("Hi world", "Hi buffer"):
        logger.info("Pushing '%s' string.", text)
        buffer << text.encode()
        logger.info("Read back from buffer: '%s'", drain(buffer))
        logger.info("Writing cursor: %d, reading cursor: %d", buffer.write_cursor, buffer.read_cursor)

    logger.info("Moving upper border to index 10.")
    status = buffer.set_upper_border(10)
    if not status.is_ok():
        logger.warning("Upper border was not moved: %s", status.name)
    logger.info("Now buffer size is: %d while total memory size is: %d", buffer.window_size, buffer.capacity)

    logger.info("Reallocating memory size to %d.", buffer.capacity * 2)
    if buffer.resize(buffer.capacity * 2).is_ok():
        logger.info("Reallocated. Memory size is: %d while buffer size is: %d", buffer.capacity, buffer.window_size)
    else:
        logger.warning("Reallocation failed: %s", buffer.last_status.name)

    logger.info("Resetting buffer...")
    buffer.reset()
    logger.info("Read cursor: %d, write cursor: %d, lower border: %d, upper border: %d",
                buffer.read_cursor, buffer.write_cursor, buffer.lower_border, buffer.upper_border)

    logger.info("Setting lower border to index 5.")
    status = buffer.set_lower_border(5)
    if not status.is_ok():
        logger.warning("Lower border was not moved: %s", status.name)
    logger.info("Write and read cursors are now: %d and %d", buffer.write_cursor, buffer.read_cursor)
    logger.info("Buffer size is: %d while total memory size is: %d", buffer.window_size, buffer.capacity)
    return buffer
