import unittest
from cyclicbuf.demo import run_demo, drain
from cyclicbuf.util.buffer_config import BufferConfig
from cyclicbuf.util.ringbuffer import RingBuffer

class TestDemo(unittest.TestCase):
    def test_default_run(self):
        with self.assertLogs('cyclicbuf.demo', level='INFO') as logs:
            buffer = run_demo()
        output = "\n".join(logs.output)

        self.assertIn("Buffer allocation succeeded with size 16.", output)
        self.assertIn("Reading the first pushed character: A", output)
        self.assertIn("Cycle 3: Nothing to read.", output)
        self.assertIn("Value at index 1 was set to: X", output)
        self.assertIn("Read back from buffer: 'XCDHi world'", output)
        self.assertIn("Read back from buffer: 'Hi buffer'", output)
        self.assertIn("Now buffer size is: 11 while total memory size is: 16", output)

        self.assertEqual(buffer.capacity, 32)
        self.assertEqual((buffer.lower_border, buffer.upper_border), (5, 31))
        self.assertEqual((buffer.read_cursor, buffer.write_cursor), (5, 5))
        self.assertEqual(buffer.window_size, 27)

    def test_small_capacity_reports_rejected_border(self):
        with self.assertLogs('cyclicbuf.demo', level='INFO') as logs:
            buffer = run_demo(BufferConfig(capacity=8))
        self.assertTrue(any("INDEX_TOO_HIGH" in line for line in logs.output))
        self.assertEqual(buffer.capacity, 16)

    def test_invalid_capacity(self):
        with self.assertLogs('cyclicbuf.demo', level='ERROR'):
            self.assertIsNone(run_demo(BufferConfig(capacity=0)))

    def test_drain(self):
        buffer = RingBuffer(4)
        buffer.write_bytes(b"ok")
        self.assertEqual(drain(buffer), "ok")
        self.assertEqual(drain(buffer), "")

if __name__ == "__main__":
    unittest.main(verbosity=2)
