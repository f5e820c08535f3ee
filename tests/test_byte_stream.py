import unittest
from cyclicbuf.util.byte_stream import ByteStream
import time

class TestByteStream(unittest.TestCase):
    def setUp(self):
        self.stream = ByteStream(capacity=1000)

    def test_push_within_capacity(self):
        data = b"12345"
        pushed_bytes = self.stream.push(data)
        self.assertEqual(pushed_bytes, len(data))
        self.assertEqual(self.stream.bytes_buffered(), len(data))
        self.assertEqual(self.stream.available_capacity(), 995)

    def test_push_exceeding_capacity(self):
        data = b"12345678901"*1000
        with self.assertRaises(ValueError):
            self.stream.push(data)

    def test_fill_to_capacity(self):
        stream = ByteStream(capacity=8)
        stream.push(b"abcdefgh")
        self.assertEqual(stream.available_capacity(), 0)
        with self.assertRaises(ValueError):
            stream.push(b"i")
        self.assertEqual(stream.pop(8), b"abcdefgh")

    def test_close_stream(self):
        self.stream.close()
        self.assertTrue(self.stream.is_closed())

    def test_push_to_closed_stream(self):
        self.stream.close()
        with self.assertRaises(ValueError):
            self.stream.push(b"123")

    def test_peek(self):
        data = b"12345"
        self.stream.push(data)
        self.assertEqual(bytes(self.stream.peek(3)), b"123")
        self.assertEqual(self.stream.bytes_buffered(), 5)
        self.assertEqual(bytes(self.stream.peek(10)), b"12345")

    def test_pop(self):
        data = b"12345"
        self.stream.push(data)
        popped_data = self.stream.pop(3)
        self.assertEqual(bytes(popped_data), b"123")
        self.assertEqual(self.stream.bytes_popped(), 3)
        self.assertEqual(self.stream.pop(10), b"45")
        self.assertEqual(self.stream.bytes_popped(), 5)

    def test_wraparound(self):
        stream = ByteStream(capacity=10)
        stream.push(b"abcdefg")
        self.assertEqual(stream.pop(5), b"abcde")
        stream.push(b"hijklmn")
        self.assertEqual(stream.bytes_buffered(), 9)
        self.assertEqual(stream.peek(4), b"fghi")
        self.assertEqual(stream.pop(9), b"fghijklmn")
        self.assertEqual(stream.bytes_pushed(), 14)

    def test_is_finished(self):
        data = b"12345"
        self.stream.push(data)
        self.stream.pop(5)
        self.stream.close()
        self.assertTrue(self.stream.is_finished())
        with self.assertRaises(ValueError):
            self.stream.pop(1)

class TestByteStreamPerformance(unittest.TestCase):
    def measure_throughput(self, stream: ByteStream, packet_size: int, num_operations: int) -> tuple[float, float]:
        # Prepare test data
        test_data = bytes([i % 256 for i in range(packet_size)])
        total_bytes = packet_size * num_operations

        # Measure push performance
        start_time = time.time()
        for _ in range(num_operations):
            stream.push(test_data)
        push_duration = time.time() - start_time
        push_throughput = total_bytes / max(push_duration, 1e-9)  # bytes per second

        # Measure pop performance
        start_time = time.time()
        for _ in range(num_operations):
            stream.pop(packet_size)
        pop_duration = time.time() - start_time
        pop_throughput = total_bytes / max(pop_duration, 1e-9)  # bytes per second

        return push_throughput, pop_throughput

    def test_throughput_performance(self):
        packet_sizes = [4096, 1024, 256, 64]  # bytes
        buffer_size = 1024 * 1024  # 1MB buffer
        operations = 100

        print("\nByte Stream Throughput Test")
        print("=" * 50)
        print("Packet Size | Push Throughput | Pop Throughput")
        print("-" * 50)

        for packet_size in packet_sizes:
            stream = ByteStream(buffer_size)
            push_throughput, pop_throughput = self.measure_throughput(
                stream, packet_size, operations
            )
            self.assertEqual(stream.bytes_buffered(), 0)
            print(f"{packet_size:^11d} | {push_throughput / (1024 * 1024):^14.2f} | "
                  f"{pop_throughput / (1024 * 1024):^13.2f} MB/s")

        print("-" * 50)

if __name__ == "__main__":
    unittest.main(verbosity=2)
