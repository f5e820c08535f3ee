#!/usr/bin/env python3
import argparse
import sys
import os

# Add project root directory to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cyclicbuf.demo import configure_logging, run_demo
from cyclicbuf.util.buffer_config import BufferConfig, DEFAULT_CAPACITY

def main():
    parser = argparse.ArgumentParser(description="Exercise the cyclic buffer and print what happens.")
    parser.add_argument('--capacity', type=int, default=DEFAULT_CAPACITY, help="Initial buffer size in bytes")
    parser.add_argument('--debug', action='store_true', help="Log rejected operations")
    args = parser.parse_args()

    config = BufferConfig(capacity=args.capacity, debug=args.debug)
    configure_logging(config.debug)
    buffer = run_demo(config)
    if buffer is None:
        sys.exit(1)
    print(buffer)

if __name__ == "__main__":
    main()
