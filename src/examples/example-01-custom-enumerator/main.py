"""
Example 01: Custom Enumerators

A Generator wraps a production procedure that emits values through a
yielder. Nothing runs until a value is pulled, the procedure pauses after
each emit, and rewind() starts it over.
"""

from lazy_sequence_engine import Generator, setup_logging


def fibonacci(yielder):
    """Production procedure emitting Fibonacci numbers forever."""
    a = b = 1
    while True:
        yielder << a
        a, b = b, a + b


def natural_numbers(yielder):
    x = 0
    while True:
        yielder << x
        x += 1


if __name__ == "__main__":
    setup_logging()

    print("First 10 Fibonacci numbers (infinite producer, bounded pull):")
    fib = Generator(fibonacci)
    print(f"  {fib.take_n(10)}")

    print("\nPulling naturals one at a time:")
    numbers = Generator(natural_numbers)
    for _ in range(3):
        print(f"  next_value() = {numbers.next_value()}")

    print("\nRewinding and pulling again:")
    numbers.rewind()
    print(f"  next_value() = {numbers.next_value()}")  # Value(value=0)

    print("\n✅ Generators run their procedure only on demand!")
