"""
Example 02: Lazy Pipelines

Combinators chain onto a generator without running it. Only the
materialization at the end pulls values, and only as many as it needs.
"""

from lazy_sequence_engine import Generator, ProducerError, enum_for, naturals


def noisy_square(x):
    print(f"  squaring {x}")
    return x * x


def flaky(yielder):
    yielder << 1
    raise ConnectionError("upstream went away")


if __name__ == "__main__":
    print("select(even) -> take(4) over an infinite counter:")
    print(f"  {naturals().select(lambda x: x % 2 == 0).take(4).to_list()}")

    print("\nmap runs only on the values take consumes:")
    print(f"  {naturals().map(noisy_square).take(3).to_list()}")

    print("\ndrop(2).map(upper).first():")
    print(f"  {enum_for(['x', 'y', 'z']).drop(2).map(str.upper).first()}")

    print("\neach_with_index + inject:")
    countries = enum_for(["India", "Canada", "America", "Iraq"])
    print(f"  {countries.each_with_index().to_list()}")
    countries.rewind()
    print(f"  total letters: {countries.map(len).inject(lambda total, n: total + n, 0)}")

    print("\nProducer errors surface at materialization:")
    try:
        Generator(flaky).map(lambda x: x * 2).to_list()
    except ProducerError as e:
        print(f"  {e}")

    print("\n✅ Pipelines are lazy, ordered and fail loudly at the end!")
