"""Quick start guide for mx3.

Demonstrates:
1. Mixing bits of a single word
2. Random number generation (and resuming a generator)
3. One-shot hashing with each revision
4. Streaming hashers
"""

import mx3
from mx3 import v1, v2, v3


def example_1_mixing():
    """Example 1: Mix the bits of an integer."""
    print("=" * 60)
    print("Example 1: Mixing")
    print("=" * 60)

    for module in (v1, v2, v3):
        print(f"{module.__name__}.mix(123456789) = {module.mix(123456789):#018x}")
    print()


def example_2_random():
    """Example 2: Counter-based PRNG."""
    print("=" * 60)
    print("Example 2: Random numbers")
    print("=" * 60)

    rng = v3.Mx3Rng(123456789)
    print(f"float:  {rng.random()}")
    print(f"u64:    {rng.next_u64():#018x}")
    print(f"bytes:  {rng.random_bytes(12).hex()}")

    # Capture and resume
    state = rng.state()
    expected = rng.next_u64()
    resumed = v3.Mx3Rng.resume(state)
    print(f"resumed draw matches: {resumed.next_u64() == expected}")
    print()


def example_3_hashing():
    """Example 3: One-shot hashing, one digest space per revision."""
    print("=" * 60)
    print("Example 3: Hashing")
    print("=" * 60)

    data = b"Hello world!"
    for module in (v1, v2, v3):
        print(f"{module.__name__}.hash({data!r}) = {module.hash(data, 123456789):#018x}")
    print()


def example_4_streaming():
    """Example 4: Streaming hashers."""
    print("=" * 60)
    print("Example 4: Streaming")
    print("=" * 60)

    pieces = [b"Hello", b" ", b"world!"]
    total = sum(len(p) for p in pieces)

    aligned = mx3.AlignedStreamHasher.with_length(123456789, total)
    for piece in pieces:
        aligned.write(piece)
    one_shot = v2.hash(b"".join(pieces), 123456789)
    print(f"aligned: {aligned.hexdigest()} (v2.hash gives {one_shot:016x})")

    chunked = mx3.ChunkedStreamHasher(123456789)
    for piece in pieces:
        chunked.write(piece)
    print(f"chunked: {chunked.hexdigest()}")
    print()


if __name__ == "__main__":
    example_1_mixing()
    example_2_random()
    example_3_hashing()
    example_4_streaming()
