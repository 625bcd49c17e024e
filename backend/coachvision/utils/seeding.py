"""
Reproducible seeding for the simulation path

The seed hash and the stream recurrence are deliberately simple integer folds
so that other ports of the academy tooling can reproduce them bit for bit.
Neither is cryptographic.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence, TypeVar, Union

T = TypeVar("T")

_INT32_MASK = 0xFFFFFFFF

# Classic LCG constants, modulus keeps every state exactly representable
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


def _to_int32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value"""
    value &= _INT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def _format_size(size: Union[int, float]) -> str:
    # 1048576.0 and 1048576 must seed identically
    if isinstance(size, float) and size.is_integer():
        return str(int(size))
    return str(size)


def derive_seed(identifier: str, team_tag: str, size: Union[int, float]) -> int:
    """
    Fold (identifier, team tag, size) into a non-negative integer seed

    The key string ``"{identifier}-{team_tag}-{size}"`` is folded over its
    UTF-16 code units with ``hash = hash * 31 + unit`` in signed 32-bit
    arithmetic, and the absolute value is returned.

    Args:
        identifier: Video reference string
        team_tag: Team tag (empty string when absent)
        size: Clip size in bytes

    Returns:
        Seed in [0, 2**31]
    """
    key = f"{identifier}-{team_tag}-{_format_size(size)}"
    encoded = key.encode("utf-16-le")
    hash_value = 0
    for offset in range(0, len(encoded), 2):
        unit = encoded[offset] | (encoded[offset + 1] << 8)
        hash_value = _to_int32((hash_value << 5) - hash_value + unit)
    return abs(hash_value)


class DeterministicStream:
    """
    Seeded pseudo-random stream owned by exactly one synthesis run

    The same sequence of calls against streams built from the same seed
    always yields the same outputs.
    """

    def __init__(self, seed: int):
        if seed < 0:
            raise ValueError("seed must be non-negative")
        self._state = seed

    def next_unit(self) -> float:
        """Advance the recurrence and return a float in [0, 1)"""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def next_int(self, minimum: int, maximum: int) -> int:
        """Integer in [minimum, maximum], both bounds inclusive"""
        if maximum < minimum:
            raise ValueError(f"empty range [{minimum}, {maximum}]")
        return int(self.next_unit() * (maximum - minimum + 1)) + minimum

    def next_float(self, minimum: float, maximum: float, decimals: int = 1) -> float:
        """Float in [minimum, maximum] rounded half-up to ``decimals`` places"""
        if maximum < minimum:
            raise ValueError(f"empty range [{minimum}, {maximum}]")
        raw = self.next_unit() * (maximum - minimum) + minimum
        quantum = Decimal(1).scaleb(-decimals)
        return float(Decimal(raw).quantize(quantum, rounding=ROUND_HALF_UP))

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle into a new list, the input is left untouched"""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result
