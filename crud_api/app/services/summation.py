"""Three ways to compute 1 + 2 + ... + n.

All three agree for every non-negative ``n``.  ``sum_to_n_b`` recurses once
per step and is therefore bounded by the interpreter's recursion limit.
"""


def _check(n: int) -> None:
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")


def sum_to_n_a(n: int) -> int:
    # O(1)
    _check(n)
    return n * (n + 1) // 2


def sum_to_n_b(n: int) -> int:
    # O(n) time and stack
    _check(n)
    if n == 0:
        return 0
    return n + sum_to_n_b(n - 1)


def sum_to_n_c(n: int) -> int:
    # O(n) time, O(1) space
    _check(n)
    total = 0
    for i in range(1, n + 1):
        total += i
    return total
