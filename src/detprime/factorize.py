# -----------------------------------------------------------------------------
#  factorize.py
#  Trial division + 6k±1 wheel factorization for 0 <= n < 2^64
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections import Counter
from multiprocessing import Process, Queue
from queue import Empty
from time import perf_counter

from detprime.primality import is_prime, is_prime32
from detprime.runtime import debug
from detprime.tables import FACTOR_PRIMES, INT32_MAX, WHEEL_START
from detprime.utility import require_uint

_REPORT_EVERY = 1 << 20  # wheel steps between debug progress lines


def _certify(n: int) -> bool:
    return is_prime32(n) if n <= INT32_MAX else is_prime(n)


def factor(n: int) -> list[int]:
    """
    Return the prime factors of n in ascending order, with multiplicity.

    factor(0) == [0] and factor(1) == [1]: the input comes back unchanged,
    which is not a prime factorization. Callers needing strict semantics
    must special-case 0 and 1 (factor_map does).

    Worst case is a product of two ~32-bit primes, which walks the wheel up
    to sqrt(n). There is no internal deadline; see factor_bounded().

    Examples
    --------
    >>> factor(360)
    [2, 2, 2, 3, 3, 5]
    >>> factor(999999937)
    [999999937]
    """
    require_uint(n)
    if n < 2:
        return [n]

    factors: list[int] = []

    # 1) small primes 2..53
    for p in FACTOR_PRIMES:
        while n % p == 0:
            n //= p
            factors.append(p)
        if n == 1:
            return factors

    # 2) cofactor already prime?
    if _certify(n):
        factors.append(n)
        return factors

    # 3) 6k±1 wheel from 59
    t0 = perf_counter()
    steps = 0
    i = WHEEL_START
    while i * i <= n:
        for q in (i, i + 2):
            if n % q:
                continue
            while n % q == 0:
                n //= q
                factors.append(q)
            if n > 1 and _certify(n):
                factors.append(n)
                return factors
        i += 6
        steps += 1
        if steps % _REPORT_EVERY == 0:
            debug(f"factor: wheel at {i}, remaining ≈{n.bit_length()} bits, t={perf_counter() - t0:5.2f}s")

    # 4) whatever is left has no divisor <= its square root
    if n > 1:
        factors.append(n)
    return factors


def factor_map(n: int) -> dict[int, int]:
    """
    {prime: exponent} for n; empty for 0 and 1.

    >>> factor_map(5040)
    {2: 4, 3: 2, 5: 1, 7: 1}
    """
    require_uint(n)
    if n < 2:
        return {}
    return dict(Counter(factor(n)))


def largest_prime_factor(n: int) -> int | None:
    require_uint(n)
    if n < 2:
        return None
    return factor(n)[-1]


def is_semiprime(n: int) -> bool:
    require_uint(n)
    return n >= 4 and len(factor(n)) == 2


def _factor_worker(q: Queue[list[int] | Exception], n: int) -> None:
    """
    Worker run in a subprocess so the parent can abandon it.
    Result or exception is put into the queue.
    """
    try:
        res = factor(n)
    except Exception as e:  # propagate errors to parent
        q.put(e)
    else:
        q.put(res)


def factor_bounded(n: int, max_time_s: float) -> list[int] | None:
    """
    Run factor(n) in a subprocess and enforce a hard wall-clock timeout.

    Returns the factor list, or None when the deadline passed and the worker
    was terminated. Exceptions raised in the worker are re-raised here; a
    worker that dies without a result raises RuntimeError.
    """
    require_uint(n)
    q: Queue[list[int] | Exception] = Queue()
    p = Process(target=_factor_worker, args=(q, n))
    p.start()
    p.join(max_time_s)

    if p.is_alive():
        p.terminate()
        p.join()
        debug(f"factor_bounded: gave up on {n} after {max_time_s:g}s")
        return None

    if p.exitcode != 0:
        raise RuntimeError(f"factor worker for {n} died (exit code {p.exitcode})")
    try:
        res = q.get(timeout=1.0)
    except Empty:
        raise RuntimeError(f"factor worker for {n} exited without a result") from None

    if isinstance(res, Exception):
        raise res
    return res
