"""
Number-theoretic algorithms over exact integers.
"""

from functools import reduce
from typing import NamedTuple
import operator

import gmpy2

from .exceptions import ArithmeticDomainError, InvalidArgument
from .integer import fits_in_machine_word


class SquareRootResults(NamedTuple):
    """
    The two square roots of a residue modulo a prime, root2 = p - root1.

    Neither root is preferred; callers pick the one they need.
    """
    root1: int
    root2: int


def xgcd(a, b):
    """Extended Euclid: return (g, x, y) with a*x + b*y = g = gcd(a, b)."""
    x0, x1, y0, y1 = 1, 0, 0, 1
    while b:
        q, a, b = a // b, b, a % b
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return a, x0, y0


def mod_inverse(a, n):
    """The unique b in [0, n) with a*b = 1 (mod n)."""
    if n <= 0:
        raise InvalidArgument("modulus must be positive")
    g, x, _ = xgcd(a % n, n)
    if g != 1:
        raise ArithmeticDomainError(f"No inverse: gcd({a}, {n}) = {g}")
    return x % n


def chinese_remainder_theorem(congruences, moduli):
    """
    Smallest non-negative x with x = congruences[i] (mod moduli[i]) for all i.

    The moduli must be pairwise coprime.
    """
    if len(congruences) != len(moduli):
        raise InvalidArgument("congruences and moduli must have the same length")
    if not moduli:
        raise InvalidArgument("at least one congruence is required")
    if any(m <= 0 for m in moduli):
        raise InvalidArgument("moduli must be positive")

    product = reduce(operator.mul, moduli, 1)
    result = 0
    for residue, modulus in zip(congruences, moduli):
        partial = product // modulus
        try:
            result += residue * partial * mod_inverse(partial, modulus)
        except ArithmeticDomainError as exc:
            raise ArithmeticDomainError("moduli are not pairwise coprime") from exc
    return result % product


crt = chinese_remainder_theorem


def sqrt_mod_prime_3_mod_4(a, p):
    """
    Square roots of `a` modulo a prime p = 3 (mod 4).

    Computes r = a^((p+1)/4) mod p. Residuosity of `a` is not checked; for a
    non-residue the returned pair is meaningless.
    """
    if p % 4 != 3:
        raise InvalidArgument(f"{p} is not congruent to 3 mod 4")
    root = int(gmpy2.powmod(a, (p + 1) // 4, p))
    return SquareRootResults(root, (p - root) % p)


def factorial(n):
    """n! for results that fit a signed 64-bit word (n <= 20)."""
    if n < 0:
        raise InvalidArgument("factorial of a negative number")
    result = 1
    for i in range(2, n + 1):
        result *= i
        if not fits_in_machine_word(result):
            raise InvalidArgument(f"{n}! does not fit in a machine word")
    return result


def factorial_exact(n):
    """n! at arbitrary precision."""
    if n < 0:
        raise InvalidArgument("factorial of a negative number")
    return int(gmpy2.fac(n))
