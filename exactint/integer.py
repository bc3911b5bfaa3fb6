"""
Exact integer helpers.

Python's int already is an immutable arbitrary-precision signed integer, so
the functions here only add the measurements and the engine-backed
arithmetic (gmpy2) the groups rely on.
"""

import secrets

import gmpy2

from .exceptions import InvalidArgument


MACHINE_WORD_BITS = 64


def bit_length(x):
    """Number of bits needed for |x| (64 -> 7, 9999 -> 14)."""
    return abs(x).bit_length()


def byte_length(x):
    """Number of bytes needed for |x|, i.e. ceil(bit_length / 8)."""
    return (bit_length(x) + 7) // 8


def log2_floor(n):
    if n <= 0:
        raise InvalidArgument("log2 is only defined for positive integers")
    return n.bit_length() - 1


def bit_test(x, index):
    """Whether bit `index` (least significant bit is 0) of |x| is set."""
    if index < 0:
        raise InvalidArgument("bit index must be non-negative")
    return (abs(x) >> index) & 1 == 1


def fits_in_machine_word(x):
    """True when x is representable as a signed 64-bit integer."""
    return -(1 << (MACHINE_WORD_BITS - 1)) <= x < (1 << (MACHINE_WORD_BITS - 1))


def pow_exact(base, exp):
    """Unbounded base**exp for a non-negative exponent."""
    if exp < 0:
        raise InvalidArgument("exponent must be non-negative")
    return int(gmpy2.mpz(base) ** exp)


def powm(base, exp, mod):
    """(base ** exp) mod `mod`. Negative exponents need base invertible mod `mod`."""
    if mod <= 0:
        raise InvalidArgument("modulus must be positive")
    return int(gmpy2.powmod(base, exp, mod))


def isqrt(x):
    """floor(sqrt(x))."""
    if x < 0:
        raise InvalidArgument("square root of a negative number")
    return int(gmpy2.isqrt(x))


def isqrt_with_remainder(x):
    """Return (s, x - s*s) with s = floor(sqrt(x))."""
    if x < 0:
        raise InvalidArgument("square root of a negative number")
    root, remainder = gmpy2.isqrt_rem(x)
    return int(root), int(remainder)


def is_probable_prime(x, rounds=40):
    """
    Miller-Rabin primality test with `rounds` repetitions.

    Primes are always accepted; a composite survives with probability at
    most 4**-rounds.
    """
    if rounds <= 0:
        raise InvalidArgument("rounds must be positive")
    if x < 2:
        return False
    return bool(gmpy2.is_prime(x, rounds))


def random_in_range(low, high, rng=None):
    """Uniform integer in [low, high]."""
    if low > high:
        raise InvalidArgument("low must be <= high")
    if rng is None:
        return low + secrets.randbelow(high - low + 1)
    return rng.randint(low, high)
