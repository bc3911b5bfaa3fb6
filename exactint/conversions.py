"""
Lossless conversions between Python ints and the engines' native integers.
"""

import gmpy2
from Crypto.Math.Numbers import Integer


def to_mpz(value):
    return gmpy2.mpz(value)


def from_mpz(value):
    return int(value)


def to_cryptodome_integer(value):
    """pycryptodome Integer holding exactly `value`."""
    return Integer(int(value))


def from_cryptodome_integer(value):
    return int(value)
