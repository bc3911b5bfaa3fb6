"""
Exact integer arithmetic, encodings and number-theoretic algorithms.
"""

from .exceptions import (
    DlogError, InvalidArgument, ArithmeticDomainError, GroupMismatchError,
    EncodingLengthError, ConstructionError
)
from .integer import (
    bit_length, byte_length, log2_floor, bit_test, fits_in_machine_word,
    pow_exact, powm, isqrt, isqrt_with_remainder, is_probable_prime,
    random_in_range
)
from .encoding import (
    EncodedInteger, I2OSP, OS2IP, encode_big_integer, decode_big_integer,
    hex_to_integer, integer_to_hex, decimal_to_integer, integer_to_decimal,
    random_bytes, copy_into_buffer, copy_from_buffer
)
from .conversions import (
    to_mpz, from_mpz, to_cryptodome_integer, from_cryptodome_integer
)
from .algorithms import (
    SquareRootResults, xgcd, mod_inverse, chinese_remainder_theorem, crt,
    sqrt_mod_prime_3_mod_4, factorial, factorial_exact
)

__all__ = [
    'DlogError', 'InvalidArgument', 'ArithmeticDomainError',
    'GroupMismatchError', 'EncodingLengthError', 'ConstructionError',
    'bit_length', 'byte_length', 'log2_floor', 'bit_test',
    'fits_in_machine_word', 'pow_exact', 'powm', 'isqrt',
    'isqrt_with_remainder', 'is_probable_prime', 'random_in_range',
    'EncodedInteger', 'I2OSP', 'OS2IP', 'encode_big_integer',
    'decode_big_integer', 'hex_to_integer', 'integer_to_hex',
    'decimal_to_integer', 'integer_to_decimal', 'random_bytes',
    'copy_into_buffer', 'copy_from_buffer',
    'to_mpz', 'from_mpz', 'to_cryptodome_integer', 'from_cryptodome_integer',
    'SquareRootResults', 'xgcd', 'mod_inverse', 'chinese_remainder_theorem',
    'crt', 'sqrt_mod_prime_3_mod_4', 'factorial', 'factorial_exact'
]
