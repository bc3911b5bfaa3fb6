#!/usr/bin/env python3
"""
Tests for modular square roots, CRT, modular inverse and factorials.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest

from exactint import (
    sqrt_mod_prime_3_mod_4, mod_inverse, chinese_remainder_theorem, crt,
    factorial, factorial_exact, xgcd, DlogError, InvalidArgument,
    ArithmeticDomainError
)


def test_sqrt_mod_prime_3_mod_4():
    # sqrt(16) mod 7 == (4, -4)
    assert 4 in sqrt_mod_prime_3_mod_4(16, 7)
    # sqrt(25) mod 7 == (5, -5)
    assert 5 in sqrt_mod_prime_3_mod_4(25, 7)
    # sqrt(121) mod 7 == (4, -4)
    assert 4 in sqrt_mod_prime_3_mod_4(121, 7)
    # sqrt(207936) mod 7 == (1, -1)
    assert 1 in sqrt_mod_prime_3_mod_4(207936, 7)


def test_sqrt_roots_are_negatives_of_each_other():
    p = 2**127 - 1
    a = pow(123456789, 2, p)
    roots = sqrt_mod_prime_3_mod_4(a, p)
    assert roots.root2 == p - roots.root1
    assert pow(roots.root1, 2, p) == a
    assert 123456789 in roots


def test_sqrt_rejects_prime_1_mod_4():
    # 13 is 1 mod 4
    with pytest.raises(InvalidArgument):
        sqrt_mod_prime_3_mod_4(625, 13)


def test_mod_inverse():
    assert mod_inverse(3, 7) == 5
    assert mod_inverse(-3, 7) == 2
    with pytest.raises(ArithmeticDomainError):
        mod_inverse(6, 9)


def test_xgcd():
    g, x, y = xgcd(240, 46)
    assert g == 2
    assert 240 * x + 46 * y == 2


def test_chinese_remainder_theorem():
    assert chinese_remainder_theorem([2, 3, 2], [3, 5, 7]) == 23
    assert crt([1], [5]) == 1


def test_crt_rejects_bad_input():
    with pytest.raises(InvalidArgument):
        crt([1, 2], [3])
    with pytest.raises(InvalidArgument):
        crt([], [])
    with pytest.raises(ArithmeticDomainError):
        crt([1, 2], [4, 6])


def test_factorial():
    assert factorial(0) == 1
    assert factorial(6) == 720
    assert factorial(20) == 2432902008176640000
    with pytest.raises(InvalidArgument):
        factorial(21)
    with pytest.raises(DlogError):
        factorial(30)
    with pytest.raises(InvalidArgument):
        factorial(-1)


def test_factorial_exact():
    assert str(factorial_exact(35)) == "10333147966386144929666651337523200000000"
    assert factorial_exact(20) == factorial(20)


def main():
    """Run all math algorithm tests."""
    sys.exit(pytest.main([__file__]))


if __name__ == "__main__":
    main()
