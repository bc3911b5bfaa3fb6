"""
Prime field arithmetic GF(p) on gmpy2 integers.
"""

import gmpy2
from gmpy2 import mpz

from exactint.algorithms import sqrt_mod_prime_3_mod_4
from exactint.exceptions import ArithmeticDomainError


MPZ = type(mpz(0))


class PrimeFieldElement:
    """Element of a finite field GF(p)."""

    __slots__ = ('field', 'value')

    def __init__(self, value, field):
        self.field = field
        self.value = mpz(value) % field.p

    def _coerce(self, other):
        if isinstance(other, PrimeFieldElement):
            return other.value
        return mpz(other)

    def __add__(self, other):
        return PrimeFieldElement(self.value + self._coerce(other), self.field)

    def __sub__(self, other):
        return PrimeFieldElement(self.value - self._coerce(other), self.field)

    def __mul__(self, other):
        return PrimeFieldElement(self.value * self._coerce(other), self.field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        return self * self.field.inverse(self._coerce(other))

    def __neg__(self):
        return PrimeFieldElement(-self.value, self.field)

    def __eq__(self, other):
        if isinstance(other, PrimeFieldElement):
            return self.field.p == other.field.p and self.value == other.value
        if isinstance(other, (int, MPZ)):
            return self.value == mpz(other) % self.field.p
        return NotImplemented

    def __hash__(self):
        return hash(int(self.value))

    def __int__(self):
        return int(self.value)

    def __repr__(self):
        return f"PrimeFieldElement({self.value}, GF({self.field.p}))"

    def is_zero(self):
        return self.value == 0

    def is_square(self):
        """Check if element is a quadratic residue."""
        if self.value == 0:
            return True
        return gmpy2.legendre(self.value, self.field.p) == 1

    def sqrt(self):
        """A square root of this element, or None for a non-residue."""
        if not self.is_square():
            return None
        roots = sqrt_mod_prime_3_mod_4(int(self.value), int(self.field.p))
        return PrimeFieldElement(roots.root1, self.field)


class FiniteField:
    """Finite field GF(p) for an odd prime p."""

    def __init__(self, p):
        self.p = mpz(p)
        self.byte_length = (int(self.p).bit_length() + 7) // 8

    def __call__(self, value):
        """Create a field element."""
        if isinstance(value, PrimeFieldElement):
            return PrimeFieldElement(value.value, self)
        return PrimeFieldElement(value, self)

    def inverse(self, value):
        value = mpz(value) % self.p
        if value == 0:
            raise ArithmeticDomainError("zero has no inverse in GF(p)")
        return gmpy2.invert(value, self.p)

    def __repr__(self):
        return f"GF({self.p})"


def GF(p):
    """Factory function to create finite fields."""
    return FiniteField(p)
