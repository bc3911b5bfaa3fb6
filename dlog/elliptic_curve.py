"""
Elliptic curves over prime fields, on gmpy2 integers.
"""

from .base import GroupElement
from .field import PrimeFieldElement
from .sendable import ECElementSendableData


class EllipticCurvePoint(GroupElement):
    """Affine point on an elliptic curve; (None, None) is the point at infinity."""

    __slots__ = ('curve', 'x', 'y', 'is_infinity')

    def __init__(self, curve, x, y):
        self.curve = curve
        self.x = x
        self.y = y
        self.is_infinity = (x is None and y is None)

    @property
    def group(self):
        return self.curve.group

    def __add__(self, other):
        if self.is_infinity:
            return other
        if other.is_infinity:
            return self

        if self.x == other.x:
            if self.y == other.y:
                # Point doubling
                if self.y.is_zero():
                    return self.curve.infinity()

                s = (3 * self.x * self.x + self.curve.a) / (2 * self.y)
                x3 = s * s - 2 * self.x
                y3 = s * (self.x - x3) - self.y
                return EllipticCurvePoint(self.curve, x3, y3)
            # Points are inverses
            return self.curve.infinity()

        s = (other.y - self.y) / (other.x - self.x)
        x3 = s * s - self.x - other.x
        y3 = s * (self.x - x3) - self.y
        return EllipticCurvePoint(self.curve, x3, y3)

    def __mul__(self, scalar):
        """Scalar multiplication using double-and-add."""
        if isinstance(scalar, PrimeFieldElement):
            scalar = int(scalar)

        if scalar == 0:
            return self.curve.infinity()

        if scalar < 0:
            return (-self) * (-scalar)

        result = self.curve.infinity()
        addend = self

        while scalar:
            if scalar & 1:
                result = result + addend
            addend = addend + addend
            scalar >>= 1

        return result

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __neg__(self):
        if self.is_infinity:
            return self
        return EllipticCurvePoint(self.curve, self.x, -self.y)

    def is_identity(self):
        return self.is_infinity

    def canonical(self):
        if self.is_infinity:
            return None
        return (int(self.x), int(self.y))

    def generate_sendable_data(self):
        if self.is_infinity:
            return ECElementSendableData(None, None)
        return ECElementSendableData(int(self.x), int(self.y))

    def __repr__(self):
        if self.is_infinity:
            return "Point at infinity"
        return f"({self.x.value}, {self.y.value})"

    def serialize(self):
        """Serialize point to bytes (compressed format)."""
        if self.is_infinity:
            return b'\x00'

        x_bytes = int(self.x).to_bytes(self.curve.field.byte_length, 'big')

        # Compressed format: 0x02 if y is even, 0x03 if y is odd
        if int(self.y) % 2 == 0:
            return b'\x02' + x_bytes
        return b'\x03' + x_bytes


class EllipticCurve:
    """Elliptic curve y^2 = x^3 + ax + b over a finite field."""

    def __init__(self, field, coefficients, group=None):
        self.field = field
        self.group = group
        if len(coefficients) == 2:
            self.a = field(coefficients[0])
            self.b = field(coefficients[1])
        else:
            raise ValueError("Only Weierstrass form y^2 = x^3 + ax + b supported")

    def is_singular(self):
        return (4 * self.a * self.a * self.a + 27 * self.b * self.b).is_zero()

    def rhs(self, x):
        """x^3 + ax + b."""
        return x * x * x + self.a * x + self.b

    def contains(self, x, y):
        return y * y == self.rhs(x)

    def lift_x(self, x):
        """A point with abscissa x, or None when x^3 + ax + b is not a square."""
        x = self.field(x)
        y = self.rhs(x).sqrt()
        if y is None:
            return None
        return EllipticCurvePoint(self, x, y)

    def infinity(self):
        """Return the point at infinity."""
        return EllipticCurvePoint(self, None, None)

    def __repr__(self):
        return f"EllipticCurve(GF({self.field.p}), [{self.a.value}, {self.b.value}])"
