"""
Elliptic-curve group over GF(p) on the gmpy2 engine.
"""

import logging

import gmpy2

from exactint.encoding import I2OSP, OS2IP
from exactint.exceptions import (
    ConstructionError, EncodingLengthError, InvalidArgument
)
from exactint.integer import byte_length, isqrt
from .base import DlogGroup
from .elliptic_curve import EllipticCurve, EllipticCurvePoint
from .field import GF
from .params import CurveParams, CURVE_PARAMETER_SETS, CURVE_BITS_TO_NAME, DEFAULT_CURVE
from .sendable import ECElementSendableData


logger = logging.getLogger(__name__)

# Candidate abscissas tried per encoded byte string.
ENCODING_ATTEMPTS = 256


class DlogECFpGmp(DlogGroup):
    """
    Prime-order elliptic-curve group y^2 = x^3 + ax + b over GF(p).

    Built from `num_bits` (256 -> P-256, 384 -> P-384) or from `params`, a
    name in CURVE_PARAMETER_SETS or a CurveParams. The field prime must be
    3 mod 4 and the cofactor 1.
    """

    group_type = "ECFp"

    def __init__(self, num_bits=None, params=None, rng=None):
        super().__init__(rng)
        if params is not None and num_bits is not None:
            raise ConstructionError("pass either num_bits or params, not both")

        if params is None:
            if num_bits is None:
                params = DEFAULT_CURVE
            elif num_bits in CURVE_BITS_TO_NAME:
                params = CURVE_BITS_TO_NAME[num_bits]
            else:
                raise ConstructionError(f"no curve of {num_bits} bits")
        if isinstance(params, str):
            if params not in CURVE_PARAMETER_SETS:
                raise ConstructionError(f"unknown curve {params!r}")
            params = CURVE_PARAMETER_SETS[params]
            trusted = True
        elif isinstance(params, CurveParams):
            trusted = False
        else:
            raise ConstructionError(f"unsupported parameter object {params!r}")

        self._params = params
        if params.p % 4 != 3 or params.h != 1:
            raise ConstructionError(f"curve {params.name!r} needs p = 3 mod 4 and cofactor 1")
        self.field = GF(params.p)
        self.curve = EllipticCurve(self.field, [params.a, params.b], group=self)
        self._generator = EllipticCurvePoint(
            self.curve, self.field(params.gx), self.field(params.gy))
        self._identity = self.curve.infinity()

        if not trusted and not self.validate_group():
            raise ConstructionError(f"invalid curve parameters {params.name!r}")
        logger.debug("Created %s group %s on gmpy2", self.group_type, params.name)

    def get_generator(self):
        return self._generator

    def get_order(self):
        return self._params.n

    def get_group_type(self):
        return self.group_type

    def get_parameters(self):
        return self._params

    def validate_group(self):
        params = self._params
        if not (gmpy2.is_prime(params.p) and gmpy2.is_prime(params.n)):
            return False
        if self.curve.is_singular():
            return False
        # A prime n inside the Hasse interval with n*G = O is the whole curve order.
        if abs(params.p + 1 - params.n) > 2 * isqrt(params.p) + 1:
            return False
        generator = self._generator
        if not self.curve.contains(generator.x, generator.y):
            return False
        return (generator * params.n).is_infinity

    def owns(self, element):
        return isinstance(element, EllipticCurvePoint) and element.curve is self.curve

    def get_identity(self):
        return self._identity

    def create_random_element(self):
        scalar = self.rng.randint(1, self._params.n - 1)
        return self._generator * scalar

    def generate_element(self, check_membership, *values):
        if len(values) != 2:
            raise InvalidArgument("an EC point is built from exactly two coordinates")
        x, y = values
        if x is None and y is None:
            return self._identity
        if x is None or y is None or not (0 <= x < self._params.p and 0 <= y < self._params.p):
            raise InvalidArgument(f"({x}, {y}) are not coordinates in GF(p)")
        point = EllipticCurvePoint(self.curve, self.field(x), self.field(y))
        if check_membership and not self.is_member(point):
            raise InvalidArgument(f"({x}, {y}) is not a point of {self._params.name}")
        return point

    def reconstruct_element(self, check_membership, data):
        if not isinstance(data, ECElementSendableData):
            raise InvalidArgument(f"cannot rebuild an EC point from {data!r}")
        return self.generate_element(check_membership, data.x, data.y)

    def is_member(self, element):
        if not self.owns(element):
            return False
        if element.is_infinity:
            return True
        # With cofactor 1 every curve point lies in the order-n group.
        return self.curve.contains(element.x, element.y)

    def get_inverse(self, element):
        self.check_element(element)
        return -element

    def multiply_group_elements(self, element1, element2):
        self.check_element(element1)
        self.check_element(element2)
        return element1 + element2

    def exponentiate(self, base, exponent):
        self.check_element(base)
        return base * self.reduce_exponent(exponent)

    def get_max_length_of_byte_array_for_encoding(self):
        # Marker byte, payload and one counter byte must stay below p.
        return max((int(self.field.p).bit_length() - 17) // 8, 0)

    def encode_byte_array_to_group_element(self, data):
        k = self.get_max_length_of_byte_array_for_encoding()
        if len(data) > k:
            raise EncodingLengthError(f"{len(data)} bytes exceed the maximum of {k}")
        prefix = b'\x01' + bytes(data)
        for counter in range(ENCODING_ATTEMPTS):
            point = self.curve.lift_x(OS2IP(prefix + bytes([counter])))
            if point is not None:
                return point
        raise InvalidArgument("no curve point found for this byte string")

    def decode_group_element_to_byte_array(self, element):
        self.check_element(element)
        if element.is_infinity:
            raise InvalidArgument("the point at infinity encodes no bytes")
        x = int(element.x)
        raw = I2OSP(x, byte_length(x))
        if raw[:1] != b'\x01':
            raise InvalidArgument("element was not produced by byte encoding")
        return raw[1:-1]

    def map_any_group_element_to_byte_array(self, element):
        self.check_element(element)
        return element.serialize()
