"""
Safe-prime Zp* group on the gmpy2 engine.
"""

import logging

import gmpy2
from gmpy2 import mpz

from exactint.encoding import I2OSP, OS2IP
from exactint.exceptions import (
    ConstructionError, EncodingLengthError, InvalidArgument
)
from exactint.integer import byte_length
from .base import DlogGroup, GroupElement
from .params import (
    ZpGroupParams, ZP_PARAMETER_SETS, ZP_BITS_TO_NAME,
    MIN_GENERATED_BITS, MAX_GENERATED_BITS, DEFAULT_ZP_BITS
)
from .sendable import ZpElementSendableData


logger = logging.getLogger(__name__)

PRIMALITY_ROUNDS = 40


class ZpSafePrimeElementGmp(GroupElement):
    """Quadratic residue modulo a safe prime, held as a gmpy2 mpz."""

    __slots__ = ('value', 'group')

    def __init__(self, value, group):
        self.value = mpz(value)
        self.group = group

    def is_identity(self):
        return self.value == 1

    def canonical(self):
        return int(self.value)

    def generate_sendable_data(self):
        return ZpElementSendableData(int(self.value))

    def __repr__(self):
        return f"ZpSafePrimeElementGmp({self.value})"


def generate_safe_prime_params(num_bits, rng):
    """Random safe prime p of exactly num_bits bits, with generator 4."""
    attempts = 0
    while True:
        attempts += 1
        q = mpz(rng.randint(1 << (num_bits - 2), (1 << (num_bits - 1)) - 1)) | 1
        if not gmpy2.is_prime(q, PRIMALITY_ROUNDS):
            continue
        p = 2 * q + 1
        if gmpy2.is_prime(p, PRIMALITY_ROUNDS):
            logger.debug("Found %d-bit safe prime after %d candidates", num_bits, attempts)
            return ZpGroupParams(p=int(p), q=int(q), g=4, name=f"generated-{num_bits}")


def check_safe_prime_params(params):
    """Whether p = 2q + 1 with p, q prime and g of order q."""
    p, q, g = mpz(params.p), mpz(params.q), mpz(params.g)
    if p != 2 * q + 1 or p < 7:
        return False
    if not (gmpy2.is_prime(q, PRIMALITY_ROUNDS) and gmpy2.is_prime(p, PRIMALITY_ROUNDS)):
        return False
    return 1 < g < p and gmpy2.powmod(g, q, p) == 1


class DlogZpSafePrimeGmp(DlogGroup):
    """
    Order-q subgroup of quadratic residues of Zp*, p = 2q + 1, on gmpy2.

    Built from `num_bits` (1024 and 2048 select RFC groups, 16..512 generate
    a fresh safe prime) or from `params`, a name in ZP_PARAMETER_SETS or a
    ZpGroupParams.
    """

    group_type = "Zp*"

    def __init__(self, num_bits=None, params=None, rng=None):
        super().__init__(rng)
        self._params = self._resolve_params(num_bits, params)
        self._p = mpz(self._params.p)
        self._q = mpz(self._params.q)
        self._generator = ZpSafePrimeElementGmp(self._params.g, self)
        self._identity = ZpSafePrimeElementGmp(1, self)
        logger.debug("Created %s group %s (%d bits) on gmpy2",
                     self.group_type, self._params.name, self._p.bit_length())

    def _resolve_params(self, num_bits, params):
        if params is not None and num_bits is not None:
            raise ConstructionError("pass either num_bits or params, not both")
        if params is not None:
            if isinstance(params, str):
                if params not in ZP_PARAMETER_SETS:
                    raise ConstructionError(f"unknown Zp parameter set {params!r}")
                return ZP_PARAMETER_SETS[params]
            if isinstance(params, ZpGroupParams):
                if not check_safe_prime_params(params):
                    raise ConstructionError(f"invalid safe-prime parameters {params.name!r}")
                return params
            raise ConstructionError(f"unsupported parameter object {params!r}")

        if num_bits is None:
            num_bits = DEFAULT_ZP_BITS
        if num_bits in ZP_BITS_TO_NAME:
            return ZP_PARAMETER_SETS[ZP_BITS_TO_NAME[num_bits]]
        if MIN_GENERATED_BITS <= num_bits <= MAX_GENERATED_BITS:
            return generate_safe_prime_params(num_bits, self.rng)
        raise ConstructionError(f"unsupported Zp group size {num_bits}")

    def get_generator(self):
        return self._generator

    def get_order(self):
        return int(self._q)

    def get_modulus(self):
        return int(self._p)

    def get_group_type(self):
        return self.group_type

    def get_parameters(self):
        return self._params

    def validate_group(self):
        return check_safe_prime_params(self._params)

    def owns(self, element):
        return isinstance(element, ZpSafePrimeElementGmp) and element.group is self

    def get_identity(self):
        return self._identity

    def create_random_element(self):
        r = mpz(self.rng.randint(1, int(self._p) - 1))
        return ZpSafePrimeElementGmp(r * r % self._p, self)

    def generate_element(self, check_membership, *values):
        if len(values) != 1:
            raise InvalidArgument("a Zp element is built from exactly one value")
        x = mpz(values[0])
        if not 0 < x < self._p:
            raise InvalidArgument(f"{x} is outside [1, p)")
        if check_membership and gmpy2.powmod(x, self._q, self._p) != 1:
            raise InvalidArgument(f"{x} is not a member of the order-q subgroup")
        return ZpSafePrimeElementGmp(x, self)

    def reconstruct_element(self, check_membership, data):
        if not isinstance(data, ZpElementSendableData):
            raise InvalidArgument(f"cannot rebuild a Zp element from {data!r}")
        return self.generate_element(check_membership, data.x)

    def is_member(self, element):
        if not self.owns(element):
            return False
        x = element.value
        return 0 < x < self._p and gmpy2.powmod(x, self._q, self._p) == 1

    def get_inverse(self, element):
        self.check_element(element)
        return ZpSafePrimeElementGmp(gmpy2.invert(element.value, self._p), self)

    def multiply_group_elements(self, element1, element2):
        self.check_element(element1)
        self.check_element(element2)
        return ZpSafePrimeElementGmp(element1.value * element2.value % self._p, self)

    def exponentiate(self, base, exponent):
        self.check_element(base)
        return ZpSafePrimeElementGmp(
            gmpy2.powmod(base.value, self.reduce_exponent(exponent), self._p), self)

    def get_max_length_of_byte_array_for_encoding(self):
        # 0x01 marker byte plus k bytes must stay below q.
        return max((self._q.bit_length() - 9) // 8, 0)

    def encode_byte_array_to_group_element(self, data):
        k = self.get_max_length_of_byte_array_for_encoding()
        if len(data) > k:
            raise EncodingLengthError(f"{len(data)} bytes exceed the maximum of {k}")
        x = mpz(OS2IP(b'\x01' + bytes(data)))
        # p = 3 mod 4, so exactly one of x and p - x is a residue.
        if gmpy2.legendre(x, self._p) != 1:
            x = self._p - x
        return ZpSafePrimeElementGmp(x, self)

    def decode_group_element_to_byte_array(self, element):
        self.check_element(element)
        x = element.value if element.value <= self._q else self._p - element.value
        raw = I2OSP(int(x), byte_length(int(x)))
        if raw[:1] != b'\x01':
            raise InvalidArgument("element was not produced by byte encoding")
        return raw[1:]

    def map_any_group_element_to_byte_array(self, element):
        self.check_element(element)
        return I2OSP(int(element.value), byte_length(int(self._p)))
