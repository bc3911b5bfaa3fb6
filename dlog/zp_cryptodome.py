"""
Safe-prime Zp* group on pycryptodome's big-integer routines.
"""

import logging

from Crypto.Math.Numbers import Integer
from Crypto.Util.number import getPrime, isPrime

from exactint.encoding import I2OSP, OS2IP
from exactint.exceptions import (
    ConstructionError, EncodingLengthError, InvalidArgument
)
from .base import DlogGroup, GroupElement
from .params import (
    ZpGroupParams, ZP_PARAMETER_SETS, ZP_BITS_TO_NAME,
    MIN_GENERATED_BITS, MAX_GENERATED_BITS, DEFAULT_ZP_BITS
)
from .sendable import ZpElementSendableData


logger = logging.getLogger(__name__)

FALSE_POSITIVE_PROB = 1e-12


class ZpSafePrimeElementCryptodome(GroupElement):
    """Quadratic residue modulo a safe prime, held as a pycryptodome Integer."""

    __slots__ = ('value', 'group')

    def __init__(self, value, group):
        self.value = value if isinstance(value, Integer) else Integer(int(value))
        self.group = group

    def is_identity(self):
        return self.value == 1

    def canonical(self):
        return int(self.value)

    def generate_sendable_data(self):
        return ZpElementSendableData(int(self.value))

    def __repr__(self):
        return f"ZpSafePrimeElementCryptodome({int(self.value)})"


def _randfunc(rng):
    """Adapt an rng exposing randint() to pycryptodome's randfunc(n) -> bytes."""
    return lambda n: bytes(rng.randint(0, 255) for _ in range(n))


class DlogZpSafePrimeCryptodome(DlogGroup):
    """
    Order-q subgroup of quadratic residues of Zp*, p = 2q + 1, computed with
    pycryptodome's Integer (modular exponentiation, inversion) and its
    prime generation.
    """

    group_type = "Zp*"

    def __init__(self, num_bits=None, params=None, rng=None):
        super().__init__(rng)
        if params is not None and num_bits is not None:
            raise ConstructionError("pass either num_bits or params, not both")

        if isinstance(params, str):
            if params not in ZP_PARAMETER_SETS:
                raise ConstructionError(f"unknown Zp parameter set {params!r}")
            params = ZP_PARAMETER_SETS[params]
        elif isinstance(params, ZpGroupParams):
            if not self._check_params(params):
                raise ConstructionError(f"invalid safe-prime parameters {params.name!r}")
        elif params is not None:
            raise ConstructionError(f"unsupported parameter object {params!r}")
        else:
            num_bits = DEFAULT_ZP_BITS if num_bits is None else num_bits
            if num_bits in ZP_BITS_TO_NAME:
                params = ZP_PARAMETER_SETS[ZP_BITS_TO_NAME[num_bits]]
            elif MIN_GENERATED_BITS <= num_bits <= MAX_GENERATED_BITS:
                params = self._generate_params(num_bits)
            else:
                raise ConstructionError(f"unsupported Zp group size {num_bits}")

        self._params = params
        self._p = Integer(params.p)
        self._q = Integer(params.q)
        self._generator = ZpSafePrimeElementCryptodome(params.g, self)
        self._identity = ZpSafePrimeElementCryptodome(1, self)
        logger.debug("Created %s group %s (%d bits) on pycryptodome",
                     self.group_type, params.name, self._p.size_in_bits())

    def _generate_params(self, num_bits):
        randfunc = _randfunc(self.rng)
        attempts = 0
        while True:
            attempts += 1
            q = getPrime(num_bits - 1, randfunc=randfunc)
            p = 2 * q + 1
            if isPrime(p, false_positive_prob=FALSE_POSITIVE_PROB, randfunc=randfunc):
                logger.debug("Found %d-bit safe prime after %d candidates", num_bits, attempts)
                return ZpGroupParams(p=p, q=q, g=4, name=f"generated-{num_bits}")

    @staticmethod
    def _check_params(params):
        p, q, g = params.p, params.q, params.g
        if p != 2 * q + 1 or p < 7:
            return False
        if not (isPrime(q, false_positive_prob=FALSE_POSITIVE_PROB)
                and isPrime(p, false_positive_prob=FALSE_POSITIVE_PROB)):
            return False
        return 1 < g < p and pow(Integer(g), q, Integer(p)) == 1

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
        return self._check_params(self._params)

    def owns(self, element):
        return isinstance(element, ZpSafePrimeElementCryptodome) and element.group is self

    def get_identity(self):
        return self._identity

    def create_random_element(self):
        r = Integer(self.rng.randint(1, int(self._p) - 1))
        return ZpSafePrimeElementCryptodome((r * r) % self._p, self)

    def _in_subgroup(self, x):
        return 0 < x < self._p and pow(x, self._q, self._p) == 1

    def generate_element(self, check_membership, *values):
        if len(values) != 1:
            raise InvalidArgument("a Zp element is built from exactly one value")
        x = Integer(int(values[0]))
        if not 0 < x < self._p:
            raise InvalidArgument(f"{int(x)} is outside [1, p)")
        if check_membership and not self._in_subgroup(x):
            raise InvalidArgument(f"{int(x)} is not a member of the order-q subgroup")
        return ZpSafePrimeElementCryptodome(x, self)

    def reconstruct_element(self, check_membership, data):
        if not isinstance(data, ZpElementSendableData):
            raise InvalidArgument(f"cannot rebuild a Zp element from {data!r}")
        return self.generate_element(check_membership, data.x)

    def is_member(self, element):
        if not self.owns(element):
            return False
        return self._in_subgroup(element.value)

    def get_inverse(self, element):
        self.check_element(element)
        return ZpSafePrimeElementCryptodome(element.value.inverse(self._p), self)

    def multiply_group_elements(self, element1, element2):
        self.check_element(element1)
        self.check_element(element2)
        return ZpSafePrimeElementCryptodome((element1.value * element2.value) % self._p, self)

    def exponentiate(self, base, exponent):
        self.check_element(base)
        exponent = Integer(self.reduce_exponent(exponent))
        return ZpSafePrimeElementCryptodome(pow(base.value, exponent, self._p), self)

    def get_max_length_of_byte_array_for_encoding(self):
        return max((self._q.size_in_bits() - 9) // 8, 0)

    def encode_byte_array_to_group_element(self, data):
        k = self.get_max_length_of_byte_array_for_encoding()
        if len(data) > k:
            raise EncodingLengthError(f"{len(data)} bytes exceed the maximum of {k}")
        x = Integer(OS2IP(b'\x01' + bytes(data)))
        if Integer.jacobi_symbol(x, self._p) != 1:
            x = self._p - x
        return ZpSafePrimeElementCryptodome(x, self)

    def decode_group_element_to_byte_array(self, element):
        self.check_element(element)
        x = element.value if element.value <= self._q else self._p - element.value
        raw = x.to_bytes()
        if raw[:1] != b'\x01':
            raise InvalidArgument("element was not produced by byte encoding")
        return raw[1:]

    def map_any_group_element_to_byte_array(self, element):
        self.check_element(element)
        return I2OSP(int(element.value), self._p.size_in_bytes())
