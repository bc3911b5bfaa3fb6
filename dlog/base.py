"""
Base classes for discrete-log groups and their elements.
"""

from abc import ABC, abstractmethod
import logging
import secrets

from exactint.exceptions import GroupMismatchError, InvalidArgument
from exactint.integer import is_probable_prime
from .precompute import PrecomputedExponentTable


logger = logging.getLogger(__name__)


class GroupElement(ABC):
    """
    A member of a DlogGroup.

    Elements are immutable and remember the group instance that produced
    them. Equality is algebraic: two elements are equal when they are the
    same member of groups with the same parameters, whatever their internal
    representation.
    """

    group = None

    @abstractmethod
    def is_identity(self):
        raise NotImplementedError

    @abstractmethod
    def canonical(self):
        """Hashable canonical representation of the element's value."""
        raise NotImplementedError

    @abstractmethod
    def generate_sendable_data(self):
        raise NotImplementedError

    def equals(self, other):
        """Compare algebraic value, not representation."""
        if not isinstance(other, GroupElement) or type(self) is not type(other):
            return False
        if self.canonical() != other.canonical():
            return False
        return (self.group is other.group
                or self.group.get_parameters() == other.group.get_parameters())

    def __eq__(self, other):
        return self.equals(other)

    def __ne__(self, other):
        return not self.equals(other)

    def __hash__(self):
        return hash((type(self).__name__, self.canonical()))


class DlogGroup(ABC):
    """
    Abstract discrete-log group.

    Concrete groups are built from a bit size or a named parameter set and
    act as factory and validator for their elements. The only mutable state
    is the per-base precomputation cache, which is not thread-safe.
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else secrets.SystemRandom()
        self._precomputed = {}

    # Parameters

    @abstractmethod
    def get_generator(self):
        raise NotImplementedError

    @abstractmethod
    def get_order(self):
        raise NotImplementedError

    @abstractmethod
    def get_group_type(self):
        raise NotImplementedError

    @abstractmethod
    def get_parameters(self):
        raise NotImplementedError

    @abstractmethod
    def validate_group(self):
        raise NotImplementedError

    def is_generator(self):
        generator = self.get_generator()
        return self.is_member(generator) and not generator.is_identity()

    def is_prime_order(self):
        return is_probable_prime(self.get_order())

    def is_order_greater_than(self, num):
        return self.get_order() > num

    # Element construction and checks

    @abstractmethod
    def owns(self, element):
        """True when `element` was produced by this group instance."""
        raise NotImplementedError

    def check_element(self, element):
        if not self.owns(element):
            raise GroupMismatchError(
                f"{element!r} does not belong to this {self.get_group_type()} group")
        return element

    @abstractmethod
    def get_identity(self):
        raise NotImplementedError

    @abstractmethod
    def create_random_element(self):
        raise NotImplementedError

    @abstractmethod
    def generate_element(self, check_membership, *values):
        raise NotImplementedError

    @abstractmethod
    def reconstruct_element(self, check_membership, data):
        raise NotImplementedError

    @abstractmethod
    def is_member(self, element):
        raise NotImplementedError

    # Group law

    @abstractmethod
    def get_inverse(self, element):
        raise NotImplementedError

    @abstractmethod
    def multiply_group_elements(self, element1, element2):
        raise NotImplementedError

    @abstractmethod
    def exponentiate(self, base, exponent):
        raise NotImplementedError

    def reduce_exponent(self, exponent):
        """Map any integer exponent into [0, order)."""
        return exponent % self.get_order()

    @staticmethod
    def window_size(num_bits):
        if num_bits <= 32:
            return 2
        if num_bits <= 128:
            return 3
        if num_bits <= 512:
            return 4
        return 5

    def simultaneous_multiple_exponentiations(self, bases, exponents):
        """
        Compute prod(bases[i] ** exponents[i]).

        Interleaved fixed-window exponentiation: every base gets a small
        table of its first 2^w powers and all bases share one chain of
        squarings.
        """
        if len(bases) != len(exponents):
            raise InvalidArgument("bases and exponents must have the same length")
        if not bases:
            raise InvalidArgument("at least one base is required")
        for base in bases:
            self.check_element(base)

        exponents = [self.reduce_exponent(k) for k in exponents]
        max_bits = max(k.bit_length() for k in exponents)
        identity = self.get_identity()
        if max_bits == 0:
            return identity

        window = self.window_size(max_bits)
        mask = (1 << window) - 1
        tables = []
        for base in bases:
            table = [identity, base]
            for _ in range(2, 1 << window):
                table.append(self.multiply_group_elements(table[-1], base))
            tables.append(table)

        result = identity
        started = False
        for index in reversed(range((max_bits + window - 1) // window)):
            if started:
                for _ in range(window):
                    result = self.multiply_group_elements(result, result)
            shift = index * window
            for table, exponent in zip(tables, exponents):
                digit = (exponent >> shift) & mask
                if digit:
                    result = self.multiply_group_elements(result, table[digit])
                    started = True
        return result

    def exponentiate_with_pre_computed_values(self, base, exponent):
        """
        base ** exponent, building (once) a windowed table of powers of base.

        The table stays cached until end_exponentiate_with_pre_computed_values
        is called for the same base.
        """
        self.check_element(base)
        table = self._precomputed.get(base)
        if table is None:
            table = PrecomputedExponentTable(self, base, self.window_size(self.get_order().bit_length()))
            self._precomputed[base] = table
            logger.debug("Created precomputation table for %r", base)
        return table.power(self.reduce_exponent(exponent))

    def end_exponentiate_with_pre_computed_values(self, base):
        """Release the cached table of `base`; a no-op when there is none."""
        if self._precomputed.pop(base, None) is not None:
            logger.debug("Released precomputation table for %r", base)

    def has_pre_computed_values(self, base):
        return base in self._precomputed

    # Byte encoding

    @abstractmethod
    def get_max_length_of_byte_array_for_encoding(self):
        raise NotImplementedError

    @abstractmethod
    def encode_byte_array_to_group_element(self, data):
        raise NotImplementedError

    @abstractmethod
    def decode_group_element_to_byte_array(self, element):
        raise NotImplementedError

    @abstractmethod
    def map_any_group_element_to_byte_array(self, element):
        raise NotImplementedError
