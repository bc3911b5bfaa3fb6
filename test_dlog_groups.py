#!/usr/bin/env python3
"""
Contract tests run against every discrete-log backend.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest

from dlog import (
    DlogZpSafePrimeGmp, DlogZpSafePrimeCryptodome, DlogECFpGmp,
    ZpGroupParams, CurveParams, ZpElementSendableData, ECElementSendableData,
    EllipticCurve, GF,
    create_dlog_group, DLOG_BACKENDS
)
from dlog.params import P256
from exactint import (
    random_bytes, is_probable_prime, ConstructionError, EncodingLengthError,
    GroupMismatchError, InvalidArgument
)
from test_drng import TestDRNG


# 64-bit groups keep the Zp tests fast while still exceeding a machine word.
GROUP_FACTORIES = {
    "gmp-zp": lambda: DlogZpSafePrimeGmp(64, rng=TestDRNG(b"gmp_zp_seed")),
    "cryptodome-zp": lambda: DlogZpSafePrimeCryptodome(64, rng=TestDRNG(b"cryptodome_zp_seed")),
    "gmp-ec-p256": lambda: DlogECFpGmp(params="P-256", rng=TestDRNG(b"gmp_ec_seed")),
    "gmp-ec-secp256k1": lambda: DlogECFpGmp(params="secp256k1"),
}


@pytest.fixture(scope="module", params=sorted(GROUP_FACTORIES))
def dlog(request):
    return GROUP_FACTORIES[request.param]()


def test_multiply_group_elements(dlog):
    element = dlog.create_random_element()
    inverse = dlog.get_inverse(element)
    product = dlog.multiply_group_elements(element, inverse)
    identity = dlog.get_identity()

    for member in (element, inverse, product, identity):
        assert dlog.is_member(member)

    assert product.is_identity()
    assert product == identity


def test_exponentiate(dlog):
    element = dlog.create_random_element()
    by_exponent = dlog.exponentiate(element, 3)
    by_product = dlog.multiply_group_elements(
        dlog.multiply_group_elements(element, element), element)
    assert by_exponent == by_product
    assert by_exponent.equals(by_product)


def test_exponentiate_edge_exponents(dlog):
    element = dlog.create_random_element()
    assert dlog.exponentiate(element, 0).is_identity()
    assert dlog.exponentiate(element, 1) == element
    assert dlog.exponentiate(element, dlog.get_order()).is_identity()
    assert dlog.exponentiate(element, -1) == dlog.get_inverse(element)


def test_simultaneous_multiple_exponentiations(dlog):
    first = dlog.create_random_element()
    second = dlog.create_random_element()

    result = dlog.simultaneous_multiple_exponentiations([first, second], [3, 4])
    expected = dlog.multiply_group_elements(
        dlog.exponentiate(first, 3), dlog.exponentiate(second, 4))
    assert result == expected


def test_simultaneous_multiple_exponentiations_full_size(dlog):
    rng = TestDRNG(b"multi_exponent_seed")
    bases = [dlog.create_random_element() for _ in range(3)]
    exponents = [rng.randint(1, dlog.get_order() - 1) for _ in range(3)]
    exponents.append(0)
    bases.append(dlog.create_random_element())

    expected = dlog.get_identity()
    for base, exponent in zip(bases, exponents):
        expected = dlog.multiply_group_elements(expected, dlog.exponentiate(base, exponent))
    assert dlog.simultaneous_multiple_exponentiations(bases, exponents) == expected


def test_simultaneous_multiple_exponentiations_rejects_bad_arrays(dlog):
    element = dlog.create_random_element()
    with pytest.raises(InvalidArgument):
        dlog.simultaneous_multiple_exponentiations([element], [1, 2])
    with pytest.raises(InvalidArgument):
        dlog.simultaneous_multiple_exponentiations([], [])


def test_exponentiate_with_pre_computed_values(dlog):
    base = dlog.create_random_element()
    result = dlog.exponentiate_with_pre_computed_values(base, 32)
    expected = dlog.exponentiate(base, 32)
    assert dlog.has_pre_computed_values(base)
    dlog.end_exponentiate_with_pre_computed_values(base)

    assert result == expected
    assert not dlog.has_pre_computed_values(base)
    assert dlog.exponentiate(base, 32) == expected


def test_pre_computed_values_are_reused(dlog):
    rng = TestDRNG(b"precompute_seed")
    base = dlog.create_random_element()
    try:
        for _ in range(3):
            exponent = rng.randint(0, dlog.get_order() - 1)
            assert dlog.exponentiate_with_pre_computed_values(base, exponent) == \
                dlog.exponentiate(base, exponent)
        assert dlog.exponentiate_with_pre_computed_values(base, -5) == \
            dlog.get_inverse(dlog.exponentiate(base, 5))
    finally:
        dlog.end_exponentiate_with_pre_computed_values(base)


def test_end_pre_computed_values_without_cache(dlog):
    base = dlog.create_random_element()
    dlog.end_exponentiate_with_pre_computed_values(base)
    dlog.end_exponentiate_with_pre_computed_values(base)
    assert not dlog.has_pre_computed_values(base)


def test_encode_decode(dlog):
    k = dlog.get_max_length_of_byte_array_for_encoding()
    assert k > 0

    data = random_bytes(k)
    element = dlog.encode_byte_array_to_group_element(data)
    assert dlog.is_member(element)
    assert dlog.decode_group_element_to_byte_array(element) == data


def test_encode_decode_short_inputs(dlog):
    for data in (b"", b"\x00", b"\x00\x00\x01"):
        element = dlog.encode_byte_array_to_group_element(data)
        assert dlog.decode_group_element_to_byte_array(element) == data


def test_encode_rejects_long_input(dlog):
    k = dlog.get_max_length_of_byte_array_for_encoding()
    with pytest.raises(EncodingLengthError):
        dlog.encode_byte_array_to_group_element(b"a" * (k + 1))


def test_map_any_group_element_to_byte_array(dlog):
    element = dlog.create_random_element()
    image = dlog.map_any_group_element_to_byte_array(element)
    assert image == dlog.map_any_group_element_to_byte_array(element)
    other = dlog.multiply_group_elements(element, dlog.get_generator())
    assert image != dlog.map_any_group_element_to_byte_array(other)


def test_generator_and_group_validation(dlog):
    assert dlog.is_generator()
    assert dlog.validate_group()
    assert dlog.is_prime_order()
    assert dlog.is_order_greater_than(2**32)
    assert not dlog.is_order_greater_than(dlog.get_order())


def test_sendable_data_round_trip(dlog):
    element = dlog.create_random_element()
    data = element.generate_sendable_data()
    assert dlog.reconstruct_element(True, data) == element
    assert dlog.reconstruct_element(False, data) == element


def test_elements_hash_by_value(dlog):
    element = dlog.create_random_element()
    same = dlog.reconstruct_element(True, element.generate_sendable_data())
    assert same is not element
    assert hash(same) == hash(element)
    assert len({element, same}) == 1


def test_foreign_elements_are_rejected(dlog):
    other = GROUP_FACTORIES["gmp-zp"]() if dlog.get_group_type() != "Zp*" \
        else DlogECFpGmp(params="P-256")
    foreign = other.create_random_element()

    assert not dlog.is_member(foreign)
    with pytest.raises(GroupMismatchError):
        dlog.get_inverse(foreign)
    with pytest.raises(GroupMismatchError):
        dlog.multiply_group_elements(dlog.get_generator(), foreign)
    with pytest.raises(GroupMismatchError):
        dlog.exponentiate(foreign, 2)
    with pytest.raises(GroupMismatchError):
        dlog.exponentiate_with_pre_computed_values(foreign, 2)
    with pytest.raises(GroupMismatchError):
        dlog.decode_group_element_to_byte_array(foreign)


def test_same_parameters_other_instance_is_a_mismatch():
    first = DlogECFpGmp(params="P-256")
    second = DlogECFpGmp(params="P-256")
    element = first.create_random_element()

    assert not second.is_member(element)
    with pytest.raises(GroupMismatchError):
        second.get_inverse(element)
    # Equality is algebraic, so it still holds across instances.
    assert second.reconstruct_element(True, element.generate_sendable_data()) == element


def test_zp_generate_element_checks_membership():
    group = GROUP_FACTORIES["gmp-zp"]()
    p = group.get_modulus()
    non_residue = p - 1
    with pytest.raises(InvalidArgument):
        group.generate_element(True, non_residue)
    assert not group.is_member(group.generate_element(False, non_residue))
    with pytest.raises(InvalidArgument):
        group.generate_element(False, p)
    with pytest.raises(InvalidArgument):
        group.reconstruct_element(True, ECElementSendableData(1, 2))


def test_ec_generate_element_checks_membership():
    group = DlogECFpGmp()
    generator = group.get_generator()
    x, y = int(generator.x), int(generator.y)
    assert group.generate_element(True, x, y) == generator
    with pytest.raises(InvalidArgument):
        group.generate_element(True, x, y + 1)
    assert group.generate_element(True, None, None).is_identity()
    with pytest.raises(InvalidArgument):
        group.reconstruct_element(True, ZpElementSendableData(5))


def test_zp_safe_prime_generation():
    for cls in (DlogZpSafePrimeGmp, DlogZpSafePrimeCryptodome):
        group = cls(64)
        p = group.get_modulus()
        q = group.get_order()
        assert p.bit_length() == 64
        assert p == 2 * q + 1
        assert is_probable_prime(p, 40) and is_probable_prime(q, 40)


@pytest.mark.parametrize("cls", [DlogZpSafePrimeGmp, DlogZpSafePrimeCryptodome])
def test_zp_named_parameter_sets(cls):
    group = cls(1024)
    assert group.get_parameters().name == "RFC2409-1024"
    assert group.get_modulus().bit_length() == 1024
    assert group.validate_group()
    assert cls(params="RFC3526-2048").get_modulus().bit_length() == 2048


@pytest.mark.parametrize("cls", [DlogZpSafePrimeGmp, DlogZpSafePrimeCryptodome])
def test_zp_construction_errors(cls):
    for num_bits in (8, 600, 4096):
        with pytest.raises(ConstructionError):
            cls(num_bits)
    with pytest.raises(ConstructionError):
        cls(params="RFC0000-1")
    with pytest.raises(ConstructionError):
        cls(params=ZpGroupParams(p=19, q=9, g=4))
    with pytest.raises(ConstructionError):
        cls(64, params="RFC2409-1024")


def test_zp_explicit_parameters():
    params = ZpGroupParams(p=23, q=11, g=4, name="tiny")
    for cls in (DlogZpSafePrimeGmp, DlogZpSafePrimeCryptodome):
        group = cls(params=params)
        element = group.create_random_element()
        assert group.is_member(element)
        assert group.get_max_length_of_byte_array_for_encoding() == 0


def test_zp_backends_agree():
    params = GROUP_FACTORIES["gmp-zp"]().get_parameters()
    gmp_group = DlogZpSafePrimeGmp(params=params)
    cryptodome_group = DlogZpSafePrimeCryptodome(params=params)
    exponent = 0x1234567890abcdef
    left = gmp_group.exponentiate(gmp_group.get_generator(), exponent)
    right = cryptodome_group.exponentiate(cryptodome_group.get_generator(), exponent)
    assert left.canonical() == right.canonical()
    data = b"abc"
    assert gmp_group.encode_byte_array_to_group_element(data).canonical() == \
        cryptodome_group.encode_byte_array_to_group_element(data).canonical()


def test_ec_named_curves():
    assert DlogECFpGmp().get_parameters().name == "P-256"
    p384 = DlogECFpGmp(384)
    assert p384.get_parameters().name == "P-384"
    assert p384.validate_group()
    assert p384.get_max_length_of_byte_array_for_encoding() == 45


def test_ec_construction_errors():
    with pytest.raises(ConstructionError):
        DlogECFpGmp(521)
    with pytest.raises(ConstructionError):
        DlogECFpGmp(params="curve25519")
    bad_generator = CurveParams(
        name="bad", p=P256.p, a=P256.a, b=P256.b, gx=P256.gx, gy=P256.gy + 1, n=P256.n)
    with pytest.raises(ConstructionError):
        DlogECFpGmp(params=bad_generator)
    assert DlogECFpGmp(params=P256).validate_group()


def test_ec_rejects_subgroup_order_posing_as_curve_order():
    # y^2 = x^3 + x + 5 over GF(103) has 106 = 2 * 53 points.
    curve = EllipticCurve(GF(103), [1, 5])
    point = next(p for p in (curve.lift_x(x) for x in range(103))
                 if p is not None and not p.y.is_zero())
    generator = point + point
    params = CurveParams(name="cofactor-2", p=103, a=1, b=5,
                         gx=int(generator.x), gy=int(generator.y), n=53)
    assert (generator * 53).is_infinity
    with pytest.raises(ConstructionError):
        DlogECFpGmp(params=params)


def test_field_arithmetic():
    field = GF(103)
    x, y = field(5), field(101)
    assert x + y == 3
    assert x - y == 7
    assert 2 * x == x * 2 == 10
    assert (x / y) * y == x
    assert -x == 98
    assert field(4).sqrt() in (field(2), field(101))
    assert field(5).sqrt() is None


def test_backend_registry():
    assert set(DLOG_BACKENDS) == {"gmp-zp", "gmp-ec", "cryptodome-zp"}
    group = create_dlog_group("gmp-zp", num_bits=64)
    assert isinstance(group, DlogZpSafePrimeGmp)
    assert isinstance(create_dlog_group("gmp-ec", params="secp256k1"), DlogECFpGmp)
    with pytest.raises(ConstructionError):
        create_dlog_group("miracl")


def main():
    """Run the contract suite for every backend."""
    sys.exit(pytest.main([__file__]))


if __name__ == "__main__":
    main()
