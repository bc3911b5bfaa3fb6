"""
Named parameter sets for the discrete-log groups.
"""

from dataclasses import dataclass

from exactint.encoding import hex_to_integer


@dataclass(frozen=True)
class ZpGroupParams:
    """Safe prime p = 2q + 1 and a generator g of the order-q subgroup."""
    p: int
    q: int
    g: int
    name: str = "custom"


@dataclass(frozen=True)
class CurveParams:
    """Short Weierstrass curve y^2 = x^3 + ax + b over GF(p), base point order n."""
    name: str
    p: int
    a: int
    b: int
    gx: int
    gy: int
    n: int
    h: int = 1


def _safe_prime_params(name, p_hex):
    p = hex_to_integer(p_hex)
    # 4 = 2^2 is a non-trivial quadratic residue, hence of order q.
    return ZpGroupParams(p=p, q=(p - 1) // 2, g=4, name=name)


# RFC 2409 Oakley group 2
RFC2409_1024 = _safe_prime_params("RFC2409-1024", """
    FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1
    29024E088A67CC74020BBEA63B139B22514A08798E3404DD
    EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245
    E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED
    EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE65381
    FFFFFFFFFFFFFFFF
""")

# RFC 3526 MODP group 14
RFC3526_2048 = _safe_prime_params("RFC3526-2048", """
    FFFFFFFF FFFFFFFF C90FDAA2 2168C234 C4C6628B 80DC1CD1
    29024E08 8A67CC74 020BBEA6 3B139B22 514A0879 8E3404DD
    EF9519B3 CD3A431B 302B0A6D F25F1437 4FE1356D 6D51C245
    E485B576 625E7EC6 F44C42E9 A637ED6B 0BFF5CB6 F406B7ED
    EE386BFB 5A899FA5 AE9F2411 7C4B1FE6 49286651 ECE45B3D
    C2007CB8 A163BF05 98DA4836 1C55D39A 69163FA8 FD24CF5F
    83655D23 DCA3AD96 1C62F356 208552BB 9ED52907 7096966D
    670C354E 4ABC9804 F1746C08 CA18217C 32905E46 2E36CE3B
    E39E772C 180E8603 9B2783A2 EC07A28F B5C55DF0 6F4C52C9
    DE2BCBF6 95581718 3995497C EA956AE5 15D22618 98FA0510
    15728E5A 8AACAA68 FFFFFFFF FFFFFFFF
""")

ZP_PARAMETER_SETS = {
    RFC2409_1024.name: RFC2409_1024,
    RFC3526_2048.name: RFC3526_2048,
}

ZP_BITS_TO_NAME = {1024: RFC2409_1024.name, 2048: RFC3526_2048.name}

# Sizes for which a fresh safe prime is generated at construction time.
MIN_GENERATED_BITS = 16
MAX_GENERATED_BITS = 512
DEFAULT_ZP_BITS = 1024


_P256_P = 0xffffffff00000001000000000000000000000000ffffffffffffffffffffffff
P256 = CurveParams(
    name="P-256",
    p=_P256_P,
    a=_P256_P - 3,
    b=0x5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b,
    gx=0x6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296,
    gy=0x4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5,
    n=0xffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551,
)

_P384_P = 2**384 - 2**128 - 2**96 + 2**32 - 1
P384 = CurveParams(
    name="P-384",
    p=_P384_P,
    a=_P384_P - 3,
    b=hex_to_integer("""
        B3312FA7 E23EE7E4 988E056B E3F82D19 181D9C6E FE814112
        0314088F 5013875A C656398D 8A2ED19D 2A85C8ED D3EC2AEF
    """),
    gx=hex_to_integer("""
        AA87CA22 BE8B0537 8EB1C71E F320AD74 6E1D3B62 8BA79B98
        59F741E0 82542A38 5502F25D BF55296C 3A545E38 72760AB7
    """),
    gy=hex_to_integer("""
        3617DE4A 96262C6F 5D9E98BF 9292DC29 F8F41DBD 289A147C
        E9DA3113 B5F0B8C0 0A60B1CE 1D7E819D 7A431D7C 90EA0E5F
    """),
    n=hex_to_integer("""
        FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF
        C7634D81 F4372DDF 581A0DB2 48B0A77A ECEC196A CCC52973
    """),
)

SECP256K1 = CurveParams(
    name="secp256k1",
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
)

CURVE_PARAMETER_SETS = {
    P256.name: P256,
    P384.name: P384,
    SECP256K1.name: SECP256K1,
}

CURVE_BITS_TO_NAME = {256: P256.name, 384: P384.name}
DEFAULT_CURVE = P256.name
