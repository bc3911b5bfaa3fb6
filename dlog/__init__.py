"""
Discrete-log groups: the DlogGroup/GroupElement contract and its backends.
"""

from .base import DlogGroup, GroupElement
from .precompute import PrecomputedExponentTable
from .params import (
    ZpGroupParams, CurveParams, ZP_PARAMETER_SETS, CURVE_PARAMETER_SETS
)
from .sendable import ZpElementSendableData, ECElementSendableData
from .field import GF, PrimeFieldElement
from .elliptic_curve import EllipticCurve, EllipticCurvePoint
from .zp_gmp import DlogZpSafePrimeGmp, ZpSafePrimeElementGmp
from .ec_gmp import DlogECFpGmp
from .zp_cryptodome import DlogZpSafePrimeCryptodome, ZpSafePrimeElementCryptodome
from .backends import DLOG_BACKENDS, create_dlog_group

__all__ = [
    'DlogGroup', 'GroupElement', 'PrecomputedExponentTable',
    'ZpGroupParams', 'CurveParams', 'ZP_PARAMETER_SETS', 'CURVE_PARAMETER_SETS',
    'ZpElementSendableData', 'ECElementSendableData',
    'GF', 'PrimeFieldElement', 'EllipticCurve', 'EllipticCurvePoint',
    'DlogZpSafePrimeGmp', 'ZpSafePrimeElementGmp', 'DlogECFpGmp',
    'DlogZpSafePrimeCryptodome', 'ZpSafePrimeElementCryptodome',
    'DLOG_BACKENDS', 'create_dlog_group'
]
