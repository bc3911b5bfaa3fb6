"""
Registry of the discrete-log backends.
"""

from exactint.exceptions import ConstructionError
from .ec_gmp import DlogECFpGmp
from .zp_cryptodome import DlogZpSafePrimeCryptodome
from .zp_gmp import DlogZpSafePrimeGmp


DLOG_BACKENDS = {
    "gmp-zp": DlogZpSafePrimeGmp,
    "gmp-ec": DlogECFpGmp,
    "cryptodome-zp": DlogZpSafePrimeCryptodome,
}


def create_dlog_group(backend, **kwargs):
    """Instantiate the backend registered as `backend` with its keyword arguments."""
    try:
        cls = DLOG_BACKENDS[backend]
    except KeyError:
        raise ConstructionError(f"unknown dlog backend {backend!r}") from None
    return cls(**kwargs)
