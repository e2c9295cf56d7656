# src/cascadix/constants.py
import logging
import math

logger = logging.getLogger(__name__)

# --- Physical Constants (SI) ---

#: Speed of light in vacuum, m/s.
C0: float = 299792458.0
#: Permeability of free space, H/m.
MU0: float = 4.0 * math.pi * 1e-7
#: Permittivity of free space, F/m (derived so that MU0 * EPS0 * C0**2 == 1).
EPS0: float = 1.0 / (MU0 * C0 * C0)

# --- Numerical Constants ---

#: Any conversion denominator whose magnitude falls below this value is treated
#: as a degenerate network. Shared by every impedance, gain and parameter conversion.
DEGENERATE_THRESHOLD: float = 1e-20

#: Default tolerance for the reciprocal/symmetric/lossless predicates.
DEFAULT_PREDICATE_TOLERANCE: float = 1e-10

#: Default reference impedance for S-parameters and Smith chart normalization, ohm.
DEFAULT_Z0: float = 50.0

#: Conversion factor from dB to Nepers: alpha_np = alpha_db * DB_TO_NEPER.
DB_TO_NEPER: float = math.log(10.0) / 20.0

logger.debug("Defined core constants: C0, MU0, EPS0, DEGENERATE_THRESHOLD, DB_TO_NEPER")
