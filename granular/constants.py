# granular/constants.py
"""
Granular Constants

Buffer layout settings shared by the addressing engine and the
operators that consume it:

- VALUE_DTYPE: element type of every value buffer
- RUN_LENGTH_DTYPE: integer type of run-lengths and flat offsets
"""
import numpy as np


# =============================================================================
# Buffer Layout
# =============================================================================

VALUE_DTYPE = np.float64

# Offsets are products of category counts, so keep them 64-bit
RUN_LENGTH_DTYPE = np.int64
