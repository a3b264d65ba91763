# renderer/tone_mapping.py
import numpy as np
from numba import njit


@njit(cache=True)
def _gamma_quantize(linear, output):
    for i in range(linear.shape[0]):
        for c in range(3):
            # Gamma 2: square root, then clamp below 1 before scaling.
            value = np.sqrt(max(linear[i, c], 0.0))
            if value > 0.999:
                value = 0.999
            output[i, c] = int(256.0 * value)


def gamma_correct(linear: np.ndarray) -> np.ndarray:
    """
    Convert averaged linear colors (n, 3) into 8-bit gamma corrected
    values (n, 3) in [0, 255].
    """
    linear = np.ascontiguousarray(linear, dtype=np.float64).reshape(-1, 3)
    output = np.empty(linear.shape, dtype=np.uint8)
    _gamma_quantize(linear, output)
    return output
