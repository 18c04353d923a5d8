from numpy.typing import NDArray

import numpy as np


def _symmetrize_spd(C: NDArray, jitter: float = 1e-12) -> NDArray:
    """Symmetrizes a covariance matrix and nudges it to be positive definite.

    Args:
        C (NDArray): Square matrix of shape (d, d).
        jitter (float, optional): Relative diagonal regularization added when
            the smallest eigenvalue is not positive. Defaults to 1e-12.

    Returns:
        NDArray: Symmetric matrix suitable for inversion.
    """
    C = np.asarray(C, dtype=float)
    C = 0.5 * (C + C.T)
    eigmin = np.linalg.eigvalsh(C).min()
    if eigmin <= 0.0:
        scale = max(float(np.max(np.abs(np.diag(C)))), 1.0)
        C = C + (jitter * scale - eigmin) * np.eye(C.shape[0])
    return C


def _clip_unit_interval(x: NDArray[np.floating], eps: float = 0.0) -> NDArray[np.floating]:
    """Clips values to the [0, 1] interval, optionally padding to an open range.

    Args:
        x (NDArray[np.floating]): Values to clip.
        eps (float, optional): If 0, clips to [0, 1]. If >0, clips to
            (eps, 1 - eps) using `np.nextafter` to avoid exact endpoints.
            Defaults to 0.0.

    Returns:
        NDArray[np.floating]: Array with clipped values.
    """
    if eps <= 0.0:
        return np.clip(x, 0.0, 1.0)
    lo = np.nextafter(0.0 + eps, 1.0)
    hi = np.nextafter(1.0 - eps, 0.0)
    return np.clip(x, lo, hi)
