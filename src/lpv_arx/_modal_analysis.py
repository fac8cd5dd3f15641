"""Model-based analysis of the frozen dynamics of an LPV-AR model.

For every value of the scheduling variable on a grid, the AR coefficients are
frozen and the resulting time-invariant AR polynomial

    A(z; xi) = 1 + a_1(xi) z^-1 + ... + a_na(xi) z^-na

is analysed. Its roots (poles) are mapped to continuous time with
s = fs * log(z), which gives the natural frequency |s| and the damping ratio
-Re(s) / |s| of every mode, and the AR spectrum sigma_w / |A(e^jw; xi)|^2 is
evaluated on a frequency grid.

Conventions for poles that do not come in complex-conjugate pairs:

- a real positive pole is an overdamped mode with zero imaginary part and
  damping ratio one;
- a real negative pole lies on the principal branch of the logarithm, i.e. at
  the Nyquist frequency, with its damping ratio given by the formula above;
- a pole at the origin (or at z = 1) has an undefined damping ratio, which is
  reported as one.
"""

from dataclasses import dataclass

import jax
import jax.numpy as jnp
import numpy as np

from ._config import NUM_FREQS
from ._errors import DimensionMismatch
from ._model_structures import ModelLPVAR


@dataclass(frozen=True)
class ModalAnalysis:
    """
    Frozen-coefficient dynamics of an LPV-AR model over a scheduling grid.

    Attributes
    ----------
    xi : np.ndarray
        Scheduling grid, shape (m,).
    omega : np.ndarray
        Normalized frequency grid in rad/sample on [0, pi], shape (F,).
    Pyy : np.ndarray
        Power spectral density of the frozen models, shape (F, m).
    omega_n : np.ndarray
        Natural frequencies in rad/s (rad/sample for `fs = 1`), shape (na, m).
        Per grid point the modes are sorted by increasing natural frequency;
        both poles of a complex-conjugate pair are listed.
    zeta : np.ndarray
        Damping ratios corresponding to `omega_n`, shape (na, m).
    """
    xi: np.ndarray
    omega: np.ndarray
    Pyy: np.ndarray
    omega_n: np.ndarray
    zeta: np.ndarray


def modal_analysis(
    model: ModelLPVAR,
    xi: np.ndarray,
    num_freqs: int = NUM_FREQS
) -> ModalAnalysis:
    """Compute PSD, natural frequencies and damping ratios along `xi`.

    Parameters
    ----------
    model : `ModelLPVAR`
        Estimated model. For LPV-ARX models only the AR part is analysed.
    xi : np.ndarray, shape (m,)
        Grid of scheduling values.
    num_freqs : int, optional
        Number of frequency points on [0, pi]. Defaults to `NUM_FREQS`.

    Returns
    -------
    `ModalAnalysis`

    Raises
    ------
    TypeError
        If `model` is not a `ModelLPVAR`.
    DimensionMismatch
        If `xi` is not one-dimensional.

    """
    if not isinstance(model, ModelLPVAR):
        raise TypeError("`model` must be of type `ModelLPVAR`.")

    xi = np.atleast_1d(np.asarray(xi, dtype=float))
    if xi.ndim != 1:
        raise DimensionMismatch(
            f"Scheduling grid must be one-dimensional, got shape {xi.shape}."
        )
    if num_freqs < 2:
        raise ValueError("`num_freqs` must be at least 2.")

    na = model.order.na
    omega = jnp.linspace(0, jnp.pi, num_freqs)
    E = jnp.exp(-1j * jnp.outer(omega, jnp.arange(na + 1)))  # (F, na + 1)

    def _analyze(a):
        poly = jnp.concatenate((jnp.ones(1), a))

        poles = jnp.roots(poly, strip_zeros=False).astype(complex)
        s = model.fs * jnp.log(poles)
        omega_n = jnp.abs(s)
        zeta = -s.real / omega_n
        zeta = jnp.where(jnp.isfinite(zeta), zeta, 1.0)

        idx = jnp.argsort(omega_n)
        Pyy = model.sigma_w / jnp.abs(E @ poly) ** 2
        return Pyy, omega_n[idx], zeta[idx]

    a = model.ar_coefficients(xi)  # (m, na)
    Pyy, omega_n, zeta = jax.vmap(_analyze)(a)

    return ModalAnalysis(
        xi=xi,
        omega=np.asarray(omega),
        Pyy=np.asarray(Pyy).T,
        omega_n=np.asarray(omega_n).T,
        zeta=np.asarray(zeta).T,
    )
