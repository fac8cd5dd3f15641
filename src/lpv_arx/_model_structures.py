"""LPV-AR(X) model class, optimized for use with JAX and Equinox."""

import equinox as eqx
import jax.numpy as jnp
import numpy as np

from ._basis_functions import BasisSpec, compute_basis
from ._config import VARIANCE_DDOF
from ._data_manager import ModelOrder, SignalBundle, validate_order
from ._errors import InsufficientData
from ._performance import Criteria, compute_criteria, residual_variance
from ._regression import build_regression


class ModelLPVAR(eqx.Module):
    """LPV-AR(X) model class.

    The model reads

        y[t] + sum_i a_i(xi[t - i]) y[t - i] = sum_i b_i(xi[t - i]) u[t - i] + w[t],

    with a_i(xi) = sum_j A[j, i - 1] g_j(xi) and b_i(xi) = sum_j B[j, i] g_j(xi).
    Each lagged sample is weighted by the basis evaluated at its own time
    instant, which is what the lifted regression `-y[t - i] g_j(xi[t - i])`
    estimates.

    Parameters
    ----------
    A : jnp.ndarray, shape (pa_eff, na)
        AR coefficients projected on the retained basis functions; column `k`
        belongs to lag `k + 1`.
    B : jnp.ndarray, shape (pa_eff, nb + 1), or None
        Input coefficients of an LPV-ARX model; column `k` belongs to lag `k`.
    sigma_w : float
        Residual variance of the estimation data.
    cov : jnp.ndarray, shape (n, n)
        Coefficient covariance, ordered as `theta`.
    order : ModelOrder
        Model order, with `pa` the basis order before masking.
    basis : BasisSpec
        Basis family and selection mask used for estimation.
    criteria : Criteria or None
        Performance criteria on the estimation data.
    fs : float
        Sampling frequency in Hz of the estimation data.

    """

    A: jnp.ndarray = eqx.field(converter=jnp.asarray)
    B: jnp.ndarray | None
    sigma_w: float
    cov: jnp.ndarray = eqx.field(converter=jnp.asarray)
    order: ModelOrder = eqx.field(static=True)
    basis: BasisSpec
    criteria: Criteria | None
    fs: float = 1.0

    @property
    def theta(self) -> jnp.ndarray:
        """Coefficient row vector in regression order (AR block first)."""
        theta = self.A.T.ravel()
        if self.B is not None:
            theta = jnp.concatenate((theta, self.B.T.ravel()))
        return theta

    def full_coefficients(self) -> tuple[np.ndarray, np.ndarray | None]:
        """Return `A` and `B` zero-filled to the complete basis order `pa`.

        Rows of basis functions removed by the basis mask are zero.

        """
        mask = self.basis.mask(self.order.pa)
        A = np.zeros((self.order.pa, self.order.na))
        A[mask] = np.asarray(self.A)
        if self.B is None:
            return A, None
        B = np.zeros((self.order.pa, self.order.nb + 1))
        B[mask] = np.asarray(self.B)
        return A, B

    def ar_coefficients(self, xi: np.ndarray | float) -> jnp.ndarray:
        """Evaluate the AR coefficients a_1, ..., a_na at scheduling values.

        Parameters
        ----------
        xi : np.ndarray, shape (m,), or float
            Scheduling values.

        Returns
        -------
        a : jnp.ndarray, shape (m, na) or (na,)

        """
        g = compute_basis(xi, self.order.pa, self.basis, logging_enabled=False)
        return jnp.tensordot(g, self.A, axes=(0, 0))

    def _predict(self, signals: SignalBundle) -> tuple[jnp.ndarray, jnp.ndarray]:
        """One-step-ahead prediction over the valid window.

        Returns
        -------
        y_hat : jnp.ndarray, shape (N - na,)
            Predicted response at `t = na, ..., N - 1`.
        y_tau : jnp.ndarray, shape (N - na,)
            Measured response at the same samples.

        """
        g = compute_basis(
            signals.xi, self.order.pa, self.basis, logging_enabled=False
        )
        Phi, y_tau = build_regression(
            signals, self.order, g, check_identifiable=False
        )
        return self.theta @ Phi, y_tau

    def simulate(self, signals: SignalBundle) -> tuple[np.ndarray, Criteria]:
        """Predict the response of new data one step ahead and score the fit.

        The coefficients are kept fixed; only the basis is re-evaluated on the
        scheduling variable of `signals`.

        Parameters
        ----------
        signals : `SignalBundle`
            Validation data. The response is used for the one-step-ahead
            regressors and for scoring; LPV-ARX models also need the input.

        Returns
        -------
        y_hat : np.ndarray, shape (N - na,)
            Predicted response at the samples `t = na, ..., N - 1`. Callers
            align it with `signals.y[na:]`.
        criteria : `Criteria`
            Performance criteria on `signals`. The chi-squared statistics
            are those of the fitted coefficients.

        Raises
        ------
        InvalidOrder
            If `signals` holds no more than `na` samples.
        InsufficientData
            If fewer than `VARIANCE_DDOF + 1` residuals are available for the
            residual variance.

        """
        validate_order(self.order, signals.N)
        if signals.N - self.order.na <= VARIANCE_DDOF:
            raise InsufficientData(
                f"Validation needs at least {self.order.na + VARIANCE_DDOF + 1} "
                f"samples to estimate the residual variance, got {signals.N}."
            )
        y_hat, y_tau = self._predict(signals)
        residual = y_tau - y_hat
        criteria = compute_criteria(
            residual,
            y_tau,
            residual_variance(residual),
            signals.N,
            self.order,
            self.theta,
            self.cov,
        )
        return np.asarray(y_hat), criteria

    def num_parameters(self) -> int:
        """Return the total number of model coefficients."""
        return self.A.size + (0 if self.B is None else self.B.size)
