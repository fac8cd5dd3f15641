"""Goodness-of-fit and coefficient-significance criteria."""

import equinox as eqx
import jax.numpy as jnp
import numpy as np

from ._config import VARIANCE_DDOF
from ._data_manager import ModelOrder


class Criteria(eqx.Module):
    """Performance criteria of an LPV-AR(X) model on one data record.

    Attributes
    ----------
    rss : float
        Residual sum of squares.
    rss_sss : float
        Residual sum of squares over the series sum of squares (of the target
        samples).
    lnL : float
        Gaussian log-likelihood of the residual.
    bic : float
        Bayesian Information Criterion.
    sigma_w : float
        Residual variance used in `lnL`.
    chi2_theta : np.ndarray, shape (pa, na)
        Test statistic `theta**2 / var(theta)` of the AR coefficients. Under the
        null hypothesis of a zero coefficient it is chi-squared distributed
        with one degree of freedom.
    chi2_b : np.ndarray, shape (pa, nb + 1), or None
        Same statistic for the input coefficients of an LPV-ARX model.
    """
    rss: float
    rss_sss: float
    lnL: float
    bic: float
    sigma_w: float
    chi2_theta: np.ndarray
    chi2_b: np.ndarray | None = None


def residual_variance(residual: jnp.ndarray) -> float:
    """Sample variance of the residual, see `VARIANCE_DDOF`.

    At least `VARIANCE_DDOF + 1` residuals are needed; `build_regression`
    and `ModelLPVAR.simulate` enforce this before the variance is taken.
    """
    return float(jnp.var(residual, ddof=VARIANCE_DDOF))


def compute_criteria(
    residual: jnp.ndarray,
    y_tau: jnp.ndarray,
    sigma_w: float,
    N: int,
    order: ModelOrder,
    theta: jnp.ndarray,
    cov: jnp.ndarray,
) -> Criteria:
    """Compute the performance criteria of a residual sequence.

    Parameters
    ----------
    residual : jnp.ndarray, shape (N - na,)
        One-step-ahead prediction error over the valid window.
    y_tau : jnp.ndarray, shape (N - na,)
        Target samples.
    sigma_w : float
        Residual variance.
    N : int
        Length of the complete data record, used in the BIC penalty.
    order : `ModelOrder`
        Model order.
    theta : jnp.ndarray, shape (n,)
        Coefficient row vector, AR block first.
    cov : jnp.ndarray, shape (n, n)
        Coefficient covariance matrix.

    Returns
    -------
    `Criteria`

    """
    pa = theta.shape[0] // order.num_lags()
    na = order.na

    rss = float(jnp.sum(residual**2))
    rss_sss = rss / float(jnp.sum(y_tau**2))
    lnL = -0.5 * float(
        jnp.sum(jnp.log(2 * jnp.pi * sigma_w) + residual**2 / sigma_w)
    )
    bic = np.log(N) * order.num_lags() * pa - 2 * lnL

    chi2 = np.asarray(theta**2 / jnp.diag(cov))
    chi2_theta = chi2[:na * pa].reshape(na, pa).T
    chi2_b = chi2[na * pa:].reshape(-1, pa).T if order.is_arx else None

    return Criteria(
        rss=rss,
        rss_sss=rss_sss,
        lnL=lnL,
        bic=float(bic),
        sigma_w=float(sigma_w),
        chi2_theta=chi2_theta,
        chi2_b=chi2_b,
    )
