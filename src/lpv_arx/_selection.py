"""Helpers for model-order and basis selection.

The significance level used to prune basis functions is a choice of the
caller; the estimation routines only report the raw chi-squared statistics.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import jax.numpy as jnp
import numpy as np
from jax.scipy.special import ndtri

from ._basis_functions import BasisSpec
from ._data_manager import ModelOrder, SignalBundle
from ._estimation import estimate
from ._model_structures import ModelLPVAR
from ._performance import Criteria


@dataclass(frozen=True)
class SweepResult:
    """Result of a single model order within `sweep_model_order`."""
    na: int
    model: ModelLPVAR
    validation: Criteria | None  # criteria on the validation data, if given


def chi2_threshold(alpha: float) -> float:
    """Critical value of the chi-squared distribution with one degree of freedom.

    Parameters
    ----------
    alpha : float
        Probability of a Type I error (wrongly rejecting a zero coefficient).

    """
    if not 0 < alpha < 1:
        raise ValueError("`alpha` must lie in the open interval (0, 1).")
    return float(ndtri(1 - alpha / 2) ** 2)


def significant_basis_indices(chi2_theta: np.ndarray, alpha: float) -> np.ndarray:
    """Select basis functions with at least one significant coefficient.

    Parameters
    ----------
    chi2_theta : np.ndarray, shape (pa, na)
        Chi-squared statistics of the AR coefficients, see `Criteria`.
    alpha : float
        Probability of a Type I error.

    Returns
    -------
    indices : np.ndarray of bool, shape (pa,)
        Selection mask that can be passed to `BasisSpec(indices=...)`.

    """
    rho = chi2_threshold(alpha)
    return np.asarray(jnp.any(jnp.asarray(chi2_theta) > rho, axis=1))


def sweep_model_order(
    signals: SignalBundle,
    na_values: Iterable[int],
    pa: int,
    basis: BasisSpec | None = None,
    *,
    nb: int | None = None,
    validation: SignalBundle | None = None,
    logging_enabled: bool = True
) -> Iterator[SweepResult]:
    """Lazily estimate (and validate) models over a range of AR orders.

    Parameters
    ----------
    signals : `SignalBundle`
        Estimation data.
    na_values : iterable of int
        AR orders to be visited, in the given order.
    pa : int
        Basis order, fixed over the sweep.
    basis : `BasisSpec`, optional
        Basis family and mask. Defaults to an unmasked Hermite basis.
    nb : int, optional
        Input order of LPV-ARX models. If not provided, LPV-AR models are
        estimated.
    validation : `SignalBundle`, optional
        Validation data; if provided, every model is simulated on it.
    logging_enabled : bool
        Whether to print one line per model order. Defaults to `True`.

    Yields
    ------
    `SweepResult`

    """
    if logging_enabled:
        header = " Model order sweep "
        print(f"{header:=^72}")

    for na in na_values:
        model = estimate(
            signals, ModelOrder(na, pa, nb), basis, logging_enabled=False
        )
        criteria = None if validation is None else model.simulate(validation)[1]

        if logging_enabled:
            line = (
                f"    na = {na:3d} | BIC = {model.criteria.bic:.4e} | "
                f"RSS/SSS = {100 * model.criteria.rss_sss:.4f}%"
            )
            if criteria is not None:
                line += f" (validation {100 * criteria.rss_sss:.4f}%)"
            print(line)

        yield SweepResult(na, model, criteria)
