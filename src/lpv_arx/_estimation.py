"""Least-squares estimation of LPV-AR(X) models."""
import jax.numpy as jnp

from . import _misc
from ._basis_functions import BasisSpec, compute_basis
from ._config import DeviceLike
from ._data_manager import ModelOrder, SignalBundle, as_order, validate_order
from ._model_structures import ModelLPVAR
from ._performance import compute_criteria, residual_variance
from ._regression import build_regression
from ._solve import solve


def estimate(
    signals: SignalBundle,
    order: ModelOrder | tuple,
    basis: BasisSpec | None = None,
    *,
    logging_enabled: bool = True,
    device: DeviceLike = None
) -> ModelLPVAR:
    """Estimate an LPV-AR(X) model by ordinary least squares.

    Parameters
    ----------
    signals : `SignalBundle`
        Estimation data. An input `u` is required for LPV-ARX orders.
    order : `ModelOrder` or tuple
        Model order, either a `ModelOrder`, `(na, pa)` for an LPV-AR model or
        `(na, nb, pa)` for an LPV-ARX model.
    basis : `BasisSpec`, optional
        Basis family and selection mask. Defaults to an unmasked Hermite basis.
    logging_enabled : bool
        Whether to print a summary of the identification results. Defaults to
        `True`.
    device : `DeviceLike`, optional
        Device on which to solve the least-squares problem. Can be either a
        device name (`"cpu"`, `"gpu"`, or `"tpu"`) or a specific JAX device. If
        not provided, the default JAX device is used.

    Returns
    -------
    `ModelLPVAR`
        Estimated model with residual variance, coefficient covariance
        `sigma_w * inv(Phi @ Phi.T)` and performance criteria.

    Raises
    ------
    TypeError
        If `signals` is not a `SignalBundle`.
    InvalidOrder
        If the order or the basis mask is invalid.
    DimensionMismatch
        If the basis mask length differs from `pa`, or an LPV-ARX order is
        given for output-only data.
    InsufficientData
        If there are fewer target samples than coefficients.
    SingularRegression
        If the regression problem is not uniquely solvable.

    """
    if not isinstance(signals, SignalBundle):
        raise TypeError("`signals` must be a `SignalBundle`.")

    order = as_order(order)
    basis = BasisSpec() if basis is None else basis

    if logging_enabled:
        name = "LPV-ARX" if order.is_arx else "LPV-AR"
        header = f" {name} estimation "
        print(f"{header:=^72}")

    validate_order(order, signals.N)
    g = compute_basis(signals.xi, order.pa, basis, logging_enabled)
    Phi, y_tau = build_regression(signals, order, g)
    result = solve(Phi, y_tau, device)

    A, B = _reshape_coefficients(result.theta, order, g.shape[0])
    sigma_w = residual_variance(result.residual)
    cov = sigma_w * result.gram_inv

    criteria = compute_criteria(
        result.residual, y_tau, sigma_w, signals.N, order, result.theta, cov
    )
    model = ModelLPVAR(
        A=A,
        B=B,
        sigma_w=sigma_w,
        cov=cov,
        order=order,
        basis=basis,
        criteria=criteria,
        fs=signals.fs,
    )

    if logging_enabled:
        _misc.print_model_summary(
            model, wall_time=result.wall_time, cond=result.cond
        )

    return model


def _reshape_coefficients(
    theta: jnp.ndarray,
    order: ModelOrder,
    pa: int
) -> tuple[jnp.ndarray, jnp.ndarray | None]:
    """Split the coefficient vector into the (pa, na) and (pa, nb + 1) blocks."""
    n_ar = order.na * pa
    A = theta[:n_ar].reshape(order.na, pa).T
    if not order.is_arx:
        return A, None
    B = theta[n_ar:].reshape(order.nb + 1, pa).T
    return A, B
