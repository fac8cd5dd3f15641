"""Lifted regression problem of LPV-AR(X) models."""

import jax.numpy as jnp
from jaxtyping import Array, Float

from ._config import VARIANCE_DDOF
from ._data_manager import ModelOrder, SignalBundle
from ._errors import DimensionMismatch, InsufficientData


def build_regression(
    signals: SignalBundle,
    order: ModelOrder,
    g: Float[Array, "pa N"],
    *,
    check_identifiable: bool = True
) -> tuple[Float[Array, "n T"], Float[Array, " T"]]:
    """Construct the lifted regression matrix and the target vector.

    The response is lifted as `Y[j, :] = -y * g[j, :]` and, for LPV-ARX models,
    the input as `X[j, :] = u * g[j, :]`. With `tau = na, ..., N - 1`, the
    regression matrix stacks the blocks `Y[:, tau - i]` for `i = 1, ..., na`
    followed by `X[:, tau - i]` for `i = 0, ..., nb`. The first `na` samples
    only serve as initial conditions and never appear as a target.

    Parameters
    ----------
    signals : `SignalBundle`
        Response, scheduling variable and (for LPV-ARX) input.
    order : `ModelOrder`
        Model order; `order.pa` is ignored in favour of `g.shape[0]`, so that
        masked bases are handled transparently.
    g : jnp.ndarray, shape (pa_eff, N)
        Basis matrix evaluated on `signals.xi`.
    check_identifiable : bool
        Whether to require more target samples than coefficients, leaving at
        least `VARIANCE_DDOF` residual degrees of freedom for the variance
        estimate. Disabled for one-step-ahead prediction with fixed
        coefficients. Defaults to `True`.

    Returns
    -------
    Phi : jnp.ndarray, shape (na * pa_eff [+ (nb + 1) * pa_eff], N - na)
        Regression matrix.
    y_tau : jnp.ndarray, shape (N - na,)
        Target samples.

    Raises
    ------
    DimensionMismatch
        If `g` does not match the signal length, or an LPV-ARX order is given
        for output-only data.
    InsufficientData
        If `check_identifiable` is set and fewer than
        `num_coefficients + VARIANCE_DDOF` target samples are available.

    """
    N = signals.N
    na = order.na
    pa = g.shape[0]

    if g.shape[1] != N:
        raise DimensionMismatch(
            f"Basis matrix has {g.shape[1]} samples, but the signals have {N}."
        )
    if order.is_arx and signals.u is None:
        raise DimensionMismatch(
            "An LPV-ARX order was given, but the signals contain no input `u`."
        )

    num_coefficients = order.num_lags() * pa
    required = num_coefficients + VARIANCE_DDOF
    if check_identifiable and N - na < required:
        raise InsufficientData(
            f"{N - na} target samples are available to estimate "
            f"{num_coefficients} coefficients and the residual variance; at "
            f"least {required + na} samples are required."
        )

    y = jnp.asarray(signals.y)
    Y = -y * g

    blocks = [Y[:, na - i:N - i] for i in range(1, na + 1)]
    if order.is_arx:
        X = jnp.asarray(signals.u) * g
        blocks += [X[:, na - i:N - i] for i in range(order.nb + 1)]

    Phi = jnp.concatenate(blocks, axis=0)
    return Phi, y[na:]
