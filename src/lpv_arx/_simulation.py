"""Out-of-sample validation and synthesis of LPV-AR(X) processes."""

import jax
import jax.numpy as jnp
import numpy as np

from ._basis_functions import BasisSpec, compute_basis
from ._data_manager import SignalBundle, create_signal_bundle
from ._errors import DimensionMismatch, InvalidOrder
from ._model_structures import ModelLPVAR
from ._performance import Criteria


def simulate(
    signals: SignalBundle,
    model: ModelLPVAR
) -> tuple[np.ndarray, Criteria]:
    """Validate `model` on new data by one-step-ahead prediction.

    See `ModelLPVAR.simulate`.

    Raises
    ------
    TypeError
        If `model` is not a `ModelLPVAR` or `signals` is not a `SignalBundle`.

    """
    if not isinstance(model, ModelLPVAR):
        raise TypeError("`model` must be of type `ModelLPVAR`.")
    if not isinstance(signals, SignalBundle):
        raise TypeError("`signals` must be a `SignalBundle`.")
    return model.simulate(signals)


def synthesize(
    A: np.ndarray,
    xi: np.ndarray,
    w: np.ndarray,
    basis: BasisSpec | None = None,
    *,
    B: np.ndarray | None = None,
    u: np.ndarray | None = None,
    fs: float = 1.0
) -> SignalBundle:
    """Generate a realization of an LPV-AR(X) process with known coefficients.

    The process is run forward from zero initial conditions,

        y[t] = -sum_i sum_j A[j, i-1] g_j(xi[t-i]) y[t-i]
               + sum_i sum_j B[j, i] g_j(xi[t-i]) u[t-i] + w[t],

    which is exactly the structure estimated by `estimate`.

    Parameters
    ----------
    A : np.ndarray, shape (pa_eff, na)
        AR coefficients on the retained basis functions.
    xi : np.ndarray, shape (N,)
        Scheduling variable.
    w : np.ndarray, shape (N,)
        Innovation (noise) sequence; zeros give a noise-free realization.
    basis : `BasisSpec`, optional
        Basis family and mask. Defaults to an unmasked Hermite basis. With a
        mask, the basis order is the mask length.
    B : np.ndarray, shape (pa_eff, nb + 1), optional
        Input coefficients; requires `u`.
    u : np.ndarray, shape (N,), optional
        Exogenous input.
    fs : float
        Sampling frequency in Hz stored in the returned bundle.

    Returns
    -------
    `SignalBundle`
        The generated response together with `xi` and `u`.

    Raises
    ------
    InvalidOrder
        If `B` is given with more lags than `A`.
    DimensionMismatch
        If the coefficient shapes, the basis and the signals are inconsistent.

    """
    basis = BasisSpec() if basis is None else basis
    A = jnp.asarray(A, dtype=float)
    xi = np.asarray(xi, dtype=float)
    w = jnp.asarray(w, dtype=float)

    pa_eff, na = A.shape
    pa = pa_eff if basis.indices is None else len(basis.indices)
    g = compute_basis(xi, pa, basis, logging_enabled=False)  # (pa_eff, N)
    if g.shape[0] != pa_eff:
        raise DimensionMismatch(
            f"`A` has {pa_eff} rows, but the basis retains {g.shape[0]} functions."
        )

    N = xi.shape[0]
    if w.shape != (N,):
        raise DimensionMismatch(f"`w` must have shape ({N},), got {w.shape}.")

    if (B is None) != (u is None):
        raise ValueError("`B` and `u` must be provided together.")

    exo = jnp.zeros(N)
    if B is not None:
        B = jnp.asarray(B, dtype=float)
        u = np.asarray(u, dtype=float)
        if B.shape[0] != pa_eff or u.shape != (N,):
            raise DimensionMismatch(
                f"Expected `B` with {pa_eff} rows and `u` of shape ({N},), got "
                f"{B.shape} and {u.shape}."
            )
        nb = B.shape[1] - 1
        if nb > na:
            raise InvalidOrder(f"Input order nb={nb} exceeds AR order na={na}.")
        X = jnp.hstack((jnp.zeros((pa_eff, nb)), jnp.asarray(u) * g))
        for i in range(nb + 1):
            exo = exo + B[:, i] @ X[:, nb - i:nb - i + N]

    def _make_step(t, state):
        Z, y = state
        past = jax.lax.dynamic_slice(Z, (t, 0), (na, pa_eff))[::-1]  # lags 1..na
        y_t = -jnp.sum(past * A.T) + exo[t] + w[t]
        return Z.at[t + na].set(g[:, t] * y_t), y.at[t].set(y_t)

    loop_init = (
        jnp.zeros((N + na, pa_eff)),  # lifted response, zero initial conditions
        jnp.zeros(N),
    )
    y = jax.lax.fori_loop(0, N, _make_step, loop_init)[1]

    return create_signal_bundle(np.asarray(y), xi, u=u, fs=fs)
