"""Ordinary least-squares solver for the lifted regression problem."""
from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass

import jax
import jax.numpy as jnp
import numpy as np
from jaxtyping import Array, Float

from ._config import DeviceLike
from ._errors import SingularRegression


@dataclass(frozen=True)
class SolveResult:
    """Container for least-squares results."""

    theta: jnp.ndarray  # coefficient row vector, shape (n,)
    residual: jnp.ndarray  # one-step-ahead prediction error, shape (N - na,)
    gram_inv: jnp.ndarray  # (Phi @ Phi.T)^-1, shape (n, n)
    cond: float  # condition number of Phi @ Phi.T
    wall_time: float


def _resolve_device(device: DeviceLike) -> jax.Device | None:
    """Map a platform name to the first JAX device of that platform."""
    if device is None or isinstance(device, jax.Device):
        return device
    try:
        return jax.devices(device.lower())[0]
    except RuntimeError as e:
        available = sorted({d.platform for d in jax.devices()})
        raise RuntimeError(
            f"Requested device '{device}', but no such device is available. "
            f"Available platforms: {available}"
        ) from e


def solve(
    Phi: Float[Array, "n T"],
    y: Float[Array, " T"],
    device: DeviceLike = None
) -> SolveResult:
    """Solve `y = theta @ Phi` in the least-squares sense.

    The minimum-norm solution is returned together with the inverse Gram
    matrix needed for the coefficient covariance.

    Raises
    ------
    SingularRegression
        If `Phi @ Phi.T` is not invertible within working precision.

    """
    jax_device = _resolve_device(device)
    if jax_device is None:
        placement = contextlib.nullcontext()
    else:
        placement = jax.default_device(jax_device)
        Phi = jax.device_put(Phi, jax_device)
        y = jax.device_put(y, jax_device)

    with placement:
        start_time = time.time()

        gram = Phi @ Phi.T
        cond = float(jnp.linalg.cond(gram))
        if not np.isfinite(cond) or cond > 1 / jnp.finfo(gram.dtype).eps:
            raise SingularRegression(cond)

        theta = jnp.linalg.lstsq(Phi.T, y)[0]
        residual = y - theta @ Phi
        gram_inv = jnp.linalg.inv(gram)

        wall_time = time.time() - start_time

    return SolveResult(
        theta=theta,
        residual=residual,
        gram_inv=gram_inv,
        cond=cond,
        wall_time=wall_time,
    )
