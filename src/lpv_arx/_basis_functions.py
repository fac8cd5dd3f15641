"""Functional bases of the scheduling variable (mapping `xi` to `g(xi)`).

Two families are available, selected by `BasisSpec.type`:

- ``"hermite"``: physicists' Hermite polynomials (unnormalized),
    g_0 = 1, g_1 = 2 xi, g_j = 2 xi g_{j-1} - 2 (j - 1) g_{j-2}.
- ``"fourier"``: a constant followed by sine/cosine pairs,
    g_0 = 1, g_{2j-1} = sin(j xi), g_{2j} = cos(j xi), j = 1, ..., (pa - 1) // 2.

For the Fourier basis an even `pa` cannot be covered by complete harmonic pairs.
The last row is then kept as an additional constant (DC) function, a warning is
printed and odd values of `pa` should be preferred.
"""

from collections.abc import Sequence

import equinox as eqx
import jax
import jax.numpy as jnp
import numpy as np

from ._config import BasisType
from ._errors import DimensionMismatch, InvalidOrder


class BasisSpec(eqx.Module):
    """Basis family and optional selection of retained basis functions.

    Parameters
    ----------
    type : {"hermite", "fourier"}
        Basis family. Defaults to `"hermite"`.
    indices : sequence of bool, optional
        Selection mask of length `pa`; `True` marks a retained basis function.
        If not provided, all `pa` functions are retained.

    """

    type: BasisType = eqx.field(static=True)
    indices: tuple[bool, ...] | None = eqx.field(static=True)

    def __init__(
        self,
        type: BasisType = "hermite",
        indices: Sequence[bool] | np.ndarray | None = None,
    ) -> None:
        if type not in _BASIS_FUNCTIONS:
            raise ValueError(
                f'Invalid basis `type` "{type}". Must be one of '
                f"{sorted(_BASIS_FUNCTIONS)}."
            )
        self.type = type

        if indices is None:
            self.indices = None
        else:
            indices = tuple(bool(i) for i in np.asarray(indices).ravel())
            if not any(indices):
                raise InvalidOrder(
                    "Basis mask must select at least one basis function."
                )
            self.indices = indices

    def mask(self, pa: int) -> np.ndarray:
        """Boolean selection mask of length `pa`."""
        if self.indices is None:
            return np.ones(pa, dtype=bool)
        if len(self.indices) != pa:
            raise DimensionMismatch(
                f"Basis mask has length {len(self.indices)}, but the basis "
                f"order is pa={pa}."
            )
        return np.array(self.indices, dtype=bool)

    def num_selected(self, pa: int) -> int:
        """Effective basis order after applying the mask."""
        return int(self.mask(pa).sum())


def compute_basis(
    xi: np.ndarray | float,
    pa: int,
    basis: BasisSpec,
    logging_enabled: bool = True,
) -> jnp.ndarray:
    """Evaluate the (masked) basis at every sample of the scheduling variable.

    Parameters
    ----------
    xi : np.ndarray, shape (N,), or float
        Scheduling variable.
    pa : int
        Basis order, i.e. number of basis functions before masking.
    basis : `BasisSpec`
        Basis family and selection mask.
    logging_enabled : bool
        Whether to print a warning for an even-order Fourier basis. Defaults
        to `True`.

    Returns
    -------
    g : jnp.ndarray, shape (pa_eff, N) or (pa_eff,)
        Basis matrix; the first retained row of an unmasked basis is constant
        one. `pa_eff` is the number of retained basis functions.

    Raises
    ------
    InvalidOrder
        If `pa < 1`.
    DimensionMismatch
        If the basis mask does not have length `pa`.

    """
    if pa < 1:
        raise InvalidOrder(f"Basis order must satisfy pa >= 1, got pa={pa}.")
    mask = basis.mask(pa)

    if basis.type == "fourier" and pa % 2 == 0 and logging_enabled:
        print(
            f"Warning: Fourier basis of even order pa={pa} cannot be filled with "
            "complete sine/cosine pairs. The last basis function is kept as an "
            "additional constant. Prefer an odd basis order."
        )

    g = _BASIS_FUNCTIONS[basis.type](jnp.asarray(xi, dtype=float), pa)
    if mask.all():
        return g
    return g[np.flatnonzero(mask)]


def _hermite(xi: jnp.ndarray, pa: int) -> jnp.ndarray:

    def _compute_g(j, g):
        return g.at[j].set(2 * xi * g[j - 1] - 2 * (j - 1) * g[j - 2])

    g = jnp.ones((pa,) + xi.shape)
    if pa > 1:
        g = g.at[1].set(2 * xi)
    return jax.lax.fori_loop(2, pa, _compute_g, g)


def _fourier(xi: jnp.ndarray, pa: int) -> jnp.ndarray:
    g = jnp.ones((pa,) + xi.shape)
    for j in range(1, (pa - 1) // 2 + 1):
        g = g.at[2 * j - 1].set(jnp.sin(j * xi))
        g = g.at[2 * j].set(jnp.cos(j * xi))
    return g


_BASIS_FUNCTIONS = {
    "hermite": _hermite,
    "fourier": _fourier,
}
