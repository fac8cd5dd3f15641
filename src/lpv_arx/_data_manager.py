"""
Data structures for scheduled time-series data and LPV model orders.
"""

from dataclasses import dataclass

import numpy as np

from ._errors import DimensionMismatch, InvalidOrder


@dataclass(frozen=True)
class SignalBundle:
    """
    Equal-length time series used for estimation or validation.

    Attributes
    ----------
    y : np.ndarray
        Response (output) signal, shape (N,).
    xi : np.ndarray
        Scheduling variable, shape (N,).
    u : np.ndarray or None
        Exogenous input signal, shape (N,). `None` for output-only data.
    fs : float
        Sampling frequency in Hz. Metadata only, used to scale the natural
        frequencies returned by the modal analysis.
    """
    y: np.ndarray
    xi: np.ndarray
    u: np.ndarray | None
    fs: float

    @property
    def N(self) -> int:
        return self.y.shape[0]


@dataclass(frozen=True)
class ModelOrder:
    """
    Structural parameters of an LPV-AR(X) model.

    Attributes
    ----------
    na : int
        Autoregressive order.
    pa : int
        Functional basis order (before applying a basis mask).
    nb : int or None
        Exogenous input order. `None` for an output-only LPV-AR model; an
        LPV-ARX model uses the input lags 0, ..., nb.
    """
    na: int
    pa: int
    nb: int | None = None

    @property
    def is_arx(self) -> bool:
        return self.nb is not None

    def num_lags(self) -> int:
        """Total number of lagged signals entering the regression."""
        return self.na + (self.nb + 1 if self.is_arx else 0)


def create_signal_bundle(
    y: np.ndarray,
    xi: np.ndarray | None = None,
    u: np.ndarray | None = None,
    fs: float = 1.0
) -> SignalBundle:
    """
    Create a SignalBundle from one-dimensional signals.

    Parameters
    ----------
    y : np.ndarray, shape (N,) or (1, N)
        Response signal.
    xi : np.ndarray, shape (N,) or (1, N), optional
        Scheduling variable. If not provided, the response itself is used as
        scheduling variable, which is the usual choice for output-scheduled
        nonlinear oscillators.
    u : np.ndarray, shape (N,) or (1, N), optional
        Exogenous input, required for LPV-ARX estimation.
    fs : float
        Sampling frequency in Hz. Defaults to `1.0`.

    Returns
    -------
    SignalBundle
        Validated signals stored as flat float arrays.

    Raises
    ------
    DimensionMismatch
        If a signal is not one-dimensional or the lengths disagree.
    """
    y = _as_signal(y, "y")
    xi = y if xi is None else _as_signal(xi, "xi")
    if u is not None:
        u = _as_signal(u, "u")

    N = y.shape[0]
    if xi.shape[0] != N:
        raise DimensionMismatch(
            f"`xi` has {xi.shape[0]} samples, but `y` has {N} samples."
        )
    if u is not None and u.shape[0] != N:
        raise DimensionMismatch(
            f"`u` has {u.shape[0]} samples, but `y` has {N} samples."
        )
    if fs <= 0:
        raise ValueError("`fs` must be positive.")

    return SignalBundle(y, xi, u, float(fs))


def as_order(order: ModelOrder | tuple) -> ModelOrder:
    """Convert `(na, pa)` or `(na, nb, pa)` tuples to a ModelOrder."""
    if isinstance(order, ModelOrder):
        return order
    if len(order) == 2:
        na, pa = order
        return ModelOrder(int(na), int(pa))
    if len(order) == 3:
        na, nb, pa = order
        return ModelOrder(int(na), int(pa), int(nb))
    raise InvalidOrder(
        f"Model order must be `(na, pa)` or `(na, nb, pa)`, got {order}."
    )


def validate_order(order: ModelOrder, N: int) -> None:
    """Check an order against the number of available samples."""
    if order.na < 1:
        raise InvalidOrder(f"AR order must satisfy na >= 1, got na={order.na}.")
    if order.pa < 1:
        raise InvalidOrder(
            f"Basis order must satisfy pa >= 1, got pa={order.pa}."
        )
    if order.is_arx:
        if order.nb < 0:
            raise InvalidOrder(
                f"Input order must satisfy nb >= 0, got nb={order.nb}."
            )
        if order.nb > order.na:
            raise InvalidOrder(
                f"Input order nb={order.nb} exceeds AR order na={order.na}; "
                "the first na samples are reserved as initial conditions."
            )
    if order.na > N - 1:
        raise InvalidOrder(
            f"AR order na={order.na} requires at least {order.na + 1} samples, "
            f"got {N}."
        )


def _as_signal(x: np.ndarray, name: str) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    if x.ndim == 2 and 1 in x.shape:
        x = x.reshape(-1)
    if x.ndim != 1:
        raise DimensionMismatch(
            f"`{name}` must be a one-dimensional signal, got shape {x.shape}."
        )
    return x
