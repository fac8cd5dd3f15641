"""Miscellaneous utility functions."""

import nonlinear_benchmarks
import numpy as np

from ._data_manager import SignalBundle, create_signal_bundle


def load_and_preprocess_silverbox_data(
    N: int = 10_000
) -> tuple[SignalBundle, SignalBundle]:
    """Load (from `nonlinear_benchmarks`) and preprocess the Silverbox dataset.

    The Silverbox is an electronic implementation of a Duffing oscillator. Its
    output is used both as response and as scheduling variable, so that the
    cubic stiffness appears as a displacement-dependent AR coefficient.

    Parameters
    ----------
    N : int, optional
        Number of samples of each returned record. Defaults to `10_000`.

    Returns
    -------
    train : `SignalBundle`
        Estimation data (first `N` samples after the initial transient).
    validation : `SignalBundle`
        Validation data (the subsequent `N` samples).

    Raises
    ------
    ValueError
        If the training record is shorter than `2 * N` samples.

    """
    train = nonlinear_benchmarks.Silverbox()[0]
    u, y = np.asarray(train.u), np.asarray(train.y)

    fs = 1e7 / 2**14  # [Hz]
    N_init = 164  # number of initial samples to be discarded

    u = u[N_init:]
    y = y[N_init:]
    if y.shape[0] < 2 * N:
        raise ValueError(
            f"Silverbox training data holds {y.shape[0]} samples after removing "
            f"the transient; {2 * N} are required."
        )

    # Normalize data (zero mean, unit variance)
    u = (u - u.mean()) / u.std()
    y = (y - y.mean()) / y.std()

    def _bundle(k):
        idx = slice(k * N, (k + 1) * N)
        return create_signal_bundle(y[idx], xi=y[idx], u=u[idx], fs=fs)

    return _bundle(0), _bundle(1)


def print_model_summary(
    model,
    wall_time: float | None = None,
    cond: float | None = None
) -> None:
    """Print the structure and performance criteria of an estimated model."""
    order = model.order
    pa_eff = model.A.shape[0]
    name = "LPV-ARX" if order.is_arx else "LPV-AR"

    structure = f"na={order.na}"
    if order.is_arx:
        structure += f", nb={order.nb}"
    structure += f", pa={pa_eff}"
    if pa_eff != order.pa:
        structure += f" of {order.pa}"

    timing = "" if wall_time is None else f" in {wall_time:.2f}s"
    print(
        f"{name} model ({structure}, {model.num_parameters()} coefficients) "
        f"estimated{timing}."
    )
    print(f"    RSS/SSS: {100 * model.criteria.rss_sss:.4f}%")
    print(f"    log-likelihood: {model.criteria.lnL:.4e}")
    print(f"    BIC: {model.criteria.bic:.4e}")
    if cond is not None:
        print(f"    condition number of Phi @ Phi.T: {cond:.4e}")
    print("")
