"""Shared fixtures: synthetic LPV-AR(X) records with known coefficients."""

import numpy as np
import pytest

import lpv_arx as lpv


# Frozen poles have radius 0.9 for every xi in [-1, 1]
A_TRUE = np.array([
    [-1.5795, 0.81],
    [0.1, 0.0],
    [0.0, 0.0],
])
B_TRUE = np.array([
    [1.0, 0.5],
    [0.2, 0.0],
    [0.0, 0.0],
])


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def lpv_ar_data(rng):
    """Noisy LPV-AR(2) realization on a third-order Hermite basis."""
    N = 4000
    xi = rng.uniform(-1, 1, N)
    w = 0.1 * rng.standard_normal(N)
    return lpv.synthesize(A_TRUE, xi, w, lpv.BasisSpec("hermite"))


@pytest.fixture
def lpv_arx_data(rng):
    """Noise-free LPV-ARX(2, 1) realization driven by a white input."""
    N = 500
    xi = rng.uniform(-1, 1, N)
    u = rng.standard_normal(N)
    return lpv.synthesize(
        A_TRUE, xi, np.zeros(N), lpv.BasisSpec("hermite"), B=B_TRUE, u=u
    )


def split(signals, n):
    """Split a bundle into two consecutive records."""
    def _part(idx):
        u = None if signals.u is None else signals.u[idx]
        return lpv.create_signal_bundle(
            signals.y[idx], xi=signals.xi[idx], u=u, fs=signals.fs
        )

    return _part(slice(0, n)), _part(slice(n, None))
