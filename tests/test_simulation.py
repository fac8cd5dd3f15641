"""
Tests for out-of-sample validation and process synthesis.
"""

import numpy as np
import pytest

import lpv_arx as lpv
from conftest import A_TRUE, B_TRUE, split


def test_synthesize_matches_reference_recursion(rng):
    N, na = 30, 2
    xi = rng.uniform(-1, 1, N)
    w = rng.standard_normal(N)
    basis = lpv.BasisSpec("hermite")

    signals = lpv.synthesize(A_TRUE, xi, w, basis)

    g = np.asarray(lpv.compute_basis(xi, 3, basis))
    y = np.zeros(N)
    for t in range(N):
        y[t] = w[t]
        for i in range(1, na + 1):
            if t - i >= 0:
                y[t] -= A_TRUE[:, i - 1] @ g[:, t - i] * y[t - i]
    np.testing.assert_allclose(signals.y, y, rtol=1e-10, atol=1e-12)
    np.testing.assert_array_equal(signals.xi, xi)


def test_synthesize_with_input_matches_reference_recursion(rng):
    N, na, nb = 30, 2, 1
    xi = rng.uniform(-1, 1, N)
    u = rng.standard_normal(N)
    basis = lpv.BasisSpec("hermite")

    signals = lpv.synthesize(A_TRUE, xi, np.zeros(N), basis, B=B_TRUE, u=u)

    g = np.asarray(lpv.compute_basis(xi, 3, basis))
    y = np.zeros(N)
    for t in range(N):
        for i in range(1, na + 1):
            if t - i >= 0:
                y[t] -= A_TRUE[:, i - 1] @ g[:, t - i] * y[t - i]
        for i in range(nb + 1):
            if t - i >= 0:
                y[t] += B_TRUE[:, i] @ g[:, t - i] * u[t - i]
    np.testing.assert_allclose(signals.y, y, rtol=1e-10, atol=1e-12)
    np.testing.assert_array_equal(signals.u, u)


def test_noise_free_round_trip(lpv_arx_data, rng):
    model = lpv.estimate(lpv_arx_data, (2, 1, 3), logging_enabled=False)

    N = 300
    validation = lpv.synthesize(
        A_TRUE, rng.uniform(-1, 1, N), np.zeros(N), B=B_TRUE,
        u=rng.standard_normal(N)
    )
    y_hat, criteria = lpv.simulate(validation, model)

    assert y_hat.shape == (N - 2,)
    np.testing.assert_allclose(y_hat, validation.y[2:], atol=1e-8)
    assert criteria.rss < 1e-14
    assert criteria.rss_sss < 1e-14


def test_simulation_on_estimation_data_reproduces_criteria(lpv_ar_data):
    model = lpv.estimate(lpv_ar_data, (2, 3), logging_enabled=False)
    _, criteria = model.simulate(lpv_ar_data)

    assert criteria.rss == pytest.approx(model.criteria.rss, rel=1e-8)
    assert criteria.lnL == pytest.approx(model.criteria.lnL, rel=1e-8)
    assert criteria.bic == pytest.approx(model.criteria.bic, rel=1e-8)
    np.testing.assert_allclose(criteria.chi2_theta, model.criteria.chi2_theta)


def test_validation_on_held_out_data(lpv_ar_data):
    train, validation = split(lpv_ar_data, 2000)
    model = lpv.estimate(train, (2, 3), logging_enabled=False)
    A_before = np.asarray(model.A).copy()

    y_hat, criteria = lpv.simulate(validation, model)

    assert y_hat.shape == (validation.N - 2,)
    np.testing.assert_array_equal(np.asarray(model.A), A_before)
    assert criteria.rss_sss / model.criteria.rss_sss == pytest.approx(1.0, abs=0.3)
    assert criteria.sigma_w == pytest.approx(0.01, rel=0.15)


def test_masked_model_uses_stored_basis(lpv_ar_data):
    train, validation = split(lpv_ar_data, 2000)
    basis = lpv.BasisSpec("hermite", indices=[True, True, False])
    model = lpv.estimate(train, (2, 3), basis, logging_enabled=False)

    y_hat, criteria = model.simulate(validation)
    assert y_hat.shape == (validation.N - 2,)
    assert criteria.chi2_theta.shape == (2, 2)


def test_validation_data_too_short(lpv_ar_data):
    model = lpv.estimate(lpv_ar_data, (2, 3), logging_enabled=False)
    short = lpv.create_signal_bundle(np.ones(2))
    with pytest.raises(lpv.InvalidOrder):
        model.simulate(short)


def test_validation_record_shorter_than_coefficient_count(lpv_ar_data):
    model = lpv.estimate(lpv_ar_data, (2, 3), logging_enabled=False)
    short = lpv.create_signal_bundle(lpv_ar_data.y[:6], xi=lpv_ar_data.xi[:6])

    y_hat, criteria = model.simulate(short)

    assert y_hat.shape == (4,)
    assert np.isfinite(criteria.rss) and np.isfinite(criteria.lnL)


def test_validation_needs_residual_degree_of_freedom(lpv_ar_data):
    model = lpv.estimate(lpv_ar_data, (2, 3), logging_enabled=False)
    short = lpv.create_signal_bundle(lpv_ar_data.y[:3], xi=lpv_ar_data.xi[:3])
    with pytest.raises(lpv.InsufficientData):
        model.simulate(short)


def test_simulate_type_checks(lpv_ar_data):
    model = lpv.estimate(lpv_ar_data, (2, 3), logging_enabled=False)
    with pytest.raises(TypeError):
        lpv.simulate(lpv_ar_data, model.A)
    with pytest.raises(TypeError):
        lpv.simulate(lpv_ar_data.y, model)


def test_synthesize_requires_input_with_input_coefficients(rng):
    with pytest.raises(ValueError):
        lpv.synthesize(A_TRUE, rng.uniform(-1, 1, 20), np.zeros(20), B=B_TRUE)


def test_synthesize_shape_checks(rng):
    xi = rng.uniform(-1, 1, 20)
    with pytest.raises(lpv.DimensionMismatch):
        lpv.synthesize(A_TRUE, xi, np.zeros(19))
    with pytest.raises(lpv.DimensionMismatch):
        lpv.synthesize(
            A_TRUE, xi, np.zeros(20), lpv.BasisSpec("hermite", [True, True, False])
        )
