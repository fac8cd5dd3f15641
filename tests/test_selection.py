"""
Tests for model-order sweeps and basis pruning.
"""

from collections.abc import Iterator

import numpy as np
import pytest

import lpv_arx as lpv
from conftest import split


def test_chi2_threshold():
    assert lpv.chi2_threshold(0.05) == pytest.approx(3.841458820694124, rel=1e-9)
    assert lpv.chi2_threshold(1e-4) == pytest.approx(15.136705226623606, rel=1e-6)

    with pytest.raises(ValueError):
        lpv.chi2_threshold(0.0)


def test_significant_basis_indices():
    chi2_theta = np.array([
        [100.0, 50.0],
        [0.1, 0.2],
        [5.0, 0.1],
    ])
    np.testing.assert_array_equal(
        lpv.significant_basis_indices(chi2_theta, 0.05), [True, False, True]
    )
    np.testing.assert_array_equal(
        lpv.significant_basis_indices(chi2_theta, 0.01), [True, False, False]
    )


def test_basis_pruning_workflow(lpv_ar_data):
    full = lpv.estimate(lpv_ar_data, (2, 3), logging_enabled=False)
    indices = lpv.significant_basis_indices(full.criteria.chi2_theta, 1e-4)

    # The third Hermite function does not enter the generating process
    np.testing.assert_array_equal(indices, [True, True, False])

    basis = lpv.BasisSpec("hermite", indices=indices)
    reduced = lpv.estimate(lpv_ar_data, (2, 3), basis, logging_enabled=False)
    A_full, _ = reduced.full_coefficients()

    assert reduced.num_parameters() == 4
    np.testing.assert_array_equal(A_full[2], 0.0)
    assert reduced.criteria.bic < full.criteria.bic


def test_sweep_is_lazy_and_ordered(lpv_ar_data):
    train, validation = split(lpv_ar_data, 2000)
    sweep = lpv.sweep_model_order(
        train, range(1, 5), 3, validation=validation, logging_enabled=False
    )
    assert isinstance(sweep, Iterator)

    results = list(sweep)
    assert [r.na for r in results] == [1, 2, 3, 4]
    assert all(r.validation is not None for r in results)
    assert all(r.model.order.pa == 3 for r in results)

    # The generating order minimizes the BIC
    bic = [r.model.criteria.bic for r in results]
    assert int(np.argmin(bic)) == 1


def test_sweep_over_arx_orders(lpv_arx_data, capsys):
    results = list(lpv.sweep_model_order(lpv_arx_data, [2, 3], 3, nb=1))

    assert [r.model.order.nb for r in results] == [1, 1]
    assert all(r.validation is None for r in results)
    out = capsys.readouterr().out
    assert " Model order sweep " in out
    assert "na =   2" in out
