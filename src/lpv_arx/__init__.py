"""Top-level package for LPV-AR(X) system identification.

Linear Parameter-Varying AutoRegressive models expand their coefficients over a
functional basis of a measured scheduling variable. The workflow is:

- ``create_signal_bundle`` for constructing ``SignalBundle`` objects, the
    starting point for all identification routines.
- ``estimate`` for least-squares estimation of a ``ModelLPVAR`` with
    coefficient covariance and performance ``Criteria``.
- ``simulate`` for out-of-sample validation by one-step-ahead prediction.
- ``modal_analysis`` for natural frequencies, damping ratios and spectra of the
    frozen model along the scheduling variable.

Additional components:
- ``BasisSpec`` and ``compute_basis`` for the Hermite and Fourier bases.
- ``build_regression`` for the lifted regression problem.
- ``synthesize`` for generating LPV-AR(X) realizations with known coefficients.
- ``sweep_model_order``, ``significant_basis_indices`` and ``chi2_threshold``
    for model-order and basis selection.
- ``load_and_preprocess_silverbox_data`` for loading the Silverbox benchmark
    (an electronic Duffing oscillator) in the required format.
- The exceptions ``LPVError``, ``InvalidOrder``, ``InsufficientData``,
    ``SingularRegression`` and ``DimensionMismatch``.
"""


from ._basis_functions import BasisSpec, compute_basis
from ._data_manager import ModelOrder, SignalBundle, create_signal_bundle
from ._errors import (
    DimensionMismatch,
    InsufficientData,
    InvalidOrder,
    LPVError,
    SingularRegression,
)
from ._estimation import estimate
from ._misc import load_and_preprocess_silverbox_data
from ._modal_analysis import ModalAnalysis, modal_analysis
from ._model_structures import ModelLPVAR
from ._performance import Criteria, compute_criteria
from ._regression import build_regression
from ._selection import (
    SweepResult,
    chi2_threshold,
    significant_basis_indices,
    sweep_model_order,
)
from ._simulation import simulate, synthesize


__all__ = [
    "BasisSpec",
    "compute_basis",
    "ModelOrder",
    "SignalBundle",
    "create_signal_bundle",
    "DimensionMismatch",
    "InsufficientData",
    "InvalidOrder",
    "LPVError",
    "SingularRegression",
    "estimate",
    "load_and_preprocess_silverbox_data",
    "ModalAnalysis",
    "modal_analysis",
    "ModelLPVAR",
    "Criteria",
    "compute_criteria",
    "build_regression",
    "SweepResult",
    "chi2_threshold",
    "significant_basis_indices",
    "sweep_model_order",
    "simulate",
    "synthesize",
]
