"""Exceptions raised by the estimation, simulation and modal-analysis routines."""


class LPVError(ValueError):
    """Base class for all errors raised while building or using an LPV model."""


class InvalidOrder(LPVError):
    """Non-positive or inconsistent model-order or basis parameters."""


class InsufficientData(LPVError):
    """Too few samples for the number of coefficients to be estimated."""


class SingularRegression(LPVError):
    """The Gram matrix of the regression problem is not invertible."""

    def __init__(self, cond: float) -> None:
        self.cond = cond
        super().__init__(
            "Regression matrix is singular to working precision "
            f"(condition number of Phi @ Phi.T: {cond:.3e}). Consider reducing "
            "the model order or the number of basis functions."
        )


class DimensionMismatch(LPVError):
    """Signal lengths disagree, or a basis mask does not match the basis order."""
