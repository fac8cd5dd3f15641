"""Centralized default constants and types used across the package."""

from typing import Literal

import jax


# Least-squares estimates and covariances are ill-conditioned in single precision
jax.config.update("jax_enable_x64", True)

BasisType = Literal["hermite", "fourier"]
DeviceName = Literal["cpu", "gpu", "tpu"]
DeviceLike = DeviceName | jax.Device | None

VARIANCE_DDOF = 1  # residual variance normalised by (number of residuals - 1)
NUM_FREQS = 512  # frequency points of the modal-analysis PSD
