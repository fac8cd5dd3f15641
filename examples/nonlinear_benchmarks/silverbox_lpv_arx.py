"""Quick example on the Silverbox benchmark dataset using an LPV-ARX model.

The displacement (output) acts as scheduling variable, so the cubic stiffness
of the Duffing oscillator shows up as an amplitude-dependent resonance.
"""

import time

import numpy as np

import lpv_arx as lpv


# ========== SYSTEM IDENTIFICATION ==========
train, validation = lpv.load_and_preprocess_silverbox_data()

start_time = time.time()

# Step 1: Model-order sweep
pa = 3  # number of basis functions
nb = 2  # input order
sweep = list(lpv.sweep_model_order(
    train, range(2, 9), pa, nb=nb, validation=validation))
best = min(sweep, key=lambda r: r.model.criteria.bic)
print(f"\nLowest BIC for na = {best.na}")

# Step 2: Prune insignificant basis functions
indices = lpv.significant_basis_indices(best.model.criteria.chi2_theta, 1e-3)
basis = lpv.BasisSpec("hermite", indices=indices)
model = lpv.estimate(train, (best.na, nb, pa), basis)

total_time = time.time() - start_time
print(f"\nTotal time for training: {total_time:.2f} seconds")


# ========== VALIDATION ==========
y_hat, criteria = model.simulate(validation)
rmse = np.sqrt(np.mean((validation.y[best.na:] - y_hat) ** 2))
print(f"\nRMSE of one-step-ahead prediction (normalized): {rmse:.3e}")
print(f"RSS/SSS on validation data: {100 * criteria.rss_sss:.4f}%")


# ========== FROZEN MODAL ANALYSIS ==========
xi = np.linspace(-2, 2, 9)
modes = lpv.modal_analysis(model, xi)

print("\n    xi  | f_n [Hz] | zeta")
for k in range(xi.shape[0]):
    f_n = modes.omega_n[0, k] / (2 * np.pi)
    print(f"{xi[k]:7.2f} | {f_n:8.2f} | {modes.zeta[0, k]:.4f}")
