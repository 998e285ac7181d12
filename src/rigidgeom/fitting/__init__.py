"""Rigid motion estimation from point correspondences."""

from rigidgeom.fitting.motion import fit_residuals, fit_rms_error, fit_se2, fit_se3

__all__ = [
    "fit_se2",
    "fit_se3",
    "fit_residuals",
    "fit_rms_error",
]
