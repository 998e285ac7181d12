"""Example script for rigid motion estimation.

This script builds a known transform, observes noisy correspondences and
recovers the transform with the cross-covariance estimator. It also folds a
short frame chain where one edge is only known in reverse.
"""

import logging
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


from rigidgeom.errors import MotionFitError
from rigidgeom.fitting.motion import fit_rms_error, fit_se3
from rigidgeom.transform.se import SE3
from rigidgeom.transform.sequence import InvertibleTransformSequence
from rigidgeom.utils.logging_config import setup_logging


# Setup logging
setup_logging(log_level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main function for the motion fitting demo."""
    rng = np.random.default_rng(0)
    num_points = 20
    noise_sigma = 0.01

    truth = SE3.from_rotation_vector(rng.uniform(-1.0, 1.0, size=3), rng.uniform(-2.0, 2.0, size=3))
    logger.info(f"Ground truth: {truth}")

    src = rng.uniform(-5.0, 5.0, size=(num_points, 3))
    dst = src @ truth.rotation.T + truth.translation.to_array()
    dst += rng.normal(scale=noise_sigma, size=dst.shape)

    try:
        found = fit_se3(src, dst)
    except MotionFitError as e:
        logger.error(f"Fitting failed: {e}")
        return

    logger.info(f"Estimated: {found}")
    logger.info(f"RMS error over {num_points} pairs: {fit_rms_error(found, src, dst):.4f}")

    # world <- camera is known, camera <- marker was stored as marker <- camera
    chain = InvertibleTransformSequence()
    chain.add_transform(True, found)
    chain.add_transform(False, SE3.from_rotation_vector([0.0, 0.0, 0.5], [0.0, 0.0, 1.0]))
    logger.info(f"World <- marker: {chain.compute_transform()}")


if __name__ == "__main__":
    main()
