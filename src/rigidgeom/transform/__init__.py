"""Rigid transforms and transform chains."""

from rigidgeom.transform.se import SE2, SE3
from rigidgeom.transform.sequence import InvertibleTransformSequence

__all__ = [
    "SE2",
    "SE3",
    "InvertibleTransformSequence",
]
