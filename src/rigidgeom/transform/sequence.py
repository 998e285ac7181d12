"""Chains of rigid transforms where some edges are stored in reverse.

A frame graph often only knows an edge in one direction, e.g. the pose of
B in A when the path needs A in B. ``InvertibleTransformSequence`` records
each edge together with its direction and folds the chain into one net
transform from the first frame to the last.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from rigidgeom.transform.se import SE2, SE3

logger = logging.getLogger(__name__)

Transform = Union[SE2, SE3]


@dataclass
class SequenceEdge:
    """Single edge of a transform sequence.

    Attributes:
        forward: False if the edge's inverse is used when folding
        transform: The stored transform
    """

    forward: bool
    transform: Transform


class InvertibleTransformSequence:
    """Ordered, append-only list of transform edges."""

    def __init__(self):
        self.path: List[SequenceEdge] = []

    def add_transform(self, forward: bool, transform: Transform) -> None:
        """Append an edge to the end of the chain.

        Args:
            forward: If False the inverse of ``transform`` is used
            transform: SE2 or SE3 transform, stored by reference

        Raises:
            TypeError: If ``transform`` is not SE2/SE3 or differs in type
                from edges already in the sequence
        """
        if not isinstance(transform, (SE2, SE3)):
            raise TypeError(f"Expected an SE2 or SE3 transform, got {type(transform).__name__}")
        if self.path and type(self.path[0].transform) is not type(transform):
            raise TypeError(
                f"Cannot mix {type(self.path[0].transform).__name__} and "
                f"{type(transform).__name__} in one sequence"
            )
        self.path.append(SequenceEdge(forward=bool(forward), transform=transform))

    def clear(self) -> None:
        self.path.clear()

    def __len__(self) -> int:
        return len(self.path)

    def compute_transform(self, out: Optional[Transform] = None) -> Transform:
        """Fold the chain into a single transform.

        Starting from the identity, each edge (inverted when stored in
        reverse) is composed on the right of the accumulated transform.

        Args:
            out: Optional transform to write the result into. Required when
                the sequence is empty.

        Returns:
            Net transform from the first frame of the chain to the last

        Raises:
            ValueError: If the sequence is empty and ``out`` is None
            TypeError: If ``out`` does not match the type of the edges
        """
        if not self.path:
            if out is None:
                raise ValueError("Cannot infer the transform type of an empty sequence")
            out.reset()
            return out

        kind = type(self.path[0].transform)
        if out is None:
            out = kind()
        elif type(out) is not kind:
            raise TypeError(f"Output must be {kind.__name__}, got {type(out).__name__}")

        accumulated = kind()
        inverse = kind()
        for edge in self.path:
            if edge.forward:
                step = edge.transform
            else:
                step = edge.transform.invert(inverse)
            accumulated.compose(step, accumulated)

        logger.debug(f"Folded {len(self.path)} {kind.__name__} edges into {accumulated}")
        out.set_from(accumulated)
        return out
