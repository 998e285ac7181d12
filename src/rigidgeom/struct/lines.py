"""Parametric lines and line segments."""

from dataclasses import dataclass, field

from rigidgeom.struct.tuples import Point2D, Point3D, Vector2D, Vector3D


@dataclass
class LineParametric2D:
    """Infinite 2D line ``p + t*slope``.

    Attributes:
        p: Anchor point on the line
        slope: Direction of the line, must not be the zero vector
    """

    p: Point2D = field(default_factory=Point2D)
    slope: Vector2D = field(default_factory=Vector2D)

    def point_on_line(self, t: float) -> Point2D:
        """Evaluate the line at parameter ``t``."""
        return Point2D(self.p.x + t * self.slope.x, self.p.y + t * self.slope.y)


@dataclass
class LineParametric3D:
    """Infinite 3D line ``p + t*slope``.

    Attributes:
        p: Anchor point on the line
        slope: Direction of the line, must not be the zero vector
    """

    p: Point3D = field(default_factory=Point3D)
    slope: Vector3D = field(default_factory=Vector3D)

    def point_on_line(self, t: float) -> Point3D:
        """Evaluate the line at parameter ``t``."""
        return Point3D(
            self.p.x + t * self.slope.x,
            self.p.y + t * self.slope.y,
            self.p.z + t * self.slope.z,
        )


@dataclass
class LineSegment2D:
    """Closed 2D segment between endpoints ``a`` (t=0) and ``b`` (t=1)."""

    a: Point2D = field(default_factory=Point2D)
    b: Point2D = field(default_factory=Point2D)

    def length(self) -> float:
        return self.a.distance(self.b)

    def to_parametric(self) -> LineParametric2D:
        """Line through the segment with ``p=a`` and ``slope=b-a``."""
        return LineParametric2D(
            p=self.a.copy(),
            slope=Vector2D(self.b.x - self.a.x, self.b.y - self.a.y),
        )
