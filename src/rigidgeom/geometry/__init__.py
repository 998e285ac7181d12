"""Arithmetic on tuples and 3x3 matrix-tuple products."""
