"""Exceptions raised by the numerical core."""


class EigenvizError(Exception):
    """Base class for all errors raised by eigenviz."""


class DegenerateBasisError(EigenvizError, ValueError):
    """A complex eigenvalue was found but both off-diagonal entries are zero."""


class LinearlyDependentBasisError(EigenvizError, ValueError):
    """The real and imaginary eigenvector parts do not span the plane."""
