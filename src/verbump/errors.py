__all__ = [
    "VerbumpError",
    "ArgumentError",
    "StructuralError",
]


class VerbumpError(Exception):
    pass


class ArgumentError(VerbumpError, ValueError):
    """Invalid invocation, raised before the target file is touched."""


class StructuralError(VerbumpError):
    """Target file lacks an element or declaration that must be present."""
