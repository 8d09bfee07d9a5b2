class BrotError(Exception):
    """Base class for every failure raised while producing an image."""


class ArgumentError(BrotError, ValueError):
    pass


class SizeError(ArgumentError):
    pass


class AllocationFailure(BrotError, MemoryError):
    pass


class DestinationError(BrotError, OSError):
    pass
