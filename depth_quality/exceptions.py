"""Exceptions raised by the depth quality pipeline."""


class DegenerateInputError(ValueError):
    """Frame geometry is insufficient to compute metrics; skip the frame."""
