"""Exceptions raised while configuring tabulated functions."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

__all__ = ["AllocationFailureError", "InvalidConfigurationError"]


class InvalidConfigurationError(ValueError):
    """Raised when sample data cannot form a valid interpolation table.

    This covers missing source data, a table smaller than the evaluator's
    minimum size (before or after duplicate removal), mismatched array
    lengths, non-finite samples, and a zero-width independent range.
    """


class AllocationFailureError(MemoryError):
    """Raised when a table or scratch buffer cannot be allocated."""
