"""Sample tables backing tabulated functions."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

from tabinterp.table.sample_table import SampleEntry, SampleTable

__all__ = ["SampleEntry", "SampleTable"]
