"""Diff of two sequences based on the longest common subsequence."""
from lcsdiff.lcs import DiffElement, DiffResult, Edit, diff, lcs_length

__all__ = ["DiffElement", "DiffResult", "Edit", "diff", "lcs_length"]
