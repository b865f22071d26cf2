"""
Query normalization package.

`normalize` turns a loosely-typed `RawFilter` into a bounded `QuerySpec`.
It has no failure path.
"""

from .normalizer import QuerySpec, RawFilter, SortDirection, normalize

__all__ = ["QuerySpec", "RawFilter", "SortDirection", "normalize"]
