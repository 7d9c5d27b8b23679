"""
src/data/errors.py
──────────────────
Error taxonomy shared by the data store and the analytics layer.

  DataUnavailable  store failed or timed out; propagated, never retried
  InvalidZone      zone outside the fixed enumeration

Lookups that find nothing return None instead of raising.
"""


class DataUnavailable(RuntimeError):
    """The record store could not answer a query."""


class InvalidZone(ValueError):
    """A zone name outside North / South / East / West / Central."""
