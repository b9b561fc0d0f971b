"""
Load failures. None of these is fatal: the loader converts them into a
fallback to the demo catalogue and a False return value.
"""


class CatalogueError(Exception):
    pass


class FetchError(CatalogueError):
    """Transport failure or non-success status while fetching the sheet."""


class EmptyResultError(CatalogueError):
    """The CSV parsed, but no record had a title."""
