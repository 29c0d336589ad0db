"""Exceptions raised by the search core and the extractor."""

from __future__ import annotations


class DeclSearchError(Exception):
    """Base class for every declsearch failure."""


class EmptyCandidateSetError(DeclSearchError):
    """A best match was requested from a category with no declarations."""

    def __init__(self, category: str = "declarations") -> None:
        super().__init__(f"No {category} to match against.")
        self.category = category


class UnknownCategoryError(DeclSearchError, ValueError):
    """The category selector is not one of the recognised kinds."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Unknown category {value!r}; expected one of: "
            "functions, typedefs, structs, classes."
        )
        self.value = value


class ExtractionError(DeclSearchError):
    """The source file could not be read or no grammar is available."""
