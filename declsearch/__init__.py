"""declsearch: fuzzy declaration search for C and C++ source files."""

__version__ = "0.3.0"
