"""Pytest configuration and fixtures for declsearch tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from declsearch.models import (
    Class,
    EntityAggregate,
    Function,
    SourceLoc,
    Struct,
    Typedef,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_c_path() -> Path:
    return FIXTURES / "sample.c"


@pytest.fixture
def shapes_hpp_path() -> Path:
    return FIXTURES / "shapes.hpp"


@pytest.fixture
def edge_cases_hpp_path() -> Path:
    return FIXTURES / "edge_cases.hpp"


@pytest.fixture
def temp_config(temp_dir: Path, monkeypatch) -> Path:
    """Point the config file at a temporary directory."""
    base_dir = temp_dir / "home"
    config_file = base_dir / "config.toml"
    monkeypatch.setattr("declsearch.config.BASE_DIR", base_dir)
    monkeypatch.setattr("declsearch.config.CONFIG_FILE", config_file)
    return config_file


@pytest.fixture
def entities() -> EntityAggregate:
    """A small hand-built aggregate, as the extractor would produce it."""
    agg = EntityAggregate()

    add = agg.add_function(Function(SourceLoc("m.c", 1, 5), "int", "add"))
    add.add_arg("a", "int")
    add.add_arg("b", "int")

    sub = agg.add_function(Function(SourceLoc("m.c", 2, 5), "int", "sub"))
    sub.add_arg("a", "int")
    sub.add_arg("b", "int")

    dup = agg.add_function(Function(SourceLoc("m.c", 3, 7), "char *", "dup"))
    dup.add_arg("s", "const char *")

    agg.add_function(Function(SourceLoc("m.c", 4, 6), "void", "reset"))

    agg.add_typedef(Typedef(SourceLoc("m.c", 6, 14), "uint", "unsigned int"))
    agg.add_typedef(Typedef(SourceLoc("m.c", 7, 14), "byte", "unsigned char"))

    point = agg.add_struct(Struct(SourceLoc("m.c", 9, 8), "point"))
    point.add_attr("x", "int")
    point.add_attr("y", "int")

    shape = agg.add_class(Class(SourceLoc("m.cpp", 1, 7), "Shape"))
    shape.add_attr("id_", "int")
    shape.add_method(SourceLoc("m.cpp", 3, 12), "double", "area")
    return agg
