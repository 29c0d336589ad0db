"""Tests for declaration records and their projections."""

import pytest

from declsearch.errors import UnknownCategoryError
from declsearch.models import (
    Category,
    Class,
    EntityAggregate,
    Function,
    SourceLoc,
    Struct,
    Typedef,
)


def test_source_loc_repr():
    assert SourceLoc("src/a.c", 12, 3).repr() == "src/a.c:12:3:"


def test_function_projections():
    fn = Function(SourceLoc("a.c", 1, 5), "int", "parse")
    fn.add_arg("text", "char *")
    fn.add_arg("len", "int")

    assert fn.signature() == "int ( char * , int )"
    assert fn.normal_form() == "int ( char * , int ) "
    assert fn.display_form() == "parse :: int ( char * , int )"
    assert fn.full_display_form() == "a.c:1:5: parse :: int ( char * , int )"


def test_function_without_args():
    fn = Function(SourceLoc("a.c", 1, 6), "void", "reset")
    assert fn.signature() == "void (  )"
    assert fn.normal_form() == "void ( ) "


def test_args_keep_declaration_order():
    fn = Function(SourceLoc("a.c", 1, 1), "int", "f")
    for name in ("c", "a", "b"):
        fn.add_arg(name, "int")
    assert [a.name for a in fn.args] == ["c", "a", "b"]


def test_typedef_projections():
    td = Typedef(SourceLoc("a.h", 3, 22), "uint", "unsigned int")
    assert td.signature() == "uint"
    assert td.normal_form() == "uint "
    assert td.display_form() == "uint :: unsigned int"


def test_struct_projections():
    st = Struct(SourceLoc("a.h", 4, 8), "point")
    st.add_attr("x", "int")
    st.add_attr("y", "int")
    assert st.normal_form() == "point "
    assert st.display_form() == "point { x :: int, y :: int }"
    assert Struct(SourceLoc("a.h", 1, 8), "empty").display_form() == "empty {  }"


def test_class_lists_attributes_then_methods():
    klass = Class(SourceLoc("a.hpp", 1, 7), "Shape")
    klass.add_attr("id_", "int")
    area = klass.add_method(SourceLoc("a.hpp", 3, 12), "double", "area")
    scale = klass.add_method(SourceLoc("a.hpp", 4, 10), "void", "scale")
    scale.add_arg("factor", "double")

    assert area.source == SourceLoc("a.hpp", 3, 12)
    assert klass.methods[1].args[0].type == "double"
    assert klass.normal_form() == "Shape "
    assert klass.display_form() == (
        "Shape { id_ :: int, area :: double (  ), scale :: void ( double ) }"
    )


def test_aggregate_append_returns_handles():
    agg = EntityAggregate()
    fn = agg.add_function(Function(SourceLoc("a.c", 1, 1), "int", "f"))
    agg.add_function(Function(SourceLoc("a.c", 2, 1), "int", "g"))
    fn.add_arg("x", "int")
    assert agg.functions[0].args and not agg.functions[1].args


def test_aggregate_of_and_counts(entities: EntityAggregate):
    assert entities.of(Category.TYPEDEFS) is entities.typedefs
    assert entities.of("structs") is entities.structs
    assert entities.counts() == {"functions": 4, "typedefs": 2, "structs": 1, "classes": 1}


@pytest.mark.parametrize("value", ["Functions", " classes ", Category.STRUCTS])
def test_category_parse(value):
    assert isinstance(Category.parse(value), Category)


@pytest.mark.parametrize("value", ["enums", "", None, 3])
def test_category_parse_rejects_unknown(value):
    with pytest.raises(UnknownCategoryError):
        Category.parse(value)
