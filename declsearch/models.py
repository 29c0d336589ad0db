"""Declaration records extracted from a single source file.

Each record exposes the projections used by the ranking engine:

- ``signature()``: the raw structural text (what gets compared);
- ``normal_form()``: the signature re-joined with the query token convention;
- ``display_form()`` / ``full_display_form()``: what gets shown.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .errors import UnknownCategoryError
from .lexer import normalize_query


class Category(str, Enum):
    FUNCTIONS = "functions"
    TYPEDEFS = "typedefs"
    STRUCTS = "structs"
    CLASSES = "classes"

    @classmethod
    def parse(cls, value: object) -> "Category":
        """Return the category named by *value* or raise ``UnknownCategoryError``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownCategoryError(value)


@dataclass(frozen=True)
class SourceLoc:
    file: str
    line: int
    column: int

    def repr(self) -> str:
        return f"{self.file}:{self.line}:{self.column}:"


@dataclass(frozen=True)
class Arg:
    name: str
    type: str


@dataclass(frozen=True)
class Attribute:
    name: str
    type: str


class Declaration(ABC):
    """Anything that can be scored against a normalized query."""

    source: SourceLoc

    @abstractmethod
    def signature(self) -> str:
        """Structural text compared against the query."""
        ...

    @abstractmethod
    def display_form(self) -> str:
        """Human-readable form, never used for scoring."""
        ...

    def normal_form(self) -> str:
        return normalize_query(self.signature())

    def full_display_form(self) -> str:
        return f"{self.source.repr()} {self.display_form()}"


@dataclass
class Function(Declaration):
    source: SourceLoc
    return_type: str
    name: str
    args: List[Arg] = field(default_factory=list)

    def add_arg(self, name: str, type: str) -> Arg:
        arg = Arg(name=name, type=type)
        self.args.append(arg)
        return arg

    def signature(self) -> str:
        return f"{self.return_type} ( {' , '.join(a.type for a in self.args)} )"

    def display_form(self) -> str:
        return f"{self.name} :: {self.signature()}"


@dataclass
class Typedef(Declaration):
    source: SourceLoc
    alias: str
    aliased: str

    def signature(self) -> str:
        return self.alias

    def display_form(self) -> str:
        return f"{self.alias} :: {self.aliased}"


@dataclass
class Struct(Declaration):
    source: SourceLoc
    name: str
    attributes: List[Attribute] = field(default_factory=list)

    def add_attr(self, name: str, type: str) -> Attribute:
        attr = Attribute(name=name, type=type)
        self.attributes.append(attr)
        return attr

    def signature(self) -> str:
        return self.name

    def _members(self) -> List[str]:
        return [f"{a.name} :: {a.type}" for a in self.attributes]

    def display_form(self) -> str:
        return f"{self.name} {{ {', '.join(self._members())} }}"


@dataclass
class Class(Struct):
    methods: List[Function] = field(default_factory=list)

    def add_method(self, source: SourceLoc, return_type: str, name: str) -> Function:
        """Append a method and return it so its args can be filled in."""
        method = Function(source=source, return_type=return_type, name=name)
        self.methods.append(method)
        return method

    def _members(self) -> List[str]:
        return super()._members() + [m.display_form() for m in self.methods]


@dataclass
class Score:
    id: str
    score: int


@dataclass
class EntityAggregate:
    """All declarations found in one file, in source order."""

    functions: List[Function] = field(default_factory=list)
    typedefs: List[Typedef] = field(default_factory=list)
    structs: List[Struct] = field(default_factory=list)
    classes: List[Class] = field(default_factory=list)

    def add_function(self, function: Function) -> Function:
        self.functions.append(function)
        return function

    def add_typedef(self, typedef: Typedef) -> Typedef:
        self.typedefs.append(typedef)
        return typedef

    def add_struct(self, struct: Struct) -> Struct:
        self.structs.append(struct)
        return struct

    def add_class(self, klass: Class) -> Class:
        self.classes.append(klass)
        return klass

    def of(self, category: object) -> List[Declaration]:
        """Return the collection for *category* (a ``Category`` or its name)."""
        return getattr(self, Category.parse(category).value)

    def counts(self) -> Dict[str, int]:
        return {c.value: len(self.of(c)) for c in Category}
