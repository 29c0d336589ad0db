"""Declaration extraction for C and C++ source files using Tree-sitter.

Walks the concrete syntax tree of a single file and collects functions,
typedefs, structs and classes into an ``EntityAggregate``, in the order
they appear in the source. Tree-sitter is error-tolerant, so files with
minor syntax errors still yield whatever declarations could be recognised.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .errors import ExtractionError
from .models import Class, EntityAggregate, Function, SourceLoc, Struct, Typedef

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Language <-> file-extension mapping
# ---------------------------------------------------------------------------
LANGUAGE_MAP: Dict[str, str] = {
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".hh": "cpp",
    ".hpp": "cpp",
    ".hxx": "cpp",
}

_GRAMMAR_MODULES: Dict[str, str] = {
    "c": "tree_sitter_c",
    "cpp": "tree_sitter_cpp",
}

_NAME_TYPES = {
    "identifier",
    "field_identifier",
    "type_identifier",
    "qualified_identifier",
    "destructor_name",
    "operator_name",
    "template_function",
}

_TAGGED_TYPES = {
    "struct_specifier": "struct",
    "union_specifier": "union",
    "enum_specifier": "enum",
    "class_specifier": "class",
}

ANONYMOUS = "(anonymous)"


def detect_language(file_path: Path) -> str:
    lang = LANGUAGE_MAP.get(file_path.suffix.lower())
    if lang is None:
        raise ExtractionError(
            f"Cannot infer language for '{file_path.name}'; pass one of: "
            f"{', '.join(sorted(_GRAMMAR_MODULES))}."
        )
    return lang


def _load_parser(lang: str) -> Any:
    mod_name = _GRAMMAR_MODULES.get(lang)
    if mod_name is None:
        raise ExtractionError(f"Unsupported language '{lang}'.")
    try:
        from tree_sitter import Language, Parser as TSParser  # type: ignore[import-untyped]

        mod = importlib.import_module(mod_name)
    except ImportError as exc:
        raise ExtractionError(
            f"Grammar package '{mod_name}' is not installed. "
            f"Install with: pip install tree-sitter {mod_name.replace('_', '-')}"
        ) from exc
    logger.debug("Loaded tree-sitter parser for %s", lang)
    return TSParser(Language(mod.language()))


# ===================================================================
# Public API
# ===================================================================

class DeclarationExtractor:
    """Collect declarations from one C or C++ file.

    The extractor holds explicit handles to the record being built, so
    args, fields and methods always land on the right owner.
    """

    def __init__(self, lang: str) -> None:
        self.lang = lang
        self._parser = _load_parser(lang)

    def extract_file(self, file_path: Path) -> EntityAggregate:
        try:
            source = file_path.read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Cannot read '{file_path}': {exc}") from exc
        return self.extract_source(source, str(file_path))

    def extract_source(self, source: bytes | str, filename: str = "<input>") -> EntityAggregate:
        if isinstance(source, str):
            source = source.encode("utf-8")
        tree = self._parser.parse(source)
        root = tree.root_node

        errors = _count_errors(root)
        if errors:
            logger.warning("%s: %d syntax error(s); results may be incomplete", filename, errors)

        entities = EntityAggregate()
        _Walker(filename, entities).walk(root)
        logger.info(
            "Extracted from %s: %s",
            filename,
            ", ".join(f"{n} {k}" for k, n in entities.counts().items()),
        )
        return entities


def extract(file_path: Path, lang: Optional[str] = None) -> EntityAggregate:
    """Parse *file_path* and return every declaration it contains."""
    return DeclarationExtractor(lang or detect_language(file_path)).extract_file(file_path)


# ===================================================================
# Tree walker
# ===================================================================

class _Walker:
    def __init__(self, filename: str, entities: EntityAggregate) -> None:
        self.filename = filename
        self.entities = entities

    def walk(self, node: Any) -> None:
        for child in node.children:
            self._visit(child)

    def _visit(self, node: Any) -> None:
        kind = node.type
        if kind in ("function_definition", "declaration"):
            self._specifier(node.child_by_field_name("type"))
            self._function(node)
        elif kind == "type_definition":
            self._typedef(node)
        elif kind in _TAGGED_TYPES:
            self._specifier(node)
        elif kind == "compound_statement":
            return
        else:
            # namespaces, extern "C", templates, preprocessor blocks, ...
            self.walk(node)

    # -- declarations ---------------------------------------------------

    def _location(self, node: Any) -> SourceLoc:
        row, col = node.start_point[0], node.start_point[1]
        return SourceLoc(self.filename, row + 1, col + 1)

    def _function(self, node: Any) -> None:
        # `int x, f(int), g(char);` declares two functions
        for declarator in node.children_by_field_name("declarator"):
            func_decl = _function_declarator(declarator)
            if func_decl is None:
                continue
            name_node = func_decl.child_by_field_name("declarator")
            if name_node.type == "qualified_identifier":
                # out-of-line member definitions are not free functions
                continue
            fn = self.entities.add_function(Function(
                source=self._location(name_node),
                return_type=_return_type(node, declarator, func_decl),
                name=_text(name_node),
            ))
            _fill_args(fn, func_decl)

    def _typedef(self, node: Any) -> None:
        type_node = node.child_by_field_name("type")
        self._specifier(type_node)
        base = _base_type(node)
        for declarator in node.children_by_field_name("declarator"):
            name_node = _declarator_name(declarator)
            if name_node is None:
                continue
            self.entities.add_typedef(Typedef(
                source=self._location(name_node),
                alias=_text(name_node),
                aliased=_spell(base, _declarator_suffix(declarator)),
            ))

    def _specifier(self, node: Any) -> None:
        """Record a struct or class definition and anything nested in it."""
        if node is None or node.type not in ("struct_specifier", "class_specifier"):
            return
        body = node.child_by_field_name("body")
        if body is None:
            return
        name_node = node.child_by_field_name("name")
        loc = self._location(name_node if name_node is not None else node)
        name = _text(name_node) if name_node is not None else ANONYMOUS

        if node.type == "class_specifier":
            record: Struct = self.entities.add_class(Class(source=loc, name=name))
        else:
            record = self.entities.add_struct(Struct(source=loc, name=name))
        self._members(record, body)

    def _members(self, record: Struct, body: Any) -> None:
        for child in body.children:
            if child.type == "template_declaration":
                self._members(record, child)
                continue
            if child.type in _TAGGED_TYPES:
                self._specifier(child)
                continue
            if child.type not in ("field_declaration", "declaration", "function_definition"):
                if child.type.startswith("preproc_"):
                    self._members(record, child)
                continue

            self._specifier(child.child_by_field_name("type"))
            base = _base_type(child)
            for declarator in child.children_by_field_name("declarator"):
                func_decl = _function_declarator(declarator)
                if func_decl is not None:
                    if isinstance(record, Class):
                        self._method(record, child, declarator, func_decl)
                    continue
                # static data members are variables, not fields
                if child.type != "field_declaration" or _has_storage(child, "static"):
                    continue
                name_node = _declarator_name(declarator)
                if name_node is not None:
                    record.add_attr(_text(name_node), _spell(base, _declarator_suffix(declarator)))

    def _method(self, klass: Class, node: Any, declarator: Any, func_decl: Any) -> None:
        name_node = func_decl.child_by_field_name("declarator")
        method = klass.add_method(
            self._location(name_node),
            _return_type(node, declarator, func_decl),
            _text(name_node),
        )
        _fill_args(method, func_decl)


# ===================================================================
# Shared helpers
# ===================================================================

def _text(node: Any) -> str:
    return " ".join(node.text.decode("utf-8", errors="replace").split())


def _count_errors(node: Any) -> int:
    if node.type == "ERROR" or node.is_missing:
        return 1
    if not node.has_error:
        return 0
    return sum(_count_errors(child) for child in node.children)


def _inner_declarator(node: Any) -> Optional[Any]:
    inner = node.child_by_field_name("declarator")
    if inner is not None:
        return inner
    # reference and parenthesized declarators carry no field name
    for child in node.named_children:
        if child.type != "type_qualifier":
            return child
    return None


def _has_storage(node: Any, keyword: str) -> bool:
    return any(
        c.type == "storage_class_specifier" and _text(c) == keyword for c in node.children
    )


def _function_declarator(declarator: Optional[Any]) -> Optional[Any]:
    """Return the function_declarator that names a function, if *declarator* declares one.

    Pointer and parenthesized wrappers are looked through, so
    ``(*signal(int, void (*)(int)))(int)`` yields the declarator of
    ``signal``. A declarator whose only function_declarator wraps a
    parenthesized pointer, as in ``int (*handler)(int)``, declares a
    variable and yields None.
    """
    while declarator is not None:
        if declarator.type == "function_declarator":
            inner = declarator.child_by_field_name("declarator")
            if inner is not None and inner.type in _NAME_TYPES:
                return declarator
        elif declarator.type not in (
            "pointer_declarator",
            "reference_declarator",
            "attributed_declarator",
            "parenthesized_declarator",
        ):
            return None
        declarator = _inner_declarator(declarator)
    return None


def _declarator_name(node: Optional[Any]) -> Optional[Any]:
    while node is not None:
        if node.type in _NAME_TYPES:
            return node
        node = _inner_declarator(node)
    return None


def _declarator_suffix(node: Optional[Any], stop: Optional[Any] = None) -> str:
    """Spell the pointer/reference/array part of a declarator, e.g. ``"**"``.

    Spelling ends at the declared name, or at *stop* when given.
    """
    prefix, suffix = "", ""
    while node is not None and node.type not in _NAME_TYPES:
        if stop is not None and node == stop:
            break
        kind = node.type
        if kind in ("pointer_declarator", "abstract_pointer_declarator"):
            prefix += "*"
        elif kind in ("reference_declarator", "abstract_reference_declarator"):
            prefix += node.children[0].text.decode("utf-8")
        elif kind in ("array_declarator", "abstract_array_declarator"):
            size = node.child_by_field_name("size")
            suffix = f"[{_text(size) if size is not None else ''}]" + suffix
        elif kind in ("function_declarator", "abstract_function_declarator"):
            params = node.child_by_field_name("parameters")
            inner = node.child_by_field_name("declarator")
            params_text = _text(params) if params is not None else "()"
            if inner is not None and inner.type in (
                "parenthesized_declarator",
                "abstract_parenthesized_declarator",
            ):
                suffix = f"({_declarator_suffix(inner, stop).strip()}){params_text}" + suffix
                break
            suffix = params_text + suffix
        node = _inner_declarator(node)
    return " ".join(part for part in (prefix, suffix) if part)


def _spell(base: str, suffix: str) -> str:
    return f"{base} {suffix}" if suffix else base


def _base_type(node: Any) -> str:
    """Spell the specifier part of a declaration: qualifiers plus type."""
    qualifiers = [_text(c) for c in node.children if c.type == "type_qualifier"]
    type_node = node.child_by_field_name("type")
    if type_node is None:
        return " ".join(qualifiers)
    if type_node.type in _TAGGED_TYPES:
        name_node = type_node.child_by_field_name("name")
        name = _text(name_node) if name_node is not None else ANONYMOUS
        spelled = f"{_TAGGED_TYPES[type_node.type]} {name}"
    else:
        spelled = _text(type_node)
    return " ".join(qualifiers + [spelled])


def _return_type(node: Any, declarator: Any, func_decl: Any) -> str:
    base = _base_type(node)
    if not base:
        # constructors and destructors
        return "void"
    # everything wrapping the function's own declarator belongs to the
    # return type: `char *f()` gives "char *", `int (*f(void))(int)` gives
    # "int (*)(int)"
    return _spell(base, _declarator_suffix(declarator, stop=func_decl))


def _params(func_decl: Any) -> List[Tuple[str, str]]:
    params = func_decl.child_by_field_name("parameters")
    if params is None:
        return []
    out: List[Tuple[str, str]] = []
    for param in params.named_children:
        if param.type not in ("parameter_declaration", "optional_parameter_declaration"):
            continue
        declarator = param.child_by_field_name("declarator")
        name_node = _declarator_name(declarator)
        base = _base_type(param)
        if base == "void" and declarator is None:
            continue
        out.append((
            _text(name_node) if name_node is not None else "",
            _spell(base, _declarator_suffix(declarator)),
        ))
    return out


def _fill_args(fn: Function, func_decl: Any) -> None:
    for name, type_ in _params(func_decl):
        fn.add_arg(name, type_)
