"""
Declaration-head predicates.

Each predicate takes one line of text and answers whether it opens a
declaration of a given kind. Predicates are grouped per language family
in the order they are tried; the first match wins.
"""

import re
from typing import Callable, Dict, Tuple

from structnav.schemas import ScopeKind

HeadPredicate = Callable[[str], bool]

# Words that look like `name(...) {` but never name a method.
CONTROL_KEYWORDS = frozenset({
    "if", "for", "while", "switch", "catch", "with", "return", "else",
    "do", "try", "typeof", "new", "await", "yield", "throw", "delete",
    "void", "in", "of", "instanceof", "case", "super", "import",
})

_QUALIFIERS = r"(?:(?:public|private|protected|static|readonly|abstract|override|async|get|set|export|default|declare)\s+)*"

# Brace family (line is stripped before testing)
_NAMED_FUNCTION = re.compile(
    r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*[\w$]+\s*[<(]"
)
_METHOD_HEAD = re.compile(
    r"^" + _QUALIFIERS + r"\*?([\w$]+)\s*(?:<[^>]*>)?\s*\(.*\)\s*(?::\s*[^{=]+?)?\s*(?:\{|=>)"
)
_ARROW_ASSIGNMENT = re.compile(
    r"^(?:export\s+)?(?:const|let|var)\s+[\w$]+\s*(?::\s*[^=]+)?=\s*(?:async\s*)?"
    r"(?:\(.*\)\s*(?::\s*[^=]+?)?\s*=>|[\w$]+\s*=>)"
)
_FUNCTION_EXPRESSION = re.compile(
    r"^(?:export\s+)?(?:(?:const|let|var)\s+)?[\w$.]+\s*(?::\s*[^=]+)?=\s*(?:async\s+)?function\b\s*\*?\s*[\w$]*\s*\("
)
_CLASS_HEAD = re.compile(
    r"^(?:export\s+)?(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?class\s+[\w$]+"
)
_INTERFACE_HEAD = re.compile(r"^(?:export\s+)?(?:declare\s+)?interface\s+[\w$]+")
_ENUM_HEAD = re.compile(r"^(?:export\s+)?(?:declare\s+)?(?:const\s+)?enum\s+[\w$]+")

# Indentation family (leading whitespace allowed)
_DEF_HEAD = re.compile(r"^\s*(?:async\s+)?def\s+\w+\s*\(")
_PY_CLASS_HEAD = re.compile(r"^\s*class\s+\w+")

# Extra heads recognised by the fallback family
_GENERIC_FUNCTION = re.compile(
    r"^(?:pub(?:\([\w:]+\))?\s+)?(?:const\s+)?(?:async\s+)?(?:unsafe\s+)?(?:fn|func|def)\b\s*(?:\([^)]*\)\s*)?[\w$]+\s*[<(]"
)
_GENERIC_STRUCT = re.compile(r"^(?:pub(?:\([\w:]+\))?\s+)?(?:type\s+[\w$]+\s+)?struct\b")
_GENERIC_TRAIT = re.compile(r"^(?:pub(?:\([\w:]+\))?\s+)?trait\s+[\w$]+")
_GENERIC_ENUM = re.compile(r"^(?:pub(?:\([\w:]+\))?\s+)?enum\s+[\w$]+")


def is_comment_line(text: str) -> bool:
    stripped = text.strip()
    return (
        stripped.startswith("//")
        or stripped.startswith("/*")
        or stripped.startswith("*")
        or stripped.startswith("#")
    )


def is_blank_line(text: str) -> bool:
    return text.strip() == ""


def is_named_function(text: str) -> bool:
    """`[export] [async] function name(`"""
    return bool(_NAMED_FUNCTION.match(text))


def is_method_head(text: str) -> bool:
    """`[qualifiers] name(...) {` or `name(...) =>`, excluding control-flow keywords."""
    match = _METHOD_HEAD.match(text)
    if not match:
        return False
    return match.group(1) not in CONTROL_KEYWORDS


def is_arrow_assignment(text: str) -> bool:
    """`const name = [async] (...) =>`"""
    return bool(_ARROW_ASSIGNMENT.match(text))


def is_function_expression(text: str) -> bool:
    """`name = [async] function (`"""
    return bool(_FUNCTION_EXPRESSION.match(text))


def is_class_head(text: str) -> bool:
    return bool(_CLASS_HEAD.match(text))


def is_interface_head(text: str) -> bool:
    return bool(_INTERFACE_HEAD.match(text))


def is_enum_head(text: str) -> bool:
    return bool(_ENUM_HEAD.match(text))


def is_def_head(text: str) -> bool:
    return bool(_DEF_HEAD.match(text))


def is_python_class_head(text: str) -> bool:
    return bool(_PY_CLASS_HEAD.match(text))


def is_generic_function(text: str) -> bool:
    """`fn name(`, `func (r *T) name(`, `def name(` in brace languages."""
    return bool(_GENERIC_FUNCTION.match(text))


def is_struct_head(text: str) -> bool:
    return bool(_GENERIC_STRUCT.match(text))


def is_trait_head(text: str) -> bool:
    return bool(_GENERIC_TRAIT.match(text))


def is_generic_enum(text: str) -> bool:
    return bool(_GENERIC_ENUM.match(text))


DeclarationRules = Dict[ScopeKind, Tuple[HeadPredicate, ...]]

BRACE_RULES: DeclarationRules = {
    ScopeKind.FUNCTION: (
        is_named_function,
        is_method_head,
        is_arrow_assignment,
        is_function_expression,
    ),
    ScopeKind.CLASS: (is_class_head,),
    ScopeKind.INTERFACE: (is_interface_head,),
    ScopeKind.ENUM: (is_enum_head,),
}

INDENTATION_RULES: DeclarationRules = {
    ScopeKind.FUNCTION: (is_def_head,),
    ScopeKind.CLASS: (is_python_class_head,),
    ScopeKind.INTERFACE: (),
    ScopeKind.ENUM: (),
}

FALLBACK_RULES: DeclarationRules = {
    ScopeKind.FUNCTION: BRACE_RULES[ScopeKind.FUNCTION] + (is_generic_function,),
    ScopeKind.CLASS: BRACE_RULES[ScopeKind.CLASS] + (is_struct_head,),
    ScopeKind.INTERFACE: BRACE_RULES[ScopeKind.INTERFACE] + (is_trait_head,),
    ScopeKind.ENUM: BRACE_RULES[ScopeKind.ENUM] + (is_generic_enum,),
}


def matches_any(text: str, predicates: Tuple[HeadPredicate, ...]) -> bool:
    return any(predicate(text) for predicate in predicates)


# Name extraction

_PY_FUNCTION_NAME = re.compile(r"def\s+(\w+)\s*\(")
_PY_CLASS_NAME = re.compile(r"class\s+(\w+)\s*(?:\(|:)")
_FALLBACK_NAME = re.compile(r"([\w$]+)\s*[(=]")
_GENERIC_FUNCTION_NAME = re.compile(r"\b(?:fn|func|def)\b\s*(?:\([^)]*\)\s*)?([\w$]+)\s*[<(]")


def extract_brace_name(text: str, kind: ScopeKind) -> str:
    """
    Name of a brace-family declaration: the word after the kind keyword,
    else the first word followed by `(` or `=`.
    """
    keyword = re.search(rf"\b{kind.value}\s+([\w$]+)", text, re.IGNORECASE)
    if keyword:
        return keyword.group(1)
    if kind is ScopeKind.FUNCTION:
        generic = _GENERIC_FUNCTION_NAME.search(text)
        if generic:
            return generic.group(1)
    if kind is ScopeKind.CLASS:
        struct = re.search(r"\b(?:type\s+([\w$]+)\s+struct|struct\s+([\w$]+))", text)
        if struct:
            return struct.group(1) or struct.group(2)
    if kind is ScopeKind.INTERFACE:
        trait = re.search(r"\btrait\s+([\w$]+)", text)
        if trait:
            return trait.group(1)
    fallback = _FALLBACK_NAME.search(text)
    if fallback:
        return fallback.group(1)
    return "unnamed"


def extract_indentation_name(text: str, kind: ScopeKind) -> str:
    if kind is ScopeKind.FUNCTION:
        match = _PY_FUNCTION_NAME.search(text)
    elif kind is ScopeKind.CLASS:
        match = _PY_CLASS_NAME.search(text)
    else:
        match = None
    return match.group(1) if match else "unnamed"
