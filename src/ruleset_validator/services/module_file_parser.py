"""MODULE.bazel parsing — recover the module's own name from its declaration.

MODULE.bazel is Starlark.  The module's identity lives in the keyword
arguments of the single top-level ``module(...)`` call, while sibling calls
such as ``bazel_dep(name = ...)`` and anything nested inside ``module(...)``
carry ``name`` fields that refer to other things.  A first-match regex would
pick those up, so the file is tokenized and scanned with a small state
machine that tracks bracket depth:

* ``OUTSIDE``       — not inside ``module(...)``
* ``MODULE_FIELDS`` — directly inside ``module(...)``; commas split fields
* ``NESTED``        — inside any bracket opened within ``module(...)``

Only ``name = "<string>"`` seen in ``MODULE_FIELDS`` counts.
"""

from __future__ import annotations

import ast
import re
from dataclasses import dataclass, field
from enum import Enum

from ruleset_validator.domain.entities import ModuleDeclaration
from ruleset_validator.domain.exceptions import InvalidModuleFileError

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>[ \t\f\r\n]+|\\\r?\n)
    | (?P<comment>\#[^\n]*)
    | (?P<string>
          (?:[rR][bB]?|[bB][rR]?)?
          (?:'''(?:\\.|[^\\])*?'''
            |\"\"\"(?:\\.|[^\\])*?\"\"\"
            |'(?:\\.|[^\\'\n])*'
            |"(?:\\.|[^\\"\n])*"
          )
      )
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<number>[0-9][0-9A-Za-z_.]*)
    | (?P<op>\*\*|==|!=|<=|>=|//|->|[-+*/%=<>!(),.\[\]{}:;|&^~@])
    """,
    re.VERBOSE | re.DOTALL,
)

_BRACKETS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
_CLOSERS: frozenset[str] = frozenset(_BRACKETS.values())

_MODULE_CALL = "module"
_NAME_FIELD = "name"


# ── Tokens ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Token:
    kind: str  # "string", "name", "number" or "op"
    value: str
    line: int

    def is_op(self, *values: str) -> bool:
        return self.kind == "op" and self.value in values


def tokenize(text: str) -> list[Token]:
    """Split Starlark source into tokens, dropping whitespace and comments."""
    tokens: list[Token] = []
    pos = 0
    line = 1
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise InvalidModuleFileError(
                f"Unexpected input at line {line}: {text[pos : pos + 10]!r}"
            )
        kind = match.lastgroup
        value = match.group()
        if kind not in ("ws", "comment"):
            tokens.append(Token(kind=kind, value=value, line=line))  # type: ignore[arg-type]
        line += value.count("\n")
        pos = match.end()
    return tokens


def _string_value(token: Token) -> str:
    """Decode a string literal token."""
    literal = token.value
    if literal[0] in "bB" or literal[:2].lower() == "rb":
        raise InvalidModuleFileError(
            f"Line {token.line}: bytes literals are not valid here"
        )
    try:
        value = ast.literal_eval(literal)
    except (SyntaxError, ValueError) as exc:
        raise InvalidModuleFileError(
            f"Line {token.line}: malformed string literal {literal!r}"
        ) from exc
    return str(value)


# ── Declaration scan ────────────────────────────────────────────────────────


class _State(Enum):
    OUTSIDE = "outside"
    MODULE_FIELDS = "module_fields"
    NESTED = "nested"


@dataclass(slots=True)
class _Arguments:
    """Arguments of the ``module(...)`` call, split on depth-zero commas."""

    line: int
    items: list[list[Token]] = field(default_factory=list)
    current: list[Token] = field(default_factory=list)

    def close_item(self) -> None:
        if self.current:
            self.items.append(self.current)
        self.current = []


def _is_module_call(tokens: list[Token], paren_index: int) -> bool:
    """``module(`` — but not ``x.module(`` or ``def module(``."""
    if paren_index < 1:
        return False
    callee = tokens[paren_index - 1]
    if callee.kind != "name" or callee.value != _MODULE_CALL:
        return False
    if paren_index >= 2:
        before = tokens[paren_index - 2]
        if before.is_op(".") or (before.kind == "name" and before.value == "def"):
            return False
    return True


def _scan_module_arguments(tokens: list[Token]) -> _Arguments:
    state = _State.OUTSIDE
    stack: list[Token] = []
    found: _Arguments | None = None

    for index, token in enumerate(tokens):
        if token.kind == "op" and token.value in _BRACKETS:
            if state is _State.OUTSIDE:
                if not stack and token.value == "(" and _is_module_call(tokens, index):
                    if found is not None:
                        raise InvalidModuleFileError(
                            f"Line {token.line}: more than one module() declaration "
                            f"(first at line {found.line})"
                        )
                    found = _Arguments(line=tokens[index - 1].line)
                    state = _State.MODULE_FIELDS
                stack.append(token)
                continue
            stack.append(token)
            found.current.append(token)  # type: ignore[union-attr]
            state = _State.NESTED
            continue

        if token.kind == "op" and token.value in _CLOSERS:
            if not stack or _BRACKETS[stack[-1].value] != token.value:
                raise InvalidModuleFileError(
                    f"Line {token.line}: unbalanced {token.value!r}"
                )
            stack.pop()
            if state is _State.MODULE_FIELDS:
                found.close_item()  # type: ignore[union-attr]
                state = _State.OUTSIDE
            elif state is _State.NESTED:
                found.current.append(token)  # type: ignore[union-attr]
                if len(stack) == 1:
                    state = _State.MODULE_FIELDS
            continue

        if state is _State.MODULE_FIELDS and token.is_op(","):
            found.close_item()  # type: ignore[union-attr]
        elif state is not _State.OUTSIDE:
            found.current.append(token)  # type: ignore[union-attr]

    if stack:
        opener = stack[-1]
        raise InvalidModuleFileError(
            f"Line {opener.line}: {opener.value!r} is never closed"
        )
    if found is None:
        raise InvalidModuleFileError("No module() declaration found")
    return found


# ── Public API ──────────────────────────────────────────────────────────────


def parse_module_declaration(text: str) -> ModuleDeclaration:
    """Parse MODULE.bazel *text* and return its top-level ``module()`` declaration.

    Raises :class:`InvalidModuleFileError` if the file cannot be tokenized,
    its brackets do not balance, there is not exactly one top-level
    ``module()`` call, or that call has no non-empty string ``name`` field.
    """
    arguments = _scan_module_arguments(tokenize(text))

    keywords: dict[str, list[Token]] = {}
    for item in arguments.items:
        if len(item) < 2 or item[0].kind != "name" or not item[1].is_op("="):
            continue
        key = item[0].value
        if key in keywords:
            raise InvalidModuleFileError(
                f"Line {item[0].line}: module() field {key!r} given more than once"
            )
        keywords[key] = item[2:]

    string_fields: dict[str, str] = {}
    for key, value_tokens in keywords.items():
        if len(value_tokens) != 1 or value_tokens[0].kind != "string":
            continue
        try:
            string_fields[key] = _string_value(value_tokens[0])
        except InvalidModuleFileError:
            if key == _NAME_FIELD:
                raise

    if _NAME_FIELD not in keywords:
        raise InvalidModuleFileError(
            f"module() declaration at line {arguments.line} has no name field"
        )
    if _NAME_FIELD not in string_fields:
        raise InvalidModuleFileError(
            f"module() name at line {arguments.line} must be a single string literal"
        )
    name = string_fields[_NAME_FIELD].strip()
    if not name:
        raise InvalidModuleFileError(
            f"module() name at line {arguments.line} is empty"
        )

    return ModuleDeclaration(name=name, line=arguments.line, string_fields=string_fields)


def parse_module_name(text: str) -> str:
    """Return the module name declared by MODULE.bazel *text*."""
    return parse_module_declaration(text).name
