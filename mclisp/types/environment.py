"""Operator environment for mclisp.

The Environment maps operator names to operations in two tiers: a builtin
table fixed at construction and a user table that `defun` extends. User
definitions shadow builtins of the same name. Each instance also carries the
evaluation depth counter and limit, so independent environments never share
state.
"""

from __future__ import annotations

from io import StringIO
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from mclisp import config
from mclisp.errors import McLispError
from mclisp.types.sexpr import List, SExpr

# An operation receives the environment and the whole call form, operator included.
Operation = Callable[["Environment", List], SExpr]


class Environment:
    """Two-tier mapping from operator names to operations."""

    __slots__ = (
        "builtins",
        "user",
        "max_depth",
        "strict",
        "depth",
    )

    def __init__(
        self,
        builtins: Optional[Mapping[str, Operation]] = None,
        *,
        max_depth: Optional[int] = None,
        strict: Optional[bool] = None,
    ):
        # Copy then freeze: later changes to the caller's mapping are not seen
        self.builtins: Mapping[str, Operation] = MappingProxyType(dict(builtins or {}))
        self.user: dict[str, Operation] = {}
        self.max_depth: int = max_depth if max_depth is not None else config.get_max_depth()
        self.strict: bool = strict if strict is not None else config.get_strict()
        self.depth: int = 0

    @classmethod
    def standard(cls, **kwargs) -> Environment:
        """Return a fresh environment holding the ten core operations."""
        from mclisp.builtin.env_builtin import BUILTINS

        return cls(BUILTINS, **kwargs)

    def define(self, name: str, op: Operation) -> None:
        """Bind `name` in the user table, replacing any previous definition.

        Raises McLispError if `name` is not a string or `op` is not callable.
        """
        if not isinstance(name, str) or not name:
            raise McLispError(f"Cannot define {name!r} as an operator name")
        if not callable(op):
            raise McLispError(f"Cannot bind {name!r} to non-callable {op!r}")
        self.user[name] = op

    def undefine(self, name: str) -> None:
        self.user.pop(name, None)

    def lookup(self, name: str) -> Optional[Operation]:
        """User table first, then builtins; None when the name is unbound."""
        op = self.user.get(name)
        if op is not None:
            return op
        return self.builtins.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.user or name in self.builtins

    def update(self, mapping: Mapping[str, Operation]) -> None:
        """Bulk-define a mapping of name -> operation in the user table."""
        for k, v in mapping.items():
            self.define(k, v)

    def _write_names(self, buffer: StringIO, table: Mapping[str, Operation]) -> None:
        buffer.write("{")
        buffer.write(", ".join(sorted(table)))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_names(buffer, self.user)
            buffer.write(" -> ")
            self._write_names(buffer, self.builtins)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment user=")
            self._write_names(buffer, self.user)
            buffer.write(f" builtins={len(self.builtins)} max_depth={self.max_depth}")
            if self.strict:
                buffer.write(" strict")
            buffer.write(">")
            return buffer.getvalue()
