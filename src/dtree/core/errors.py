from __future__ import annotations

"""Contract violations raised by the tree core.

Callers get these when they misuse the API (attaching under a terminal,
retyping a non-terminal node, evaluating an unvalidated tree). Unknown ids
are not errors: operations report them by returning ``False``.
"""

from pydantic import ValidationError

from dtree.utils.error_formatting import format_validation_errors


class TreeContractError(RuntimeError):
    """Wraps a contract violation with the id of the offending node."""

    def __init__(self, node_id: int, message: str, *, cause: Exception | None = None):
        self.node_id = node_id
        self.message = message
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        base = f"{self.message} (node {self.node_id})"
        if isinstance(self.cause, ValidationError):
            detail = format_validation_errors(self.cause.errors())
            return f"{base}: {detail}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    def __str__(self) -> str:
        return self._build_message()


class TerminalChildError(TreeContractError):
    """A child was attached to a terminal node."""


class RetypeError(TreeContractError):
    """A node that is not terminal was retyped, or the target type is unknown."""


class ExpectedValueError(TreeContractError):
    """Backward induction hit a chance branch without a usable probability."""


class InvalidUpdateError(TreeContractError):
    """A partial update carried fields the node cannot accept."""


__all__ = [
    "ExpectedValueError",
    "InvalidUpdateError",
    "RetypeError",
    "TerminalChildError",
    "TreeContractError",
]
