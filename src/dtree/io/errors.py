from __future__ import annotations

"""Errors raised while reading tree definition files."""

import os

import yaml
from pydantic import ValidationError

from dtree.utils.error_formatting import format_validation_errors


class LoaderError(RuntimeError):
    """A tree definition could not be read, with the file it came from."""

    def __init__(self, file_path: str, message: str, *, cause: Exception | None = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        base = f"{self.message} ({self._relative_path(self.file_path)})"
        if isinstance(self.cause, ValidationError):
            return f"{base}: {format_validation_errors(self.cause.errors())}"
        if isinstance(self.cause, yaml.MarkedYAMLError) and self.cause.problem_mark is not None:
            mark = self.cause.problem_mark
            return f"{base}: line {mark.line + 1}, column {mark.column + 1}: {self.cause.problem}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    @staticmethod
    def _relative_path(path: str) -> str:
        if path.startswith("<"):
            return path
        try:
            return os.path.relpath(path)
        except ValueError:  # pragma: no cover - different drive on Windows
            return path

    def __str__(self) -> str:
        return self._build_message()
