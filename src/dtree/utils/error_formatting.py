"""Shared error message formatting utilities."""

import math
from typing import Iterable, List, Optional

# Number of pydantic errors spelled out before the rest are summarised.
MAX_REPORTED_ERRORS = 3


def format_validation_errors(errors: Iterable[dict], limit: int = MAX_REPORTED_ERRORS) -> str:
    """
    Condense pydantic validation errors into a single line.

    Args:
        errors: Output of ``ValidationError.errors()``
        limit: How many errors to spell out before summarising the rest

    Returns:
        Message like "tree.children.0.type: Input should be ...; ... (2 more)"
    """
    error_list = list(errors)
    snippets = []
    for err in error_list:
        loc = ".".join(str(entry) for entry in err.get("loc", [])) or "<root>"
        msg = err.get("msg") or err.get("type") or "validation error"
        snippets.append(f"{loc}: {msg}")
        if len(snippets) >= limit:
            break
    remaining = len(error_list) - len(snippets)
    if remaining > 0:
        snippets.append(f"... ({remaining} more)")
    return "; ".join(snippets)


def format_distribution_error(label: str, node_id: int, probabilities: List[Optional[float]]) -> str:
    """
    Format the reason a chance node's distribution is rejected.

    Returns:
        Message like "Go (#1): probabilities [0.2, missing] sum to 0.2"
    """
    shown = ", ".join("missing" if p is None else f"{p:g}" for p in probabilities)
    known = [p for p in probabilities if p is not None]
    total = math.fsum(known)
    name = label or "<blank>"
    if len(known) != len(probabilities):
        return f"{name} (#{node_id}): probabilities [{shown}] have missing entries"
    out_of_range = [p for p in known if not 0.0 <= p <= 1.0]
    if out_of_range:
        return f"{name} (#{node_id}): probabilities [{shown}] fall outside [0, 1]"
    return f"{name} (#{node_id}): probabilities [{shown}] sum to {total:g}"
