"""Error values, construction and inspection.

- Error: message with inline fields and a traced chain
- new/errorf/wrap/wrapf: construction with ``key, value`` fields
- is_/contains/contains_err/check: chain inspection
- to_json/stack_for_logger: structured export of the captured stacks
- join_errors: ``"; "``-joined error from many errors
"""

from .errors import (
    Error,
    check,
    contains,
    contains_err,
    errorf,
    is_,
    join_errors,
    join_messages,
    new,
    stack_for_logger,
    to_json,
    unwrap,
    wrap,
    wrapf,
)
from .fields import build_message, split_args, sprint, sprintf
from .trace import ChainTree, RootNode, Traced, WrapNode, as_type, chain_equal, render_chain, render_tree, walk

__all__ = [
    # Error value
    "Error", "unwrap", "check",
    # Construction
    "new", "errorf", "wrap", "wrapf",
    # Inspection
    "is_", "contains", "contains_err", "to_json", "stack_for_logger",
    # Joining
    "join_errors", "join_messages",
    # Fields
    "build_message", "split_args", "sprint", "sprintf",
    # Trace provider
    "Traced", "ChainTree", "RootNode", "WrapNode", "as_type", "chain_equal", "render_chain", "render_tree", "walk",
]
