from .checkers import (
    Checker,
    ErrorFilter,
    Visitor,
    has_all_prefix,
    has_all_suffix,
    has_any_prefix,
    has_any_suffix,
    has_prefix,
    has_suffix,
    is_regular,
    skip_named_subtree,
    skip_permission_error,
)
from .walk_service import WalkService


__all__ = [
    'Checker',
    'ErrorFilter',
    'Visitor',
    'WalkService',
    'has_all_prefix',
    'has_all_suffix',
    'has_any_prefix',
    'has_any_suffix',
    'has_prefix',
    'has_suffix',
    'is_regular',
    'skip_named_subtree',
    'skip_permission_error',
]
