"""Rule file persistence."""
from __future__ import annotations

from .store import (
    DEFAULT_RULE_SUFFIX,
    RULE_FILE_SUFFIXES,
    RuleStore,
    is_rule_file_name,
    parse_rule,
    safe_rule_file_name,
    template_rule,
)

__all__ = [
    "DEFAULT_RULE_SUFFIX",
    "RULE_FILE_SUFFIXES",
    "RuleStore",
    "is_rule_file_name",
    "parse_rule",
    "safe_rule_file_name",
    "template_rule",
]
