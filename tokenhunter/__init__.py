from __future__ import annotations

from .migration import analyze_context, batch_migrate, get_migration_suggestion
from .results import ValidationReport
from .tokens import TokenDefinitionError, TokenDefinitions, load_token_definitions
from .validate import validate_tokens

__version__ = "0.1.0"

__all__ = [
    "TokenDefinitionError",
    "TokenDefinitions",
    "ValidationReport",
    "analyze_context",
    "batch_migrate",
    "get_migration_suggestion",
    "load_token_definitions",
    "validate_tokens",
]
