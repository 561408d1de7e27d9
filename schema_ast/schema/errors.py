"""
Exceptions raised while turning a schema document into an AST.

All errors are fatal: parsing stops at the first one and no partial AST is
returned. Each exception carries the offending schema node (or AST node) on
its ``schema`` attribute so callers can report where the problem is.
"""

from typing import Any


class SchemaASTError(ValueError):
    """
    Base class for schema-to-AST failures.

    Attributes:
        schema: The node that caused the failure
    """

    def __init__(self, message: str, schema: Any = None):
        super().__init__(message)
        self.schema = schema


class UnresolvedReferenceError(SchemaASTError):
    """A ``$ref`` node reached the parser; refs must be dereferenced first."""


class MissingSuperTypeNameError(SchemaASTError):
    """An ``extends`` target produced an interface without a standalone name."""


class EnumLabelMismatchError(SchemaASTError):
    """``tsEnumNames`` and ``enum`` have different lengths."""


class DereferenceError(SchemaASTError):
    """A ``$ref`` pointer could not be resolved within the document."""
