"""Errors raised while compiling search criteria."""

from __future__ import annotations


class CriteriaError(ValueError):
    """Base class for errors detected by the criteria compiler."""


class DescriptorError(CriteriaError):
    """Raised when a descriptor type's field declarations cannot be turned into intents."""


class DescriptorAccessError(CriteriaError):
    """Raised when a descriptor field's runtime value cannot be read."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"cannot read descriptor field: {field_name}")
        self.field_name = field_name
