"""Shared API models."""

from .base import BaseSchema, APIResponse, ErrorResponse

__all__ = ["BaseSchema", "APIResponse", "ErrorResponse"]
