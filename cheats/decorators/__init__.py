"""Decorators for declaring codes."""

from .code import CodeDefinition, code, collect_codes, get_code_definition

__all__ = ["code", "CodeDefinition", "collect_codes", "get_code_definition"]
