"""Script tokenizer."""

from .lexer import Lexer, Token, comment_body, split_invocation, tokenize
from .tokens import Comment, Ignorable, Invocation

__all__ = [
    "Lexer",
    "Token",
    "tokenize",
    "split_invocation",
    "comment_body",
    "Invocation",
    "Comment",
    "Ignorable",
]
