"""
Lexer for cheats scripts.

Scripts follow the developer console convention of Valve games::

    // this is a comment
    # this is a comment as well
    cl_hello // without arg
    cl_hello Eray # with arg

The lexer scans the text against an ordered list of rules. At every
position the longest match wins and, among matches of equal length, the
rule declared first wins. Characters that match no rule are emitted as
single-character ``Ignorable`` tokens so a scan never aborts.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import logging
import re
from typing import Iterator, List, Optional, Pattern, Tuple, Union

from .tokens import Comment, Ignorable, Invocation

logger = logging.getLogger(__name__)

Token = Union[Invocation, Comment, Ignorable]

WHITESPACE = "whitespace"
COMMENT = "comment"
INVOCATION = "invocation"

# Declaration order is the tie-break order
RULES: List[Tuple[str, Pattern]] = [
    (WHITESPACE, re.compile(r"[ \t\r\n\f]+")),
    (COMMENT, re.compile(r"(?://|#)[^\n]*")),
    (INVOCATION, re.compile(r"[A-Za-z0-9_-]+(?: [A-Za-z0-9_-]+)*")),
]


def split_invocation(lexeme: str) -> Tuple[str, str]:
    """
    Split an invocation lexeme on its first space.

    Returns:
        ``(name, args)`` where ``args`` is the trimmed remainder, or an empty
        string when the lexeme holds a single word
    """
    name, _, args = lexeme.strip().partition(" ")
    return name, args.strip()


def comment_body(lexeme: str) -> str:
    """Strip the comment marker and trim the body."""
    marker = 2 if lexeme.startswith("//") else 1
    return lexeme[marker:].strip()


class Lexer:
    """
    Lazy token iterator over a script.

    A lexer holds the scan position for one pass over one text. Create a new
    lexer (or call ``tokenize``) to scan again.
    """

    def __init__(self, text: str, capture_comments: bool = False):
        """
        Initialize the lexer.

        Args:
            text: Script text to scan
            capture_comments: Emit Comment tokens instead of skipping comments
        """
        self.text = text
        self.capture_comments = capture_comments
        self._pos = 0

    def __iter__(self) -> "Lexer":
        return self

    def __next__(self) -> Token:
        text = self.text
        while self._pos < len(text):
            start = self._pos
            rule, end = self._longest_match(start)
            self._pos = end
            lexeme = text[start:end]
            span = (start, end)

            if rule == WHITESPACE:
                continue
            if rule == COMMENT:
                if not self.capture_comments:
                    logger.debug(f"Skipping comment at {start}")
                    continue
                return Comment(body=comment_body(lexeme), span=span)
            if rule == INVOCATION:
                name, args = split_invocation(lexeme)
                return Invocation(name=name, args=args, span=span)

            logger.debug(f"Unmatched input at {start}: {lexeme!r}")
            return Ignorable(text=lexeme, span=span)

        raise StopIteration

    def _longest_match(self, pos: int) -> Tuple[Optional[str], int]:
        best_rule: Optional[str] = None
        best_end = pos
        for rule, pattern in RULES:
            match = pattern.match(self.text, pos)
            if match and match.end() > best_end:
                best_rule, best_end = rule, match.end()

        if best_rule is None:
            return None, pos + 1
        return best_rule, best_end


def tokenize(text: str, capture_comments: bool = False) -> Iterator[Token]:
    """
    Tokenize a script.

    Args:
        text: Script text
        capture_comments: Emit Comment tokens instead of skipping comments

    Returns:
        A fresh lazy iterator of tokens
    """
    return Lexer(text, capture_comments=capture_comments)
