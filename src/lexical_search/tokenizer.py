"""
Tokenizer for lexical search.

Tokenization pipeline:
1. Lowercase conversion (skipped in case-sensitive mode)
2. Replace everything except letters, digits, whitespace and hyphens with spaces
3. Split on whitespace runs
4. Drop single-character tokens

No stemming or stopword removal: the same pipeline is applied to queries and
documents, so exact surface forms are what get matched.
"""

import re
from typing import List, Optional

# Underscore is part of \w but is not a letter or digit
_NON_TOKEN_CHARS = re.compile(r"[^\w\s-]|_")


def tokenize(text: Optional[str], case_sensitive: bool = False) -> List[str]:
    """
    Tokenize text for BM25 scoring.

    Args:
        text: Input text (None is treated as empty)
        case_sensitive: Keep original casing when True

    Returns:
        List of tokens longer than one character

    Examples:
        >>> tokenize("Kubernetes-based deployment strategies!")
        ['kubernetes-based', 'deployment', 'strategies']

        >>> tokenize("user@example.com a b")
        ['user', 'example', 'com']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []

    normalized = text if case_sensitive else text.lower()
    normalized = _NON_TOKEN_CHARS.sub(" ", normalized)

    return [token for token in normalized.split() if len(token) > 1]
