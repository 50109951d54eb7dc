"""Tokenization engine for HTML to JSX conversion.

This module provides a fault-tolerant tokenizer that converts markup text into
tokens using a state machine that never fails on malformed input.

Key Components:
    HTMLTokenizer: Main tokenization class
    Token: Single token with its source position
    TokenType: Enumeration of all token types
    TokenPosition: Position tracking for diagnostics
    TokenizerState: State machine states
"""

from .tokenizer import (
    RAW_TEXT_ELEMENTS,
    HTMLTokenizer,
    Token,
    TokenizationResult,
    TokenizerState,
    TokenPosition,
    TokenRepair,
    TokenType,
)

__all__ = [
    "RAW_TEXT_ELEMENTS",
    "HTMLTokenizer",
    "Token",
    "TokenizationResult",
    "TokenizerState",
    "TokenPosition",
    "TokenRepair",
    "TokenType",
]
