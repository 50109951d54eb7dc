"""HTML tokenization with a never-fail state machine.

This module turns markup text into a flat list of tokens. Every input string
produces a token list: incomplete constructs at end of input are resolved by
documented rules and reported as :class:`TokenRepair` records instead of
errors.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from html_to_jsx_transform.shared.errors import ResourceExhaustedError

# Elements whose content is character data up to the matching end tag
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

_MS_PER_SECOND = 1000.0
_RAW_TEXT_END_SLACK = 64  # Whitespace tolerated between "</script" and ">"

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """HTML token types produced by the tokenizer."""

    TAG_START = auto()      # "<" for an open tag, "</" for a close tag
    TAG_NAME = auto()       # Element name as written in the source
    ATTR_NAME = auto()      # Attribute name as written in the source
    ATTR_VALUE = auto()     # Attribute value without its quotes
    TAG_END = auto()        # ">" or "/>"
    TEXT = auto()           # Character data, including raw text content
    COMMENT = auto()        # <!-- ... --> and bogus comments
    CDATA = auto()          # <![CDATA[ ... ]]>
    DOCTYPE = auto()        # <!DOCTYPE ...>


class TokenizerState(Enum):
    """State machine states for HTML tokenization."""

    TEXT_CONTENT = auto()
    TAG_OPENING = auto()            # After "<"
    TAG_CLOSING = auto()            # After "</"
    TAG_NAME = auto()
    CLOSE_TAG_NAME = auto()
    AFTER_CLOSE_TAG_NAME = auto()   # Anything up to ">" in a close tag is ignored
    BEFORE_ATTR_NAME = auto()
    ATTR_NAME = auto()
    AFTER_ATTR_NAME = auto()
    BEFORE_ATTR_VALUE = auto()
    ATTR_VALUE_QUOTED = auto()
    ATTR_VALUE_UNQUOTED = auto()
    SELF_CLOSING_START = auto()     # After "/" inside a tag
    MARKUP_DECLARATION = auto()     # After "<!"
    COMMENT_CONTENT = auto()
    BOGUS_COMMENT = auto()
    DOCTYPE = auto()
    CDATA_CONTENT = auto()
    RAW_TEXT = auto()


# States in which characters belong to a tag that is not yet committed
_TAG_STATES = frozenset({
    TokenizerState.TAG_OPENING,
    TokenizerState.TAG_CLOSING,
    TokenizerState.TAG_NAME,
    TokenizerState.CLOSE_TAG_NAME,
    TokenizerState.AFTER_CLOSE_TAG_NAME,
    TokenizerState.BEFORE_ATTR_NAME,
    TokenizerState.ATTR_NAME,
    TokenizerState.AFTER_ATTR_NAME,
    TokenizerState.BEFORE_ATTR_VALUE,
    TokenizerState.ATTR_VALUE_QUOTED,
    TokenizerState.ATTR_VALUE_UNQUOTED,
    TokenizerState.SELF_CLOSING_START,
})

_DECLARATION_COMMENT = "--"
_DECLARATION_CDATA = "[CDATA["
_DECLARATION_DOCTYPE = "DOCTYPE"


@dataclass(frozen=True)
class TokenPosition:
    """Position information for tokens."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def to_dict(self) -> dict:
        return {"line": self.line, "column": self.column, "offset": self.offset}


@dataclass
class TokenRepair:
    """Information about a repair made while tokenizing malformed markup."""

    repair_type: str
    description: str
    original_content: str
    repaired_content: str
    position: Optional[TokenPosition] = None


@dataclass
class Token:
    """Represents a single token with its source position."""

    type: TokenType
    value: str
    position: TokenPosition

    @property
    def is_tag_part(self) -> bool:
        """Check if this token is part of a tag."""
        return self.type in (
            TokenType.TAG_START,
            TokenType.TAG_NAME,
            TokenType.ATTR_NAME,
            TokenType.ATTR_VALUE,
            TokenType.TAG_END,
        )


@dataclass
class TokenizationResult:
    """Result of tokenization with metadata."""

    tokens: List[Token]
    repairs: List[TokenRepair] = field(default_factory=list)
    character_count: int = 0
    processing_time_ms: float = 0.0

    @property
    def token_count(self) -> int:
        """Get the total number of tokens."""
        return len(self.tokens)

    @property
    def repair_count(self) -> int:
        """Get the number of repairs applied."""
        return len(self.repairs)


def _is_tag_name_start(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _ends_with(buffer: List[str], suffix: str) -> bool:
    return "".join(buffer[-len(suffix):]) == suffix


class HTMLTokenizer:
    """HTML tokenizer with a fault-tolerant state machine.

    Converts markup into tokens one character at a time. Tags are buffered
    until their closing ``>`` so that a tag cut off by the end of input can be
    returned as literal text. Buffers are character lists joined once per
    token, so tokenizing stays linear in the input length.
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        max_input_length: Optional[int] = None
    ) -> None:
        """Initialize the tokenizer.

        Args:
            correlation_id: Optional correlation ID for tracking conversions
            max_input_length: Reject inputs longer than this many characters
        """
        self.correlation_id = correlation_id
        self.max_input_length = max_input_length
        self._reset_state()

    def _reset_state(self) -> None:
        """Reset tokenizer state for new processing."""
        self.state = TokenizerState.TEXT_CONTENT
        self.tokens: List[Token] = []
        self.repairs: List[TokenRepair] = []

        self.text_buffer: List[str] = []
        self.name_buffer: List[str] = []
        self.value_buffer: List[str] = []
        self.markup_buffer: List[str] = []
        self.quote_char: Optional[str] = None
        self.raw_text_tag: Optional[str] = None

        # Tag in progress: its source text and the tokens it will commit
        self.tag_source: List[str] = []
        self.pending_tag_tokens: List[Token] = []

        self._line = 1
        self._column = 1
        self._offset = 0
        self._token_start = TokenPosition(1, 1, 0)
        self._tag_start = TokenPosition(1, 1, 0)

    def tokenize(self, html: str) -> TokenizationResult:
        """Tokenize markup text.

        Args:
            html: Markup to tokenize

        Returns:
            TokenizationResult with tokens and any repairs applied

        Raises:
            ResourceExhaustedError: If the input exceeds ``max_input_length``
        """
        start_time = time.perf_counter()

        if self.max_input_length is not None and len(html) > self.max_input_length:
            raise ResourceExhaustedError(
                f"Input of {len(html)} characters exceeds the limit of "
                f"{self.max_input_length}",
                resource="input_length",
                limit=self.max_input_length,
                observed=len(html),
            )

        self._reset_state()

        logger.debug(
            "Starting tokenization",
            extra={
                "component": "html_tokenizer",
                "correlation_id": self.correlation_id,
                "char_count": len(html),
            }
        )

        for char in html:
            self._process_character(char)
        self._finish()

        result = TokenizationResult(
            tokens=self.tokens,
            repairs=self.repairs,
            character_count=len(html),
            processing_time_ms=(time.perf_counter() - start_time) * _MS_PER_SECOND,
        )

        logger.debug(
            "Tokenization completed",
            extra={
                "component": "html_tokenizer",
                "correlation_id": self.correlation_id,
                "token_count": result.token_count,
                "repair_count": result.repair_count,
            }
        )

        return result

    def _position(self) -> TokenPosition:
        return TokenPosition(self._line, self._column, self._offset)

    def _update_position(self, char: str) -> None:
        self._offset += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

    def _process_character(self, char: str) -> None:
        """Process a single character through the state machine."""
        if self.state in _TAG_STATES:
            self.tag_source.append(char)

        handler = self._handlers[self.state]
        handler(self, char)

        self._update_position(char)

    # Emission helpers

    def _emit(self, token_type: TokenType, value: str, position: TokenPosition) -> None:
        self.tokens.append(Token(type=token_type, value=value, position=position))

    def _emit_pending(self, token_type: TokenType, value: str) -> None:
        self.pending_tag_tokens.append(
            Token(type=token_type, value=value, position=self._token_start)
        )

    def _emit_markup(self, token_type: TokenType, value: str) -> None:
        self._emit(token_type, value, self._tag_start)
        self.markup_buffer = []
        self.state = TokenizerState.TEXT_CONTENT

    def _flush_text(self) -> None:
        if self.text_buffer:
            self._emit(TokenType.TEXT, "".join(self.text_buffer), self._token_start)
            self.text_buffer = []

    def _append_text(self, char: str) -> None:
        if not self.text_buffer:
            self._token_start = self._position()
        self.text_buffer.append(char)

    def _restart_as_text(self, prefix: str) -> None:
        """Treat a "<" or "</" that starts no markup as literal text."""
        self.tag_source = []
        self.state = TokenizerState.TEXT_CONTENT
        self._token_start = self._tag_start
        self.text_buffer = list(prefix)

    def _record_repair(
        self, repair_type: str, description: str, original: str, repaired: str
    ) -> None:
        self.repairs.append(TokenRepair(
            repair_type=repair_type,
            description=description,
            original_content=original,
            repaired_content=repaired,
            position=self._tag_start,
        ))
        logger.debug(
            "Tokenizer repair applied",
            extra={
                "component": "html_tokenizer",
                "correlation_id": self.correlation_id,
                "repair_type": repair_type,
                "position": f"{self._tag_start.line}:{self._tag_start.column}",
            }
        )

    def _commit_tag(self, end_marker: str) -> None:
        """Emit the buffered tag tokens once the tag is complete."""
        self.pending_tag_tokens.append(
            Token(type=TokenType.TAG_END, value=end_marker, position=self._position())
        )
        self.tokens.extend(self.pending_tag_tokens)

        is_open_tag = self.pending_tag_tokens[0].value == "<"
        tag_name = self.pending_tag_tokens[1].value.lower()

        self.pending_tag_tokens = []
        self.tag_source = []

        if is_open_tag and end_marker == ">" and tag_name in RAW_TEXT_ELEMENTS:
            self.raw_text_tag = tag_name
            self.state = TokenizerState.RAW_TEXT
        else:
            self.state = TokenizerState.TEXT_CONTENT

    def _abandon_tag_as_text(self) -> None:
        """Turn the tag in progress back into literal text."""
        source = self.tag_source
        self.pending_tag_tokens = []
        self.tag_source = []
        self.state = TokenizerState.TEXT_CONTENT
        self._token_start = self._tag_start
        self.text_buffer = source

    # State handlers

    def _process_text_content(self, char: str) -> None:
        if char == "<":
            self._flush_text()
            self._tag_start = self._position()
            self.tag_source = ["<"]
            self.state = TokenizerState.TAG_OPENING
        else:
            self._append_text(char)

    def _process_tag_opening(self, char: str) -> None:
        if char == "/":
            self.state = TokenizerState.TAG_CLOSING
        elif char == "!":
            self.markup_buffer = []
            self.state = TokenizerState.MARKUP_DECLARATION
        elif char == "?":
            # Processing instructions are bogus comments in HTML
            self.markup_buffer = [char]
            self.state = TokenizerState.BOGUS_COMMENT
        elif _is_tag_name_start(char):
            self.pending_tag_tokens = [
                Token(type=TokenType.TAG_START, value="<", position=self._tag_start)
            ]
            self._token_start = self._position()
            self.name_buffer = [char]
            self.state = TokenizerState.TAG_NAME
        else:
            # "<" that does not start markup is literal text ("a < b")
            self._restart_as_text("<")
            self._process_text_content(char)

    def _process_tag_closing(self, char: str) -> None:
        if _is_tag_name_start(char):
            self.pending_tag_tokens = [
                Token(type=TokenType.TAG_START, value="</", position=self._tag_start)
            ]
            self._token_start = self._position()
            self.name_buffer = [char]
            self.state = TokenizerState.CLOSE_TAG_NAME
        elif char == ">":
            self._record_repair(
                "empty_end_tag", "Dropped end tag without a name", "</>", ""
            )
            self.tag_source = []
            self.state = TokenizerState.TEXT_CONTENT
        else:
            self._restart_as_text("</")
            self._process_text_content(char)

    def _emit_name(self, token_type: TokenType) -> None:
        self._emit_pending(token_type, "".join(self.name_buffer))
        self.name_buffer = []

    def _emit_value(self) -> None:
        self._emit_pending(TokenType.ATTR_VALUE, "".join(self.value_buffer))
        self.value_buffer = []

    def _process_tag_name(self, char: str) -> None:
        if char.isspace():
            self._emit_name(TokenType.TAG_NAME)
            self.state = TokenizerState.BEFORE_ATTR_NAME
        elif char == "/":
            self._emit_name(TokenType.TAG_NAME)
            self.state = TokenizerState.SELF_CLOSING_START
        elif char == ">":
            self._emit_name(TokenType.TAG_NAME)
            self._commit_tag(">")
        else:
            self.name_buffer.append(char)

    def _process_close_tag_name(self, char: str) -> None:
        if char.isspace() or char == "/":
            self._emit_name(TokenType.TAG_NAME)
            self.state = TokenizerState.AFTER_CLOSE_TAG_NAME
        elif char == ">":
            self._emit_name(TokenType.TAG_NAME)
            self._commit_tag(">")
        else:
            self.name_buffer.append(char)

    def _process_after_close_tag_name(self, char: str) -> None:
        if char == ">":
            self._commit_tag(">")

    def _process_before_attr_name(self, char: str) -> None:
        if char.isspace():
            return
        if char == "/":
            self.state = TokenizerState.SELF_CLOSING_START
        elif char == ">":
            self._commit_tag(">")
        else:
            self._token_start = self._position()
            self.name_buffer = [char]
            self.state = TokenizerState.ATTR_NAME

    def _process_attr_name(self, char: str) -> None:
        if char.isspace():
            self._emit_name(TokenType.ATTR_NAME)
            self.state = TokenizerState.AFTER_ATTR_NAME
        elif char == "/":
            self._emit_name(TokenType.ATTR_NAME)
            self.state = TokenizerState.SELF_CLOSING_START
        elif char == "=":
            self._emit_name(TokenType.ATTR_NAME)
            self.state = TokenizerState.BEFORE_ATTR_VALUE
        elif char == ">":
            self._emit_name(TokenType.ATTR_NAME)
            self._commit_tag(">")
        else:
            self.name_buffer.append(char)

    def _process_after_attr_name(self, char: str) -> None:
        if char.isspace():
            return
        if char == "=":
            self.state = TokenizerState.BEFORE_ATTR_VALUE
        else:
            self._process_before_attr_name(char)

    def _process_before_attr_value(self, char: str) -> None:
        if char.isspace():
            return
        self._token_start = self._position()
        if char in ('"', "'"):
            self.quote_char = char
            self.value_buffer = []
            self.state = TokenizerState.ATTR_VALUE_QUOTED
        elif char == ">":
            # "name=" with nothing after it
            self._emit_pending(TokenType.ATTR_VALUE, "")
            self._commit_tag(">")
        else:
            self.value_buffer = [char]
            self.state = TokenizerState.ATTR_VALUE_UNQUOTED

    def _process_attr_value_quoted(self, char: str) -> None:
        if char == self.quote_char:
            self._emit_value()
            self.quote_char = None
            self.state = TokenizerState.BEFORE_ATTR_NAME
        else:
            self.value_buffer.append(char)

    def _process_attr_value_unquoted(self, char: str) -> None:
        if char.isspace():
            self._emit_value()
            self.state = TokenizerState.BEFORE_ATTR_NAME
        elif char == ">":
            self._emit_value()
            self._commit_tag(">")
        else:
            self.value_buffer.append(char)

    def _process_self_closing_start(self, char: str) -> None:
        if char == ">":
            self._commit_tag("/>")
        else:
            # A stray "/" inside a tag is ignored
            self.state = TokenizerState.BEFORE_ATTR_NAME
            self._process_before_attr_name(char)

    def _process_markup_declaration(self, char: str) -> None:
        if char == ">":
            self._emit_markup(TokenType.COMMENT, "".join(self.markup_buffer))
            return

        # At most seven characters long before the state changes
        self.markup_buffer.append(char)
        declaration = "".join(self.markup_buffer)
        if declaration == _DECLARATION_COMMENT:
            self.markup_buffer = []
            self.state = TokenizerState.COMMENT_CONTENT
        elif declaration == _DECLARATION_CDATA:
            self.markup_buffer = []
            self.state = TokenizerState.CDATA_CONTENT
        elif declaration.upper() == _DECLARATION_DOCTYPE:
            self.markup_buffer = []
            self.state = TokenizerState.DOCTYPE
        elif not (
            _DECLARATION_COMMENT.startswith(declaration)
            or _DECLARATION_CDATA.startswith(declaration)
            or _DECLARATION_DOCTYPE.startswith(declaration.upper())
        ):
            self.state = TokenizerState.BOGUS_COMMENT

    def _process_comment_content(self, char: str) -> None:
        self.markup_buffer.append(char)
        if char != ">":
            return
        if len(self.markup_buffer) <= 2 and "".join(self.markup_buffer) in (">", "->"):
            # "<!-->" and "<!--->" close an empty comment
            self._record_repair(
                "abrupt_comment", "Closed abruptly terminated empty comment",
                "<!--" + "".join(self.markup_buffer), "<!---->"
            )
            self._emit_markup(TokenType.COMMENT, "")
        elif _ends_with(self.markup_buffer, "-->"):
            self._emit_markup(TokenType.COMMENT, "".join(self.markup_buffer[:-3]))

    def _process_bogus_comment(self, char: str) -> None:
        if char == ">":
            self._emit_markup(TokenType.COMMENT, "".join(self.markup_buffer))
        else:
            self.markup_buffer.append(char)

    def _process_doctype(self, char: str) -> None:
        if char == ">":
            self._emit_markup(TokenType.DOCTYPE, "".join(self.markup_buffer).strip())
        else:
            self.markup_buffer.append(char)

    def _process_cdata_content(self, char: str) -> None:
        self.markup_buffer.append(char)
        if char == ">" and _ends_with(self.markup_buffer, "]]>"):
            self._emit_markup(TokenType.CDATA, "".join(self.markup_buffer[:-3]))

    def _process_raw_text(self, char: str) -> None:
        if not self.markup_buffer:
            self._token_start = self._position()
        self.markup_buffer.append(char)
        if char != ">":
            return

        # Only the bounded tail is searched for the end tag
        tail_length = len(self.raw_text_tag) + _RAW_TEXT_END_SLACK
        tail = "".join(self.markup_buffer[-tail_length:])
        match = re.search(
            r"</(" + re.escape(self.raw_text_tag) + r")\s*>$", tail, re.IGNORECASE
        )
        if match is None:
            return

        content = "".join(self.markup_buffer[:len(self.markup_buffer) - len(match.group(0))])
        if content:
            self._emit(TokenType.TEXT, content, self._token_start)

        end_position = self._position()
        self.tokens.append(Token(TokenType.TAG_START, "</", end_position))
        self.tokens.append(Token(TokenType.TAG_NAME, match.group(1), end_position))
        self.tokens.append(Token(TokenType.TAG_END, ">", end_position))

        self.markup_buffer = []
        self.raw_text_tag = None
        self.state = TokenizerState.TEXT_CONTENT

    def _finish(self) -> None:
        """Resolve whatever construct is still open at end of input."""
        state = self.state
        markup = "".join(self.markup_buffer)

        if state in _TAG_STATES:
            source = "".join(self.tag_source)
            self._record_repair(
                "unterminated_tag",
                "Tag cut off by end of input kept as literal text",
                source,
                source,
            )
            self._abandon_tag_as_text()
        elif state in (
            TokenizerState.MARKUP_DECLARATION,
            TokenizerState.COMMENT_CONTENT,
            TokenizerState.BOGUS_COMMENT,
        ):
            self._record_repair(
                "unterminated_comment", "Comment closed at end of input", markup, markup
            )
            self._emit(TokenType.COMMENT, markup, self._tag_start)
        elif state == TokenizerState.DOCTYPE:
            self._emit(TokenType.DOCTYPE, markup.strip(), self._tag_start)
        elif state == TokenizerState.CDATA_CONTENT:
            self._record_repair(
                "unterminated_cdata", "CDATA section closed at end of input", markup, markup
            )
            self._emit(TokenType.CDATA, markup, self._tag_start)
        elif state == TokenizerState.RAW_TEXT:
            if markup:
                self._record_repair(
                    "unterminated_raw_text",
                    f"<{self.raw_text_tag}> content runs to end of input",
                    markup,
                    markup,
                )
                self._emit(TokenType.TEXT, markup, self._token_start)

        self.markup_buffer = []
        self.state = TokenizerState.TEXT_CONTENT
        self._flush_text()

    _handlers = {
        TokenizerState.TEXT_CONTENT: _process_text_content,
        TokenizerState.TAG_OPENING: _process_tag_opening,
        TokenizerState.TAG_CLOSING: _process_tag_closing,
        TokenizerState.TAG_NAME: _process_tag_name,
        TokenizerState.CLOSE_TAG_NAME: _process_close_tag_name,
        TokenizerState.AFTER_CLOSE_TAG_NAME: _process_after_close_tag_name,
        TokenizerState.BEFORE_ATTR_NAME: _process_before_attr_name,
        TokenizerState.ATTR_NAME: _process_attr_name,
        TokenizerState.AFTER_ATTR_NAME: _process_after_attr_name,
        TokenizerState.BEFORE_ATTR_VALUE: _process_before_attr_value,
        TokenizerState.ATTR_VALUE_QUOTED: _process_attr_value_quoted,
        TokenizerState.ATTR_VALUE_UNQUOTED: _process_attr_value_unquoted,
        TokenizerState.SELF_CLOSING_START: _process_self_closing_start,
        TokenizerState.MARKUP_DECLARATION: _process_markup_declaration,
        TokenizerState.COMMENT_CONTENT: _process_comment_content,
        TokenizerState.BOGUS_COMMENT: _process_bogus_comment,
        TokenizerState.DOCTYPE: _process_doctype,
        TokenizerState.CDATA_CONTENT: _process_cdata_content,
        TokenizerState.RAW_TEXT: _process_raw_text,
    }
