"""
Syntax checking for URI Templates (RFC 6570).

Only the grammar is checked; templates are never expanded here.
"""

import re

# pct-encoded = "%" HEXDIG HEXDIG
PCT_ENCODED_PATTERN = r"%[0-9A-Fa-f]{2}"

# ucschar and iprivate ranges from RFC 3987
_UCSCHAR = (
    "\u00a0-\ud7ff\uf900-\ufdcf\ufdf0-\uffef"
    "\U00010000-\U0001fffd\U00020000-\U0002fffd\U00030000-\U0003fffd"
    "\U00040000-\U0004fffd\U00050000-\U0005fffd\U00060000-\U0006fffd"
    "\U00070000-\U0007fffd\U00080000-\U0008fffd\U00090000-\U0009fffd"
    "\U000a0000-\U000afffd\U000b0000-\U000bfffd\U000c0000-\U000cfffd"
    "\U000d0000-\U000dfffd\U000e1000-\U000efffd"
)
_IPRIVATE = "\ue000-\uf8ff\U000f0000-\U000ffffd\U00100000-\U0010fffd"

# literals, minus pct-encoded which is matched separately
LITERAL_CHAR_PATTERN = (
    r"[\x21\x23\x24\x26\x28-\x3b\x3d\x3f-\x5b\x5d\x5f\x61-\x7a\x7e"
    + _UCSCHAR
    + _IPRIVATE
    + "]"
)

_VARCHAR = rf"(?:[A-Za-z0-9_]|{PCT_ENCODED_PATTERN})"
_VARNAME = rf"{_VARCHAR}(?:\.?{_VARCHAR})*"
# prefix (":" max-length, a positive integer < 10000) or explode ("*")
_MODIFIER = r"(?::[1-9][0-9]{0,3}|\*)"
_VARSPEC = rf"{_VARNAME}{_MODIFIER}?"

# Level 2 and 3 operators, plus the operators reserved for future extensions
OPERATORS = "+#./;?&=,!@|"

EXPRESSION_PATTERN = rf"[{re.escape(OPERATORS)}]?{_VARSPEC}(?:,{_VARSPEC})*"

_literal_re = re.compile(LITERAL_CHAR_PATTERN)
_pct_encoded_re = re.compile(PCT_ENCODED_PATTERN)
_expression_re = re.compile(EXPRESSION_PATTERN)


class UriTemplateSyntaxError(ValueError):
    """
    A URI Template grammar violation.

    Attributes:
        template: The rejected template string
        position: Zero-based index of the offending character
        reason: Short description of the violation
    """

    def __init__(self, template: str, position: int, reason: str):
        super().__init__(f"{reason} at position {position}")
        self.template = template
        self.position = position
        self.reason = reason


def check_uri_template_syntax(template: str) -> None:
    """
    Check that a string conforms to the RFC 6570 URI Template grammar.

    Args:
        template: The template string to check

    Raises:
        UriTemplateSyntaxError: On the first grammar violation found

    Examples:
        >>> check_uri_template_syntax("https://example.com/books/{book_id}")
        >>> check_uri_template_syntax("https://example.com/books/{book_id")
        Traceback (most recent call last):
        ...
        mercure_client.utils.uri_template_syntax.UriTemplateSyntaxError: unterminated expression at position 26
    """
    position = 0
    length = len(template)

    while position < length:
        char = template[position]

        if char == "{":
            end = template.find("}", position + 1)
            if end == -1:
                raise UriTemplateSyntaxError(
                    template, position, "unterminated expression"
                )
            body = template[position + 1 : end]
            if not body:
                raise UriTemplateSyntaxError(template, position, "empty expression")
            if not _expression_re.fullmatch(body):
                raise UriTemplateSyntaxError(
                    template, position, f"invalid expression {{{body}}}"
                )
            position = end + 1
        elif char == "}":
            raise UriTemplateSyntaxError(
                template, position, "unmatched closing brace"
            )
        elif char == "%":
            if not _pct_encoded_re.match(template, position):
                raise UriTemplateSyntaxError(
                    template, position, "invalid percent-encoding"
                )
            position += 3
        elif _literal_re.match(char):
            position += 1
        else:
            raise UriTemplateSyntaxError(
                template, position, f"invalid literal character {char!r}"
            )
