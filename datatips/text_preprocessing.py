# datatips/text_preprocessing.py

"""
Normalization + tokenization for social-media style text.

The pipeline is a fixed, ordered list of small stages:

  1. NonAsciiStripper     - non-ASCII runs -> single space
  2. CaseNormalizer       - upper / lower / unchanged (ASCII-only mapping)
  3. MentionSplitter      - "@bob"   -> "MENTION bob"
  4. HashtagSplitter      - "#cool"  -> "HASHTAG cool"
  5. UrlSubstitutor       - "http://..." -> "URL"
  6. PunctuationStripper  - ASCII punctuation deleted (no replacement)
  7. WhitespaceCollapser  - strip + collapse whitespace runs
  8. Tokenizer            - split on a delimiter

Order matters: stripping punctuation before the hashtag stage would eat the
'#' the hashtag stage looks for.
"""

from __future__ import annotations

import re
import string
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Union

from .chaining import pipe

MENTION_TOKEN = "MENTION"
HASHTAG_TOKEN = "HASHTAG"
URL_TOKEN = "URL"


class MalformedPatternError(ValueError):
    """A stage pattern could not be compiled or applied."""


def compile_pattern(pattern: str, flags: int = 0) -> "re.Pattern[str]":
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise MalformedPatternError(f"Cannot compile pattern {pattern!r}: {exc}") from exc


_NON_ASCII_RE = compile_pattern(r"[^\x01-\x7F]+")
_MENTION_RE = compile_pattern(r"(^|\W)@(\w+)", re.ASCII)
_HASHTAG_RE = compile_pattern(r"(^|\W)#([A-Za-z]\w*)", re.ASCII)
# scheme is case-insensitive: with CaseMode.UPPER the URL arrives as "HTTPS://..."
_URL_RE = compile_pattern(
    r"https?://(?:[a-zA-Z]|[0-9]|[$-_@.&+]|[!*\(\),]|(?:%[0-9a-fA-F][0-9a-fA-F]))+",
    re.IGNORECASE,
)
_PUNCT_RE = compile_pattern("[" + re.escape(string.punctuation) + "]+")
_WS_RE = compile_pattern(r"\s+")

_ASCII_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_ASCII_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class CaseMode(str, Enum):
    UPPER = "upper"
    LOWER = "lower"
    UNCHANGED = "unchanged"

    @classmethod
    def _missing_(cls, value: object) -> Optional["CaseMode"]:
        # accept "LOWER", " Lower " etc.
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value == wanted:
                    return member
        return None


Stage = Callable[[str], str]


# -----------------------------
# Stages
# -----------------------------

class RegexStage:
    """
    A str -> str rewrite: every match of `pattern` is replaced by
    `replacement`. Subclasses only set the class attributes; the pattern is
    compiled once at import time and shared.
    """

    name: str = "regex"
    pattern: "re.Pattern[str]"
    replacement: str = ""

    def apply(self, text: str) -> str:
        try:
            return self.pattern.sub(self.replacement, text)
        except re.error as exc:
            raise MalformedPatternError(f"Stage {self.name!r} failed: {exc}") from exc

    def __call__(self, text: str) -> str:
        return self.apply(text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NonAsciiStripper(RegexStage):
    name = "non_ascii"
    pattern = _NON_ASCII_RE
    replacement = " "


class MentionSplitter(RegexStage):
    """'@handle' -> 'MENTION handle'. An '@' inside a word is left alone."""

    name = "mention"
    pattern = _MENTION_RE
    replacement = rf"\g<1>{MENTION_TOKEN} \g<2>"


class HashtagSplitter(RegexStage):
    """'#tag' -> 'HASHTAG tag'. The tag must start with a letter."""

    name = "hashtag"
    pattern = _HASHTAG_RE
    replacement = rf"\g<1>{HASHTAG_TOKEN} \g<2>"


class UrlSubstitutor(RegexStage):
    name = "url"
    pattern = _URL_RE
    replacement = URL_TOKEN


class PunctuationStripper(RegexStage):
    # NOTE: deletes without inserting a space, so "end.Next" -> "endNext".
    name = "punctuation"
    pattern = _PUNCT_RE
    replacement = ""


class WhitespaceCollapser(RegexStage):
    name = "whitespace"
    pattern = _WS_RE
    replacement = " "

    def apply(self, text: str) -> str:
        return super().apply(text).strip()


class CaseNormalizer:
    """
    ASCII-only case folding, so the result does not depend on locale.
    Non-ASCII letters pass through untouched.
    """

    name = "case"

    def __init__(self, mode: Union[CaseMode, str] = CaseMode.UNCHANGED):
        self.mode = CaseMode(mode)

    def apply(self, text: str) -> str:
        if self.mode is CaseMode.UPPER:
            return text.translate(_ASCII_TO_UPPER)
        if self.mode is CaseMode.LOWER:
            return text.translate(_ASCII_TO_LOWER)
        return text

    def __call__(self, text: str) -> str:
        return self.apply(text)

    def __repr__(self) -> str:
        return f"CaseNormalizer(mode={self.mode.value!r})"


class Tokenizer:
    """
    Split on every occurrence of `delimiter`. Adjacent delimiters give empty
    tokens; they are kept. An empty string has no tokens, and an empty
    delimiter splits into single characters.
    """

    name = "tokenize"

    def __init__(self, delimiter: str = " "):
        self.delimiter = delimiter

    def apply(self, text: str) -> List[str]:
        if not text:
            return []
        if not self.delimiter:
            return list(text)
        return text.split(self.delimiter)

    def __call__(self, text: str) -> List[str]:
        return self.apply(text)

    def __repr__(self) -> str:
        return f"Tokenizer(delimiter={self.delimiter!r})"


def default_stages(case_mode: Union[CaseMode, str] = CaseMode.UNCHANGED) -> List[Stage]:
    """The string -> string stages in their fixed order (tokenizer excluded)."""
    return [
        NonAsciiStripper(),
        CaseNormalizer(case_mode),
        MentionSplitter(),
        HashtagSplitter(),
        UrlSubstitutor(),
        PunctuationStripper(),
        WhitespaceCollapser(),
    ]


# -----------------------------
# Driver
# -----------------------------

def _coerce_text(text: Any) -> str:
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return text


class TextPipeline:
    """
    Ordered stages followed by a tokenizer.

    Nothing is caught here: if a stage raises, the error reaches the caller
    as-is and no partial result is returned.
    """

    def __init__(self, stages: Sequence[Stage], tokenizer: Optional[Tokenizer] = None):
        self.stages: List[Stage] = list(stages)
        self.tokenizer = tokenizer if tokenizer is not None else Tokenizer()

    def clean(self, text: Any) -> str:
        return pipe(_coerce_text(text), *self.stages)

    def run(self, text: Any) -> List[str]:
        return self.tokenizer(self.clean(text))

    def __call__(self, text: Any) -> List[str]:
        return self.run(text)

    def __repr__(self) -> str:
        names = ", ".join(repr(s) for s in self.stages)
        return f"TextPipeline([{names}], {self.tokenizer!r})"


def build_pipeline(
    case_mode: Union[CaseMode, str] = CaseMode.UNCHANGED,
    delimiter: str = " ",
) -> TextPipeline:
    return TextPipeline(default_stages(case_mode), Tokenizer(delimiter))


def clean_text(text: Any, case_mode: Union[CaseMode, str] = CaseMode.UNCHANGED) -> str:
    """Stages 1-7 only: the cleaned string, before tokenization."""
    return build_pipeline(case_mode).clean(text)


def normalize_and_tokenize(
    text: Any,
    case_mode: Union[CaseMode, str] = CaseMode.UNCHANGED,
    delimiter: str = " ",
) -> List[str]:
    """
    Run the full pipeline on one text and return its tokens.

    Example:
      normalize_and_tokenize("@foo check THIS out!! #cool http://x.co/y", "lower")
      -> ["MENTION", "foo", "check", "this", "out", "HASHTAG", "cool", "URL"]

    Markers keep their upper-case spelling because case folding runs before
    they are inserted.
    """
    return build_pipeline(case_mode, delimiter).run(text)
