"""Conventional commit parsing.

A commit message is split into paragraphs (runs of non-blank lines). The
first paragraph is the header::

    type(scope)!: subject

The trailing paragraphs whose first line looks like a footer are the
footers, everything in between is the body::

    feat(api)!: drop the v1 endpoints

    The v1 endpoints have been deprecated since 2.3.

    BREAKING CHANGE: clients must use /v2
    Refs #482

The parser is lenient. A header that does not follow the convention is
kept as the subject of an untyped commit. Malformed types and scopes are
reported as classification errors next to a best-effort commit, and only
a header spanning several lines is rejected outright.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from conver.exceptions import (
    CommitParseError,
    MultiLineHeaderError,
    ScopeFormatError,
    TypeFormatError,
    TypeMissingError,
)

BREAKING_CHANGE_TOKEN = "BREAKING CHANGE"

# Loose capture; type and scope are validated separately below so that a
# bad character yields a classification error instead of a fallback.
HEADER_PATTERN = re.compile(
    r"^\s*(?P<type>[^\s(!:]*)"
    r"\s*(?:\(\s*(?P<scope>[^)]*?)\s*\))?"
    r"\s*(?P<breaking>!)?"
    r":\s+(?P<subject>.*?)\s*$"
)
TYPE_FORMAT = re.compile(r"^[\w-]+$")
SCOPE_FORMAT = re.compile(r"^[\w$./\-* ]+$")

TOKEN_FOOTER_PATTERN = re.compile(r"^(?P<name>[\w-]+|BREAKING CHANGE):\s+(?P<body>.*)$")
TICKET_FOOTER_PATTERN = re.compile(r"^(?P<name>[\w-]+)\s+(?P<body>#\S.*)$")

_BLANK_LINES = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class Footer:
    """A trailer at the end of a commit message.

    ``Key: value`` footers have ``is_reference=False``; ``Key #value``
    ticket references have ``is_reference=True``.
    """

    name: str
    body: str
    is_reference: bool = False


@dataclass(frozen=True)
class ParsedCommit:
    """A commit message split into its conventional-commit parts."""

    commit_type: str = ""
    scope: str = ""
    subject: str = ""
    body: str = ""
    footers: tuple[Footer, ...] = ()
    is_breaking: bool = False

    @property
    def is_conventional(self) -> bool:
        """Whether the header carried a commit type."""
        return bool(self.commit_type)

    @property
    def breaking_changes(self) -> list[str]:
        """Descriptions from the ``BREAKING CHANGE`` footers."""
        return [f.body for f in self.footers if f.name == BREAKING_CHANGE_TOKEN]

    @property
    def references(self) -> list[Footer]:
        """Ticket reference footers (``Fixes #12``)."""
        return [f for f in self.footers if f.is_reference]


@dataclass(frozen=True)
class ParseResult:
    """Outcome of :func:`parse_commit`.

    ``commit`` is always usable. ``error`` is set when the type or scope
    failed validation; callers decide whether that is a warning.
    """

    commit: ParsedCommit
    error: CommitParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================================================================
# Paragraphs
# =============================================================================


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def paragraphs(text: str) -> list[str]:
    """Split text into stripped paragraphs.

    Paragraphs are separated by one or more blank lines; lines holding
    only whitespace count as blank.

    Args:
        text: Raw text with any line ending style

    Returns:
        Non-empty paragraphs in order
    """
    cleaned = normalize_newlines(text).strip()
    if not cleaned:
        return []
    return [p.strip() for p in _BLANK_LINES.split(cleaned)]


# =============================================================================
# Header
# =============================================================================


def parse_header(header: str) -> ParseResult:
    """Parse a single header line.

    Args:
        header: The first paragraph of a commit message

    Returns:
        The parsed header, possibly with a classification error

    Raises:
        MultiLineHeaderError: If the header contains a line break
    """
    if "\n" in header or "\r" in header:
        raise MultiLineHeaderError()

    match = HEADER_PATTERN.match(header)
    if not match:
        return ParseResult(ParsedCommit(subject=header.strip()))

    commit = ParsedCommit(
        commit_type=match.group("type"),
        scope=match.group("scope") or "",
        subject=match.group("subject"),
        is_breaking=match.group("breaking") is not None,
    )
    return ParseResult(commit, _validate_header(commit))


def _validate_header(commit: ParsedCommit) -> CommitParseError | None:
    if not commit.commit_type:
        return TypeMissingError()
    if not TYPE_FORMAT.match(commit.commit_type):
        return TypeFormatError(f"type must match: {TYPE_FORMAT.pattern}")
    if commit.scope and not SCOPE_FORMAT.match(commit.scope):
        return ScopeFormatError(f"scope must match: {SCOPE_FORMAT.pattern}")
    return None


# =============================================================================
# Footers
# =============================================================================


def match_footer_line(line: str) -> Footer | None:
    """Match a line against the footer grammars.

    The ``token: value`` form is tried before the ``token #value`` form.

    Returns:
        A footer holding the first line of its body, or None
    """
    match = TOKEN_FOOTER_PATTERN.match(line)
    if match:
        return Footer(match.group("name"), match.group("body"))
    match = TICKET_FOOTER_PATTERN.match(line)
    if match:
        return Footer(match.group("name"), match.group("body"), is_reference=True)
    return None


class _ScanState(Enum):
    IDLE = "idle"
    IN_FOOTER = "in_footer"


@dataclass
class FooterScanner:
    """Line-by-line tokenizer for footer blocks.

    Each line either starts a new footer, which flushes the current one,
    or continues the current footer's body. Lines arriving before any
    footer has started are rejected.
    """

    footers: list[Footer] = field(default_factory=list)
    state: _ScanState = _ScanState.IDLE
    _name: str = ""
    _is_reference: bool = False
    _lines: list[str] = field(default_factory=list)

    def feed(self, line: str) -> bool:
        """Consume one line; return False if it was rejected."""
        started = match_footer_line(line)
        if started is not None:
            self._flush()
            self._name = started.name
            self._is_reference = started.is_reference
            self._lines = [started.body]
            self.state = _ScanState.IN_FOOTER
            return True
        if self.state is _ScanState.IDLE:
            return False
        self._lines.append(line)
        return True

    def finish(self) -> tuple[Footer, ...]:
        """Flush the pending footer and return everything collected."""
        self._flush()
        return tuple(self.footers)

    def _flush(self) -> None:
        if self.state is _ScanState.IN_FOOTER:
            body = "\n".join(self._lines).strip()
            self.footers.append(Footer(self._name, body, self._is_reference))
        self.state = _ScanState.IDLE
        self._name = ""
        self._is_reference = False
        self._lines = []


def is_footer_paragraph(paragraph: str) -> bool:
    """A paragraph holds footers iff its first line is a footer line."""
    first_line = paragraph.strip().split("\n", 1)[0]
    return match_footer_line(first_line) is not None


def parse_footers(paragraph: str) -> tuple[Footer, ...]:
    """Parse one footer paragraph.

    Returns an empty tuple when the first line is not a footer, even if
    later lines look like one.
    """
    lines = normalize_newlines(paragraph).strip().split("\n")
    scanner = FooterScanner()
    if not scanner.feed(lines[0]):
        return ()
    for line in lines[1:]:
        scanner.feed(line)
    return scanner.finish()


def split_body_and_footers(trailing: list[str]) -> tuple[str, tuple[Footer, ...]]:
    """Separate the body paragraphs from the footer paragraphs.

    Footer paragraphs must be contiguous at the end; scanning backwards
    stops at the first paragraph that is not a footer block.

    Args:
        trailing: Paragraphs after the header

    Returns:
        ``(body, footers)``
    """
    boundary = len(trailing)
    while boundary > 0 and is_footer_paragraph(trailing[boundary - 1]):
        boundary -= 1

    body = "\n\n".join(trailing[:boundary])
    footers = tuple(f for paragraph in trailing[boundary:] for f in parse_footers(paragraph))
    return body, footers


# =============================================================================
# Message
# =============================================================================


def parse_commit(message: str) -> ParseResult:
    """Parse a full commit message.

    Args:
        message: Raw commit message text

    Returns:
        The parsed commit and an optional classification error
        (:class:`TypeMissingError`, :class:`TypeFormatError` or
        :class:`ScopeFormatError`)

    Raises:
        MultiLineHeaderError: If the header paragraph spans several lines
    """
    parts = paragraphs(message)
    if not parts:
        return ParseResult(ParsedCommit())

    header = parse_header(parts[0])
    body, footers = split_body_and_footers(parts[1:])

    breaking = header.commit.is_breaking or any(f.name == BREAKING_CHANGE_TOKEN for f in footers)
    commit = ParsedCommit(
        commit_type=header.commit.commit_type,
        scope=header.commit.scope,
        subject=header.commit.subject,
        body=body,
        footers=footers,
        is_breaking=breaking,
    )
    return ParseResult(commit, header.error)
