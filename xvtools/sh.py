"""Parser for the shell's command language: words, < > >>, |, ;, & and ( )."""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from xvtools.ulib import O_CREATE, O_RDONLY, O_TRUNC, O_WRONLY

MAXARGS = 10
WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"

_SINGLE = "|();&<"
_REDIRECTIONS = {
    "<": (O_RDONLY, 0),
    ">": (O_WRONLY | O_CREATE | O_TRUNC, 1),
    "+": (O_WRONLY | O_CREATE, 1),
}


class ShellSyntaxError(ValueError):
    """A command line could not be parsed."""

    def __init__(self, message, leftovers=None):
        super().__init__(message)
        self.leftovers = leftovers


class Token(NamedTuple):
    """A lexical token: ``kind`` is a symbol, ``'+'`` for ``>>`` or ``'a'`` for a word."""

    kind: str
    text: str


@dataclass
class ExecCmd:
    """Run a program with arguments."""

    argv: list = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run ``cmd`` with file descriptor ``fd`` reopened on ``file``."""

    cmd: object
    file: str
    mode: int
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of ``left`` to the input of ``right``."""

    left: object
    right: object


@dataclass
class ListCmd:
    """Run ``left`` to completion, then ``right``."""

    left: object
    right: object


@dataclass
class BackCmd:
    """Run ``cmd`` in the background."""

    cmd: object


def _cstr(s):
    return s.split("\0", 1)[0]


class _Parser:
    def __init__(self, s):
        self._s = _cstr(s)
        self._pos = 0

    def _skip(self):
        while self._pos < len(self._s) and self._s[self._pos] in WHITESPACE:
            self._pos += 1

    @property
    def rest(self):
        return self._s[self._pos:]

    def peek(self, toks):
        self._skip()
        return self._pos < len(self._s) and self._s[self._pos] in toks

    def next_token(self) -> Optional[Token]:
        self._skip()
        s = self._s
        if self._pos >= len(s):
            return None
        c = s[self._pos]
        if c in _SINGLE:
            self._pos += 1
            return Token(c, c)
        if c == ">":
            if s.startswith(">>", self._pos):
                self._pos += 2
                return Token("+", ">>")
            self._pos += 1
            return Token(">", ">")
        start = self._pos
        while self._pos < len(s) and s[self._pos] not in WHITESPACE and s[self._pos] not in SYMBOLS:
            self._pos += 1
        return Token("a", s[start:self._pos])

    def line(self):
        cmd = self.pipe()
        while self.peek("&"):
            self.next_token()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.next_token()
            cmd = ListCmd(cmd, self.line())
        return cmd

    def pipe(self):
        cmd = self.exec_()
        if self.peek("|"):
            self.next_token()
            cmd = PipeCmd(cmd, self.pipe())
        return cmd

    def redirs(self, cmd):
        while self.peek("<>"):
            tok = self.next_token()
            target = self.next_token()
            if target is None or target.kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            mode, fd = _REDIRECTIONS[tok.kind]
            cmd = RedirCmd(cmd, target.text, mode, fd)
        return cmd

    def block(self):
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.next_token()
        cmd = self.line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.next_token()
        return self.redirs(cmd)

    def exec_(self):
        if self.peek("("):
            return self.block()
        ecmd = ExecCmd()
        ret = self.redirs(ecmd)
        while not self.peek("|)&;"):
            tok = self.next_token()
            if tok is None:
                break
            if tok.kind != "a":
                raise ShellSyntaxError("syntax")
            ecmd.argv.append(tok.text)
            if len(ecmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.redirs(ret)
        return ret


def tokenize(s):
    """Split a command line into tokens."""
    parser = _Parser(s)
    tokens = []
    while (tok := parser.next_token()) is not None:
        tokens.append(tok)
    return tokens


def parse_command(s):
    """Parse a whole command line into a command tree."""
    parser = _Parser(s)
    cmd = parser.line()
    parser.peek("")
    if parser.rest:
        raise ShellSyntaxError("syntax", leftovers=parser.rest)
    return cmd