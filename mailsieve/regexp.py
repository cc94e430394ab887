"""Extended regular expressions with mail-filter semantics.

The dialect is egrep's, with these differences: ``^`` and ``$`` both stand
for a newline, ``^^`` anchors at the very start of the text (or, at the end of
a pattern, at the very end), ``\\<`` and ``\\>`` match a non-word character or
a newline, and ``\\/`` marks where the extracted match begins.  The text is
searched as if a newline preceded it (when the search starts at the beginning
of a line) and as if a newline followed it.
"""

from __future__ import annotations

import enum
import string
import sys
from dataclasses import dataclass

__all__ = ["RegexError", "MatchResult", "CompiledRegex", "compile_regex"]


class RegexError(ValueError):
    """Raised for a malformed regular expression."""


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a successful search.

    ``end`` is the index one past the end of the match.  ``match`` holds the
    text following a ``\\/`` marker, or None when the pattern has none.
    """

    end: int
    match: str | None = None


class _Op(enum.Enum):
    CHAR = enum.auto()
    CLASS = enum.auto()
    DOT = enum.auto()
    BOTEXT = enum.auto()
    EOTEXT = enum.auto()
    SPLIT = enum.auto()
    BOM = enum.auto()
    FIN = enum.auto()


class _Phase(enum.Enum):
    LIVE = enum.auto()
    TRAILING = enum.auto()
    FINAL = enum.auto()


class _Node:
    __slots__ = ("op", "arg", "out1", "out2")

    def __init__(self, op: _Op, arg=None, out1: int | None = None, out2: int | None = None):
        self.op = op
        self.arg = arg
        self.out1 = out1
        self.out2 = out2


_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_NO_BOM = sys.maxsize
_POSTFIX = {"*": "star", "+": "plus", "?": "opt"}


def _is_upper(c: str) -> bool:
    return "A" <= c <= "Z"


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


class _Parser:
    """Turns a pattern into a small syntax tree."""

    def __init__(self, pattern: str, ignore_case: bool):
        self.pattern = pattern
        self.ignore_case = ignore_case
        self.pos = 0

    def parse(self):
        return self._alternation(top=True)

    def _peek(self) -> str:
        return self.pattern[self.pos] if self.pos < len(self.pattern) else ""

    def _alternation(self, top: bool):
        branches = [self._sequence()]
        while True:
            c = self._peek()
            if c == "|":
                self.pos += 1
                branches.append(self._sequence())
                continue
            if c == ")":
                if top:
                    raise RegexError(f"Invalid regexp {self.pattern!r}: unmatched ')'")
                self.pos += 1
            elif not top:
                raise RegexError(f"Invalid regexp {self.pattern!r}: missing ')'")
            return ("alt", branches)

    def _sequence(self):
        items = []
        while self._peek() not in ("", "|", ")"):
            atom = self._simple()
            kind = _POSTFIX.get(self._peek())
            if kind is not None:
                self.pos += 1
                atom = (kind, atom)
            items.append(atom)
        return ("seq", items)

    def _char(self, c: str):
        if self.ignore_case and _is_upper(c):
            c = c.lower()
        return ("char", c)

    def _simple(self):
        c = self._peek()
        self.pos += 1
        if c == "(":
            return self._alternation(top=False)
        if c == "[":
            return self._bracket()
        if c == ".":
            return ("dot",)
        if c == "^":
            if self._peek() == "^":
                self.pos += 1
                return ("anchor",)
            return self._char("\n")
        if c == "$":
            return self._char("\n")
        if c == "\\":
            escaped = self._peek()
            if escaped == "":
                return self._char("\\")
            self.pos += 1
            if escaped == "/":
                return ("bom",)
            if escaped in ("<", ">"):
                return ("class", True, _WORD_CHARS)
            return self._char(escaped)
        return self._char(c)

    def _mark(self, members: set[str], c: str) -> None:
        members.add(c)
        if self.ignore_case:
            if _is_upper(c):
                members.add(c.lower())
            elif _is_lower(c):
                members.add(c.upper())

    def _bracket(self):
        negated = self._peek() == "^"
        members: set[str] = set()
        if negated:
            self.pos += 1
            members.add("\n")
        last: str | None = None
        first = self._peek()
        if first in ("]", "-") and first:
            members.add(first)
            last = first
            self.pos += 1
        while True:
            c = self._peek()
            if c == "":
                break
            self.pos += 1
            if c == "]":
                break
            if c == "-":
                upto = self._peek()
                if upto not in ("", "]"):
                    self.pos += 1
                    if last is not None:
                        for code in range(ord(last) + 1, ord(upto)):
                            self._mark(members, chr(code))
                    c = upto
            self._mark(members, c)
            last = c
        return ("class", negated, frozenset(members))


class CompiledRegex:
    """A compiled pattern, ready to search text."""

    def __init__(self, pattern: str, ignore_case: bool = False):
        self.pattern = pattern
        self.ignore_case = bool(ignore_case)
        self._nodes: list[_Node] = []
        self._fin = self._add(_Op.FIN)
        tree = _Parser(pattern, self.ignore_case).parse()
        self._start = self._compile(tree, self._fin)

    def __repr__(self) -> str:
        return f"CompiledRegex({self.pattern!r}, ignore_case={self.ignore_case})"

    # --- compilation -------------------------------------------------------

    def _add(self, op: _Op, arg=None, out1: int | None = None, out2: int | None = None) -> int:
        self._nodes.append(_Node(op, arg, out1, out2))
        return len(self._nodes) - 1

    def _compile(self, tree, cont: int) -> int:
        kind = tree[0]
        if kind == "seq":
            for item in reversed(tree[1]):
                cont = self._compile(item, cont)
            return cont
        if kind == "alt":
            starts = [self._compile(branch, cont) for branch in tree[1]]
            entry = starts[-1]
            for start in reversed(starts[:-1]):
                entry = self._add(_Op.SPLIT, None, start, entry)
            return entry
        if kind == "star":
            split = self._add(_Op.SPLIT, None, None, cont)
            self._nodes[split].out1 = self._compile(tree[1], split)
            return split
        if kind == "plus":
            split = self._add(_Op.SPLIT, None, None, cont)
            body = self._compile(tree[1], split)
            self._nodes[split].out1 = body
            return body
        if kind == "opt":
            body = self._compile(tree[1], cont)
            return self._add(_Op.SPLIT, None, body, cont)
        if kind == "char":
            return self._add(_Op.CHAR, tree[1], cont)
        if kind == "class":
            return self._add(_Op.CLASS, (tree[1], tree[2]), cont)
        if kind == "dot":
            return self._add(_Op.DOT, None, cont)
        if kind == "bom":
            return self._add(_Op.BOM, None, cont)
        if kind == "anchor":
            op = _Op.EOTEXT if cont == self._fin else _Op.BOTEXT
            return self._add(op, None, cont)
        raise RegexError(f"Invalid regexp {self.pattern!r}")

    # --- matching ----------------------------------------------------------

    def _fold(self, c: str) -> str:
        return c.lower() if self.ignore_case and _is_upper(c) else c

    def _steps(self, text: str, offset: int):
        n = len(text)
        last = offset - 1
        if offset == 0 or text[offset - 1] == "\n":
            yield last, "\n", _Phase.LIVE
        elif offset == n:
            last = offset
            yield last, "\n", _Phase.LIVE
        for index in range(offset, n):
            last = index
            yield index, self._fold(text[index]), _Phase.LIVE
        yield last + 1, "\n", _Phase.TRAILING
        yield last + 2, "\n", _Phase.FINAL

    @staticmethod
    def _consumes(node: _Node, ch: str, pos: int) -> bool:
        op = node.op
        if op is _Op.CHAR:
            return ch == node.arg
        if op is _Op.CLASS:
            negated, members = node.arg
            return (ch in members) != negated
        if op is _Op.DOT:
            return ch != "\n"
        return pos < 0  # BOTEXT, or EOTEXT away from the end

    def _run(self, entry: int, start: int, ch: str, pos: int, phase: _Phase,
             eom_set: bool, nxt: dict[int, int], fins: list[int], seen: dict[int, int]) -> None:
        stack = [(entry, start)]
        while stack:
            index, s = stack.pop()
            best = seen.get(index)
            if best is not None and best <= s:
                continue
            seen[index] = s
            node = self._nodes[index]
            op = node.op
            if op is _Op.SPLIT:
                stack.append((node.out2, s))
                stack.append((node.out1, s))
            elif op is _Op.BOM:
                stack.append((node.out1, s if eom_set else pos))
            elif op is _Op.FIN or (op is _Op.EOTEXT and phase is _Phase.TRAILING):
                fins.append(s)
            elif self._consumes(node, ch, pos):
                previous = nxt.get(node.out1)
                if previous is None or s < previous:
                    nxt[node.out1] = s

    def search(self, text: str, offset: int = 0) -> MatchResult | None:
        """Search ``text`` from ``offset`` to its end; return None if nothing matches."""
        n = len(text)
        if not 0 <= offset <= n:
            raise ValueError(f"offset {offset} outside text of length {n}")
        threads: dict[int, int] = {}
        bom: int | None = None
        eom: int | None = None
        inject = True
        for pos, ch, phase in self._steps(text, offset):
            nxt: dict[int, int] = {}
            fins: list[int] = []
            seen: dict[int, int] = {}
            sources = list(threads.items())
            if inject and phase is _Phase.LIVE:
                sources.insert(0, (self._start, _NO_BOM))
            for entry, start in sources:
                self._run(entry, start, ch, pos, phase, eom is not None, nxt, fins, seen)
            if _NO_BOM in fins:
                return MatchResult(end=min(max(pos, 0), n))
            if fins:
                bom = min(fins)
                eom = pos
                inject = False
                nxt = {index: s for index, s in nxt.items() if s <= bom}
            threads = nxt
            if not threads and not inject:
                break
        if eom is None or bom is None:
            return None
        begin = max(bom, 0)
        end = min(eom, n)
        return MatchResult(end=end, match=text[begin:end] if end > begin else "")


def compile_regex(pattern: str, ignore_case: bool = False) -> CompiledRegex:
    """Compile ``pattern``; raise RegexError if it is malformed."""
    return CompiledRegex(pattern, ignore_case)