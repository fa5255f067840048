"""
Keeping the README honest.

Source files mark regions with ``# [docs:NAME]`` ... ``# [/docs:NAME]``. A
``python`` code fence in the README whose first line is ``# docs:NAME`` must
repeat that region verbatim, and every ``python`` fence must parse.
"""

import ast
import re
import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

_FENCE_OPEN = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})\s*(?P<info>.*)$")
_REGION_MARKER = re.compile(r"^\s*# \[(?P<closing>/?)docs:(?P<name>[\w.-]+)\]\s*$")
_FENCE_REFERENCE = re.compile(r"^# docs:(?P<name>[\w.-]+)\s*$")
_PYTHON_LANGUAGES = frozenset({"python", "python3", "py", "py3"})


class SnippetError(ValueError):
    """Region markers in a source file are malformed."""


@dataclass(frozen=True, kw_only=True, slots=True)
class CodeFence:
    language: str
    code: str
    line: int
    """1-based line number of the opening fence."""

    @property
    def reference(self) -> str | None:
        """The region name from a leading ``# docs:NAME`` line, if any."""
        first_line, _, _ = self.code.partition("\n")
        match = _FENCE_REFERENCE.match(first_line)
        return None if match is None else match["name"]

    @property
    def body(self) -> str:
        """The code without its ``# docs:NAME`` line."""
        if self.reference is None:
            return self.code
        _, _, rest = self.code.partition("\n")
        return rest


@dataclass(frozen=True, kw_only=True, slots=True)
class SnippetProblem:
    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


def extract_code_fences(markdown: str) -> list[CodeFence]:
    fences: list[CodeFence] = []
    lines = markdown.splitlines()
    index = 0
    while index < len(lines):
        match = _FENCE_OPEN.match(lines[index])
        # A backtick fence cannot carry a backtick in its info string.
        if match is None or (match["fence"][0] == "`" and "`" in match["info"]):
            index += 1
            continue
        opening = match["fence"]
        start = index
        body: list[str] = []
        index += 1
        while index < len(lines):
            stripped = lines[index].strip()
            if stripped.startswith(opening[0] * len(opening)) and not stripped.strip(opening[0]):
                break
            body.append(lines[index])
            index += 1
        # An unclosed fence runs to the end of the document, as in CommonMark.
        fences.append(
            CodeFence(
                language=match["info"].partition(" ")[0].lower(),
                code=textwrap.dedent("\n".join(body)),
                line=start + 1,
            )
        )
        index += 1
    return fences


def extract_marked_regions(source: str, *, origin: str = "<source>") -> dict[str, str]:
    regions: dict[str, str] = {}
    open_name: str | None = None
    open_line = 0
    body: list[str] = []
    for line_number, line in enumerate(source.splitlines(), start=1):
        marker = _REGION_MARKER.match(line)
        if marker is None:
            if open_name is not None:
                body.append(line)
            continue
        name = marker["name"]
        match (marker["closing"], open_name):
            case ("", None):
                if name in regions:
                    raise SnippetError(f"{origin}:{line_number}: duplicate region {name!r}")
                open_name, open_line, body = name, line_number, []
            case ("", _):
                raise SnippetError(
                    f"{origin}:{line_number}: region {name!r} opened inside {open_name!r}"
                )
            case ("/", current) if current == name:
                regions[name] = textwrap.dedent("\n".join(body)).strip("\n")
                open_name = None
            case _:
                raise SnippetError(
                    f"{origin}:{line_number}: unexpected closing marker for {name!r}"
                )
    if open_name is not None:
        raise SnippetError(f"{origin}:{open_line}: region {open_name!r} is never closed")
    return regions


def collect_regions(paths: Iterable[Path]) -> dict[str, str]:
    """Merge the regions of several files; a name may appear in one file only."""
    regions: dict[str, str] = {}
    for path in paths:
        source = path.read_text(encoding="utf-8")
        for name, code in extract_marked_regions(source, origin=str(path)).items():
            if name in regions:
                raise SnippetError(f"{path}: region {name!r} is defined in another file too")
            regions[name] = code
    return regions


def check_document(markdown: str, regions: Mapping[str, str]) -> list[SnippetProblem]:
    problems: list[SnippetProblem] = []
    for fence in extract_code_fences(markdown):
        if fence.language not in _PYTHON_LANGUAGES:
            continue
        try:
            ast.parse(fence.code)
        except SyntaxError as e:
            problems.append(SnippetProblem(line=fence.line, message=f"does not parse: {e.msg}"))
            continue
        name = fence.reference
        if name is None:
            continue
        try:
            expected = regions[name]
        except KeyError:
            problems.append(SnippetProblem(line=fence.line, message=f"unknown region {name!r}"))
            continue
        if fence.body.strip("\n") != expected:
            problems.append(
                SnippetProblem(line=fence.line, message=f"differs from region {name!r}")
            )
    return problems
