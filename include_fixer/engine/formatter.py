"""Include-aware replacement cleanup.

Places header insertions inside the existing include block, drops
insertions of headers that are already included, and applies replacements
to source text.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..errors import FormattingError
from ..models import Replacement

# Offset of a header insertion whose position is left to the formatter
END_OF_INCLUDES = 2**32 - 1

_INCLUDE_LINE = re.compile(r'^[ \t]*#[ \t]*include[ \t]*([<"][^>"\n]*[>"])')
_INCLUDE_TEXT = re.compile(r'^#include ([<"][^>"\n]*[>"])\n$')
_GUARD_IFNDEF = re.compile(r"^[ \t]*#[ \t]*ifndef[ \t]+(\w+)")
_GUARD_DEFINE = re.compile(r"^[ \t]*#[ \t]*define[ \t]+(\w+)")
_PRAGMA_ONCE = re.compile(r"^[ \t]*#[ \t]*pragma[ \t]+once\b")
_IF_ZERO = re.compile(r"^[ \t]*#[ \t]*if[ \t]+0\b")
_IF = re.compile(r"^[ \t]*#[ \t]*if(?:n?def)?\b")
_ELSE = re.compile(r"^[ \t]*#[ \t]*(?:else|elif)\b")
_ENDIF = re.compile(r"^[ \t]*#[ \t]*endif\b")
_LEXICAL = re.compile(
    r"//[^\n]*"
    r"|/\*.*?\*/"
    r"|(?P<open>/\*)"
    r'|"(?:\\.|[^"\\\n])*"'
    r"|'(?:\\.|[^'\\\n])*'",
    re.S,
)


@dataclass(frozen=True)
class FormatStyle:
    """Include handling options of a formatting style."""

    name: str
    sort_includes: bool = True


STYLES: dict[str, FormatStyle] = {
    "llvm": FormatStyle("llvm"),
    "google": FormatStyle("google"),
    "chromium": FormatStyle("chromium"),
    "mozilla": FormatStyle("mozilla"),
    "webkit": FormatStyle("webkit"),
    "none": FormatStyle("none", sort_includes=False),
}


def get_style(style: "str | FormatStyle") -> FormatStyle:
    """Look up a style by name (case-insensitive)."""
    if isinstance(style, FormatStyle):
        return style
    try:
        return STYLES[style.lower()]
    except KeyError:
        raise ValueError(f"Unknown style: {style} (expected one of {', '.join(STYLES)})") from None


@dataclass
class _IncludeLine:
    start: int
    end: int  # offset just past the line, newline included
    target: str

    @property
    def angled(self) -> bool:
        return self.target.startswith("<")


def _lines(source: str) -> list[tuple[int, int, str]]:
    """Split source into (start, end, text) triples.

    ``end`` is just past the line's newline; ``text`` has no line terminator.
    """
    result = []
    offset = 0
    for line in source.split("\n"):
        end = min(offset + len(line) + 1, len(source))
        result.append((offset, end, line.rstrip("\r")))
        offset += len(line) + 1
    return result


def _check_comments(source: str, file_path: str):
    for match in _LEXICAL.finditer(source):
        if match.group("open"):
            raise FormattingError(file_path, f"unterminated comment at offset {match.start()}")


def _block_comments(source: str) -> list[tuple[int, int]]:
    return [m.span() for m in _LEXICAL.finditer(source) if m.group().startswith("/*")]


def _include_blocks(source: str) -> list[list[_IncludeLine]]:
    """Group include lines into blocks of consecutive lines.

    Lines inside block comments or ``#if 0`` regions are not includes.
    """
    comments = _block_comments(source)
    blocks: list[list[_IncludeLine]] = []
    previous_end = -1
    disabled = 0
    for offset, end, line in _lines(source):
        if any(start <= offset < stop for start, stop in comments):
            continue
        if disabled:
            if _IF.match(line):
                disabled += 1
            elif _ENDIF.match(line):
                disabled -= 1
            elif disabled == 1 and _ELSE.match(line):
                disabled = 0
            continue
        if _IF_ZERO.match(line):
            disabled = 1
            continue
        match = _INCLUDE_LINE.match(line)
        if not match:
            continue
        entry = _IncludeLine(start=offset, end=end, target=match.group(1))
        if blocks and previous_end == offset:
            blocks[-1].append(entry)
        else:
            blocks.append([entry])
        previous_end = end
    return blocks


def _top_of_file(source: str) -> int:
    """Offset after leading comments, blank lines and the header guard."""
    offset = 0
    in_comment = False
    guard: Optional[str] = None
    for _, end, line in _lines(source):
        stripped = line.strip()
        if in_comment:
            in_comment = "*/" not in stripped
        elif not stripped or stripped.startswith("//"):
            pass
        elif stripped.startswith("/*"):
            in_comment = "*/" not in stripped[2:]
        elif _PRAGMA_ONCE.match(line):
            pass
        elif guard is None and _GUARD_IFNDEF.match(line):
            guard = _GUARD_IFNDEF.match(line).group(1)
            continue
        elif guard is not None:
            define = _GUARD_DEFINE.match(line)
            if define and define.group(1) == guard:
                offset = end
            break
        else:
            break
        offset = end
    return offset


class IncludeFormatter:
    """Default formatter collaborator for header insertions."""

    def apply_and_cleanup(
        self,
        source: str,
        replacements: list[Replacement],
        style: "str | FormatStyle" = "llvm",
    ) -> list[Replacement]:
        """Resolve header insertions and validate replacements.

        Insertions at ``END_OF_INCLUDES`` get a concrete offset; insertions of
        an include already present in ``source`` (or earlier in the list) are
        dropped.

        Returns:
            Replacements with concrete offsets, ordered by offset.

        Raises:
            FormattingError: If the source is malformed or a replacement
                falls outside it.
        """
        style = get_style(style)
        result: list[Replacement] = []
        if not replacements:
            return result

        file_path = replacements[0].file_path
        _check_comments(source, file_path)

        blocks = _include_blocks(source)
        present = {line.target for block in blocks for line in block}

        for replacement in replacements:
            if replacement.offset != END_OF_INCLUDES:
                if replacement.offset + replacement.length > len(source):
                    raise FormattingError(
                        replacement.file_path,
                        f"replacement at {replacement.offset}+{replacement.length} "
                        f"exceeds source length {len(source)}",
                    )
                result.append(replacement)
                continue

            match = _INCLUDE_TEXT.match(replacement.text)
            if not match:
                raise FormattingError(replacement.file_path, f"not an include line: {replacement.text!r}")
            target = match.group(1)
            if target in present:
                continue
            present.add(target)

            offset = self._insertion_offset(source, blocks, target, style)
            text = replacement.text
            if offset == len(source) and source and not source.endswith("\n"):
                text = "\n" + text
            result.append(Replacement(replacement.file_path, offset, 0, text))

        return sorted(result, key=lambda r: r.offset)

    def _insertion_offset(
        self,
        source: str,
        blocks: list[list[_IncludeLine]],
        target: str,
        style: FormatStyle,
    ) -> int:
        if not blocks:
            return _top_of_file(source)

        angled = target.startswith("<")
        block = next(
            (b for b in blocks if any(line.angled == angled for line in b)),
            blocks[-1],
        )
        targets = [line.target for line in block]
        if style.sort_includes and targets == sorted(targets):
            for line in block:
                if line.target > target:
                    return line.start
        return block[-1].end


def apply_replacements(source: str, replacements: list[Replacement]) -> str:
    """Apply replacements to source text.

    Replacements at the same offset are inserted in list order.

    Raises:
        FormattingError: If a replacement falls outside the source or
            overlaps another one.
    """
    ordered = sorted(enumerate(replacements), key=lambda item: (item[1].offset, item[0]))
    pieces: list[str] = []
    cursor = 0
    for _, replacement in ordered:
        if replacement.offset < cursor or replacement.offset + replacement.length > len(source):
            raise FormattingError(
                replacement.file_path,
                f"cannot apply replacement at {replacement.offset}+{replacement.length}",
            )
        pieces.append(source[cursor:replacement.offset])
        pieces.append(replacement.text)
        cursor = replacement.offset + replacement.length
    pieces.append(source[cursor:])
    return "".join(pieces)
