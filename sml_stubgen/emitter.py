"""
Stage 3: Stub Emitter.

Serializes a StubFile as module-language text:

  (*!
   * page description, wrapped
   *)
  signature FOO = sig
    (*!
     * prose for the next declaration
     *)
    val x : int
    structure Inner : sig
      ...
    end
  end

  structure Foo = struct end

Declarations arrive as a flat list; nesting is recovered from lines ending in
": sig" (open a level) and lines starting or ending with "end" (close one).

Pipeline position: Stage 3 of 3 (Extractor → Reconciler → Emitter).
Input:  StubFile
Output: StubResult (text + warnings, diagnostics included)
"""

from typing import Optional

from .config import StubgenConfig
from .schemas import PageWarning, ReconciliationDiagnostics, StubFile, StubResult, WarningKind
from .tokenizer import END_KEYWORD
from .logger import get_module_logger

logger = get_module_logger("emitter")

WHERE_TYPE = "where type"
OPENS_SIGNATURE = ": sig"

COMMENT_OPEN = "(*!"
COMMENT_LINE = " *"
COMMENT_CLOSE = " *)"


class Emitter:
    """Formats reconciled page content as stub text."""

    def __init__(self, config: Optional[StubgenConfig] = None):
        self.config = config or StubgenConfig()

    def indent(self, level: int) -> str:
        return self.config.indent * level

    def write_comment(self, lines: list[str], indent: str, paragraphs: list[str]) -> None:
        """
        Append a word-wrapped comment block to lines.

        Words are added to a line until the next one would push it past
        max_line_width; paragraphs are separated by an empty line. A single
        word longer than the width still gets a line of its own.
        """
        if not self.config.emit_comments:
            return

        line_start = indent + COMMENT_LINE
        lines.append(indent + COMMENT_OPEN)
        for i, paragraph in enumerate(paragraphs):
            current = line_start
            for word in paragraph.split(" "):
                to_add = " " + word
                if current != line_start and len(current) + len(to_add) > self.config.max_line_width:
                    lines.append(current)
                    current = line_start + to_add
                else:
                    current += to_add
            lines.append(current)
            if i + 1 != len(paragraphs):
                lines.append("")
        lines.append(indent + COMMENT_CLOSE)

    def split_where_type(self, lines: list[str], indent: str, text: str) -> None:
        """Append text, moving each "where type" clause to an indented line of its own."""
        first, *clauses = text.split(WHERE_TYPE)
        lines.append(indent + first.strip())
        for clause in clauses:
            lines.append(indent + self.config.indent + WHERE_TYPE + " " + clause.strip())

    def emit(self, stub: StubFile) -> StubResult:
        """Serialize a stub and collect the warnings found along the way."""
        lines: list[str] = []
        warnings: list[PageWarning] = []

        if stub.description_paragraphs:
            self.write_comment(lines, "", stub.description_paragraphs)

        if stub.signature_name is None:
            if stub.declarations:
                warnings.append(PageWarning(
                    page=stub.name,
                    kind=WarningKind.DECLARATIONS_WITHOUT_SIGNATURE,
                    message=f"no signature name but {len(stub.declarations)} declarations",
                    data={"declarations": [d.declaration for d in stub.declarations]},
                ))
        else:
            self._emit_signature(lines, warnings, stub)

        lines.append("")
        for name in stub.auxiliary_names:
            self.split_where_type(lines, "", name + " = struct end")
        if stub.auxiliary_names:
            lines.append("")

        warnings.extend(diagnostic_warnings(stub.name, stub.diagnostics))
        for warning in warnings:
            logger.warning(str(warning))

        return StubResult(
            name=stub.name,
            text="\n".join(lines),
            warnings=warnings,
            diagnostics=stub.diagnostics,
        )

    def _emit_signature(self, lines: list[str], warnings: list[PageWarning],
                        stub: StubFile) -> None:
        lines.append(stub.signature_name + " = sig")
        level = 1
        for annotated in stub.declarations:
            if annotated.prose is not None:
                self.write_comment(lines, self.indent(level), [annotated.prose])
            trimmed = annotated.declaration.strip()
            words = trimmed.split(" ")
            # "end where type t = int" closes a level as well as a bare "end"
            if words[0] == END_KEYWORD or words[-1] == END_KEYWORD:
                if level == 1:
                    # Never close the outer signature from inside it
                    warnings.append(PageWarning(
                        page=stub.name,
                        kind=WarningKind.UNBALANCED_NESTING,
                        message="'end' with no open sub-signature",
                        data={"declaration": trimmed},
                    ))
                else:
                    level -= 1
            self.split_where_type(lines, self.indent(level), annotated.declaration)
            if trimmed.endswith(OPENS_SIGNATURE):
                level += 1
        if level != 1:
            warnings.append(PageWarning(
                page=stub.name,
                kind=WarningKind.UNBALANCED_NESTING,
                message=f"{level - 1} sub-signature(s) left open",
                data={"open": level - 1},
            ))
        lines.append("end")


def diagnostic_warnings(page: str, diagnostics: ReconciliationDiagnostics) -> list[PageWarning]:
    """Turn reconciliation diagnostics into page warnings."""
    warnings = []
    if diagnostics.unused:
        warnings.append(PageWarning(
            page=page,
            kind=WarningKind.UNUSED_DOC,
            message=f"unused: {', '.join(diagnostics.unused)}",
            data={"unused": dict(diagnostics.unused)},
        ))
    if diagnostics.duplicate:
        warnings.append(PageWarning(
            page=page,
            kind=WarningKind.DUPLICATE_DOC,
            message=f"duplicate: {', '.join(diagnostics.duplicate)}",
            data={"duplicate": dict(diagnostics.duplicate)},
        ))
    if diagnostics.used_multiple:
        names = sorted(diagnostics.used_multiple)
        warnings.append(PageWarning(
            page=page,
            kind=WarningKind.MULTIPLY_USED_DOC,
            message=f"used multiple times: {', '.join(names)}",
            data={"used_multiple": names},
        ))
    return warnings


def emit(stub: StubFile, config: Optional[StubgenConfig] = None) -> StubResult:
    """Convenience function to emit one stub."""
    return Emitter(config).emit(stub)
