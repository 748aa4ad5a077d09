"""
Type relationship analysis for resolved item documentation.

Reads signature-like lines out of the converted page and reports which types
an item's methods return and accept, its associated types and the traits it
implements. This is textual pattern matching, not a Rust parser: results are
best-effort and can miss or misread unusual signatures.
"""

import logging
from typing import List, Optional

from cratedocs.analysis.scanner import (
    associated_type,
    dedupe,
    implemented_trait,
    infer_item_kind,
    parameter_types,
    return_type,
    signature_lines,
    FENCE,
)
from cratedocs.schemas import ItemLocator, RelationshipReport

logger = logging.getLogger(__name__)

KIND_LABELS = {
    "struct": "struct",
    "trait": "trait",
    "enum": "enum",
    "fn": "function",
}

NONE_FOUND = "_None found in the documentation._"

RESULT_GUIDANCE = "fallible; propagate the error with `?` or handle `Ok`/`Err` with `match`"
OPTION_GUIDANCE = "may be absent; handle with `if let Some(..)`, `match` or `unwrap_or`"


class RelationshipAnalyzer:
    """Extract a ``RelationshipReport`` from converted documentation."""

    def analyze(self, markdown: str, locator: ItemLocator) -> RelationshipReport:
        lines = markdown.splitlines()
        item_name = locator.item_name

        returns: List[str] = []
        params: List[str] = []
        for line in signature_lines(lines):
            found = return_type(line)
            if found and found not in ("Self", item_name):
                returns.append(found)
            params.extend(parameter_types(line))

        associated = [name for name in (associated_type(line) for line in lines) if name]
        traits = [name for name in (implemented_trait(line) for line in lines) if name]

        report = RelationshipReport(
            locator=locator,
            kind=infer_item_kind(markdown, item_name),
            return_types=dedupe(returns),
            parameter_types=dedupe(params),
            associated_types=dedupe(associated),
            implemented_traits=dedupe(traits),
        )
        logger.debug(
            f"Relationships for {locator.rust_path}: {len(report.return_types)} return, "
            f"{len(report.parameter_types)} parameter, {len(report.implemented_traits)} trait"
        )
        return report


# ============================================================================
# RENDERING
# ============================================================================

def annotate_return_type(type_text: str) -> str:
    if type_text.startswith("Result<"):
        return f"- `{type_text}`: {RESULT_GUIDANCE}"
    if type_text.startswith("Option<"):
        return f"- `{type_text}`: {OPTION_GUIDANCE}"
    return f"- `{type_text}`"


def annotate_parameter_type(type_text: str) -> str:
    if type_text.startswith("&mut "):
        return f"- `{type_text}`: mutable borrow; the callee may modify the value in place"
    if type_text.startswith("&"):
        return f"- `{type_text}`: borrowed reference; the caller keeps ownership"
    if type_text.startswith("impl "):
        bound = type_text[len("impl "):].strip()
        return f"- `{type_text}`: accepts any type implementing `{bound}`"
    return f"- `{type_text}`"


def _bullets(items: List[str], formatter=None) -> List[str]:
    if not items:
        return [NONE_FOUND]
    formatter = formatter or (lambda item: f"- `{item}`")
    return [formatter(item) for item in items]


def usage_pattern(kind: Optional[str], locator: ItemLocator) -> str:
    """Kind-specific snippet showing how the item is typically combined with other types."""
    name = locator.item_name
    use_line = f"use {locator.rust_path};"

    if kind == "struct":
        body = [
            use_line,
            "",
            f"let value = {name}::new();",
            "// Methods taking &self borrow the value; methods taking self consume it",
            f"fn inspect(item: &{name}) {{ /* ... */ }}",
            "inspect(&value);",
        ]
    elif kind == "trait":
        body = [
            use_line,
            "",
            "// Static dispatch: accept any implementor",
            f"fn with_generic<T: {name}>(value: &T) {{ /* ... */ }}",
            "",
            "// Dynamic dispatch through a trait object",
            f"fn with_dyn(value: &dyn {name}) {{ /* ... */ }}",
        ]
    elif kind == "enum":
        body = [
            use_line,
            "",
            f"fn describe(value: &{name}) -> &'static str {{",
            "    match value {",
            f"        // {name}::Variant => \"variant\",",
            "        _ => \"other\",",
            "    }",
            "}",
        ]
    elif kind == "fn":
        body = [
            use_line,
            "",
            f"let output = {name}(/* arguments */);",
            "// Pass the output on to whatever consumes its return type",
        ]
    else:
        body = [
            use_line,
            "",
            f"// Consult the documentation of `{name}` for how it combines with other types.",
        ]
    return "\n".join([f"{FENCE}rust"] + body + [FENCE])


RESULT_SECTION = f"""## Working with Result types

Some methods return `Result<T, E>`. Propagate errors with `?` inside functions
that themselves return a `Result`, or handle both outcomes explicitly:

{FENCE}rust
match value.method() {{
    Ok(output) => {{ /* use output */ }}
    Err(error) => eprintln!("failed: {{error}}"),
}}
{FENCE}"""

OPTION_SECTION = f"""## Working with Option types

Some methods return `Option<T>`. Check for presence before using the value,
or fall back to a default:

{FENCE}rust
if let Some(output) = value.method() {{
    /* use output */
}}
let output = value.method().unwrap_or_default();
{FENCE}"""


def render_report(report: RelationshipReport) -> str:
    """Assemble the Markdown report with its fixed sections."""
    locator = report.locator
    kind_label = KIND_LABELS.get(report.kind or "", "item")
    article = "an" if kind_label[0] in "aeiou" else "a"
    version = locator.version or "latest"

    parts = [
        f"# Type Relationships for `{locator.item_path}`",
        "",
        "## Overview",
        "",
        f"`{locator.item_name}` appears to be {article} {kind_label} in the `{locator.crate_name}` "
        f"crate (version {version}).",
        "This report is assembled heuristically from the documentation text and may be incomplete.",
        "",
        "## Return Types",
        "",
        *_bullets(report.return_types, annotate_return_type),
        "",
        "## Parameter Types",
        "",
        *_bullets(report.parameter_types, annotate_parameter_type),
        "",
        "## Associated Types",
        "",
        *_bullets(report.associated_types),
        "",
        "## Implemented Traits",
        "",
        *_bullets(report.implemented_traits),
        "",
        "## Common Usage Patterns",
        "",
        usage_pattern(report.kind, locator),
    ]

    if report.returns_result:
        parts.extend(["", RESULT_SECTION])
    if report.returns_option:
        parts.extend(["", OPTION_SECTION])

    return "\n".join(parts) + "\n"
