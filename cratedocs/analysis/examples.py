"""
Usage example extraction from resolved item documentation.

Three stages, the first one producing fenced code wins:
1. The document's own "Examples" section (heading level 1 or 2)
2. Every fenced code block in the document, numbered "Example N"
3. A generated skeleton for the inferred item kind, marked as generated
"""

import logging
from typing import List, Optional

from cratedocs.analysis.scanner import (
    find_examples_heading,
    infer_item_kind,
    is_fence,
    iter_code_blocks,
    FENCE,
)
from cratedocs.schemas import CodeExample, ExampleSet, ItemLocator

logger = logging.getLogger(__name__)

EXAMPLE_USAGE_ANNOTATION = "Example usage:"
GENERATED_DISCLAIMER = (
    "> **Note:** No examples were found in the documentation. The example below "
    "was generated from the item's name and kind; it is not extracted from the "
    "official docs and may need adjusting before it compiles."
)


def _has_code(example: CodeExample) -> bool:
    return bool("\n".join(example.code.splitlines()[1:-1]).strip())


def _title(locator: ItemLocator) -> str:
    return f"# Examples for `{locator.item_path}`"


class ExampleExtractor:
    """Derive an examples document from an item's converted documentation."""

    def extract(self, markdown: str, locator: ItemLocator) -> ExampleSet:
        lines = markdown.splitlines()

        result = self.from_examples_section(lines, locator)
        if result is None:
            result = self.from_code_blocks(lines, locator)
        if result is None:
            result = self.generate(markdown, locator)

        logger.debug(f"Examples for {locator.rust_path} from stage '{result.source}' ({len(result.examples)} blocks)")
        return result

    # ========================================================================
    # STAGE 1: EXPLICIT SECTION
    # ========================================================================

    def from_examples_section(self, lines: List[str], locator: ItemLocator) -> Optional[ExampleSet]:
        """
        Collect everything after the Examples heading.

        Collection runs to the end of the document; later headings are kept.
        An "Example usage:" line is inserted before each block that follows
        prose.
        """
        start = find_examples_heading(lines)
        if start is None:
            return None

        output: List[str] = []
        examples: List[CodeExample] = []
        prose: List[str] = []
        block: Optional[List[str]] = None

        for line in lines[start + 1:]:
            if is_fence(line):
                if block is None:
                    if prose:
                        output.append(EXAMPLE_USAGE_ANNOTATION)
                    block = [line]
                else:
                    block.append(line)
                    examples.append(self._section_example(block, prose, len(examples) + 1))
                    block, prose = None, []
                output.append(line)
                continue

            if block is not None:
                block.append(line)
            elif line.strip():
                prose.append(line.strip())
            output.append(line)

        if block is not None:
            block.append(FENCE)
            output.append(FENCE)
            examples.append(self._section_example(block, prose, len(examples) + 1))

        if not any(_has_code(example) for example in examples):
            return None

        markdown = "\n".join([_title(locator), ""] + output).rstrip() + "\n"
        return ExampleSet(source="section", examples=examples, markdown=markdown)

    def _section_example(self, block: List[str], prose: List[str], number: int) -> CodeExample:
        return CodeExample(
            title=f"Example {number}",
            code="\n".join(block),
            description=" ".join(prose),
        )

    # ========================================================================
    # STAGE 2: ALL CODE BLOCKS
    # ========================================================================

    def from_code_blocks(self, lines: List[str], locator: ItemLocator) -> Optional[ExampleSet]:
        examples = [
            CodeExample(
                title=f"Example {number}",
                code=block.code,
                description=" ".join(block.preceding_text),
            )
            for number, block in enumerate(iter_code_blocks(lines), start=1)
        ]
        if not examples:
            return None

        parts = [
            _title(locator),
            "",
            "No Examples section was found; these code blocks were collected from the documentation.",
        ]
        for example in examples:
            parts.extend(["", f"## {example.title}", "", example.code])

        return ExampleSet(source="code_blocks", examples=examples, markdown="\n".join(parts) + "\n")

    # ========================================================================
    # STAGE 3: GENERATED
    # ========================================================================

    def generate(self, markdown: str, locator: ItemLocator) -> ExampleSet:
        kind = infer_item_kind(markdown, locator.item_name)
        example = CodeExample(
            title=f"Basic usage of {locator.item_name}",
            code=generated_snippet(kind, locator),
            description=GENERATED_DISCLAIMER,
        )
        parts = [
            _title(locator),
            "",
            GENERATED_DISCLAIMER,
            "",
            f"## {example.title}",
            "",
            example.code,
        ]
        return ExampleSet(source="generated", examples=[example], markdown="\n".join(parts) + "\n")


def generated_snippet(kind: Optional[str], locator: ItemLocator) -> str:
    """Skeleton usage code for a kind keyword from ``infer_item_kind``."""
    name = locator.item_name
    use_line = f"use {locator.rust_path};"

    if kind == "struct":
        body = [
            use_line,
            "",
            "fn main() {",
            f"    // Create a new {name}",
            f"    let instance = {name}::new();",
            "",
            "    // Call methods on the instance",
            "    // instance.method_name();",
            "}",
        ]
    elif kind == "trait":
        body = [
            use_line,
            "",
            "struct MyType;",
            "",
            f"impl {name} for MyType {{",
            "    // Implement the required methods here",
            "}",
        ]
    elif kind == "enum":
        body = [
            use_line,
            "",
            f"fn handle(value: {name}) {{",
            "    match value {",
            f"        // {name}::Variant => {{ ... }}",
            "        _ => {}",
            "    }",
            "}",
        ]
    elif kind == "fn":
        body = [
            use_line,
            "",
            "fn main() {",
            f"    let result = {name}(/* arguments */);",
            "}",
        ]
    else:
        body = [
            use_line,
            "",
            f"// See the documentation of `{name}` for how it is used.",
        ]

    return "\n".join([f"{FENCE}rust"] + body + [FENCE])
