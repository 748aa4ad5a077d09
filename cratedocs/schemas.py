"""
Pydantic schemas for cratedocs.

Architecture:
- ItemKind: Candidate rustdoc item kinds, in resolution order
- ItemLocator: (crate, item path, version) with the path already normalized
- ResolvedDocument: A fetched and converted item page
- CodeExample: One usage example extracted from (or generated for) an item
- ExampleSet: The examples for an item plus their rendered Markdown
- RelationshipReport: Heuristic type-relationship data for an item
"""

from enum import Enum
from typing import List, Optional, Tuple, Literal

from pydantic import BaseModel, Field

from cratedocs.errors import InvalidItemPathError

PATH_SEPARATOR = "::"
MODULE_SEPARATOR = "/"


# ============================================================================
# RESOLUTION SCHEMAS
# ============================================================================

class ItemKind(str, Enum):
    """Rustdoc item kinds. ``url_prefix`` is the page prefix on the docs host."""

    STRUCT = "struct"
    ENUM = "enum"
    TRAIT = "trait"
    FUNCTION = "function"
    MACRO = "macro"

    @property
    def url_prefix(self) -> str:
        if self is ItemKind.FUNCTION:
            return "fn"
        return self.value


# Tie-break order: the first kind whose page exists wins.
CANDIDATE_KINDS: Tuple[ItemKind, ...] = (
    ItemKind.STRUCT,
    ItemKind.ENUM,
    ItemKind.TRAIT,
    ItemKind.FUNCTION,
    ItemKind.MACRO,
)


class ItemLocator(BaseModel):
    """
    Identifies an item inside a crate.

    ``item_path`` never carries the ``<crate>::`` prefix; use ``parse`` to
    build a locator from raw caller input.
    """
    crate_name: str = Field(description="Crate name as published on the registry")
    item_path: str = Field(description="Path inside the crate, e.g. 'io::AsyncRead'")
    version: Optional[str] = Field(None, description="Crate version, None for latest")

    @classmethod
    def parse(cls, crate_name: str, item_path: str, version: Optional[str] = None) -> "ItemLocator":
        prefix = f"{crate_name}{PATH_SEPARATOR}"
        if item_path.startswith(prefix):
            item_path = item_path[len(prefix):]
        return cls(crate_name=crate_name, item_path=item_path, version=version)

    @property
    def segments(self) -> List[str]:
        return self.item_path.split(PATH_SEPARATOR)

    @property
    def item_name(self) -> str:
        name = self.segments[-1].strip()
        if not name:
            raise InvalidItemPathError(self.item_path)
        return name

    @property
    def module_path(self) -> str:
        """Module segments joined with '/', empty for crate-root items."""
        return MODULE_SEPARATOR.join(self.segments[:-1])

    @property
    def crate_ident(self) -> str:
        """Crate name as it appears in Rust source (hyphens become underscores)."""
        return self.crate_name.replace("-", "_")

    @property
    def rust_path(self) -> str:
        return f"{self.crate_ident}{PATH_SEPARATOR}{self.item_path}"


class ResolvedDocument(BaseModel):
    """An item page fetched from the documentation host and converted to Markdown."""
    locator: ItemLocator
    markdown: str = Field(description="Normalized documentation text")
    kind: Optional[ItemKind] = Field(None, description="Kind whose URL answered, None on cache hit")
    url: Optional[str] = Field(None, description="URL the page was fetched from, None on cache hit")
    from_cache: bool = False


# ============================================================================
# EXAMPLE SCHEMAS
# ============================================================================

class CodeExample(BaseModel):
    """A single usage example."""
    title: str = Field(description="Heading shown above the example")
    code: str = Field(description="Fenced code block, fences included")
    description: str = Field("", description="Prose preceding the example, if any")


class ExampleSet(BaseModel):
    """Examples for one item, tagged with the extraction stage that produced them."""
    source: Literal["section", "code_blocks", "generated"]
    examples: List[CodeExample] = Field(default_factory=list)
    markdown: str = Field(description="Rendered examples document")


# ============================================================================
# RELATIONSHIP SCHEMAS
# ============================================================================

class RelationshipReport(BaseModel):
    """Heuristic view of how an item's methods relate to other types."""
    locator: ItemLocator
    kind: Optional[str] = Field(None, description="Inferred kind keyword (struct, trait, enum, fn)")
    return_types: List[str] = Field(default_factory=list)
    parameter_types: List[str] = Field(default_factory=list)
    associated_types: List[str] = Field(default_factory=list)
    implemented_traits: List[str] = Field(default_factory=list)

    @property
    def returns_result(self) -> bool:
        return any(t.startswith("Result<") for t in self.return_types)

    @property
    def returns_option(self) -> bool:
        return any(t.startswith("Option<") for t in self.return_types)
