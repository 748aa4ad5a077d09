"""Tests for analysis/relationships.py: extraction and report rendering."""

from cratedocs.analysis import RelationshipAnalyzer, render_report
from cratedocs.analysis.relationships import NONE_FOUND, annotate_parameter_type
from cratedocs.schemas import ItemLocator

LOCATOR = ItemLocator.parse("demo", "widgets::Foo")

DOC = "\n".join([
    "# Struct Foo",
    "",
    "```rust",
    "pub struct Foo { /* private fields */ }",
    "```",
    "",
    "## Implementations",
    "",
    "### impl Foo",
    "",
    "#### pub fn new() -> Foo",
    "#### pub fn with_name(name: &str) -> Self",
    "#### pub fn foo(&self, x: i32) -> Result<String, Error>",
    "#### pub fn find(&self, key: impl AsRef<str>) -> Option<&Item>",
    "#### pub fn reset(&mut self, buf: &mut Vec<u8>) -> usize",
    "#### pub fn again(&self, x: i32) -> Result<String, Error>",
    "",
    "## Trait Implementations",
    "",
    "### impl<T: Debug> Debug for Foo",
    "### impl Clone for Foo",
    "### impl Iterator for Foo",
    "",
    "#### type Item = u32",
    "#### type Item = u32",
])


def section(markdown: str, title: str) -> str:
    """Text of one '## title' section, up to the next '## ' heading."""
    start = markdown.index(f"## {title}\n")
    end = markdown.find("\n## ", start + 1)
    return markdown[start:end if end != -1 else None]


class TestRelationshipAnalyzer:
    def test_return_types_deduped_and_self_excluded(self):
        report = RelationshipAnalyzer().analyze(DOC, LOCATOR)
        assert report.return_types == ["Result<String, Error>", "Option<&Item>", "usize"]

    def test_parameter_types_exclude_receivers(self):
        report = RelationshipAnalyzer().analyze(DOC, LOCATOR)
        assert report.parameter_types == ["&str", "i32", "impl AsRef<str>", "&mut Vec<u8>"]

    def test_traits_and_associated_types(self):
        report = RelationshipAnalyzer().analyze(DOC, LOCATOR)
        assert report.implemented_traits == ["Debug", "Clone", "Iterator"]
        assert report.associated_types == ["Item"]

    def test_kind_is_inferred(self):
        assert RelationshipAnalyzer().analyze(DOC, LOCATOR).kind == "struct"

    def test_closure_parameters_do_not_leak_into_return_types(self):
        doc = "\n".join([
            "# Enum Option",
            "",
            "#### pub fn map<U, F>(self, f: F) -> Option<U>",
            "#### pub fn and_then<U, F>(self, f: impl FnOnce(T) -> Option<U>) -> Option<U>",
        ])
        report = RelationshipAnalyzer().analyze(doc, ItemLocator.parse("std", "option::Option"))
        assert report.return_types == ["Option<U>"]
        assert report.returns_option


class TestRenderReport:
    def render(self, doc: str = DOC, locator: ItemLocator = LOCATOR) -> str:
        return render_report(RelationshipAnalyzer().analyze(doc, locator))

    def test_fixed_sections_in_order(self):
        markdown = self.render()
        headings = [line for line in markdown.splitlines() if line.startswith("## ")]
        assert headings == [
            "## Overview",
            "## Return Types",
            "## Parameter Types",
            "## Associated Types",
            "## Implemented Traits",
            "## Common Usage Patterns",
            "## Working with Result types",
            "## Working with Option types",
        ]

    def test_result_return_type_has_guidance(self):
        returns = section(self.render(), "Return Types")
        assert "`Result<String, Error>`: fallible" in returns
        assert "`Option<&Item>`: may be absent" in returns
        assert "- `usize`\n" in returns

    def test_parameter_section_contains_i32_not_self(self):
        params = section(self.render(), "Parameter Types")
        assert "`i32`" in params
        assert "&self" not in params
        assert "`&str`: borrowed reference" in params
        assert "`&mut Vec<u8>`: mutable borrow" in params
        assert "accepts any type implementing `AsRef<str>`" in params

    def test_single_signature_line(self):
        markdown = self.render("pub fn foo(&self, x: i32) -> Result<String, Error>")
        assert "`Result<String, Error>`: fallible" in section(markdown, "Return Types")
        assert "`i32`" in section(markdown, "Parameter Types")
        assert "&self" not in section(markdown, "Parameter Types")
        assert "## Working with Result types" in markdown
        assert "## Working with Option types" not in markdown

    def test_empty_document(self):
        markdown = self.render("Nothing to see.")
        assert section(markdown, "Return Types").count(NONE_FOUND) == 1
        assert "appears to be an item" in markdown
        assert "## Working with" not in markdown

    def test_title_and_overview(self):
        locator = ItemLocator.parse("std", "result::Result")
        markdown = self.render("pub enum Result<T, E> { Ok(T), Err(E) }", locator)
        assert markdown.startswith("# Type Relationships for `result::Result`")
        assert "`Result` appears to be an enum in the `std` crate (version latest)." in markdown
        assert "match value {" in section(markdown, "Common Usage Patterns")

    def test_trait_usage_pattern(self):
        locator = ItemLocator.parse("tokio", "io::AsyncRead")
        markdown = self.render("pub trait AsyncRead { }", locator)
        patterns = section(markdown, "Common Usage Patterns")
        assert "fn with_generic<T: AsyncRead>(value: &T)" in patterns
        assert "&dyn AsyncRead" in patterns


def test_annotate_plain_parameter():
    assert annotate_parameter_type("u64") == "- `u64`"
