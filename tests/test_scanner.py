"""Tests for analysis/scanner.py: the shared line-scanning helpers."""

import pytest

from cratedocs.analysis import scanner


class TestLineClassification:
    def test_parse_heading(self):
        assert scanner.parse_heading("## Examples") == (2, "Examples")
        assert scanner.parse_heading("  ### impl Clone for Foo  ") == (3, "impl Clone for Foo")
        assert scanner.parse_heading("#not a heading") is None
        assert scanner.parse_heading("plain text") is None

    @pytest.mark.parametrize("line", ["# Examples", "## Examples", "  ## EXAMPLES  ", "# examples"])
    def test_examples_heading_levels_one_and_two(self, line):
        assert scanner.is_examples_heading(line)

    @pytest.mark.parametrize("line", ["### Examples", "## Examples of use", "## Example"])
    def test_other_headings_are_not_examples(self, line):
        assert not scanner.is_examples_heading(line)

    def test_is_fence(self):
        assert scanner.is_fence("```rust")
        assert scanner.is_fence("   ```")
        assert not scanner.is_fence("text ```")


class TestCodeBlocks:
    def test_blocks_carry_preceding_prose(self):
        lines = ["Intro text", "```rust", "let a = 1;", "```", "More", "```", "b()", "```"]
        blocks = list(scanner.iter_code_blocks(lines))
        assert [b.code for b in blocks] == ["```rust\nlet a = 1;\n```", "```\nb()\n```"]
        assert blocks[0].preceding_text == ["Intro text"]
        assert blocks[1].preceding_text == ["More"]

    def test_unclosed_block_is_closed(self):
        blocks = list(scanner.iter_code_blocks(["```", "let x = 1;"]))
        assert blocks[0].code == "```\nlet x = 1;\n```"

    def test_empty_block_has_no_content(self):
        block = next(scanner.iter_code_blocks(["```", "   ", "```"]))
        assert not block.has_content


class TestInferItemKind:
    def test_requires_name_and_keyword(self):
        assert scanner.infer_item_kind("pub struct Lumin { }", "Lumin") == "struct"
        assert scanner.infer_item_kind("pub struct Other { }", "Lumin") is None
        assert scanner.infer_item_kind("Lumin is great", "Lumin") is None

    def test_case_insensitive(self):
        assert scanner.infer_item_kind("TRAIT READ", "read") == "trait"

    def test_fixed_priority_struct_trait_enum_fn(self):
        text = "pub fn build() and pub enum Mode and pub trait Build"
        assert scanner.infer_item_kind(text, "build") == "trait"
        assert scanner.infer_item_kind("pub fn run(); pub enum Run", "run") == "enum"


class TestSignatureSlicing:
    LINE = "pub fn foo(&self, x: i32) -> Result<String, Error>"

    def test_signature_lines(self):
        lines = [self.LINE, "pub fn bar(&self)", "let f = || -> i32 { 1 };"]
        assert list(scanner.signature_lines(lines)) == [self.LINE]

    def test_return_type(self):
        assert scanner.return_type(self.LINE) == "Result<String, Error>"
        assert scanner.return_type("pub fn len(&self) -> usize {") == "usize"
        assert scanner.return_type("pub fn map<U, F>(self, f: F) -> Option<U> where F: FnOnce(T) -> U") == "Option<U>"
        assert scanner.return_type("fn x() -> ;") is None

    def test_return_type_skips_arrows_inside_parameters(self):
        line = "pub fn and_then<U, F>(self, f: impl FnOnce(T) -> Option<U>) -> Option<U>"
        assert scanner.return_type(line) == "Option<U>"
        assert scanner.return_type("pub fn apply<F: Fn(u8) -> u8>(f: F) -> Vec<u8>") == "Vec<u8>"
        assert scanner.return_type("pub fn for_each(self, f: impl FnMut(T) -> ())") is None

    def test_parameter_list_skips_generic_parentheses(self):
        assert scanner.parameter_list("pub fn apply<F: Fn(u8) -> u8>(f: F) -> u8") == "f: F"

    def test_parameter_types_skip_receivers(self):
        assert scanner.parameter_types(self.LINE) == ["i32"]
        assert scanner.parameter_types("pub fn push(&mut self, value: T)") == ["T"]
        assert scanner.parameter_types("pub fn into(self) -> U") == []

    def test_parameter_types_keep_generic_commas_together(self):
        line = "pub fn insert(&mut self, map: HashMap<String, u32>, f: impl Fn(i32) -> i32) -> bool"
        assert scanner.parameter_types(line) == ["HashMap<String, u32>", "impl Fn(i32) -> i32"]

    def test_parameter_types_with_paths(self):
        assert scanner.parameter_types("fn from(err: std::io::Error) -> Self") == ["std::io::Error"]

    def test_split_top_level(self):
        assert scanner.split_top_level("a: Vec<(u8, u8)>, b: [u8; 4]") == ["a: Vec<(u8, u8)>", "b: [u8; 4]"]


class TestImplAndAssociated:
    def test_implemented_trait_strips_impl_generics(self):
        assert scanner.implemented_trait("### impl<T: Clone, A: Allocator> Clone for Vec<T, A>") == "Clone"
        assert scanner.implemented_trait("impl Debug for Thing") == "Debug"
        assert scanner.implemented_trait("impl<'a> From<&'a str> for String") == "From<&'a str>"

    def test_implemented_trait_needs_for(self):
        assert scanner.implemented_trait("impl<T> Vec<T>") is None
        assert scanner.implemented_trait("implement this for me") is None

    def test_associated_type(self):
        assert scanner.associated_type("type Output = Self;") == "Output"
        assert scanner.associated_type("type Item: Send;") == "Item"
        assert scanner.associated_type("type Error;") == "Error"
        assert scanner.associated_type("this type is great") is None

    def test_dedupe_preserves_order(self):
        assert scanner.dedupe(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
