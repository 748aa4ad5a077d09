"""Tests for schemas.py: ItemLocator parsing and candidate kinds."""

import pytest

from cratedocs.errors import InvalidItemPathError
from cratedocs.schemas import CANDIDATE_KINDS, ItemKind, ItemLocator


class TestItemLocator:
    def test_splits_module_path_and_item_name(self):
        locator = ItemLocator.parse("tokio", "io::util::AsyncReadExt")
        assert locator.item_name == "AsyncReadExt"
        assert locator.module_path == "io/util"

    def test_root_item_has_empty_module_path(self):
        locator = ItemLocator.parse("serde", "Serialize")
        assert locator.module_path == ""
        assert locator.item_name == "Serialize"

    def test_strips_crate_prefix(self):
        prefixed = ItemLocator.parse("tokio", "tokio::io::AsyncRead", "1.28.0")
        plain = ItemLocator.parse("tokio", "io::AsyncRead", "1.28.0")
        assert prefixed == plain

    def test_only_leading_prefix_is_stripped(self):
        locator = ItemLocator.parse("io", "util::io::Read")
        assert locator.item_path == "util::io::Read"

    @pytest.mark.parametrize("item_path", ["", "serde::", "de::"])
    def test_empty_item_name_is_invalid(self, item_path):
        locator = ItemLocator.parse("serde", item_path)
        with pytest.raises(InvalidItemPathError):
            locator.item_name

    def test_crate_ident_and_rust_path(self):
        locator = ItemLocator.parse("tokio-util", "codec::Framed")
        assert locator.crate_ident == "tokio_util"
        assert locator.rust_path == "tokio_util::codec::Framed"


class TestItemKind:
    def test_candidate_order(self):
        assert [k.value for k in CANDIDATE_KINDS] == ["struct", "enum", "trait", "function", "macro"]

    def test_function_uses_fn_prefix(self):
        assert ItemKind.FUNCTION.url_prefix == "fn"
        assert ItemKind.TRAIT.url_prefix == "trait"
