"""Tests for inventory title normalisation."""

from __future__ import annotations

import pytest

from homestead_voice.parsing.titles import clean_item_title


class TestCleanItemTitle:
    def test_removes_leading_i(self) -> None:
        assert clean_item_title("I need shovels") == "need shovels"

    def test_removes_lowercase_leading_i(self) -> None:
        assert clean_item_title("i rake") == "rake"

    @pytest.mark.parametrize(
        "title",
        ["I iPod", "I iPhone charger", "i ipad stand", "I Ikea shelf", "I IBM laptop"],
    )
    def test_keeps_i_products(self, title: str) -> None:
        assert clean_item_title(title) == title

    def test_leaves_words_starting_with_i(self) -> None:
        assert clean_item_title("Irrigation hose") == "Irrigation hose"

    def test_empty_title(self) -> None:
        assert clean_item_title("") == ""

    def test_repeated_leading_i(self) -> None:
        assert clean_item_title("I I shovels") == "shovels"

    @pytest.mark.parametrize(
        "title",
        ["I need shovels", "I I shovels", "I iPod", "I I iPad", "seeds", "I ", "i  i  rope"],
    )
    def test_idempotent(self, title: str) -> None:
        once = clean_item_title(title)
        assert clean_item_title(once) == once
