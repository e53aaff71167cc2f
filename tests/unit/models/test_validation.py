"""Unit tests for models._validation helpers."""

import pytest

from interlang.models._validation import (
    unique_str_tuple,
    validate_id,
    validate_instance,
    validate_str_not_empty,
)


class TestValidateInstance:
    def test_passes(self):
        validate_instance("x", str, "name")

    def test_message_uses_article(self):
        with pytest.raises(TypeError, match="name must be an int, got str"):
            validate_instance("x", int, "name")


class TestValidateId:
    @pytest.mark.parametrize("value", [1, 10**12])
    def test_valid(self, value):
        validate_id(value, "id")

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive(self, value):
        with pytest.raises(ValueError):
            validate_id(value, "id")

    @pytest.mark.parametrize("value", [True, 1.0, "1", None])
    def test_wrong_type(self, value):
        with pytest.raises(TypeError):
            validate_id(value, "id")


class TestValidateStrNotEmpty:
    def test_empty(self):
        with pytest.raises(ValueError, match="must not be empty"):
            validate_str_not_empty("", "slug")


class TestUniqueStrTuple:
    def test_none(self):
        assert unique_str_tuple(None, "langs") == ()

    def test_first_occurrence_wins(self):
        assert unique_str_tuple(["b", "a", " b ", ""], "langs") == ("b", "a")

    def test_non_str_item(self):
        with pytest.raises(TypeError):
            unique_str_tuple(["a", 1], "langs")
