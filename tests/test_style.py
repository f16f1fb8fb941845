"""Tests for pi.clt.style -- ANSI style composition."""

from __future__ import annotations

import pytest

from pi.clt.style import (
    BLUE,
    BOLD,
    DEFAULT,
    RED,
    UNDERLINE,
    Color,
    Style,
    background,
    sstyled,
    styled,
)


class TestStyled:
    """Compose tokens into one escape-sequence pair."""

    def test_single_color(self) -> None:
        s = styled(RED)
        assert s.prefix == "\x1b[31m"
        assert s.suffix == "\x1b[39m"

    def test_color_and_decoration_share_one_sequence(self) -> None:
        s = styled(RED, UNDERLINE)
        assert s.prefix == "\x1b[31;4m"
        assert s.suffix == "\x1b[39;24m"

    def test_token_order_is_preserved(self) -> None:
        assert styled(BOLD, BLUE).prefix == "\x1b[1;34m"
        assert styled(BLUE, BOLD).prefix == "\x1b[34;1m"

    def test_no_tokens_is_noop(self) -> None:
        s = styled()
        assert s == Style()
        assert s.apply_to("plain") == "plain"

    def test_style_is_immutable(self) -> None:
        s = styled(RED)
        with pytest.raises(AttributeError):
            s.prefix = ""  # type: ignore[misc]


class TestApplyTo:
    def test_wraps_content(self) -> None:
        assert styled(RED).apply_to("This is a test") == "\x1b[31mThis is a test\x1b[39m"

    def test_composite_wraps_content(self) -> None:
        expected = "\x1b[31;4mThis is a test\x1b[39;24m"
        assert styled(RED, UNDERLINE).apply_to("This is a test") == expected

    def test_empty_content_keeps_sequences(self) -> None:
        assert styled(DEFAULT).apply_to("") == "\x1b[39m\x1b[39m"

    def test_sstyled_shorthand(self) -> None:
        assert sstyled("ok", RED, BOLD) == styled(RED, BOLD).apply_to("ok")


class TestBackground:
    def test_offsets_codes_by_ten(self) -> None:
        bg = background(RED)
        assert bg.codes() == (41, 49)
        assert styled(bg).apply_to("x") == "\x1b[41mx\x1b[49m"

    def test_source_token_untouched(self) -> None:
        token = Color(32, 39)
        background(token)
        assert token.codes() == (32, 39)
