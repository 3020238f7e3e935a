"""Tests for placeholder interpolation."""

from eval_express.prompt.interpolate import interpolate


class TestInterpolate:
    def test_substitutes_known_keys(self) -> None:
        values = {"name": "Ada", "age": "36"}

        assert (
            interpolate("Hello, {{name}}! You are {{age}}.", values)
            == "Hello, Ada! You are 36."
        )

    def test_unknown_keys_left_verbatim(self) -> None:
        assert interpolate("{{known}} {{unknown}}", {"known": "x"}) == "x {{unknown}}"

    def test_backslash_escapes_braces(self) -> None:
        assert interpolate(r"\{{name}} is {{name}}", {"name": "Ada"}) == (
            "{{name}} is Ada"
        )

    def test_substituted_values_are_not_reinterpolated(self) -> None:
        assert interpolate("{{a}}", {"a": "{{b}}", "b": "no"}) == "{{b}}"

    def test_dotted_and_dashed_keys(self) -> None:
        assert interpolate("{{user.first-name}}", {"user.first-name": "Ada"}) == "Ada"

    def test_template_without_placeholders_is_unchanged(self) -> None:
        assert interpolate("plain text", {"a": "b"}) == "plain text"
