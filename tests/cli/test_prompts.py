"""Tests for the rich-backed prompts."""

from unittest.mock import patch

from pmdispatch.cli import prompts


class TestNonInteractive:
    @patch("pmdispatch.cli.prompts.is_interactive", return_value=False)
    def test_confirm_returns_default(self, mock_tty):
        assert prompts.confirm("Install?") is False
        assert prompts.confirm("Install?", default=True) is True

    @patch("pmdispatch.cli.prompts.is_interactive", return_value=False)
    def test_select_returns_none(self, mock_tty):
        assert prompts.select("Pick", ["npm", "yarn"]) is None


class TestInteractive:
    @patch("pmdispatch.cli.prompts.Prompt.ask", return_value="2")
    @patch("pmdispatch.cli.prompts.is_interactive", return_value=True)
    def test_select_maps_number_to_choice(self, mock_tty, mock_ask):
        assert prompts.select("Pick", ["npm", "yarn", "pnpm"]) == "yarn"
        assert mock_ask.call_args.kwargs["choices"] == ["1", "2", "3"]

    @patch("pmdispatch.cli.prompts.Prompt.ask", side_effect=KeyboardInterrupt)
    @patch("pmdispatch.cli.prompts.is_interactive", return_value=True)
    def test_select_cancelled(self, mock_tty, mock_ask):
        assert prompts.select("Pick", ["npm"]) is None

    @patch("pmdispatch.cli.prompts.Confirm.ask", return_value=True)
    @patch("pmdispatch.cli.prompts.is_interactive", return_value=True)
    def test_confirm_delegates(self, mock_tty, mock_ask):
        assert prompts.confirm("Install?") is True

    @patch("pmdispatch.cli.prompts.is_interactive", return_value=True)
    def test_select_without_choices(self, mock_tty):
        assert prompts.select("Pick", []) is None
