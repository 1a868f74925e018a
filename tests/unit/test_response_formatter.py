"""Tests for card and favorites rendering."""

from advisor_bot.bot.response_formatter import ResponseFormatter, humanize_label
from advisor_bot.models import Card


class TestResponseFormatter:
    def setup_method(self) -> None:
        self.formatter = ResponseFormatter()

    def test_format_card_lists_header_and_details(self, sample_cards) -> None:
        text = self.formatter.format_card(sample_cards["card_a"])

        assert text.splitlines() == [
            "<b>Card A</b>",
            "Issuer: BankX",
            "Network: Visa (Signature)",
            "",
            "<b>Annual Fee:</b> $95",
            "<b>Reward rate:</b> 2%",
        ]

    def test_format_card_escapes_html_and_marks_missing_values(self) -> None:
        card = Card(
            card_name="Cash <Back>",
            issuer="A&B Bank",
            details={"foreignFee": None, "notes": "<i>none</i>", "apr": 0},
        )

        text = self.formatter.format_card(card)

        assert "<b>Cash &lt;Back&gt;</b>" in text
        assert "Issuer: A&amp;B Bank" in text
        assert "<b>Foreign Fee:</b> N/A" in text
        assert "<b>Notes:</b> &lt;i&gt;none&lt;/i&gt;" in text
        assert "<b>Apr:</b> 0" in text

    def test_card_keyboard_encodes_index(self) -> None:
        keyboard = self.formatter.card_keyboard(2)

        data = [button.callback_data for button in keyboard.inline_keyboard[0]]
        assert data == ["fav_save_2", "fb_like_2", "fb_dislike_2"]

    def test_favorites_list_and_remove_buttons(self, sample_cards) -> None:
        favorites = [sample_cards["card_a"], sample_cards["card_b"]]

        text = self.formatter.format_favorites(favorites)
        keyboard = self.formatter.favorites_keyboard(favorites)

        assert "1. <b>Card A</b> (BankX)" in text
        assert "2. <b>Card B</b> (BankY)" in text
        assert [row[0].callback_data for row in keyboard.inline_keyboard] == [
            "fav_remove_0",
            "fav_remove_1",
        ]


def test_humanize_label() -> None:
    assert humanize_label("annualFee") == "Annual Fee"
    assert humanize_label("reward_rate") == "Reward rate"
    assert humanize_label("welcomeBonus_value") == "Welcome Bonus value"
    assert humanize_label("APR") == "A P R"
