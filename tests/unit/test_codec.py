"""卡牌编码测试"""
import pytest

from core.cards import Card, CardClass
from core.codec import CardDecodeError, decode_card, encode_card, parse_card


class TestParseCard:
    """解析测试"""

    def test_example(self):
        card = parse_card("1M23")
        assert card == Card(1, CardClass.MAGICAL, 2, 3)

    @pytest.mark.parametrize("letter,card_class", [
        ("p", CardClass.PHYSICAL),
        ("M", CardClass.MAGICAL),
        ("x", CardClass.FLEXIBLE),
        ("A", CardClass.ASSAULT),
    ])
    def test_class_letters_case_insensitive(self, letter, card_class):
        assert parse_card(f"0{letter}00").card_class is card_class

    def test_lowercase_hex(self):
        card = parse_card("fpab")
        assert (card.power, card.physical_defense, card.magical_defense) == (15, 10, 11)

    @pytest.mark.parametrize("text", [
        "",
        "1M2",
        "1M234",
        "GM23",
        "1Q23",
        "1M2Z",
        "1 23",
        "１M23",  # 全角数字
    ])
    def test_malformed(self, text):
        assert parse_card(text) is None

    def test_decode_raises(self):
        with pytest.raises(CardDecodeError):
            decode_card("1Q23")
        assert issubclass(CardDecodeError, ValueError)


class TestEncodeCard:
    """序列化测试"""

    @pytest.mark.parametrize("text", ["1m23", "fpab", "0x0f", "9A9a", "EMCD"])
    def test_round_trip_uppercases(self, text):
        assert encode_card(parse_card(text)) == text.upper()

    def test_encode(self):
        assert encode_card(Card(12, CardClass.ASSAULT, 0, 7)) == "CA07"
