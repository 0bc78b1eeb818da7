"""
卡牌文本编码

格式为 4 个 ASCII 字符: <hex><class><hex><hex>
    例: "1M23" = 攻击 1, 魔法型, 物理防御 2, 魔法防御 3

解析时类型字母大小写不敏感，序列化统一输出大写
"""
import logging
from typing import Optional

from .cards import Card, LETTER_TO_CLASS

logger = logging.getLogger(__name__)

HEX_DIGITS = "0123456789abcdefABCDEF"

CARD_CODE_LENGTH = 4


class CardDecodeError(ValueError):
    """卡牌编码格式错误"""


def _hex_value(ch: str, field_name: str, text: str) -> int:
    # int(ch, 16) 会接受全角/其他 Unicode 数字，这里只接受 ASCII 十六进制
    if ch not in HEX_DIGITS:
        raise CardDecodeError(f"Invalid {field_name} digit {ch!r} in card {text!r}")
    return int(ch, 16)


def decode_card(text: str) -> Card:
    """
    解析卡牌编码

    Args:
        text: 4 字符编码，如 "1M23"

    Returns:
        Card (无箭头)

    Raises:
        CardDecodeError: 长度错误、非法十六进制位或未知类型字母
    """
    if not isinstance(text, str) or len(text) != CARD_CODE_LENGTH:
        raise CardDecodeError(f"Card code must be {CARD_CODE_LENGTH} characters: {text!r}")

    power = _hex_value(text[0], "power", text)
    card_class = LETTER_TO_CLASS.get(text[1].lower())
    if card_class is None:
        raise CardDecodeError(f"Unknown class letter {text[1]!r} in card {text!r}")
    physical_defense = _hex_value(text[2], "physical defense", text)
    magical_defense = _hex_value(text[3], "magical defense", text)

    return Card(power, card_class, physical_defense, magical_defense)


def parse_card(text: str) -> Optional[Card]:
    """解析卡牌编码，格式错误时返回 None"""
    try:
        return decode_card(text)
    except CardDecodeError as e:
        logger.debug("Rejected card code: %s", e)
        return None


def encode_card(card: Card) -> str:
    """序列化为大写 4 字符编码 (decode_card 的逆操作)"""
    return str(card)
