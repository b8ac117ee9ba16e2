from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cmdctl.senders import CommandSender

logger = logging.getLogger(__name__)

COLOR_CHAR = "§"
_COLOR_CODES = "0123456789abcdefklmnor"
_STRIP_RE = re.compile(f"{COLOR_CHAR}[{_COLOR_CODES}]", re.IGNORECASE)


class ChatColor:
    BLACK = f"{COLOR_CHAR}0"
    DARK_BLUE = f"{COLOR_CHAR}1"
    DARK_GREEN = f"{COLOR_CHAR}2"
    DARK_AQUA = f"{COLOR_CHAR}3"
    DARK_RED = f"{COLOR_CHAR}4"
    DARK_PURPLE = f"{COLOR_CHAR}5"
    GOLD = f"{COLOR_CHAR}6"
    GRAY = f"{COLOR_CHAR}7"
    DARK_GRAY = f"{COLOR_CHAR}8"
    BLUE = f"{COLOR_CHAR}9"
    GREEN = f"{COLOR_CHAR}a"
    AQUA = f"{COLOR_CHAR}b"
    RED = f"{COLOR_CHAR}c"
    LIGHT_PURPLE = f"{COLOR_CHAR}d"
    YELLOW = f"{COLOR_CHAR}e"
    WHITE = f"{COLOR_CHAR}f"
    BOLD = f"{COLOR_CHAR}l"
    ITALIC = f"{COLOR_CHAR}o"
    RESET = f"{COLOR_CHAR}r"


def translate_color_codes(text: str, alt_char: str = "&") -> str:
    """Replace ``alt_char`` style markers with real colour codes.

    Only a marker followed by a known code is translated, so "AT&T" and
    "&&" survive untouched:
    - "&cHello" → "§cHello"
    - "&LBold" → "§lBold"
    """
    if not alt_char:
        return text
    chars = list(text)
    for i in range(len(chars) - 1):
        if chars[i] == alt_char and chars[i + 1].lower() in _COLOR_CODES:
            chars[i] = COLOR_CHAR
            chars[i + 1] = chars[i + 1].lower()
    return "".join(chars)


def strip_color(text: str) -> str:
    return _STRIP_RE.sub("", text)


class MessageRenderer:
    """Turns handler return values into chat lines and delivers them."""

    def __init__(self, alt_char: str = "&") -> None:
        self._alt_char = alt_char

    def render(self, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            text = translate_color_codes(value, self._alt_char)
            return text.splitlines() if text else []
        if isinstance(value, Mapping):
            lines: list[str] = []
            for key, item in value.items():
                rendered = self.render(item)
                lines.append(f"{key}: {', '.join(rendered)}")
            return lines
        if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
            lines = []
            for item in value:
                lines.extend(self.render(item))
            return lines
        return [str(value)]

    def send(self, sender: CommandSender, value: Any) -> None:
        lines = self.render(value)
        if not lines:
            logger.debug("Nothing to send to %s for %r", sender.name, value)
            return
        for line in lines:
            sender.send_message(line)
