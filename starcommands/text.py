from __future__ import annotations

import json
import re
from typing import Literal

type Color = Literal[
    "black",
    "dark_blue",
    "dark_green",
    "dark_aqua",
    "dark_red",
    "dark_purple",
    "gold",
    "gray",
    "dark_gray",
    "blue",
    "green",
    "aqua",
    "red",
    "light_purple",
    "yellow",
    "white",
]

LEGACY_PATTERN = re.compile(r"(§[0-9a-fk-or])", re.IGNORECASE)


class TextComponent:
    """
    A chat message sent to a command sender.

    Mirrors the Minecraft JSON text component closely enough for hosts that
    accept either JSON (``to_json``) or legacy ``§`` codes (``to_legacy``).
    """

    COLOR_CODES: dict[str, Color] = {
        "0": "black",
        "1": "dark_blue",
        "2": "dark_green",
        "3": "dark_aqua",
        "4": "dark_red",
        "5": "dark_purple",
        "6": "gold",
        "7": "gray",
        "8": "dark_gray",
        "9": "blue",
        "a": "green",
        "b": "aqua",
        "c": "red",
        "d": "light_purple",
        "e": "yellow",
        "f": "white",
    }
    FORMAT_CODES = {
        "k": "obfuscated",
        "l": "bold",
        "m": "strikethrough",
        "n": "underlined",
        "o": "italic",
    }

    def __init__(self, data: str | dict | TextComponent | None = None):
        if data is None:
            data = {"text": ""}
        elif isinstance(data, str):
            data = {"text": data}
        elif isinstance(data, TextComponent):
            data = data.data
        self.data: dict = json.loads(json.dumps(data))

    def __repr__(self) -> str:
        return f"TextComponent({self.to_json()})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextComponent):
            return self.data == other.data
        return NotImplemented

    # Formatting methods
    def color(self, color: Color) -> TextComponent:
        self.data["color"] = color
        return self

    def bold(self, bold: bool = True) -> TextComponent:
        self.data["bold"] = bold
        return self

    def italic(self, italic: bool = True) -> TextComponent:
        self.data["italic"] = italic
        return self

    # Child component methods
    def append(self, component: str | dict | TextComponent) -> TextComponent:
        """Add a child component"""
        self.data.setdefault("extra", []).append(TextComponent(component).data)
        return self

    def appends(
        self, component: str | dict | TextComponent, separator: str = " "
    ) -> TextComponent:
        "Add a child component with a separator (defaults to space)"
        child = TextComponent(component)
        child.data["text"] = f"{separator}{child.data.get('text', '')}"
        return self.append(child)

    def get_children(self) -> list[TextComponent]:
        return [TextComponent(child) for child in self.data.get("extra", [])]

    # Utility methods
    def to_json(self) -> str:
        return json.dumps(self.data, separators=(",", ":"))

    def to_legacy(self) -> str:
        """Render with ``§`` colour codes, children inheriting their parent's style"""
        return self._render_legacy(self.data, {})

    def _render_legacy(self, data: dict, inherited: dict) -> str:
        style = {
            key: data.get(key, inherited.get(key))
            for key in ("color", *self.FORMAT_CODES.values())
        }

        prefix = "§r"
        codes = {v: k for k, v in self.COLOR_CODES.items()}
        if style["color"] in codes:
            prefix += f"§{codes[style['color']]}"
        for code, name in self.FORMAT_CODES.items():
            if style[name]:
                prefix += f"§{code}"

        text = f"{prefix}{data['text']}" if data.get("text") else ""
        for child in data.get("extra", []):
            text += self._render_legacy(child, style)
        return text

    def __str__(self) -> str:
        """Plain text, formatting removed"""
        return self._plain(self.data)

    def _plain(self, data: dict) -> str:
        text = data.get("text", "")
        text += "".join(self._plain(child) for child in data.get("extra", []))
        return LEGACY_PATTERN.sub("", text)

    @classmethod
    def from_legacy(cls, text: str) -> TextComponent:
        """
        Convert a string with ``§`` codes to a TextComponent.
        A colour code resets formatting; ``§r`` resets everything.
        """
        root = cls("")
        style: dict = {}
        buffer = ""

        for part in filter(None, LEGACY_PATTERN.split(text)):
            if not LEGACY_PATTERN.fullmatch(part):
                buffer += part
                continue

            if buffer:
                root.append({"text": buffer, **style})
                buffer = ""

            code = part[1].lower()
            if code in cls.COLOR_CODES:
                style = {"color": cls.COLOR_CODES[code]}
            elif code == "r":
                style = {}
            else:
                style[cls.FORMAT_CODES[code]] = True

        if buffer:
            root.append({"text": buffer, **style})

        children = root.data.get("extra", [])
        if len(children) == 1:
            return cls(children[0])
        return root
