"""Shared style settings for GUI controls and the XML store they persist to."""

from __future__ import annotations

import copy
import re
import string
import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any, Union

COLOR_RGB = 10
COLOR_RGBA = 11

_ROOT_TAG = "_document"
_DECLARATION = re.compile(r"<\?xml[^>]*\?>")
_CHANNELS = ("r", "g", "b", "a")

Listener = Callable[[int, Any, Any], object]


@dataclass
class RGBA:
    """A colour with channels in the range 0..1."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    @classmethod
    def from_hex(cls, value: Union[int, str]) -> RGBA:
        """Build a colour from a packed 0xRRGGBBAA integer or an 'RRGGBB[AA]' string."""
        if isinstance(value, str):
            text = value.strip()
            if len(text) == 6:
                text += "FF"
            if len(text) != 8 or not all(c in string.hexdigits for c in text):
                raise ValueError(f"not a hex colour: {value!r}")
            packed = int(text, 16)
        elif isinstance(value, int) and not isinstance(value, bool):
            if not 0 <= value <= 0xFFFFFFFF:
                raise ValueError(f"colour out of range: {value:#x}")
            packed = value
        else:
            raise TypeError(f"cannot make a colour from {type(value).__name__}")
        return cls(*(channel / 255.0 for channel in packed.to_bytes(4, "big")))

    def to_string(self, display: int) -> str:
        """Upper-case hex digits; the alpha pair is left out for COLOR_RGB."""
        channels = [self.r, self.g, self.b] if display == COLOR_RGB else [self.r, self.g, self.b, self.a]
        return "".join(f"{round(min(max(c, 0.0), 1.0) * 255):02X}" for c in channels)

    def set_channel(self, index: int, value: float) -> None:
        """Set channel 0..3 (r, g, b, a)."""
        if not 0 <= index < len(_CHANNELS):
            raise IndexError(f"colour channel out of range: {index}")
        setattr(self, _CHANNELS[index], value)


def _format(value: object) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _convert(text: str, default: Any) -> Any:
    try:
        if isinstance(default, bool):
            return bool(int(float(text)))
        if isinstance(default, int):
            return int(float(text))
        if isinstance(default, float):
            return float(text)
    except ValueError:
        return default
    return text


class XmlSettings:
    """A tree of tags addressed by 'A:B:C' paths relative to a stack of pushed tags.

    In get_value, set_value and add_tag paths, 'which' picks among tags named
    by the first path component; push_tag applies it to the last component.
    """

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        """Drop every tag and return to the top level."""
        self._root = ET.Element(_ROOT_TAG)
        self._stack = [self._root]

    @property
    def _current(self) -> ET.Element:
        return self._stack[-1]

    def _walk(self, tokens: list[str], which: int, which_at: int, create: bool) -> ET.Element | None:
        node = self._current
        for position, token in enumerate(tokens):
            index = which if position == which_at else 0
            children = node.findall(token)
            if index < len(children):
                node = children[index]
            elif create:
                node = ET.SubElement(node, token)
            else:
                return None
        return node

    def load_file(self, path: str | PathLike[str]) -> bool:
        """Replace the contents with a file's; False if it cannot be read."""
        try:
            text = Path(path).read_text(encoding="utf-8")
            root = ET.fromstring(f"<{_ROOT_TAG}>{_DECLARATION.sub('', text)}</{_ROOT_TAG}>")
        except (OSError, ET.ParseError, UnicodeDecodeError):
            return False
        self._root = root
        self._stack = [root]
        return True

    def save_file(self, path: str | PathLike[str]) -> None:
        root = copy.deepcopy(self._root)
        ET.indent(root)
        body = "\n".join(ET.tostring(child, encoding="unicode").rstrip() for child in root)
        Path(path).write_text(f'<?xml version="1.0" encoding="utf-8"?>\n{body}\n', encoding="utf-8")

    def add_tag(self, name: str) -> int:
        """Append a new tag and return its index among tags of that name."""
        *parents, last = name.split(":")
        parent = self._walk(parents, 0, 0, create=True) if parents else self._current
        assert parent is not None
        ET.SubElement(parent, last)
        return len(parent.findall(last)) - 1

    def num_tags(self, path: str) -> int:
        *parents, last = path.split(":")
        parent = self._walk(parents, 0, 0, create=False) if parents else self._current
        return 0 if parent is None else len(parent.findall(last))

    def push_tag(self, path: str, which: int = 0) -> bool:
        """Make a tag the current level; False if it does not exist."""
        tokens = path.split(":")
        node = self._walk(tokens, which, len(tokens) - 1, create=False)
        if node is None:
            return False
        self._stack.append(node)
        return True

    def pop_tag(self) -> None:
        if len(self._stack) > 1:
            self._stack.pop()

    def get_value(self, path: str, default: Any, which: int = 0) -> Any:
        """The tag's text converted to the type of default, or default."""
        node = self._walk(path.split(":"), which, 0, create=False)
        if node is None or node.text is None:
            return default
        return _convert(node.text.strip(), default)

    def set_value(self, path: str, value: object, which: int = 0) -> None:
        node = self._walk(path.split(":"), which, 0, create=True)
        assert node is not None
        node.text = _format(value)


_SCALARS: tuple[tuple[str, str, Union[int, str]], ...] = (
    ("HEADFONT", "head_font_name", "verdana.ttf"),
    ("HEADSIZE", "head_font_size", 10),
    ("HEADXOFF", "head_font_x_offset", -2),
    ("HEADYOFF", "head_font_y_offset", 8),
    ("HEADHEIGHT", "head_font_height", 12),
    ("PARAMFONT", "param_font_name", "automat.ttf"),
    ("PARAMSIZE", "param_font_size", 6),
    ("PARAMXOFF", "param_font_x_offset", -2),
    ("PARAMYOFF", "param_font_y_offset", 6),
    ("PARAMHEIGHT", "param_font_height", 12),
    ("BUTTONXTEXT", "button_x_text", 4),
    ("BUTTONYTEXT", "button_y_text", 0),
    ("FILESXTEXT", "files_x_text", 3),
    ("FILESYTEXT", "files_y_text", 3),
    ("POINTSIZE", "point_size", 6),
    ("KNOBSIZE", "knob_size", 10),
)

_COLORS: tuple[tuple[str, str, str], ...] = (
    ("COVERCOLOR", "cover_color", "00000088"),
    ("TEXTCOLOR", "text_color", "FFFFFFFF"),
    ("BORDERCOLOR", "border_color", "FFFFFFFF"),
    ("FRAMECOLOR", "frame_color", "FFFFFFFF"),
    ("SLIDERCOLOR", "slider_color", "0099FFFF"),
    ("AXISCOLOR", "axis_color", "00FF00FF"),
    ("HANDLECOLOR", "handle_color", "FFFFFFFF"),
    ("BUTTONCOLOR", "button_color", "FFDD00FF"),
    ("CURVECOLOR", "curve_color", "FF9900FF"),
    ("SCOPECOLOR", "scope_color", "FF9900FF"),
    ("ACTIVECOLOR", "matrix_color", "FF0000FF"),
)


class GuiGlobals:
    """Style, listener and XML store shared by every control of one GUI."""

    def __init__(self, listener: Listener | None = None) -> None:
        self.listener = listener
        self.xml = XmlSettings()
        self.xml_file = ""
        self.measure: Callable[[str], float] | None = None
        for _, attr, default in _SCALARS:
            setattr(self, attr, default)
        for _, attr, default in _COLORS:
            setattr(self, attr, RGBA.from_hex(default))

    def text_width(self, text: str) -> float:
        """Width of text in pixels; estimated from the heading font size unless measure is set."""
        if self.measure is not None:
            return self.measure(text)
        return len(text) * self.head_font_size * 0.6

    def build_from_xml(self) -> None:
        """Read the single STYLE tag at the current level, if there is exactly one."""
        if self.xml.num_tags("STYLE") != 1:
            return
        self.xml.push_tag("STYLE", 0)
        for tag, attr, default in _SCALARS:
            setattr(self, attr, self.xml.get_value(tag, default))
        for tag, attr, default in _COLORS:
            try:
                setattr(self, attr, RGBA.from_hex(self.xml.get_value(tag, default)))
            except ValueError:
                setattr(self, attr, RGBA.from_hex(default))
        self.xml.pop_tag()

    def save_to_xml(self) -> None:
        """Append a STYLE tag holding the current style."""
        index = self.xml.add_tag("STYLE")
        for tag, attr, _ in _SCALARS:
            self.xml.set_value(f"STYLE:{tag}", getattr(self, attr), index)
        for tag, attr, _ in _COLORS:
            self.xml.set_value(f"STYLE:{tag}", getattr(self, attr).to_string(COLOR_RGBA), index)