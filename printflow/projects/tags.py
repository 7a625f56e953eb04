"""Deterministic tag colors.

A tag without an explicit override is colored by hashing its text into
TAG_PALETTE. Stored projects rely on the palette order, so entries may only
be appended, never reordered or removed.
"""

from dataclasses import dataclass
import re
from typing import Mapping, Optional


@dataclass(frozen=True)
class TagColor:
    """Background / text / border hex triple, named after a traditional dye."""

    name: str
    background: str
    text: str
    border: str

    @property
    def token(self) -> str:
        """Style token in the form stored for overrides."""
        return f"bg-[{self.background}] text-[{self.text}] border-[{self.border}]"


TAG_PALETTE: tuple[TagColor, ...] = (
    TagColor("Sakura-iro", "#fdeff2", "#5e3023", "#e9cbd1"),
    TagColor("Toki-garacha", "#f0908d", "#592a29", "#d67b78"),
    TagColor("Araigaki", "#e2bab1", "#5e3023", "#d4a095"),
    TagColor("Nadeshiko", "#eebbcb", "#752b42", "#d9a3b3"),
    TagColor("Cosmos", "#eaacbf", "#6b2c45", "#d191a6"),
    TagColor("Momo", "#f5c9c9", "#7a2e2e", "#e0b0b0"),
    TagColor("Ikkon-zome", "#f4d5d3", "#5c2d2d", "#d9b2b0"),
    TagColor("Umenezu", "#d7cfd1", "#523f42", "#c2b6b9"),
    TagColor("Anzu", "#f8e4c1", "#6b5636", "#e0cdaa"),
    TagColor("Yamabuki", "#fcd575", "#665229", "#e0be63"),
    TagColor("Karashi", "#f0e68c", "#59502a", "#e0d676"),
    TagColor("Kuchinashi", "#fffacd", "#6b654b", "#e6e1b3"),
    TagColor("Komugi", "#f5deb3", "#5e4b35", "#dcc59a"),
    TagColor("Kitsune", "#e8d3c7", "#5c4636", "#d6bdae"),
    TagColor("Sunairo", "#d8c6bc", "#594639", "#c2aca0"),
    TagColor("Rikyu-nezumi", "#cbbcb5", "#54433a", "#b5a39b"),
    TagColor("Kuchiba", "#ebd8a0", "#61532a", "#d6c48c"),
    TagColor("Kayoha", "#e6d2ba", "#5c4a35", "#d1baa0"),
    TagColor("Byakuroku", "#d4dcd6", "#4a5950", "#b8c7bb"),
    TagColor("Seiji", "#c6e0d3", "#2d523e", "#add1be"),
    TagColor("Kamenozoki", "#bad3cf", "#2f4f4f", "#9fc1bc"),
    TagColor("Yanagi", "#b8d4b8", "#365236", "#a1bda1"),
    TagColor("Wakakusa", "#cde6c7", "#42593d", "#b6cfb0"),
    TagColor("Moegi", "#a8c97f", "#3b4d29", "#8fb068"),
    TagColor("Chitose", "#9ec2b1", "#234535", "#86ab99"),
    TagColor("Wakaba", "#98fb98", "#2e5e2e", "#81e681"),
    TagColor("Ura-yanagi", "#edf7e3", "#415234", "#d1e0c4"),
    TagColor("Aotake", "#88a892", "#223629", "#72917c"),
    TagColor("Wasurenagusa", "#b2cbe4", "#2c405a", "#94b1cf"),
    TagColor("Mizu", "#a3c9db", "#284f61", "#8bb1c4"),
    TagColor("Usu-hanada", "#b0c4de", "#2e405e", "#98acd1"),
    TagColor("Fuji-nezumi", "#ccd1e0", "#3d4252", "#b3b8c7"),
    TagColor("Kon-nezu", "#9cafcf", "#293c5c", "#8396b5"),
    TagColor("Light Cyan", "#e0ffff", "#2f4f4f", "#c1e0e0"),
    TagColor("Sora", "#87ceeb", "#2b4f63", "#72b5d1"),
    TagColor("Ramune", "#a0d8ef", "#2a5463", "#8bc0d6"),
    TagColor("Kachi", "#5a7d9a", "#ebf6fc", "#486680"),
    TagColor("Fuji", "#e6cde3", "#5e385a", "#d1b3ce"),
    TagColor("Ayame", "#dcc2d6", "#5c3a55", "#c4a9be"),
    TagColor("Hagi", "#cfb8c9", "#52384c", "#b8a1b2"),
    TagColor("Lavender", "#e6e6fa", "#4b4b6e", "#d1d1eb"),
    TagColor("Kobai", "#dda0dd", "#573057", "#c48cc4"),
    TagColor("Sumire", "#d3a4ff", "#4b2c6b", "#bd8ce6"),
    TagColor("Gin-nezumi", "#dcdcdc", "#4f4f4f", "#c2c2c2"),
    TagColor("Shiracha", "#e0dacc", "#5e5746", "#c7c0b1"),
    TagColor("Subako", "#c8c2be", "#4d4845", "#b3ada9"),
)

NEUTRAL_TOKEN = "bg-stone-100 text-stone-600 border-stone-200"

_TOKEN_RE = re.compile(
    r"^bg-\[(#[0-9a-fA-F]{3,8})\]\s+text-\[(#[0-9a-fA-F]{3,8})\]\s+border-\[(#[0-9a-fA-F]{3,8})\]$"
)


def _to_int32(value: int) -> int:
    """Wrap an integer to signed 32 bits."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def tag_hash(tag: str) -> int:
    """
    Fold ``h = code + ((h << 5) - h)`` over the tag's UTF-16 code units.

    The shift is done in signed 32-bit arithmetic while the running value
    itself is not truncated, which reproduces JavaScript string hashing
    bit for bit.
    """
    data = tag.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = code + (_to_int32(h << 5) - h)
    return h


def palette_index(tag: str) -> int:
    return abs(tag_hash(tag)) % len(TAG_PALETTE)


def derived_color(tag: str) -> TagColor:
    """Palette entry for a tag, ignoring overrides."""
    return TAG_PALETTE[palette_index(tag)]


def color_for(tag: str, overrides: Optional[Mapping[str, str]] = None) -> str:
    """
    Color token for a tag.

    An explicit override is returned verbatim; otherwise the token of the
    hashed palette entry.
    """
    if overrides and tag in overrides:
        return overrides[tag]
    return derived_color(tag).token


def parse_token(token: str) -> Optional[TagColor]:
    """Map a stored token back to its palette entry, if it is one."""
    match = _TOKEN_RE.match(token.strip())
    if not match:
        return None
    triple = tuple(part.lower() for part in match.groups())
    for color in TAG_PALETTE:
        if (color.background, color.text, color.border) == triple:
            return color
    return TagColor("custom", *triple)


def resolve_color(value: str) -> Optional[str]:
    """
    Turn user input into a color token.

    Accepts a palette index, a palette color name (case-insensitive) or a
    full token. Returns None when nothing matches.
    """
    value = value.strip()
    if value.isdigit():
        index = int(value)
        return TAG_PALETTE[index].token if index < len(TAG_PALETTE) else None
    for color in TAG_PALETTE:
        if color.name.lower() == value.lower():
            return color.token
    color = parse_token(value)
    return color.token if color else None
