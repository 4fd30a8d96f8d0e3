# presets
# (built-in token pools)
#

import string
import functools
from pathlib import Path
from typing import Callable, NamedTuple

from .pool import TokenPool

WORDLIST_PATH = Path(__file__).with_name('words.txt')

ASCII_CHARS = string.ascii_letters + string.digits + string.punctuation


@functools.lru_cache(maxsize=None)
def load_wordlist() -> tuple:
    """Load and return the shipped word list."""
    with open(WORDLIST_PATH, 'r', encoding='utf-8') as f:
        return tuple(w.strip() for w in f if w.strip())


class Preset(NamedTuple):
    name: str
    token_count: int
    token_separator: str
    tokens: Callable[[], tuple]

    def pool(self) -> TokenPool:
        return TokenPool(self.tokens(), source=f"preset {self.name!r}")


class UnknownPresetError(KeyError):

    def __str__(self):
        return f"invalid preset {self.args[0]!r}"


PRESETS = {preset.name: preset for preset in (
    Preset('ascii', 20, '', lambda: tuple(ASCII_CHARS)),
    Preset('number', 12, '', lambda: tuple(string.digits)),
    Preset('word', 6, '-', load_wordlist),
)}

DEFAULT_PRESET = 'word'


def get_preset(name: str) -> Preset:
    try:
        return PRESETS[name]
    except KeyError:
        raise UnknownPresetError(name) from None
