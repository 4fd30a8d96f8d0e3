# TokenPool
# (token sources, uniform random sampling)
#

import logging
from pathlib import Path
from random import SystemRandom
random = SystemRandom()

log = logging.getLogger(__name__)


class EmptyPoolError(ValueError):

    def __init__(self, source):
        ValueError.__init__(self, f"no tokens in {source}")
        self.source = source


class TokenPool:

    """Ordered, immutable sequence of tokens.

    Built-in presets and loaded token files are both represented
    by this class, they only differ in where the tokens come from.
    The pool is never empty.

    """

    def __init__(self, tokens, source='<tokens>'):
        self._tokens = tuple(tokens)
        self._source = source
        if not self._tokens:
            raise EmptyPoolError(source)

    @classmethod
    def from_lines(cls, lines, source='<lines>'):
        """Make a pool of non-empty lines, with surrounding whitespace removed."""
        stripped = (line.strip() for line in lines)
        return cls((line for line in stripped if line), source)

    @classmethod
    def from_file(cls, filename):
        """Load a newline-delimited token file.

        Raises OSError or UnicodeDecodeError when the file can't be read,
        EmptyPoolError when there are no tokens in it.

        """
        path = Path(filename).expanduser()
        with open(path, 'r', encoding='utf-8') as f:
            pool = cls.from_lines(f, source=str(path))
        log.debug("Loaded %d tokens from %s", len(pool), path)
        return pool

    @property
    def source(self) -> str:
        return self._source

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, index) -> str:
        if not 0 <= index < len(self._tokens):
            raise IndexError(f"token index {index} out of range "
                             f"(pool size {len(self._tokens)})")
        return self._tokens[index]

    def __iter__(self):
        return iter(self._tokens)

    def __repr__(self):
        return f"TokenPool(source={self._source!r}, size={len(self)})"

    def sample(self, rng=random) -> str:
        """Draw one token, uniformly at random."""
        return self[rng.randrange(len(self._tokens))]


def generate_passphrase(pool: TokenPool, count: int, separator: str = '',
                        rng=random) -> str:
    """Join `count` tokens drawn from `pool` (with replacement) by `separator`."""
    return separator.join(pool.sample(rng) for _ in range(count))
