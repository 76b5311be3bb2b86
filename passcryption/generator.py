"""
Secure password generation.

Every random draw comes from the ``secrets`` module. Characters are picked by
reducing random bytes modulo the charset size, which leaves a small bias for
charsets whose size does not divide the byte range; that bias is accepted.
"""

import re
import secrets
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from . import config
from .errors import InvalidConfigError


@dataclass(frozen=True)
class GeneratorConfig:
    """Options for a single generate() call."""
    length: int = config.PASSWORD_GENERATOR_DEFAULT_LENGTH
    lowercase: bool = True
    uppercase: bool = True
    digits: bool = True
    symbols: bool = True
    symbol_alphabet: str = config.PASSWORD_GENERATOR_DEFAULT_SYMBOLS

    @property
    def use_symbols(self) -> bool:
        return self.symbols and bool(self.symbol_alphabet)

    def validate(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int) or self.length < 1:
            raise InvalidConfigError(f"Password length must be a positive integer, got {self.length!r}")

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> 'GeneratorConfig':
        """Build a config from the option names used by the UI."""
        symbols = options.get('allowedSymbols', config.PASSWORD_GENERATOR_DEFAULT_SYMBOLS)
        return cls(
            length=options.get('length', config.PASSWORD_GENERATOR_DEFAULT_LENGTH),
            lowercase=bool(options.get('includeLowercase', True)),
            uppercase=bool(options.get('includeUppercase', True)),
            digits=bool(options.get('includeNumbers', True)),
            symbols=bool(options.get('includeSymbols', True)),
            symbol_alphabet=symbols if isinstance(symbols, str) else "",
        )


def secure_random_index(bound: int) -> int:
    """Return an index in [0, bound) from 4 secure random bytes read as a big-endian uint32."""
    if bound < 1:
        raise ValueError(f"bound must be positive, got {bound}")
    return int.from_bytes(secrets.token_bytes(4), 'big') % bound


def secure_shuffle(items: List[Any]) -> None:
    """Fisher-Yates shuffle in place."""
    for i in range(len(items) - 1, 0, -1):
        j = secure_random_index(i + 1)
        items[i], items[j] = items[j], items[i]


def build_charset(cfg: GeneratorConfig) -> str:
    charset = ""
    if cfg.lowercase:
        charset += config.LOWERCASE_CHARS
    if cfg.uppercase:
        charset += config.UPPERCASE_CHARS
    if cfg.digits:
        charset += config.DIGIT_CHARS
    if cfg.use_symbols:
        charset += cfg.symbol_alphabet
    return charset or config.FALLBACK_CHARSET


def _categories(cfg: GeneratorConfig) -> List[Tuple[re.Pattern, str]]:
    # Order matters: missing categories claim positions left to right
    categories = []
    if cfg.lowercase:
        categories.append((re.compile(r'[a-z]'), config.LOWERCASE_CHARS))
    if cfg.uppercase:
        categories.append((re.compile(r'[A-Z]'), config.UPPERCASE_CHARS))
    if cfg.digits:
        categories.append((re.compile(r'[0-9]'), config.DIGIT_CHARS))
    if cfg.use_symbols:
        categories.append((re.compile('[' + re.escape(cfg.symbol_alphabet) + ']'), cfg.symbol_alphabet))
    return categories


def generate(cfg: GeneratorConfig) -> str:
    """
    Generate a password.

    Each enabled category is guaranteed at least one character as long as
    the length is at least the number of enabled categories.

    Args:
        cfg: Length and character category options

    Returns:
        Password of exactly cfg.length characters

    Raises:
        InvalidConfigError: If the length is not a positive integer
    """
    cfg.validate()
    charset = build_charset(cfg)

    chars = [charset[b % len(charset)] for b in secrets.token_bytes(cfg.length)]

    covered: List[re.Pattern] = []
    position = 0
    for pattern, alphabet in _categories(cfg):
        if pattern.search("".join(chars)):
            covered.append(pattern)
            continue
        index = _next_free_position(chars, position, covered)
        chars[index] = alphabet[secure_random_index(len(alphabet))]
        covered.append(pattern)
        position = index + 1

    secure_shuffle(chars)
    return "".join(chars)


def _next_free_position(chars: List[str], start: int, covered: List[re.Pattern]) -> int:
    """First index from start whose replacement keeps every covered category present."""
    for index in range(start, len(chars)):
        rest = "".join(chars[:index] + chars[index + 1:])
        if all(pattern.search(rest) for pattern in covered):
            return index
    # Fewer positions than categories
    return start % len(chars)
