"""
Module for representing ASCII biological alphabets and mapping their symbols to score matrix indices.
"""
from typing import Union, Final, ClassVar

import numpy as np


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class AlphabetError(Exception):
    """Raised when an alphabet is invalid or an operation is incompatible with the alphabet."""


# Classes --------------------------------------------------------------------------------------------------------------
class Alphabet:
    """
    A class to represent an alphabet of ASCII symbols.

    Each symbol is assigned the index of its position in the alphabet, which is also its row and column in a
    ``ScoreMatrix``. Bytes the alphabet does not know map to ``Alphabet.INVALID``.

    Examples:
        >>> dna = Alphabet(b'ACGT')
        >>> dna.encode(b'GATTACA')
        array([2, 0, 3, 3, 0, 1, 0])
    """
    __slots__ = ('_data', '_lookup_table')
    DTYPE: Final = np.uint8
    INDEX_DTYPE: Final = np.int64
    INVALID: Final = -1
    MAX_LEN: Final = np.iinfo(DTYPE).max
    ENCODING: Final = 'ascii'

    DNA: ClassVar['Alphabet']
    RNA: ClassVar['Alphabet']
    AMINO: ClassVar['Alphabet']

    def __init__(self, symbols: Union[bytes, str], aliases: dict[bytes, bytes] = None):
        """
        Initializes an Alphabet.

        Args:
            symbols: The symbols in the alphabet as bytes.
            aliases: Optional mapping of extra characters to valid ones (e.g. {b'N': b'A'}).

        Raises:
            AlphabetError: If symbols are empty, not ASCII, too long or contain duplicates, or if an alias is invalid.
        """
        if not symbols: raise AlphabetError('Alphabet must contain at least one symbol')
        if not symbols.isascii(): raise AlphabetError('Alphabet symbols must be a valid ASCII string')
        if isinstance(symbols, str): symbols = symbols.encode(self.ENCODING)
        if len(symbols) > self.MAX_LEN:
            raise AlphabetError(f'Alphabet size cannot exceed {self.MAX_LEN} symbols')
        if len(set(symbols.upper())) != len(symbols): raise AlphabetError('Alphabet contains duplicate symbols')

        self._data: np.ndarray = np.frombuffer(symbols, dtype=self.DTYPE)

        # Build Lookup Table (case-insensitive)
        self._lookup_table = np.full(self.MAX_LEN + 1, self.INVALID, dtype=self.INDEX_DTYPE)
        indices = np.arange(len(symbols), dtype=self.INDEX_DTYPE)
        self._lookup_table[np.frombuffer(symbols.upper(), dtype=self.DTYPE)] = indices
        self._lookup_table[np.frombuffer(symbols.lower(), dtype=self.DTYPE)] = indices

        if aliases:
            for src, dst in aliases.items():
                if len(src) != 1 or len(dst) != 1: raise AlphabetError("Aliases must be single bytes")
                if not src.isascii(): raise AlphabetError(f"Alias {src} is not ASCII")
                dst_idx = self._lookup_table[ord(dst)]
                if dst_idx == self.INVALID: raise AlphabetError(f"Alias target {dst} not in alphabet")
                if self._lookup_table[ord(src)] not in (self.INVALID, dst_idx):
                    raise AlphabetError(f"Alias {src} shadows an alphabet symbol")
                self._lookup_table[ord(src.upper())] = dst_idx
                self._lookup_table[ord(src.lower())] = dst_idx

        self._data.flags.writeable = False
        self._lookup_table.flags.writeable = False

    def __len__(self):
        return len(self._data)

    def __contains__(self, item):
        try:
            if isinstance(item, (int, np.integer)):
                return self._lookup_table[item] != self.INVALID
            if isinstance(item, (str, bytes)):
                if len(item) != 1: return False
                val = ord(item) if isinstance(item, str) else item[0]
                return self._lookup_table[val] != self.INVALID
        except (IndexError, ValueError, TypeError):
            pass
        return False

    def __iter__(self):
        return iter(self._data.tobytes().decode(self.ENCODING))

    def __getitem__(self, item):
        return self._data[item]

    def __repr__(self):
        return f"Alphabet({self.symbols!r})"

    def __eq__(self, other):
        if self is other: return True
        if not isinstance(other, Alphabet): return False
        return np.array_equal(self._data, other._data) and np.array_equal(self._lookup_table, other._lookup_table)

    def __hash__(self):
        return hash(self._data.tobytes())

    @property
    def symbols(self) -> bytes:
        """The canonical symbols of the alphabet, in index order."""
        return self._data.tobytes()

    def index(self, symbol: Union[bytes, str, int]) -> int:
        """
        Returns the score matrix index of a single symbol.

        Args:
            symbol: A single-character ``str``/``bytes`` or a byte value.

        Returns:
            The index, or ``Alphabet.INVALID`` if the symbol is not recognised.
        """
        if isinstance(symbol, (str, bytes)):
            if len(symbol) != 1: return self.INVALID
            symbol = ord(symbol)
        if not 0 <= symbol <= self.MAX_LEN: return self.INVALID
        return int(self._lookup_table[symbol])

    def encode(self, text: Union[bytes, str]) -> np.ndarray:
        """
        Maps every symbol of a text to its index.

        Unlike a filtering encoder, unrecognised symbols are kept in place as ``INVALID`` so that their positions
        can be reported.

        Args:
            text: The text to encode.

        Returns:
            A numpy array of ``INDEX_DTYPE`` indices, one per input symbol.
        """
        if isinstance(text, str):
            if text.isascii(): text = text.encode(self.ENCODING)
            else:
                # One code point per character; anything beyond ASCII is never a symbol
                codes = np.frombuffer(text.encode('utf-32-le'), dtype=np.uint32)
                encoded = np.full(len(codes), self.INVALID, dtype=self.INDEX_DTYPE)
                ascii_mask = codes < 128
                encoded[ascii_mask] = self._lookup_table[codes[ascii_mask]]
                return encoded
        return self._lookup_table[np.frombuffer(bytes(text), dtype=self.DTYPE)]

    def decode(self, encoded: np.ndarray) -> bytes:
        """Decodes an array of indices back to bytes.

        Args:
            encoded: The numpy array of indices.

        Returns:
            The decoded bytes string.

        Raises:
            AlphabetError: If an index lies outside the alphabet.
        """
        encoded = np.asarray(encoded, dtype=self.INDEX_DTYPE)
        if np.any((encoded < 0) | (encoded >= len(self._data))):
            raise AlphabetError(f'Cannot decode indices outside [0, {len(self._data)})')
        return self._data[encoded].tobytes()


# Initialize Standard Alphabets
Alphabet.DNA = Alphabet(b'ACGT', aliases={b'N': b'A', b'U': b'T'})
Alphabet.RNA = Alphabet(b'ACGU', aliases={b'N': b'A', b'T': b'U'})
Alphabet.AMINO = Alphabet(b'ACDEFGHIKLMNPQRSTVWY',
                          aliases={b'X': b'A', b'B': b'D', b'Z': b'E', b'J': b'L', b'U': b'C', b'O': b'K'})
