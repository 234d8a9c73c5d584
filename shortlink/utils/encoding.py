from typing import Optional

from hashids import Hashids


class LinkCodec:
    """Salted, reversible mapping between a link identifier and its public code.

    Codes are Hashids of a single non-negative integer. ``Hashids.decode``
    re-encodes what it decoded and returns nothing unless that matches the
    input, so strings produced under another salt or minimum length (or not
    produced by ``encode`` at all) are rejected.
    """

    def __init__(self, salt: str, min_length: int = 5, alphabet: Optional[str] = None):
        if min_length < 0:
            raise ValueError("min_length must be non-negative")
        self.salt = salt
        self.min_length = min_length
        if alphabet:
            self._hashids = Hashids(salt=salt, min_length=min_length, alphabet=alphabet)
        else:
            self._hashids = Hashids(salt=salt, min_length=min_length)

    @classmethod
    def from_settings(cls, settings) -> "LinkCodec":
        return cls(settings.LINK_SALT, settings.LINK_MIN_LENGTH, settings.LINK_ALPHABET)

    def encode(self, identifier: int) -> str:
        """Encode a non-negative integer identifier into a short code."""
        if isinstance(identifier, bool) or not isinstance(identifier, int):
            raise ValueError(f"identifier must be an int, got {type(identifier).__name__}")
        if identifier < 0:
            raise ValueError("identifier must be non-negative")
        return self._hashids.encode(identifier)

    def decode(self, code: str) -> Optional[int]:
        """Decode a short code back to its identifier, or None if it isn't one of ours."""
        if not code or not isinstance(code, str):
            return None
        numbers = self._hashids.decode(code)
        # Multi-number hashids are valid Hashids but never produced by encode()
        if len(numbers) != 1:
            return None
        return numbers[0]
