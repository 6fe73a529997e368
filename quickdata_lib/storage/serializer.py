from typing import Any, Protocol
import base64
import binascii
import json
import logging

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

logger = logging.getLogger(__name__)

# Fixed key shared with files written by the engine-side tooling. Changing
# it makes every existing store file undecryptable.
DEFAULT_KEY = "1234567890abcdef"


class Serializer(Protocol):
    """Serialize/deserialize Python values to the text kept by a backend.

    Implementations should be symmetric: `dump` -> str, `load` <- str.
    Failures to load raise `ValueError` (or a subclass).
    """

    def dump(self, value: Any) -> str: ...

    def load(self, data: str) -> Any: ...


class JSONSerializer:
    """Compact JSON text. Non-ASCII characters are written as-is."""

    def dump(self, value: Any) -> str:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))

    def load(self, data: str) -> Any:
        return json.loads(data)


class EncryptedSerializer:
    """Serializer that encrypts payloads with AES in ECB mode.

    Notes:
    - The layout is base64(AES-ECB(PKCS7(utf8(inner)))), where `inner` is
        the text produced by `base_serializer`. There is no frame, salt or
        MAC; the format must stay readable by the engine-side tooling.
    - ECB with a fixed key only obscures the file. It does not protect
        against tampering and repeated plaintext blocks stay visible.
    - `base_serializer` defaults to JSON (text) but is set inside
        `__init__` to avoid mutable/side-effectful default arguments.
    """

    def __init__(
        self,
        *,
        key: str = DEFAULT_KEY,
        base_serializer: Serializer | None = None,
    ) -> None:
        key_bytes = key.encode("utf-8")
        if len(key_bytes) not in (16, 24, 32):
            raise ValueError("EncryptedSerializer key must be 16, 24 or 32 bytes")
        self._key = key_bytes
        self.base_serializer = base_serializer or JSONSerializer()

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.ECB())

    def encrypt(self, text: str) -> str:
        """Encrypt plain text and return base64 ciphertext."""
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(text.encode("utf-8")) + padder.finalize()
        encryptor = self._cipher().encryptor()
        ct = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(ct).decode("ascii")

    def decrypt(self, text: str) -> str:
        """Decrypt base64 ciphertext back to plain text.

        Raises ValueError for anything that is not a ciphertext produced
        with this key.
        """
        try:
            ct = base64.b64decode(text.strip(), validate=True)
        except binascii.Error as e:
            raise ValueError(f"ciphertext is not valid base64: {e}") from e
        decryptor = self._cipher().decryptor()
        # finalize raises ValueError when the length is not a block multiple
        padded = decryptor.update(ct) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")

    def dump(self, value: Any) -> str:
        """Serialize and encrypt value, returning base64 text."""
        return self.encrypt(self.base_serializer.dump(value))

    def load(self, data: str) -> Any:
        """Decrypt and deserialize."""
        return self.base_serializer.load(self.decrypt(data))
