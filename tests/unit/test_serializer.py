import base64
import json

import pytest

from quickdata_lib.storage.serializer import EncryptedSerializer, JSONSerializer, DEFAULT_KEY


def test_json_serializer_is_compact_and_keeps_unicode():
    s = JSONSerializer()
    text = s.dump({"allString": {"k": "héllo 世界"}})
    assert text == '{"allString":{"k":"héllo 世界"}}'
    assert s.load(text) == {"allString": {"k": "héllo 世界"}}


@pytest.mark.parametrize("plain", ["", "a", "0123456789abcde", "0123456789abcdef", "多字节字符", "x" * 100])
def test_encrypt_decrypt_roundtrip(plain):
    s = EncryptedSerializer()
    ct = s.encrypt(plain)
    assert s.decrypt(ct) == plain


@pytest.mark.parametrize("n", [0, 1, 15, 16, 17, 31, 32])
def test_ciphertext_length_is_padded_to_block(n):
    s = EncryptedSerializer()
    raw = base64.b64decode(s.encrypt("a" * n))
    # PKCS7 always adds 1..16 bytes
    assert len(raw) == (n // 16 + 1) * 16


def test_ecb_is_deterministic_per_block():
    s = EncryptedSerializer()
    block = "A" * 16
    raw = base64.b64decode(s.encrypt(block * 2))
    assert raw[:16] == raw[16:32]
    assert s.encrypt(block) == s.encrypt(block)


def test_default_key_is_sixteen_bytes():
    assert len(DEFAULT_KEY.encode("utf-8")) == 16


def test_rejects_bad_key_length():
    with pytest.raises(ValueError):
        EncryptedSerializer(key="short")


def test_decrypt_rejects_non_base64():
    with pytest.raises(ValueError):
        EncryptedSerializer().decrypt("this is not base64!")


def test_decrypt_rejects_partial_block():
    with pytest.raises(ValueError):
        EncryptedSerializer().decrypt(base64.b64encode(b"12345").decode("ascii"))


def test_dump_load_wraps_base_serializer():
    s = EncryptedSerializer()
    payload = {"allInt": {"a": 1}, "allBool": {"b": True}}
    text = s.dump(payload)
    assert json.loads(s.decrypt(text)) == payload
    assert s.load(text) == payload


def test_decrypt_ignores_surrounding_whitespace():
    s = EncryptedSerializer()
    assert s.decrypt("  " + s.encrypt("hello") + "\n") == "hello"
