"""署名検証のテスト"""

from nacl.signing import SigningKey

from sumtube.signature import verify_discord_request

BODY = b'{"type": 1}'
TIMESTAMP = "1700000000"


def sign(key: SigningKey, body: bytes = BODY, timestamp: str = TIMESTAMP) -> str:
    return key.sign(timestamp.encode() + body).signature.hex()


def test_valid_signature(signing_key):
    public_key = signing_key.verify_key.encode().hex()

    assert verify_discord_request(BODY, sign(signing_key), TIMESTAMP, public_key)


def test_wrong_key(signing_key):
    other_key = SigningKey.generate().verify_key.encode().hex()

    assert not verify_discord_request(BODY, sign(signing_key), TIMESTAMP, other_key)


def test_wrong_timestamp(signing_key):
    public_key = signing_key.verify_key.encode().hex()

    assert not verify_discord_request(BODY, sign(signing_key), "1700000001", public_key)


def test_missing_values(signing_key):
    public_key = signing_key.verify_key.encode().hex()

    assert not verify_discord_request(BODY, None, TIMESTAMP, public_key)
    assert not verify_discord_request(BODY, sign(signing_key), None, public_key)
    assert not verify_discord_request(BODY, sign(signing_key), TIMESTAMP, "")


def test_malformed_hex(signing_key):
    public_key = signing_key.verify_key.encode().hex()

    assert not verify_discord_request(BODY, "not-hex", TIMESTAMP, public_key)
    assert not verify_discord_request(BODY, sign(signing_key), TIMESTAMP, "abcd")
