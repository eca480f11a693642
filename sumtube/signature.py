"""Discordリクエスト署名検証

ed25519署名の検証はPyNaClに委譲する。
"""

import logging
from typing import Optional

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

logger = logging.getLogger(__name__)


def verify_discord_request(
    body: bytes,
    signature: Optional[str],
    timestamp: Optional[str],
    public_key: str,
) -> bool:
    """Discordから送られたリクエストの署名を検証

    Args:
        body: 生のリクエストボディ
        signature: X-Signature-Ed25519 ヘッダーの値（16進数）
        timestamp: X-Signature-Timestamp ヘッダーの値
        public_key: アプリケーションの公開鍵（16進数）

    Returns:
        署名が正しい場合True。ヘッダー欠落・形式不正の場合もFalseを返す。
    """
    if not signature or not timestamp or not public_key:
        logger.warning(
            "Missing signature material",
            extra={
                "has_signature": bool(signature),
                "has_timestamp": bool(timestamp),
                "has_public_key": bool(public_key),
            }
        )
        return False

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        verify_key.verify(timestamp.encode() + body, bytes.fromhex(signature))
    except BadSignatureError:
        logger.warning("Request signature verification failed")
        return False
    except (ValueError, TypeError) as e:
        # 16進数として不正、または鍵長が不正
        logger.warning(
            "Malformed signature or public key",
            extra={"error": str(e)}
        )
        return False

    return True
