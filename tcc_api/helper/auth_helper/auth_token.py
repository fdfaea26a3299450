import base64
import json
import time
from typing import Optional
from jose import JWTError, jwt
from ...models import models
from ..utils import create_unique_id, create_signature_suffix


# {"alg":"HS256","typ":"JWT"}
TOKEN_HEADER = "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
TOKEN_ISSUER = "TCCJwtApi"
TOKEN_AUDIENCE = "TCCJwtApiUsers"
TOKEN_LIFETIME_SECONDS = 3600
SIGNATURE_PREFIX = "mock_signature_"


def build_claims(username: str, now: Optional[int] = None):
    issued_at = int(time.time()) if now is None else now
    return {
        "unique_name": username,
        "nameid": username,
        "sub": username,
        "jti": create_unique_id(),
        "iat": issued_at,
        "nbf": issued_at,
        "exp": issued_at + TOKEN_LIFETIME_SECONDS,
        "iss": TOKEN_ISSUER,
        "aud": TOKEN_AUDIENCE,
    }


def generate_token(username: str):
    """Build an unsigned header.payload.signature token for username.

    The payload is plain base64 of the claim set. The signature is a
    placeholder carrying a random suffix, so two tokens for the same user
    never compare equal even inside one clock tick.
    """
    claims = build_claims(username)
    payload = base64.b64encode(json.dumps(claims, separators=(",", ":")).encode("utf-8")).decode("ascii")
    signature = SIGNATURE_PREFIX + create_signature_suffix()
    return f"{TOKEN_HEADER}.{payload}.{signature}"


def decode_token(token: str):
    # signature is synthetic, only the claims are checked
    return jwt.decode(
        token,
        "",
        options={"verify_signature": False},
        audience=TOKEN_AUDIENCE,
        issuer=TOKEN_ISSUER,
    )


def verify_token(token: str, credentials_exception):
    try:
        if not token:
            raise credentials_exception
        payload = decode_token(token)
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
        token_data = models.TokenData(username=username)
        return token_data
    except (JWTError, ValueError, TypeError):
        raise credentials_exception
