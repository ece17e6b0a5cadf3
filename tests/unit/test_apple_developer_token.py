"""Unit tests for Apple Music developer token signing."""

from __future__ import annotations

from pathlib import Path

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from src.providers.auth.apple_developer_token import (
    TOKEN_LIFETIME_SECONDS,
    AppleDeveloperTokenSigner,
)
from src.utils.errors import ConfigurationError
from tests.conftest import make_settings


class FakeClock:
    def __init__(self, now: float = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def ec_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def pem(ec_key: ec.EllipticCurvePrivateKey) -> str:
    return ec_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()


def _signer(pem: str, clock: FakeClock | None = None, **overrides: str) -> AppleDeveloperTokenSigner:
    values = {
        "apple_music_team_id": "TEAM123456",
        "apple_music_key_id": "KEY1234567",
        "apple_music_private_key": pem,
    }
    values.update(overrides)
    return AppleDeveloperTokenSigner(make_settings(**values), clock=clock or FakeClock())


class TestAppleDeveloperTokenSigner:
    def test_signs_es256_token(self, pem: str, ec_key: ec.EllipticCurvePrivateKey) -> None:
        token = _signer(pem).get_token()

        header = jwt.get_unverified_header(token)
        assert header["alg"] == "ES256"
        assert header["kid"] == "KEY1234567"

        claims = jwt.decode(
            token,
            ec_key.public_key(),
            algorithms=["ES256"],
            options={"verify_exp": False, "verify_iat": False},
        )
        assert claims["iss"] == "TEAM123456"
        assert claims["iat"] == 1_700_000_000
        assert claims["exp"] == 1_700_000_000 + TOKEN_LIFETIME_SECONDS

    def test_token_reused_until_near_expiry(self, pem: str) -> None:
        clock = FakeClock()
        signer = _signer(pem, clock)

        first = signer.get_token()
        clock.now += 3600
        assert signer.get_token() == first

        clock.now += TOKEN_LIFETIME_SECONDS
        assert signer.get_token() != first

    def test_escaped_newlines_accepted(self, pem: str) -> None:
        token = _signer(pem.replace("\n", "\\n")).get_token()
        assert jwt.get_unverified_header(token)["kid"] == "KEY1234567"

    def test_key_read_from_path(self, pem: str, tmp_path: Path) -> None:
        key_file = tmp_path / "AuthKey.p8"
        key_file.write_text(pem)

        signer = _signer("", apple_music_private_key_path=str(key_file))

        assert signer.is_available()
        assert signer.get_token()

    def test_key_file_read_once_at_construction(self, pem: str, tmp_path: Path) -> None:
        key_file = tmp_path / "AuthKey.p8"
        key_file.write_text(pem)
        clock = FakeClock()
        signer = _signer("", clock, apple_music_private_key_path=str(key_file))
        key_file.unlink()

        first = signer.get_token()
        clock.now += TOKEN_LIFETIME_SECONDS

        assert signer.get_token() != first

    def test_unreadable_key_path(self, tmp_path: Path) -> None:
        signer = _signer("", apple_music_private_key_path=str(tmp_path / "missing.p8"))

        with pytest.raises(ConfigurationError, match="Failed to read"):
            signer.get_token()

    def test_invalid_key(self) -> None:
        with pytest.raises(ConfigurationError):
            _signer("not a pem key").get_token()

    def test_unconfigured(self) -> None:
        signer = _signer("", apple_music_team_id="")

        assert signer.is_available() is False
        with pytest.raises(ConfigurationError):
            signer.get_token()
