"""
Token verification against a locally generated RSA key standing in for the
user pool's signing key.
"""

import time

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import JWTError, jwk, jwt

from lcms_cleaning import auth
from lcms_cleaning.auth import MANAGER_GROUP, STAFF_MEMBER_GROUP, CognitoTokenVerifier

REGION = "eu-west-2"
USER_POOL_ID = "eu-west-2_test"
CLIENT_ID = "app-client"
ISSUER = f"https://cognito-idp.{REGION}.amazonaws.com/{USER_POOL_ID}"
KID = "test-key"


@pytest.fixture(scope="module")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="module")
def signing_key(private_key):
    return private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption()
    ).decode()


@pytest.fixture(scope="module")
def jwks(private_key):
    public_pem = private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo
    )
    key = jwk.construct(public_pem, "RS256").to_dict()
    key["kid"] = KID
    key["alg"] = "RS256"
    return {"keys": [key]}


@pytest.fixture
def make_token(signing_key):
    def _make(groups=(STAFF_MEMBER_GROUP,), kid=KID, **overrides):
        claims = {
            "iss": ISSUER,
            "token_use": "access",
            "client_id": CLIENT_ID,
            "cognito:groups": list(groups),
            "exp": int(time.time()) + 3600,
            "username": "alex.smith",
        }
        claims.update(overrides)
        return jwt.encode(claims, signing_key, algorithm="RS256", headers={"kid": kid})
    return _make


@pytest.fixture
def all_users(jwks):
    return CognitoTokenVerifier(REGION, USER_POOL_ID, CLIENT_ID, [STAFF_MEMBER_GROUP, MANAGER_GROUP], jwks)


@pytest.fixture
def managers(jwks):
    return CognitoTokenVerifier(REGION, USER_POOL_ID, CLIENT_ID, [MANAGER_GROUP], jwks)


class TestVerify:

    def test_staff_member_token(self, all_users, make_token):
        claims = all_users.verify(make_token())
        assert claims["username"] == "alex.smith"

    def test_manager_token_passes_both(self, all_users, managers, make_token):
        token = make_token(groups=[MANAGER_GROUP])
        assert all_users.verify(token)["cognito:groups"] == [MANAGER_GROUP]
        assert managers.verify(token)["cognito:groups"] == [MANAGER_GROUP]

    def test_staff_member_is_not_a_manager(self, managers, make_token):
        with pytest.raises(JWTError):
            managers.verify(make_token())

    @pytest.mark.parametrize("overrides", [
        {"token_use": "id"},
        {"client_id": "another-client"},
        {"iss": "https://cognito-idp.eu-west-2.amazonaws.com/another-pool"},
        {"exp": int(time.time()) - 60},
    ])
    def test_rejected_claims(self, all_users, make_token, overrides):
        with pytest.raises(JWTError):
            all_users.verify(make_token(**overrides))

    def test_unknown_key(self, all_users, make_token):
        with pytest.raises(JWTError):
            all_users.verify(make_token(kid="rotated-key"))

    def test_signed_with_another_key(self, all_users):
        other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048).private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption()
        ).decode()
        token = jwt.encode(
            {"iss": ISSUER, "token_use": "access", "client_id": CLIENT_ID,
             "cognito:groups": [MANAGER_GROUP], "exp": int(time.time()) + 3600},
            other_key, algorithm="RS256", headers={"kid": KID}
        )

        with pytest.raises(JWTError):
            all_users.verify(token)


class TestJwksFetch:

    def test_fetched_once_from_the_pool(self, jwks, make_token, monkeypatch):
        calls = []

        class Response:
            def raise_for_status(self):
                pass

            def json(self):
                return jwks

        def fake_get(url, timeout):
            calls.append(url)
            return Response()

        monkeypatch.setattr(auth.requests, "get", fake_get)
        verifier = CognitoTokenVerifier(REGION, USER_POOL_ID, CLIENT_ID, [STAFF_MEMBER_GROUP])

        verifier.verify(make_token())
        verifier.verify(make_token())

        assert calls == [f"{ISSUER}/.well-known/jwks.json"]
