import pytest
from jose import jwt

from bot.exceptions import AuthenticationError
from market.auth import complete_login, issue_token, verify_token

SECRET = "unit-secret"


def test_issued_token_verifies():
    assert verify_token(issue_token("76561198000000001", SECRET), SECRET) == "76561198000000001"


def test_missing_token_is_401():
    with pytest.raises(AuthenticationError) as exc_info:
        verify_token(None, SECRET)
    assert exc_info.value.status_code == 401


@pytest.mark.parametrize("token", ["garbage", issue_token("A", "other-secret")])
def test_invalid_token_is_403(token):
    with pytest.raises(AuthenticationError) as exc_info:
        verify_token(token, SECRET)
    assert exc_info.value.status_code == 403


def test_expired_token_is_403():
    with pytest.raises(AuthenticationError) as exc_info:
        verify_token(issue_token("A", SECRET, expire_minutes=-5), SECRET)
    assert exc_info.value.status_code == 403


def test_token_without_account_is_403():
    token = jwt.encode({"sub": "A"}, SECRET, algorithm="HS256")
    with pytest.raises(AuthenticationError) as exc_info:
        verify_token(token, SECRET)
    assert exc_info.value.status_code == 403


def test_complete_login_upserts_and_issues_token(directory, users_collection):
    profile = {"steamid": "C", "personaname": "Carol", "avatarmedium": "carol.jpg"}
    token = complete_login(directory, profile, SECRET)
    assert verify_token(token, SECRET) == "C"

    complete_login(directory, profile, SECRET)
    assert users_collection.writes == 1
    assert users_collection.find_one({"steamid": "C"})["credit"] == 0
