"""Tests for the development token helper."""

from communify.scripts import tokens
from communify.services.identity import TokenIdentityProvider


def test_main_prints_usable_token(capsys) -> None:
    assert tokens.main(["carol@x.com", "--name", "Carol"]) == 0

    token = capsys.readouterr().out.strip()
    identity = TokenIdentityProvider(token).current_user()

    assert identity.email == "carol@x.com"
    assert identity.full_name == "Carol"
