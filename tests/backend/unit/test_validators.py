import pytest

from userapi.core.validators import is_email_valid


@pytest.mark.parametrize(
    "email",
    [
        "a@b.com",
        "first.last@example.co.uk",
        "user+tag@sub.domain.io",
        "o'neil@example.org",
    ],
)
def test_accepts_well_formed_emails(email):
    assert is_email_valid(email)


@pytest.mark.parametrize(
    "email",
    [
        "",
        "not-an-email",
        "user@",
        "@example.com",
        "user@localhost",
        "user@@example.com",
        "user@exa mple.com",
        "user@example.com\n",
        "user@-example.com",
    ],
)
def test_rejects_malformed_emails(email):
    assert not is_email_valid(email)


def test_rejects_overlong_email():
    local = "a" * 64
    domain = ".".join(["b" * 60] * 4) + ".com"
    assert len(f"{local}@{domain}") > 254
    assert not is_email_valid(f"{local}@{domain}")


def test_rejects_non_string():
    assert not is_email_valid(None)
