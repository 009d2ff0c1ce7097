import pytest

from hmac_otp.backend import app as flask_app

KEY = b"supersecretkey123"


@pytest.fixture
def key():
    return KEY


@pytest.fixture
def fixed_source():
    """Random source that always returns 0x00, 0x01, ... 0x0f."""
    def source(n):
        return bytes(range(n))
    return source


@pytest.fixture
def client():
    flask_app.config.update(TESTING=True, OTP_KEY=KEY.decode("ascii"))
    with flask_app.test_client() as c:
        yield c


@pytest.fixture
def client_without_key():
    old = flask_app.config.get("OTP_KEY")
    flask_app.config.update(TESTING=True, OTP_KEY=None)
    with flask_app.test_client() as c:
        yield c
    flask_app.config["OTP_KEY"] = old
