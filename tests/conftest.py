import pytest

from messageheaders.store import HeaderStore

CLIENT_REQUEST = (
    b"User-Agent: curl/7.16.3 libcurl/7.163 OpenSSL/0.9.7l zlib/1.2.3\r\n"
    b"Host: www.example.com\r\n"
    b"Accept-Language: en, mi\r\n"
    b"\r\n"
)


@pytest.fixture
def client_request() -> bytes:
    return CLIENT_REQUEST


@pytest.fixture
def client_store(client_request: bytes) -> HeaderStore:
    store = HeaderStore(line_length_limit=0)
    assert store.parse_raw_message(client_request)
    return store
