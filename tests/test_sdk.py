# tests/test_sdk.py
import httpx
import pytest
import requests
from fastapi.testclient import TestClient
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from sdk.pystore import StoreClient


class InProcessAdapter(BaseAdapter):
    """Sends requests.Session traffic to an ASGI app instead of the network."""

    def __init__(self, app):
        super().__init__()
        self.client = TestClient(app)

    def send(self, request, **kwargs):
        headers = {k: v for k, v in request.headers.items() if k.lower() not in ("content-length", "connection")}
        r = self.client.request(request.method, request.url, content=request.body, headers=headers)

        resp = requests.Response()
        resp.status_code = r.status_code
        resp.reason = r.reason_phrase
        resp.headers = CaseInsensitiveDict(r.headers)
        resp._content = r.content
        resp.encoding = r.encoding
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        self.client.close()


def _requests_session(app):
    session = requests.Session()
    session.mount("http://testserver", InProcessAdapter(app))
    return session


@pytest.fixture
def sdk(app, auth_headers):
    # TestClient speaks the requests-style API the client expects
    return StoreClient(base_url="http://testserver", api_key=auth_headers["x-api-key"], session=TestClient(app))


def test_sdk_round_trip(sdk):
    assert sdk.hello() == "Hello World"

    p = sdk.create_product("Widget", "d", 9.99, "Tools", True)
    assert sdk.get_product(p["id"]) == p

    updated = sdk.update_product(p["id"], price=12.5, in_stock=False)
    assert updated == {**p, "price": 12.5, "inStock": False}

    assert sdk.stats() == {"totalProducts": 1, "countByCategory": {"Tools": 1}}
    assert sdk.delete_product(p["id"]) == {"message": "Product deleted successfully"}
    assert sdk.list_products()["total"] == 0


def test_sdk_list_passes_filters(sdk):
    for i in range(6):
        sdk.create_product(f"phone {i}", "d", i, "Electronics", True)
    sdk.create_product("lamp", "d", 1, "Home", True)

    page = sdk.list_products(category="electronics", search="phone", page=2, limit=4)
    assert page["total"] == 6
    assert page["page"] == 2
    assert [p["name"] for p in page["results"]] == ["phone 4", "phone 5"]


def test_sdk_raises_on_wrong_key(app):
    client = StoreClient(base_url="http://testserver", api_key="wrong", session=TestClient(app))
    with pytest.raises(httpx.HTTPStatusError) as exc:
        client.stats()
    assert exc.value.response.status_code == 401


def test_default_session_round_trip(app, auth_headers):
    client = StoreClient(base_url="http://testserver", api_key=auth_headers["x-api-key"],
                         session=_requests_session(app))

    p = client.create_product("Widget", "d", 9.99, "Tools", True)
    assert client.get_product(p["id"]) == p
    assert client.list_products(search="widget")["total"] == 1


def test_default_session_raises_http_error(app, auth_headers):
    # demo.py and cli.py catch requests' HTTPError and read the error body
    client = StoreClient(base_url="http://testserver", api_key="wrong", session=_requests_session(app))
    with pytest.raises(requests.exceptions.HTTPError) as exc:
        client.stats()
    assert exc.value.response.status_code == 401
    assert exc.value.response.json() == {"error": "Invalid or missing API key"}

    good = StoreClient(base_url="http://testserver", api_key=auth_headers["x-api-key"],
                       session=_requests_session(app))
    with pytest.raises(requests.exceptions.HTTPError) as exc:
        good.get_product("missing")
    assert exc.value.response.status_code == 404
    assert exc.value.response.json() == {"error": "Product not found"}
