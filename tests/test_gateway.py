import httpx
import pytest

from adapters.weblate.gateway import WeblateGateway
from core.domain.models import UploadRequest
from core.errors import InvalidHostError, NotFoundError, TransportError
from tests.conftest import HOST, TOKEN


def _gateway(settings, handler) -> WeblateGateway:
    return WeblateGateway(HOST, TOKEN, settings=settings, transport=httpx.MockTransport(handler))


def test_requests_carry_auth_and_fixed_headers(settings, make_handler):
    handler = make_handler(lambda request: httpx.Response(200, json=[]))

    _gateway(settings, handler).list_projects()

    request = handler.last
    assert request.method == "GET"
    assert request.headers["Authorization"] == f"Token {TOKEN}"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == "weblate-gateway-tests/1.0"


def test_pagination_params_only_when_present(settings, make_handler):
    handler = make_handler(lambda request: httpx.Response(200, json={"count": 0, "results": []}))
    gateway = _gateway(settings, handler)

    gateway.list_projects()
    assert handler.last.url.path == "/api/projects/"
    assert handler.last.url.query == b""

    gateway.list_projects(page=2, page_size=50)
    assert handler.last.url.params["page"] == "2"
    assert handler.last.url.params["page_size"] == "50"


def test_list_projects_normalizes_envelope(settings, make_handler):
    payload = {"count": 7, "next": f"{HOST}/api/projects/?page=2", "previous": None, "results": [{"slug": "a"}]}
    handler = make_handler(lambda request: httpx.Response(200, json=payload))

    page = _gateway(settings, handler).list_projects()

    assert page.count == 7
    assert page.next == f"{HOST}/api/projects/?page=2"
    assert page.results == [{"slug": "a"}]


def test_languages_not_found(settings, make_handler):
    handler = make_handler(lambda request: httpx.Response(404, json={"detail": "Not found."}))

    with pytest.raises(NotFoundError):
        _gateway(settings, handler).list_project_languages("missing")

    assert handler.last.url.path == "/api/projects/missing/languages/"


def test_upload_uses_double_encoded_slug_and_multipart(settings, make_handler, tmp_path):
    handler = make_handler(lambda request: httpx.Response(200, json={"accepted": 1}))
    source = tmp_path / "Localizable.strings"
    source.write_bytes(b'"key" = "value";\n')
    upload = UploadRequest.from_path(source, {"method": "translate", "conflicts": "ignore", "fuzzy": None})

    result = _gateway(settings, handler).upload_translation_file(
        "my-project", "ios/localizable-strings", "en_devel", upload
    )

    request = handler.last
    assert result == {"accepted": 1}
    assert request.method == "POST"
    assert request.url.raw_path.endswith(b"/api/translations/my-project/ios%252Flocalizable-strings/en_devel/file/")
    content_type = request.headers["Content-Type"]
    assert content_type.startswith("multipart/form-data; boundary=----formdata-")
    boundary = content_type.split("boundary=", 1)[1].encode()
    body = request.content
    assert body.startswith(b"--" + boundary + b"\r\n")
    assert body.endswith(b"--" + boundary + b"--\r\n")
    assert b'name="file"; filename="Localizable.strings"' in body
    assert b'"key" = "value";\n' in body
    assert b'name="method"' in body
    assert b'name="fuzzy"' not in body


def test_component_upload_url(settings, make_handler, tmp_path):
    handler = make_handler(lambda request: httpx.Response(201, json={}))
    source = tmp_path / "strings.xml"
    source.write_bytes(b"<resources/>")

    _gateway(settings, handler).upload_component_file("app", "android/strings", UploadRequest.from_path(source))

    assert handler.last.url.raw_path.endswith(b"/api/components/app/android%252Fstrings/file/")


def test_download_returns_bytes_with_format(settings, make_handler):
    archive = b"PK\x03\x04binary\x00\xff"
    handler = make_handler(lambda request: httpx.Response(200, content=archive))

    content = _gateway(settings, handler).download_component_file("app", "ios/strings", file_format="zip:po")

    assert content == archive
    assert handler.last.url.params["format"] == "zip:po"


def test_download_without_format_sends_no_query(settings, make_handler):
    handler = make_handler(lambda request: httpx.Response(200, content=b"data"))

    _gateway(settings, handler).download_component_file("app", "strings")

    assert handler.last.url.query == b""


def test_network_failures_become_transport_errors(settings):
    def _boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        _gateway(settings, _boom).list_projects()


def test_invalid_host_is_rejected_before_any_request(settings):
    with pytest.raises(InvalidHostError):
        WeblateGateway("not a url", TOKEN, settings=settings)


def test_repr_hides_token(settings):
    gateway = WeblateGateway(HOST, TOKEN, settings=settings)

    assert TOKEN not in repr(gateway)
    assert gateway.base_url == f"{HOST}/api"


def test_gateway_satisfies_protocol(settings):
    from core.interfaces.gateway import TranslationGateway

    assert isinstance(WeblateGateway(HOST, TOKEN, settings=settings), TranslationGateway)
