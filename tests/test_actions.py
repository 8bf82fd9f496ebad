import logging

import httpx
import pytest

from core.domain.models import ProjectList, UploadOutcome
from core.errors import AuthenticationError, InvalidParameterError, NotFoundError
from core.services import actions
from tests.conftest import HOST, TOKEN

CONNECTION = {"host": HOST, "api_token": TOKEN}


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "Localizable.strings"
    path.write_bytes(b'"greeting" = "Hello";\n')
    return path


def test_list_projects_flattens_records(make_handler, gateway_factory, recorded_hooks):
    payload = {
        "count": 2,
        "next": None,
        "previous": None,
        "results": [
            {"name": "Mobile App", "slug": "mobile-app", "web_url": f"{HOST}/projects/mobile-app/", "languages_count": 3},
            {"slug": "library"},
        ],
    }
    handler = make_handler(lambda request: httpx.Response(200, json=payload))
    hooks, messages = recorded_hooks

    result = actions.list_projects(
        {**CONNECTION, "page_size": 50, "show_details": True},
        hooks=hooks,
        gateway_factory=gateway_factory(handler),
    )

    assert isinstance(result, ProjectList)
    assert result.count == 2
    assert [p.name for p in result.results] == ["Mobile App", "Unknown"]
    assert result.results[1].slug == "library"
    assert handler.last.url.params["page_size"] == "50"
    assert messages["success"] == ["Successfully fetched projects list!"]
    assert "Found projects: 2" in messages["info"]
    assert "1. Mobile App (mobile-app)" in messages["info"]
    assert "   Languages: 3" in messages["info"]
    assert "2. Unknown (library)" in messages["info"]


def test_list_projects_bare_array_matches_envelope(make_handler, gateway_factory):
    records = [{"name": "A", "slug": "a"}, {"name": "B", "slug": "b"}]
    bare = make_handler(lambda request: httpx.Response(200, json=records))
    envelope = make_handler(lambda request: httpx.Response(200, json={"count": 2, "results": records}))

    from_bare = actions.list_projects(CONNECTION, gateway_factory=gateway_factory(bare))
    from_envelope = actions.list_projects(CONNECTION, gateway_factory=gateway_factory(envelope))

    assert from_bare.results == from_envelope.results
    assert from_bare.count == from_envelope.count == 2


def test_show_details_with_no_projects(make_handler, gateway_factory, recorded_hooks):
    handler = make_handler(lambda request: httpx.Response(200, json=[]))
    hooks, messages = recorded_hooks

    actions.list_projects({**CONNECTION, "show_details": True}, hooks=hooks, gateway_factory=gateway_factory(handler))

    assert "No projects found" in messages["info"]


def test_invalid_page_size_fails_before_any_request(make_handler, gateway_factory, recorded_hooks):
    handler = make_handler(lambda request: httpx.Response(200, json=[]))
    hooks, messages = recorded_hooks

    with pytest.raises(InvalidParameterError):
        actions.list_projects({**CONNECTION, "page_size": 250}, hooks=hooks, gateway_factory=gateway_factory(handler))

    assert handler.requests == []
    assert any("page_size cannot be greater than 200" in m for m in messages["error"])


def test_list_languages_lenient_defaults(make_handler, gateway_factory):
    payload = [
        {"name": "Czech", "code": "cs", "direction": "ltr", "plural": {"number": 3}},
        {"english_name": "Arabic", "code": "ar", "direction": "rtl"},
        {},
    ]
    handler = make_handler(lambda request: httpx.Response(200, json=payload))

    languages = actions.list_project_languages(
        {**CONNECTION, "project_slug": "mobile-app"},
        gateway_factory=gateway_factory(handler),
    )

    assert [(lang.name, lang.code) for lang in languages] == [
        ("Czech", "cs"),
        ("Arabic", "ar"),
        ("Unknown", "Unknown"),
    ]
    assert languages[0].plural == {"number": 3}
    assert handler.last.url.path == "/api/projects/mobile-app/languages/"


def test_list_languages_not_found_has_no_partial_result(make_handler, gateway_factory, recorded_hooks):
    handler = make_handler(lambda request: httpx.Response(404, json={"detail": "Not found."}))
    hooks, messages = recorded_hooks

    with pytest.raises(NotFoundError):
        actions.list_project_languages(
            {**CONNECTION, "project_slug": "missing"},
            hooks=hooks,
            gateway_factory=gateway_factory(handler),
        )

    assert messages["success"] == []
    assert messages["error"][0].startswith("Failed to fetch project languages: Not found")


def test_upload_translation_file(make_handler, gateway_factory, recorded_hooks, source_file):
    handler = make_handler(lambda request: httpx.Response(200, json={"accepted": 1, "count": 1}))
    hooks, messages = recorded_hooks

    ok = actions.upload_translation_file(
        {
            **CONNECTION,
            "project_slug": "my-project",
            "component_slug": "ios/localizable-strings",
            "src_file_path": str(source_file),
            "email": "dev@example.com",
            "author": "Dev",
        },
        hooks=hooks,
        gateway_factory=gateway_factory(handler),
    )

    assert ok is True
    request = handler.last
    assert request.url.raw_path.endswith(b"/my-project/ios%252Flocalizable-strings/en_devel/file/")
    assert b'name="email"\r\n\r\ndev@example.com\r\n' in request.content
    assert b'name="author"\r\n\r\nDev\r\n' in request.content
    assert b'name="method"\r\n\r\ntranslate\r\n' in request.content
    assert b'name="conflicts"\r\n\r\nignore\r\n' in request.content
    assert b'name="fuzzy"' not in request.content
    assert "Author email: dev@example.com" in messages["info"]
    assert messages["success"] == ["File uploaded successfully!"]


def test_upload_without_git_identity_omits_author_parts(make_handler, gateway_factory, source_file):
    handler = make_handler(lambda request: httpx.Response(201, json={}))

    actions.upload_translation_file(
        {**CONNECTION, "project_slug": "p", "component_slug": "c", "src_file_path": source_file},
        gateway_factory=gateway_factory(handler),
    )

    assert b'name="email"' not in handler.last.content
    assert b'name="author"' not in handler.last.content


def test_upload_failure_propagates(make_handler, gateway_factory, recorded_hooks, source_file):
    handler = make_handler(lambda request: httpx.Response(401, json={"detail": "Invalid token."}))
    hooks, messages = recorded_hooks

    with pytest.raises(AuthenticationError):
        actions.upload_translation_file(
            {**CONNECTION, "project_slug": "p", "component_slug": "c", "src_file_path": source_file},
            hooks=hooks,
            gateway_factory=gateway_factory(handler),
        )

    assert messages["error"] == ["Failed to upload file: Authentication failed: invalid API token (401)"]


def test_upload_base_file_sends_only_the_file(make_handler, gateway_factory, source_file):
    handler = make_handler(lambda request: httpx.Response(200, json={"result": True}))

    ok = actions.upload_base_file(
        {**CONNECTION, "project_slug": "p", "component_slug": "ios/strings", "src_file_path": source_file},
        gateway_factory=gateway_factory(handler),
    )

    assert ok is True
    assert handler.last.url.raw_path.endswith(b"/api/components/p/ios%252Fstrings/file/")
    assert handler.last.content.count(b"Content-Disposition") == 1


def test_add_translations_returns_outcome(make_handler, gateway_factory, recorded_hooks, source_file):
    handler = make_handler(lambda request: httpx.Response(200, json={"accepted": 4}))
    hooks, messages = recorded_hooks

    outcome = actions.add_translations(
        {**CONNECTION, "project_slug": "p", "component_slug": "c", "src_file_path": source_file, "language": "es"},
        hooks=hooks,
        gateway_factory=gateway_factory(handler),
    )

    assert outcome == UploadOutcome(success=True, message="Translations added successfully", result={"accepted": 4})
    assert handler.last.url.path == "/api/translations/p/c/es/file/"
    assert messages["info"][0] == "Adding translations for project: p"


def test_download_writes_file_round_trip(make_handler, gateway_factory, recorded_hooks, tmp_path):
    archive = bytes(range(256)) * 4
    handler = make_handler(lambda request: httpx.Response(200, content=archive))
    hooks, messages = recorded_hooks
    output = tmp_path / "out" / "translations.zip"

    content = actions.download_component_file(
        {**CONNECTION, "project_slug": "p", "component_slug": "c", "format": "zip", "output_path": str(output)},
        hooks=hooks,
        gateway_factory=gateway_factory(handler),
    )

    assert content == archive
    assert output.read_bytes() == archive
    assert f"File size: {len(archive)} bytes" in messages["info"]
    assert messages["success"] == [f"File successfully downloaded to: {output}"]
    assert handler.last.url.params["format"] == "zip"


def test_download_without_output_path(make_handler, gateway_factory, recorded_hooks):
    handler = make_handler(lambda request: httpx.Response(200, content=b"msgid \"\"\n"))
    hooks, messages = recorded_hooks

    content = actions.download_component_file(
        {**CONNECTION, "project_slug": "p", "component_slug": "c"},
        hooks=hooks,
        gateway_factory=gateway_factory(handler),
    )

    assert content == b"msgid \"\"\n"
    assert "Content length: 9 bytes" in messages["info"]


def test_default_hooks_log_messages(make_handler, gateway_factory, caplog):
    handler = make_handler(lambda request: httpx.Response(200, json=[]))

    with caplog.at_level(logging.INFO, logger="core.services.actions"):
        actions.list_projects(CONNECTION, gateway_factory=gateway_factory(handler))

    assert f"Connecting to Weblate: {HOST}" in caplog.messages
    assert "Found projects: 0" in caplog.messages
