import threading
from unittest.mock import AsyncMock, Mock

import pytest

from dwolla_client import AppTokenProvider, DwollaClient, DwollaException, HalResource, UploadDocumentRequest
from dwolla_client.clients.http_client import parse_error
from example.tasks import TASKS, TaskContext, dispatch, task

API = "https://api-sandbox.dwolla.com"


@pytest.fixture
def ctx():
    client = AsyncMock(spec=DwollaClient)
    client.api_base_address = API
    tokens = AsyncMock(spec=AppTokenProvider)
    tokens.authorization_headers.return_value = {"Authorization": "Bearer t"}
    output = []
    context = TaskContext(client=client, tokens=tokens, prompt=Mock(), write=output.append)
    context.output = output
    return context


def test_commands_are_registered():
    assert {"help", "token", "root", "customers", "upload"} <= set(TASKS)
    assert TASKS["root"].description == "Show links on the API root"


def test_duplicate_registration_rejected():
    with pytest.raises(ValueError):
        task("help", "Again")(AsyncMock())
    with pytest.raises(ValueError):
        task("exit", "Reserved")(AsyncMock())


@pytest.mark.asyncio
async def test_exit_stops_and_blank_continues(ctx):
    assert await dispatch("exit", ctx) is False
    assert await dispatch("  ", ctx) is True
    assert ctx.output == []


@pytest.mark.asyncio
async def test_unknown_command(ctx):
    assert await dispatch("nope", ctx) is True
    assert ctx.output == ["Unknown command: nope (type 'help' for a list)"]


@pytest.mark.asyncio
async def test_help_lists_every_command(ctx):
    await dispatch("HELP", ctx)
    text = "\n".join(ctx.output)
    for name in TASKS:
        assert name in text
    assert "exit" in text


@pytest.mark.asyncio
async def test_root_prints_links(ctx):
    root = HalResource.model_validate({"_links": {"customers": {"href": f"{API}/customers"}}})
    ctx.client.get.return_value = Mock(content=root)

    await dispatch("root", ctx)

    ctx.client.get.assert_awaited_once_with(API, HalResource, {"Authorization": "Bearer t"})
    assert ctx.output == [f"  customers: {API}/customers"]


@pytest.mark.asyncio
async def test_customers_lists_embedded(ctx):
    page = HalResource.model_validate({"_embedded": {"customers": [
        {"_links": {}, "id": "c1", "firstName": "Jane", "lastName": "Doe", "email": "jane@example.com"},
    ]}})
    ctx.client.get.return_value = Mock(content=page)

    await dispatch("customers", ctx)

    assert ctx.output == ["  c1 Jane Doe <jane@example.com>"]


@pytest.mark.asyncio
async def test_upload_sends_document(ctx, tmp_path):
    path = tmp_path / "passport.png"
    path.write_bytes(b"png")
    ctx.prompt.side_effect = ["c1", "passport", str(path)]
    ctx.client.upload.return_value = Mock(location=f"{API}/documents/d1")

    await dispatch("upload", ctx)

    uri, request, headers = ctx.client.upload.await_args.args
    assert uri == f"{API}/customers/c1/documents"
    assert isinstance(request, UploadDocumentRequest)
    assert request.document_type == "passport"
    assert request.document.filename == "passport.png"
    assert request.document.content_type == "image/png"
    assert ctx.output == [f"Document created: {API}/documents/d1"]


@pytest.mark.asyncio
async def test_api_errors_are_reported(ctx):
    error = DwollaException(
        'API Error, Resource="GET x", RequestId="r"',
        request_id="r",
        response=Mock(),
        content='{"code":"Forbidden","message":"Not allowed."}',
        error=None,
    )
    ctx.tokens.fetch.side_effect = error

    assert await dispatch("token", ctx) is True
    assert ctx.output == ['API Error, Resource="GET x", RequestId="r"']


@pytest.mark.asyncio
async def test_api_error_code_is_reported(ctx):
    body = '{"code":"Forbidden","message":"Not allowed."}'
    ctx.client.get.side_effect = DwollaException(
        "API Error", request_id=None, response=Mock(), content=body, error=parse_error(body)
    )

    await dispatch("root", ctx)

    assert ctx.output == ["API Error", "  Forbidden: Not allowed."]


@pytest.mark.asyncio
async def test_ask_reads_input_off_the_event_loop(ctx):
    loop_thread = threading.get_ident()
    prompt_threads = []

    def prompt(text):
        prompt_threads.append(threading.get_ident())
        return "  answer \n"

    ctx.prompt = prompt

    assert await ctx.ask("Question: ") == "answer"
    assert prompt_threads and prompt_threads[0] != loop_thread
