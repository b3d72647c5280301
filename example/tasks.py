"""
Example app commands.

Each command is registered in TASKS through the ``task`` decorator with its
name and a one-line description. ``dispatch`` looks commands up in that table.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional
import mimetypes

from dwolla_client import (
    AppTokenProvider,
    DwollaClient,
    DwollaException,
    File,
    HalResource,
    UploadDocumentRequest,
)


@dataclass
class TaskContext:
    client: DwollaClient
    tokens: AppTokenProvider
    prompt: Callable[[str], str] = input
    write: Callable[[str], None] = print
    state: Dict[str, str] = field(default_factory=dict)

    async def ask(self, text: str) -> str:
        """Read one answer without blocking the event loop."""
        answer = await asyncio.to_thread(self.prompt, text)
        return answer.strip()


Handler = Callable[[TaskContext], Awaitable[None]]


@dataclass(frozen=True)
class Task:
    command: str
    description: str
    handler: Handler


TASKS: Dict[str, Task] = {}

EXIT_COMMANDS = ("exit", "quit")


def task(command: str, description: str) -> Callable[[Handler], Handler]:
    """Register the decorated coroutine under ``command``."""
    def register(handler: Handler) -> Handler:
        if command in TASKS or command in EXIT_COMMANDS:
            raise ValueError(f"Command already registered: {command}")
        TASKS[command] = Task(command, description, handler)
        return handler
    return register


def get_task(command: str) -> Optional[Task]:
    return TASKS.get(command.strip().lower())


async def dispatch(command: str, ctx: TaskContext) -> bool:
    """
    Run one command.

    Returns:
        False when the command asks the app to stop, True otherwise
    """
    command = command.strip().lower()
    if not command:
        return True
    if command in EXIT_COMMANDS:
        return False

    found = get_task(command)
    if found is None:
        ctx.write(f"Unknown command: {command} (type 'help' for a list)")
        return True

    try:
        await found.handler(ctx)
    except DwollaException as e:
        ctx.write(str(e))
        if e.error is not None:
            ctx.write(f"  {e.error.code}: {e.error.message}")
    return True


# =========================================================================
# Commands
# =========================================================================

@task("help", "List available commands")
async def show_help(ctx: TaskContext) -> None:
    for name in sorted(TASKS):
        ctx.write(f"  {name:<10} {TASKS[name].description}")
    ctx.write(f"  {'exit':<10} Quit")


@task("token", "Fetch a new application token")
async def fetch_token(ctx: TaskContext) -> None:
    token = await ctx.tokens.fetch()
    ctx.write(f"Token type={token.token_type} expires_in={token.expires_in}")


@task("root", "Show links on the API root")
async def show_root(ctx: TaskContext) -> None:
    headers = await ctx.tokens.authorization_headers()
    response = await ctx.client.get(ctx.client.api_base_address, HalResource, headers)
    for name, link in response.content.links.items():
        ctx.write(f"  {name}: {link.href}")


@task("customers", "List customers")
async def list_customers(ctx: TaskContext) -> None:
    headers = await ctx.tokens.authorization_headers()
    response = await ctx.client.get(f"{ctx.client.api_base_address}/customers", HalResource, headers)
    customers = response.content.embedded.get("customers", [])
    if not customers:
        ctx.write("No customers")
    for customer in customers:
        resource = HalResource.model_validate(customer)
        extra = resource.model_extra or {}
        ctx.write(f"  {extra.get('id')} {extra.get('firstName')} {extra.get('lastName')} <{extra.get('email')}>")


@task("upload", "Upload a verification document for a customer")
async def upload_document(ctx: TaskContext) -> None:
    customer_id = await ctx.ask("Customer id: ")
    document_type = await ctx.ask("Document type (passport, license, idCard, other): ")
    path = Path(await ctx.ask("File path: "))
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

    headers = await ctx.tokens.authorization_headers()
    with path.open("rb") as stream:
        request = UploadDocumentRequest(
            document_type=document_type,
            document=File(filename=path.name, content_type=content_type, stream=stream),
        )
        response = await ctx.client.upload(
            f"{ctx.client.api_base_address}/customers/{customer_id}/documents",
            request,
            headers,
        )
    ctx.write(f"Document created: {response.location}")
