"""Friend request commands."""

import click

from ..models.friends import FriendRequestDisplay
from ..validation.errors import BackendError, ValidationError
from ..validation.ranges import validate_email
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_backend,
    user_option,
)


@click.group()
@click.pass_context
def friends(ctx):
    """Send and review friend requests."""
    ensure_initialized(ctx)


@friends.command()
@user_option
@click.argument("target")
@click.pass_context
@async_command
async def add(ctx, user_id: str, target: str):
    """Send a friend request to an email address or a handle."""
    target = target.strip()
    try:
        if "@" in target:
            target = validate_email(target)
        elif not target:
            raise ValidationError("target", "Enter an email address or handle")
    except ValidationError as e:
        echo_error(e.message)
        ctx.exit(1)

    async with get_backend() as backend:
        try:
            request_id = await backend.send_friend_request(user_id, target)
        except BackendError as e:
            echo_error(e.message)
            ctx.exit(1)
    echo_success(f"Friend request sent (ID: {request_id})")


async def _show(ctx, user_id: str, outgoing: bool) -> None:
    async with get_backend() as backend:
        try:
            if outgoing:
                rows = await backend.list_outgoing_friend_requests(user_id)
            else:
                rows = await backend.list_incoming_friend_requests(user_id)
        except BackendError as e:
            echo_error(e.message)
            ctx.exit(1)

    project = FriendRequestDisplay.from_outgoing if outgoing else FriendRequestDisplay.from_incoming
    displays = [project(row) for row in rows]
    if not displays:
        echo_info("No pending requests")
        return

    click.echo()
    click.echo(
        format_table(
            ["ID", "", "Name", "Sent"],
            [[d.request_id, d.initials, d.label, d.created_at[:10]] for d in displays],
        )
    )


@friends.command()
@user_option
@click.pass_context
@async_command
async def outgoing(ctx, user_id: str):
    """List requests you sent, as you addressed them."""
    await _show(ctx, user_id, outgoing=True)


@friends.command()
@user_option
@click.pass_context
@async_command
async def incoming(ctx, user_id: str):
    """List requests sent to you."""
    await _show(ctx, user_id, outgoing=False)
