"""Task manager command line.

Commands:
  notes add|remove|read|list   manage notes kept in a JSON file
  weather LOCATION             print the current weather for a location
  users promote EMAIL          grant admin rights to an existing user
  serve                        run the API server with uvicorn
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from taskmanager.core.logging_config import get_logger, setup_logging
from taskmanager.notes import DuplicateNoteError, NoteNotFoundError, NotesStore
from taskmanager.server.core.config import settings
from taskmanager.weather import WeatherClient, WeatherServiceError

logger = get_logger(__name__)


def build_weather_client() -> WeatherClient:
    return WeatherClient.from_config(settings.weather)


# ---------------------------------------------------------------------------
# notes
# ---------------------------------------------------------------------------


def _notes(args: argparse.Namespace) -> int:
    store = NotesStore(args.file)
    if args.notes_command == "add":
        try:
            store.add_note(args.title, args.body)
        except DuplicateNoteError:
            print("Note title taken!")
            return 1
        print("New note added!")
    elif args.notes_command == "remove":
        try:
            store.remove_note(args.title)
        except NoteNotFoundError:
            print("No note found!")
            return 1
        print("Note removed!")
    elif args.notes_command == "read":
        try:
            note = store.read_note(args.title)
        except NoteNotFoundError:
            print("Note not found!")
            return 1
        print(note.title)
        print(note.body)
    else:
        print("Your notes")
        for note in store.list_notes():
            print(note.title)
    return 0


# ---------------------------------------------------------------------------
# weather
# ---------------------------------------------------------------------------


def _weather(args: argparse.Namespace) -> int:
    location = " ".join(args.location).strip()
    if not location:
        print("Please provide a location.")
        return 2
    client = build_weather_client()
    try:
        report = client.lookup(location)
    except WeatherServiceError as e:
        print(e.message)
        return 1
    finally:
        client.close()
    print(report.location)
    print(report.forecast)
    return 0


# ---------------------------------------------------------------------------
# users
# ---------------------------------------------------------------------------


async def promote_user(email: str) -> bool:
    """Set the admin flag on the user with this email. Returns False if there is none."""
    from taskmanager.core.database import async_session_maker, build_sql_repos, init_db

    await init_db()
    async with async_session_maker() as session:
        repos = build_sql_repos(session)
        user = await repos.users.get_by_email(email)
        if user is None:
            return False
        user.is_admin = True
        await repos.users.update(user)
        logger.info(f"Promoted user {user.id} to admin")
        return True


def _users(args: argparse.Namespace) -> int:
    if asyncio.run(promote_user(args.email)):
        print(f"{args.email} is now an admin.")
        return 0
    print(f"No user with email {args.email}.")
    return 1


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "taskmanager.server.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskmanager", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--log-level", default=None, help="Override TASKMANAGER_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    notes = subparsers.add_parser("notes", help="Manage notes")
    notes.add_argument("--file", default=settings.notes_file, help="Notes JSON file")
    notes_commands = notes.add_subparsers(dest="notes_command", required=True)
    add = notes_commands.add_parser("add", help="Add a new note")
    add.add_argument("--title", required=True, help="Note title")
    add.add_argument("--body", required=True, help="Note body")
    remove = notes_commands.add_parser("remove", help="Remove a note")
    remove.add_argument("--title", required=True, help="Note title")
    read = notes_commands.add_parser("read", help="Read a note")
    read.add_argument("--title", required=True, help="Note title")
    notes_commands.add_parser("list", help="List your notes")
    notes.set_defaults(handler=_notes)

    weather = subparsers.add_parser("weather", help="Print the current weather for a location")
    weather.add_argument("location", nargs="*", help="Address or place name")
    weather.set_defaults(handler=_weather)

    users = subparsers.add_parser("users", help="Manage user accounts")
    users_commands = users.add_subparsers(dest="users_command", required=True)
    promote = users_commands.add_parser("promote", help="Grant admin rights to a user")
    promote.add_argument("email", help="Email of an existing user")
    users.set_defaults(handler=_users)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=settings.server_host)
    serve.add_argument("--port", type=int, default=settings.server_port)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(handler=_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, enable_file=False)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
