"""fitlog command-line entry point."""

import argparse
import asyncio
import getpass
import logging
import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from dotenv import load_dotenv

# Must run before importing modules that read env vars at import time
load_dotenv()

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from adapter.file.token_store import FileTokenStore
from adapter.mongodb.connection import get_database
from adapter.mongodb.indexes import ensure_all_indexes
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.mongodb.workout_repository import MongoWorkoutRepository
from domain.model.errors import DomainError, NoActiveSessionError
from domain.model.user import User
from domain.model.workout import Workout, WorkoutDraft, parse_timestamp
from port.workout_repository import WorkoutRepository
from services.analytics_service import (
    compute_daily_stats,
    compute_recent_series,
    compute_type_distribution,
)
from services.auth_service import LocalAuthService
from services.filter_service import ALL_TYPES, distinct_types, filter_workouts
from services.session_store import SessionStore
from services.workout_service import (
    WORKOUT_TYPES,
    create_workout,
    delete_workout,
    get_workout,
    list_workouts,
    quick_add,
    update_workout,
)
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)

RepoFactory = Callable[[User], WorkoutRepository]

# Commands served from the stored token alone
OFFLINE_COMMANDS = frozenset({"logout", "whoami"})

# Defaults of a freshly opened workout form
DEFAULT_TYPE = "Running"
DEFAULT_DURATION = 30
DEFAULT_CALORIES = 300

DRAFT_FIELDS = ("type", "duration", "calories", "date", "notes")


def _add_draft_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--type", choices=WORKOUT_TYPES)
    parser.add_argument("--duration", type=int, help="Minutes")
    parser.add_argument("--calories", type=int)
    parser.add_argument("--date", help="ISO-8601 start time, local time if no offset is given")
    parser.add_argument("--notes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fitlog", description="Personal workout log")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Log in and remember the session")
    login.add_argument("email")
    login.add_argument("--password")

    register = sub.add_parser("register", help="Create an account and log in")
    register.add_argument("name")
    register.add_argument("email")
    register.add_argument("--password")

    sub.add_parser("logout", help="Forget the stored session")
    sub.add_parser("whoami", help="Show the logged-in user")

    profile = sub.add_parser("profile", help="Update profile fields")
    profile.add_argument("--name")
    profile.add_argument("--email")
    profile.add_argument("--picture", dest="profile_picture")

    log = sub.add_parser("log", help="Log a workout with explicit fields")
    _add_draft_arguments(log)

    edit = sub.add_parser("edit", help="Change fields of a logged workout")
    edit.add_argument("workout_id")
    _add_draft_arguments(edit)

    show = sub.add_parser("show", help="Show one workout")
    show.add_argument("workout_id")

    add = sub.add_parser("add", help="Quick-add a workout from free text")
    add.add_argument("text", help='e.g. "Running for 30 min, 300 cal"')

    ls = sub.add_parser("list", help="List workouts, newest first")
    ls.add_argument("--type", default=ALL_TYPES)
    ls.add_argument("--search", default="")

    sub.add_parser("types", help="Workout types present in the log")

    stats = sub.add_parser("stats", help="Today's totals and chart series")
    stats.add_argument("--recent", type=int, default=7, help="Points in the calories series")

    delete = sub.add_parser("delete", help="Delete a workout by id")
    delete.add_argument("workout_id")

    return parser


def format_workout(workout: Workout) -> str:
    started = workout.started_at.astimezone().strftime("%Y-%m-%d %H:%M")
    line = f"{started}  {workout.type:<13} {workout.duration:>4} min {workout.calories:>5} cal  [{workout.id}]"
    if workout.notes:
        line += f"  {workout.notes}"
    return line


def format_workout_detail(workout: Workout) -> str:
    started = workout.started_at.astimezone().strftime("%A, %B %d, %Y at %H:%M")
    lines = [
        f"{workout.type} [{workout.id}]",
        f"  Date:      {started}",
        f"  Duration:  {workout.duration} minutes",
        f"  Calories:  {workout.calories} kcal",
    ]
    if workout.notes:
        lines.append(f"  Notes:     {workout.notes}")
    return "\n".join(lines)


def _password(args) -> str:
    return args.password or getpass.getpass("Password: ")


def _draft_changes(args) -> dict:
    changes = {field: getattr(args, field) for field in DRAFT_FIELDS if getattr(args, field) is not None}
    if "date" in changes:
        moment = parse_timestamp(changes["date"])
        if moment.tzinfo is None:
            moment = moment.astimezone()
        changes["date"] = moment.isoformat()
    return changes


def _require_user(session: SessionStore) -> User:
    if session.user is None:
        raise NoActiveSessionError("Not logged in. Run 'fitlog login' first.")
    return session.user


# ── commands ─────────────────────────────────────────────


async def _cmd_login(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    user = await session.login(args.email, _password(args))
    print(f"Logged in as {user.name} <{user.email}>")
    return 0


async def _cmd_register(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    user = await session.register(args.name, args.email, _password(args))
    print(f"Welcome, {user.name}!")
    return 0


async def _cmd_logout(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    await session.logout()
    print("Logged out")
    return 0


async def _cmd_whoami(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    user = _require_user(session)
    print(f"{user.name} <{user.email}>")
    return 0


async def _cmd_profile(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    changes = {
        key: getattr(args, key)
        for key in ("name", "email", "profile_picture")
        if getattr(args, key) is not None
    }
    if not changes:
        print("Nothing to update")
        return 0
    user = await session.update_profile(changes)
    print(f"Profile updated: {user.name} <{user.email}>")
    return 0


async def _cmd_add(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    repo = workouts_for(_require_user(session))
    workout = await quick_add(repo, args.text)
    print(f"Logged {format_workout(workout)}")
    return 0


async def _cmd_log(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    repo = workouts_for(_require_user(session))
    draft = WorkoutDraft(
        type=DEFAULT_TYPE,
        duration=DEFAULT_DURATION,
        calories=DEFAULT_CALORIES,
        date=datetime.now(timezone.utc).isoformat(),
    )
    workout = await create_workout(repo, replace(draft, **_draft_changes(args)))
    print(f"Logged {format_workout(workout)}")
    return 0


async def _cmd_edit(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    repo = workouts_for(_require_user(session))
    changes = _draft_changes(args)
    if not changes:
        print("Nothing to update")
        return 0
    current = await get_workout(repo, args.workout_id)
    workout = await update_workout(repo, args.workout_id, replace(current.to_draft(), **changes))
    print(f"Updated {format_workout(workout)}")
    return 0


async def _cmd_show(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    repo = workouts_for(_require_user(session))
    print(format_workout_detail(await get_workout(repo, args.workout_id)))
    return 0


async def _cmd_list(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    repo = workouts_for(_require_user(session))
    workouts = filter_workouts(await list_workouts(repo), args.type, args.search)
    if not workouts:
        print("No workouts found")
    for workout in workouts:
        print(format_workout(workout))
    return 0


async def _cmd_types(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    repo = workouts_for(_require_user(session))
    types = distinct_types(await list_workouts(repo))
    if not types:
        print("No workouts logged yet")
    for name in types:
        print(name)
    return 0


async def _cmd_stats(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    repo = workouts_for(_require_user(session))
    workouts = await list_workouts(repo)
    stats = compute_daily_stats(workouts, datetime.now().astimezone())

    print(
        f"Today: {stats.total_workouts} workouts, {stats.total_duration} min, "
        f"{stats.total_calories} cal (avg {stats.average_calories})"
    )
    print("Recent calories:")
    for point in compute_recent_series(workouts, args.recent):
        print(f"  {point.label}  {point.value}")
    print("Workout types:")
    for point in compute_type_distribution(workouts):
        print(f"  {point.label:<13} {point.value}")
    return 0


async def _cmd_delete(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    repo = workouts_for(_require_user(session))
    await delete_workout(repo, args.workout_id)
    print(f"Deleted {args.workout_id}")
    return 0


COMMANDS = {
    "login": _cmd_login,
    "register": _cmd_register,
    "logout": _cmd_logout,
    "whoami": _cmd_whoami,
    "profile": _cmd_profile,
    "add": _cmd_add,
    "log": _cmd_log,
    "edit": _cmd_edit,
    "show": _cmd_show,
    "list": _cmd_list,
    "types": _cmd_types,
    "stats": _cmd_stats,
    "delete": _cmd_delete,
}


async def run(args, session: SessionStore, workouts_for: RepoFactory) -> int:
    """Restore the session, run one command and map domain errors to exit code 1."""
    try:
        await session.init()
        return await COMMANDS[args.command](args, session, workouts_for)
    except DomainError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        session.dispose()


def main(argv: list[str] | None = None) -> int:
    setup_structured_logging()
    args = build_parser().parse_args(argv)

    if args.command in OFFLINE_COMMANDS:
        # never reaches the auth service or the workout store
        session = SessionStore(FileTokenStore(), auth=None)
        return asyncio.run(run(args, session, workouts_for=None))

    db = get_database()
    if db is None:
        print("Error: database unavailable (is MONGO_URL set?)", file=sys.stderr)
        return 1
    if not ensure_all_indexes(db):
        logger.warning("Failed to create some MongoDB indexes")

    session = SessionStore(FileTokenStore(), LocalAuthService(MongoUserRepository(db)))
    return asyncio.run(run(args, session, lambda user: MongoWorkoutRepository(db, user.id)))


if __name__ == "__main__":
    sys.exit(main())
