#!/usr/bin/env python3
"""
Lift Tracker CLI.

Log sets for Adam and Elia, browse history and manage the GitHub sync target.

Usage:
    lift-tracker config set --owner me --repo lifts --path data/tracker.json --token ghp_...
    lift-tracker exercises list --user Adam
    lift-tracker log add --user Adam --exercise adam_ex_2 --weight 100 --reps 5
    lift-tracker log history --user Adam --exercise adam_ex_2
    lift-tracker compare --name Squat
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import get_settings
from .deps import create_coordinator, create_tracker_service
from .models.document import StorageConfig, User, WorkoutLog
from .services.persistence import PersistenceCoordinator, SaveResult, SyncStatus
from .services.progress import build_chart_points
from .services.tracker import TrackerService
from .utils.log_sanitizer import install_log_sanitizer


console = Console()


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    install_log_sanitizer()


def report_save(result: Optional[SaveResult]) -> None:
    """Tell the user where the change ended up."""
    if result is None:
        console.print("[yellow]Nothing to change.[/yellow]")
    elif result.status == SyncStatus.SYNCED:
        console.print("[green]Saved and synced to GitHub.[/green]")
    elif result.status == SyncStatus.LOCAL_ONLY:
        console.print("[green]Saved locally.[/green]")
    else:
        console.print(Panel(f"[bold yellow]{result.notice}[/bold yellow]\n{result.reason or ''}"))


def _mask_token(token: str) -> str:
    if not token:
        return "(none)"
    return f"{token[:4]}...{token[-4:]}" if len(token) > 12 else "****"


def _logs_table(title: str, logs: List[WorkoutLog]) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("User")
    table.add_column("Log", style="dim")
    table.add_column("Set", style="dim")
    table.add_column("Weight", justify="right")
    table.add_column("Reps", justify="right")
    for log in logs:
        for workout_set in log.sets:
            table.add_row(
                log.date,
                log.user.value,
                log.id,
                workout_set.id,
                f"{workout_set.weight:g}",
                str(workout_set.reps),
            )
    return table


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------

async def cmd_config_set(args, coordinator: PersistenceCoordinator, service: TrackerService):
    """Store the GitHub location of the document."""
    config = StorageConfig(
        owner=args.owner,
        repo=args.repo,
        path=args.path,
        github_token=args.token or "",
    )
    coordinator.config_store.save(config)
    console.print(f"[green]Sync target set to {config.owner}/{config.repo}:{config.path}[/green]")


async def cmd_config_show(args, coordinator: PersistenceCoordinator, service: TrackerService):
    config = coordinator.config_store.get()
    if config is None:
        console.print("No sync target configured (local-only mode).")
        return

    table = Table(title="Sync Target", box=box.ROUNDED)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Owner", config.owner)
    table.add_row("Repository", config.repo)
    table.add_row("Path", config.path)
    table.add_row("Token", _mask_token(config.github_token))
    console.print(table)


async def cmd_config_clear(args, coordinator: PersistenceCoordinator, service: TrackerService):
    coordinator.config_store.clear()
    console.print("Sync target removed, running local-only.")


async def cmd_exercises(args, coordinator: PersistenceCoordinator, service: TrackerService):
    """List a user's exercise catalog."""
    user = User(args.user)
    exercises = await service.list_exercises(user)

    table = Table(title=f"{user.value}'s Exercises", box=box.ROUNDED)
    table.add_column("Id", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    for exercise in exercises:
        table.add_row(exercise.id, exercise.name, exercise.category)
    console.print(table)


async def cmd_add_exercise(args, coordinator: PersistenceCoordinator, service: TrackerService):
    user = User(args.user)
    exercise = service.new_exercise(args.name, args.category, user)
    result = await service.upsert_exercise(exercise, user)
    console.print(f"Added {exercise.name} ({exercise.id})")
    report_save(result)


async def cmd_remove_exercise(args, coordinator: PersistenceCoordinator, service: TrackerService):
    result = await service.remove_exercise(args.id, User(args.user))
    report_save(result)


async def cmd_add_set(args, coordinator: PersistenceCoordinator, service: TrackerService):
    result = await service.add_set(
        User(args.user),
        args.exercise,
        args.weight,
        args.reps,
        date=args.date,
    )
    report_save(result)


async def cmd_delete_set(args, coordinator: PersistenceCoordinator, service: TrackerService):
    result = await service.delete_set(args.log, args.set)
    report_save(result)


async def cmd_history(args, coordinator: PersistenceCoordinator, service: TrackerService):
    """Show one user's logs for an exercise, newest first."""
    user = User(args.user)
    logs = await service.list_logs(args.exercise, user)
    if not logs:
        console.print("No sets logged yet.")
        return
    console.print(_logs_table(f"{user.value} - {args.exercise}", logs))


async def cmd_compare(args, coordinator: PersistenceCoordinator, service: TrackerService):
    """Show both users' sets for an exercise name, in chart order."""
    logs = await service.list_logs_for_comparison(args.name)
    points = build_chart_points(logs)
    if not points:
        console.print(f"No sets logged for {args.name}.")
        return

    table = Table(title=f"{args.name}: Adam vs Elia", box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("User")
    table.add_column("Weight", justify="right")
    table.add_column("Reps", justify="right")
    for point in points:
        style = "blue" if point.user == User.ADAM else "yellow"
        table.add_row(point.formatted_date, point.user.value, f"{point.weight:g}", str(point.reps), style=style)
    console.print(table)


COMMANDS = {
    "config set": cmd_config_set,
    "config show": cmd_config_show,
    "config clear": cmd_config_clear,
    "exercises list": cmd_exercises,
    "exercises add": cmd_add_exercise,
    "exercises remove": cmd_remove_exercise,
    "log add": cmd_add_set,
    "log delete": cmd_delete_set,
    "log history": cmd_history,
    "compare": cmd_compare,
}


def command_key(args) -> Optional[str]:
    """Key into COMMANDS for the parsed arguments, e.g. "log add"."""
    if args.command is None:
        return None
    action = getattr(args, "action", None)
    return f"{args.command} {action}" if action else args.command


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lift-tracker",
        description="Lift Tracker - strength log for Adam and Elia",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lift-tracker config set --owner me --repo lifts --path tracker.json --token ghp_xxx
  lift-tracker exercises list --user Elia
  lift-tracker log add --user Adam --exercise adam_ex_1 --weight 80 --reps 8
  lift-tracker log history --user Adam --exercise adam_ex_1
  lift-tracker compare --name "Bench Press"
        """,
    )
    users = [user.value for user in User]

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # config
    config_p = subparsers.add_parser("config", help="Manage the GitHub sync target")
    config_sub = config_p.add_subparsers(dest="action")

    config_set_p = config_sub.add_parser("set", help="Set the GitHub sync target")
    config_set_p.add_argument("--owner", required=True)
    config_set_p.add_argument("--repo", required=True)
    config_set_p.add_argument("--path", required=True, help="File path inside the repository")
    config_set_p.add_argument("--token", help="Access token (omit for public repositories)")

    config_sub.add_parser("show", help="Show the GitHub sync target")
    config_sub.add_parser("clear", help="Remove the sync target (local-only mode)")

    # exercises
    exercises_p = subparsers.add_parser("exercises", help="Manage exercise catalogs")
    exercises_sub = exercises_p.add_subparsers(dest="action")

    list_ex_p = exercises_sub.add_parser("list", help="List a user's exercises")
    list_ex_p.add_argument("--user", choices=users, required=True)

    add_ex_p = exercises_sub.add_parser("add", help="Add an exercise to a user's catalog")
    add_ex_p.add_argument("--user", choices=users, required=True)
    add_ex_p.add_argument("--name", required=True)
    add_ex_p.add_argument("--category", default="")

    rm_ex_p = exercises_sub.add_parser("remove", help="Remove an exercise (history is kept)")
    rm_ex_p.add_argument("--user", choices=users, required=True)
    rm_ex_p.add_argument("--id", required=True)

    # log
    log_p = subparsers.add_parser("log", help="Log, delete and review sets")
    log_sub = log_p.add_subparsers(dest="action")

    add_set_p = log_sub.add_parser("add", help="Log a set")
    add_set_p.add_argument("--user", choices=users, required=True)
    add_set_p.add_argument("--exercise", required=True, help="Exercise id")
    add_set_p.add_argument("--weight", type=float, required=True)
    add_set_p.add_argument("--reps", type=int, required=True)
    add_set_p.add_argument("--date", help="YYYY-MM-DD (default: today)")

    del_set_p = log_sub.add_parser("delete", help="Delete a logged set")
    del_set_p.add_argument("--log", required=True, help="Log id")
    del_set_p.add_argument("--set", required=True, help="Set id")

    history_p = log_sub.add_parser("history", help="Show a user's history for an exercise")
    history_p.add_argument("--user", choices=users, required=True)
    history_p.add_argument("--exercise", required=True, help="Exercise id")

    # compare
    compare_p = subparsers.add_parser("compare", help="Compare both users on an exercise name")
    compare_p.add_argument("--name", required=True)

    return parser


async def run_command(args, coordinator: PersistenceCoordinator) -> None:
    service = create_tracker_service(coordinator)
    try:
        await COMMANDS[command_key(args)](args, coordinator, service)
    finally:
        close = getattr(coordinator.remote, "close", None)
        if close is not None:
            await close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if command_key(args) not in COMMANDS:
        parser.print_help()
        return 1

    settings = get_settings()
    setup_logging(settings.log_level)

    coordinator = create_coordinator(settings)
    asyncio.run(run_command(args, coordinator))
    return 0


if __name__ == "__main__":
    sys.exit(main())
