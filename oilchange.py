#!/usr/bin/env python3
"""
Command-line oil change tracker.

Commands:
  status   - Show the last and next oil change and the reminder status
  record   - Record an oil change at the given mileage
  interval - Set the oil change interval
  check    - Check a current odometer reading against the next change
  photo    - Attach an odometer photo (reading is still entered manually)
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger
from tabulate import tabulate

from oil_tracker import (
    FileCaptureSurface,
    OilChangeScreen,
    RecordStore,
    Reminder,
    ScreenState,
    StaticPermissionGate,
    Status,
    default_prefs_path,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[int]) -> str:
    """Format a distance for display."""
    return f"{km:,} km" if km is not None else "-"


def format_remaining(reminder: Reminder) -> str:
    """Format remaining distance; negative when overdue."""
    if reminder.status == Status.UNKNOWN:
        return "-"
    if reminder.remaining < 0:
        return f"-{abs(reminder.remaining):,} km"
    return f"{reminder.remaining:,} km"


def format_status(status: Status) -> str:
    """Human label for a reminder status."""
    return status.name.replace("_", " ")


def make_status_table(state: ScreenState) -> List[List[str]]:
    """Convert the screen state to table rows."""
    record = state.record
    reminder = state.reminder
    last_date = record.last_change_date
    return [
        ["Last change", format_km(record.last_mileage)],
        ["Changed on", last_date.strftime("%Y-%m-%d") if last_date else "Never"],
        ["Interval", format_km(record.oil_change_interval)],
        ["Next change", format_km(record.next_change_mileage)],
        ["Reading", format_km(reminder.current_mileage)],
        ["Remaining", format_remaining(reminder)],
        ["Status", format_status(reminder.status)],
    ]


class ConsoleNotifier:
    """Notification surface that prints reminders to stdout."""

    def notify(self, notification_id: int, title: str, body: str) -> None:
        logger.info(f"Reminder #{notification_id} posted")
        print(f"*** {title}: {body}")


def make_screen(args) -> OilChangeScreen:
    return OilChangeScreen(RecordStore(args.prefs), notifier=ConsoleNotifier())


def print_feedback(feedback) -> int:
    """Print a Feedback message; returns the exit code."""
    if feedback.message:
        prefix = "Error: " if feedback.level == "error" else ""
        print(f"{prefix}{feedback.message}")
    return 1 if feedback.level == "error" else 0


# =============================================================================
# Commands
# =============================================================================


def cmd_status(args):
    """Show the last and next oil change and the reminder status."""
    screen = make_screen(args)
    state = screen.render(args.current or "")

    print(state.last_change_text)
    print(state.next_change_text)
    print()
    print(tabulate(make_status_table(state), tablefmt="simple"))
    return 0


def cmd_record(args):
    """Record an oil change."""
    screen = make_screen(args)
    if args.dry_run:
        feedback = screen.check_mileage(args.mileage)
        if not feedback.ok:
            return print_feedback(feedback)
        print(f"Would record an oil change at {args.mileage.strip()} km")
        print("(dry run - no changes made)")
        return 0

    feedback = screen.save_oil_change(args.mileage)
    code = print_feedback(feedback)
    if feedback.state:
        print(feedback.state.last_change_text)
        print(feedback.state.next_change_text)
    return code


def cmd_interval(args):
    """Set the oil change interval."""
    screen = make_screen(args)
    if args.dry_run:
        feedback = screen.check_interval(args.interval)
        if not feedback.ok:
            return print_feedback(feedback)
        print(f"Would set the oil change interval to {args.interval.strip()} km")
        print("(dry run - no changes made)")
        return 0

    feedback = screen.update_interval(args.interval, args.current or "")
    code = print_feedback(feedback)
    if feedback.state:
        print(feedback.state.interval_hint)
        print(feedback.state.next_change_text)
    return code


def cmd_check(args):
    """Check a current reading against the next oil change."""
    state = make_screen(args).render(args.current)
    reminder = state.reminder
    print(state.next_change_text)
    print(f"Reading: {format_km(reminder.current_mileage)}")
    print(f"Remaining: {format_remaining(reminder)} ({format_status(reminder.status)})")
    return 0


def cmd_photo(args):
    """Attach an odometer photo."""
    screen = OilChangeScreen(
        RecordStore(args.prefs),
        notifier=ConsoleNotifier(),
        permission_gate=StaticPermissionGate(not args.deny_camera),
        capture_surface=FileCaptureSurface(args.image),
    )
    feedback = screen.capture_odometer()
    if feedback.image is None and not feedback.message:
        print("No photo taken.")
    if feedback.image is not None:
        print(f"Photo: {feedback.image.source} ({feedback.image.size:,} bytes)")
    return print_feedback(feedback)


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Oil change tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s status
  %(prog)s status --current 9200
  %(prog)s record 4600
  %(prog)s interval 7500
  %(prog)s check 9200
  %(prog)s photo odometer.jpg
""",
    )
    parser.add_argument(
        "--prefs",
        type=Path,
        default=None,
        help=f"Path to the prefs file (default: {default_prefs_path()})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    status_parser = subparsers.add_parser(
        "status", help="Show the last and next oil change"
    )
    status_parser.add_argument(
        "--current",
        type=str,
        help="Current odometer reading to check the reminder against",
    )

    # Numbers are taken as text so the tracker's own validation applies
    record_parser = subparsers.add_parser("record", help="Record an oil change")
    record_parser.add_argument("mileage", type=str, help="Odometer reading at the change")
    record_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be recorded without saving",
    )

    interval_parser = subparsers.add_parser(
        "interval", help="Set the oil change interval"
    )
    interval_parser.add_argument("interval", type=str, help="Interval in km (>= 1000)")
    interval_parser.add_argument(
        "--current",
        type=str,
        help="Current odometer reading to check the reminder against",
    )
    interval_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    check_parser = subparsers.add_parser(
        "check", help="Check a reading against the next oil change"
    )
    check_parser.add_argument("current", type=str, help="Current odometer reading")

    photo_parser = subparsers.add_parser("photo", help="Attach an odometer photo")
    photo_parser.add_argument("image", type=Path, help="Path to the photo")
    photo_parser.add_argument(
        "--deny-camera",
        action="store_true",
        help="Behave as if camera permission was refused",
    )

    return parser


def main(argv: Optional[List[str]] = None):
    logger.remove()
    logger.add(sys.stderr, level=os.environ.get("OILCHANGE_LOG_LEVEL", "WARNING"))

    args = build_parser().parse_args(argv)

    if args.command == "status":
        return cmd_status(args)
    elif args.command == "record":
        return cmd_record(args)
    elif args.command == "interval":
        return cmd_interval(args)
    elif args.command == "check":
        return cmd_check(args)
    elif args.command == "photo":
        return cmd_photo(args)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
