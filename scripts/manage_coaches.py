#!/usr/bin/env python3
"""
Command-line admin panel for coach records.

Talks to a running Coach Admin API through the client cache, so the
search and category filters behave exactly like the web panel's.

Usage:
    python scripts/manage_coaches.py list [--search jo] [--category Yoga]
    python scripts/manage_coaches.py create --name "Ann" --email ann@x.com \\
        --category Fitness --rating 4 --status active
    python scripts/manage_coaches.py update <id> --rating 5
    python scripts/manage_coaches.py toggle <id>
    python scripts/manage_coaches.py delete <id>
    python scripts/manage_coaches.py seed --file coaches_seed.json

Requires:
    - COACH_API_URL in the environment or a .env file (default http://localhost:3001)
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from coach_admin.client import CoachApiClient, CoachCache
from coach_admin.core.coaches import ALL_CATEGORIES, CoachError

EDITABLE_FIELDS = ("name", "email", "category", "rating", "status")


def print_notification(level: str, message: str) -> None:
    tag = "[ERR]" if level == "error" else "[OK]"
    print(f"{tag} {message}", file=sys.stderr if level == "error" else sys.stdout)


def print_table(coaches) -> None:
    if not coaches:
        print("No coaches found")
        return

    print(f"{'ID':36}  {'NAME':20}  {'EMAIL':28}  {'CATEGORY':12}  {'RATING':>6}  STATUS")
    for coach in coaches:
        print(
            f"{coach.id:36}  {coach.name[:20]:20}  {coach.email[:28]:28}  "
            f"{coach.category[:12]:12}  {coach.rating:>6}  {coach.status.value}"
        )
    print(f"\nTotal: {len(coaches)}")


def collect_fields(args) -> dict:
    return {
        name: getattr(args, name)
        for name in EDITABLE_FIELDS
        if getattr(args, name, None) is not None
    }


def add_field_arguments(parser, required: bool) -> None:
    parser.add_argument('--name', required=required)
    parser.add_argument('--email', required=required)
    parser.add_argument('--category', required=required)
    parser.add_argument('--rating', type=float, required=required)
    parser.add_argument('--status', choices=['active', 'inactive'], required=required)


def load_seed_file(filepath: Path) -> list[dict]:
    """Read a JSON array of coach field objects."""
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError("Seed file must contain a JSON array")

    return [
        {key: item.get(key) for key in EDITABLE_FIELDS}
        for item in data
        if isinstance(item, dict)
    ]


def run(args, cache: CoachCache) -> bool:
    if args.command == 'list':
        cache.refresh()
        print_table(cache.view(search=args.search, category=args.category))
        categories = cache.categories()
        if categories:
            print(f"Categories: {', '.join(categories)}")
        return True

    if args.command == 'create':
        coach = cache.create(collect_fields(args))
        print(f"Created {coach.id}")
        return True

    if args.command == 'update':
        fields = collect_fields(args)
        if not fields:
            print("ERROR: Nothing to update")
            return False
        cache.update(args.coach_id, fields)
        return True

    if args.command == 'toggle':
        cache.refresh()
        coach = cache.toggle_status(args.coach_id)
        print(f"{coach.name} is now {coach.status.value}")
        return True

    if args.command == 'delete':
        cache.delete(args.coach_id)
        return True

    if args.command == 'seed':
        records = load_seed_file(Path(args.file))
        print(f"Seeding {len(records)} coaches")
        errors = 0
        for record in records:
            try:
                cache.create(record)
            except CoachError:
                errors += 1
        print(f"\n=== Seed Complete ===")
        print(f"Created: {len(records) - errors}")
        print(f"Errors: {errors}")
        return errors == 0

    return False


def main():
    parser = argparse.ArgumentParser(description='Manage coach records')
    parser.add_argument('--api-url', default=None, help='Coach API base URL (overrides COACH_API_URL)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    list_parser = subparsers.add_parser('list', help='List coaches')
    list_parser.add_argument('--search', default='', help='Match name or email (case-insensitive)')
    list_parser.add_argument('--category', default=ALL_CATEGORIES, help='Category, or "all"')

    create_parser = subparsers.add_parser('create', help='Create a coach')
    add_field_arguments(create_parser, required=True)

    update_parser = subparsers.add_parser('update', help='Update some fields of a coach')
    update_parser.add_argument('coach_id')
    add_field_arguments(update_parser, required=False)

    toggle_parser = subparsers.add_parser('toggle', help='Flip a coach between active and inactive')
    toggle_parser.add_argument('coach_id')

    delete_parser = subparsers.add_parser('delete', help='Delete a coach')
    delete_parser.add_argument('coach_id')

    seed_parser = subparsers.add_parser('seed', help='Create coaches from a JSON file')
    seed_parser.add_argument('--file', required=True, help='JSON array of coach objects')

    args = parser.parse_args()

    with CoachApiClient(base_url=args.api_url) as api:
        cache = CoachCache(api, notify=print_notification)
        try:
            success = run(args, cache)
        except CoachError:
            # Already reported through the notifier
            success = False
        except (OSError, ValueError) as e:
            print(f"ERROR: {e}")
            success = False

    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
