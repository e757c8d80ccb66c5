"""
Operator commands.

    python -m aniex.cli create-admin <username>      # password read from a prompt
    python -m aniex.cli seed-servers
    python -m aniex.cli prune-sessions
"""
import argparse
import getpass
import logging
import sys

import aniex.models  # noqa: F401
from aniex.config import settings
from aniex.core.errors import InvalidData, StoreError
from aniex.core.sessions import SessionStore
from aniex.database import Base, SessionLocal, engine
from aniex.logging import log_config
from aniex.services.seed import SeedService

logger = logging.getLogger(__name__)


def create_admin(args) -> int:
    password = args.password or getpass.getpass(f"Password for '{args.username}': ")
    if not password:
        print("A password is required.", file=sys.stderr)
        return 1

    with SessionLocal() as db:
        user = SeedService(db).seed_admin(args.username, password)
    print(f"Admin '{user.username}' is ready (id={user.id}).")
    return 0


def seed_servers(args) -> int:
    with SessionLocal() as db:
        created = SeedService(db).seed_servers()
    if created:
        print(f"Seeded {created} servers.")
    else:
        print("Servers already present; nothing to seed.")
    return 0


def prune_sessions(args) -> int:
    with SessionLocal() as db:
        deleted = SessionStore(db).prune_expired()
    print(f"Removed {deleted} expired session(s).")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aniex", description=f"{settings.app_name} maintenance commands")
    commands = parser.add_subparsers(dest="command", required=True)

    admin = commands.add_parser("create-admin", help="Create an admin account, or promote an existing user")
    admin.add_argument("username")
    admin.add_argument("--password", help="Skip the interactive prompt")
    admin.set_defaults(handler=create_admin)

    servers = commands.add_parser("seed-servers", help="Insert the default server list into an empty table")
    servers.set_defaults(handler=seed_servers)

    prune = commands.add_parser("prune-sessions", help="Delete expired login sessions")
    prune.set_defaults(handler=prune_sessions)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log_config.setup_logging()
    Base.metadata.create_all(bind=engine)

    try:
        return args.handler(args)
    except (InvalidData, StoreError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
