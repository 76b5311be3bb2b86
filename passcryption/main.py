"""
Entry points for the Passcryption vault core.

create_api() wires the core together for a UI layer. main() is a small
command line for managing the vault without the UI.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import config, generator
from .api import PasscryptionAPI
from .clipboard import Clipboard
from .errors import PasscryptionError, ValidationError
from .settings import SettingsManager
from .storage import StorageManager, VaultFile

logger = logging.getLogger(__name__)


def get_data_dir() -> str:
    """Data directory, taken from PASSCRYPTION_HOME or ~/.passcryption, created if missing."""
    data_dir = os.environ.get(config.DATA_DIR_ENV_VAR) or os.path.join(
        os.path.expanduser("~"), config.DATA_DIR_NAME)
    os.makedirs(data_dir, exist_ok=True)
    return data_dir


def create_store(data_dir: Optional[str] = None) -> StorageManager:
    data_dir = data_dir or get_data_dir()
    return StorageManager(VaultFile(os.path.join(data_dir, config.VAULT_FILE)))


def create_api(clipboard: Clipboard, data_dir: Optional[str] = None) -> PasscryptionAPI:
    data_dir = data_dir or get_data_dir()
    settings = SettingsManager(os.path.join(data_dir, config.SETTINGS_FILE))
    return PasscryptionAPI(create_store(data_dir), settings, clipboard)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="passcryption", description=f"{config.APP_NAME} vault")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="list stored entries (passwords are not shown)")
    list_cmd.add_argument("--search", default="", help="filter by site, username or email")

    add_cmd = sub.add_parser("add", help="add an entry")
    add_cmd.add_argument("--site", required=True)
    add_cmd.add_argument("--password", required=True)
    add_cmd.add_argument("--username", default="")
    add_cmd.add_argument("--email", default="")
    add_cmd.add_argument("--notes", default="")

    delete_cmd = sub.add_parser("delete", help="delete an entry by id")
    delete_cmd.add_argument("id")

    gen_cmd = sub.add_parser("generate", help="print a generated password")
    gen_cmd.add_argument("--length", type=int, default=config.PASSWORD_GENERATOR_DEFAULT_LENGTH)
    gen_cmd.add_argument("--no-lowercase", action="store_true")
    gen_cmd.add_argument("--no-uppercase", action="store_true")
    gen_cmd.add_argument("--no-digits", action="store_true")
    gen_cmd.add_argument("--no-symbols", action="store_true")
    gen_cmd.add_argument("--symbols", default=config.PASSWORD_GENERATOR_DEFAULT_SYMBOLS)
    return parser


def _run(args: argparse.Namespace) -> int:
    if args.command == "generate":
        cfg = generator.GeneratorConfig(
            length=args.length,
            lowercase=not args.no_lowercase,
            uppercase=not args.no_uppercase,
            digits=not args.no_digits,
            symbols=not args.no_symbols,
            symbol_alphabet=args.symbols,
        )
        print(generator.generate(cfg))
        return 0

    store = create_store()
    if args.command == "list":
        for record in store.search(args.search):
            print(f"{record.id}\t{record.site}\t{record.username}\t{record.email}")
        return 0
    if args.command == "add":
        record = store.create({
            'site': args.site,
            'password': args.password,
            'username': args.username,
            'email': args.email,
            'notes': args.notes,
        })
        print(record.id)
        return 0
    if args.command == "delete":
        return 0 if store.delete(args.id) else 1
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format=config.LOG_FORMAT)
    try:
        return _run(args)
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except PasscryptionError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
