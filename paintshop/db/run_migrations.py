"""
Run the paint-line schema migrations without an alembic.ini.

The API calls main(["upgrade", "head"]) at startup when
RUN_MIGRATIONS_ON_STARTUP is set; operators can use the same entry point:

    python -m paintshop.db.run_migrations upgrade head
    python -m paintshop.db.run_migrations downgrade -1
    python -m paintshop.db.run_migrations stamp head   # adopt an existing database
    python -m paintshop.db.run_migrations history
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Sequence

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def build_config() -> Config:
    """Alembic Config for the bundled migrations folder and the configured database."""
    from paintshop.db.config import get_settings

    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # Offline mode only; env.py connects with the async URL.
    cfg.set_main_option("sqlalchemy.url", get_settings().sync_database_url)
    return cfg


def _with_default(func: Callable[..., None], default: str) -> Callable[[Config, Sequence[str]], None]:
    return lambda cfg, args: func(cfg, args[0] if args else default)


def _show(cfg: Config, args: Sequence[str]) -> None:
    if not args:
        raise SystemExit("Usage: show <revision>")
    command.show(cfg, args[0])


COMMANDS: Dict[str, Callable[[Config, Sequence[str]], None]] = {
    "upgrade": _with_default(command.upgrade, "head"),
    "downgrade": _with_default(command.downgrade, "-1"),
    "stamp": _with_default(command.stamp, "head"),
    "history": lambda cfg, args: command.history(cfg, *args),
    "current": lambda cfg, args: command.current(cfg),
    "heads": lambda cfg, args: command.heads(cfg),
    "show": _show,
}


# PUBLIC_INTERFACE
def main(argv: List[str] | None = None) -> None:
    """Dispatch an Alembic command; exits with a usage message on bad input."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        raise SystemExit(f"No Alembic command given. Choose one of: {', '.join(COMMANDS)}")

    name, rest = args[0], args[1:]
    handler = COMMANDS.get(name)
    if handler is None:
        raise SystemExit(f"Unsupported Alembic command: {name}")

    logger.info("Running migrations: %s %s", name, " ".join(rest))
    handler(build_config(), rest)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
