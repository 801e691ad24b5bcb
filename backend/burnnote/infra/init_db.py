# burnnote/infra/init_db.py

import argparse

from burnnote.core.note_logic import utcnow
from burnnote.infra.postgres import Base, SessionLocal, check_connection, engine, init_db
from burnnote.infra.sql_store import SqlNoteStore
from burnnote.utils.logger import setup_logger


def reset_db():
    """Drop and recreate all tables"""
    print("⚠️  Dropping all tables...")
    Base.metadata.drop_all(bind=engine)
    init_db()
    print("✅ Database reset")


def sweep_expired() -> int:
    """Delete every note past its retention window."""
    removed = SqlNoteStore(SessionLocal).purge_expired(utcnow())
    print(f"🗑️ Removed {removed} expired notes")
    return removed


def main(argv=None):
    parser = argparse.ArgumentParser(description="Burn Note database maintenance")
    parser.add_argument("--drop", action="store_true", help="drop and recreate tables")
    parser.add_argument("--sweep", action="store_true", help="delete expired notes")
    args = parser.parse_args(argv)

    setup_logger()
    if not check_connection():
        return 1

    if args.drop:
        reset_db()
    else:
        init_db()
        print("✅ Tables ready")

    if args.sweep:
        sweep_expired()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
