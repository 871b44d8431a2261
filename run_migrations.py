#!/usr/bin/env python3
"""
Apply SQL migrations to the Noteshare Postgres database.

Files in migrations/ are applied in name order and recorded, with a content
checksum, in the _migrations table.

Usage:
    python run_migrations.py                # Apply pending migrations
    python run_migrations.py --status       # Show applied and pending
    python run_migrations.py --dry-run      # List what would be applied
    python run_migrations.py --force 001    # Re-apply one migration

Configuration:
    SUPABASE_DB_URL=postgresql://postgres.[project-ref]:[password]@[host]:6543/postgres
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = sql.Identifier("_migrations")


@dataclass(frozen=True)
class Migration:
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "Migration":
        digest = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(name=path.name, path=path, checksum=digest)


def discover(prefix: str = "") -> list[Migration]:
    """Migration files on disk, in apply order."""
    if not MIGRATIONS_DIR.exists():
        console.print(f"[yellow]Warning:[/yellow] {MIGRATIONS_DIR} does not exist")
        return []
    return [Migration.from_file(p) for p in sorted(MIGRATIONS_DIR.glob(f"{prefix}*.sql"))]


def connect():
    settings = get_settings()
    if not settings.supabase_db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        console.print("Use the direct Postgres connection URI from the Supabase dashboard.")
        sys.exit(1)

    try:
        return psycopg2.connect(settings.supabase_db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_tracking_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                "CREATE TABLE IF NOT EXISTS {} ("
                " id SERIAL PRIMARY KEY,"
                " name VARCHAR(255) NOT NULL UNIQUE,"
                " checksum VARCHAR(64) NOT NULL,"
                " applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW())"
            ).format(MIGRATIONS_TABLE)
        )
    conn.commit()


def applied_migrations(conn) -> dict[str, tuple[str, object]]:
    """Map of applied migration name to (checksum, applied_at)."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                MIGRATIONS_TABLE
            )
        )
        return {name: (checksum, applied_at) for name, checksum, applied_at in cur.fetchall()}


def pending_migrations(conn) -> list[Migration]:
    applied = applied_migrations(conn)
    pending = []
    for migration in discover():
        if migration.name not in applied:
            pending.append(migration)
        elif applied[migration.name][0] != migration.checksum:
            console.print(f"[yellow]Warning:[/yellow] {migration.name} changed after it was applied")
    return pending


def apply(conn, migration: Migration, dry_run: bool = False) -> None:
    """Run one migration and record it in the same transaction."""
    if dry_run:
        console.print(f"[cyan]Would apply:[/cyan] {migration.name}")
        return

    console.print(f"[blue]Applying:[/blue] {migration.name}")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(MIGRATIONS_TABLE),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name}: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name}")


def show_status(conn) -> None:
    applied = applied_migrations(conn)
    pending = pending_migrations(conn)
    if not applied and not pending:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migrations")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")
    for name, (checksum, applied_at) in applied.items():
        stamp = applied_at.strftime("%Y-%m-%d %H:%M:%S") if applied_at else ""
        table.add_row(name, "[green]applied[/green]", stamp, checksum)
    for migration in pending:
        table.add_row(migration.name, "[yellow]pending[/yellow]", "", migration.checksum)
    console.print(table)


def force(conn, prefix: str) -> None:
    """Forget and re-apply the single migration matching `prefix`."""
    matches = discover(prefix)
    if len(matches) != 1:
        names = ", ".join(m.name for m in matches) or "none"
        console.print(f"[red]Error:[/red] '{prefix}' must match exactly one migration (matched: {names})")
        sys.exit(1)

    migration = matches[0]
    console.print(f"[yellow]Re-applying {migration.name}.[/yellow] Non-idempotent SQL may fail.")
    if input("Continue? [y/N] ").lower() != "y":
        console.print("Aborted.")
        return

    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("DELETE FROM {} WHERE name = %s").format(MIGRATIONS_TABLE),
            (migration.name,),
        )
    conn.commit()
    apply(conn, migration)


def main():
    parser = argparse.ArgumentParser(description="Apply Noteshare database migrations")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--status", action="store_true", help="Show migration status")
    group.add_argument("--dry-run", action="store_true", help="List pending migrations only")
    group.add_argument("--force", metavar="PREFIX", help="Re-apply a migration by prefix")
    args = parser.parse_args()

    console.print("[bold]Noteshare database migrations[/bold]\n")

    conn = connect()
    try:
        ensure_tracking_table(conn)
        if args.status:
            show_status(conn)
            return
        if args.force:
            force(conn, args.force)
            return

        pending = pending_migrations(conn)
        if not pending:
            console.print("[green]Up to date.[/green]")
            return
        for migration in pending:
            apply(conn, migration, dry_run=args.dry_run)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
