"""Command-line interface for production shift planning."""

from __future__ import annotations

import argparse
import logging
from datetime import date

from shiftplan.config import load_config
from shiftplan.domain.db import DEFAULT_DB_URL, get_session, init_database, reset_database
from shiftplan.domain.repositories import AlertRepository, WorkerRepository
from shiftplan.engine.orchestrator import SchedulingEngine
from shiftplan.io.import_csv import (
    import_areas_csv,
    import_orders_csv,
    import_process_steps_csv,
    import_workers_csv,
)
from shiftplan.io.sample_data import seed_sample_data
from shiftplan.services.analytics import analyze_production_flow, summarize_schedule


def _parse_date(value: str | None) -> date:
    return date.fromisoformat(value) if value else date.today()


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    init_database(args.db)
    print(f"[OK] Database initialized: {args.db}")


def _cmd_reset_db(args: argparse.Namespace) -> None:
    """Drop and recreate all tables."""
    if not args.yes:
        print("[WARN] reset-db deletes all data, pass --yes to confirm")
        return
    reset_database(args.db)
    print(f"[OK] Database reset: {args.db}")


def _cmd_seed(args: argparse.Namespace) -> None:
    """Load the demo dataset for a date."""
    session = get_session(args.db)
    
    try:
        day = _parse_date(args.date)
        count = seed_sample_data(session, day)
        session.close()
        print(f"[OK] Seeded demo data with {count} orders on {day}")
        
    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Seeding failed: {e}")
        raise


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    session = get_session(args.db)
    
    try:
        # Templates reference areas and orders reference templates
        if args.areas:
            count = import_areas_csv(session, args.areas)
            print(f"[OK] Imported {count} production areas")
        
        if args.steps:
            count = import_process_steps_csv(session, args.steps)
            print(f"[OK] Imported {count} process steps")
        
        if args.workers:
            count = import_workers_csv(session, args.workers)
            print(f"[OK] Imported {count} workers")
        
        if args.orders:
            count = import_orders_csv(session, args.orders)
            print(f"[OK] Imported {count} orders")
        
        session.close()
        print("[OK] CSV import complete")
        
    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate the schedule for a day."""
    session = get_session(args.db)
    
    try:
        cfg = load_config(args.config)
        if args.no_persist:
            cfg.persist = False
        if args.alerts:
            cfg.raise_alerts = True
        
        day = _parse_date(args.date)
        result = SchedulingEngine(session, cfg).generate_schedule(day)
        workers = WorkerRepository.get_all(session)
        
        print(summarize_schedule(result.tasks, workers))
        bottlenecks, _ = analyze_production_flow(result.tasks)
        for bottleneck in bottlenecks:
            print(f"[INFO] Bottleneck: {bottleneck}")
        for issue in result.issues:
            print(f"[WARN] {issue}")
        for recommendation in result.recommendations:
            print(f"[INFO] {recommendation}")
        
        session.close()
        status = "OK" if result.feasible else "WARN"
        print(f"[{status}] Generated {len(result.tasks)} assignments for {day} (feasible={result.feasible})")
        
    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Generation failed: {e}")
        raise


def _cmd_alerts(args: argparse.Namespace) -> None:
    """List or dismiss active alerts."""
    session = get_session(args.db)
    
    try:
        if args.dismiss:
            if AlertRepository.dismiss(session, args.dismiss):
                print(f"[OK] Dismissed alert {args.dismiss}")
            else:
                print(f"[WARN] No alert {args.dismiss}")
        for alert in AlertRepository.get_active(session):
            print(f"[{alert.type.upper()}] {alert.id} {alert.title}: {alert.message}")
        session.close()
        
    except Exception as e:
        session.close()
        print(f"[ERROR] Alert listing failed: {e}")
        raise


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="shiftplan",
        description="Production shift planning for preparation and filling rooms",
    )
    
    # Global options
    parser.add_argument("--db", default=DEFAULT_DB_URL, help=f"Database URL (default: {DEFAULT_DB_URL})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show scheduler log output")
    
    sub = parser.add_subparsers(dest="command", required=True)
    
    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)
    
    # reset-db command
    reset = sub.add_parser("reset-db", help="Drop and recreate all tables")
    reset.add_argument("--yes", action="store_true", help="Confirm deleting all data")
    reset.set_defaults(func=_cmd_reset_db)
    
    # seed command
    seed = sub.add_parser("seed", help="Load the demo dataset")
    seed.add_argument("--date", help="Production date YYYY-MM-DD (default: today)")
    seed.set_defaults(func=_cmd_seed)
    
    # import-csv command
    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--areas", help="Path to production areas CSV")
    imp.add_argument("--steps", help="Path to process steps CSV")
    imp.add_argument("--workers", help="Path to workers CSV")
    imp.add_argument("--orders", help="Path to production orders CSV")
    imp.set_defaults(func=_cmd_import_csv)
    
    # generate command
    gen = sub.add_parser("generate", help="Generate schedule for a day")
    gen.add_argument("--date", help="Production date YYYY-MM-DD (default: today)")
    gen.add_argument("--config", help="Path to config YAML or JSON")
    gen.add_argument("--no-persist", action="store_true", help="Do not save assignments")
    gen.add_argument("--alerts", action="store_true", help="Raise alerts for issues and recommendations")
    gen.set_defaults(func=_cmd_generate)
    
    # alerts command
    alr = sub.add_parser("alerts", help="List active alerts")
    alr.add_argument("--dismiss", help="Alert ID to dismiss first")
    alr.set_defaults(func=_cmd_alerts)
    
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
