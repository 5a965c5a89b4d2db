"""
restaurant-settings - Main Entry Point

Supports both CLI and API modes: an interactive settings console for one
restaurant, or the FastAPI server.
"""

import argparse
import os
import shlex
import sys
from typing import Dict, List, Optional

from fastapi import FastAPI

from src.core.config import settings
from src.core.exceptions import ApplicationException
from src.core.field_definitions import SettingValue

CLI_HELP = """Available commands:
  show [category]                      Show all settings or one category
  fields [category]                    List editable fields
  set key=value [key=value ...]        Update settings (all or nothing)
  set-category <category> key=value    Update one category, other keys ignored
  hours                                Show opening hours as displayed on the site
  help                                 Show this help message
  exit/quit                            Exit the application
Values 'true' and 'false' are stored as booleans; quote values with spaces."""


def parse_value(raw: str) -> SettingValue:
    """Console values are strings, except true/false."""
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return raw


def parse_assignments(tokens: List[str]) -> Dict[str, SettingValue]:
    """
    Turn ["phone=(212) 555-9999", "monday_closed=true"] into a changes dict.

    Raises:
        ValueError: A token has no '=' or an empty key
    """
    changes: Dict[str, SettingValue] = {}
    for token in tokens:
        key, sep, raw = token.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{token}'")
        changes[key] = parse_value(raw)
    return changes


def _print_record(record: Dict[str, SettingValue]) -> None:
    if not record:
        print("  (no settings)")
        return
    width = max(len(key) for key in record)
    for key, value in record.items():
        print(f"  {key.ljust(width)}  {value!r}")


def run_command(service, line: str) -> bool:
    """
    Execute one console command against a SettingsService.

    Returns False when the console should exit.
    """
    try:
        tokens = shlex.split(line)
    except ValueError as e:
        print(f"❌ {e}")
        return True
    if not tokens:
        print("Please enter a command.")
        return True

    command, args = tokens[0].lower(), tokens[1:]

    if command in ("exit", "quit"):
        print("👋 Goodbye!")
        return False
    if command == "help":
        print(CLI_HELP)
        return True

    try:
        if command == "show":
            record = (
                service.get_settings_by_category(args[0]) if args else service.get_settings()
            )
            _print_record(record)
        elif command == "fields":
            category: Optional[str] = args[0] if args else None
            for field in service.registry.get_editable_fields(category):
                marker = "*" if field.required else " "
                print(f"  {marker} {field.id:<18} {field.type.value:<9} {field.label}")
        elif command == "set":
            service.update_settings(parse_assignments(args))
            print(f"✅ Saved {len(args)} change(s)")
        elif command == "set-category":
            if not args:
                print("Usage: set-category <category> key=value ...")
                return True
            record = service.update_settings_by_category(args[0], parse_assignments(args[1:]))
            print(f"✅ Saved '{args[0]}' settings")
            _print_record(record)
        elif command == "hours":
            for entry in service.format_hours_for_display(service.get_settings()):
                print(f"  {entry.day:<10} {entry.hours}")
        else:
            print(f"Unknown command '{command}'. Type 'help' for a list of commands.")
    except ApplicationException as e:
        print(f"❌ {e.message}")
    except ValueError as e:
        print(f"❌ {e}")
    return True


def run_cli_mode() -> None:
    """
    Run the interactive settings console for the configured restaurant.
    """
    from src.core.logger import set_restaurant_id, setup_logging
    from src.services.settings_service import SettingsService
    from src.stores.database import create_tables
    from src.stores.settings_store import create_settings_store

    setup_logging()

    print("🍽️  restaurant-settings - CLI Mode")
    print("=" * 50)

    if settings.settings_store__backend == "database":
        create_tables()
    service = SettingsService(
        restaurant_id=settings.restaurant__default_id, store=create_settings_store()
    )
    set_restaurant_id(service.restaurant_id)
    print(f"Editing settings for restaurant '{service.restaurant_id}'")
    print(CLI_HELP)
    print()

    while True:
        try:
            line = input("⚙️  > ")
        except (KeyboardInterrupt, EOFError):
            print("\n👋 Goodbye!")
            break
        if not run_command(service, line):
            break


def create_app() -> FastAPI:
    """
    Factory function to create FastAPI application.

    This function is called by uvicorn in factory mode to avoid
    import-time side effects when running in CLI mode.

    Returns:
        FastAPI: Configured application instance
    """
    from src.api.factory import create_api
    from src.core.logger import setup_logging

    setup_logging()

    app = create_api(
        title=settings.api__title,
        description=settings.api__description,
        version=settings.api__version,
        docs_url=settings.api__docs_url,
        redoc_url=settings.api__redoc_url,
        mount_prefix="/api",
    )

    if settings.settings_store__backend == "database":
        from src.stores.database import create_tables, dispose_engine

        create_tables()
        app.add_event_handler("shutdown", dispose_engine)

    return app


def main() -> None:
    """
    Main entry point with CLI argument parsing.
    """
    parser = argparse.ArgumentParser(
        description="restaurant-settings - restaurant admin settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --mode cli          # Interactive settings console (default)
  python main.py --mode api          # Run as FastAPI server
  python main.py --mode api --host 127.0.0.1 --port 3000  # Custom host/port
        """,
    )

    parser.add_argument(
        "--mode",
        choices=["cli", "api"],
        default="cli",
        help="Run mode: 'cli' for the settings console, 'api' for FastAPI server (default: cli)",
    )

    parser.add_argument(
        "--host",
        default=os.getenv("HOST", "0.0.0.0"),
        help="Host to bind the API server (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8080")),
        help="Port to bind the API server (default: 8080)",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (API mode only)",
    )

    args = parser.parse_args()

    if args.mode == "cli":
        try:
            run_cli_mode()
        except ApplicationException as e:
            print(f"❌ Error running CLI mode: {e.message}")
            sys.exit(1)
        return

    print("🚀 Starting restaurant-settings API Server...")
    print(f"📍 Server will run on {args.host}:{args.port}")
    print(f"🌍 Environment: {settings.environment}")
    print(f"🗄️  Settings store: {settings.settings_store__backend}")
    print(f"📚 API docs: http://{args.host}:{args.port}{settings.api__docs_url}")
    print()

    import uvicorn

    uvicorn.run(
        "main:create_app",  # factory mode: no app is built at import time
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload or settings.debug,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
