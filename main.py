"""
Clinic Directory Admin Application Entry Point.

Bootstraps the dependency graph via constructor injection and launches
the CustomTkinter GUI.  Every subsystem is wired here; there are no
module-level globals.

Usage::

    python main.py
"""

from __future__ import annotations

import sys
import traceback

from clinic_admin.auth import SessionManager
from clinic_admin.config import get_config
from clinic_admin.gateway import SupabaseGateway
from clinic_admin.logger import StructuredLogger, get_logger
from clinic_admin.services import create_services
from clinic_admin.ui.app_shell import AppShell


def main() -> None:
    """Application entry point: wire dependencies and launch the GUI."""
    logger: StructuredLogger = get_logger("main")
    logger.info("Starting Clinic Directory Admin...")

    # ------------------------------------------------------------------
    # 1. Configuration (from .env / environment variables)
    # ------------------------------------------------------------------
    config = get_config()

    # ------------------------------------------------------------------
    # 2. Supabase gateway (offline when credentials are missing)
    # ------------------------------------------------------------------
    gateway = SupabaseGateway(
        supabase_url=config.SUPABASE_URL,
        supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
        logger=StructuredLogger(name="gateway"),
    )

    # ------------------------------------------------------------------
    # 3. Session Manager
    # ------------------------------------------------------------------
    session = SessionManager()

    # ------------------------------------------------------------------
    # 4. Service Container (repositories + services, single composition root)
    # ------------------------------------------------------------------
    services = create_services(
        gateway=gateway,
        config=config,
        session=session,
        logger=get_logger("services"),
    )

    # ------------------------------------------------------------------
    # 5. Launch the GUI (blocks until window closes)
    # ------------------------------------------------------------------
    logger.info("Launching GUI...")
    app = AppShell(
        config=config,
        services=services,
        logger=get_logger("ui"),
    )
    try:
        app.mainloop()
    finally:
        session.clear()
        logger.info("Clinic Directory Admin shut down.")


def _show_fatal_error(exc: BaseException) -> None:
    """Display a fatal-error dialog so double-click users get feedback.

    Uses ``tkinter.messagebox`` (stdlib) rather than CustomTkinter so
    the dialog works even when CTk initialisation itself failed.
    """
    detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    try:
        import tkinter
        from tkinter import messagebox

        root = tkinter.Tk()
        root.withdraw()
        messagebox.showerror(
            title="Clinic Directory Admin - Fatal Error",
            message=(
                "The application encountered an unexpected error and "
                "cannot continue.\n\n"
                f"{type(exc).__name__}: {exc}"
            ),
            detail=detail,
        )
        root.destroy()
    except Exception:
        # Headless or missing Tcl/Tk: fall back to stderr.
        sys.stderr.write(f"FATAL: {type(exc).__name__}: {exc}\n{detail}")


def run() -> None:
    """Console-script wrapper around :func:`main`."""
    try:
        main()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        _show_fatal_error(exc)
        sys.exit(1)


if __name__ == "__main__":
    run()
