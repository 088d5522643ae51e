from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from .args import parse_args
from .controller import UpdateController, build_context
from .downloader import Downloader
from .errors import UpdaterError, UserCancelled
from .io_safe import default_state_path
from .logging_utils import configure_logging, log_event
from .messages import load_messages
from .resolver import VersionResolver
from .state import mark_interrupted
from .ui import c, err, info, title, GRAY
from .utils import get_version, git_clone


def _raise_keyboard_interrupt(signum, frame):
    raise KeyboardInterrupt


def install_signal_handlers() -> None:
    """Route SIGTERM through the same path as Ctrl-C."""
    if hasattr(signal, "SIGTERM"):
        try:
            signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)
        except ValueError:  # pragma: no cover - not the main thread
            pass


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool; returns the process exit code."""
    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file, args.log_json, args.log_level)
    if args.version:
        print(get_version())
        return 0

    mod = sys.modules.get("project_updater_cli")
    messages = load_messages(args.lang)
    project_root = Path(args.project_root or Path.cwd()).resolve()
    state_path = (
        Path(args.state_file) if args.state_file else default_state_path(project_root)
    )
    title(messages["title"])
    install_signal_handlers()
    resolver = VersionResolver(args.api_url, args.timeout)

    try:
        try:
            ctx = build_context(
                args.package,
                args.current_version,
                resolver,
                state_path,
                messages,
                strict_state=args.strict_state,
            )
        except KeyboardInterrupt as e:
            mark_interrupted(state_path, args.package, args.current_version)
            raise UserCancelled() from e

        def announce(key: str, url: str) -> None:
            info(messages.fill(key, ctx.package_name, ctx.latest_version, url))

        downloader = Downloader(
            project_root,
            clone=getattr(mod, "git_clone", git_clone),
            announce=announce,
        )
        UpdateController(ctx, downloader, messages, assume_yes=args.yes).run()
    except UpdaterError as e:
        err(messages.fill(e.message_key, args.package, args.current_version))
        if e.detail:
            print(c(f"  {e.detail}", GRAY))
        log_event(
            "updater_error",
            level=logging.ERROR,
            error_type=type(e).__name__,
            error=e.detail,
        )
        return e.exit_code
    return 0


__all__ = ["main", "install_signal_handlers"]
