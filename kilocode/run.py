from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from kilocode.commands import COMMAND_ALIASES, COMMANDS, CommandDispatcher
from kilocode.config import load_settings
from kilocode.context import FileContext, NullContext, parse_line_range
from kilocode.errors import KiloCodeError
from kilocode.llm import ChatClient, build_client
from kilocode.utils.run_log import append_event, init_run_log, make_run_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kilocode", description="Ask an OpenAI-compatible model about your code.")
    parser.add_argument(
        "command",
        choices=[*COMMANDS, *COMMAND_ALIASES],
        help="chat | explain | generate | refactor | fix | docs (kc-* aliases accepted)",
    )
    parser.add_argument("prompt", nargs="*", help="free-text prompt")
    parser.add_argument("--file", type=Path, default=None, help="use this file as the code context")
    parser.add_argument("--lines", type=str, default=None, help="1-based inclusive line range of --file, e.g. 10:42")
    parser.add_argument("--raw", action="store_true", help="print the answer as plain text instead of Markdown")
    parser.add_argument(
        "--no-log",
        action="store_true",
        help="do not write the run log (default: KILOCODE_LOG_DIR/run_*.jsonl)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    # Best-effort fix for Windows terminals with a legacy code page.
    try:
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    except Exception:
        pass

    args = build_parser().parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)

    try:
        settings = load_settings()
        lines = parse_line_range(args.lines) if args.lines else None
    except KiloCodeError as e:
        err_console.print(f"[bold red]error[/bold red]: {escape(str(e))}")
        return 1

    context = FileContext(args.file, lines) if args.file is not None else NullContext()
    clients: list[ChatClient] = []

    def client_factory() -> ChatClient:
        client = build_client(settings)
        clients.append(client)
        return client

    dispatcher = CommandDispatcher(client_factory, context)

    try:
        log_paths = None if args.no_log else init_run_log(settings.log_dir, make_run_id())
    except OSError as e:
        err_console.print(f"[bold red]error[/bold red]: cannot create run log in {settings.log_dir}: {escape(str(e))}")
        return 1
    base = {"command": args.command, "backend": settings.backend, "prompt_chars": len(" ".join(args.prompt))}
    if args.file is not None:
        base["file"] = str(args.file)
    if log_paths:
        append_event(log_paths, "start", **base)

    started = time.monotonic()
    try:
        with err_console.status("Waiting for the model...", spinner="dots"):
            answer = dispatcher.run(args.command, args.prompt)
    except KiloCodeError as e:
        if log_paths:
            append_event(
                log_paths,
                "error",
                **base,
                **_client_fields(clients),
                elapsed_s=round(time.monotonic() - started, 3),
                error_type=type(e).__name__,
                error=str(e),
            )
        err_console.print(f"[bold red]error[/bold red]: {escape(str(e))}")
        return 1

    if log_paths:
        append_event(
            log_paths,
            "result",
            **base,
            **_client_fields(clients),
            elapsed_s=round(time.monotonic() - started, 3),
            answer_chars=len(answer),
        )

    if args.raw:
        console.print(answer, markup=False, highlight=False)
    else:
        console.print(Markdown(answer))
    return 0


def _client_fields(clients: list[ChatClient]) -> dict[str, str]:
    if not clients:
        return {}
    cfg = clients[0].config
    return {"model": cfg.model, "base_url": cfg.base_url}


if __name__ == "__main__":
    raise SystemExit(main())
