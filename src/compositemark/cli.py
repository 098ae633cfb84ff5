from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import Config
from .core.errors import CompositeMarkError
from .registry import normalize

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _read_spec(path: str) -> dict[str, Any]:
    """Read a JSON unit spec from a path, or from stdin when path is '-'."""
    text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    spec = json.loads(text)
    if not isinstance(spec, dict):
        raise CompositeMarkError("spec must be a JSON object")
    return spec


def _compile(args: argparse.Namespace) -> dict[str, Any]:
    spec = _read_spec(args.spec)
    return normalize(spec, Config.load(args.config))


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("spec", type=str, help="Path to a JSON unit spec ('-' for stdin).")
    p.add_argument("--config", type=str, default=None, help="Path to a TOML config file.")
    p.add_argument(
        "--log-level",
        type=str,
        default=os.environ.get("COMPOSITEMARK_LOG_LEVEL", "WARNING"),
        help="Logging level for diagnostics (default: WARNING).",
    )


def _cmd_normalize(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="compositemark normalize",
        description="Expand a composite-mark unit spec into a layered spec (JSON).",
    )
    _add_common(p)
    p.add_argument("--out", type=str, default=None, help="Write JSON here instead of stdout.")
    p.add_argument("--indent", type=int, default=2, help="JSON indent (default 2).")
    args = p.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        layered = _compile(args)
    except (CompositeMarkError, ValidationError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    text = json.dumps(layered, indent=args.indent, ensure_ascii=False)
    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote layered spec to %s", args.out)
    else:
        print(text)
    return 0


def _cmd_render(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="compositemark render",
        description="Expand a composite-mark unit spec and save it as an Altair chart.",
    )
    _add_common(p)
    p.add_argument("--out-html", type=str, default=None, help="HTML output path.")
    p.add_argument("--out-png", type=str, default=None, help="PNG output path.")
    args = p.parse_args(argv)
    _configure_logging(args.log_level)

    if not (args.out_html or args.out_png):
        print("error: give --out-html and/or --out-png", file=sys.stderr)
        return 2

    # altair is only needed here
    from .viz import save, to_chart

    try:
        chart = to_chart(_compile(args))
        save(chart, out_html=args.out_html, out_png=args.out_png)
    except (CompositeMarkError, ValidationError, json.JSONDecodeError, RuntimeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="compositemark", description="Composite mark expansion utilities CLI."
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("normalize")
    sub.add_parser("render")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    if cmd == "normalize":
        code = _cmd_normalize(rest)
    elif cmd == "render":
        code = _cmd_render(rest)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
