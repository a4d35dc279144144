"""
grid_graph/cli.py — Command-line interface for grid_graph.

One-shot commands build a grid, apply the given edges and run a single
analysis; the shell command drives a GridSession interactively the way the
point-and-click front end does (edge mode, node clicks, weight prompts,
undo/redo, paced path reveal).

Usage:
    python -m grid_graph path 0-0 0-2 --rows 1 --cols 3 --edge 0-0,0-1,1 --edge 0-1,0-2,2
    python -m grid_graph bridges --rows 3 --cols 3 --edge 0-0,0-1,1 --render bridges.png
    python -m grid_graph edges --rows 2 --cols 2 --edge 0-0,1-1,4
    python -m grid_graph shell --viewport 640x420
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time
from typing import Callable

from grid_graph.config import DEFAULT_CONFIG
from grid_graph.graph.store import InvalidInputError, format_number
from grid_graph.session import GridSession, format_cost

logger = logging.getLogger("grid_graph.cli")


# ── Logging setup ─────────────────────────────────────────────────────────────

def _setup_logging(level: str = "WARNING") -> None:
    """Configure root logger with timestamps and level names."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    fmt = "%(asctime)s  %(levelname)-8s  %(name)s — %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=numeric, format=fmt, datefmt=datefmt, stream=sys.stderr)
    # matplotlib is chatty at DEBUG
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _parse_edge_spec(text: str) -> tuple[str, str, str]:
    """argparse type for --edge A,B,W."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3 or not all(parts):
        raise argparse.ArgumentTypeError(f"expected A,B,W (e.g. 0-0,0-1,2), got {text!r}")
    return parts[0], parts[1], parts[2]


def _parse_viewport(text: str) -> tuple[int, int]:
    try:
        width, height = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT in pixels, got {text!r}") from None
    return width, height


def _session_from_args(args: argparse.Namespace) -> GridSession:
    """Build the grid and apply every --edge. Raises InvalidInputError on a bad edge."""
    config = DEFAULT_CONFIG
    if getattr(args, "reveal_delay", None) is not None:
        config = dataclasses.replace(config, reveal_delay_seconds=args.reveal_delay)

    if getattr(args, "viewport", None):
        session = GridSession.from_viewport(*args.viewport, config=config)
    else:
        session = GridSession(args.rows, args.cols, config=config)

    for a, b, w in getattr(args, "edge", None) or []:
        session.request_edge(a, b, w)
    return session


def _print_edges(session: GridSession, out: Callable[[str], None] = print) -> None:
    df = session.store.to_frame()
    if df.empty:
        out("  (no edges)")
        return
    for line in df.to_string(index=False).splitlines():
        out(f"  {line}")


# ── Subcommand: path ──────────────────────────────────────────────────────────

def cmd_path(args: argparse.Namespace) -> int:
    """Shortest path between two nodes."""
    _setup_logging(args.log_level)
    try:
        session = _session_from_args(args)
        result = session.run_shortest_path(f"{args.start},{args.end}")
    except InvalidInputError as exc:
        print(f"Rejected: {exc}", file=sys.stderr)
        return 1

    print()
    print("=" * 60)
    print("  SHORTEST PATH")
    print("=" * 60)
    print(f"  From / to   : {result.start} → {result.end}")
    print(f"  Path cost   : {session.path_cost}")
    if result.found:
        print(f"  Path        : {' → '.join(result.path)}")
    else:
        print("  No path found.")
    if args.render:
        from grid_graph.viz.grid_figure import render_grid
        saved = render_grid(
            session.store, path=result.path, output_path=args.render,
            title=f"{result.start} → {result.end}: cost {session.path_cost}",
        )
        print(f"  Figure      : {saved}")
    print("=" * 60)
    return 0


# ── Subcommand: bridges ───────────────────────────────────────────────────────

def cmd_bridges(args: argparse.Namespace) -> int:
    """Bridge edges of the whole grid."""
    _setup_logging(args.log_level)
    try:
        session = _session_from_args(args)
    except InvalidInputError as exc:
        print(f"Rejected: {exc}", file=sys.stderr)
        return 1
    result = session.run_bridges()

    print()
    print("=" * 60)
    print("  BRIDGES")
    print("=" * 60)
    print(f"  Edges       : {session.store.edge_count}")
    print(f"  Bridges     : {session.bridge_count}")
    for u, v in result.bridges:
        print(f"    {u} — {v}  (w={format_number(session.store.weight(u, v))})")
    if args.render:
        from grid_graph.viz.grid_figure import render_grid
        saved = render_grid(
            session.store, bridges=result, output_path=args.render,
            title=f"{session.bridge_count} bridge(s)",
        )
        print(f"  Figure      : {saved}")
    print("=" * 60)
    return 0


# ── Subcommand: edges ─────────────────────────────────────────────────────────

def cmd_edges(args: argparse.Namespace) -> int:
    """Tabulate the edge set after applying every --edge."""
    _setup_logging(args.log_level)
    try:
        session = _session_from_args(args)
    except InvalidInputError as exc:
        print(f"Rejected: {exc}", file=sys.stderr)
        return 1
    print(f"Grid {session.store.rows}x{session.store.cols}, {session.store.edge_count} edge(s):")
    _print_edges(session)
    return 0


# ── Subcommand: shell ─────────────────────────────────────────────────────────

SHELL_HELP = """\
Commands:
  mode              toggle edge mode (clicks select nodes only in edge mode)
  click ID          select a node; the second selection asks for a weight
  edge A B [W]      add or reweight an edge directly (default weight 1)
  undo | redo       step through edge edits
  path A,B          shortest path from A to B, revealed node by node
  bridges           list bridge edges
  edges             list all edges
  reset             rebuild the grid, dropping edges and history
  render PNG        save a figure of the grid
  help | quit"""


def run_shell(
    session: GridSession,
    input_fn: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Interactive loop over a session. Ends on quit or end of input.

    Invalid input is reported and the loop carries on; nothing typed at the
    prompt ends the session except quit/exit or EOF.
    """
    last_path: list[str] = []
    last_bridges = None

    def ask_weight(a: str, b: str) -> str | None:
        default = session.config.default_weight
        try:
            typed = input_fn(f"Edge weight ({a}→{b}) [{default}]: ")
        except EOFError:
            return None
        return typed if typed.strip() else default

    out(f"Grid {session.store.rows}x{session.store.cols}. Type 'help' for commands.")
    while True:
        try:
            line = input_fn("grid> ")
        except EOFError:
            out("")
            return 0
        words = line.split()
        if not words:
            continue
        cmd, rest = words[0].lower(), words[1:]

        try:
            if cmd in ("quit", "exit"):
                return 0
            elif cmd == "help":
                out(SHELL_HELP)
            elif cmd == "mode":
                out(f"Edge mode {'on' if session.toggle_edge_mode() else 'off'}.")
            elif cmd == "click" and len(rest) == 1:
                pair = session.click_node(rest[0])
                if not session.edge_mode:
                    out("Edge mode is off; type 'mode' first.")
                elif pair is None:
                    out(f"Selected: {', '.join(session.selected) or '(none)'}")
                else:
                    edge = session.request_edge(*pair, ask_weight(*pair))
                    out("Cancelled." if edge is None
                        else f"Edge {edge.n1} — {edge.n2} (w={format_number(edge.weight)}).")
            elif cmd == "edge" and len(rest) in (2, 3):
                weight = rest[2] if len(rest) == 3 else session.config.default_weight
                edge = session.request_edge(rest[0], rest[1], weight)
                out(f"Edge {edge.n1} — {edge.n2} (w={format_number(edge.weight)}).")
            elif cmd == "undo":
                out("Undone." if session.undo() else "Nothing to undo.")
            elif cmd == "redo":
                out("Redone." if session.redo() else "Nothing to redo.")
            elif cmd == "path" and len(rest) == 1:
                result = session.run_shortest_path(rest[0])
                last_bridges = None
                if not result.found:
                    last_path = []
                    out(f"No path found. Cost: {session.path_cost}")
                    continue
                out(f"Cost: {format_cost(result.distance)}")
                last_path = []
                for node in session.reveal(result.path, sleep=sleep):
                    last_path.append(node)
                    out(f"  → {node}")
            elif cmd == "bridges":
                last_bridges = session.run_bridges()
                last_path = []
                out(f"Bridges: {session.bridge_count}")
                for u, v in last_bridges.bridges:
                    out(f"  {u} — {v}")
            elif cmd == "edges":
                _print_edges(session, out)
            elif cmd == "reset":
                session.reset()
                last_path, last_bridges = [], None
                out("Grid reset.")
            elif cmd == "render" and len(rest) == 1:
                from grid_graph.viz.grid_figure import render_grid
                out(f"Saved {render_grid(session.store, path=last_path, bridges=last_bridges, output_path=rest[0])}")
            else:
                out(f"Unknown command {line.strip()!r}; type 'help'.")
        except InvalidInputError as exc:
            out(f"Rejected: {exc}")


def cmd_shell(args: argparse.Namespace) -> int:
    """Interactive grid session on stdin/stdout."""
    _setup_logging(args.log_level)
    try:
        session = _session_from_args(args)
    except InvalidInputError as exc:
        print(f"Rejected: {exc}", file=sys.stderr)
        return 1
    return run_shell(session)


# ── Argument parser ───────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-graph",
        description="Build a weighted grid graph, then find shortest paths and bridges.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Cheapest route across a three-node line
  grid-graph path 0-0 0-2 --rows 1 --cols 3 --edge 0-0,0-1,1 --edge 0-1,0-2,2

  # Bridges of a small drawing, saved as a figure
  grid-graph bridges --rows 2 --cols 3 --edge 0-0,0-1,1 --edge 0-1,1-1,1 --render out.png

  # Interactive session sized for a 640x420 viewport
  grid-graph shell --viewport 640x420
        """,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    def add_grid_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--rows", type=int, default=DEFAULT_CONFIG.default_rows, metavar="N",
            help=f"Grid rows (default: {DEFAULT_CONFIG.default_rows})",
        )
        p.add_argument(
            "--cols", type=int, default=DEFAULT_CONFIG.default_cols, metavar="N",
            help=f"Grid columns (default: {DEFAULT_CONFIG.default_cols})",
        )
        p.add_argument(
            "--viewport", type=_parse_viewport, default=None, metavar="WxH",
            help=f"Size the grid for a pixel viewport ({DEFAULT_CONFIG.cell_size_px}px cells); "
                 "overrides --rows/--cols",
        )
        p.add_argument(
            "--edge", type=_parse_edge_spec, action="append", metavar="A,B,W",
            help="Edge between nodes A and B with weight W (repeatable)",
        )

    # path
    p_path = subparsers.add_parser("path", help="Shortest path between two nodes")
    p_path.add_argument("start", metavar="START", help="Start node id, e.g. 0-0")
    p_path.add_argument("end", metavar="END", help="End node id, e.g. 3-4")
    add_grid_flags(p_path)
    p_path.add_argument("--render", default=None, metavar="PNG", help="Save a figure of the result")
    p_path.set_defaults(func=cmd_path)

    # bridges
    p_bridges = subparsers.add_parser("bridges", help="Bridge (cut) edges of the grid")
    add_grid_flags(p_bridges)
    p_bridges.add_argument("--render", default=None, metavar="PNG", help="Save a figure of the result")
    p_bridges.set_defaults(func=cmd_bridges)

    # edges
    p_edges = subparsers.add_parser("edges", help="List the edge set")
    add_grid_flags(p_edges)
    p_edges.set_defaults(func=cmd_edges)

    # shell
    p_shell = subparsers.add_parser("shell", help="Interactive session")
    add_grid_flags(p_shell)
    p_shell.add_argument(
        "--reveal-delay", type=float, default=None, metavar="SECONDS",
        help=f"Pause between revealed path nodes (default: {DEFAULT_CONFIG.reveal_delay_seconds})",
    )
    p_shell.set_defaults(func=cmd_shell)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
