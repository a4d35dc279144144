"""
grid_graph/tests/test_cli.py — Tests for the command-line interface.

Tests verify:
- path / bridges / edges print the expected results and exit 0.
- Invalid edges or endpoints produce a rejection notice and exit 1.
- The interactive shell drives a session end to end from scripted input.
"""

import os

import pytest

from grid_graph.cli import _parse_edge_spec, build_parser, main, run_shell
from grid_graph.session import GridSession

LINE_EDGES = ["--edge", "0-0,0-1,1", "--edge", "0-1,0-2,2"]


def scripted(lines):
    """input() replacement that replays lines, then raises EOFError."""
    it = iter(lines)

    def _input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return _input


# ── Argument parsing ─────────────────────────────────────────────────────────

def test_edge_spec_parsing():
    assert _parse_edge_spec("0-0, 0-1, 2") == ("0-0", "0-1", "2")


def test_bad_edge_spec_exits_2():
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["bridges", "--edge", "0-0,0-1"])
    assert exc.value.code == 2


def test_command_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


# ── One-shot commands ────────────────────────────────────────────────────────

def test_path_command(capsys):
    code = main(["path", "0-0", "0-2", "--rows", "1", "--cols", "3", *LINE_EDGES])
    out = capsys.readouterr().out
    assert code == 0
    assert "Path cost   : 3" in out
    assert "0-0 → 0-1 → 0-2" in out


def test_path_command_no_path(capsys):
    code = main(["path", "0-0", "1-1", "--rows", "2", "--cols", "2"])
    out = capsys.readouterr().out
    assert code == 0
    assert "No path found." in out
    assert "∞" in out


def test_path_command_unknown_node(capsys):
    code = main(["path", "0-0", "9-9", "--rows", "1", "--cols", "3", *LINE_EDGES])
    assert code == 1
    assert "Rejected" in capsys.readouterr().err


def test_bad_weight_rejected(capsys):
    code = main(["bridges", "--rows", "1", "--cols", "2", "--edge", "0-0,0-1,abc"])
    assert code == 1
    assert "Rejected" in capsys.readouterr().err


def test_bridges_command(capsys):
    code = main(["bridges", "--rows", "1", "--cols", "3", *LINE_EDGES])
    out = capsys.readouterr().out
    assert code == 0
    assert "Bridges     : 2" in out
    assert "0-0 — 0-1" in out


def test_bridges_command_exact_weights(capsys):
    code = main(["bridges", "--rows", "1", "--cols", "3",
                 "--edge", "0-0,0-1,1234567", "--edge", "0-1,0-2,0.1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "(w=1234567)" in out
    assert "(w=0.1)" in out


def test_bridges_command_renders(tmp_path, capsys):
    target = tmp_path / "bridges.png"
    code = main(["bridges", "--rows", "1", "--cols", "3", *LINE_EDGES, "--render", str(target)])
    assert code == 0
    assert target.exists()
    assert str(target) in capsys.readouterr().out


def test_edges_command(capsys):
    code = main(["edges", "--viewport", "130x50", *LINE_EDGES])
    out = capsys.readouterr().out
    assert code == 0
    assert "Grid 1x3, 2 edge(s)" in out
    assert "weight" in out


# ── Interactive shell ────────────────────────────────────────────────────────

def test_shell_click_flow_and_path():
    session = GridSession(1, 3)
    lines = []
    code = run_shell(
        session,
        input_fn=scripted([
            "click 0-0",            # ignored: edge mode is off
            "mode",
            "click 0-0", "click 0-1", "",      # empty answer → default weight 1
            "click 0-1", "click 0-2", "2",
            "path 0-0,0-2",
            "quit",
        ]),
        out=lines.append,
        sleep=lambda _: None,
    )
    text = "\n".join(lines)
    assert code == 0
    assert "Edge mode is off" in text
    assert "Edge 0-0 — 0-1 (w=1)." in text
    assert "Edge 0-1 — 0-2 (w=2)." in text
    assert "Cost: 3" in text
    assert [l for l in lines if l.startswith("  → ")] == ["  → 0-0", "  → 0-1", "  → 0-2"]


def test_shell_undo_redo_bridges_and_rejections():
    session = GridSession(2, 2)
    lines = []
    run_shell(
        session,
        input_fn=scripted([
            "edge 0-0 0-1",
            "edge 0-1 1-1 3",
            "edge 0-0 0-0 1",
            "edge 0-0 1-0 nope",
            "undo", "undo", "undo",
            "redo",
            "bridges",
            "path 0-0,1-1",
            "frobnicate",
        ]),
        out=lines.append,
        sleep=lambda _: None,
    )
    text = "\n".join(lines)
    assert text.count("Rejected:") == 2
    assert "Nothing to undo." in text
    assert "Bridges: 1" in text
    assert "No path found." in text
    assert "Unknown command" in text
    assert session.store.edge_count == 1


def test_shell_cancelled_weight_prompt():
    session = GridSession(1, 2)
    lines = []
    run_shell(session, input_fn=scripted(["mode", "click 0-0", "click 0-1"]), out=lines.append)
    assert "Cancelled." in lines
    assert session.store.edge_count == 0


def test_shell_render_and_reset(tmp_path):
    session = GridSession(1, 3)
    target = os.path.join(tmp_path, "grid.png")
    lines = []
    run_shell(
        session,
        input_fn=scripted(["edge 0-0 0-1 1", "bridges", f"render {target}", "reset", "edges"]),
        out=lines.append,
    )
    assert os.path.exists(target)
    assert "Grid reset." in lines
    assert "  (no edges)" in lines
