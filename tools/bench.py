#!/usr/bin/env python3
"""
Benchmark: nodes visited and time per move for every searching difficulty.

Each position is sent to the UCI engine once per tier. Node counts show how
much alpha-beta pruning saves as the depth grows; time per move shows whether
a tier is still comfortable for an interactive opponent.

Usage: python3 tools/bench.py
"""
import os
import subprocess
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PYTHON = sys.executable

# Beginner plays a random move without searching, so it is not benchmarked.
DIFFICULTIES = ["Easy", "Hard", "Master"]

POSITIONS = [
    ("Start",        "startpos"),
    ("After 1.e4",   "startpos moves e2e4"),
    ("Italian",      "startpos moves e2e4 e7e5 g1f3 b8c6 f1c4"),
    ("Mid-open",     "fen r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Complex mid",  "fen r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8"),
    ("Rook ending",  "fen 8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
]


def run_position(label: str, pos_spec: str, difficulty: str) -> dict:
    """Run a single position at one difficulty and return the reported metrics.

    Spawns the UCI engine as a subprocess, selects the difficulty, sends the
    position and "go", then parses the "info depth" line that precedes
    "bestmove".

    Args:
        label: Human-readable position name for display.
        pos_spec: UCI position string (e.g. "startpos" or "fen <FEN>").
        difficulty: Tier name passed to "setoption name Difficulty".

    Returns:
        Dict with keys: label, difficulty, move, depth, score, nodes, nps, time_ms.
    """
    env = {**os.environ, "PYTHONPATH": REPO}
    proc = subprocess.Popen(
        [PYTHON, "-m", "interface.uci"],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        cwd=REPO,
        env=env,
    )
    cmds = (
        f"uci\nsetoption name Difficulty value {difficulty}\nisready\n"
        f"position {pos_spec}\ngo\n"
    )
    proc.stdin.write(cmds)
    proc.stdin.flush()

    nodes = time_ms = nps = depth = score = 0
    move = "(none)"
    for line in proc.stdout:
        line = line.strip()
        if line.startswith("info depth"):
            parts = line.split()

            def _get(key: str) -> int:
                try:
                    return int(parts[parts.index(key) + 1])
                except (ValueError, IndexError):
                    return 0

            depth = _get("depth")
            score = _get("cp")
            nodes = _get("nodes")
            nps = _get("nps")
            time_ms = _get("time")
        elif line.startswith("bestmove"):
            move = line.split()[1]
            break

    proc.stdin.write("quit\n")
    proc.stdin.flush()
    proc.wait(timeout=5)

    return {
        "label": label,
        "difficulty": difficulty,
        "move": move,
        "depth": depth,
        "score": score,
        "nodes": nodes,
        "nps": nps,
        "time_ms": time_ms,
    }


def main() -> None:
    """Run all benchmark positions at every searching tier and print a table."""
    print(f"Chess opponent benchmark — {PYTHON}")
    print()
    print(
        f"{'Position':<14} {'Tier':<7} {'Move':<7} {'Depth':>5} {'Score':>6} "
        f"{'Nodes':>8} {'NPS':>8} {'Time(ms)':>9}"
    )
    print("-" * 76)

    for difficulty in DIFFICULTIES:
        results = []
        for label, pos in POSITIONS:
            r = run_position(label, pos, difficulty)
            results.append(r)
            print(
                f"{r['label']:<14} {r['difficulty']:<7} {r['move']:<7} {r['depth']:>5} "
                f"{r['score']:>6} {r['nodes']:>8,} {r['nps']:>8,} {r['time_ms']:>9,}"
            )

        valid = [r for r in results if r["nodes"] > 0]
        if valid:
            avg_nodes = sum(r["nodes"] for r in valid) // len(valid)
            avg_time = sum(r["time_ms"] for r in valid) // len(valid)
            avg_nps = sum(r["nps"] for r in valid) // len(valid)
            print(
                f"{'AVERAGE':<14} {difficulty:<7} {'':<7} {'':<5} {'':<6} "
                f"{avg_nodes:>8,} {avg_nps:>8,} {avg_time:>9,}"
            )
        print("-" * 76)


if __name__ == "__main__":
    main()
