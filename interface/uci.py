"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text-based protocol that allows chess GUIs and testing
tools (like cutechess-cli) to communicate with chess engines. The engine
reads commands from stdin and writes responses to stdout. All output lines
must be flushed immediately; GUI programs won't block waiting for a newline.

Protocol overview:
    GUI -> Engine: uci, isready, ucinewgame, setoption, position, go, stop, quit
    Engine -> GUI: id name, id author, option, uciok, readyok, info, bestmove

Strength is selected with the ``Difficulty`` option rather than with time
controls. The search is fixed-depth, so "go wtime ..." and friends are
accepted and ignored.

Threading model:
    The UCI loop runs on the main thread. "go" starts the search in a daemon
    thread on a copy of the board so a following "position" command cannot
    race with it. The search has no abort hook: "stop" and "quit" wait for
    the running search to finish and its bestmove to be sent.

Critical rule: NEVER print to stdout except for valid UCI responses.
Debug output must go to stderr.

Run with: python -m interface.uci
"""

import sys
import threading
import time

import chess

from opponent.constants import DEFAULT_DIFFICULTY_NAME, ENGINE_AUTHOR, ENGINE_NAME
from opponent.difficulty import Difficulty
from opponent.search import get_best_move


def _send(line: str) -> None:
    """Write a UCI response line to stdout and flush it immediately."""
    print(line, flush=True)


def _log(message: str) -> None:
    """Write a diagnostic line to stderr; stdout is reserved for the protocol."""
    print(message, file=sys.stderr, flush=True)


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Attributes:
        board:         Current position, updated by "position" commands.
        difficulty:    Strength tier used by "go", set with "setoption".
        search_thread: The active search thread, or None.
    """

    def __init__(self) -> None:
        self.board: chess.Board = chess.Board()
        self.difficulty: Difficulty = Difficulty(DEFAULT_DIFFICULTY_NAME)
        self.search_thread: threading.Thread | None = None

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine and advertise the Difficulty option."""
        _send(f"id name {ENGINE_NAME}")
        _send(f"id author {ENGINE_AUTHOR}")
        tiers = " ".join(f"var {d.value}" for d in Difficulty)
        _send(f"option name Difficulty type combo default {DEFAULT_DIFFICULTY_NAME} {tiers}")
        _send("uciok")

    def handle_isready(self) -> None:
        """Wait for any running search, then report readiness."""
        self._wait_for_search()
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """Reset to the starting position. Nothing else survives between moves."""
        self._wait_for_search()
        self.board = chess.Board()

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Parse "setoption name <name> value <value>".

        Only "Difficulty" is recognised. Option names are case-insensitive
        per the UCI specification; tier names are matched case-insensitively
        too so "value hard" works from a terminal.

        Args:
            tokens: The command tokens with "setoption" already stripped.
        """
        if "name" not in tokens:
            _log("uci: setoption without name")
            return

        name_idx = tokens.index("name")
        if "value" in tokens:
            value_idx = tokens.index("value")
            name = " ".join(tokens[name_idx + 1:value_idx])
            value = " ".join(tokens[value_idx + 1:])
        else:
            name = " ".join(tokens[name_idx + 1:])
            value = ""

        if name.lower() != "difficulty":
            _log(f"uci: ignoring unknown option: {name!r}")
            return

        for tier in Difficulty:
            if tier.value.lower() == value.lower():
                self.difficulty = tier
                return
        _log(f"uci: unknown difficulty {value!r}; keeping {self.difficulty.value}")

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos
            position startpos moves e2e4 e7e5 ...
            position fen <FEN>
            position fen <FEN> moves e2e4 e7e5 ...

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        try:
            if not tokens:
                return

            if tokens[0] == "startpos":
                board = chess.Board()
                move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
            elif tokens[0] == "fen":
                if "moves" in tokens:
                    moves_idx = tokens.index("moves")
                    fen = " ".join(tokens[1:moves_idx])
                    move_tokens = tokens[moves_idx + 1:]
                else:
                    fen = " ".join(tokens[1:])
                    move_tokens = []
                board = chess.Board(fen)
            else:
                _log(f"uci: unknown position type: {tokens[0]}")
                return

            for uci_move in move_tokens:
                move = chess.Move.from_uci(uci_move)
                if move in board.legal_moves:
                    board.push(move)
                else:
                    _log(f"uci: illegal move in position command: {uci_move}")
                    break

            self.board = board

        except ValueError as e:
            _log(f"uci: error in position command: {e}")

    def handle_go(self, tokens: list[str]) -> None:
        """
        Start a search on a copy of the current board in a background thread.

        Time control tokens are ignored: the difficulty decides the depth.

        Args:
            tokens: The command tokens with "go" already stripped.
        """
        self._wait_for_search()

        board_copy = self.board.copy()
        difficulty = self.difficulty

        def search_and_reply() -> None:
            """Run the search and emit the info and bestmove lines."""
            try:
                start = time.monotonic()
                move, score, depth, nodes = get_best_move(board_copy, difficulty)
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))

                if move is not None:
                    nps = nodes * 1000 // elapsed_ms
                    _send(
                        f"info depth {depth} score cp {score} "
                        f"nodes {nodes} nps {nps} time {elapsed_ms}"
                    )
                    _send(f"bestmove {move.uci()}")
                else:
                    # No legal moves: UCI still requires a bestmove reply.
                    _send("bestmove (none)")

            except Exception as e:
                _log(f"search error: {e}")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        """Wait for the running search; its bestmove is the reply to "stop"."""
        self._wait_for_search()

    def handle_quit(self) -> None:
        """Let the running search finish, then exit without a reply."""
        self._wait_for_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _wait_for_search(self) -> None:
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()
        self.search_thread = None


def run_uci_loop() -> None:
    """
    Main UCI protocol loop.

    Reads lines from stdin and dispatches each command to the UciHandler
    until "quit" is received or stdin is closed. Each command is wrapped in
    a try/except so a bug in one handler does not take the engine down;
    errors are logged to stderr and the loop continues.
    """
    handler = UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                # Unknown commands are ignored per the UCI specification.
                _log(f"uci: ignoring unknown command: {command!r}")

        except Exception as e:
            _log(f"uci: unhandled error for command {command!r}: {e}")

    handler.handle_stop()


if __name__ == "__main__":
    run_uci_loop()
