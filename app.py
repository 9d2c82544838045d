from __future__ import annotations

import os
import random
from datetime import date
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from game import (
    Board,
    GeneratedPuzzle,
    IllegalMoveError,
    Move,
    PlaySession,
    daily_difficulty,
    default_generator,
    generate_until_solvable,
    legal_moves,
    parse_difficulty,
    solve,
    tutorial_board,
    update_selectability,
)
from sigmar_core.board import serialize_contents
from sigmar_core.config import configure_logging, max_generation_attempts

app = Flask(__name__)


class ApiError(ValueError):
    pass


def _board_to_json(b: Board) -> Dict[str, Any]:
    return {
        "size": int(b.size),
        "cells": [serialize_contents(c.contents) for c in b.cells],
        "selectable": b.selectable_ids(),
    }


def _json_to_board(obj: Any) -> Board:
    if not isinstance(obj, dict):
        raise ApiError("board required")
    try:
        size = int(obj["size"])
        cells = [str(v) for v in obj["cells"]]
        board = Board.from_contents(size, cells)
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"bad board: {e}") from None
    return update_selectability(board)


def _move_to_json(m: Move) -> List[int]:
    return list(m.cell_ids())


def _json_to_move(obj: Any) -> Move:
    if not isinstance(obj, list) or len(obj) not in (1, 2):
        raise ApiError("move must be a list of one or two cell ids")
    try:
        ids = [int(v) for v in obj]
    except (TypeError, ValueError):
        raise ApiError("move ids must be integers") from None
    return Move(ids[0], ids[1] if len(ids) == 2 else None)


def _status_json(b: Board) -> Dict[str, Any]:
    moves = legal_moves(b)
    won = b.is_empty()
    return {
        "board": _board_to_json(b),
        "legalMoves": [_move_to_json(m) for m in moves],
        "won": won,
        "stuck": (not won) and not moves,
    }


def _puzzle_to_json(p: GeneratedPuzzle) -> Dict[str, Any]:
    update_selectability(p.board)
    out = _status_json(p.board)
    out.update({
        "difficulty": p.difficulty.value,
        "seed": int(p.seed),
        "attempt": int(p.attempt),
        "status": p.status.value,
        "verified": p.verified,
        "day": p.day.isoformat() if p.day is not None else None,
    })
    return out


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


@app.errorhandler(ApiError)
def _bad_request(e: ApiError) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        difficulty = parse_difficulty(str(body.get("difficulty", "easy")))
    except ValueError as e:
        raise ApiError(str(e)) from None
    seed = body.get("seed", None)
    if seed is None:
        seed = random.SystemRandom().randrange(2 ** 31)
    attempts = body.get("attempts", None)
    try:
        seed = int(seed)
        attempts = int(attempts) if attempts is not None else max_generation_attempts()
    except (TypeError, ValueError):
        raise ApiError("seed and attempts must be integers") from None
    if attempts < 1:
        raise ApiError("attempts must be at least 1")
    puzzle = generate_until_solvable(seed, difficulty, max_attempts=attempts)
    return jsonify({"ok": True, "puzzle": _puzzle_to_json(puzzle)})


@app.post("/api/daily")
def api_daily() -> Any:
    body = _body()
    day_in = body.get("date", None)
    day: Optional[date] = None
    if day_in is not None:
        try:
            day = date.fromisoformat(str(day_in))
        except ValueError:
            raise ApiError("date must be YYYY-MM-DD") from None
    puzzle = default_generator().generate(day)
    return jsonify({"ok": True, "puzzle": _puzzle_to_json(puzzle)})


@app.get("/api/daily/difficulty")
def api_daily_difficulty() -> Any:
    day_in = request.args.get("date")
    try:
        day = date.fromisoformat(day_in) if day_in else date.today()
    except ValueError:
        raise ApiError("date must be YYYY-MM-DD") from None
    return jsonify({"ok": True, "date": day.isoformat(), "difficulty": daily_difficulty(day).value})


@app.get("/api/tutorial")
def api_tutorial() -> Any:
    return jsonify({"ok": True, **_status_json(tutorial_board())})


@app.post("/api/legal")
def api_legal() -> Any:
    board = _json_to_board(_body().get("board"))
    return jsonify({"ok": True, "legalMoves": [_move_to_json(m) for m in legal_moves(board)]})


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    session = PlaySession(_json_to_board(body.get("board")))
    move = _json_to_move(body.get("move"))
    try:
        session.play(move)
    except IllegalMoveError as e:
        return jsonify({
            "ok": False,
            "error": str(e),
            "legalMoves": [_move_to_json(m) for m in session.legal_moves()],
        }), 400
    return jsonify({"ok": True, **_status_json(session.board)})


@app.post("/api/tap")
def api_tap() -> Any:
    body = _body()
    session = PlaySession(_json_to_board(body.get("board")))
    try:
        session.selected = [int(v) for v in body.get("selected", [])]
        cell_id = int(body["cell"])
    except (KeyError, TypeError, ValueError):
        raise ApiError("cell id required; selected must be a list of ids") from None
    result = session.tap(cell_id)
    out = _status_json(session.board)
    out.update({
        "ok": True,
        "selected": result.selected,
        "move": _move_to_json(result.move) if result.move is not None else None,
        "imbalanced": [a.value for a in session.imbalanced_atoms()],
    })
    return jsonify(out)


@app.post("/api/solve")
def api_solve() -> Any:
    board = _json_to_board(_body().get("board"))
    res = solve(board)
    return jsonify({
        "ok": True,
        "solvable": bool(res.solvable),
        "moves": [_move_to_json(m) for m in res.moves],
        "nodes": int(res.nodes),
        "complete": bool(res.complete),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging()
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
