from __future__ import annotations

import os
import random
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from game import (
    AT_HOME,
    AT_START,
    SEATS,
    GameState,
    PHASE_FINISHED,
    can_roll,
    create_initial_state,
    end_turn,
    get_valid_moves,
    make_rng,
    move_token,
    project_to_board_cell,
    roll_dice,
    take_computer_turn,
    turn_phase,
    validate_state,
)

app = Flask(__name__)


# ---------- JSON <-> state ----------

def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "activeSeatIndex": int(s.active_seat_index),
        "activeSeat": s.active_seat,
        "diceValue": s.dice_value,
        "diceRolled": bool(s.dice_rolled),
        "tokenMoved": bool(s.token_moved),
        "bonusTurn": bool(s.bonus_turn),
        "tokenPositions": {seat: list(s.tokens_of(seat)) for seat in SEATS},
        "status": s.status,
        "winner": s.winner,
        "log": list(s.log),
        "logCount": int(s.log_count),
    }


def _json_position(v: Any) -> Any:
    if v in (AT_START, AT_HOME):
        return v
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"invalid position {v!r}")
    return v


def json_to_state(obj: Dict[str, Any]) -> GameState:
    if not isinstance(obj, dict):
        raise ValueError("state must be an object")
    positions = obj["tokenPositions"]
    dice = obj.get("diceValue")
    state = GameState(
        active_seat_index=int(obj["activeSeatIndex"]),
        dice_value=int(dice) if dice is not None else None,
        dice_rolled=bool(obj.get("diceRolled", False)),
        token_moved=bool(obj.get("tokenMoved", False)),
        bonus_turn=bool(obj.get("bonusTurn", False)),
        token_positions=tuple(
            tuple(_json_position(p) for p in positions[seat]) for seat in SEATS
        ),
        status=str(obj.get("status", "playing")),
        winner=obj.get("winner"),
        log=tuple(str(x) for x in obj.get("log", [])),
        log_count=int(obj.get("logCount", len(obj.get("log", [])))),
    )
    return validate_state(state)


def _payload(s: GameState, **extra: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "ok": True,
        "state": state_to_json(s),
        "validMoves": list(get_valid_moves(s)),
        "phase": turn_phase(s),
    }
    out.update(extra)
    return out


def _rng_from(body: Dict[str, Any]) -> random.Random:
    seed = body.get("seed", None)
    return make_rng(int(seed)) if seed is not None else make_rng()


def _read_state(body: Dict[str, Any]) -> GameState:
    s_in = body.get("state")
    if s_in is None:
        raise ValueError("state required")
    return json_to_state(s_in)


def _bad_state(e: Exception) -> Any:
    app.logger.warning("rejected state: %s", e)
    return jsonify({"ok": False, "error": f"bad state: {e}"}), 400


def _report_finish(before: GameState, after: GameState) -> Optional[str]:
    if after.is_finished() and not before.is_finished():
        app.logger.info("game finished, winner=%s", after.winner)
    return after.winner


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    return jsonify(_payload(create_initial_state()))


@app.post("/api/legal")
def api_legal() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = _read_state(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_state(e)
    return jsonify({"ok": True, "validMoves": list(get_valid_moves(state)), "phase": turn_phase(state)})


@app.post("/api/roll")
def api_roll() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = _read_state(body)
        rng = _rng_from(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_state(e)
    if not can_roll(state):
        return jsonify({"ok": False, "error": "Rolling is not allowed now", "phase": turn_phase(state)}), 400
    return jsonify(_payload(roll_dice(state, rng)))


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = _read_state(body)
        token = int(body["token"])
    except (KeyError, TypeError, ValueError) as e:
        return _bad_state(e)
    legal = list(get_valid_moves(state))
    if token not in legal:
        return jsonify({"ok": False, "error": "Illegal move", "validMoves": legal}), 400
    next_state = move_token(state, token)
    winner = _report_finish(state, next_state)
    return jsonify(_payload(next_state, winner=winner))


@app.post("/api/end_turn")
def api_end_turn() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = _read_state(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_state(e)
    if turn_phase(state) == PHASE_FINISHED:
        return jsonify({"ok": False, "error": "Game is finished"}), 400
    return jsonify(_payload(end_turn(state)))


@app.post("/api/ai")
def api_ai() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = _read_state(body)
        rng = _rng_from(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_state(e)
    if state.is_finished():
        return jsonify({"ok": False, "error": "Game is finished"}), 400
    next_state = take_computer_turn(state, rng)
    turn_over = next_state is state
    if turn_over:
        next_state = end_turn(state)
    winner = _report_finish(state, next_state)
    return jsonify(_payload(next_state, winner=winner, turnEnded=turn_over))


@app.post("/api/board")
def api_board() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = _read_state(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_state(e)
    cells: Dict[str, List[Optional[List[int]]]] = {}
    for seat in SEATS:
        row: List[Optional[List[int]]] = []
        for pos in state.tokens_of(seat):
            cell = project_to_board_cell(seat, pos)
            row.append([int(cell[0]), int(cell[1])] if cell else None)
        cells[seat] = row
    return jsonify({"ok": True, "cells": cells})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
