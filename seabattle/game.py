"""Turn loop of a two-player game of battleships played over signals."""

from __future__ import annotations

import os
import sys
import time
from typing import Iterable, Sequence, TextIO

from .board import FleetError, InvalidPositionError, Maps, Outcome, Position, load_fleet, parse_position
from .conversions import binary_to_decimal, parse_int
from .signals import BITS_PER_VALUE, SignalChannel

ERROR_STATUS = 84
REPLY_DELAY = 0.01

USAGE = (
    "USAGE\n\tseabattle [first_player_pid] navy_positions\n\n"
    "DESCRIPTION\n\tfirst_player_pid\tonly for the 2nd player."
    " pid of the first player.\n\tnavy_positions\t\tfile representing"
    " the positions of the ships.\n"
)


def _emit(out: TextIO, text: str) -> None:
    out.write(text)
    out.flush()


def read_target(stream: Iterable[str], out: TextIO) -> Position:
    """Read lines until one names a square; complain about the others.

    Raises EOFError when the input ends first.
    """
    for line in stream:
        text = line[:-1] if line.endswith("\n") else line
        try:
            return parse_position(text)
        except InvalidPositionError:
            _emit(out, "wrong position\nattack:\t")
    raise EOFError("no target given")


def attack(channel, maps: Maps, stream: Iterable[str], out: TextIO) -> bool:
    """Ask for a target, fire at it and record the result; return whether it hit."""
    _emit(out, "\nattack: ")
    target = read_target(stream, out)
    channel.transmit(target.col)
    channel.transmit(target.line)
    _emit(out, f"{target.label()}: ")
    channel.wait_for_quiet()
    hit = channel.accumulator.take() != 0
    maps.enemy.mark(target, hit)
    _emit(out, "hit\n" if hit else "missed\n")
    return hit


def _receive_coordinate(channel) -> int:
    channel.accumulator.take()
    while channel.wait_for_quiet() != BITS_PER_VALUE:
        channel.accumulator.take()
        channel.send_validation(False)
    value = binary_to_decimal(channel.accumulator.take())
    channel.send_validation(True)
    return value


def defend(channel, maps: Maps, out: TextIO) -> bool:
    """Wait for the enemy's shot, apply it and report; return whether it hit."""
    _emit(out, "\nwaiting for enemy's attack...\n")
    col = _receive_coordinate(channel)
    line = _receive_coordinate(channel)
    position = Position(col, line)
    _emit(out, f"{position.label()}: ")
    time.sleep(REPLY_DELAY)
    hit = maps.own.receive_shot(position)
    channel.send_validation(hit)
    _emit(out, "hit\n" if hit else "missed\n")
    return hit


def play(channel, first: bool, maps: Maps, stream: Iterable[str], out: TextIO) -> Outcome:
    """Alternate attacks and defences until one fleet is sunk."""
    channel.install_communication_handler()
    attacking = first
    turn = 0
    while (outcome := maps.outcome()) is Outcome.ONGOING:
        if attacking:
            attack(channel, maps, stream, out)
        else:
            defend(channel, maps, out)
        attacking = not attacking
        turn += 1
        if turn % 2 == 0:
            _emit(out, maps.render())
    if turn % 2 == 1:
        _emit(out, maps.render())
    _emit(out, "\nI won\n" if outcome is Outcome.WON else "\nEnemy won\n")
    return outcome


def main(argv: Sequence[str] | None = None) -> int:
    """Run one player's side of the game and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    out = sys.stdout
    if len(args) not in (1, 2):
        return ERROR_STATUS
    if "-h".startswith(args[0]):
        _emit(out, USAGE)
        return 0
    _emit(out, f"my_pid:\t{os.getpid()}\n")
    try:
        maps = load_fleet(args[-1])
    except FleetError as exc:
        if isinstance(exc.__cause__, OSError):
            _emit(out, f"{exc}\n")
        return ERROR_STATUS
    first = len(args) == 1
    try:
        with SignalChannel() as channel:
            channel.install_connection_handler()
            if first:
                _emit(out, "waiting for enemy connexion...\n")
                channel.wait_for_peer()
                _emit(out, "enemy connected\n")
            else:
                channel.connect_to(parse_int(args[0]))
                _emit(out, "successfully connected\n")
            _emit(out, maps.render())
            return int(play(channel, first, maps, sys.stdin, out))
    except (EOFError, OSError):
        return ERROR_STATUS


if __name__ == "__main__":
    sys.exit(main())