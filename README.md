# seabattle

seabattle is a two-player battleship game for the terminal. Each player runs
the game in their own process on the same machine. The two processes exchange
shots and results only through the `SIGUSR1` and `SIGUSR2` signals.

The game waits for signals with `signal.sigwaitinfo` and `signal.sigtimedwait`.
Python provides these on Linux, but not on every POSIX system.

## Installation

```
pip install .
```

## Fleet file

Each player needs a text file that places four ships on an 8×8 grid. Each line
has the form `SIZE:START:END`, for example:

```
2:C1:C2
3:D4:F4
4:B5:B8
5:D7:H7
```

A fleet file must follow these rules:

- It has exactly four lines.
- Each line starts with a different size from `2` to `5`.
- Columns are `A`–`H` and rows are `1`–`8`.
- A ship lies along a single row or a single column.
- The distance from start to end is the size minus one.
- A ship may not cross a square already taken by an earlier ship. The game
  does not check a ship's end square for this.

## Playing

The first player starts the game with a fleet file only. The game prints
`my_pid:` followed by the player's process id, then waits for the second player
to connect:

```
seabattle fleet1.txt
```

The second player gives the first player's process id before their own fleet
file:

```
seabattle 12345 fleet2.txt
```

Running `python -m seabattle.game` works in the same way as `seabattle`.

The first player attacks first, and the players then take turns:

- **Attacking.** Type a target on standard input, such as `B4`, `b4` or `4B`.
  If the input is not a square on the board, the game prints `wrong position`
  and asks again.
- **Defending.** Your process waits for the enemy's shot.
- **Results.** Each shot is reported as `hit` or `missed`.

The boards are printed after every second turn, under two headings: `my
positions` (your own board) and `enemy's positions` (what you know of the
enemy's board). On a board, `x` marks a hit and `o` marks a miss. The first
player to hit all 14 ship squares of the enemy wins, and the game prints
`I won` or `Enemy won`.

The exit status tells you how the game ended:

| Status | Meaning |
|-------:|---------|
| `0` | You won. |
| `1` | The enemy won. |
| `84` | An error. |

An error is any of the following:

- a wrong number of arguments;
- a fleet file that is missing or invalid;
- standard input ended before a target was given;
- a failure while signalling the other process.

Run `seabattle -h` to print usage.

## Library use

The modules can be used without starting a game.

- `seabattle.board` handles positions, boards and fleets:
  - `parse_position(text)` returns a `Position`. It raises
    `InvalidPositionError` if the text does not name a square.
  - `Position.label()` gives the square's name, such as `B4`.
  - `parse_fleet(lines)` and `load_fleet(path)` build a `Maps` object, which
    holds the `own` and `enemy` grids. Both raise `FleetError` for a bad fleet.
  - `Grid.receive_shot(position)` applies an incoming shot and returns whether
    it hit a ship.
  - `Grid.mark(position, hit)` records the result of a shot.
  - `Grid.render()` and `Maps.render()` produce the text boards.
  - `Maps.outcome()` returns an `Outcome`: `WON`, `LOST` or `ONGOING`.
- `seabattle.conversions` has the number helpers used by the signal protocol:
  `decimal_to_binary`, `binary_to_decimal`, `parse_int` and `split_words`.
- `seabattle.signals` provides `SignalChannel`, one end of the signal link.
  Use it as a context manager, which restores the previous signal handlers and
  signal mask on exit. The module also provides `BitAccumulator` and
  `encode_bits`.
- `seabattle.game` holds the turn loop:
  - `read_target` reads a target from an input stream.
  - `attack` fires one shot and `defend` answers one enemy shot.
  - `play` runs the turns until one fleet is sunk.
  - `main` runs one player's side of a game.
- `seabattle.printf` provides a small printf-style formatter. `format_message`
  returns the formatted text and `printf` writes it to standard output. It
  supports `d i u b o x X c s S p`, `%%`, the `#` flag and a field width.

## What it does not do

- There is no full-screen or coloured display. The game prints plain text line
  by line.
- The players cannot be on different machines. The two processes must run on
  the same host and be able to send signals to each other.