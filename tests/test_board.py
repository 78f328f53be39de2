import pytest

from seabattle.board import (
    FleetError,
    Grid,
    InvalidPositionError,
    Maps,
    Outcome,
    Position,
    load_fleet,
    parse_fleet,
    parse_position,
)

FLEET = ["2:C1:C2", "3:D4:F4", "4:B5:B8", "5:D7:H7"]


def _ship_squares(grid):
    return [
        Position(col, line)
        for line in range(8)
        for col in range(8)
        if grid[Position(col, line)] not in ".ox"
    ]


def test_parse_position_letter_first():
    assert parse_position("A1") == Position(0, 0)


@pytest.mark.parametrize("text", ["a1", "1A", "1a"])
def test_parse_position_variants_agree(text):
    assert parse_position(text) == parse_position("A1")


def test_parse_position_label_round_trip():
    for line in range(8):
        for col in range(8):
            square = Position(col, line)
            assert parse_position(square.label()) == square
            assert parse_position(square.label()[::-1].lower()) == square


@pytest.mark.parametrize("text", ["", "A", "A10", "I1", "A9", "A0", "AA", "11", "h 8"])
def test_parse_position_rejects(text):
    with pytest.raises(InvalidPositionError):
        parse_position(text)


def test_position_out_of_board():
    with pytest.raises(InvalidPositionError):
        Position(8, 0)


def test_parse_fleet_places_every_ship():
    maps = parse_fleet(FLEET)
    assert len(_ship_squares(maps.own)) == 14
    assert maps.own[parse_position("C1")] == "2"
    assert maps.own[parse_position("C2")] == "2"
    assert maps.own[parse_position("E4")] == "3"
    assert maps.own[parse_position("B8")] == "4"
    assert maps.own[parse_position("H7")] == "5"
    assert _ship_squares(maps.enemy) == []


def test_parse_fleet_accepts_reversed_ends_and_newlines():
    reversed_fleet = [f"{n}:{b}:{a}\n" for n, a, b in (line.split(":") for line in FLEET)]
    assert parse_fleet(reversed_fleet).own.cells == parse_fleet(FLEET).own.cells


@pytest.mark.parametrize(
    "lines",
    [
        FLEET[:3],
        FLEET + ["2:A1:A2"],
        FLEET + [""],
        ["2:C1:C2", "2:D4:D5", "4:B5:B8", "5:D7:H7"],
        ["2:C1:D2", "3:D4:F4", "4:B5:B8", "5:D7:H7"],
        ["2:C1:C3", "3:D4:F4", "4:B5:B8", "5:D7:H7"],
        ["2:I1:I2", "3:D4:F4", "4:B5:B8", "5:D7:H7"],
        ["6:A1:A6", "3:D4:F4", "4:B5:B8", "5:D7:H7"],
        ["2:C1", "3:D4:F4", "4:B5:B8", "5:D7:H7"],
        ["3:A1:A3", "4:A2:D2", "2:F1:F2", "5:D7:H7"],
    ],
)
def test_parse_fleet_rejects(lines):
    with pytest.raises(FleetError):
        parse_fleet(lines)


def test_load_fleet(tmp_path):
    path = tmp_path / "fleet.txt"
    path.write_text("\n".join(FLEET) + "\n")
    assert load_fleet(path).own.cells == parse_fleet(FLEET).own.cells


def test_load_fleet_missing_file(tmp_path):
    with pytest.raises(FleetError, match="doesn't exist"):
        load_fleet(tmp_path / "absent.txt")


def test_receive_shot_on_water_and_ship():
    grid = parse_fleet(FLEET).own
    water = parse_position("A1")
    ship = parse_position("C1")
    assert grid.receive_shot(water) is False
    assert grid[water] == "o"
    assert grid.receive_shot(ship) is True
    assert grid[ship] == "x"
    assert grid.receive_shot(ship) is False
    assert grid.receive_shot(water) is False
    assert grid[water] == "o"
    assert grid.hit_count() == 1


def test_mark():
    grid = Grid()
    grid.mark(Position(1, 2), hit=True)
    grid.mark(Position(2, 1), hit=False)
    assert grid[Position(1, 2)] == "x"
    assert grid[Position(2, 1)] == "o"


def test_sinking_whole_fleet():
    grid = parse_fleet(FLEET).own
    squares = _ship_squares(grid)
    for square in squares[:-1]:
        assert grid.receive_shot(square) is True
        assert not grid.all_sunk()
    grid.receive_shot(squares[-1])
    assert grid.all_sunk()


def test_render_layout():
    lines = Grid().render().splitlines()
    assert lines[0] == " |A B C D E F G H"
    assert lines[1] == "-+---------------"
    assert len(lines) == 10
    assert all(line.startswith(f"{n}|") for n, line in enumerate(lines[2:], 1))
    assert all(line.count(".") == 8 for line in lines[2:])


def test_render_shows_ships():
    maps = parse_fleet(FLEET)
    row_one = maps.own.render().splitlines()[2]
    assert row_one.split("|")[1].split(" ")[2] == "2"


def test_maps_render_sections():
    maps = parse_fleet(FLEET)
    text = maps.render()
    assert text.startswith("\nmy positions:\n" + maps.own.render())
    assert text.endswith("\nenemy's positions:\n" + maps.enemy.render())


def test_outcome_progression():
    maps = parse_fleet(FLEET)
    assert maps.outcome() is Outcome.ONGOING
    for square in _ship_squares(maps.own):
        maps.own.receive_shot(square)
    assert maps.outcome() is Outcome.LOST
    for square in _ship_squares(parse_fleet(FLEET).own):
        maps.enemy.mark(square, hit=True)
    assert maps.outcome() is Outcome.WON


def test_outcome_values_are_exit_codes():
    maps = parse_fleet(FLEET)
    assert int(maps.outcome()) == 2
    for square in _ship_squares(maps.own):
        maps.own.receive_shot(square)
    assert int(maps.outcome()) == 1
    for square in _ship_squares(parse_fleet(FLEET).own):
        maps.enemy.mark(square, hit=True)
    assert int(maps.outcome()) == 0


def test_default_maps_is_ongoing():
    maps = Maps()
    assert maps.outcome() is Outcome.ONGOING
    assert maps.own.hit_count() == 0