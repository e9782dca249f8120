"""Board placement, undo/clone behaviour, and score-decided win checks."""

import random

import pytest

from Infinite_Omok_AI.Board import Board
from Infinite_Omok_AI.engine.rules import RuleConfig
from Infinite_Omok_AI.engine.types import DIRECTIONS, GameResult, Move, Player


def _play(board, moves):
    for x, y in moves:
        assert board.make_move(x, y)
    return board


def test_turns_alternate_and_occupied_cell_is_rejected():
    b = Board()
    assert b.current_player == Player.X
    assert b.make_move(0, 0)
    assert b.current_player == Player.O
    assert b.get_cell(0, 0) == Player.X

    assert not b.make_move(0, 0)
    assert b.current_player == Player.O
    assert b.move_count == 1


def test_explicit_player_overrides_side_to_move():
    b = Board()
    assert b.make_move(3, 3, player=Player.O)
    assert b.get_cell(3, 3) == Player.O
    assert b.current_player == Player.X

    assert b.play(Move(4, 4, Player.X))
    assert b.current_player == Player.O

    with pytest.raises(ValueError):
        b.make_move(9, 9, player=Player.NONE)


def test_two_adjacent_stones_form_a_line():
    b = _play(Board(), [(0, 0), (5, 5), (1, 0)])
    line = b.best_line(Player.X)
    assert line.cells == ((0, 0), (1, 0))
    assert line.direction == (1, 0)
    assert b.score_of(Player.X) > 0
    assert b.best_line(Player.O) is None
    assert b.score_of(Player.O) == 0
    assert b.is_cell_in_best_line(1, 0, Player.X)
    assert not b.is_cell_in_best_line(5, 5, Player.X)


def test_line_blocked_on_both_ends_stops_scoring():
    b = _play(Board(), [(0, 0), (10, 10), (1, 0), (-10, 10), (2, 0), (4, 0), (3, 0)])
    line = b.best_line(Player.X)
    assert line.length == 4
    assert not line.is_fully_blocked
    assert b.is_close_to_win(Player.X)
    assert b.line_completion(Player.X) == pytest.approx(0.8)

    b.make_move(-1, 0)
    line = b.best_line(Player.X)
    assert line.is_fully_blocked
    assert not b.has_active_line(Player.X)
    assert b.score_of(Player.X) == 0
    assert not b.is_close_to_win(Player.X)


def test_single_blocked_end_is_enough_when_configured():
    moves = [(0, 0), (10, 10), (1, 0), (2, 0)]

    default = _play(Board(), moves)
    assert default.score_of(Player.X) > 0

    strict = _play(Board(RuleConfig(require_both_ends_blocked=False)), moves)
    assert strict.best_line(Player.X).is_fully_blocked
    assert strict.score_of(Player.X) == 0


def test_blocked_line_keeps_scoring_without_reset():
    rules = RuleConfig(reset_on_full_block=False)
    b = _play(Board(rules), [(0, 0), (10, 10), (1, 0), (-10, 10), (2, 0), (4, 0), (3, 0), (-1, 0)])
    assert not b.best_line(Player.X).is_fully_blocked
    assert b.score_of(Player.X) > 0


def test_run_decides_nothing_by_itself_score_picks_winner():
    b = Board()
    b.weights.set_weight(0, 10, 1000.0)
    b.weights.set_weight(1, 10, 1000.0)
    _play(b, [
        (20, 20), (0, 10),
        (21, 20), (1, 10),
        (22, 20), (-10, -10),
        (23, 20), (10, -10),
    ])
    assert b.check_winner() == GameResult.NONE

    b.make_move(24, 20)
    assert b.has_run(Player.X)
    assert not b.has_run(Player.O)
    assert b.score_of(Player.O) > b.score_of(Player.X)
    assert b.check_winner() == GameResult.O_WINS


def test_five_in_a_row_with_higher_score_wins():
    b = _play(Board(), [(0, 0), (0, 5), (1, 0), (1, 5), (2, 0), (2, 5), (3, 0), (3, 5)])
    assert b.check_winner() == GameResult.NONE
    b.make_move(4, 0)
    assert b.check_winner() == GameResult.X_WINS


def test_gapped_stones_never_count_as_a_run():
    b = _play(Board(), [(0, 0), (0, 5), (1, 0), (1, 5), (3, 0), (2, 5), (4, 0), (3, 5), (5, 0)])
    assert not b.has_run(Player.X)
    assert b.check_winner() == GameResult.NONE


def test_full_bounded_field_without_run_is_a_draw():
    rules = RuleConfig(field_size=5, draw_move_ceiling=25)
    b = Board(rules)
    for x in range(-2, 3):
        for y in range(-2, 3):
            owner = Player.X if (x + 2 * y) % 4 < 2 else Player.O
            assert b.make_move(x, y, player=owner)
    assert not b.has_run(Player.X)
    assert not b.has_run(Player.O)
    assert b.possible_moves() == []
    assert b.check_winner() == GameResult.DRAW


def test_bounded_field_rejects_outside_cells():
    b = Board(RuleConfig(field_size=9))
    assert not b.make_move(5, 0)
    assert b.make_move(4, -4)
    assert all(b.in_bounds(m.x, m.y) for m in b.possible_moves())


def test_undo_restores_previous_state():
    b = _play(Board(), [(0, 0), (5, 5), (1, 0), (5, 6), (2, 0)])
    cells = dict(b.cells)
    lines = dict(b.best_lines)
    side = b.current_player

    assert b.make_move(5, 7)
    assert b.best_line(Player.O).length == 3
    assert b.undo_move(5, 7)

    assert b.cells == cells
    assert b.best_lines == lines
    assert b.current_player == side


def test_undo_of_empty_cell_is_a_noop():
    b = _play(Board(), [(0, 0)])
    assert not b.undo_move(3, 3)
    assert b.move_count == 1
    assert b.current_player == Player.O


def test_out_of_order_undo_shrinks_line():
    b = _play(Board(), [(0, 0), (10, 10), (1, 0), (10, -10), (2, 0)])
    assert b.undo_move(0, 0)
    line = b.best_line(Player.X)
    assert line.cells == ((1, 0), (2, 0))
    assert b.current_player == Player.X
    assert not b.weights.is_occupied(0, 0)

    assert b.undo_move(2, 0)
    assert b.best_line(Player.X) is None
    assert b.current_player == Player.O


def test_clone_is_independent_and_behaves_identically():
    b = _play(Board(), [(0, 0), (1, 1), (1, 0), (2, 2)])
    clone = b.clone()
    assert clone == b

    clone.make_move(2, 0)
    assert b.move_count == 4
    assert b.best_line(Player.X).length == 2
    assert clone.best_line(Player.X).length == 3
    assert clone != b

    again = b.clone()
    for board in (b, again):
        board.make_move(2, 0)
        board.make_move(3, 3)
    assert b.score_of(Player.X) == again.score_of(Player.X)
    assert b.score_of(Player.O) == again.score_of(Player.O)
    assert b.best_lines == again.best_lines
    assert b.check_winner() == again.check_winner()


def test_possible_moves_on_empty_board_centre_first():
    b = Board()
    moves = b.possible_moves()
    assert len(moves) == 9
    assert moves[0].pos == (0, 0)
    assert {m.pos for m in moves[1:5]} == {(1, 0), (-1, 0), (0, 1), (0, -1)}
    assert all(m.player == Player.X for m in moves)

    weighted = b.weighted_moves()
    assert weighted[0] == (moves[0], 24.0)


def test_possible_moves_widen_with_move_count():
    b = Board()
    rng = random.Random(3)
    sizes = []
    for _ in range(10):
        moves = b.possible_moves()
        sizes.append(len(moves))
        assert all(b.is_empty(m.x, m.y) for m in moves)
        b.play(rng.choice(moves))
    # 8+ stones switch from the adjacency ring to the padded bounding box
    assert sizes[-1] >= sizes[7]


def test_simple_rules_sum_every_run():
    rules = RuleConfig.simple()
    b = _play(Board(rules), [(0, 0), (10, 10), (1, 0), (-10, 10), (0, 5), (10, -10), (1, 5)])
    runs = b.all_lines(Player.X, min_length=2)
    assert len(runs) == 2
    assert b.score_of(Player.X) == pytest.approx(sum(r.total_weight for r in runs))
    assert b.score_of(Player.X) > b.best_line(Player.X).total_weight


def test_all_lines_reports_each_run_once():
    b = _play(Board(), [(0, 0), (9, 9), (1, 0), (9, -9), (2, 0), (-9, 9), (0, 1), (-9, -9), (0, 2)])
    lines = b.all_lines(Player.X)
    assert sorted(line.cells for line in lines) == [
        ((0, 0), (0, 1), (0, 2)),
        ((0, 0), (1, 0), (2, 0)),
    ]


def test_line_invariants_hold_over_random_play():
    rng = random.Random(7)
    b = Board()
    for _ in range(60):
        if b.check_winner() != GameResult.NONE:
            break
        moves = b.possible_moves()[:12]
        b.play(rng.choice(moves))

        for player in (Player.X, Player.O):
            line = b.best_line(player)
            if line is None:
                assert b.score_of(player) == 0
                continue
            assert line.is_contiguous()
            assert line.direction in DIRECTIONS
            assert all(b.get_cell(x, y) == player for x, y in line.cells)
            if not line.is_active or line.is_fully_blocked:
                assert b.score_of(player) == 0
            else:
                assert b.score_of(player) == pytest.approx(line.total_weight)


def test_even_field_size_has_that_many_columns():
    b = Board(RuleConfig(field_size=10))
    assert sum(b.in_bounds(x, 0) for x in range(-10, 11)) == 10
    assert b.in_bounds(-5, -5) and b.in_bounds(4, 4)
    assert not b.in_bounds(5, 0) and not b.in_bounds(0, -6)
    assert not b.make_move(5, 0)
    assert b.make_move(-5, 0)


def _far_line_then_scattered_stones():
    # X holds a heavy far pair; a diagonal pair and gapped verticals sit around the origin
    b = Board(RuleConfig(uniform_weights=True))
    b.weights.set_weight(-10, -10, 100.0)
    b.weights.set_weight(-9, -10, 100.0)
    _play(b, [
        (-10, -10), (30, 30),
        (-9, -10), (30, -30),
        (1, -1), (-30, 30),
        (2, -2), (-30, -30),
        (0, 1), (40, 0),
        (0, 3), (-40, 0),
        (0, -3), (0, 40),
    ])
    assert b.best_line(Player.X).cells == ((-10, -10), (-9, -10))
    assert b.score_of(Player.X) == pytest.approx(66.65)
    return b


@pytest.mark.parametrize(
    "diagonal_end_weight, expected_cells",
    [
        (60.0, ((0, 0), (1, -1), (2, -2))),
        (5.0, ((-10, -10), (-9, -10))),
    ],
)
def test_non_extension_move_replaces_line_only_when_heavier(diagonal_end_weight, expected_cells):
    b = _far_line_then_scattered_stones()
    for cell, weight in {(0, 0): 1.0, (0, 1): 1.0, (0, 3): 40.0, (0, -3): 40.0, (1, -1): 10.0}.items():
        b.weights.set_weight(*cell, weight)
    b.weights.set_weight(2, -2, diagonal_end_weight)

    # The gapped vertical reach (0,-3)..(0,3) outweighs the diagonal, but only
    # (0,0),(0,1) of it is contiguous, so the diagonal run is the candidate.
    b.make_move(0, 0)

    line = b.best_line(Player.X)
    assert line.cells == expected_cells
    assert line.is_contiguous()
    if expected_cells[0] == (0, 0):
        assert b.score_of(Player.X) == pytest.approx(3.3 + 10.5 + diagonal_end_weight)
    else:
        assert b.score_of(Player.X) == pytest.approx(66.65)


def test_blocked_line_is_replaced_by_another_run():
    b = _play(Board(), [
        (0, 0), (3, 0),
        (1, 0), (-20, -20),
        (2, 0), (20, -20),
        (10, 10), (-20, 20),
        (10, 11),
    ])
    assert b.best_line(Player.X).cells == ((0, 0), (1, 0), (2, 0))

    b.weights.set_weight(10, 10, 50.0)
    b.weights.set_weight(10, 11, 50.0)
    b.make_move(-1, 0)

    line = b.best_line(Player.X)
    assert line.cells == ((10, 10), (10, 11))
    assert line.is_active and not line.is_fully_blocked
    assert b.score_of(Player.X) == pytest.approx(100.0)
