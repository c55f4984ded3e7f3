import math
import random

import pytest

from thehunter.game import (
    ESCAPE,
    IMMUNE_COOLDOWN,
    LIFE_UP_START,
    MAX_PREY,
    NUM_BUSHES,
    NUM_TREES,
    START_LIVES,
    START_SPEED,
    TIMER_INTERVAL,
    HunterGame,
    Quadrant,
    sgn,
)
from thehunter.scene import Canvas


@pytest.fixture
def game():
    return HunterGame(random.Random(7))


def test_sgn():
    assert sgn(2.5) == 1
    assert sgn(-0.1) == -1
    assert sgn(0.0) == 0


def test_initial_state(game):
    assert game.lives == START_LIVES
    assert game.level == 1
    assert game.prey_speed == START_SPEED
    assert game.prey_killed == 0
    assert game.animation_ongoing is False
    assert game.animation_set is True
    assert len(game.prey_positions) == MAX_PREY
    assert len(game.trees) == NUM_TREES
    assert len(game.bushes) == NUM_BUSHES


def test_prey_start_on_ground_within_field(game):
    for x, y, z in game.prey_positions:
        assert y == 1.0
        assert -6 < x <= 6
        assert -3 < z <= 6


def test_prey_move_toward_centre(game):
    for (x, _, _), (mx, my, mz) in zip(game.prey_positions, game.prey_movement):
        if x < 0:
            assert mx >= 0
        else:
            assert mx <= 0
        assert my >= 0
        assert mz >= 0


def test_terrain_ranges(game):
    for x, h, z in game.trees:
        assert 2 <= h < 5
        assert -6 < x <= 6
        assert -5 < z <= 7
    for x, y, z, rot in game.bushes:
        assert y == 1.2
        assert 0 <= rot < 360
        assert rot == int(rot)


def test_same_seed_same_world():
    first = HunterGame(random.Random(3))
    second = HunterGame(random.Random(3))
    assert first.trees == second.trees
    assert first.bushes == second.bushes
    assert first.prey_positions == second.prey_positions


@pytest.mark.parametrize(
    "quadrant, x, y, hit",
    [
        (Quadrant.LOWER_LEFT, -1, 2, True),
        (Quadrant.LOWER_LEFT, 1, 2, False),
        (Quadrant.LOWER_LEFT, -1, 1, False),
        (Quadrant.LOWER_RIGHT, 1, 4, True),
        (Quadrant.UPPER_LEFT, -1, 3, True),
        (Quadrant.UPPER_RIGHT, 1, 2, False),
        (Quadrant.ALL, 100, -100, True),
    ],
)
def test_quadrant_contains(quadrant, x, y, hit):
    assert quadrant.contains(x, y) is hit


def test_kill_needs_running_animation(game):
    assert game.kill(Quadrant.ALL) == 0
    assert game.prey_killed == 0


def test_kill_all(game):
    game.animation_ongoing = True
    assert game.kill(Quadrant.ALL) == MAX_PREY
    assert game.prey_killed == MAX_PREY
    assert all(y == 1.0 for _, y, _ in game.prey_positions)


def test_kill_quadrant_only_hits_inside(game):
    game.animation_ongoing = True
    game.prey_positions[0][:] = [-1.0, 2.0, 0.0]
    game.prey_positions[1][:] = [1.0, 2.0, 0.0]
    for position in game.prey_positions[2:]:
        position[:] = [1.0, 5.0, 0.0]
    assert game.kill(Quadrant.LOWER_LEFT) == 1
    assert game.prey_killed == 1
    assert game.prey_positions[0][1] == 1.0
    assert game.prey_positions[1] == [1.0, 2.0, 0.0]


def test_shot_cooldown(game):
    game.press("g")
    game.prey_speed = 0
    for position in game.prey_positions:
        position[:] = [-1.0, 2.0, 0.0]
    game.press("a")
    assert game.prey_killed == MAX_PREY
    assert game.cooldown_timer == 1
    for position in game.prey_positions:
        position[:] = [-1.0, 2.0, 0.0]
    game.press("A")
    assert game.prey_killed == MAX_PREY
    for _ in range(TIMER_INTERVAL - 1):
        game.tick()
    assert game.cooldown_timer == TIMER_INTERVAL
    game.tick()
    assert game.cooldown_timer == 0


def test_space_shot_has_own_cooldown(game):
    game.press("g")
    game.press(" ")
    assert game.prey_killed == MAX_PREY
    assert game.cooldown_timer_space == 1
    game.press(" ")
    assert game.prey_killed == MAX_PREY


def test_level_up(game):
    game.prey_killed = 11
    game.tick()
    assert game.level == 2
    assert game.prey_speed == START_SPEED + 1


def test_extra_life(game):
    game.prey_killed = LIFE_UP_START + 1
    game.tick()
    assert game.lives == START_LIVES + 1
    assert game.life_up_condition == 2 * LIFE_UP_START


def test_escaped_prey_costs_a_life(game):
    game.animation_ongoing = True
    game.prey_positions[0][0] = 100.0
    game.tick()
    assert game.lives == START_LIVES - 1
    assert game.live_cd == IMMUNE_COOLDOWN - 1
    assert -6 < game.prey_positions[0][0] <= 6


def test_last_life_ends_round(game):
    game.animation_ongoing = True
    game.lives = 1
    game.prey_killed = 5
    game.prey_positions[0][0] = 100.0
    game.tick()
    assert game.lives == 0
    assert game.prey_killed == 0
    assert game.animation_ongoing is False


def test_bob_keeps_prey_above_ground(game):
    game.move = 0.0
    game.prey_positions[0][1] = 0.5
    game.bob(0)
    assert game.prey_positions[0][1] == 1.1


def test_bob_rises_with_sine(game):
    game.move = math.pi / 2
    game.prey_positions[0][1] = 3.0
    game.bob(0)
    assert game.prey_positions[0][1] == pytest.approx(3.075)


def test_speed_keys(game):
    game.press("n")
    assert game.prey_speed == pytest.approx(START_SPEED * 0.9)
    game.press("M")
    assert game.prey_speed == pytest.approx(START_SPEED * 0.9 * 1.1)


def test_start_and_stop_keys(game):
    game.press("G")
    assert game.animation_ongoing is True
    game.press("t")
    assert game.animation_ongoing is False


def test_escape_prints_score_and_quits(game, capsys):
    assert game.press(ESCAPE) is False
    assert capsys.readouterr().out == "Score: 0 | Level: 1\n"


def test_restart_key(game, capsys):
    game.lives = 1
    game.level = 4
    game.prey_killed = 42
    game.prey_speed = 9
    assert game.press("r") is True
    assert capsys.readouterr().out == "Score: 42 | Level: 4\n"
    assert game.lives == START_LIVES
    assert game.level == 1
    assert game.prey_killed == 0
    assert game.prey_speed == START_SPEED


def test_build_scene_counts(game):
    canvas = game.build_scene(Canvas(), "bark", "grass")
    assert len(canvas.solids) == NUM_BUSHES * 6 + NUM_TREES + MAX_PREY * 8
    assert len(canvas.faces) == game.lives * 4 + 6 + NUM_TREES * 6
    assert sum(1 for f in canvas.faces if f.texture == "bark") == NUM_TREES * 6
    assert sum(1 for f in canvas.faces if f.texture == "grass") == 6


def test_build_scene_hearts_follow_lives(game):
    game.lives = 0
    canvas = game.build_scene(Canvas(), "bark", "grass")
    assert len(canvas.faces) == 6 + NUM_TREES * 6
    assert sum(1 for face in canvas.faces if face.texture is None) == 0
    game.lives = 2
    canvas = game.build_scene(Canvas(), "bark", "grass")
    assert sum(1 for face in canvas.faces if face.texture is None) == 2 * 4