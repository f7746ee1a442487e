"""Tests for the main/game-over scenes and their transitions."""
import pytest

from game.asteroids.entities import Action, Asteroid, Bullet, GameObject, Ship
from game.asteroids.primitives import (
    LinesPrimitive,
    PolygonPrimitive,
    SquarePrimitive,
    TextPrimitive,
)
from game.asteroids.scene import (
    GameOverScene,
    MainScene,
    Press,
    Release,
    Update,
    advance,
    render,
    transition,
)


def still_asteroid(rng, x, y, size):
    return Asteroid(obj=GameObject(x, y, 0.0, 0.0), size=size,
                    border=Asteroid.create_border(rng, size * 5.0))


@pytest.fixture
def target_scene(config, rng):
    """Ship at rest in the centre with a small rock straight ahead."""
    return MainScene(
        level=1,
        ship=Ship.new(config),
        asteroids=[still_asteroid(rng, 100.0, 60.0, 1)],
    )


@pytest.fixture
def doomed_scene(config, rng):
    """A large rock sitting on the ship's nose."""
    return MainScene(
        level=4,
        ship=Ship.new(config),
        asteroids=[still_asteroid(rng, 100.0, 87.0, 3)],
    )


class TestMainScene:

    def test_new_spawns_one_large_asteroid_per_level(self, config, rng):
        scene = MainScene.new(3, config, rng)
        assert scene.level == 3
        assert len(scene.asteroids) == 3
        assert all(a.size == 3 for a in scene.asteroids)
        assert scene.bullets == []
        assert (scene.ship.obj.x, scene.ship.obj.y) == (100.0, 100.0)

    def test_quiet_tick(self, config, rng):
        scene = MainScene(level=1, ship=Ship.new(config),
                          asteroids=[still_asteroid(rng, 20.0, 20.0, 3)])
        outcome = scene.update(0.05, config, rng)
        assert not outcome.collided
        assert not outcome.fired
        assert not outcome.cleared
        assert outcome.hits == 0

    def test_fire_travel_hit_destroy(self, config, rng, target_scene):
        scene = target_scene
        scene.ship.handle_press(Action.FIRE)

        outcome = scene.update(0.05, config, rng)
        assert outcome.fired
        assert len(scene.bullets) == 1
        bullet = scene.bullets[0]

        for _ in range(20):
            if outcome.destroyed:
                break
            outcome = scene.update(0.05, config, rng)

        assert outcome.destroyed == 1
        assert outcome.hits == 1
        assert outcome.cleared
        assert scene.asteroids == []
        assert all(b is not bullet for b in scene.bullets)

    def test_ship_collision_reported(self, config, rng, doomed_scene):
        outcome = doomed_scene.update(0.01, config, rng)
        assert outcome.collided

    def test_expired_bullets_pruned(self, config, rng):
        scene = MainScene(level=1, ship=Ship.new(config),
                          asteroids=[still_asteroid(rng, 20.0, 20.0, 3)])
        bullet = Bullet.new(150.0, 150.0, 0.0)
        bullet.distance = 99.0
        scene.bullets.append(bullet)
        scene.update(0.05, config, rng)
        assert scene.bullets == []

    def test_two_bullets_one_asteroid_split_once(self, config, rng):
        scene = MainScene(level=1, ship=Ship.new(config),
                          asteroids=[still_asteroid(rng, 50.0, 50.0, 3)])
        scene.bullets = [Bullet.new(50.0, 50.0, 0.0), Bullet.new(51.0, 50.0, 0.0)]
        outcome = scene.update(0.01, config, rng)
        assert outcome.hits == 2
        assert outcome.destroyed == 1
        assert scene.bullets == []
        assert len(scene.asteroids) == 2
        assert all(a.size == 2 for a in scene.asteroids)

    def test_bullet_hits_first_asteroid_only(self, config, rng):
        first = still_asteroid(rng, 50.0, 50.0, 1)
        second = still_asteroid(rng, 50.0, 50.0, 3)
        scene = MainScene(level=1, ship=Ship.new(config), asteroids=[first, second])
        scene.bullets = [Bullet.new(50.0, 50.0, 0.0)]
        outcome = scene.update(0.01, config, rng)
        assert outcome.destroyed == 1
        assert scene.asteroids == [second]
        assert scene.asteroids[0] is second

    def test_debris_keeps_list_position(self, config, rng):
        first = still_asteroid(rng, 20.0, 20.0, 3)
        middle = still_asteroid(rng, 50.0, 150.0, 2)
        last = still_asteroid(rng, 160.0, 30.0, 3)
        scene = MainScene(level=1, ship=Ship.new(config), asteroids=[first, middle, last])
        scene.bullets = [Bullet.new(50.0, 150.0, 0.0)]
        scene.update(0.01, config, rng)
        assert len(scene.asteroids) == 4
        assert scene.asteroids[0] is first
        assert [a.size for a in scene.asteroids[1:3]] == [1, 1]
        assert scene.asteroids[3] is last


class TestTransitions:

    def test_collision_ends_game(self, config, rng, doomed_scene):
        nxt = transition(doomed_scene, Update(0.01), config, rng)
        assert nxt == GameOverScene(level=4)

    def test_advance_reports_outcome(self, config, rng, doomed_scene):
        nxt, outcome = advance(doomed_scene, 0.01, config, rng)
        assert isinstance(nxt, GameOverScene)
        assert outcome.collided

    def test_clearing_level_starts_next(self, config, rng, target_scene):
        scene = transition(target_scene, Press(Action.FIRE), config, rng)
        for _ in range(20):
            scene = transition(scene, Update(0.05), config, rng)
            if scene is not target_scene:
                break
        assert isinstance(scene, MainScene)
        assert scene.level == 2
        assert len(scene.asteroids) == 2
        assert scene.bullets == []

    def test_press_and_release_reach_ship(self, config, rng, target_scene):
        scene = transition(target_scene, Press(Action.THRUST), config, rng)
        assert scene is target_scene
        assert scene.ship.accel == 1.0
        scene = transition(scene, Release(Action.THRUST), config, rng)
        assert scene.ship.accel == 0.0

    def test_restart_respawns_ship(self, config, rng, target_scene):
        target_scene.ship.obj.v = 80.0
        old_ship = target_scene.ship
        asteroids = list(target_scene.asteroids)
        scene = transition(target_scene, Press(Action.RESTART), config, rng)
        assert scene.ship is not old_ship
        assert scene.ship == Ship.new(config)
        assert scene.asteroids == asteroids

    def test_quit(self, config, rng, target_scene):
        assert transition(target_scene, Press(Action.QUIT), config, rng) is None
        assert transition(GameOverScene(level=2), Press(Action.QUIT), config, rng) is None

    def test_game_over_restart(self, config, rng):
        scene = transition(GameOverScene(level=5), Press(Action.RESTART), config, rng)
        assert isinstance(scene, MainScene)
        assert scene.level == 1
        assert len(scene.asteroids) == 1

    def test_game_over_ignores_other_events(self, config, rng):
        over = GameOverScene(level=5)
        assert transition(over, Update(0.1), config, rng) is over
        assert transition(over, Press(Action.FIRE), config, rng) is over
        assert transition(over, Release(Action.FIRE), config, rng) is over

    def test_unknown_scene(self, config, rng):
        with pytest.raises(TypeError):
            transition(object(), Press(Action.FIRE), config, rng)


class TestRender:

    def test_main_scene_primitives(self, config, rng, target_scene):
        target_scene.bullets.append(Bullet.new(10.0, 10.0, 0.0))
        prims = render(target_scene, config)
        assert [type(p) for p in prims] == [LinesPrimitive, PolygonPrimitive, SquarePrimitive]

    def test_game_over_text(self, config):
        prims = render(GameOverScene(level=3), config)
        assert all(isinstance(p, TextPrimitive) for p in prims)
        assert prims[0].text == "Game Over"
        assert "Level 3" in prims[1].text
