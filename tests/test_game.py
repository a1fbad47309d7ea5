import pygame
import pytest

from thebeast.components import EnemyAIComponent, HealthComponent, TransformComponent
from thebeast.game import Game, GameState, Item, ItemType
from thebeast.tilemap import Tile
from thebeast.vector import Vector2D


class Keys:
    def __init__(self, pressed):
        self.pressed = pressed

    def __getitem__(self, key):
        return key in self.pressed


class Harness:
    def __init__(self, game, ticks, pressed):
        self.game = game
        self.ticks = ticks
        self.pressed = pressed

    def advance(self, ms):
        self.ticks["now"] += ms


@pytest.fixture
def h(monkeypatch, tmp_path):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    monkeypatch.chdir(tmp_path)
    ticks = {"now": 0}
    pressed = set()
    game = Game(clock=lambda: ticks["now"])
    game.init("The Beast", None, None, 1280, 960, False)
    game.key_state = lambda: Keys(pressed)
    harness = Harness(game, ticks, pressed)
    yield harness
    game.clean()


def start_playing(h):
    h.game.handle_click(640, 500)
    h.advance(3000)
    h.game.update()
    h.advance(2000)
    h.game.update()


def player_transform(game):
    return game.player.get_component(TransformComponent)


def player_health(game):
    return game.player.get_component(HealthComponent)


def test_init_populates_stage_one(h):
    game = h.game
    assert game.running()
    assert game.state is GameState.INTRO
    assert len(game.enemies) == 5
    assert player_transform(game).position == Vector2D(144.0, 192.0)
    assert [item.kind for item in game.items] == [ItemType.SWORD]
    assert game.items[0].position == Vector2D(700.0, 640.0)


def test_intro_then_stage_then_playing(h):
    game = h.game
    game.handle_click(640, 500)
    assert game.intro_started
    h.advance(2999)
    game.update()
    assert game.state is GameState.INTRO
    h.advance(1)
    game.update()
    assert game.state is GameState.STAGE1
    assert not game.intro_started
    h.advance(1999)
    game.update()
    assert game.state is GameState.STAGE1
    h.advance(1)
    game.update()
    assert game.state is GameState.PLAYING


def test_intro_waits_without_click(h):
    h.advance(10000)
    h.game.update()
    assert h.game.state is GameState.INTRO


def test_quit_button_stops_game(h):
    h.game.handle_click(640, 700)
    assert not h.game.running()


def test_click_outside_buttons_does_nothing(h):
    h.game.handle_click(10, 10)
    assert h.game.running()
    assert not h.game.intro_started
    assert h.game.is_music_on


def test_sound_button_toggles_music(h):
    h.game.handle_click(1100, 600)
    assert not h.game.is_music_on
    h.game.handle_click(1100, 600)
    assert h.game.is_music_on


def test_quit_event_stops_game(h):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    h.game.handle_events()
    assert not h.game.running()


def test_player_moves_on_dirt(h):
    start_playing(h)
    h.pressed.add(pygame.K_d)
    h.game.update()
    transform = player_transform(h.game)
    assert transform.position.x > 144.0
    assert transform.position.y == 192.0
    assert transform.current_speed == transform.base_speed


def test_water_blocks_player(h):
    start_playing(h)
    transform = player_transform(h.game)
    transform.position = Vector2D(144.0, 50.0)
    h.pressed.add(pygame.K_w)
    h.game.update()
    assert transform.position == Vector2D(144.0, 50.0)


def test_grass_halves_speed(h):
    start_playing(h)
    transform = player_transform(h.game)
    transform.position = Vector2D(50.0, 50.0)
    h.pressed.add(pygame.K_d)
    h.game.update()
    assert transform.position.x > 50.0
    assert transform.current_speed == transform.base_speed / 2


def test_sword_pickup(h):
    start_playing(h)
    player_transform(h.game).position = Vector2D(700.0, 640.0)
    h.game.update()
    assert h.game.has_sword
    assert h.game.items == []


def test_hp_pickup_heals(h):
    start_playing(h)
    health = player_health(h.game)
    health.take_damage(30)
    before = health.health
    h.game.items.append(Item(None, Vector2D(144.0, 192.0), 32, 32, ItemType.HP))
    h.game.update()
    assert health.health == before + 10
    assert h.game.items == []


def test_attack_kills_enemy_and_drops_hp(h):
    start_playing(h)
    enemy = h.game.enemies[0]
    enemy.get_component(TransformComponent).position = Vector2D(160.0, 192.0)
    enemy.get_component(HealthComponent).take_damage(90)
    h.pressed.add(pygame.K_SPACE)
    h.game.update()
    assert not enemy.active
    assert enemy not in h.game.manager.entities
    drops = [item for item in h.game.items if item.kind is ItemType.HP]
    assert len(drops) == 1
    assert drops[0].position == Vector2D(160.0, 192.0)


def test_sword_hits_harder(h):
    start_playing(h)
    enemy = h.game.enemies[0]
    enemy.get_component(TransformComponent).position = Vector2D(160.0, 192.0)
    enemy_health = enemy.get_component(HealthComponent)
    enemy_health.take_damage(80)
    h.pressed.add(pygame.K_SPACE)
    h.game.update()
    assert enemy.active
    assert 0 < enemy_health.health < 20

    h.game.has_sword = True
    enemy_health.take_damage(enemy_health.health - 20)
    h.game.update()
    assert not enemy.active


def test_player_death_loses_then_stops(h):
    start_playing(h)
    player_health(h.game).take_damage(100)
    h.game.update()
    assert h.game.state is GameState.LOSE
    assert not h.game.player.active
    assert pygame.display.get_caption()[0] == "You Lose!"
    assert h.game.running()
    h.advance(3000)
    h.game.update()
    assert not h.game.running()


def test_clearing_stage_one_starts_stage_two(h):
    start_playing(h)
    for enemy in h.game.enemies:
        enemy.destroy()
    player_transform(h.game).position = Vector2D(150.0, 200.0)
    h.game.update()
    assert h.game.state is GameState.STAGE2
    h.advance(2000)
    h.game.update()
    game = h.game
    assert game.state is GameState.PLAYING_STAGE2
    assert len(game.enemies) == 10
    assert len(game.manager.entities) == 11
    boss = game.enemies[-1]
    assert boss.get_component(EnemyAIComponent).is_boss
    assert boss.get_component(HealthComponent).health == 300
    assert sum(e.get_component(EnemyAIComponent).is_boss for e in game.enemies) == 1
    assert player_transform(game).position == Vector2D(144.0, 192.0)
    assert game.map.tile_at(60, 60) is Tile.DIRT


def test_clearing_stage_two_wins(h):
    start_playing(h)
    for enemy in h.game.enemies:
        enemy.destroy()
    h.game.update()
    h.advance(2000)
    h.game.update()
    for enemy in h.game.enemies:
        enemy.destroy()
    h.game.update()
    assert h.game.state is GameState.WIN
    assert pygame.display.get_caption()[0] == "You Win!"


def test_render_draws_health_bar_in_play(h):
    start_playing(h)
    h.game.render()
    assert tuple(h.game.screen.get_at((150, 184)))[:3] == (255, 0, 0)
    assert tuple(h.game.screen.get_at((5, 5)))[:3] == (0, 0, 0)


def test_render_intro_without_images_is_black(h):
    h.game.render()
    assert tuple(h.game.screen.get_at((150, 184)))[:3] == (0, 0, 0)