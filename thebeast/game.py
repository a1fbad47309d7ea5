"""Game states, level set-up and the per-frame steps of the game."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

import pygame

from thebeast.components import (
    EnemyAIComponent,
    HealthComponent,
    KeyboardController,
    SpriteComponent,
    TransformComponent,
)
from thebeast.ecs import Entity, Manager
from thebeast.textures import TextureManager
from thebeast.tilemap import Tile, TileMap
from thebeast.vector import Vector2D

logger = logging.getLogger(__name__)

WINDOW_SIZE = (1280, 960)
INTRO_DURATION = 3000
STAGE_DURATION = 2000
DISPLAY_DURATION = 3000

PLAYER_START = (144.0, 192.0)
PLAYER_ATTACK_RANGE = 70.0
ITEM_SIZE = 32
HP_PICKUP = 10

PLAY_BUTTON = pygame.Rect(440, 400, 400, 210)
QUIT_BUTTON = pygame.Rect(440, 630, 400, 210)
SOUND_BUTTON = pygame.Rect(1080, 560, 150, 150)

STAGE_ONE_ENEMIES = (
    (240, 240),
    (384, 672),
    (720, 240),
    (720, 720),
    (480, 480),
)

STAGE_TWO_ENEMIES = (
    (48, 48),
    (96, 768),
    (576, 384),
    (1152, 48),
    (1152, 816),
    (912, 480),
    (912, 432),
    (912, 528),
    (864, 480),
)

BOSS_POSITION = (960, 480)
SWORD_POSITION = (700.0, 640.0)

_IMAGE_FILES = {
    "intro": "assets/background.png",
    "intro2": "assets/intro.png",
    "stage1": "assets/stage1.png",
    "stage2": "assets/stage2.png",
    "win": "assets/win.png",
    "lose": "assets/lose.png",
    "play": "assets/play_button.png",
    "quit": "assets/quit_button.png",
    "sound": "assets/sound_button.png",
    "hp": "assets/hp.png",
    "sword": "assets/sword.png",
}


class GameState(Enum):
    INTRO = auto()
    STAGE1 = auto()
    PLAYING = auto()
    STAGE2 = auto()
    PLAYING_STAGE2 = auto()
    WIN = auto()
    LOSE = auto()


class ItemType(Enum):
    HP = auto()
    SWORD = auto()


@dataclass
class Item:
    """A pick-up lying on the map."""

    texture: pygame.Surface | None
    position: Vector2D
    width: int
    height: int
    kind: ItemType
    active: bool = True

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.position.x), int(self.position.y), self.width, self.height)


def _inside(rect: pygame.Rect, x: int, y: int) -> bool:
    """Point-in-rectangle test that includes the far edges."""
    return rect.x <= x <= rect.right and rect.y <= y <= rect.bottom


class Game:
    """Owns the window, the world and the state machine of one game."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self.clock = clock if clock is not None else pygame.time.get_ticks
        self.key_state: Callable = pygame.key.get_pressed
        self.is_running = False
        self.screen: pygame.Surface | None = None
        self.textures: TextureManager | None = None
        self.state = GameState.INTRO
        self.map: TileMap | None = None
        self.manager = Manager()
        self.player: Entity = self.manager.add_entity()
        self.enemies: list[Entity] = []
        self.items: list[Item] = []
        self.images: dict[str, pygame.Surface | None] = {}
        self.game_over_time = 0
        self.intro_time = 0
        self.stage_time = 0
        self.intro_start_time = 0
        self.is_music_on = True
        self.intro_started = False
        self.has_sword = False
        self.attack_sound: pygame.mixer.Sound | None = None
        self.win_sound: pygame.mixer.Sound | None = None
        self.lose_sound: pygame.mixer.Sound | None = None
        self._theme_loaded = False

    # set-up -----------------------------------------------------------

    def init(self, title, xpos, ypos, width, height, fullscreen) -> None:
        """Open the window and audio, load assets and populate stage one."""
        flags = pygame.FULLSCREEN if fullscreen else 0
        pygame.init()
        if not pygame.display.get_init():
            self.is_running = False
            return
        logger.info("Initialized SDL!")

        try:
            pygame.mixer.init(44100, -16, 2, 2048)
        except pygame.error as exc:
            logger.error("SDL_mixer could not initialize! Error: %s", exc)
            self.is_running = False
            return
        logger.info("Initialized SDL_mixer!")

        if xpos is not None and ypos is not None:
            os.environ["SDL_VIDEO_WINDOW_POS"] = f"{xpos},{ypos}"
        else:
            os.environ["SDL_VIDEO_CENTERED"] = "1"

        if not self._open_window(title, flags):
            return
        self.is_running = True

        self.textures = TextureManager(self.screen)
        self.map = TileMap(self.textures)
        self.images = {name: self.textures.load_texture(path) for name, path in _IMAGE_FILES.items()}

        self.attack_sound = self._load_sound("assets/attack_sound.mp3")
        self.win_sound = self._load_sound("assets/win_sound.mp3")
        self.lose_sound = self._load_sound("assets/lose_sound.mp3")
        try:
            pygame.mixer.music.load("assets/theme_sound.mp3")
            self._theme_loaded = True
        except (pygame.error, OSError) as exc:
            logger.error("Failed to load music: %s", exc)
            self._theme_loaded = False
        if self._theme_loaded and not pygame.mixer.music.get_busy():
            pygame.mixer.music.play(-1)

        self.intro_time = self.clock()

        self._spawn_player()
        for x, y in STAGE_ONE_ENEMIES:
            self._spawn_enemy(x, y, 1.5, 100, "enemy", False)

        self.items.append(
            Item(self.images.get("sword"), Vector2D(*SWORD_POSITION), ITEM_SIZE, ITEM_SIZE, ItemType.SWORD)
        )

    def _open_window(self, title: str, flags: int) -> bool:
        try:
            self.screen = pygame.display.set_mode(WINDOW_SIZE, flags)
        except pygame.error as exc:
            logger.error("Failed to create window: %s", exc)
            self.is_running = False
            return False
        pygame.display.set_caption(title)
        logger.info("Window created!")
        self.screen.fill((0, 0, 0))
        if self.textures is not None:
            self.textures.screen = self.screen
        return True

    @staticmethod
    def _load_sound(path: str) -> pygame.mixer.Sound | None:
        try:
            return pygame.mixer.Sound(path)
        except (pygame.error, OSError) as exc:
            logger.error("Failed to load sound %s: %s", path, exc)
            return None

    def _play(self, sound: pygame.mixer.Sound | None) -> None:
        if sound is None:
            return
        if sound.play() is None:
            logger.warning("Failed to play sound!")

    def _spawn_player(self) -> None:
        player = self.player
        player.add_component(TransformComponent(*PLAYER_START, 32, 32, 1.5))
        player.add_component(
            SpriteComponent(
                self.textures,
                "assets/player.png",
                "assets/player_walk.png",
                "assets/player_attack.png",
                True,
                self.clock,
            )
        )
        player.add_component(KeyboardController(lambda: self.key_state()))
        player.add_component(HealthComponent(100))

    def _spawn_enemy(self, x, y, scale, hp, prefix, boss) -> Entity:
        enemy = self.manager.add_entity()
        enemy.add_component(TransformComponent(x, y, 32, 32, scale))
        enemy.add_component(
            SpriteComponent(
                self.textures,
                f"assets/{prefix}.png",
                f"assets/{prefix}_walk.png",
                f"assets/{prefix}_attack.png",
                True,
                self.clock,
            )
        )
        enemy.add_component(HealthComponent(hp))
        enemy.add_component(
            EnemyAIComponent(
                self.player.get_component(TransformComponent), self.map, boss, self.attack_sound
            )
        )
        self.enemies.append(enemy)
        return enemy

    # input ------------------------------------------------------------

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
                break
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.handle_click(*event.pos)

    def handle_click(self, x, y) -> None:
        """React to a left click on the play, quit or sound button."""
        if _inside(PLAY_BUTTON, x, y):
            self.intro_started = True
            self.intro_start_time = self.clock()
        if _inside(QUIT_BUTTON, x, y):
            self.is_running = False
        if _inside(SOUND_BUTTON, x, y):
            self.is_music_on = not self.is_music_on
            if not pygame.mixer.get_init():
                return
            busy = pygame.mixer.music.get_busy()
            if self.is_music_on and self._theme_loaded and not busy:
                pygame.mixer.music.play(-1)
            elif not self.is_music_on and busy:
                pygame.mixer.music.stop()

    # simulation -------------------------------------------------------

    def update(self) -> None:
        now = self.clock()
        if self.state is GameState.INTRO:
            if self.intro_started and now - self.intro_start_time >= INTRO_DURATION:
                self.state = GameState.STAGE1
                self.stage_time = now
                self.intro_started = False
            return

        if self.state is GameState.STAGE1:
            if now - self.stage_time >= STAGE_DURATION:
                self.state = GameState.PLAYING
            return

        if self.state is GameState.STAGE2:
            if now - self.stage_time >= STAGE_DURATION:
                self._start_stage_two()
            return

        if self.state not in (GameState.PLAYING, GameState.PLAYING_STAGE2):
            if now - self.game_over_time >= DISPLAY_DURATION:
                self.is_running = False
            return

        self._update_playing()

    def _start_stage_two(self) -> None:
        self.state = GameState.PLAYING_STAGE2
        self.map = TileMap(self.textures, True)
        self.enemies.clear()
        for entity in self.manager.entities:
            if entity.has_component(EnemyAIComponent):
                entity.destroy()
        self.manager.refresh()

        transform = self.player.get_component(TransformComponent)
        health = self.player.get_component(HealthComponent)
        transform.position = Vector2D(*PLAYER_START)
        transform.init()
        health.init()

        for x, y in STAGE_TWO_ENEMIES:
            self._spawn_enemy(x, y, 1.5, 100, "enemy", False)
        self._spawn_enemy(*BOSS_POSITION, 2.5, 300, "boss", True)

    def _corner_tiles(self, position: Vector2D, width: int, height: int) -> list[Tile]:
        corners = (
            position,
            position + Vector2D(width - 1, 0),
            position + Vector2D(0, height - 1),
            position + Vector2D(width - 1, height - 1),
        )
        return [self.map.tile_at(int(c.x), int(c.y)) for c in corners]

    def _update_playing(self) -> None:
        transform = self.player.get_component(TransformComponent)
        health = self.player.get_component(HealthComponent)
        sprite = self.player.get_component(SpriteComponent)

        old_position = Vector2D(transform.position.x, transform.position.y)
        self.manager.update()
        new_position = old_position + transform.velocity * transform.current_speed

        pw, ph = transform.width, transform.height
        tiles = self._corner_tiles(new_position, pw, ph)
        if Tile.WATER in tiles:
            transform.position = old_position
        else:
            transform.position = new_position
            if Tile.GRASS in tiles:
                transform.set_speed(transform.base_speed / 2)
            else:
                transform.reset_speed()

        player_rect = pygame.Rect(int(transform.position.x), int(transform.position.y), pw, ph)
        for item in self.items:
            if not item.active or not player_rect.colliderect(item.rect):
                continue
            if item.kind is ItemType.HP:
                health.take_damage(-HP_PICKUP)
                logger.info("Picked up HP! Health: %d", health.health)
                item.active = False
            elif item.kind is ItemType.SWORD and not self.has_sword:
                self.has_sword = True
                logger.info("Picked up Sword! Damage doubled.")
                sprite.update_textures(
                    "assets/sword_idle.png", "assets/sword_walk.png", "assets/sword_attack.png"
                )
                item.active = False
        self.items = [item for item in self.items if item.active]

        if self.key_state()[pygame.K_SPACE]:
            self._player_attack(transform)

        if health.is_dead():
            self.player.destroy()
            logger.info("Player died! Game over!")
            self.state = GameState.LOSE
            self.game_over_time = self.clock()
            self.show_game_over_screen()

        alive = sum(
            1 for e in self.manager.entities if e.active and e.has_component(EnemyAIComponent)
        )
        logger.debug("Enemies alive: %d", alive)
        if alive == 0:
            if self.state is GameState.PLAYING:
                logger.info("All enemies defeated! Proceed to Stage 2!")
                self.state = GameState.STAGE2
                self.stage_time = self.clock()
            elif self.state is GameState.PLAYING_STAGE2:
                logger.info("All enemies and boss defeated! You Win!")
                self.state = GameState.WIN
                self.game_over_time = self.clock()
                self.show_game_over_screen()

        self.manager.refresh()

    def _player_attack(self, player_transform: TransformComponent) -> None:
        damage = 20 if self.has_sword else 10
        for enemy in self.enemies:
            if not enemy.active:
                continue
            enemy_transform = enemy.get_component(TransformComponent)
            distance = (enemy_transform.position - player_transform.position).magnitude()
            if distance >= PLAYER_ATTACK_RANGE:
                continue
            enemy_health = enemy.get_component(HealthComponent)
            enemy.get_component(SpriteComponent).play_attack()
            enemy_health.take_damage(damage)
            self._play(self.attack_sound)
            if enemy_health.is_dead():
                self.items.append(
                    Item(
                        self.images.get("hp"),
                        Vector2D(enemy_transform.position.x, enemy_transform.position.y),
                        ITEM_SIZE,
                        ITEM_SIZE,
                        ItemType.HP,
                    )
                )
                enemy.destroy()
                logger.info("Enemy destroyed! Dropped HP.")

    def show_game_over_screen(self) -> None:
        """Reopen the window titled with the outcome and play its sound."""
        if pygame.mixer.get_init() and pygame.mixer.music.get_busy():
            pygame.mixer.music.stop()

        for name in ("intro", "intro2", "stage1", "stage2", "win", "lose", "hp", "sword"):
            self.images[name] = None

        title = "You Win!" if self.state is GameState.WIN else "You Lose!"
        os.environ["SDL_VIDEO_CENTERED"] = "1"
        if not self._open_window(title, 0):
            return

        if self.textures is None:
            self.textures = TextureManager(self.screen)
        for name in ("stage1", "stage2", "win", "lose"):
            self.images[name] = self.textures.load_texture(_IMAGE_FILES[name])

        if self.state is GameState.WIN:
            self._play(self.win_sound)
        elif self.state is GameState.LOSE:
            self._play(self.lose_sound)

    # drawing ----------------------------------------------------------

    def render(self) -> None:
        if self.screen is None or self.textures is None:
            return
        self.screen.fill((0, 0, 0))
        full = (0, 0, *WINDOW_SIZE)
        draw = self.textures.draw

        if self.state is GameState.INTRO:
            if not self.intro_started and self.images.get("intro") is not None:
                draw(self.images["intro"], full, full)
                draw(self.images.get("play"), (0, 0, PLAY_BUTTON.w, PLAY_BUTTON.h), PLAY_BUTTON)
                draw(self.images.get("quit"), (0, 0, QUIT_BUTTON.w, QUIT_BUTTON.h), QUIT_BUTTON)
                draw(self.images.get("sound"), (0, 0, SOUND_BUTTON.w, SOUND_BUTTON.h), SOUND_BUTTON)
            elif self.intro_started and self.images.get("intro2") is not None:
                draw(self.images["intro2"], full, full)
        else:
            backdrop_name = {
                GameState.STAGE1: "stage1",
                GameState.STAGE2: "stage2",
                GameState.WIN: "win",
                GameState.LOSE: "lose",
            }.get(self.state)
            backdrop = self.images.get(backdrop_name) if backdrop_name else None
            if backdrop is not None:
                draw(backdrop, full, full)
            else:
                self._draw_world()

        pygame.display.flip()

    def _draw_world(self) -> None:
        self.map.draw()
        self.manager.draw()
        for entity in self.manager.entities:
            if entity.active and entity.has_component(HealthComponent):
                entity.get_component(HealthComponent).draw()
        for item in self.items:
            if item.active:
                self.textures.draw(item.texture, (0, 0, item.width, item.height), item.rect)

    # teardown ---------------------------------------------------------

    def clean(self) -> None:
        """Release audio and the window."""
        self.attack_sound = self.win_sound = self.lose_sound = None
        self.images.clear()
        if pygame.mixer.get_init():
            pygame.mixer.music.stop()
            pygame.mixer.quit()
        pygame.quit()
        self.screen = None
        logger.info("Game cleaned!")

    def running(self) -> bool:
        return self.is_running