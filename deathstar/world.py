"""Game state and rules of the two-player Death Star battle."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum, auto

WIDTH = 160
HEIGHT = 50
P1_X_MIN = 0
P1_X_MAX = 78
P2_X_MIN = 81
P2_X_MAX = 159
PLAY_AREA_Y = 40

LUKE_WIN_SCORE = 5000
LUKE_START = (39, 30)
VADER_START = (120, 30)
LUKE_START_LIFE = 20
VADER_START_LIFE = 15
LUKE_MAX_LIFE = 30
HEAL_AMOUNT = 2
TIE_KILL_SCORE = 50

MAX_BULLETS = 100
MAX_TIES = 30
MAX_ITEMS = 30

SQUADRON_XS = tuple(range(7, 78, 5))
SQUADRON_Y = 5


class Owner(IntEnum):
    LUKE = 0
    VADER = 1
    TIE = 2


class Command(Enum):
    P1_UP = auto()
    P1_DOWN = auto()
    P1_LEFT = auto()
    P1_RIGHT = auto()
    P1_STOP = auto()
    P1_SHOOT = auto()
    P2_UP = auto()
    P2_DOWN = auto()
    P2_LEFT = auto()
    P2_RIGHT = auto()
    P2_STOP = auto()
    P2_SHOOT = auto()


class Effect(str, Enum):
    XWING = "xwing.wav"
    TIE = "tie.wav"
    R2 = "r2d2.wav"
    R2_ALT = "r2d21.wav"
    STANDBY = "standby.wav"
    EXPLODE = "explode.mp3"
    SCREAM = "scream.wav"
    SABER_ON = "saberon.wav"
    FORCE_STRONG = "forcestrong1.wav"
    IMPERIAL_THEME = "imperialtheme.wav"
    TIE_FLYBY = "tieflyby.mp3"
    END_THEME = "endcredits.wav"
    USE_THE_FORCE = "usetheforce1.wav"
    YAVIN = "yavin.wav"
    MAIN_THEME = "maintheme.wav"
    ENDING = "ending1.wav"


_STILL = (0, 0)

_MOVES = {
    Command.P1_UP: (Owner.LUKE, (0, -1)),
    Command.P1_DOWN: (Owner.LUKE, (0, 1)),
    Command.P1_LEFT: (Owner.LUKE, (-1, 0)),
    Command.P1_RIGHT: (Owner.LUKE, (1, 0)),
    Command.P2_UP: (Owner.VADER, (0, -1)),
    Command.P2_DOWN: (Owner.VADER, (0, 1)),
    Command.P2_LEFT: (Owner.VADER, (-1, 0)),
    Command.P2_RIGHT: (Owner.VADER, (1, 0)),
}
_STOPS = {Command.P1_STOP: Owner.LUKE, Command.P2_STOP: Owner.VADER}
_SHOOTS = {Command.P1_SHOOT: Owner.LUKE, Command.P2_SHOOT: Owner.VADER}


@dataclass
class Bullet:
    owner: Owner
    x: int
    y: int


@dataclass
class TieFighter:
    x: int
    y: int
    life: int = 1


@dataclass
class Item:
    x: int
    y: int
    heal: int = 0


def _near(ax, ay, bx, by):
    return by - 2 <= ay <= by + 2 and bx - 2 <= ax <= bx + 2


class Game:
    """One round: players, bullets, TIE fighters, items, score and outcome."""

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()
        self.luke_x, self.luke_y = LUKE_START
        self.vader_x, self.vader_y = VADER_START
        self.luke_life = LUKE_START_LIFE
        self.vader_life = VADER_START_LIFE
        self.luke_dead = False
        self.vader_dead = False
        self.luke_win = False
        self.vader_win = False
        self.score = 0
        self.ticks = 0
        self.bullets = []
        self.ties = []
        self.heal_items = []
        self.enemy_items = []
        self._effects = []
        self._directions = {Owner.LUKE: _STILL, Owner.VADER: _STILL}
        self._key_pressed = False
        self._key_moves = {}

    @property
    def over(self):
        return self.luke_dead or self.vader_dead

    def _emit(self, effect):
        self._effects.append(effect)

    def drain_effects(self):
        """Return the sound effects raised since the last call and forget them."""
        effects, self._effects = self._effects, []
        return effects

    def vader_score(self):
        return max(0, LUKE_WIN_SCORE - self.score)

    def handle(self, command):
        """Apply one key press for the coming tick."""
        self._key_pressed = True
        if command in _MOVES:
            owner, delta = _MOVES[command]
            self._key_moves[owner] = delta
            self._directions[owner] = delta
        elif command in _STOPS:
            self._directions[_STOPS[command]] = _STILL
        elif command in _SHOOTS:
            self.shoot_laser(_SHOOTS[command])
        else:
            raise ValueError(f"unknown command: {command!r}")

    def shoot_laser(self, owner):
        if owner not in (Owner.LUKE, Owner.VADER):
            raise ValueError(f"{owner!r} cannot shoot a laser")
        if len(self.bullets) >= MAX_BULLETS:
            return None
        if owner is Owner.LUKE:
            self._emit(Effect.XWING)
            bullet = Bullet(Owner.LUKE, self.luke_x, self.luke_y - 1)
            if bullet.x > P1_X_MAX:
                bullet.x = P1_X_MAX - 2
        else:
            self._emit(Effect.TIE)
            bullet = Bullet(Owner.VADER, self.vader_x, self.vader_y - 1)
            if bullet.x < P2_X_MIN:
                bullet.x = P2_X_MIN + 2
        self.bullets.append(bullet)
        return bullet

    def damage_luke(self, damage):
        self.luke_life = min(self.luke_life - damage, LUKE_MAX_LIFE)
        if self.luke_life <= 0:
            self.luke_dead = True
            self.vader_win = True

    def damage_vader(self, damage):
        self.vader_life -= damage
        if self.vader_life <= 0:
            self.vader_dead = True
            self.luke_win = True

    def enemy_shoot(self, tie):
        if len(self.bullets) >= MAX_BULLETS:
            return
        self._emit(Effect.TIE)
        self.bullets.append(Bullet(Owner.TIE, tie.x - 1, tie.y + 3))
        if len(self.bullets) < MAX_BULLETS:
            self.bullets.append(Bullet(Owner.TIE, tie.x + 1, tie.y + 3))

    def spawn_enemy(self, x=0, y=0):
        """Launch a TIE fighter; (0, 0) picks a random spot on Luke's side."""
        if len(self.ties) >= MAX_TIES:
            return None
        rand_x = self.rng.randrange(60) + 15
        rand_y = self.rng.randrange(5)
        if x == 0 and y == 0:
            x, y = rand_x, rand_y
        tie = TieFighter(x, y)
        self.ties.append(tie)
        self.enemy_shoot(tie)
        return tie

    def update_enemies(self):
        survivors = []
        for tie in self.ties:
            if tie.life <= 0:
                continue
            tie.y += 1
            if tie.x < 80 and tie.y >= PLAY_AREA_Y:
                tie.x += 80
                tie.y = 0
            if tie.x > 80 and tie.y >= PLAY_AREA_Y:
                continue
            survivors.append(tie)
        self.ties = survivors

    def update_bullets(self):
        survivors = []
        for bullet in self.bullets:
            alive = True
            bullet.y += 3 if bullet.owner is Owner.TIE else -2

            if bullet.owner is not Owner.LUKE and _near(
                bullet.x, bullet.y, self.luke_x, self.luke_y
            ):
                self._emit(Effect.EXPLODE)
                alive = False
                self.damage_luke(1)

            if bullet.owner is Owner.LUKE:
                for tie in self.ties:
                    if tie.y - 2 <= bullet.y <= tie.y and tie.x - 2 <= bullet.x <= tie.x + 2:
                        self._emit(Effect.SCREAM if self.rng.randrange(4) == 1 else Effect.EXPLODE)
                        self.score += TIE_KILL_SCORE
                        alive = False
                        tie.life -= 1

            if bullet.owner is Owner.VADER and bullet.y <= 0 and bullet.x > 80:
                bullet.x -= 81
                bullet.y = PLAY_AREA_Y - 1
            if bullet.owner is Owner.TIE and bullet.y >= PLAY_AREA_Y - 2 and bullet.x < 80:
                bullet.x += 81
                bullet.y = 0
            if bullet.x < WIDTH // 2 and bullet.y <= 1:
                alive = False
            if bullet.owner is Owner.TIE and bullet.x > WIDTH // 2 and bullet.y >= PLAY_AREA_Y - 2:
                alive = False

            if alive:
                survivors.append(bullet)
        self.bullets = survivors

    def spawn_heal_item(self):
        if len(self.heal_items) >= MAX_ITEMS:
            return None
        item = Item(self.rng.randrange(60) + 15, self.rng.randrange(3) + 1, HEAL_AMOUNT)
        self.heal_items.append(item)
        return item

    def update_heal_items(self):
        survivors = []
        for item in self.heal_items:
            item.y += 2
            alive = True
            if _near(item.x, item.y, self.luke_x, self.luke_y):
                self._emit(Effect.R2)
                alive = False
                self.damage_luke(-item.heal)
            if item.y <= 0 or item.y > PLAY_AREA_Y - 2:
                alive = False
            if alive:
                survivors.append(item)
        self.heal_items = survivors

    def spawn_enemy_item(self):
        if len(self.enemy_items) >= MAX_ITEMS:
            return None
        item = Item(self.rng.randrange(60) + 90, self.rng.randrange(3) + 1)
        self.enemy_items.append(item)
        return item

    def update_enemy_items(self):
        survivors = []
        for item in list(self.enemy_items):
            item.y += 2
            alive = True
            if _near(item.x, item.y, self.vader_x, self.vader_y):
                self._emit(Effect.TIE_FLYBY)
                for x in SQUADRON_XS:
                    self.spawn_enemy(x, SQUADRON_Y)
                alive = False
            if item.y <= 0 or item.y > PLAY_AREA_Y - 2:
                alive = False
            if alive:
                survivors.append(item)
        self.enemy_items = survivors

    def _move_players(self):
        if self._key_pressed:
            luke_delta = self._key_moves.get(Owner.LUKE, _STILL)
            vader_delta = self._key_moves.get(Owner.VADER, _STILL)
        else:
            luke_delta = self._directions[Owner.LUKE]
            vader_delta = self._directions[Owner.VADER]
        self._key_pressed = False
        self._key_moves.clear()

        x = self.luke_x + luke_delta[0]
        y = self.luke_y + luke_delta[1]
        if P1_X_MIN + 1 <= x <= P1_X_MAX - 1:
            self.luke_x = x
        if 0 <= y <= PLAY_AREA_Y - 2:
            self.luke_y = y

        x = self.vader_x + vader_delta[0]
        y = self.vader_y + vader_delta[1]
        if P2_X_MIN + 3 <= x <= P2_X_MAX - 1:
            self.vader_x = x
        if 0 <= y <= PLAY_AREA_Y - 2:
            self.vader_y = y

    def tick(self):
        """Advance the round by one frame; does nothing once it is over."""
        if self.over:
            return
        self._move_players()
        self.update_bullets()

        self.score += 1
        if self.score % 10 == 0:
            self.spawn_heal_item()
        if self.score % 15 == 0:
            self.spawn_enemy_item()
        if self.score % 100 == 0:
            for _ in range(6):
                self.spawn_enemy()

        self.update_enemies()
        self.update_heal_items()
        self.update_enemy_items()

        self.ticks += 1
        if self.score >= LUKE_WIN_SCORE:
            self.vader_dead = True
            self.luke_win = True