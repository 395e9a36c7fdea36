"""Terminal front end: opening crawl, menu, the battle itself and the result screen."""

from __future__ import annotations

import argparse
import random
import time

from deathstar.screen import Color, Screen
from deathstar.script import (
    CRAWL,
    CRAWL_X,
    DIGIT_COLUMNS,
    LOGO,
    LOGO_BOTTOM,
    LOGO_LEFT,
    LOGO_RIGHT,
    LOGO_TOP,
    LONG_TIME,
    SCORE_CYLINDER,
    SPEECH_X,
    SPEECH_Y_OFFSET,
    crawl_rows,
    health_color,
    score_digits,
    speech_for,
    spiral_erase_order,
    starfield,
)
from deathstar.sound import EffectPlayer, find_player_command
from deathstar.world import (
    HEIGHT,
    LUKE_WIN_SCORE,
    P1_X_MAX,
    P2_X_MIN,
    PLAY_AREA_Y,
    WIDTH,
    Command,
    Effect,
    Game,
    Owner,
)

CREDIT = 'inspired by "STAR WARS" by George Lucas'
TITLE_KO = "스타워즈 : 데스스타 미션"
TITLE_EN = "STAR WARS : THE DEATH STAR MISSION"
MENU_HOW_TO = "게임 방법"
MENU_START = "게임 시작"
MENU_HINT = "위/아래 방향 키로 이동, 스페이스 바로 선택"
HOW_TO_EXIT = "아무 키나 눌러 메뉴로 돌아갑니다."
HEALTH_LABEL = "루크 체력"
SCORE_LABEL = "현재 점수"
EMPIRE_WINS = "은하 제국 승리"
REBELS_WIN = "반란 연합 승리"
EMPIRE_LINE = "월허프 타킨 총독 : 훌륭하네 베이더 경, 반란 세력은 성공적으로 진압되었네."
REBEL_LINE = "장 도돈나 장군 : 목표 파괴 완료. 훌륭한 임무였다 레드 파이브. 포스가 함께하길."
ESC_HINT = "ESC로 나가기"

XWING = ">B<"
VADER = "<O>"
TIE = "|O|"

ESC = "\x1b"
SPEECH_BLANK = " " * 73
MENU_PADDING = 30
HOW_TO_PADDING = 13

_CHAR_COMMANDS = {
    "w": Command.P1_UP,
    "s": Command.P1_DOWN,
    "a": Command.P1_LEFT,
    "d": Command.P1_RIGHT,
    "c": Command.P1_STOP,
    "v": Command.P1_SHOOT,
    "m": Command.P2_STOP,
    "n": Command.P2_SHOOT,
}
_KEY_COMMANDS = {
    "KEY_UP": Command.P2_UP,
    "KEY_DOWN": Command.P2_DOWN,
    "KEY_LEFT": Command.P2_LEFT,
    "KEY_RIGHT": Command.P2_RIGHT,
}

# (row, [(colour, text), ...]) for the instructions screen.
_HOW_TO = (
    (5, [(Color.YELLOW1, TITLE_KO)]),
    (7, [(Color.CYAN1, "> 두 명의 플레이어가 한 맵에서 서로 경쟁하는 슈팅 게임입니다. "
                       "한 맵이 좌우로 분할되어 '왼쪽' 화면이 '오른쪽' 화면보다 더 앞선 위치입니다.")]),
    (9, [(Color.GRAY1, XWING), (Color.RED1, " - - - - - -")]),
    (11, [(Color.CYAN1, "> 플레이어 1 ( 루크 스카이워커 ) : 'WASD' 로 이동합니다. "
                        "'V' 키를 이용하여 공격, 'C' 키를 이용하여 제자리에 멈춥니다.")]),
    (13, [(Color.GRAY1, VADER), (Color.GREEN1, " - - - - - -")]),
    (15, [(Color.CYAN1, "> 플레이어 2 ( 다스 베이더 ) : '방향키' 로 이동합니다. "
                        "'N' 키를 이용하여 공격, 'M' 키를 이용하여 제자리에 멈춥니다.")]),
    (17, [(Color.GRAY1, TIE), (Color.GREEN1, " - - - - - -")]),
    (19, [(Color.CYAN1, "> 적 ( 타이 파이터 ) : 일정 확률로 루크 스카이워커 앞에 나타납니다. "
                        "루크 스카이워커에게 공격을 발사합니다.")]),
    (21, [(Color.CYAN2, "@")]),
    (23, [(Color.CYAN1, "> 체력 회복 아이템 : 루크 스카이워커의 앞에 나타납니다. "
                        "획득 시 루크 스카이워커의 체력을 일정량 회복합니다.")]),
    (25, [(Color.RED1, "@")]),
    (27, [(Color.CYAN1, "> 적 출격 아이템 : 다스 베이더의 앞에 나타납니다. "
                        "획득 시 맵 전체에 타이파이터를 출격시킵니다.")]),
    (29, [(Color.GRAY1, "게임 종료 조건")]),
    (31, [(Color.CYAN1, "> 플레이어 1 게임 승리 조건 : 루크 스카이워커는 최대한 오래 살아남아 "
                        f"{LUKE_WIN_SCORE} 점에 도달한 경우 승리로 간주됩니다.")]),
    (33, [(Color.CYAN1, "> 플레이어 2 게임 승리 조건 : 다스 베이더는 공격을 발사하여 "
                        "제한 시간 내에 루크 스카이워커를 처치한 경우 승리로 간주됩니다.")]),
)


def _command_for(key):
    name = getattr(key, "name", None)
    if name in _KEY_COMMANDS:
        return _KEY_COMMANDS[name]
    return _CHAR_COMMANDS.get(str(key))


def _is_escape(key):
    return str(key) == ESC or getattr(key, "name", None) == "KEY_ESCAPE"


class App:
    """Runs the screens of the game on one terminal."""

    def __init__(self, terminal, sound=None, rng=None):
        self.terminal = terminal
        self.sound = sound
        self.rng = rng if rng is not None else random.Random()
        self.screen = Screen(terminal, getattr(terminal, "stream", None))
        self.sleep = time.sleep

    def _effect(self, effect):
        if self.sound is not None:
            self.sound.play(effect)

    def _music(self, effect, loop=False):
        if self.sound is not None:
            self.sound.play_music(effect, loop)

    def _stop_music(self):
        if self.sound is not None:
            self.sound.stop_music()

    def _key(self):
        key = self.terminal.inkey(timeout=0)
        return key if key else None

    def _stars(self):
        for x, y in starfield(self.rng, WIDTH, HEIGHT):
            self.screen.write(x, y, "*", Color.YELLOW1, Color.BLACK)

    def opening_crawl(self):
        """Show the intro, the logo and the scrolling story; return True if a key skipped it."""
        screen = self.screen
        screen.write(67, 24, LONG_TIME, Color.CYAN1, Color.BLACK)
        screen.write(120, 48, CREDIT)
        screen.flush()
        self.sleep(5)

        screen.clear()
        self._music(Effect.MAIN_THEME, True)
        self._stars()
        for row, line in enumerate(LOGO):
            screen.write(LOGO_LEFT, LOGO_TOP + row, line, Color.YELLOW1, Color.BLACK)
        screen.flush()
        self.sleep(3)

        for count, (x, y) in enumerate(
            spiral_erase_order(LOGO_LEFT, LOGO_TOP, LOGO_RIGHT, LOGO_BOTTOM), start=1
        ):
            screen.write(x, y, " ")
            if count % 20 == 0:
                screen.flush()
                self.sleep(0.005)
        screen.clear()
        screen.flush()

        skipped = False
        for offset in range(HEIGHT + len(CRAWL)):
            screen.clear()
            self._stars()
            for y, line in crawl_rows(offset, HEIGHT):
                screen.write(CRAWL_X, y, line, Color.YELLOW1, Color.BLACK)
            screen.flush()
            self.sleep(0.63 if offset <= 70 else 0.1)
            if self._key() is not None:
                skipped = True
                break

        screen.clear()
        screen.flush()
        return skipped

    def main_menu(self):
        """Let the players pick instructions or the start of the game."""
        screen = self.screen
        pad = MENU_PADDING
        selected = False
        while True:
            screen.clear()
            screen.write(pad, 6, "┌" + "─" * 35 + "┐", Color.CYAN1, Color.BLACK)
            screen.write(pad, 7, "│" + " " * 35 + "│")
            screen.write(pad, 8, "└" + "─" * 35 + "┘")
            screen.write(pad + 2, 7, TITLE_EN)
            self._stars()
            screen.write(120, 48, CREDIT, Color.CYAN1, Color.BLACK)
            screen.write(pad + 1, 10, TITLE_KO)
            screen.write(pad, 15, MENU_HOW_TO)
            screen.write(pad, 20, MENU_START)
            screen.write(pad, 40, MENU_HINT)
            screen.write(pad - 2, 15, " " if selected else ">")
            screen.write(pad - 2, 20, ">" if selected else " ")
            screen.flush()

            key = self._key()
            name = getattr(key, "name", None)
            if name == "KEY_UP" and selected:
                self._effect(Effect.R2)
                selected = False
            elif name == "KEY_DOWN" and not selected:
                self._effect(Effect.R2)
                selected = True

            if key is not None and str(key) == " ":
                if selected:
                    self._effect(Effect.SABER_ON)
                    screen.clear()
                    screen.flush()
                    return
                self._effect(Effect.R2_ALT)
                self.how_to()

            self.sleep(0.3)

    def how_to(self):
        """Show the instructions until a key is pressed."""
        screen = self.screen
        pad = HOW_TO_PADDING
        screen.clear()
        while True:
            screen.clear()
            self._stars()
            for row, segments in _HOW_TO:
                screen.move(pad, row)
                x = pad
                for color, text in segments:
                    screen.write(x, row, text, color, Color.BLACK)
                    x += len(text)
            screen.write(WIDTH - 50, HEIGHT - 5, HOW_TO_EXIT, Color.CYAN1, Color.BLACK)
            screen.flush()

            if self._key() is not None:
                self._effect(Effect.R2_ALT)
                return
            self.sleep(0.15)

    def _draw_arena(self):
        screen = self.screen
        blank_row = " " * (WIDTH + 1)
        for y in range(PLAY_AREA_Y + 1):
            screen.write(0, y, blank_row, Color.GRAY1, Color.GRAY1)
        for x in range(P1_X_MAX + 1, P2_X_MIN):
            for y in range(PLAY_AREA_Y + 2):
                screen.write(x, y, "■", Color.GRAY2, Color.GRAY1)
        screen.write(0, PLAY_AREA_Y + 1, "■" * (WIDTH - 1), Color.GRAY2, Color.GRAY1)

    def _sprites(self, game):
        yield game.luke_x - 1, game.luke_y, XWING, Color.BLACK
        yield game.vader_x - 1, game.vader_y, VADER, Color.BLACK
        for tie in game.ties:
            yield tie.x - 1, tie.y, TIE, Color.BLACK
        for bullet in game.bullets:
            color = Color.RED1 if bullet.owner is Owner.LUKE else Color.GREEN1
            yield bullet.x, bullet.y, "|", color
        for item in game.heal_items:
            yield item.x, item.y, "@", Color.CYAN1
        for item in game.enemy_items:
            yield item.x, item.y, "@", Color.RED1

    def _draw_frame(self, game, drawn):
        screen = self.screen
        for (x, y), width in drawn.items():
            screen.write(x, y, " " * width, Color.BLACK, Color.GRAY1)
        shown = {}
        for x, y, text, color in self._sprites(game):
            if x < 0 or y < 0:
                continue
            screen.write(x, y, text, color, Color.GRAY1)
            shown[(x, y)] = len(text)
        return shown

    def _draw_status(self, game):
        screen = self.screen
        row = PLAY_AREA_Y + 3
        screen.write(1, row, HEALTH_LABEL, Color.GRAY1, Color.BLACK)
        screen.write(12, row, " " * (WIDTH - 12))
        if game.luke_life > 0:
            color = health_color(game.luke_life)
            screen.write(12, row, "■" * game.luke_life, color, color)

        for index, line in enumerate(SCORE_CYLINDER):
            screen.write(110, PLAY_AREA_Y + 2 + index, line, Color.GRAY1, Color.BLACK)
        screen.write(130, PLAY_AREA_Y + 9, SCORE_LABEL, Color.CYAN1, Color.BLACK)
        for column, digit in zip(DIGIT_COLUMNS, score_digits(game.score)):
            screen.write(column, PLAY_AREA_Y + 5, str(digit))

    def _speak(self, ticks):
        cue = speech_for(ticks)
        if cue is None:
            return
        y = PLAY_AREA_Y + SPEECH_Y_OFFSET
        if cue.clear:
            self.screen.write(SPEECH_X, y, SPEECH_BLANK, Color.BLACK, Color.BLACK)
        if cue.music is not None and cue.effect is not None:
            self._stop_music()
        if cue.text:
            self.screen.write(SPEECH_X, y, cue.text, cue.color, Color.BLACK)
        if cue.effect is not None:
            self._effect(cue.effect)
        if cue.music is not None:
            self._music(cue.music)

    def play(self):
        """Run one round until somebody wins; return the finished game."""
        game = Game(self.rng)
        self._music(Effect.YAVIN, True)
        self._draw_arena()
        drawn = self._draw_frame(game, {})
        self.screen.flush()

        while not game.over:
            key = self._key()
            if key is not None:
                command = _command_for(key)
                if command is not None:
                    game.handle(command)
            game.tick()
            for effect in game.drain_effects():
                self._effect(effect)
            drawn = self._draw_frame(game, drawn)
            self._draw_status(game)
            self._speak(game.ticks)
            self.screen.flush()
            self.sleep(0.03)
        return game

    def result(self, game):
        """Show who won until ESC is pressed; return the banner that was shown."""
        screen = self.screen
        screen.clear()
        screen.flush()
        if self.sound is not None:
            self.sound.stop_all()

        if game.vader_win:
            banner, line, line_x, color, theme = (
                EMPIRE_WINS, EMPIRE_LINE, 47, Color.RED1, Effect.IMPERIAL_THEME
            )
        elif game.luke_win:
            banner, line, line_x, color, theme = (
                REBELS_WIN, REBEL_LINE, 45, Color.CYAN1, Effect.END_THEME
            )
        else:
            return None

        self._effect(theme)
        while True:
            screen.clear()
            self._stars()
            screen.write(line_x, 35, line, color, Color.BLACK)
            screen.write(75, 5, banner)
            screen.write(69, 11, f"루크 스카이워커 점수 : {game.score}")
            screen.write(72, 12, f"다스 베이더 점수 : {game.vader_score()}")
            screen.write(70, 22, 'inspired by "STAR WARS"')
            screen.write(70, 24, "written and directed by")
            screen.write(75, 25, "George Lucas")
            screen.write(145, 49, ESC_HINT)
            screen.flush()

            key = self._key()
            if key is not None and _is_escape(key):
                screen.clear()
                screen.flush()
                return banner
            self.sleep(0.5)

    def run(self):
        """Play the whole show from the opening crawl to the result; return the game."""
        with self.terminal.cbreak(), self.terminal.hidden_cursor():
            self.opening_crawl()
            self.main_menu()
            game = self.play()
            self.result(game)
        return game


def main(argv=None):
    """Start the game on the current terminal."""
    parser = argparse.ArgumentParser(
        prog="deathstar", description="Two-player Death Star trench battle."
    )
    parser.add_argument("--sound-dir", default="sounds", help="directory holding the sound files")
    parser.add_argument("--mute", action="store_true", help="play without sound")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    import blessed

    terminal = blessed.Terminal()
    sound = None if args.mute else EffectPlayer(args.sound_dir, find_player_command())
    app = App(terminal, sound, random.Random(args.seed))
    try:
        app.run()
    except KeyboardInterrupt:
        return 130
    finally:
        if sound is not None:
            sound.stop_all()
    return 0