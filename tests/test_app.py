import io
import random
from collections import deque
from contextlib import contextmanager

import pytest
from blessed.keyboard import Keystroke

from deathstar.app import EMPIRE_WINS, REBELS_WIN, App, main
from deathstar.script import CRAWL, LOGO, LONG_TIME
from deathstar.world import LUKE_WIN_SCORE, Effect, Game


def arrow(name):
    return Keystroke("\x1b[" + name[-1], code=300, name=name)


ESC_KEY = Keystroke("\x1b", code=361, name="KEY_ESCAPE")


class FakeTerminal:
    normal = "<n>"
    home = "<h>"
    clear = "<c>"

    def __init__(self, keys=(), default=""):
        self.keys = deque(keys)
        self.default = default
        self.stream = io.StringIO()

    def move_xy(self, x, y):
        return f"<{x},{y}>"

    def color(self, n):
        return f"<f{n}>"

    def on_color(self, n):
        return f"<b{n}>"

    def inkey(self, timeout=None):
        if self.keys:
            key = self.keys.popleft()
            return key if isinstance(key, Keystroke) else Keystroke(key)
        if isinstance(self.default, Keystroke):
            return self.default
        return Keystroke(self.default)

    @contextmanager
    def cbreak(self):
        yield

    @contextmanager
    def hidden_cursor(self):
        yield


class FakeSound:
    def __init__(self):
        self.calls = []

    def play(self, name):
        self.calls.append(("play", name))

    def play_music(self, name, loop=False):
        self.calls.append(("music", name, loop))

    def stop_music(self):
        self.calls.append(("stop_music",))

    def stop_all(self):
        self.calls.append(("stop_all",))
        return 0

    @property
    def effects(self):
        return [call[1] for call in self.calls if call[0] == "play"]

    @property
    def music(self):
        return [call[1:] for call in self.calls if call[0] == "music"]


def make_app(keys=(), default=""):
    terminal = FakeTerminal(keys, default)
    sound = FakeSound()
    app = App(terminal, sound, random.Random(7))
    sleeps = []
    app.sleep = sleeps.append
    return app, terminal, sound, sleeps


def test_opening_crawl_skipped_by_key():
    app, terminal, sound, sleeps = make_app(["x"])
    assert app.opening_crawl() is True
    out = terminal.stream.getvalue()
    assert "<67,24>" in out
    assert LONG_TIME in out
    assert LOGO[0] in out
    assert sound.music[0] == (Effect.MAIN_THEME, True)
    assert sleeps[0] == 5
    assert sleeps[1] == 3


def test_opening_crawl_runs_to_the_end_without_keys():
    app, terminal, _, _ = make_app()
    assert app.opening_crawl() is False
    out = terminal.stream.getvalue()
    assert CRAWL[0] in out
    assert CRAWL[-1] in out


def test_main_menu_start_game():
    app, terminal, sound, _ = make_app([arrow("KEY_DOWN"), " "])
    app.main_menu()
    assert sound.effects == [Effect.R2, Effect.SABER_ON]
    assert "STAR WARS : THE DEATH STAR MISSION" in terminal.stream.getvalue()


def test_main_menu_ignores_moves_past_the_ends():
    keys = [arrow("KEY_UP"), arrow("KEY_DOWN"), arrow("KEY_DOWN"), arrow("KEY_UP"), arrow("KEY_DOWN"), " "]
    app, _, sound, _ = make_app(keys)
    app.main_menu()
    assert sound.effects == [Effect.R2, Effect.R2, Effect.R2, Effect.SABER_ON]


def test_main_menu_opens_instructions():
    app, terminal, sound, _ = make_app([" ", "q", arrow("KEY_DOWN"), " "])
    app.main_menu()
    assert sound.effects == [Effect.R2_ALT, Effect.R2_ALT, Effect.R2, Effect.SABER_ON]
    out = terminal.stream.getvalue()
    assert "아무 키나 눌러 메뉴로 돌아갑니다." in out
    assert f"{LUKE_WIN_SCORE} 점에 도달한 경우" in out


def test_how_to_waits_for_a_key():
    app, _, sound, sleeps = make_app(["", "", "z"])
    app.how_to()
    assert sound.effects == [Effect.R2_ALT]
    assert sleeps == [0.15, 0.15]


def test_result_empire_wins():
    game = Game(random.Random(1))
    game.damage_luke(100)
    app, terminal, sound, _ = make_app(["q", ESC_KEY])
    assert app.result(game) == EMPIRE_WINS
    assert ("stop_all",) in sound.calls
    assert sound.effects == [Effect.IMPERIAL_THEME]
    out = terminal.stream.getvalue()
    assert f"다스 베이더 점수 : {LUKE_WIN_SCORE}" in out
    assert "루크 스카이워커 점수 : 0" in out


def test_result_rebels_win():
    game = Game(random.Random(1))
    game.score = LUKE_WIN_SCORE
    game.damage_vader(100)
    app, terminal, sound, _ = make_app([ESC_KEY])
    assert app.result(game) == REBELS_WIN
    assert sound.effects == [Effect.END_THEME]
    assert "다스 베이더 점수 : 0" in terminal.stream.getvalue()


def test_play_runs_until_the_round_is_over():
    app, terminal, sound, _ = make_app(["v"])
    game = app.play()
    assert game.over
    assert game.luke_win != game.vader_win
    assert sound.music[0] == (Effect.YAVIN, True)
    assert sound.effects[0] == Effect.XWING
    assert Effect.STANDBY in sound.effects
    out = terminal.stream.getvalue()
    assert "루크 체력" in out
    assert "레드 전대장 가벤 드레이스 : 전 대원, S - foil 공격 상태로 고정하라." in out


def test_run_goes_through_every_screen():
    app, _, sound, _ = make_app(["x", arrow("KEY_DOWN"), " "], default=ESC_KEY)
    game = app.run()
    assert game.over
    themes = [name for name, _ in sound.music]
    assert themes[:2] == [Effect.MAIN_THEME, Effect.YAVIN]
    final = sound.effects[-1]
    expected = Effect.IMPERIAL_THEME if game.vader_win else Effect.END_THEME
    assert final == expected


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--no-such-option"])
    assert info.value.code == 2