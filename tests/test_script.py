import random

import pytest

from deathstar.screen import Color
from deathstar.script import (
    CRAWL,
    LOGO,
    LOGO_BOTTOM,
    LOGO_LEFT,
    LOGO_RIGHT,
    LOGO_TOP,
    SpeechCue,
    crawl_rows,
    health_color,
    score_digits,
    speech_for,
    spiral_erase_order,
    starfield,
)
from deathstar.world import Effect


class _AlwaysOne:
    def randrange(self, stop):
        return 1


class _AlwaysZero:
    def randrange(self, stop):
        return 0


def test_first_speech_plays_standby_without_clearing():
    cue = speech_for(50)
    assert cue.effect is Effect.STANDBY
    assert cue.clear is False
    assert cue.text == "레드 전대장 가벤 드레이스 : 전 대원, S - foil 공격 상태로 고정하라."


@pytest.mark.parametrize("score", [0, 49, 51, 100, 1299, 5000])
def test_no_speech_between_marks(score):
    assert speech_for(score) is None


@pytest.mark.parametrize("score", [330, 360])
def test_imperial_lines_are_red(score):
    assert speech_for(score).color is Color.RED1


def test_r2_line_plays_r2_sound():
    cue = speech_for(270)
    assert cue.text == "R2D2 : 삐비비빅"
    assert cue.effect is Effect.R2


def test_force_cue_switches_music():
    cue = speech_for(1300)
    assert cue.effect is Effect.USE_THE_FORCE
    assert cue.music is Effect.ENDING
    assert cue.text == "오비완 케노비 : 포스를 사용하거라 루크"


def test_last_cue_only_clears_and_plays_ending():
    cue = speech_for(1800)
    assert cue == SpeechCue("", music=Effect.ENDING)


def test_score_digits_of_six_digit_number():
    assert score_digits(123456) == (1, 2, 3, 4, 5, 6)


@pytest.mark.parametrize("score", [0, 7, 50, 999, 5000, 654321])
def test_score_digits_read_back(score):
    digits = score_digits(score)
    assert len(digits) == 6
    assert int("".join(map(str, digits))) == score


def test_score_digits_keep_low_six_digits():
    assert score_digits(1000000 + 5000) == score_digits(5000)


@pytest.mark.parametrize(
    "life, color",
    [
        (31, Color.BLUE1),
        (30, Color.BLUE1),
        (29, Color.GREEN1),
        (20, Color.GREEN1),
        (19, Color.YELLOW1),
        (10, Color.YELLOW1),
        (9, Color.RED1),
        (1, Color.RED1),
    ],
)
def test_health_color_thresholds(life, color):
    assert health_color(life) is color


def test_starfield_with_every_roll_hitting_fills_grid():
    stars = starfield(_AlwaysOne(), 10, 5)
    assert len(stars) == 9 * 4
    assert set(stars) == {(x, y) for x in range(9) for y in range(4)}


def test_starfield_with_no_hits_is_empty():
    assert starfield(_AlwaysZero(), 160, 50) == []


def test_starfield_within_bounds_and_reproducible():
    first = starfield(random.Random(7), 160, 50)
    second = starfield(random.Random(7), 160, 50)
    assert first == second
    assert all(0 <= x < 159 and 0 <= y < 49 for x, y in first)


def test_crawl_starts_below_screen():
    assert crawl_rows(0, 50) == []


def test_crawl_first_line_enters_at_bottom():
    assert crawl_rows(1, 50) == [(49, CRAWL[0])]


def test_crawl_has_left_screen_after_full_scroll():
    assert crawl_rows(50 + len(CRAWL), 50) == []


def test_crawl_rows_are_consecutive_and_in_range():
    rows = crawl_rows(60, 50)
    ys = [y for y, _ in rows]
    assert ys == sorted(ys)
    assert all(0 <= y < 50 for y in ys)
    assert all(b - a == 1 for a, b in zip(ys, ys[1:]))


def test_crawl_title_is_shown_first_with_padding():
    (_, title), = crawl_rows(1, 50)
    assert title.strip() == "STAR WARS: The Death Star Mission"
    assert title.startswith(" ")


def test_spiral_two_by_two():
    assert spiral_erase_order(0, 0, 1, 1) == [(0, 0), (0, 1), (1, 1), (1, 0)]


def test_spiral_empty_rectangle():
    assert spiral_erase_order(5, 0, 4, 3) == []


def test_spiral_covers_logo_exactly():
    cells = spiral_erase_order(LOGO_LEFT, LOGO_TOP, LOGO_RIGHT, LOGO_BOTTOM)
    expected = {
        (x, y)
        for x in range(LOGO_LEFT, LOGO_RIGHT + 1)
        for y in range(LOGO_TOP, LOGO_BOTTOM + 1)
    }
    assert set(cells) == expected
    assert cells[0] == (LOGO_LEFT, LOGO_TOP)


def test_spiral_erases_every_drawn_logo_cell():
    erased = set(spiral_erase_order(LOGO_LEFT, LOGO_TOP, LOGO_RIGHT, LOGO_BOTTOM))
    drawn = {
        (LOGO_LEFT + x, LOGO_TOP + y)
        for y, row in enumerate(LOGO)
        for x in range(len(row))
    }
    assert drawn
    assert drawn <= erased