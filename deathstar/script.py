"""Story text, dialogue cues and layout helpers for the screens."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

from deathstar.screen import Color
from deathstar.world import Effect

LONG_TIME = "오래 전 멀고 먼 은하계에서는..."

CRAWL_X = 36
CRAWL_WIDTH = 91

# Each block is (sentences, blank lines after the block); sentences inside a
# block are separated by a single blank line.
_CRAWL_BLOCKS = (
    (("STAR WARS: The Death Star Mission",), 2),
    (("스타워즈: 데스스타 미션",), 3),
    (
        (
            "사악한 시스의 군주 다스 시디어스의 계략으로",
            "제다이 기사 '아나킨 스카이워커' 가 어둠에 물들고",
            "제다이 기사단과 은하 공화국이 몰락한 이후",
            "평온했던 은하계는 다시 억압과 전쟁의 소용돌이에 휘말리게 되었다.",
            "그 암흑의 시대 속에서 은하 제국의 지배에 맞서 싸우는 반란 연합은",
            "'카시안 안도르' 와 '진 어소' 를 주축으로 구성된",
            "'로그원' 이라 불린 용감한 첩보원들의 희생으로",
            "제국의 기밀 정보가 저장된 스카리프 행성에서 은하 제국을 상대로 첫 승리를 거두고",
            "은하 제국이 비밀리에 개발 중인 행성 파괴 병기, '데스스타' 의",
            "설계도를 목숨을 걸고 탈취하는 데 성공했다.",
        ),
        2,
    ),
    (
        (
            "이 설계도에는 '진 어소' 의 아버지이자 데스스타를 설계한 과학자 '갤런 어소'가",
            "제국의 감시 속에서도 남몰래 심어놓은 치명적인 약점이 담겨 있었고",
            "반란 연합의 일원이자 얼데란 행성의 의원 '레아 공주' 는",
            "'데스스타' 의 치명적 약점을 담은 이 귀중한 설계도를",
            "반란 연합의 기지인 야빈 4 행성으로 운반하기 위해",
            "밀수꾼 '한 솔로' 와 '츄바카', 그리고",
            "클론 전쟁의 영웅, 제다이 기사 '오비완 케노비' 의 도움으로",
            "은하 제국의 추격을 피해 목숨을 건 탈출을 감행한다.",
        ),
        2,
    ),
    (
        (
            "한편, '다스 베이더' 가 '데스 스타'와 함께 군대를 이끌고 야빈 행성계를 향해 다가오는 가운데",
            "광활한 은하계의 변방, 타투인 행성의 평범한 소년 '루크 스카이워커' 는",
            "'오비완 케노비' 의 도움으로 포스라는 신비로운 힘에 눈을 뜨게 되고",
            "자신도 모르게 운명처럼 이 싸움에 발을 들이게 된다.",
            "그리고 그와 은하계의 운명을 바꿀 거대한 여정이 그의 앞에 펼쳐지게 되는데...",
        ),
        0,
    ),
)


def _display_width(text):
    return sum(
        2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text
    )


def _centred(text):
    return " " * max(0, (CRAWL_WIDTH - _display_width(text)) // 2) + text


def _build_crawl():
    lines = []
    for sentences, gap in _CRAWL_BLOCKS:
        for number, sentence in enumerate(sentences):
            if number:
                lines.append(" ")
            lines.append(_centred(sentence))
        lines.extend([" "] * gap)
    return tuple(lines)


CRAWL = _build_crawl()

LOGO_LEFT = 28
LOGO_TOP = 4
LOGO_RIGHT = LOGO_LEFT + 102
LOGO_BOTTOM = LOGO_TOP + 37

_LOGO_WIDTH = 100
_LOGO_HEIGHT = LOGO_BOTTOM - LOGO_TOP + 1
_SCALE_X = 4
_SCALE_Y = 2
_WORD_GAP = 4

_GLYPHS = {
    "S": (" ####", "#    ", "#    ", " ### ", "    #", "    #", "#### "),
    "T": ("#####", "  #  ", "  #  ", "  #  ", "  #  ", "  #  ", "  #  "),
    "A": (" ### ", "#   #", "#   #", "#####", "#   #", "#   #", "#   #"),
    "R": ("#### ", "#   #", "#   #", "#### ", "# #  ", "#  # ", "#   #"),
    "W": ("#   #", "#   #", "#   #", "# # #", "# # #", "## ##", "#   #"),
}


def _banner(word):
    rows = []
    for row in range(7):
        line = " ".join(_GLYPHS[letter][row] for letter in word)
        scaled = "".join(ch * _SCALE_X for ch in line)
        rows.extend([scaled] * _SCALE_Y)
    return rows


def _build_logo():
    art = _banner("STAR") + [""] * _WORD_GAP + _banner("WARS")
    top = (_LOGO_HEIGHT - len(art)) // 2
    art = [""] * top + art + [""] * (_LOGO_HEIGHT - top - len(art))
    ink = str.maketrans({"#": " ", " ": "@"})
    return tuple(line.center(_LOGO_WIDTH).translate(ink) for line in art)


LOGO = _build_logo()

SPEECH_X = 1
SPEECH_Y_OFFSET = 7

DIGIT_COLUMNS = (114, 122, 130, 138, 146, 154)

_CYLINDER_CELLS = 6
SCORE_CYLINDER = (
    " ___ ___" * _CYLINDER_CELLS,
    "|  _|_  " * _CYLINDER_CELLS + "|",
    *(("| |   | " * _CYLINDER_CELLS + "|",) * 3),
    "| |_ _| " * _CYLINDER_CELLS + "|",
    "|___|___" * _CYLINDER_CELLS + "|",
)


@dataclass(frozen=True)
class SpeechCue:
    """A line of radio chatter shown when the tick counter reaches a mark."""

    text: str
    color: Color = Color.CYAN1
    effect: Effect | None = None
    music: Effect | None = None
    clear: bool = True


_SPEECHES = {
    50: SpeechCue(
        "레드 전대장 가벤 드레이스 : 전 대원, S - foil 공격 상태로 고정하라.",
        effect=Effect.STANDBY,
        clear=False,
    ),
    80: SpeechCue("레드 텐 대기 중"),
    110: SpeechCue("레드 세븐 대기 중"),
    140: SpeechCue("레드 식스 대기 중"),
    170: SpeechCue("레드 나인 대기 중"),
    200: SpeechCue("레드 투 대기 중"),
    220: SpeechCue("레드 일레븐 대기 중"),
    250: SpeechCue("루크 스카이워커 : 레드 파이브 대기 중"),
    270: SpeechCue("R2D2 : 삐비비빅", effect=Effect.R2),
    290: SpeechCue("웨지 안틸레스 : 정말 거대하군!"),
    310: SpeechCue("루크 스카이워커 : 여기는 레드 파이브, 진입한다."),
    330: SpeechCue(
        "은하 제국 장교 : 총독님, 반란군 기지가 7분 후 사정권에 들어옵니다.",
        color=Color.RED1,
    ),
    360: SpeechCue("월허프 타킨 총독 : 준비가 되면 발사하게", color=Color.RED1),
    500: SpeechCue(
        "다스 베이더 : 이 자에게는 강한 포스가 느껴지는군",
        effect=Effect.FORCE_STRONG,
    ),
    1300: SpeechCue(
        "오비완 케노비 : 포스를 사용하거라 루크",
        effect=Effect.USE_THE_FORCE,
        music=Effect.ENDING,
    ),
    1800: SpeechCue("", music=Effect.ENDING),
}


def speech_for(score):
    """Return the cue for this tick count, or None when nothing is said."""
    return _SPEECHES.get(score)


def score_digits(score):
    """Return the six digits shown on the score counter, most significant first."""
    return tuple((score // 10**power) % 10 for power in range(5, -1, -1))


def health_color(life):
    """Colour of Luke's health bar for the given life."""
    if life >= 30:
        return Color.BLUE1
    if life >= 20:
        return Color.GREEN1
    if life >= 10:
        return Color.YELLOW1
    return Color.RED1


def starfield(rng, width, height):
    """Return star positions: each cell short of the last row and column has a 1 in 100 chance."""
    return [
        (x, y)
        for x in range(width - 1)
        for y in range(height - 1)
        if rng.randrange(100) == 1
    ]


def crawl_rows(offset, height):
    """Return (row, line) pairs of the crawl visible after scrolling by offset."""
    rows = []
    for index, line in enumerate(CRAWL):
        y = height - offset + index
        if 0 <= y < height:
            rows.append((y, line))
    return rows


def spiral_erase_order(left, top, right, bottom):
    """Return the cells, in order, that wipe a rectangle from its edges inwards."""
    cells = []
    while left <= right and top <= bottom:
        cells.extend((left, y) for y in range(top, bottom + 1))
        left += 1
        cells.extend((x, bottom) for x in range(left, right + 1))
        bottom -= 1
        cells.extend((right, y) for y in range(bottom, top - 1, -1))
        right -= 1
        cells.extend((x, top) for x in range(right, left - 1, -1))
        top += 1
    return cells