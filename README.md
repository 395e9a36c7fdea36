# deathstar

A two-player shooter for the terminal. The screen is split in two: the left
half is the rebel pilot's stretch of the trench, the right half lies behind it
and belongs to the Imperial pilot. TIE fighters and bullets that leave one half
carry on into the other. The on-screen text is in Korean.

## Installing

```
pip install .
```

The game needs a terminal at least 160 columns wide and 50 rows tall.

## Playing

```
deathstar [--sound-dir DIR] [--mute] [--seed N]
```

- `--sound-dir DIR` – directory the sound files are read from (default: `sounds`)
- `--mute` – play without any sound
- `--seed N` – seed for the random number generator, for a repeatable game

The game opens with a title card, a logo and a scrolling story; a key pressed
while the story scrolls skips the rest of it. In the menu, use the up and down
arrow keys to move and the space bar to choose between the instructions and the
game. Any key leaves the instructions.

Player 1 (the X-wing, `>B<`):

- `w` `a` `s` `d` to steer; the ship keeps moving the last way it was told
- `v` to fire
- `c` to stop

Player 2 (the Imperial fighter, `<O>`):

- arrow keys to steer
- `n` to fire
- `m` to stop

The score rises by one each frame and by 50 for every TIE fighter the X-wing
hits. Every few frames pick-ups fall down each half of the screen. A cyan `@`
on the left repairs the X-wing by 2 (health starts at 20 and is capped at 30);
a red `@` on the right, when the Imperial pilot flies into it, sends a row of
TIE fighters across the rebel half. Shots from the Imperial fighter and from
TIE fighters each cost the X-wing one point of health.

The rebel pilot wins when the score reaches 5000. The Imperial pilot wins by
bringing the X-wing's health down to nothing first; the Imperial score shown at
the end is 5000 minus the rebel score. Press `Esc` on the result screen to
leave, or `Ctrl-C` at any time.

## Sound

Sound effects and music are played by the first of `ffplay`, `afplay`,
`paplay` or `aplay` found on `PATH`; without one the game runs silently. Files
are looked up by name in the sound directory: `xwing.wav`, `tie.wav`,
`r2d2.wav`, `r2d21.wav`, `standby.wav`, `explode.mp3`, `scream.wav`,
`saberon.wav`, `forcestrong1.wav`, `imperialtheme.wav`, `tieflyby.mp3`,
`endcredits.wav`, `usetheforce1.wav`, `yavin.wav`, `maintheme.wav` and
`ending1.wav`. A missing file is skipped.

A single file can be played on its own; the command waits one second and exits:

```
deathstar-sound path/to/sound.wav
```

## Using the pieces

- `deathstar.world.Game` holds one round: call `handle(Command...)` for key
  presses, `tick()` once per frame, and `drain_effects()` for the sounds the
  frame raised. `over`, `luke_win`, `vader_win`, `score` and `vader_score()`
  give the outcome.
- `deathstar.sound.EffectPlayer` plays effects (`play`) and background music
  (`play_music`, `stop_music`, `stop_all`) through an external player.
- `deathstar.screen.Screen` buffers positioned, coloured text for a `blessed`
  terminal.
- `deathstar.app.App` runs the screens; `App.run()` plays the whole show.

## What it does not do

- No sound files come with the package; put your own in the sound directory.
- There is no computer opponent: both ships are flown from the same keyboard.
- Scores are not kept between games.

## Running the tests

```
pip install .[test]
pytest
```