"""Sound effect and background music playback through an external audio player."""

from __future__ import annotations

import shutil
import subprocess
import sys
import threading
import time
from enum import Enum
from pathlib import Path

_CANDIDATES = (
    ("ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"),
    ("afplay",),
    ("paplay",),
    ("aplay", "-q"),
)

USAGE = "Usage: deathstar-sound <soundfile.wav>"


def find_player_command():
    """Return the command line of the first audio player found on PATH, or None."""
    for candidate in _CANDIDATES:
        if shutil.which(candidate[0]):
            return list(candidate)
    return None


def _file_name(name):
    return name.value if isinstance(name, Enum) else str(name)


class EffectPlayer:
    """Plays sound files from one directory, each in its own player process."""

    def __init__(self, sound_dir, command=None):
        self.sound_dir = Path(sound_dir)
        self.command = list(command) if command else None
        self.errors = []
        self._effects = []
        self._music = None
        self._music_stop = None
        self._lock = threading.Lock()

    def _spawn(self, name):
        if self.command is None:
            return None
        path = self.sound_dir / _file_name(name)
        if not path.is_file():
            self.errors.append(f"cannot open {path}")
            return None
        try:
            return subprocess.Popen(
                [*self.command, str(path)],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            self.errors.append(f"cannot play {path}: {exc}")
            return None

    def play(self, name):
        """Start a sound effect; return its process, or None if nothing plays."""
        process = self._spawn(name)
        if process is not None:
            self._effects = [p for p in self._effects if p.poll() is None]
            self._effects.append(process)
        return process

    def play_music(self, name, loop=False):
        """Replace the background music, optionally repeating it until stopped."""
        self.stop_music()
        process = self._spawn(name)
        if process is None:
            return None
        stop = threading.Event()
        with self._lock:
            self._music = process
            self._music_stop = stop
        if loop:
            worker = threading.Thread(
                target=self._keep_looping, args=(name, process, stop), daemon=True
            )
            worker.start()
        return process

    def _keep_looping(self, name, process, stop):
        while True:
            process.wait()
            if stop.is_set():
                return
            process = self._spawn(name)
            if process is None:
                return
            with self._lock:
                if stop.is_set():
                    process.terminate()
                    return
                self._music = process

    def stop_music(self):
        """Stop the background music if any is playing."""
        with self._lock:
            if self._music_stop is not None:
                self._music_stop.set()
            process, self._music, self._music_stop = self._music, None, None
        if process is not None and process.poll() is None:
            process.terminate()

    def stop_all(self):
        """Stop the music and every running effect; return how many effects were stopped."""
        self.stop_music()
        running = [p for p in self._effects if p.poll() is None]
        for process in running:
            process.terminate()
        self._effects = []
        return len(running)


def main(argv=None):
    """Play one sound file and wait a moment so it is not cut off."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print(USAGE, file=sys.stderr)
        return 1
    command = find_player_command()
    if command is not None:
        try:
            subprocess.Popen(
                [*command, args[0]],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            pass
    time.sleep(1.0)
    return 0