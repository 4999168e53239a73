#!/usr/bin/env python3
"""
EV3 speaker: tones through the sound event device, samples through pygame.
"""
import os
import struct
import time
from typing import Any, List, Optional, Tuple, Union

from .basic import BasicClass
from .errors import IOFailure

# linux/input-event-codes.h
EV_SND: int = 0x12
SND_TONE: int = 0x02

# struct input_event: struct timeval, __u16 type, __u16 code, __s32 value
INPUT_EVENT: struct.Struct = struct.Struct("llHHi")


def tone_event(freq: int, now: Optional[float] = None) -> bytes:
    """
    Encode a tone request as an input_event record.

    :param freq: Tone frequency in Hz, 0 to silence.
    """
    if now is None:
        now = time.time()
    sec = int(now)
    usec = int((now - sec) * 1_000_000)
    return INPUT_EVENT.pack(sec, usec, EV_SND, SND_TONE, int(freq))


class Speaker(BasicClass):
    """Play tones, notes and sound files on the EV3 speaker."""

    DEFAULT_PATH: str = "/dev/input/by-path/platform-snd-legoev3-event"

    WHOLE_NOTE: float = 1.0
    HALF_NOTE: float = 1/2
    QUARTER_NOTE: float = 1/4
    EIGHTH_NOTE: float = 1/8
    SIXTEENTH_NOTE: float = 1/16

    # A4
    NOTE_BASE_FREQ: float = 440.0
    NOTE_BASE_INDEX: int = 69

    # MIDI note names, index = MIDI note number
    NOTES: List[Optional[str]] = [None] * 21 + [
        f"{name}{octave}"
        for octave in range(0, 9)
        for name in ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
    ][9:97]

    def __init__(self, path: Optional[str] = None, *args: Any, **kwargs: Any) -> None:
        """
        Open the sound event device.

        :param path: Event device path.
        :raises IOFailure: If the device cannot be opened.
        """
        super().__init__(*args, **kwargs)
        self.path: str = path or self.DEFAULT_PATH
        try:
            self._fd: Optional[int] = os.open(self.path, os.O_WRONLY)
        except OSError as e:
            raise IOFailure(f"failed to open speaker {self.path}: {e}", self.path) from e
        self._mixer_ready: bool = False
        self.tempo(120.0, self.QUARTER_NOTE)

    def close(self) -> None:
        """Silence the speaker and close the device."""
        if self._fd is not None:
            try:
                self.tone(0)
            finally:
                os.close(self._fd)
                self._fd = None

    def __enter__(self) -> "Speaker":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def tone(self, freq: float) -> None:
        """
        Start a tone that plays until the next tone() call.

        :param freq: Frequency in Hz, 0 to stop.
        """
        if self._fd is None:
            raise ValueError(f"speaker {self.path} is closed")
        if freq < 0:
            raise ValueError(f"tone frequency must not be negative, not {freq}")
        try:
            os.write(self._fd, tone_event(round(freq)))
        except OSError as e:
            raise IOFailure(f"failed to write tone to {self.path}: {e}", self.path) from e
        self.logger.debug(f"Tone {freq}Hz")

    def play_tone_for(self, freq: float, duration: float) -> None:
        """
        Play a tone, blocking for its duration.

        :param freq: Frequency in Hz.
        :param duration: Duration in seconds.
        """
        self.tone(freq)
        try:
            time.sleep(duration)
        finally:
            self.tone(0)

    def beep(self) -> None:
        self.play_tone_for(1000, 0.1)

    def tempo(self, tempo: Optional[float] = None, note_value: Optional[float] = None) -> Tuple[float, float]:
        """
        Set or get tempo and beat unit.

        :param tempo: Beats per minute.
        :param note_value: Note value for one beat.
        :return: (tempo, note_value)
        """
        if tempo is None and note_value is None:
            return self._tempo
        if tempo is None or tempo <= 0:
            raise ValueError(f"tempo must be positive, not {tempo}")
        if note_value is None:
            note_value = self.QUARTER_NOTE
        self._tempo: Tuple[float, float] = (tempo, note_value)
        self.beat_unit: float = 60.0 / tempo
        self.logger.debug(f"Tempo set to: {self._tempo}, beat unit: {self.beat_unit}")
        return self._tempo

    def beat(self, beat: float) -> float:
        """
        Seconds taken by a note value at the current tempo.

        :param beat: Note value, e.g. QUARTER_NOTE.
        """
        return beat / self._tempo[1] * self.beat_unit

    def note(self, note: Union[str, int]) -> float:
        """
        Frequency of a note.

        :param note: Note name such as ``A4`` or ``C#5``, or MIDI number.
        :return: Frequency in Hz.
        """
        if isinstance(note, str):
            if note not in self.NOTES:
                raise ValueError(f"Note {note} not found")
            idx = self.NOTES.index(note)
        else:
            idx = note
        return self.NOTE_BASE_FREQ * (2 ** ((idx - self.NOTE_BASE_INDEX) / 12))

    def play_note(self, note: Union[str, int], beat: float = QUARTER_NOTE) -> None:
        """Play a note for a note value at the current tempo."""
        self.play_tone_for(self.note(note), self.beat(beat))

    def sound_play(self, filename: str, volume: Optional[float] = None) -> None:
        """
        Play a sound file through ALSA, blocking until it ends.

        :param filename: WAV or OGG file.
        :param volume: Volume (0-100).
        """
        import pygame

        if not self._mixer_ready:
            os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', "1")
            pygame.mixer.init()
            self._mixer_ready = True
        sound = pygame.mixer.Sound(filename)
        if volume is not None:
            sound.set_volume(max(0.0, min(100.0, volume)) / 100.0)
        length = sound.get_length()
        self.logger.debug(f"Playing {filename} for {length}s")
        sound.play()
        time.sleep(length)
