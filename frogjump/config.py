"""Game-wide identifiers, switches and easing curves."""

import math
from enum import IntEnum

DEBUG_STATE = True
ENABLE_SOUND = True
CAP_FPS = True

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720


class TextureID(IntEnum):
    """Identifiers of every texture the game can load."""

    NONE = 0
    NINJA_FROG_IDLE = 1
    NINJA_FROG_RUN = 2
    NINJA_FROG_FALLING = 3
    NINJA_FROG_JUMPING = 4
    NINJA_FROG_DOUBLE_JUMP = 5
    NINJA_FROG_HIT = 6
    NINJA_FROG_SLIDE = 7
    PLAYER_APPEARING = 8
    SLIME_IDLE = 9
    SLIME_HIT = 10
    ANGRYPIG_IDLE = 11
    ANGRYPIG_WALK = 12
    ANGRYPIG_RUNNING = 13
    ANGRYPIG_HIT1 = 14
    ANGRYPIG_HIT2 = 15
    TURTLE_IDLE1 = 16
    TURTLE_IDLE2 = 17
    TURTLE_SPIKES_IN = 18
    TURTLE_SPIKES_OUT = 19
    TURTLE_HIT = 20
    TERRAIN = 21
    SHADOW = 22
    APPLE = 23
    CHERRY = 24
    BANANA = 25
    KIWI = 26
    ORANGE = 27
    PINEAPPLE = 28
    STRAWBERRY = 29
    MELON = 30
    TRAMPOLINE = 31
    FAN = 32
    FIRE_HIT = 33
    FIRE_OFF = 34
    FIRE_ON = 35
    ARROW = 36
    ARROW_HIT = 37
    FALLING_PLATFORM_OFF = 38
    FALLING_PLATFORM_ON = 39
    DISAPPEARING_EFFECT = 40
    DUST_EFFECT = 41
    TRANSITION_EFFECT = 42
    BG_PINK = 43
    BG_BLUE = 44
    BG_GREEN = 45
    BG_GRAY = 46
    BG_BROWN = 47
    BG_PURPLE = 48
    BG_YELLOW = 49


class MapID(IntEnum):
    """Identifiers of the playable maps."""

    DEBUG = 0
    LEVEL_1 = 1


def ease_in_out_sine(t: float) -> float:
    """Sine ease that accelerates then decelerates."""
    return -(math.cos(math.pi * t) - 1.0) / 2.0


def ease_out_sine(t: float) -> float:
    """Sine ease that decelerates towards the end."""
    return math.sin(math.pi * t / 2.0)


def ease_in_expo(t: float) -> float:
    """Exponential ease that starts slowly."""
    return 0.0 if t == 0 else math.pow(2.0, 10.0 * (t - 1.0))