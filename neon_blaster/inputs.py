"""
Input layer: keyboard (or touch) events become logical actions.

Event handlers only flip flags on an `InputState`; the simulation reads the
held flags and consumes the one-shot presses once per frame.
"""
from __future__ import annotations
from enum import Enum, auto
from typing import Dict, Set

import pygame


class Action(Enum):
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    FIRE = auto()
    PAUSE = auto()
    TOGGLE_MUTE = auto()


KEY_BINDINGS: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_a: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_d: Action.MOVE_RIGHT,
    pygame.K_SPACE: Action.FIRE,
    pygame.K_p: Action.PAUSE,
    pygame.K_ESCAPE: Action.PAUSE,
    pygame.K_m: Action.TOGGLE_MUTE,
}

# Actions acted on once per key press rather than while held
ONE_SHOT = {Action.PAUSE, Action.TOGGLE_MUTE}


class InputState:
    def __init__(self):
        self.held: Set[Action] = set()
        self.pressed: Set[Action] = set()

    def press(self, action: Action):
        if action in ONE_SHOT:
            self.pressed.add(action)
        else:
            self.held.add(action)

    def release(self, action: Action):
        self.held.discard(action)

    def is_held(self, action: Action) -> bool:
        return action in self.held

    def consume(self, action: Action) -> bool:
        """True once per press of a one-shot action."""
        if action in self.pressed:
            self.pressed.discard(action)
            return True
        return False

    def clear(self):
        self.held.clear()
        self.pressed.clear()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Apply a KEYDOWN/KEYUP event. Unmapped keys are ignored; returns True if mapped."""
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return False
        action = KEY_BINDINGS.get(event.key)
        if action is None:
            return False
        if event.type == pygame.KEYDOWN:
            self.press(action)
        else:
            self.release(action)
        return True
