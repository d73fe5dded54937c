"""keyviz - light up a virtual keyboard as keys are pressed."""

import logging

from .classifier import ClassifiedEvent, ExitKey, classify
from .keyboard import KeyCode, KeyEvent, ModMask
from .layout import KeyRegion, build_layout
from .session import LogBuffer, LogEntry, SessionState

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'ClassifiedEvent',
    'ExitKey',
    'classify',
    'KeyCode',
    'KeyEvent',
    'ModMask',
    'KeyRegion',
    'build_layout',
    'LogBuffer',
    'LogEntry',
    'SessionState',
]
