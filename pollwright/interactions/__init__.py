"""
Element, click and API interaction helpers built on the retry poller.
"""

from .api import ApiWaitHelper, ResponseNotReadyError, UnexpectedStatusError
from .base import ElementStateError, PageHelper
from .click import ClickHelper
from .wait import WaitHelper

__all__ = [
    "ApiWaitHelper",
    "ResponseNotReadyError",
    "UnexpectedStatusError",
    "ElementStateError",
    "PageHelper",
    "ClickHelper",
    "WaitHelper",
]
