"""
In-memory stand-ins for the page driver.

``FakePage.locator(selector)`` returns a ``FakeLocator`` whose state fields
accept either a value or a list of values consumed one per call (the last
value repeats), so a test can script "hidden, hidden, visible".
"""

from typing import Any, Callable, Dict, List, Optional


class DriverError(Exception):
    """Error raised by the fake driver, like an element-not-found."""


class _Script:
    def __init__(self, value: Any):
        self._values = list(value) if isinstance(value, list) else [value]

    def next(self) -> Any:
        if len(self._values) > 1:
            return self._values.pop(0)
        return self._values[0]


class FakeLocator:
    """Scripted element."""

    def __init__(
        self,
        selector: str,
        visible: Any = True,
        enabled: Any = True,
        text: Any = "",
        value: Any = "",
        count: Any = 1,
        attributes: Optional[Dict[str, Any]] = None,
        click_failures: int = 0,
        exists: bool = True,
    ):
        self.selector = selector
        self._visible = _Script(visible)
        self._enabled = _Script(enabled)
        self._text = _Script(text)
        self._count = _Script(count)
        self._attributes = {k: _Script(v) for k, v in (attributes or {}).items()}
        self.value = value
        self.click_failures = click_failures
        self.exists = exists
        self.calls: List[str] = []

    def _require(self) -> None:
        if not self.exists:
            raise DriverError(f"No element matches {self.selector}")

    async def is_visible(self) -> bool:
        self.calls.append("is_visible")
        if not self.exists:
            return False
        return self._visible.next()

    async def is_enabled(self) -> bool:
        self.calls.append("is_enabled")
        self._require()
        return self._enabled.next()

    async def inner_text(self) -> str:
        self.calls.append("inner_text")
        self._require()
        return self._text.next()

    async def count(self) -> int:
        self.calls.append("count")
        return self._count.next()

    async def get_attribute(self, name: str) -> Optional[str]:
        self.calls.append("get_attribute")
        self._require()
        script = self._attributes.get(name)
        return script.next() if script else None

    async def click(self, **options: Any) -> None:
        self.calls.append("click")
        self._require()
        if self.click_failures > 0:
            self.click_failures -= 1
            raise DriverError(f"Element {self.selector} is not clickable")

    async def fill(self, value: str) -> None:
        self.calls.append("fill")
        self._require()
        self.value = value

    async def input_value(self) -> str:
        self.calls.append("input_value")
        self._require()
        return self.value


class FakePage:
    """Page holding scripted locators; unknown selectors match nothing."""

    def __init__(self, url: Any = "about:blank"):
        self._locators: Dict[str, FakeLocator] = {}
        self._url = _Script(url)
        self.clicked: List[str] = []

    def add(self, selector: str, **state: Any) -> FakeLocator:
        locator = FakeLocator(selector, **state)
        self._locators[selector] = locator
        return locator

    def locator(self, selector: str) -> FakeLocator:
        if selector not in self._locators:
            self._locators[selector] = FakeLocator(selector, exists=False, count=0)
        return self._locators[selector]

    @property
    def url(self) -> str:
        return self._url.next()


class Flaky:
    """Async operation failing a fixed number of times before succeeding."""

    def __init__(
        self,
        failures: int,
        value: Any = "done",
        error: Callable[[], BaseException] = lambda: DriverError("not ready"),
    ):
        self.failures = failures
        self.value = value
        self.error = error
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error()
        return self.value
