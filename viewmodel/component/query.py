"""Query component: a filter form wrapping one or more dynamic components."""

from typing import Any, Optional

from .core import Component, TranslateFunc
from .url import Url


class Query:
    """Filter form plus the components it drives (typically a table)."""

    def __init__(
        self,
        filter_form: list[dict[str, Any]],
        save_state_id: Optional[str] = None,
        display: Optional[str] = None,
        url: Optional[Url] = None,
        extra: Optional[dict[str, Any]] = None,
    ):
        self.filter_form = filter_form
        self.save_state_id = save_state_id
        self.display = display
        self.url = url
        self.extra = extra
        self.data: list[dict[str, Any]] = []

    def add(self, component: Component, translator: Optional[TranslateFunc] = None) -> "Query":
        self.data.append(component.print(translator))
        return self

    def add_printed(self, printed: dict[str, Any]) -> "Query":
        """Add an already printed component."""
        self.data.append(printed)
        return self

    def set_extra_data(self, extra: dict[str, Any]) -> "Query":
        self.extra = extra
        return self

    def print(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        return {
            "type": "query",
            "display": self.display,
            "data": {
                "fields": self.filter_form,
                "dyn": self.data,
                "url": self.url.print_prefix() if self.url is not None else None,
                "buttonline": None,
                "saveState": self.save_state_id is not None,
                "saveStateId": self.save_state_id,
                "extra": self.extra,
            },
        }
