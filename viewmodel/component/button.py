"""Buttons shown in a table's top toolbar or selection bar."""

from typing import Any, Optional

from .core import ButtonAction, ButtonType, Color, TranslateFunc, translate
from .url import Url


class Button:
    """A frontend button: action, target URL, style and optional extras."""

    def __init__(
        self,
        action: ButtonAction,
        text: str,
        url: Optional[Url] = None,
        color: Color = Color.PRIMARY,
        button_type: ButtonType = ButtonType.STROKED,
        hint: str = "",
        icon: str = "",
        disabled: bool = False,
        tab_index: int = -1,
        is_default: bool = False,
        target: str = "_self",
        filename: Optional[str] = None,
        options: Optional[dict[str, Any]] = None,
    ):
        self.action = action
        self.text = text
        self.url = url if url is not None else Url("")
        self.color = color
        self.button_type = button_type
        self.hint = hint
        self.icon = icon
        self.disabled = disabled
        self.tab_index = tab_index
        self.is_default = is_default
        self.target = target
        self.filename = filename
        self.options = dict(options or {})

    def print(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        data: dict[str, Any] = {
            "action": self.action.value,
            "url": self.url.print_prefix(),
            "type": self.button_type.value,
            "color": self.color.value,
            "disabled": self.disabled,
            "default": self.is_default,
            "hint": translate(translator, self.hint),
            "target": self.target,
            "tabIndex": self.tab_index,
        }

        # Icon-only styles carry the icon (or the text as icon name)
        if self.button_type in (ButtonType.ICON, ButtonType.FAB, ButtonType.MINI_FAB):
            data["icon"] = self.icon or self.text
        elif self.button_type == ButtonType.ICON_TEXT:
            data["icon"] = self.icon
            data["text"] = translate(translator, self.text)
        else:
            data["text"] = translate(translator, self.text)

        if self.action == ButtonAction.DOWNLOAD and self.filename is not None:
            data["filename"] = self.filename

        data.update(self.options)
        return data


class TableButton:
    """Icon button for table toolbars and multi-select actions."""

    def __init__(
        self,
        action: ButtonAction,
        icon: str,
        url: Optional[Url],
        hint: str,
        color: Color = Color.PRIMARY,
        disabled: bool = False,
        options: Optional[dict[str, Any]] = None,
    ):
        self.button = Button(
            action=action,
            text=icon,
            url=url,
            color=color,
            button_type=ButtonType.ICON,
            hint=hint,
            disabled=disabled,
            options=options,
        )

    def print(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        return self.button.print(translator)
