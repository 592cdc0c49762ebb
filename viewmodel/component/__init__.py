"""
Component module for viewmodel

Shared component contracts and the small collaborators a table embeds in
its output: URLs, toolbar buttons and the query (filter form) wrapper.
"""

from .button import Button, TableButton
from .core import (
    ButtonAction,
    ButtonType,
    Color,
    Component,
    TranslateFunc,
    translate,
    with_new_row,
)
from .query import Query
from .url import Url, as_url

__all__ = [
    "Button",
    "ButtonAction",
    "ButtonType",
    "Color",
    "Component",
    "Query",
    "TableButton",
    "TranslateFunc",
    "Url",
    "as_url",
    "translate",
    "with_new_row",
]
