"""Tree builder — composes declarations into a single Item.

Rules:

- No declarations lower to ``NOTHING``.
- One or more declarations lower to ``Items`` in declaration order. Order
  matters: later server or logger declarations overwrite earlier ones, and
  middleware runs in the order it was declared.
- An optional declaration lowers to ``Items((x,))`` or ``NOTHING``.
- A two-way branch keeps only the chosen declaration. The branch is
  resolved once, while the tree is built; nothing of the other branch
  survives into the tree.

Functional form::

    tree = block(
        HTTPServer(hostname="0.0.0.0", port=8080),
        optional(timing if debug else None),
        either(production, Logger.level("warning"), Logger.level("debug")),
    )

List form::

    builder = AppBuilder(HTTPServer(port=8080))
    builder.add_if(debug, timing)
    builder.add_either(production, Logger.level("warning"), Logger.level("debug"))
    app.setup(builder)
"""

from __future__ import annotations

from typing import Any

from trellis.items import NOTHING, Item, Items, as_item


def block(*contents: Any) -> Item:
    """Compose declarations in order."""
    if not contents:
        return NOTHING
    return Items(tuple(as_item(content) for content in contents))


def optional(content: Any | None) -> Item:
    """Compose a declaration that may be absent."""
    if content is None:
        return NOTHING
    return Items((as_item(content),))


def either(condition: bool, first: Any, second: Any) -> Item:
    """Keep *first* when *condition* holds, otherwise *second*."""
    chosen = first if condition else second
    return Items((as_item(chosen),))


class AppBuilder:
    """Ordered-list builder for application declarations.

    Itself a declaration: pass it to ``Application.setup()`` or nest it in
    another ``block()``.
    """

    __slots__ = ("_items",)

    def __init__(self, *contents: Any) -> None:
        self._items: list[Item] = [as_item(content) for content in contents]

    def add(self, *contents: Any) -> AppBuilder:
        """Append declarations."""
        self._items.extend(as_item(content) for content in contents)
        return self

    def add_if(self, condition: bool, content: Any) -> AppBuilder:
        """Append *content* only when *condition* holds."""
        self._items.append(optional(content if condition else None))
        return self

    def add_either(self, condition: bool, first: Any, second: Any) -> AppBuilder:
        """Append *first* or *second* depending on *condition*."""
        self._items.append(either(condition, first, second))
        return self

    def build(self) -> Item:
        if not self._items:
            return NOTHING
        return Items(tuple(self._items))

    @property
    def app_content(self) -> Item:
        return self.build()

    def __len__(self) -> int:
        return len(self._items)
