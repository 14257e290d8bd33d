"""Flask application subclass carrying the service container."""

from typing import TYPE_CHECKING

from flask import Flask

if TYPE_CHECKING:
    from shared.core.container import CommonContainer
    from shared.core.settings import Settings


class App(Flask):
    """Flask application bound to one service container and its settings."""

    container: "CommonContainer"
    settings: "Settings"
