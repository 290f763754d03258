# easyguide/container.py
from typing import Callable, Dict, Optional

from flask import current_app


class AppContainer:
    """
    Per-application dependency container.

    Services are registered as factories and built lazily on first access,
    one instance per container. A factory receives the container so it can
    resolve its own dependencies.

    Usage:
        container = AppContainer()
        container.register("config", lambda c: ConfigService(app.config))
        container.register("user_service", lambda c: UserService(c.get("config")))
        user_service = container.get("user_service")
    """

    def __init__(self):
        self._factories: Dict[str, Callable] = {}
        self._instances: Dict[str, object] = {}

    def register(self, name: str, factory: Callable) -> None:
        if name in self._factories:
            raise ValueError(f"Service with the given name ({name}) is already registered.")
        self._factories[name] = factory

    def get(self, name: str):
        if name not in self._factories:
            raise KeyError(f"No service was registered with the given name ({name}).")
        if name not in self._instances:
            self._instances[name] = self._factories[name](self)
        return self._instances[name]

    def has(self, name: str) -> bool:
        return name in self._factories

    def build_all(self) -> "AppContainer":
        for name in list(self._factories):
            self.get(name)
        return self

    def instances(self):
        return list(self._instances.values())


def init_container(app, registrations: Optional[Dict[str, Callable]] = None) -> AppContainer:
    container = AppContainer()
    for name, factory in (registrations or {}).items():
        container.register(name, factory)
    app.extensions["container"] = container
    return container


def get_container(app=None) -> AppContainer:
    app = app or current_app
    return app.extensions["container"]
