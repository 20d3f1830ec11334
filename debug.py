# debug.py
from __future__ import annotations
import logging
from typing import Dict

COMPONENTS = ("rotor", "stepping", "turnover", "encode", "reflector", "generator")


class Debug:
    _root_configured: bool = False          # class-level guard

    def __init__(self, name: str = "ENIGMA") -> None:
        self.logger = logging.getLogger(name)
        self.enabled = True        # global switch

        # every component starts silent
        self.components: Dict[str, bool] = {c: False for c in COMPONENTS}

    @classmethod
    def configure(cls, *, level: int = logging.DEBUG, log_to: str | None = None) -> None:
        """
        Set up the root logger once. If `log_to` is given, messages also
        stream to that file. Later calls are ignored.
        """
        if cls._root_configured:
            return

        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_to:
            handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

        logging.basicConfig(
            level=level,
            format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )
        cls._root_configured = True

    # ── logging API ──────────────────────────────────────────────
    def is_on(self, component: str) -> bool:
        """Cheap check for hot paths, before building a message."""
        return self.enabled and self.components.get(component, False)

    def log(self, component: str, message: str) -> None:
        if self.is_on(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    def warn(self, component: str, message: str) -> None:
        """Emit regardless of the component switch."""
        if self.enabled:
            self.logger.warning("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug enabled={self.enabled} active={active}>"


# shared instance so `--trace` flips switches for every module at once
debug = Debug()
