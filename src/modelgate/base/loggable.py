"""Logging mixin shared by service classes."""

import logging


class Loggable:
    """Attach a class-scoped ``logging.Logger`` as ``self.logger``.

    The logger name combines the defining module and the concrete class,
    e.g. ``modelgate.llm.manager.LLMManager``.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )
