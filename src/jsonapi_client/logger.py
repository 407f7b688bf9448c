import logging
import typing

DEFAULT_LOGGER_NAME = "jsonapi_client"


class ClientLogger:
    """
    A logging handle owned by one client.

    Enabling or disabling it affects only the client holding it; the underlying
    :py:class:`logging.Logger` keeps its own level and handlers untouched.
    """

    _logger: logging.Logger
    enabled: bool

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)

    def _log(self, level: int, msg: str, *args: typing.Any, **kwargs: typing.Any) -> None:
        if self.enabled:
            self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args: typing.Any, **kwargs: typing.Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: typing.Any, **kwargs: typing.Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: typing.Any, **kwargs: typing.Any) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: typing.Any, **kwargs: typing.Any) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def __init__(
        self, enabled: bool = True, logger: typing.Union[logging.Logger, str, None] = None
    ):
        if logger is None or isinstance(logger, str):
            logger = logging.getLogger(logger or DEFAULT_LOGGER_NAME)
        self._logger = logger
        self.enabled = bool(enabled)
