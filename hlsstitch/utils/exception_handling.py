"""Log aiohttp exceptions in one consistent shape."""

from typing import TYPE_CHECKING

from aiohttp import ClientError, ClientResponseError

if TYPE_CHECKING:
    from logging import Logger as CustomLogger
else:
    CustomLogger = object


def describe_aiohttp_exception(exception: ClientError | TimeoutError) -> str:
    """Short description of an aiohttp exception, including the status when there is one."""
    error_name = type(exception).__name__

    if isinstance(exception, ClientResponseError):
        return f"{error_name} (status: {exception.status} {exception.message})"
    if isinstance(exception, TimeoutError):
        return f"{error_name} (timeout)"
    return error_name


def log_aiohttp_exception(
    logger: CustomLogger,
    url: str,
    exception: ClientError | TimeoutError,
    message: str = "",
) -> None:
    """Log details of an aiohttp exception."""
    msg = f"aiohttp {describe_aiohttp_exception(exception)} {message} {url}".replace("  ", " ")
    logger.error(msg)
