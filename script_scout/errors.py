# File: script_scout/errors.py
"""script_scout.errors: Исключения, которыми обмениваются краулер, фетчер и анализатор."""

from __future__ import annotations

__all__ = [
    "ScriptScoutError",
    "TransportError",
    "HttpStatusError",
    "UrlParseError",
    "SourceParseError",
]


class ScriptScoutError(Exception):
    """Базовое исключение ScriptScout."""


class TransportError(ScriptScoutError):
    """Сетевая ошибка: DNS, соединение, таймаут или невалидный URL запроса."""

    def __init__(self, url: str, reason: object) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


class HttpStatusError(ScriptScoutError):
    """Сервер ответил статусом вне диапазона 2xx."""

    def __init__(self, url: str, status: int) -> None:
        self.url = url
        self.status = status
        super().__init__(f"HTTP {status} for {url}")


class UrlParseError(ScriptScoutError, ValueError):
    """Не удалось разобрать или разрешить URL."""

    def __init__(self, url: str, reason: object = None) -> None:
        self.url = url
        self.reason = reason
        message = f"Invalid URL {url!r}" if reason is None else f"Invalid URL {url!r}: {reason}"
        super().__init__(message)


class SourceParseError(ScriptScoutError):
    """Исходный код скрипта не разбирается парсером."""
