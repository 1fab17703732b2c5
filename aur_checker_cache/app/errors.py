class AurCheckerError(Exception):
    """Базовый класс всех ошибок клиента AUR Checker."""


class ApiError(AurCheckerError):
    """Ошибки обращения к backend API (timeout, DNS, HTTP)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def handle_request_error(e: Exception, context: str, logger) -> None:
    """Единообразно логирует и поднимает ошибку API.

    Статус HTTP-ответа (если он есть) сохраняется в ApiError.status_code,
    чтобы вызывающий код мог отличить 404 от сетевого сбоя.
    """
    resp = getattr(e, "response", None)
    status = getattr(resp, "status_code", None)
    logger.exception("Не удалось %s (status=%s)", context, status)
    raise ApiError(f"Failed to {context}", status_code=status) from e
