"""Qt network transport for the mapping service.

QtMappingService implements the MappingService protocol on top of a
QNetworkAccessManager. Replies are delivered on the GUI thread through
QNetworkReply.finished, so callbacks can touch widget state directly.
Aborted replies finish with OperationCanceledError and are dropped
without invoking any callback.
"""

from __future__ import annotations

import logging
import time

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

from conformal.complex_algebra import Complex
from conformal.service import (
    HTTP_UNPROCESSABLE, ServiceError,
    compute_body, compute_url, decode_compute_response,
    decode_map_point_response, map_point_url,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"


class ReplyHandle:
    """PendingQuery backed by a QNetworkReply."""

    def __init__(self, reply: QNetworkReply):
        self._reply = reply
        self.aborted = False

    def abort(self) -> None:
        if self.aborted:
            return
        self.aborted = True
        reply = self._reply
        if reply is not None and reply.isRunning():
            reply.abort()

    def release(self) -> QNetworkReply:
        """Detach the reply; called once from the finished handler."""
        reply = self._reply
        self._reply = None
        return reply


def _http_status(reply: QNetworkReply) -> int | None:
    status = reply.attribute(QNetworkRequest.Attribute.HttpStatusCodeAttribute)
    return int(status) if status is not None else None


def _is_success(status: int | None) -> bool:
    # Non-HTTP schemes (file://, data:) carry no status code
    return status is None or 200 <= status < 300


def _was_cancelled(handle: ReplyHandle, reply: QNetworkReply) -> bool:
    return (
        handle.aborted
        or reply.error() == QNetworkReply.NetworkError.OperationCanceledError
    )


def _failure_message(what: str, reply: QNetworkReply, status: int | None) -> str:
    if status is not None:
        return f"{what} failed: server responded {status}"
    return f"{what} failed: {reply.errorString()}"


class QtMappingService(QObject):
    """HTTP client for /api/compute/{mode} and /api/map-point."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, parent=None):
        super().__init__(parent)
        self._base_url = base_url
        self._manager = QNetworkAccessManager(self)

    # -- Single point --

    def map_point(self, z: Complex, on_result, on_error) -> ReplyHandle:
        request = QNetworkRequest(QUrl(map_point_url(self._base_url, z)))
        reply = self._manager.get(request)
        handle = ReplyHandle(reply)
        reply.finished.connect(
            lambda: self._on_map_point_finished(handle, on_result, on_error)
        )
        return handle

    def _on_map_point_finished(self, handle, on_result, on_error) -> None:
        reply = handle.release()
        if reply is None:
            return
        reply.deleteLater()
        if _was_cancelled(handle, reply):
            return

        status = _http_status(reply)
        if status == HTTP_UNPROCESSABLE:
            on_result(None)
            return
        if reply.error() != QNetworkReply.NetworkError.NoError or not _is_success(status):
            on_error(_failure_message("map-point", reply, status))
            return

        try:
            w = decode_map_point_response(bytes(reply.readAll()))
        except ServiceError as exc:
            on_error(f"map-point failed: {exc}")
            return
        on_result(w)

    # -- Bulk compute --

    def compute(self, mode: str, count: int, on_result, on_error) -> ReplyHandle:
        request = QNetworkRequest(QUrl(compute_url(self._base_url, mode)))
        request.setHeader(
            QNetworkRequest.KnownHeaders.ContentTypeHeader, "application/json",
        )
        started = time.perf_counter()
        reply = self._manager.post(request, compute_body(count))
        handle = ReplyHandle(reply)
        reply.finished.connect(
            lambda: self._on_compute_finished(handle, started, on_result, on_error)
        )
        return handle

    def _on_compute_finished(self, handle, started, on_result, on_error) -> None:
        reply = handle.release()
        if reply is None:
            return
        reply.deleteLater()
        if _was_cancelled(handle, reply):
            return

        status = _http_status(reply)
        if reply.error() != QNetworkReply.NetworkError.NoError or not _is_success(status):
            on_error(_failure_message("compute", reply, status))
            return

        try:
            result = decode_compute_response(bytes(reply.readAll()))
        except ServiceError as exc:
            on_error(f"compute failed: {exc}")
            return

        logger.debug(
            "compute round trip %.1f ms (server %.0f ms, %d points)",
            (time.perf_counter() - started) * 1000,
            result.duration_ms, result.count,
        )
        on_result(result)

