from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    url: str
    body: bytes


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    """POST 遇到 3xx 不跟随：urllib 默认会改用不带 body 的 GET 重发。"""

    def redirect_request(self, req, fp, code, msg, headers, newurl):  # noqa: ANN001, PLR0913
        return None


def _build_opener(context: ssl.SSLContext) -> urllib.request.OpenerDirector:
    return urllib.request.build_opener(_NoRedirect, urllib.request.HTTPSHandler(context=context))


class HttpError(RuntimeError):
    """请求未送达，或对端返回了非 2xx 状态码。"""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def post_json(
    url: str,
    payload: Mapping[str, Any],
    *,
    timeout_seconds: float | None = None,
) -> HttpResponse:
    """
    以 JSON 形式 POST 一次（仅依赖标准库），不做重试。

    - 传输层错误（DNS/连接拒绝/超时/响应截断等）与非 2xx（含 3xx）都抛 HttpError
    - timeout_seconds 为 None 时使用 socket 默认超时（即可能一直阻塞）
    """
    data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    req = urllib.request.Request(
        url=url,
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    opener = _build_opener(ssl.create_default_context())
    kwargs: dict[str, Any] = {}
    if timeout_seconds is not None:
        kwargs["timeout"] = timeout_seconds

    try:
        with opener.open(req, **kwargs) as resp:  # noqa: S310
            status = getattr(resp, "status", 200)
            body = resp.read()
    except urllib.error.HTTPError as e:
        body = e.read() or b""
        raise HttpError(f"POST {url} failed: status={e.code}, body={body[:200]!r}", status=e.code) from e
    except (OSError, http.client.HTTPException) as e:
        raise HttpError(f"POST {url} failed: {e}") from e

    if not 200 <= status < 300:
        raise HttpError(f"POST {url} failed: status={status}, body={body[:200]!r}", status=status)
    return HttpResponse(status=status, url=url, body=body)
