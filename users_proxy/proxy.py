import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx
from fastapi import Request, Response
from fastapi.responses import JSONResponse

from .config import Settings
from .fallback import fallback_payload

# headers that describe a single connection and must not be forwarded
HOP_BY_HOP = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
}
# httpx recomputes these outbound. accept-encoding is left to httpx so the
# upstream only compresses with codecs httpx can decode; the body is relayed
# decoded, hence no content-encoding on the way back.
REQUEST_DROP = HOP_BY_HOP | {"host", "content-length", "accept-encoding"}
RESPONSE_DROP = HOP_BY_HOP | {"content-length", "content-encoding"}


@dataclass(frozen=True)
class UpstreamReply:
    status_code: int
    headers: list
    content: bytes


@dataclass(frozen=True)
class UpstreamFailure:
    error: str


UpstreamResult = Union[UpstreamReply, UpstreamFailure]


async def forward(
    settings: Settings,
    method: str,
    path: str,
    query: str = "",
    headers: Optional[list] = None,
    body: bytes = b"",
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> UpstreamResult:
    """Send one request to the upstream origin.

    Any HTTP response, whatever its status, is an UpstreamReply. Transport
    errors (refused connection, DNS, TLS, timeouts) and bodies that cannot be
    decoded come back as an UpstreamFailure instead of being raised.
    """
    url = settings.upstream_url + path
    if query:
        url += "?" + query
    out_headers = [(k, v) for k, v in headers or [] if k.lower() not in REQUEST_DROP]

    # a new client per call: nothing is shared or cached between requests
    try:
        async with httpx.AsyncClient(timeout=settings.timeout_seconds, transport=transport) as client:
            r = await client.request(method, url, headers=out_headers, content=body)
    except httpx.RequestError as exc:
        return UpstreamFailure(error=f"{type(exc).__name__}: {exc}")

    relayed = [(k, v) for k, v in r.headers.multi_items() if k.lower() not in RESPONSE_DROP]
    return UpstreamReply(status_code=r.status_code, headers=relayed, content=r.content)


def to_response(result: UpstreamResult, upstream_url: str) -> Response:
    if isinstance(result, UpstreamFailure):
        logging.warning("%s unavailable (%s), serving mock user data", upstream_url, result.error)
        return JSONResponse(fallback_payload())

    response = Response(content=result.content, status_code=result.status_code)
    for key, value in result.headers:
        response.headers.append(key, value)
    return response


async def proxy_users(request: Request, settings: Settings, transport=None) -> Response:
    body = await request.body()
    result = await forward(
        settings,
        request.method,
        request.url.path,
        query=request.url.query,
        headers=request.headers.items(),
        body=body,
        transport=transport,
    )
    return to_response(result, settings.upstream_url)
