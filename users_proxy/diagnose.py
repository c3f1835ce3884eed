import asyncio
import logging
import socket
from datetime import datetime, timezone
from typing import Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .config import Settings


class ProbeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    test_name: str = Field(alias="testName")
    status: Literal["success", "failed"]
    detail: dict


async def resolve_ipv4(hostname: str) -> list:
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(hostname, None, family=socket.AF_INET, type=socket.SOCK_STREAM)
    addresses = []
    for _family, _type, _proto, _canon, sockaddr in infos:
        if sockaddr[0] not in addresses:
            addresses.append(sockaddr[0])
    return addresses


async def probe_dns(hostname: str, timeout: float) -> ProbeResult:
    try:
        addresses = await asyncio.wait_for(resolve_ipv4(hostname), timeout)
    except asyncio.TimeoutError:
        return ProbeResult(
            test_name="DNS Resolution",
            status="failed",
            detail={"hostname": hostname, "error": f"DNS lookup timed out after {timeout}s"},
        )
    except Exception as exc:
        logging.warning("DNS probe for %s failed: %s", hostname, exc)
        return ProbeResult(
            test_name="DNS Resolution",
            status="failed",
            detail={"hostname": hostname, "error": str(exc) or type(exc).__name__},
        )
    return ProbeResult(
        test_name="DNS Resolution",
        status="success",
        detail={"hostname": hostname, "addresses": addresses},
    )


async def probe_reachability(
    hostname: str, timeout: float, transport: Optional[httpx.AsyncBaseTransport] = None
) -> ProbeResult:
    url = f"https://{hostname}:443/"
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            r = await client.head(url)
    except httpx.TimeoutException as exc:
        error = f"Request timed out after {timeout}s ({type(exc).__name__})"
    except Exception as exc:
        error = f"{type(exc).__name__}: {exc}"
    else:
        return ProbeResult(
            test_name="HTTPS Reachability",
            status="success",
            detail={"url": url, "statusCode": r.status_code, "headers": dict(r.headers)},
        )

    logging.warning("Reachability probe for %s failed: %s", url, error)
    return ProbeResult(test_name="HTTPS Reachability", status="failed", detail={"url": url, "error": error})


async def run_diagnostics(settings: Settings, transport=None) -> dict:
    """Probe the upstream independently of the proxy path; never raises."""
    host = settings.upstream_host
    results = await asyncio.gather(
        probe_dns(host, settings.timeout_seconds),
        probe_reachability(host, settings.timeout_seconds, transport=transport),
    )
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "upstream": settings.upstream_url,
        "tests": [r.model_dump(by_alias=True) for r in results],
    }
