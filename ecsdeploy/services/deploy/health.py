from __future__ import annotations

from ecsdeploy.core.result import Err
from ecsdeploy.output.console import ConsoleProtocol
from ecsdeploy.platform.http import HttpClient

_MAX_BODY_CHARS = 200


def probe_health(*, url: str, client: HttpClient, console: ConsoleProtocol) -> bool:
    """GET `url` once and report the answer. Never fatal."""
    console.info("Testing application...")
    result = client.get_text(url)
    if isinstance(result, Err):
        console.warning(f"Application not responding: {result.error}")
        return False

    body = result.value.strip()
    if len(body) > _MAX_BODY_CHARS:
        body = body[:_MAX_BODY_CHARS] + "..."
    console.info(f"Application responding: {body or '(empty body)'}")
    console.info(f"Application URL: {url}")
    return True
