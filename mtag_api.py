import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from pydantic import ValidationError

from errors import MalformedResponse, TransportFailure
from models import Config, InteractionResult

log = logging.getLogger(__name__)


def build_request(params, config):
    data = urllib.parse.urlencode(params).encode()
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/x-www-form-urlencoded",
    }
    headers.update(config.headers)
    return urllib.request.Request(config.api_url, data=data, headers=headers, method="POST")


def register_interaction(params, config=None):
    """POST params to the interactions route and return the decoded JSON body."""
    config = config or Config()
    log.debug(f"Hitting interactions route {config.api_url}")
    request = build_request(params, config)
    try:
        with urllib.request.urlopen(request, timeout=config.timeout) as response:
            body = response.read()
    except urllib.error.HTTPError as e:
        raise TransportFailure(f"Interaction registration failed with HTTP {e.code}") from e
    except (urllib.error.URLError, OSError, http.client.HTTPException) as e:
        raise TransportFailure(f"Interaction registration request failed: {e}") from e
    try:
        return json.loads(body)
    except ValueError as e:
        raise MalformedResponse(f"Unexpected API response: {body[:200]!r}") from e


def parse_api_response(data):
    """Reshape a raw interactions response into an InteractionResult."""
    if not isinstance(data, dict) or not data:
        raise MalformedResponse(f"Unexpected API response: {data!r}")
    try:
        return InteractionResult.model_validate(data)
    except ValidationError as e:
        raise MalformedResponse(f"Unexpected API response: {e}") from e
