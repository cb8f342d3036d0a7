import json
import logging
import os

from errors import InvalidIdentifier, TagError, UnparsableIdentifier
from models import Config
from mtag_api import parse_api_response, register_interaction
from tag_url import parse_interaction

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")


def load_config(config_path=DEFAULT_CONFIG_PATH):
    """Load config.json into a Config, falling back to defaults when it is missing."""
    if not os.path.exists(config_path):
        return Config()
    with open(config_path) as f:
        return Config.model_validate(json.load(f))


class InteractionDelegate:
    """Receives the outcome of interaction_was_received.

    Subclass and override both methods.
    """

    def interaction_data_was_received(self, result):
        """Called with the reshaped response dict once an interaction is registered."""
        raise NotImplementedError

    def did_fail_to_receive_interaction_data(self, error):
        """Called with a human readable message when registration fails."""
        raise NotImplementedError


class LoggingDelegate(InteractionDelegate):
    """Delegate that logs results and remembers the last outcome."""

    def __init__(self):
        self.result = None
        self.error = None

    def interaction_data_was_received(self, result):
        self.result = result
        log.info(f"Interaction registered: {result}")

    def did_fail_to_receive_interaction_data(self, error):
        self.error = error
        log.error(f"Interaction failed: {error}")


def interaction_was_received(url, delegate, config=None):
    """Parse url, register it with the interactions route and report to delegate.

    Exactly one delegate method is called. Parsing errors never reach the
    network.
    """
    config = config or Config()
    log.debug(f"Interaction was received with URL: {url}")
    try:
        _, _, params = parse_interaction(url, config)
    except (UnparsableIdentifier, InvalidIdentifier) as e:
        log.error(f"Unable to parse tag ID from url {url}: {e}")
        delegate.did_fail_to_receive_interaction_data(f"Unable to parse tag ID from url {url}: {e}")
        return
    except TagError as e:
        log.error(str(e))
        delegate.did_fail_to_receive_interaction_data(str(e))
        return
    submit_interaction(params, delegate, config)


def submit_interaction(params, delegate, config=None):
    """Register an already assembled parameter set and report to delegate."""
    config = config or Config()
    try:
        result = parse_api_response(register_interaction(params, config))
    except TagError as e:
        log.error(f"Interaction registration failed: {e}")
        delegate.did_fail_to_receive_interaction_data(str(e))
        return
    delegate.interaction_data_was_received(result.to_dict())
