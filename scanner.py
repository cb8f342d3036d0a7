import argparse
import json
import logging

from errors import TagError
from interaction import DEFAULT_CONFIG_PATH, LoggingDelegate, interaction_was_received, load_config
from nfc_interface import MockNFC
from tag_url import parse_interaction

logging.basicConfig(level=logging.INFO, format="%(message)s")
log = logging.getLogger(__name__)


def _setup(config_path):
    config = load_config(config_path)
    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    return config


def parse_once(url, config_path=DEFAULT_CONFIG_PATH):
    """Print the parameters url would be registered with, without hitting the network."""
    config = _setup(config_path)
    try:
        classified, tag_id, params = parse_interaction(url, config)
    except TagError as e:
        log.error(f"Error: {e}")
        return None
    print(json.dumps({"format": classified.format.value, "tag_id": tag_id, "params": params}, indent=2))
    return params


def run(config_path=DEFAULT_CONFIG_PATH, simulate=None):
    config = _setup(config_path)
    delegate = LoggingDelegate()

    if simulate is not None:
        interaction_was_received(simulate, delegate, config)
        return delegate

    nfc = MockNFC()
    log.info("mTag scanner running. Tap a tag to register an interaction.")
    while True:
        try:
            url = nfc.read_tag()
            if url:
                interaction_was_received(url, delegate, config)
        except (KeyboardInterrupt, EOFError):
            break
        except Exception as e:
            log.error(f"Error: {e}")
    return delegate


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="mTag interaction scanner")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to config.json")
    parser.add_argument(
        "--simulate",
        metavar="URL",
        help="Register one interaction for this tag URL (e.g. https://mtag.io/njaix4) and exit",
    )
    parser.add_argument(
        "--parse",
        metavar="URL",
        help="Print the parameters for this tag URL and exit (no request sent)",
    )
    args = parser.parse_args()
    if args.parse:
        parse_once(args.parse, config_path=args.config)
    else:
        run(config_path=args.config, simulate=args.simulate)
