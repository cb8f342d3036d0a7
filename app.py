import argparse
import logging
import os

from flask import Flask, jsonify, request

from errors import TagError, UnrecognizedFormat
from interaction import LoggingDelegate, load_config, submit_interaction
from tag_url import UrlFormat, parse_interaction

app = Flask(__name__)

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.json")


def _parse(url, config):
    """Return (body, status) describing how url would be registered."""
    try:
        classified, tag_id, params = parse_interaction(url, config)
    except UnrecognizedFormat as e:
        return {"url": url, "format": UrlFormat.UNRECOGNIZED.value, "tag_id": None,
                "params": None, "error": str(e)}, 400
    except TagError as e:
        return {"url": url, "format": None, "tag_id": None, "params": None, "error": str(e)}, 400
    return {"url": url, "format": classified.format.value, "tag_id": tag_id,
            "params": params, "error": None}, 200


@app.route("/parse")
def parse():
    url = request.args.get("url", "").strip()
    if not url:
        return jsonify({"error": "url required"}), 400
    body, status = _parse(url, load_config(CONFIG_PATH))
    return jsonify(body), status


@app.route("/interactions", methods=["POST"])
def interactions():
    data = request.get_json(silent=True)
    url = data.get("url") if isinstance(data, dict) else None
    if not isinstance(url, str) or not url.strip():
        return jsonify({"error": "url required"}), 400
    config = load_config(CONFIG_PATH)
    body, status = _parse(url.strip(), config)
    if status != 200:
        return jsonify({"error": body["error"]}), status
    delegate = LoggingDelegate()
    submit_interaction(body["params"], delegate, config)
    if delegate.error is not None:
        return jsonify({"error": delegate.error}), 502
    return jsonify({"status": "ok", "result": delegate.result})


@app.route("/health")
def health():
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="mTag interaction web service")
    parser.add_argument("--host", default="127.0.0.1",
                        help="Host to bind to (use 0.0.0.0 to expose on the network)")
    parser.add_argument("--port", type=int, default=5000)
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    app.run(host=args.host, port=args.port)
