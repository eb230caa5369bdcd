from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, render_template, request

# Project-local algorithms
from .blender import blend, check_ratio, ratio_label
from .color import from_hex, parse_color
from .errors import InvalidArgument, InvalidFormat
from .palette import SavedPalette
from .store import ColorStore, JsonFileStore, MemoryStore
from .unmixer import DEFAULT_SAMPLES, check_sample_count, unmix

log = logging.getLogger(__name__)

UNMIX_RATIO_RANGE = (0.1, 0.9)  # same bounds as the unmix slider

DEFAULTS: Mapping[str, Any] = {
    "PALETTE_PATH": None,  # None → in-memory store
    "UNMIX_SAMPLES": DEFAULT_SAMPLES,
    "MAX_UNMIX_SAMPLES": 20_000,
    "LOG_LEVEL": "INFO",
}


def make_store(path: str | None) -> ColorStore:
    if path:
        return JsonFileStore(path)
    return MemoryStore()


def get_palette(app: Flask) -> SavedPalette:
    return app.extensions["palette_mixer.palette"]


def parse_float(val: str | None, default: float, name: str) -> float:
    if val is None or val == "":
        return default
    try:
        return float(val)
    except ValueError as exc:
        raise InvalidArgument(f"{name} must be a number") from exc


def parse_int(val: str | None, default: int | None, name: str) -> int | None:
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise InvalidArgument(f"{name} must be an integer") from exc


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__, template_folder="templates")
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env(prefix="PALETTE_MIXER")
    if config:
        app.config.from_mapping(config)

    logging.basicConfig(
        level=str(app.config["LOG_LEVEL"]).upper(),
        format="%(levelname)s: %(message)s",
    )

    palette = SavedPalette(make_store(app.config["PALETTE_PATH"]))
    app.extensions["palette_mixer.palette"] = palette
    log.info("loaded %d saved colors", len(palette))

    @app.errorhandler(InvalidFormat)
    def invalid_format(exc: InvalidFormat):
        return jsonify({"error": f"invalid color: {exc}"}), 400

    @app.errorhandler(InvalidArgument)
    def invalid_argument(exc: InvalidArgument):
        return jsonify({"error": str(exc)}), 400

    def store_failure(exc: Exception):
        # server-side: the color was valid, the store could not be updated
        log.exception("Saved-color store failed")
        return jsonify({"error": f"could not update saved colors: {exc}"}), 500

    @app.route("/")
    def index():
        return render_template(
            "index.html",
            unmix_range=UNMIX_RATIO_RANGE,
            saved=palette.hexes(),
        )

    @app.route("/mix")
    def mix():
        a = parse_color(request.args.get("a", "#FF0000"))
        b = parse_color(request.args.get("b", "#0000FF"))
        ratio = parse_float(request.args.get("ratio"), 0.5, "ratio")
        mixed = blend(a, b, ratio)
        return jsonify(
            {
                "a": a.hex,
                "b": b.hex,
                "ratio": ratio,
                "label": ratio_label(ratio),
                "mixed": mixed.hex,
            }
        )

    @app.route("/unmix")
    def unmix_color():
        text = request.args.get("color", "")
        if not text.strip():
            return jsonify({"error": "color is required"}), 400
        target = parse_color(text)

        lo, hi = UNMIX_RATIO_RANGE
        ratio = check_ratio(parse_float(request.args.get("ratio"), 0.5, "ratio"), lo=lo, hi=hi)
        samples = check_sample_count(
            parse_int(request.args.get("samples"), int(app.config["UNMIX_SAMPLES"]), "samples")
        )
        limit = int(app.config["MAX_UNMIX_SAMPLES"])
        if samples > limit:
            raise InvalidArgument(f"samples must be at most {limit}")
        seed = parse_int(request.args.get("seed"), None, "seed")
        if seed is not None and seed < 0:
            raise InvalidArgument("seed must be non-negative")

        try:
            result = unmix(target, ratio, samples, rng=seed)
        except InvalidArgument:
            raise
        except Exception as exc:
            log.exception("Unmix failed")
            return jsonify({"error": str(exc)}), 500

        return jsonify(
            {
                "target": target.hex,
                "ratio": ratio,
                "pair": [result.first.hex, result.second.hex],
                "blended": result.blended.hex,
                "distance": result.distance,
            }
        )

    @app.route("/palette", methods=["GET"])
    def list_palette():
        return jsonify({"colors": palette.hexes()})

    @app.route("/palette", methods=["POST"])
    def save_color():
        body = request.get_json(silent=True) or {}
        value = body.get("color") if isinstance(body, dict) else None
        if not isinstance(value, str):
            return jsonify({"error": "body must be {\"color\": \"#RRGGBB\"}"}), 400
        color = from_hex(value)
        try:
            added = palette.add(color)
        except (OSError, InvalidFormat) as exc:
            return store_failure(exc)
        return jsonify({"colors": palette.hexes(), "added": added}), 201 if added else 200

    @app.route("/palette/<hex_value>", methods=["DELETE"])
    def delete_color(hex_value: str):
        color = from_hex(hex_value)
        try:
            removed = palette.remove(color)
        except (OSError, InvalidFormat) as exc:
            return store_failure(exc)
        if not removed:
            return jsonify({"error": f"{color.hex} is not saved"}), 404
        return jsonify({"colors": palette.hexes()})

    return app


if __name__ == "__main__":
    # Production: debug=False; threaded=True is fine for this I/O profile.
    create_app().run(debug=False, threaded=True)
