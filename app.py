from __future__ import annotations

import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from flask import Flask, jsonify, request, send_file

from qr_symbol import EncodeError, EncodeOptions, encode
from qr_symbol.render import render_png

logger = logging.getLogger(__name__)


@dataclass
class QRRequest:
    data: str
    options: EncodeOptions
    border: int
    box_size: int

    @staticmethod
    def _parse_int(payload: Mapping[str, object], key: str, default: int, label: str) -> int:
        try:
            return int(payload.get(key, default))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{label} must be an integer") from exc

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "QRRequest":
        data = payload.get("data")
        if data is None:
            raise ValueError("data is required")
        data = str(data)

        border = cls._parse_int(payload, "border", 4, "border")
        if not 0 <= border <= 20:
            raise ValueError("border must be between 0 and 20")

        box_size = cls._parse_int(payload, "boxSize", 10, "boxSize")
        if not 1 <= box_size <= 50:
            raise ValueError("boxSize must be between 1 and 50")

        return cls(
            data=data,
            options=EncodeOptions.from_mapping(payload),
            border=border,
            box_size=box_size,
        )


def _read_payload() -> Dict[str, object]:
    if request.method == "GET":
        return {key: value for key, value in request.args.items()}
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        payload = {}
    return payload


def create_app() -> Flask:
    app = Flask(__name__)

    @app.route("/api/qr-preview", methods=["GET", "POST"])
    def qr_preview():
        try:
            qr_request = QRRequest.from_payload(_read_payload())
            symbol = encode(qr_request.data, qr_request.options)
        except EncodeError as exc:
            logger.info("rejected encode request: %s", exc)
            return jsonify({"message": str(exc), "error": type(exc).__name__}), 400
        except ValueError as exc:
            return jsonify({"message": str(exc)}), 400

        image = render_png(symbol, border=qr_request.border, box_size=qr_request.box_size)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        buffer.seek(0)
        return send_file(buffer, mimetype="image/png")

    @app.route("/api/qr-matrix", methods=["GET", "POST"])
    def qr_matrix():
        try:
            qr_request = QRRequest.from_payload(_read_payload())
            symbol = encode(qr_request.data, qr_request.options)
        except EncodeError as exc:
            logger.info("rejected encode request: %s", exc)
            return jsonify({"message": str(exc), "error": type(exc).__name__}), 400
        except ValueError as exc:
            return jsonify({"message": str(exc)}), 400

        return jsonify(
            {
                "version": symbol.version,
                "errorCorrectionLevel": symbol.error_correction_level.value,
                "mask": symbol.mask,
                "moduleCount": symbol.module_count,
                "rows": ["".join("1" if cell else "0" for cell in row) for row in symbol.modules],
            }
        )

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(host="0.0.0.0", port=5000, debug=True)
