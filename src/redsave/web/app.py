"""
redsave Web API
Flask application exposing save inspection and checksum repair over HTTP.
"""

import io
import os
import logging
import secrets
from datetime import datetime, timezone

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS
from werkzeug.utils import secure_filename

from .. import __version__
from ..core import layout, lookups
from ..core.buffer import SaveBuffer
from ..core.errors import SaveError
from ..features import checksum
from ..features.report import build_report_dict
from ..features.validator import SaveValidator
from ..storage.file_manipulation import make_edited_path

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD = 64 * 1024

# Initialize Flask app
app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('REDSAVE_SECRET_KEY', secrets.token_urlsafe(32))
app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('REDSAVE_MAX_UPLOAD', DEFAULT_MAX_UPLOAD))

# Enable CORS for API endpoints
CORS(app, resources={r"/api/*": {"origins": "*"}})


def _read_upload():
    """Return (filename, SaveBuffer) for the uploaded sav_file, or (None, None)."""
    if "sav_file" not in request.files:
        return None, None
    f = request.files["sav_file"]
    filename = secure_filename(f.filename or "") or "save.sav"
    buffer = SaveBuffer(f.read())
    if not SaveValidator.has_expected_size(buffer):
        logger.warning(
            f"Upload {filename} is 0x{buffer.size():x} bytes (expected 0x{layout.EXPECTED_SIZE:x})"
        )
    return filename, buffer


# ── Save Routes ───────────────────────────────────────────────────────────────

@app.route("/api/save/inspect", methods=["POST"])
def api_save_inspect():
    """Parse an uploaded .sav and return the full report as JSON."""
    filename, buffer = _read_upload()
    if buffer is None:
        return jsonify({"success": False, "error": "No file provided"}), 400
    report = build_report_dict(buffer)
    report["main_checksum_valid"] = SaveValidator.has_valid_main_checksum(buffer)
    return jsonify({"success": True, "filename": filename, "report": report})


@app.route("/api/save/repair", methods=["POST"])
def api_save_repair():
    """Recompute every checksum and send the repaired save back as a download."""
    filename, buffer = _read_upload()
    if buffer is None:
        return jsonify({"success": False, "error": "No file provided"}), 400
    SaveValidator.require_expected_size(buffer)

    before = checksum.fix_all(buffer)
    repaired = [s.region.name for s in before if not s.is_valid]
    logger.info(f"Repaired {filename}: {repaired or 'nothing to fix'}")

    response = send_file(
        io.BytesIO(buffer.to_bytes()),
        mimetype="application/octet-stream",
        as_attachment=True,
        download_name=make_edited_path(filename).name,
    )
    response.headers["X-Repaired-Regions"] = ",".join(repaired)
    return response


# ── Lookup Routes ─────────────────────────────────────────────────────────────

@app.route("/api/lookups/maps/<int:map_id>")
def api_lookup_map(map_id):
    if map_id > 0xFF:
        return jsonify({"success": False, "error": f"Map id must be 0..255, got {map_id}"}), 404
    return jsonify({
        "success": True,
        "map_id":  map_id,
        "hex":     lookups.map_hex(map_id),
        "name":    lookups.map_name(map_id),
    })


@app.route("/api/lookups/species/<int:species_id>")
def api_lookup_species(species_id):
    if species_id > 0xFF:
        return jsonify({"success": False, "error": f"Species id must be 0..255, got {species_id}"}), 404
    return jsonify({
        "success":    True,
        "species_id": species_id,
        "name":       lookups.species_name(species_id),
    })


# ── Error Handlers ────────────────────────────────────────────────────────────

@app.errorhandler(SaveError)
def save_error(error):
    """Engine errors are caused by the uploaded bytes, so report them as 400."""
    logger.error(f"Save error on {request.path}: {error}")
    return jsonify({"success": False, **error.to_dict()}), 400


@app.errorhandler(404)
def not_found(error):
    return jsonify({"success": False, "error": "Endpoint not found"}), 404


@app.errorhandler(413)
def too_large(error):
    limit = app.config['MAX_CONTENT_LENGTH']
    return jsonify({"success": False, "error": f"Upload exceeds {limit} bytes"}), 413


@app.errorhandler(500)
def internal_error(error):
    logger.error(f"Internal error: {error}")
    return jsonify({"success": False, "error": "Internal server error"}), 500


# ── Health Check ──────────────────────────────────────────────────────────────

@app.route("/health")
def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return jsonify({
        "status": "ok",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


def main():
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("DEBUG", "False").lower() == "true"
    logger.info(f"Starting redsave web API on {host}:{port} (debug={debug})")
    app.run(debug=debug, host=host, port=port)


if __name__ == '__main__':
    main()
