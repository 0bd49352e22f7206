import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from shareweave.errors import DivisionByZero, InsufficientShares, Result
from shareweave.ingest import parse_batch
from shareweave.recovery import recover_batch

app = Flask(__name__)
CORS(app)

# Failures caused by the shares themselves rather than by the request shape
UNRECOVERABLE = (InsufficientShares, DivisionByZero)

@app.route('/recover', methods=['POST'])
def recover():
    parsed = Result.capture(parse_batch, request.get_data(as_text=True))
    if not parsed.ok:
        return jsonify({"error": parsed.error.kind, "detail": str(parsed.error)}), 400

    outcome = recover_batch(
        parsed.value,
        modulus=app.config.get("FIELD_PRIME", config.Config.FIELD_PRIME),
        name="request"
    )
    if not outcome.ok:
        status = 422 if isinstance(outcome.error, UNRECOVERABLE) else 400
        return jsonify({"error": outcome.error.kind, "detail": str(outcome.error)}), status

    report = outcome.report
    return jsonify({
        "secret": outcome.secret,
        "k": report.k,
        "shares_used": [list(share) for share in outcome.shares_used],
        "rejected": report.rejected_summary(),
        "duplicates": report.duplicates
    })

@app.route('/health', methods=['GET'])
def health():
    return jsonify({
        "status": "ok",
        "modulus": app.config.get("FIELD_PRIME", config.Config.FIELD_PRIME)
    })

if __name__ == '__main__':
    logging.basicConfig(level=config.Config.LOG_LEVEL, format=config.Config.LOG_FORMAT)
    app.run(
        host=config.Config.SERVICE_HOST,
        port=config.Config.SERVICE_PORT,
        threaded=True
    )
