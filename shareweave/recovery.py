"""Per-batch orchestration: source -> shares -> secret, never raising ShareError."""

import logging

import config
from shamir import ShamirSecretSharing
from shareweave.entities import BatchOutcome
from shareweave.errors import Result
from shareweave.field import check_modulus
from shareweave.ingest import check_quorum, collect_shares, load_batch

logger = logging.getLogger(__name__)


def recover_batch(source, modulus=None, quorum_key=config.Config.QUORUM_KEY, name=None):
    """
    Recover the secret held by a single batch.

    `source` is a path or http(s) URL, or an already parsed batch. Failures come
    back on the outcome; only programming errors propagate.
    """
    modulus = check_modulus(config.Config.FIELD_PRIME if modulus is None else modulus)
    if name is None:
        name = source if isinstance(source, str) else "<batch>"
    outcome = BatchOutcome(name=name)

    if isinstance(source, str):
        loaded = Result.capture(load_batch, source)
        if not loaded.ok:
            return _failed(outcome, loaded.error)
        source = loaded.value

    collected = Result.capture(collect_shares, source, modulus, quorum_key)
    if not collected.ok:
        return _failed(outcome, collected.error)
    outcome.report = collected.value

    checked = Result.capture(check_quorum, outcome.report)
    if not checked.ok:
        return _failed(outcome, checked.error)

    shamir = ShamirSecretSharing(threshold=outcome.report.k, prime=modulus)
    outcome.shares_used = shamir.select_quorum(outcome.report.shares)
    recovered = Result.capture(shamir.recover_secret, outcome.shares_used)
    if not recovered.ok:
        return _failed(outcome, recovered.error)

    outcome.secret = recovered.value
    logger.debug("Recovered secret %d from %s", outcome.secret, name)
    return outcome


def recover_sources(sources, modulus=None, quorum_key=config.Config.QUORUM_KEY):
    """Process each source independently, in order."""
    return [recover_batch(source, modulus=modulus, quorum_key=quorum_key)
            for source in sources]


def _failed(outcome, error):
    logger.error("Batch %s failed: %s", outcome.name, error.describe())
    outcome.error = error
    return outcome
