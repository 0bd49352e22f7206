"""Turning raw share batches into decoded shares.

A batch is a JSON object with a reserved quorum key (``{"keys": {"k": 3}}``)
and one entry per share, keyed by the decimal x-coordinate::

    {"keys": {"k": 2},
     "1": {"base": "10", "value": "4"},
     "2": {"base": "2", "value": "111"}}

Bad entries are dropped and recorded; only batch-level problems raise.
"""

import json
import logging
import re
from collections.abc import Mapping

import requests

import config
from shareweave.encoding import decode
from shareweave.entities import IngestReport, RawShareRecord, Share
from shareweave.errors import (
    EntryError,
    InsufficientShares,
    InvalidBase,
    MalformedEntry,
    MissingQuorum,
    Result,
    SourceUnreadable,
)

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[+-]?[0-9]+")


class BatchPairs(list):
    """A JSON object decoded as its ordered (key, value) pairs, repeats kept."""


def parse_batch(text):
    """Parse batch JSON text, keeping keys that occur more than once."""
    try:
        batch = json.loads(text, object_pairs_hook=BatchPairs)
    except (TypeError, ValueError) as e:
        raise SourceUnreadable(f"Invalid JSON: {e}") from e
    if not isinstance(batch, BatchPairs):
        raise SourceUnreadable("Batch root must be a JSON object")
    return batch


def load_batch(source, timeout=config.Config.FETCH_TIMEOUT):
    """Read a batch from a file path or an http(s) URL."""
    if source.startswith(("http://", "https://")):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SourceUnreadable(f"Could not fetch {source}: {e}") from e
        return parse_batch(response.text)

    try:
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnreadable(f"Could not read {source}: {e}") from e
    return parse_batch(text)


def _items(obj):
    if isinstance(obj, Mapping):
        return list(obj.items())
    if isinstance(obj, BatchPairs):
        return list(obj)
    return None


def _as_mapping(obj):
    # first occurrence of a repeated field wins
    items = _items(obj)
    return None if items is None else dict(reversed(items))


def parse_decimal(text):
    """Parse an ASCII decimal integer, surrounding whitespace allowed."""
    text = text.strip()
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"not a decimal integer: {text!r}")
    return int(text)


def read_quorum(source, quorum_key=config.Config.QUORUM_KEY):
    """Extract the quorum size k from a batch."""
    quorum = None
    for key, value in _items(source):
        if key == quorum_key:
            quorum = _as_mapping(value)
            break
    if quorum is None:
        raise MissingQuorum(f"Batch has no '{quorum_key}' object")
    if config.Config.QUORUM_FIELD not in quorum:
        raise MissingQuorum(f"'{quorum_key}' has no '{config.Config.QUORUM_FIELD}' field")

    k = quorum[config.Config.QUORUM_FIELD]
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise MissingQuorum(f"Quorum size must be a positive integer, got {k!r}")
    return k


def parse_label(label):
    try:
        return parse_decimal(str(label))
    except ValueError:
        raise MalformedEntry(f"Label {label!r} is not an integer x-coordinate", label) from None


def decode_record(record, x, modulus=config.Config.FIELD_PRIME):
    """Decode a raw record into a Share, raising an EntryError on bad input."""
    base = record.base
    if isinstance(base, str):
        try:
            base = parse_decimal(base)
        except ValueError:
            raise InvalidBase(f"Base {record.base!r} is not an integer", record.label) from None
    elif isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBase(f"Base {record.base!r} is not an integer", record.label)

    if not isinstance(record.value, str):
        raise MalformedEntry(f"Value {record.value!r} is not a digit string", record.label)

    try:
        y = decode(record.value, base, modulus)
    except EntryError as e:
        e.label = record.label
        raise
    return Share(x, y)


def to_record(label, entry):
    fields = _as_mapping(entry)
    if fields is None:
        raise MalformedEntry(f"Entry {label!r} is not an object", label)
    missing = [name for name in ("base", "value") if name not in fields]
    if missing:
        raise MalformedEntry(f"Entry {label!r} missing {', '.join(missing)}", label)
    return RawShareRecord(label=label, base=fields["base"], value=fields["value"])


def ingest(source, modulus=config.Config.FIELD_PRIME, quorum_key=config.Config.QUORUM_KEY):
    """
    Decode every share in a batch.

    Returns an IngestReport with k, the accepted shares in batch order, the
    rejected entries and the labels dropped as duplicates. Raises
    InsufficientShares when fewer than k shares survive.
    """
    report = collect_shares(source, modulus, quorum_key)
    check_quorum(report)
    return report


def check_quorum(report):
    if len(report.shares) < report.k:
        raise InsufficientShares(
            f"Need {report.k} valid shares, got {len(report.shares)}"
        )
    return report


def collect_shares(source, modulus=config.Config.FIELD_PRIME, quorum_key=config.Config.QUORUM_KEY):
    """Decode what can be decoded without checking the quorum.

    The first entry to claim an x-coordinate owns it, even if that entry then
    fails to decode.
    """
    if _items(source) is None:
        raise SourceUnreadable("Batch must be a JSON object")

    k = read_quorum(source, quorum_key)
    report = IngestReport(k=k)
    seen = set()

    for label, entry in _items(source):
        if label == quorum_key:
            continue

        parsed = Result.capture(parse_label, label)
        if not parsed.ok:
            _reject(report, label, parsed.error)
            continue

        x = parsed.value
        if x in seen:
            logger.debug("Dropping duplicate share %r (x=%d)", label, x)
            report.duplicates.append(label)
            continue
        seen.add(x)

        record = Result.capture(to_record, label, entry)
        if not record.ok:
            _reject(report, label, record.error)
            continue

        share = Result.capture(decode_record, record.value, x, modulus)
        if not share.ok:
            _reject(report, label, share.error)
            continue

        report.shares.append(share.value)

    logger.info("Ingested %d shares (k=%d, %d rejected, %d duplicates)",
                len(report.shares), k, len(report.rejected), len(report.duplicates))
    return report


def _reject(report, label, error):
    logger.warning("Skipping share %r: %s", label, error.describe())
    report.rejected.append((label, error))
