import hashlib
from datetime import datetime, timezone
from typing import List

#: Cloud resource names are limited to 63 characters; truncated names keep
#: 62 and end with ALPHANUMERIC_CHAR.
NAME_LEN_LIMIT = 62

#: Appended to truncated names so they never end with '-'.
ALPHANUMERIC_CHAR = "0"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def truncate(key: str) -> str:
    """Truncate key to the cloud resource name length limit.

    Names longer than the limit keep their first 62 characters followed by
    an alphanumeric character, so the result is exactly 63 characters and
    always ends legally even when the cut lands on a '-'.
    """
    if len(key) > NAME_LEN_LIMIT:
        return f"{key[:NAME_LEN_LIMIT]}{ALPHANUMERIC_CHAR}"
    return key


def trim_fields_evenly(max_len: int, *fields: str) -> List[str]:
    """Trim fields so their combined length is at most max_len.

    Truncation is spread in ratio with the original lengths, meaning longer
    fields lose more characters than short ones. Leading characters of every
    field are preserved.
    """
    if max_len <= 0:
        return list(fields)
    total = sum(len(f) for f in fields)
    if total <= max_len:
        return list(fields)

    excess = total - max_len
    remaining = max_len
    lengths = []
    for f in fields:
        length = len(f) - len(f) * excess // total - 1
        lengths.append(length)
        remaining -= length

    # hand out the space lost to rounding, first field first
    for i in range(remaining):
        lengths[i] += 1

    return [f[:length] for f, length in zip(fields, lengths)]


def sha256_hex(data: str) -> str:
    """Hex digest of the sha256 of data."""
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def cert_hash(cert: bytes, key: bytes) -> str:
    """Short content hash of raw certificate and private key bytes, used in cert names."""
    return hashlib.sha256(cert + key).hexdigest()[:16]
