import re
from datetime import datetime, timezone
from uuid import uuid4

TICKET_PREFIX = "TF"
C2C_PREFIX = "C2C-"
CSC_PREFIX = "CSC-"
CONTACT_PREFIX = "CT-"
ORDER_PREFIX = "ORD-"

SUFFIX_LENGTH = 8

# full ticket id, e.g. TF2024-1A2B3C4D
TICKET_ID_RE = re.compile(r"^TF[0-9]{4}-[0-9A-Z]{8}$")
# what the tracker treats as "looks like a ticket"
TICKET_QUERY_RE = re.compile(r"^TF[0-9]{4}-", re.IGNORECASE)


def generate(prefix: str, include_year: bool = False) -> str:
    """
    prefix + [current year + "-"] + 8 uppercase alphanumeric chars.
    No uniqueness check is made against the store.
    """
    suffix = uuid4().hex[:SUFFIX_LENGTH].upper()
    if include_year:
        return f"{prefix}{datetime.now(timezone.utc).year}-{suffix}"
    return f"{prefix}{suffix}"


def ticket_id() -> str:
    return generate(TICKET_PREFIX, include_year=True)


def looks_like_ticket(query: str) -> bool:
    return bool(TICKET_QUERY_RE.match(query))
