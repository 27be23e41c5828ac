import re
import uuid

# Firestore reserves "__.*__" ids; "/" would address a subcollection
_RESERVED_ID = re.compile(r"^__.*__$")
MAX_ID_BYTES = 1500


def is_valid_document_id(document_id: str) -> bool:
    """
    Check whether a path parameter can name a document.
    Malformed ids are reported as "not found" by the post routes.
    """
    if not document_id or document_id in (".", ".."):
        return False
    if "/" in document_id or _RESERVED_ID.match(document_id):
        return False
    return len(document_id.encode("utf-8")) <= MAX_ID_BYTES


def new_id() -> str:
    return uuid.uuid4().hex
