import uuid

AGENT = "agt"
LIST_ITEM = "itm"
UPLOAD = "upl"


def gen_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"
