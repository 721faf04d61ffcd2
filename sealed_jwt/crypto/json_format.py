'''
    Canonical JSON

    Headers and claim sets are serialised through stabilise_json so the
    same mapping yields identical bytes regardless of insertion order,
    which keeps signatures reproducible.
'''

# ========== Imports ==========
import json


# ========== stabilise Json ==========
def stabilise_json(obj) -> bytes:
    return json.dumps(
        obj,
        separators=(",", ":"), # no white space
        sort_keys=True, # so the same payload has identical bytes each time
        ensure_ascii=False,
        allow_nan=False
    ).encode("utf-8")


# ========== parse Json object ==========
def parse_json_object(raw: bytes) -> dict:
    """Decode UTF-8 JSON bytes that must hold an object; ValueError otherwise."""
    obj = json.loads(raw.decode("utf-8"))
    if not isinstance(obj, dict):
        raise ValueError("JSON value is not an object")
    return obj
