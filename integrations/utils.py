import json


def safe_to_json(payload):
    """
    Decode a JSON body from a response, bytes, str or dict.

    Returns an empty dict when the body is not valid JSON, so callers can
    treat "unparseable" and "empty" the same way.
    """
    if isinstance(payload, dict):
        return payload

    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8", errors="replace")

    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except json.JSONDecodeError:
            return {}

    # requests.Response and look-alikes
    if callable(getattr(payload, "json", None)):
        try:
            return payload.json()
        except (ValueError, UnicodeDecodeError):
            return safe_to_json(getattr(payload, "content", b""))

    if hasattr(payload, "content"):
        return safe_to_json(payload.content)

    return {}
