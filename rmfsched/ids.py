"""Random identifier generation."""

import uuid


def gen_uuid() -> str:
    """Return a new random (version 4) UUID in its canonical 36-character form."""
    return str(uuid.uuid4())