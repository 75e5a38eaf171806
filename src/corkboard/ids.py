"""Client-side identifier generation.

Entities are created with ids minted on the client so they can be rendered
before the server answers. The ids are random 128-bit UUIDs; the client id
is canonical and is never replaced by a server-assigned one, which is only
safe because collisions are negligible at this width.
"""

import uuid


def new_id() -> str:
    """Return a fresh random id, e.g. "5f0c6b1e-..."."""
    return str(uuid.uuid4())

