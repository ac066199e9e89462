from uuid import UUID

from fastapi import Header, HTTPException


def get_current_owner(x_owner_id: str | None = Header(None)) -> UUID:
    """Owner identity as established by the upstream auth layer.

    Sessions and tokens are handled before requests reach this API; all it
    needs is the id of the inventory owner.
    """
    if not x_owner_id:
        raise HTTPException(status_code=401, detail="Missing X-Owner-Id header")
    try:
        return UUID(x_owner_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid X-Owner-Id header")
