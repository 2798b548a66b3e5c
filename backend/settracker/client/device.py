import uuid

from settracker.client.storage import LocalStore
from settracker.constants import DEVICE_ID_KEY


def get_device_id(store: LocalStore) -> str:
    """The device's id, generated and persisted on first use and never rotated."""
    existing = store.get_item(DEVICE_ID_KEY)
    if existing:
        return existing
    device_id = str(uuid.uuid4())
    store.set_item(DEVICE_ID_KEY, device_id)
    return device_id
