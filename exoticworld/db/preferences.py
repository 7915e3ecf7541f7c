from __future__ import annotations

from typing import Optional

from exoticworld.constants import DEFAULT_USER_ID, USER_ID_KEY
from exoticworld.db.sqlite import clear_values, get_value, init_db, set_value


class UserPreferences:
    """Locally persisted user id. Not authentication, only the cart key."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path
        init_db(db_path)

    def user_id(self) -> str:
        return get_value(USER_ID_KEY, self.db_path) or DEFAULT_USER_ID

    def save_user_id(self, user_id: str) -> None:
        set_value(USER_ID_KEY, user_id, self.db_path)

    def clear(self) -> None:
        clear_values(self.db_path)
