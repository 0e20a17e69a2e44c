from typing import Dict

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Authenticated caller as described by the access token."""

    id: str
    role: str
    permissions: Dict[str, Dict[str, bool]] = {}

    def can(self, module: str, action: str) -> bool:
        if self.role in ("SUPER_ADMIN", "PLATFORM_ADMIN"):
            return True
        return bool((self.permissions or {}).get(module, {}).get(action, False))
