from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee of an organization.

    ``clerk_id`` links the row to the identity-provider user who created it.
    """

    id: str
    clerk_id: str
    organization_id: str
    user_nice_name: str
    email: str
    phone: str
    date_hired: str
    date_added_to_cb: str
    img: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "clerkID": self.clerk_id,
            "organizationID": self.organization_id,
            "userNiceName": self.user_nice_name,
            "email": self.email,
            "phone": self.phone,
            "dateHired": self.date_hired,
            "dateAddedToCB": self.date_added_to_cb,
            "img": self.img or "",
        }
