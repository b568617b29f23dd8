from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

ADMIN_ROLES = frozenset({"admin", "service_role"})


class AuthUser(BaseModel):
    """
    Represents the caller identified by an admin bearer token.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="sub")
    email: Optional[EmailStr] = None
    role: str = "authenticated"

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
