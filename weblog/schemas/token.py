from pydantic import BaseModel
from weblog.schemas.user import UserOut


class AuthResponse(BaseModel):
    user: UserOut
    token: str
    token_type: str = "bearer"
