from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    user_id: int
    first_name: str
    last_name: str
    email: str
    role: str
    token: str
    token_type: str = "bearer"
