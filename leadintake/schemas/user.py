from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserOut(BaseModel):
    ok: bool = True
    id: int
    email: EmailStr


class Token(BaseModel):
    ok: bool = True
    access_token: str
    token_type: str = "bearer"
