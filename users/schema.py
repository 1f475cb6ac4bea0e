from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str
    password: str

class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str
    username: str

# Identity claims carried by a bearer token
class TokenClaims(BaseModel):
    id: int
    username: str
    role: str = "admin"
