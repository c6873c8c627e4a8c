# app/schemas.py
from pydantic import BaseModel, ConfigDict


# Echoed back to the caller, never stored
class UserIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    email: str = ""
