from pydantic import BaseModel, EmailStr, Field

class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    message: str = Field(..., min_length=1, max_length=2000)

    # Whitespace-only input counts as missing
    model_config = {
        "str_strip_whitespace": True
    }
