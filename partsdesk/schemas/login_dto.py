from pydantic import AliasChoices, BaseModel, Field


class LoginRequest(BaseModel):
    # deployments post the identifier as userId or email
    identifier: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("identifier", "userId", "email"),
    )
    password: str = Field(..., min_length=1)
