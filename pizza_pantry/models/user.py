"""
User identity model.
"""

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Identity of a signed-in actor."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str = ""


# Attributed to changes made while nobody is signed in
ANONYMOUS_USER = User(id="anonymous", name="Anonymous")
