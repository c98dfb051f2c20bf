from pydantic import BaseModel


class OnboardingStatus(BaseModel):
    completed: bool
