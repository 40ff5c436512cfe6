from pydantic import BaseModel

class JobStatus(BaseModel):
    message: str
