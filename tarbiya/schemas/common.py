from pydantic import BaseModel, ConfigDict
class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
class MessageOut(BaseModel):
    detail: str
