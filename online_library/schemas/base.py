"""
Base schema and validators shared by all Pydantic models
"""
from pydantic import BaseModel, ConfigDict, model_validator
from typing import Any


class BaseSchema(BaseModel):
    """
    Base schema that strips surrounding whitespace from every string
    in the incoming payload before the main validation runs.
    """
    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="before")
    @classmethod
    def strip_all_strings(cls, data: Any) -> Any:
        if isinstance(data, dict):
            new_data = {}
            for k, v in data.items():
                if isinstance(v, str):
                    new_data[k] = v.strip()
                else:
                    new_data[k] = v
            return new_data
        return data
