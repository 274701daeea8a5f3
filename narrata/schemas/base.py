"""
Schema base classes for request/response payloads that have no table
"""
from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Schema base"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )
