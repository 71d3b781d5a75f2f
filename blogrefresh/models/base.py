"""Base model class for article store records."""

from datetime import datetime

from pydantic import BaseModel


class StoreModel(BaseModel):
    """Base model for records exchanged with the article store API."""

    class Config:
        """Pydantic config."""

        populate_by_name = True
        extra = "ignore"
        json_encoders = {
            datetime: lambda v: v.isoformat() if v else None,
        }
