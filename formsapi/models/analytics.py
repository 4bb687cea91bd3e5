from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalyticsSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_submissions: int = Field(alias="totalSubmissions")
    submissions_by_gender: Dict[str, int] = Field(default_factory=dict, alias="submissionsByGender")
    average_age: Optional[float] = Field(default=None, alias="averageAge")
    submissions_by_date: Dict[str, int] = Field(default_factory=dict, alias="submissionsByDate")
    top_form_fields: Dict[str, int] = Field(default_factory=dict, alias="topFormFields")
