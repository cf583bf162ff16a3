from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SeriesStatePayload(BaseModel):
    """追剧进度输入模型"""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    series: str = Field(min_length=1)
    season_number: Optional[int] = Field(default=None, ge=1)
    episode_number: Optional[int] = Field(default=None, ge=0)
